from __future__ import annotations
from itertools import islice
from typing import Iterable
from xml.sax.saxutils import escape

from rssforge.core.config import MAX_FEED_ITEMS
from rssforge.schemas.feed import FeedItem
from rssforge.utils.url_utils import try_resolve_url

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}

# 이미지 형식은 판별하지 않음
ENCLOSURE_TYPE = "image/jpeg"


def xml_escape(value: str) -> str:
    """&, <, >, 따옴표 이스케이프 (텍스트/속성 공용)"""
    return escape(value or "", _XML_ENTITIES)


def cdata(value: str) -> str:
    # 이스케이프 후 감싸므로 내용에 "]]>"가 그대로 남을 수 없음
    return f"<![CDATA[{xml_escape(value)}]]>"


def _item_xml(item: FeedItem, page_url: str) -> str:
    lines = [
        "    <item>",
        f"      <title>{cdata(item.title)}</title>",
        f"      <link>{xml_escape(item.link)}</link>",
        f"      <guid>{xml_escape(item.link)}</guid>",
        f"      <description>{cdata(item.description)}</description>",
    ]
    image_url = try_resolve_url(item.image, page_url) if item.image else None
    if image_url:
        lines.append(f'      <enclosure url="{xml_escape(image_url)}" type="{ENCLOSURE_TYPE}" />')
    lines.append("    </item>")
    return "\n".join(lines)


def build_rss(page_url: str, items: Iterable[FeedItem], max_items: int = MAX_FEED_ITEMS) -> str:
    """추출한 아이템(삽입 순서)으로 RSS 2.0 문서 생성. 앞에서부터 max_items개만 사용"""
    head = [
        '<?xml version="1.0" encoding="UTF-8" ?>',
        '<rss version="2.0">',
        "  <channel>",
        f"    <title>Generated RSS for {xml_escape(page_url)}</title>",
        f"    <link>{xml_escape(page_url)}</link>",
        "    <description>Auto-generated feed</description>",
    ]
    body = [_item_xml(item, page_url) for item in islice(items, max_items)]
    tail = ["  </channel>", "</rss>"]
    return "\n".join(head + body + tail) + "\n"
