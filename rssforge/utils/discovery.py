"""
RSS 피드 발견 유틸리티

응답의 content-type 또는 HTML <link> 태그에서 기존 피드를 찾습니다.
네트워크 요청은 하지 않으며, 발견한 피드를 가져오는 일은 FeedService가 담당합니다.
"""
import logging
from typing import Optional

from bs4 import BeautifulSoup

from rssforge.schemas.feed import LocatedFeed, Page
from rssforge.utils.url_utils import try_resolve_url

logger = logging.getLogger(__name__)

FEED_CONTENT_TYPES = (
    "application/rss+xml",
    "application/atom+xml",
    "application/xml",
    "text/xml",
)

# 우선순위 순서 (RSS 먼저)
FEED_LINK_TYPES = ("application/rss+xml", "application/atom+xml")


def is_feed_content_type(content_type: Optional[str]) -> bool:
    """content-type 헤더가 RSS/Atom/XML 문서를 가리키는지"""
    if not content_type:
        return False
    ct = content_type.lower()
    return any(t in ct for t in FEED_CONTENT_TYPES)


def find_feed_link(soup: BeautifulSoup, page_url: str) -> Optional[str]:
    """
    HTML에서 피드 <link>를 찾아 절대 URL로 반환합니다.

    Args:
        soup: 파싱된 페이지
        page_url: 상대 경로 해석 기준 URL

    Returns:
        피드 URL, 없으면 None
    """
    for link_type in FEED_LINK_TYPES:
        for link in soup.find_all("link", attrs={"type": link_type}):
            href = (link.get("href") or "").strip()
            feed_url = try_resolve_url(href, page_url) if href else None
            if feed_url:
                logger.debug(f"<link type={link_type}> 발견: {feed_url}")
                return feed_url
    return None


def locate_by_content_type(page: Page) -> Optional[LocatedFeed]:
    """응답 자체가 피드면 원래 URL을 피드로 취급 (HTML 파싱 없음)"""
    if is_feed_content_type(page.content_type):
        logger.debug(f"content-type이 피드임 ({page.content_type}): {page.url}")
        return LocatedFeed(url=page.url, body=page.html)
    return None


def locate_by_link(soup: BeautifulSoup, page_url: str) -> Optional[LocatedFeed]:
    feed_url = find_feed_link(soup, page_url)
    if feed_url:
        return LocatedFeed(url=feed_url)
    return None
