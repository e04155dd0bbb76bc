"""
기사 링크 추출 유틸리티

1. 셀렉터 전략: 우선순위대로 시도하고, 하나라도 결과가 나오면 거기서 멈춤 (결과를 합치지 않음)
2. 휴리스틱: 셀렉터가 모두 비었을 때만 전체 <a>를 URL 패턴으로 훑음
"""
import logging
import re
from typing import Iterable, List, Optional

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

from rssforge.schemas.feed import ExtractionOutcome, FeedItem
from rssforge.utils.url_utils import try_resolve_url

logger = logging.getLogger(__name__)

# 휴리스틱 링크 조건
MIN_TITLE_LENGTH = 10
ARTICLE_HREF_PATTERNS = [
    re.compile(r"/(20\d{2}|\d{6})/"),
    re.compile(r"/(\d{4})/(\d{2})/(\d{2})/"),
]
ARTICLE_HREF_MARKERS = ("/news/", "/article/", "/202")


def _closest(el: Tag, name: str) -> Optional[Tag]:
    """자기 자신을 포함해 가장 가까운 조상 태그"""
    if el.name == name:
        return el
    return el.find_parent(name)


def _text(el: Optional[Tag]) -> str:
    return el.get_text().strip() if el is not None else ""


def _attr(el: Optional[Tag], name: str) -> str:
    if el is None:
        return ""
    value = el.get(name)
    if isinstance(value, list):
        value = " ".join(value)
    return (value or "").strip()


def _meta(soup: BeautifulSoup, **attrs) -> str:
    return _attr(soup.find("meta", attrs=attrs), "content")


def _first_paragraph(container: Optional[Tag]) -> str:
    if container is None:
        return ""
    return _text(container.find("p"))


def _first_image(container: Optional[Tag]) -> str:
    if container is None:
        return ""
    return _attr(container.find("img"), "src")


def _element_link(el: Tag) -> str:
    href = _attr(el, "href")
    if not href and el.name != "a":
        href = _attr(el.find_parent("a"), "href")
    return href


def _element_title(el: Tag) -> str:
    return _text(el) or _attr(el, "aria-label") or _attr(el, "title")


def _element_description(el: Tag, soup: BeautifulSoup) -> str:
    return (
        _first_paragraph(_closest(el, "article"))
        or _first_paragraph(_closest(el, "div"))
        or _meta(soup, name="description")
        or _meta(soup, property="og:description")
        or ""
    )


def _resolve_image(src: str, page_url: str) -> Optional[str]:
    # 해석할 수 없는 이미지 주소는 버림 (이미지는 선택 항목)
    return try_resolve_url(src, page_url) if src else None


def _element_image(el: Tag, soup: BeautifulSoup, page_url: str) -> Optional[str]:
    image = (
        _first_image(_closest(el, "article"))
        or _first_image(el)
        or _meta(soup, property="og:image")
    )
    return _resolve_image(image, page_url)


def _select(soup: BeautifulSoup, selector: str) -> List[Tag]:
    try:
        return soup.select(selector)
    except (SelectorSyntaxError, ValueError, NotImplementedError) as e:
        # 사용자가 넘긴 셀렉터가 깨진 경우는 매칭 없음으로 취급
        logger.warning(f"잘못된 셀렉터 무시: {selector!r} - {str(e)}")
        return []


def extract_with_selectors(soup: BeautifulSoup, page_url: str, selectors: Iterable[str]) -> ExtractionOutcome:
    """
    셀렉터를 순서대로 적용해 기사 아이템을 모읍니다.

    Args:
        soup: 파싱된 페이지
        page_url: 상대 링크 해석 기준 URL
        selectors: 우선순위 순 셀렉터 목록

    Returns:
        처음으로 결과가 나온 셀렉터의 아이템과 시도한 셀렉터 목록
    """
    outcome = ExtractionOutcome()
    for selector in selectors:
        outcome.tried_selectors.append(selector)
        for el in _select(soup, selector):
            href = _element_link(el)
            title = _element_title(el)
            if not href or not title:
                continue
            if not (href.startswith("/") or href.startswith("http")):
                continue
            link = try_resolve_url(href, page_url)
            if link is None or link in outcome.items:
                continue
            outcome.items[link] = FeedItem(
                link=link,
                title=title,
                description=_element_description(el, soup),
                image=_element_image(el, soup, page_url),
            )
        if outcome.found:
            outcome.strategy = "selector"
            logger.debug(f"셀렉터 '{selector}'로 {len(outcome.items)}건 추출: {page_url}")
            break
    return outcome


def looks_like_article_href(href: str) -> bool:
    if any(p.search(href) for p in ARTICLE_HREF_PATTERNS):
        return True
    return any(marker in href for marker in ARTICLE_HREF_MARKERS)


def extract_by_heuristics(
    soup: BeautifulSoup,
    page_url: str,
    tried_selectors: Optional[List[str]] = None,
) -> ExtractionOutcome:
    """셀렉터가 모두 실패했을 때 쓰는 최후의 수단 (정확도보다 재현율)"""
    outcome = ExtractionOutcome(tried_selectors=list(tried_selectors or []))
    for a in soup.find_all("a", href=True):
        href = _attr(a, "href")
        title = _text(a)
        if not href or len(title) < MIN_TITLE_LENGTH:
            continue
        if not looks_like_article_href(href):
            continue
        link = try_resolve_url(href, page_url)
        if link is None or not link.startswith(("http://", "https://")) or link in outcome.items:
            continue
        image = _first_image(a) or _first_image(_closest(a, "article"))
        outcome.items[link] = FeedItem(
            link=link, title=title, description="", image=_resolve_image(image, page_url),
        )
    if outcome.found:
        outcome.strategy = "heuristic"
        logger.debug(f"휴리스틱으로 {len(outcome.items)}건 추출: {page_url}")
    return outcome
