"""피드 찾기/생성 서비스 (검증 → 요청 제한 → 캐시 → 페이지 획득 → 피드 탐색 → 기사 추출 → RSS 생성)"""
import logging
from typing import Dict, Iterator, List, Optional

from bs4 import BeautifulSoup

from rssforge.core.config import MAX_FEED_ITEMS
from rssforge.core.exceptions import (
    AcquisitionError, LocatedFeedFetchError, NoArticlesFoundError, RSSException,
)
from rssforge.repositories import ResultCacheRepository, ThrottleRepository
from rssforge.schemas.feed import FeedResult, LocatedFeed
from rssforge.services.acquirer_service import AcquirerService
from rssforge.services.fetch_service import FetchService
from rssforge.services.progress import Event, Failure, Progress, Success
from rssforge.utils.discovery import locate_by_content_type, locate_by_link
from rssforge.utils.extraction import extract_by_heuristics, extract_with_selectors
from rssforge.utils.rss_builder import build_rss
from rssforge.utils.selectors import resolve_selectors
from rssforge.utils.url_utils import validate_url

logger = logging.getLogger(__name__)

LOCATED_FEED_MEDIA_TYPE = "application/xml; charset=utf-8"


class FeedService:
    """피드 찾기/생성 파이프라인"""

    def __init__(
        self,
        cache: ResultCacheRepository,
        throttle: ThrottleRepository,
        acquirer: AcquirerService,
        fetcher: FetchService,
        site_selectors: Optional[Dict[str, List[str]]] = None,
        max_items: int = MAX_FEED_ITEMS,
    ):
        self.cache = cache
        self.throttle = throttle
        self.acquirer = acquirer
        self.fetcher = fetcher
        self.site_selectors = site_selectors
        self.max_items = max_items

    def generate(self, url: Optional[str], selector: Optional[str] = None) -> Iterator[Event]:
        """
        URL의 피드를 찾거나 만들어 진행 이벤트로 내보냅니다.

        Args:
            url: 대상 페이지 URL (원문 그대로 캐시/요청 제한 키로 사용)
            selector: 지정하면 이 셀렉터만 사용

        Yields:
            Progress 여러 개, 마지막에 Success 또는 Failure 하나
        """
        try:
            yield from self._generate(url, selector)
        except RSSException as e:
            logger.info(f"피드 생성 실패 ({url}): {type(e).__name__} - {e.message}")
            yield Failure(e)
        except Exception as e:
            logger.error(f"피드 생성 중 예기치 못한 오류 ({url}): {str(e)}", exc_info=True)
            err = RSSException(detail=f"{type(e).__name__}: {e}")
            err.__cause__ = e
            yield Failure(err)

    def _generate(self, url: Optional[str], selector: Optional[str]) -> Iterator[Event]:
        url = validate_url(url)
        self.throttle.acquire(url)

        cached = self.cache.get(url)
        if cached is not None:
            logger.debug(f"캐시 적중: {url}")
            yield Progress("📦 캐시된 피드를 찾았습니다")
            yield Success(cached.model_copy(update={"source": "cache"}))
            return

        page = yield from self.acquirer.acquire(url)

        # content-type은 일반 요청 경로에서만 알 수 있음
        located = locate_by_content_type(page)
        soup = None
        if located is None:
            soup = BeautifulSoup(page.html, "lxml")
            located = locate_by_link(soup, url)

        if located is not None:
            yield Progress("📡 RSS 피드를 발견했습니다")
            try:
                body = located.body if located.body is not None else self._fetch_located_feed(located)
            except LocatedFeedFetchError as e:
                logger.warning(f"선언된 피드 요청 실패, 기사 추출로 전환 ({located.url}): {e.detail}")
                yield Progress("⚠️ RSS 피드를 가져오지 못했습니다. 기사 추출로 전환합니다")
            else:
                result = FeedResult(
                    document=body,
                    rss_url=located.url,
                    source="located",
                    media_type=LOCATED_FEED_MEDIA_TYPE,
                )
                self.cache.put(url, result)
                yield Success(result)
                return

        if soup is None:
            soup = BeautifulSoup(page.html, "lxml")

        selectors = resolve_selectors(url, selector, self.site_selectors)
        yield Progress("🧹 기사 링크를 찾는 중…")
        outcome = extract_with_selectors(soup, url, selectors)
        if not outcome.found:
            yield Progress("🔎 셀렉터로 찾지 못해 링크 패턴으로 다시 찾는 중…")
            outcome = extract_by_heuristics(soup, url, outcome.tried_selectors)
        if not outcome.found:
            raise NoArticlesFoundError(outcome.tried_selectors)

        yield Progress(f"📦 {len(outcome.items)}건의 기사를 찾았습니다. 피드를 만드는 중…")
        document = build_rss(url, outcome.items.values(), max_items=self.max_items)
        result = FeedResult(
            document=document,
            source="synthesized",
            tried_selectors=outcome.tried_selectors,
        )
        self.cache.put(url, result)
        logger.info(f"피드 생성 완료 ({outcome.strategy}, {len(outcome.items)}건): {url}")
        yield Success(result)

    def _fetch_located_feed(self, located: LocatedFeed) -> str:
        try:
            return self.fetcher.fetch_feed(located.url)
        except AcquisitionError as e:
            raise LocatedFeedFetchError(detail=f"{e.reason.value}: {e.detail}") from e

    def check(self, url: Optional[str]) -> Optional[str]:
        """
        가벼운 확인: 일반 요청 한 번으로 기존 피드 URL만 찾습니다 (요청 제한/캐시/생성 없음).

        Returns:
            피드 URL, 없으면 None
        """
        url = validate_url(url)
        page = self.fetcher.fetch(url)
        located = locate_by_content_type(page)
        if located is None:
            located = locate_by_link(BeautifulSoup(page.html, "lxml"), url)
        return located.url if located is not None else None
