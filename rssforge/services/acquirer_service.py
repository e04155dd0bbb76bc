"""페이지 획득: 헤드리스 렌더링 → 실패 시 일반 HTTP 요청"""
import logging
from typing import Generator, Optional

from rssforge.core.config import FETCH_TIMEOUT_SEC, RENDER_TIMEOUT_SEC
from rssforge.core.exceptions import AcquisitionError
from rssforge.schemas.feed import Page
from rssforge.services.fetch_service import FetchService
from rssforge.services.progress import Progress
from rssforge.services.render_service import RenderService

logger = logging.getLogger(__name__)


class AcquirerService:
    """렌더링과 일반 요청을 순서대로 시도. 둘 다 실패하면 대체 경로의 AcquisitionError"""

    def __init__(
        self,
        renderer: Optional[RenderService],
        fetcher: FetchService,
        render_timeout: float = RENDER_TIMEOUT_SEC,
        fetch_timeout: float = FETCH_TIMEOUT_SEC,
    ):
        self.renderer = renderer
        self.fetcher = fetcher
        self.render_timeout = render_timeout
        self.fetch_timeout = fetch_timeout

    def acquire(self, url: str) -> Generator[Progress, None, Page]:
        """진행 메시지를 yield 하고 Page 를 반환 (`page = yield from acquirer.acquire(url)`)"""
        if self.renderer is not None:
            yield Progress("🔍 브라우저로 페이지를 스캔하는 중…")
            try:
                html = self.renderer.render(url, timeout=self.render_timeout)
                return Page(url=url, html=html, via="render")
            except AcquisitionError as e:
                logger.warning(f"렌더링 실패 ({url}): {e.reason.value} - {e.detail}")
                yield Progress("🧨 렌더링에 실패했습니다. 일반 요청으로 다시 시도하는 중…")
        else:
            yield Progress("🔍 페이지를 가져오는 중…")

        page = self.fetcher.fetch(url, timeout=self.fetch_timeout)
        logger.debug(f"일반 요청 완료 ({page.content_type}): {url}")
        return page
