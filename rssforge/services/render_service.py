"""헤드리스 브라우저(Playwright) 렌더링 서비스"""
import logging

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from rssforge.core.config import ACCEPT_LANGUAGE, RENDER_TIMEOUT_SEC, USER_AGENT
from rssforge.core.exceptions import AcquisitionError, AcquisitionReason

logger = logging.getLogger(__name__)

# Chromium 네트워크 에러 코드 → 실패 원인
_ERROR_MARKERS = [
    ("ERR_NAME_NOT_RESOLVED", AcquisitionReason.DNS),
    ("ERR_NAME_RESOLUTION_FAILED", AcquisitionReason.DNS),
    ("ERR_TIMED_OUT", AcquisitionReason.TIMEOUT),
    ("ERR_CONNECTION_TIMED_OUT", AcquisitionReason.TIMEOUT),
    ("Navigation timeout", AcquisitionReason.TIMEOUT),
    ("ERR_ABORTED", AcquisitionReason.NAVIGATION_ABORTED),
    ("ERR_BLOCKED_BY_CLIENT", AcquisitionReason.BLOCKED),
    ("ERR_BLOCKED_BY_RESPONSE", AcquisitionReason.BLOCKED),
    ("ERR_ACCESS_DENIED", AcquisitionReason.BLOCKED),
    ("ERR_FAILED", AcquisitionReason.BLOCKED),
    ("Protocol error", AcquisitionReason.PROTOCOL),
    ("ERR_HTTP2_PROTOCOL_ERROR", AcquisitionReason.PROTOCOL),
    ("ERR_SSL_PROTOCOL_ERROR", AcquisitionReason.PROTOCOL),
    ("ERR_CERT_", AcquisitionReason.PROTOCOL),
]

BLOCKED_STATUS_CODES = {401, 403, 429, 451}


def classify_browser_error(message: str) -> AcquisitionReason:
    """Playwright 에러 메시지로 실패 원인 분류"""
    for marker, reason in _ERROR_MARKERS:
        if marker in message:
            return reason
    return AcquisitionReason.UNKNOWN


class RenderService:
    """URL을 헤드리스 Chromium으로 렌더링해 최종 HTML을 반환

    호출마다 브라우저를 띄우고 어떤 경로로 끝나든 닫는다.
    """

    def __init__(
        self,
        user_agent: str = USER_AGENT,
        accept_language: str = ACCEPT_LANGUAGE,
        headless: bool = True,
    ):
        self.user_agent = user_agent
        self.accept_language = accept_language
        self.headless = headless

    def render(self, url: str, timeout: float = RENDER_TIMEOUT_SEC) -> str:
        try:
            with sync_playwright() as playwright:
                browser = playwright.chromium.launch(
                    headless=self.headless,
                    args=["--no-sandbox", "--disable-setuid-sandbox"],
                )
                try:
                    context = browser.new_context(
                        user_agent=self.user_agent,
                        extra_http_headers={
                            "Accept-Language": self.accept_language,
                            "Referer": url,
                            "DNT": "1",
                        },
                    )
                    page = context.new_page()
                    response = page.goto(url, wait_until="networkidle", timeout=timeout * 1000)
                    if response is not None and response.status in BLOCKED_STATUS_CODES:
                        raise AcquisitionError(
                            AcquisitionReason.BLOCKED, detail=f"HTTP {response.status}"
                        )
                    html = page.content()
                    logger.debug(f"렌더링 완료 ({len(html)} bytes): {url}")
                    return html
                finally:
                    browser.close()
        except PlaywrightTimeoutError as e:
            raise AcquisitionError(AcquisitionReason.TIMEOUT, detail=str(e)) from e
        except PlaywrightError as e:
            raise AcquisitionError(classify_browser_error(str(e)), detail=str(e)) from e
