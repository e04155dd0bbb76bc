"""일반 HTTP 요청 서비스 (렌더링 대체 경로, 피드 직접 요청)"""
import logging
import socket
from typing import Optional

import requests
from urllib3.exceptions import NameResolutionError

from rssforge.core.config import FEED_FETCH_TIMEOUT_SEC, FETCH_TIMEOUT_SEC, USER_AGENT
from rssforge.core.exceptions import AcquisitionError, AcquisitionReason
from rssforge.schemas.feed import Page

logger = logging.getLogger(__name__)

HTML_ACCEPT = "text/html,application/xhtml+xml"
FEED_ACCEPT = "application/rss+xml,application/xml"
BLOCKED_STATUS_CODES = {401, 403, 429, 451}


def _is_dns_failure(exc: BaseException) -> bool:
    """예외 체인(cause/context/args/reason) 안에 이름 해석 실패가 있는지"""
    seen = set()
    stack = [exc]
    while stack:
        e = stack.pop()
        if e is None or id(e) in seen:
            continue
        seen.add(id(e))
        if isinstance(e, (socket.gaierror, NameResolutionError)):
            return True
        related = [e.__cause__, e.__context__, getattr(e, "reason", None)]
        related.extend(a for a in getattr(e, "args", ()) if isinstance(a, BaseException))
        stack.extend(r for r in related if isinstance(r, BaseException))
    return False


def classify_request_error(exc: requests.RequestException) -> AcquisitionReason:
    """requests 예외 → 실패 원인"""
    if isinstance(exc, requests.Timeout):
        return AcquisitionReason.TIMEOUT
    if isinstance(exc, requests.exceptions.SSLError):
        return AcquisitionReason.PROTOCOL
    if isinstance(exc, requests.ConnectionError):
        return AcquisitionReason.DNS if _is_dns_failure(exc) else AcquisitionReason.UNKNOWN
    if isinstance(exc, (requests.exceptions.TooManyRedirects, requests.exceptions.ChunkedEncodingError,
                        requests.exceptions.ContentDecodingError, requests.exceptions.InvalidURL)):
        return AcquisitionReason.PROTOCOL
    return AcquisitionReason.UNKNOWN


class FetchService:
    """requests 기반 GET"""

    def __init__(self, session: Optional[requests.Session] = None, user_agent: str = USER_AGENT):
        self.session = session or requests.Session()
        self.user_agent = user_agent

    def _get(self, url: str, *, accept: str, timeout: float) -> requests.Response:
        try:
            resp = self.session.get(
                url,
                headers={"User-Agent": self.user_agent, "Accept": accept},
                timeout=timeout,
                allow_redirects=True,
            )
        except requests.RequestException as e:
            reason = classify_request_error(e)
            logger.debug(f"HTTP 요청 실패 ({url}): {reason.value} - {str(e)}")
            raise AcquisitionError(reason, detail=str(e)) from e
        if resp.status_code in BLOCKED_STATUS_CODES:
            raise AcquisitionError(AcquisitionReason.BLOCKED, detail=f"HTTP {resp.status_code}")
        if resp.status_code >= 400:
            raise AcquisitionError(AcquisitionReason.UNKNOWN, detail=f"HTTP {resp.status_code}")
        return resp

    def fetch(self, url: str, timeout: float = FETCH_TIMEOUT_SEC) -> Page:
        """페이지 본문과 content-type 반환"""
        resp = self._get(url, accept=HTML_ACCEPT, timeout=timeout)
        return Page(
            url=url,
            html=resp.text,
            content_type=resp.headers.get("Content-Type"),
            via="fetch",
        )

    def fetch_feed(self, url: str, timeout: float = FEED_FETCH_TIMEOUT_SEC) -> str:
        """발견한 피드 본문을 그대로 반환"""
        resp = self._get(url, accept=FEED_ACCEPT, timeout=timeout)
        return resp.text
