"""커스텀 예외 클래스"""
from enum import Enum
from typing import List, Optional


class RSSException(Exception):
    """기본 RSS 예외"""
    status_code = 500
    message = "RSS 생성 중 오류가 발생했습니다"

    def __init__(self, message: Optional[str] = None, *, detail: Optional[str] = None):
        self.message = message or self.message
        self.detail = detail
        super().__init__(self.message)


class ValidationError(RSSException):
    """잘못된 URL (형식 오류 / 허용되지 않은 스킴)"""
    status_code = 400

    MESSAGES = {
        "missing": "URL 파라미터가 없습니다",
        "malformed": "잘못된 URL 형식입니다",
        "bad_scheme": "허용되지 않은 프로토콜입니다 (http/https만 가능)",
    }

    def __init__(self, reason: str, *, detail: Optional[str] = None):
        self.reason = reason
        super().__init__(self.MESSAGES.get(reason, self.MESSAGES["malformed"]), detail=detail)


class ThrottledError(RSSException):
    """같은 URL에 대한 요청이 너무 잦음"""
    status_code = 429
    message = "요청이 너무 많습니다. 잠시 후 다시 시도해주세요"


class AcquisitionReason(str, Enum):
    """페이지 획득 실패 원인"""
    TIMEOUT = "timeout"
    DNS = "dns"
    NAVIGATION_ABORTED = "navigation_aborted"
    BLOCKED = "blocked"
    PROTOCOL = "protocol"
    UNKNOWN = "unknown"


class AcquisitionError(RSSException):
    """렌더링과 일반 HTTP 요청이 모두 실패"""

    MESSAGES = {
        AcquisitionReason.TIMEOUT: "접속 시간 초과 - 사이트 응답이 느리거나 연결이 끊어졌습니다",
        AcquisitionReason.DNS: "DNS 조회 실패 - 도메인이 존재하지 않거나 찾을 수 없습니다",
        AcquisitionReason.NAVIGATION_ABORTED: "페이지 로딩이 중단되었습니다 - 사이트에서 요청을 거부했을 수 있습니다",
        AcquisitionReason.BLOCKED: "요청이 차단되었습니다 - 사이트가 봇을 감지했거나 접근을 제한하고 있습니다",
        AcquisitionReason.PROTOCOL: "프로토콜 오류 - 사이트와의 통신에 문제가 발생했습니다",
        AcquisitionReason.UNKNOWN: "페이지를 가져오지 못했습니다",
    }
    STATUS_CODES = {
        AcquisitionReason.TIMEOUT: 504,
        AcquisitionReason.DNS: 502,
        AcquisitionReason.NAVIGATION_ABORTED: 503,
        AcquisitionReason.BLOCKED: 503,
        AcquisitionReason.PROTOCOL: 502,
        AcquisitionReason.UNKNOWN: 502,
    }

    def __init__(self, reason: AcquisitionReason, *, detail: Optional[str] = None):
        self.reason = reason
        self.status_code = self.STATUS_CODES[reason]
        super().__init__(self.MESSAGES[reason], detail=detail)


class LocatedFeedFetchError(RSSException):
    """페이지에 선언된 피드를 가져오지 못함 (추출 단계로 넘어감)"""
    status_code = 502
    message = "선언된 RSS 피드를 가져오지 못했습니다"


class NoArticlesFoundError(RSSException):
    """셀렉터와 휴리스틱 모두 기사 링크를 찾지 못함"""
    status_code = 404
    message = "기사를 찾지 못했습니다"

    def __init__(self, tried_selectors: List[str], *, detail: Optional[str] = None):
        self.tried_selectors = list(tried_selectors)
        super().__init__(detail=detail)
