"""
진행 상황 이벤트와 전달 방식

파이프라인은 Event 를 순서대로 내보내는 제너레이터이며 마지막은 항상 Success 또는 Failure 하나.
- 스트리밍: 이벤트마다 SSE "data:" 라인으로 즉시 전송, 마지막에 [SSE-END]
- 동기: 진행 메시지는 로그로만 남기고 마지막 결과만 반환
"""
import json
import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional, Union

from rssforge.core.exceptions import NoArticlesFoundError, RSSException
from rssforge.schemas.feed import FeedResult, StreamSuccess

logger = logging.getLogger(__name__)

SSE_END = "[SSE-END]"


@dataclass(frozen=True)
class Progress:
    message: str


@dataclass(frozen=True)
class Success:
    result: FeedResult


@dataclass(frozen=True)
class Failure:
    error: RSSException


Event = Union[Progress, Success, Failure]


def error_body(error: RSSException, url: Optional[str] = None, debug: bool = False) -> Dict[str, Any]:
    """에러 응답 JSON. 원문 예외 정보는 debug=True 일 때만 포함"""
    body: Dict[str, Any] = {"error": error.message}
    if isinstance(error, NoArticlesFoundError):
        body["triedSelectors"] = error.tried_selectors
    if debug:
        cause = error.__cause__
        body["details"] = error.detail
        body["debug"] = {
            "url": url,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "errorType": type(cause).__name__ if cause is not None else type(error).__name__,
            "errorMessage": str(cause) if cause is not None else (error.detail or error.message),
        }
        reason = getattr(error, "reason", None)
        if reason is not None:
            body["debug"]["reason"] = getattr(reason, "value", reason)
    return body


def sse_message(data: str) -> str:
    """SSE data 프레임 (여러 줄이면 줄마다 data:)"""
    lines = data.splitlines() or [""]
    return "".join(f"data: {line}\n" for line in lines) + "\n"


def stream_events(
    events: Iterator[Event],
    self_url: str,
    url: Optional[str] = None,
    debug: bool = False,
) -> Iterator[str]:
    """이벤트를 SSE 텍스트로 변환. 중간에 닫히면 파이프라인 제너레이터도 닫음"""
    try:
        for event in events:
            if isinstance(event, Progress):
                yield sse_message(event.message)
            elif isinstance(event, Success):
                payload = StreamSuccess(rssUrl=event.result.rss_url or self_url).model_dump()
                yield sse_message(json.dumps(payload, ensure_ascii=False))
            elif isinstance(event, Failure):
                payload = {"status": "error", **error_body(event.error, url, debug)}
                yield sse_message(json.dumps(payload, ensure_ascii=False))
        yield sse_message(SSE_END)
    finally:
        close = getattr(events, "close", None)
        if close is not None:
            close()


def collect_result(events: Iterator[Event]) -> Union[FeedResult, RSSException]:
    """동기 모드: 진행 메시지는 로그로 남기고 최종 결과(또는 에러)만 반환"""
    for event in events:
        if isinstance(event, Progress):
            logger.info(f"Progress: {event.message}")
        elif isinstance(event, Success):
            return event.result
        elif isinstance(event, Failure):
            return event.error
    # 파이프라인은 항상 종료 이벤트를 내보내야 함
    return RSSException(detail="파이프라인이 결과 없이 종료됨")
