"""RSS 찾기/생성 API 엔드포인트"""
from __future__ import annotations
from urllib.parse import urlencode

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, Response, StreamingResponse

from rssforge.core.config import APP_ENV
from rssforge.core.exceptions import RSSException
from rssforge.schemas.feed import CheckResponse, ErrorResponse
from rssforge.services.feed_service import FeedService
from rssforge.services.progress import collect_result, error_body, stream_events
from rssforge.api.deps import get_feed_service

router = APIRouter(prefix="/rss", tags=["rss"])

EVENT_STREAM = "text/event-stream"
ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    429: {"model": ErrorResponse},
    502: {"model": ErrorResponse},
}


def debug_enabled() -> bool:
    return APP_ENV != "production"


def _self_url(request: Request, url: str | None) -> str:
    """생성된 피드를 다시 받을 수 있는 이 엔드포인트 URL"""
    return str(request.url.replace(query=urlencode({"url": url or ""})))


def _error_response(error: RSSException, url: str | None) -> JSONResponse:
    return JSONResponse(
        status_code=error.status_code,
        content=error_body(error, url, debug=debug_enabled()),
    )


@router.get("", summary="RSS 피드 찾기/생성", responses=ERROR_RESPONSES)
def generate_rss(
    request: Request,
    url: str | None = Query(None, description="대상 페이지 URL (http/https)"),
    selector: str | None = Query(None, description="기사 링크 CSS 셀렉터 (지정 시 이것만 사용)"),
    service: FeedService = Depends(get_feed_service),
):
    """
    페이지에 선언된 피드를 찾거나, 없으면 기사 링크를 모아 RSS를 생성

    - Accept: text/event-stream 이면 진행 상황을 SSE로 스트리밍하고 [SSE-END]로 종료
    - 그 외에는 피드 문서(XML) 또는 JSON 에러를 한 번에 반환
    """
    events = service.generate(url, selector=selector)

    if EVENT_STREAM in request.headers.get("accept", ""):
        return StreamingResponse(
            stream_events(events, _self_url(request, url), url=url, debug=debug_enabled()),
            media_type=EVENT_STREAM,
            headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
        )

    outcome = collect_result(events)
    if isinstance(outcome, RSSException):
        return _error_response(outcome, url)
    return Response(content=outcome.document, media_type=outcome.media_type)


@router.get("/check", response_model=CheckResponse, summary="기존 RSS 피드 확인", responses=ERROR_RESPONSES)
def check_rss(
    url: str | None = Query(None, description="대상 페이지 URL (http/https)"),
    service: FeedService = Depends(get_feed_service),
):
    """일반 요청 한 번으로 content-type / <link> 에서 피드 URL 확인 (없으면 rss=null)"""
    try:
        return {"rss": service.check(url)}
    except RSSException as e:
        return _error_response(e, url)
