from pydantic import BaseModel, Field
from typing import Any, Dict, Literal, Optional


class FeedItem(BaseModel):
    link: str = Field(..., description="기사 절대 URL (아이템 고유 키)")
    title: str = Field(..., description="기사 제목")
    description: str = Field("", description="기사 요약")
    image: Optional[str] = Field(None, description="대표 이미지 URL")


class Page(BaseModel):
    url: str
    html: str
    content_type: Optional[str] = Field(None, description="일반 HTTP 요청으로 가져온 경우에만 존재")
    via: Literal["render", "fetch"] = "render"


class LocatedFeed(BaseModel):
    url: str = Field(..., description="발견한 피드 절대 URL")
    body: Optional[str] = Field(None, description="이미 받아둔 피드 본문 (content-type 판정 시)")


class FeedResult(BaseModel):
    document: str
    rss_url: Optional[str] = None
    source: Literal["cache", "located", "synthesized"]
    tried_selectors: list[str] = Field(default_factory=list)
    media_type: str = "application/rss+xml; charset=utf-8"


class ErrorResponse(BaseModel):
    error: str
    triedSelectors: Optional[list[str]] = None
    details: Optional[str] = None
    debug: Optional[Dict[str, Any]] = None


class StreamSuccess(BaseModel):
    status: Literal["success"] = "success"
    rssUrl: str


class CheckResponse(BaseModel):
    rss: Optional[str] = None


class ExtractionOutcome(BaseModel):
    # 삽입 순서 유지, 같은 링크는 먼저 들어온 항목 유지
    items: Dict[str, FeedItem] = Field(default_factory=dict)
    tried_selectors: list[str] = Field(default_factory=list)
    strategy: Optional[Literal["selector", "heuristic"]] = None

    @property
    def found(self) -> bool:
        return bool(self.items)
