"""FastAPI 애플리케이션 진입점"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from rssforge.core.config import PROJECT_NAME, VERSION, API_V1_PREFIX, CORS_ORIGINS
from rssforge.api.v1.api import api_router
from rssforge.api.v1.endpoints import rss
from rssforge.schemas.common import HealthResponse, MessageResponse

app = FastAPI(
    title=PROJECT_NAME,
    description="RSS Feed Discovery & Generation Service",
    version=VERSION,
    docs_url="/docs",
    redoc_url="/redoc"
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API 라우터 등록
app.include_router(api_router, prefix=API_V1_PREFIX)

# 레거시 경로 호환성 (기존 API 경로 유지)
app.add_api_route("/generate-rss", rss.generate_rss, methods=["GET"], tags=["legacy"])
app.add_api_route("/check-rss", rss.check_rss, methods=["GET"], tags=["legacy"])


@app.get("/", response_model=MessageResponse)
def root():
    return {"message": "RSSForge API", "version": VERSION, "docs": "/docs"}


@app.get("/health", response_model=HealthResponse)
def health():
    return {"ok": True}
