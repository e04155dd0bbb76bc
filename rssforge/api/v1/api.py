"""API v1 라우터 통합"""
from fastapi import APIRouter

from rssforge.api.v1.endpoints import rss

api_router = APIRouter()

api_router.include_router(rss.router)
