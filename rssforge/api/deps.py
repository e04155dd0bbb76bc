"""FastAPI 의존성 주입"""
from rssforge.core.container import Container
from rssforge.services.feed_service import FeedService


def get_feed_service() -> FeedService:
    """FeedService 인스턴스 반환 (캐시/요청 제한 저장소는 프로세스 공용)"""
    return Container.get_feed_service()
