"""
의존성 컨테이너 (Dependency Container)

객체 생성 로직을 중앙화합니다. API와 CLI 모두 이 컨테이너를 통해 서비스를 생성합니다.
캐시와 요청 제한 저장소는 프로세스 전체에서 하나만 사용합니다 (시작 시 생성, 운영 중 초기화 없음).
"""
from typing import Dict, List, Optional

from rssforge.core.config import RENDER_ENABLED
from rssforge.repositories import (
    InMemoryResultCache, InMemoryThrottleStore, ResultCacheRepository, ThrottleRepository,
)
from rssforge.services.acquirer_service import AcquirerService
from rssforge.services.feed_service import FeedService
from rssforge.services.fetch_service import FetchService
from rssforge.services.render_service import RenderService
from rssforge.utils.selectors import load_site_selectors


class Container:
    """의존성 컨테이너 - 서비스 인스턴스 생성 및 관리"""
    _cache: Optional[ResultCacheRepository] = None
    _throttle: Optional[ThrottleRepository] = None
    _fetcher: Optional[FetchService] = None
    _site_selectors: Optional[Dict[str, List[str]]] = None

    @classmethod
    def get_result_cache(cls) -> ResultCacheRepository:
        """결과 캐시 반환 (싱글톤)"""
        if cls._cache is None:
            cls._cache = InMemoryResultCache()
        return cls._cache

    @classmethod
    def get_throttle_store(cls) -> ThrottleRepository:
        """요청 제한 저장소 반환 (싱글톤)"""
        if cls._throttle is None:
            cls._throttle = InMemoryThrottleStore()
        return cls._throttle

    @classmethod
    def get_fetch_service(cls) -> FetchService:
        """FetchService 반환 (싱글톤, requests.Session 재사용)"""
        if cls._fetcher is None:
            cls._fetcher = FetchService()
        return cls._fetcher

    @classmethod
    def get_site_selectors(cls) -> Dict[str, List[str]]:
        """사이트별 셀렉터 (site_selectors.yaml 은 처음 한 번만 읽음)"""
        if cls._site_selectors is None:
            cls._site_selectors = load_site_selectors()
        return cls._site_selectors

    @staticmethod
    def get_acquirer_service(fetcher: Optional[FetchService] = None) -> AcquirerService:
        """AcquirerService 인스턴스 반환 (RENDER_ENABLED=0 이면 렌더링 생략)"""
        renderer = RenderService() if RENDER_ENABLED else None
        return AcquirerService(renderer=renderer, fetcher=fetcher or Container.get_fetch_service())

    @classmethod
    def get_feed_service(cls, fetcher: Optional[FetchService] = None) -> FeedService:
        """FeedService 인스턴스 반환"""
        if fetcher is None:
            fetcher = cls.get_fetch_service()
        return FeedService(
            cache=cls.get_result_cache(),
            throttle=cls.get_throttle_store(),
            acquirer=cls.get_acquirer_service(fetcher),
            fetcher=fetcher,
            site_selectors=cls.get_site_selectors(),
        )
