from abc import ABC, abstractmethod
from typing import Optional

from rssforge.schemas.feed import FeedResult


class ResultCacheRepository(ABC):
    """완성된 피드 결과 저장소 (URL 원문 문자열이 키, 문서와 media type 을 함께 보관)"""

    @abstractmethod
    def get(self, key: str) -> Optional[FeedResult]:
        """만료되지 않은 결과만 반환. 없거나 만료되면 None"""
        pass

    @abstractmethod
    def put(self, key: str, result: FeedResult, ttl: Optional[float] = None) -> None:
        """기존 항목이 있어도 무조건 덮어씀"""
        pass


class ThrottleRepository(ABC):
    """URL별 최소 요청 간격 관리"""

    @abstractmethod
    def acquire(self, key: str) -> None:
        """간격 내 재요청이면 ThrottledError, 아니면 현재 시각을 기록"""
        pass
