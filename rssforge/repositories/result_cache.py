import logging
import threading
import time
from collections import OrderedDict
from typing import Callable, Optional, Tuple

from rssforge.core.config import CACHE_MAX_ENTRIES, CACHE_TTL_SEC
from rssforge.schemas.feed import FeedResult
from .base import ResultCacheRepository

logger = logging.getLogger(__name__)


class InMemoryResultCache(ResultCacheRepository):
    """프로세스 메모리 TTL 캐시

    - 만료 항목은 조회 시점에 제거 (별도 스윕 없음)
    - max_entries 초과 시 가장 먼저 저장된 항목부터 제거
    """

    def __init__(
        self,
        ttl: float = CACHE_TTL_SEC,
        max_entries: int = CACHE_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        # key -> (result, expires_at)
        self._entries: "OrderedDict[str, Tuple[FeedResult, float]]" = OrderedDict()

    def get(self, key: str) -> Optional[FeedResult]:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            result, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                logger.debug(f"캐시 만료: {key}")
                return None
            return result

    def put(self, key: str, result: FeedResult, ttl: Optional[float] = None) -> None:
        expires_at = self._clock() + (self.ttl if ttl is None else ttl)
        with self._lock:
            self._entries.pop(key, None)
            self._entries[key] = (result, expires_at)
            while len(self._entries) > self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"캐시 용량 초과로 제거: {evicted}")

    def __len__(self) -> int:
        return len(self._entries)
