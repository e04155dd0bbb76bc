# rssforge/repositories package
from .base import ResultCacheRepository, ThrottleRepository
from .result_cache import InMemoryResultCache
from .throttle_store import InMemoryThrottleStore

__all__ = [
    "ResultCacheRepository",
    "ThrottleRepository",
    "InMemoryResultCache",
    "InMemoryThrottleStore",
]
