import pytest

from rssforge.core.exceptions import ThrottledError
from rssforge.repositories import InMemoryResultCache, InMemoryThrottleStore
from rssforge.schemas.feed import FeedResult


def feed(document):
    return FeedResult(document=document, source="synthesized")


class TestResultCache:
    def test_get_missing(self, clock):
        cache = InMemoryResultCache(clock=clock)
        assert cache.get("https://example.com") is None

    def test_put_and_get_within_ttl(self, clock):
        cache = InMemoryResultCache(ttl=600, clock=clock)
        cache.put("k", feed("<rss/>"))
        clock.advance(599.9)
        assert cache.get("k").document == "<rss/>"

    def test_expired_entry_is_removed_on_read(self, clock):
        cache = InMemoryResultCache(ttl=600, clock=clock)
        cache.put("k", feed("<rss/>"))
        clock.advance(600)
        assert cache.get("k") is None
        assert len(cache) == 0

    def test_put_overwrites(self, clock):
        cache = InMemoryResultCache(clock=clock)
        cache.put("k", feed("old"))
        cache.put("k", feed("new"))
        assert cache.get("k").document == "new"

    def test_custom_ttl(self, clock):
        cache = InMemoryResultCache(ttl=600, clock=clock)
        cache.put("k", feed("doc"), ttl=1)
        clock.advance(1)
        assert cache.get("k") is None

    def test_max_entries_evicts_oldest(self, clock):
        cache = InMemoryResultCache(max_entries=2, clock=clock)
        cache.put("a", feed("1"))
        cache.put("b", feed("2"))
        cache.put("c", feed("3"))
        assert cache.get("a") is None
        assert cache.get("b").document == "2"
        assert cache.get("c").document == "3"


class TestThrottleStore:
    def test_second_request_within_window_rejected(self, clock):
        store = InMemoryThrottleStore(window=5, clock=clock)
        store.acquire("u")
        clock.advance(4.999)
        with pytest.raises(ThrottledError):
            store.acquire("u")

    def test_request_after_window_allowed(self, clock):
        store = InMemoryThrottleStore(window=5, clock=clock)
        store.acquire("u")
        clock.advance(5)
        store.acquire("u")

    def test_rejected_request_does_not_refresh_record(self, clock):
        store = InMemoryThrottleStore(window=5, clock=clock)
        store.acquire("u")
        clock.advance(3)
        with pytest.raises(ThrottledError):
            store.acquire("u")
        clock.advance(2)
        store.acquire("u")

    def test_keys_are_independent_raw_strings(self, clock):
        store = InMemoryThrottleStore(window=5, clock=clock)
        store.acquire("https://example.com/")
        store.acquire("https://example.com")

    def test_old_records_are_swept(self, clock):
        store = InMemoryThrottleStore(window=5, clock=clock)
        for i in range(100):
            store.acquire(f"https://example.com/{i}")
        assert len(store) == 100
        clock.advance(6)
        store.acquire("https://example.com/new")
        assert len(store) == 1

    def test_max_keys_bound(self, clock):
        store = InMemoryThrottleStore(window=5, max_keys=3, clock=clock)
        for key in ("a", "b", "c", "d"):
            store.acquire(key)
        assert len(store) == 3
        # 가장 최근 키는 계속 제한됨
        with pytest.raises(ThrottledError):
            store.acquire("d")
