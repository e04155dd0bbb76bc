import pytest

from rssforge.core.exceptions import AcquisitionError, AcquisitionReason
from rssforge.repositories import InMemoryResultCache, InMemoryThrottleStore
from rssforge.services.acquirer_service import AcquirerService
from rssforge.services.feed_service import FeedService
from rssforge.services.progress import Failure, Success

PAGE_URL = "https://example.com/news"


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeRenderer:
    """url -> html, 또는 error 를 항상 발생"""

    def __init__(self, pages=None, error=None):
        self.pages = pages or {}
        self.error = error
        self.calls = []

    def render(self, url, timeout=None):
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        if url not in self.pages:
            raise AcquisitionError(AcquisitionReason.UNKNOWN, detail="no such page")
        return self.pages[url]


class FakeFetcher:
    """pages: url -> Page | Exception, feeds: url -> str | Exception"""

    def __init__(self, pages=None, feeds=None):
        self.pages = pages or {}
        self.feeds = feeds or {}
        self.fetch_calls = []
        self.feed_calls = []

    def fetch(self, url, timeout=None):
        self.fetch_calls.append(url)
        value = self.pages.get(url, AcquisitionError(AcquisitionReason.DNS, detail="unknown host"))
        if isinstance(value, Exception):
            raise value
        return value

    def fetch_feed(self, url, timeout=None):
        self.feed_calls.append(url)
        value = self.feeds.get(url, AcquisitionError(AcquisitionReason.UNKNOWN, detail="HTTP 404"))
        if isinstance(value, Exception):
            raise value
        return value


def terminal(events):
    """이벤트 목록의 마지막(종료) 이벤트"""
    last = events[-1]
    assert isinstance(last, (Success, Failure))
    return last


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def make_service(clock):
    def _make(renderer=None, fetcher=None, site_selectors=None, max_items=10):
        fetcher = fetcher or FakeFetcher()
        return FeedService(
            cache=InMemoryResultCache(clock=clock),
            throttle=InMemoryThrottleStore(clock=clock),
            acquirer=AcquirerService(renderer=renderer, fetcher=fetcher),
            fetcher=fetcher,
            site_selectors=site_selectors if site_selectors is not None else {},
            max_items=max_items,
        )
    return _make
