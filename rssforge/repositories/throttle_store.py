import logging
import threading
import time
from collections import OrderedDict
from typing import Callable

from rssforge.core.config import THROTTLE_MAX_KEYS, THROTTLE_WINDOW_SEC
from rssforge.core.exceptions import ThrottledError
from .base import ThrottleRepository

logger = logging.getLogger(__name__)


class InMemoryThrottleStore(ThrottleRepository):
    """URL별 마지막 요청 시각 기록

    기록은 파이프라인 결과와 무관하게 검사 통과 직후에 갱신된다.
    window 가 지난 기록은 없는 것과 동일하므로 호출 때마다 앞쪽(오래된 순)부터 정리한다.
    """

    def __init__(
        self,
        window: float = THROTTLE_WINDOW_SEC,
        max_keys: int = THROTTLE_MAX_KEYS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.window = window
        self.max_keys = max_keys
        self._clock = clock
        self._lock = threading.Lock()
        # 오래된 기록이 앞쪽에 오도록 갱신 시 move_to_end
        self._last_request_at: "OrderedDict[str, float]" = OrderedDict()

    def _sweep(self, now: float) -> None:
        while self._last_request_at:
            key, ts = next(iter(self._last_request_at.items()))
            if now - ts < self.window:
                break
            del self._last_request_at[key]

    def acquire(self, key: str) -> None:
        with self._lock:
            now = self._clock()
            self._sweep(now)
            last = self._last_request_at.get(key)
            if last is not None and now - last < self.window:
                logger.info(f"요청 제한: {key} ({now - last:.2f}s < {self.window}s)")
                raise ThrottledError()
            self._last_request_at[key] = now
            self._last_request_at.move_to_end(key)
            while len(self._last_request_at) > self.max_keys:
                self._last_request_at.popitem(last=False)

    def __len__(self) -> int:
        return len(self._last_request_at)
