import math
import threading
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict


@dataclass
class RateLimitState:
    allowed: bool
    limit: int
    remaining: int
    reset_after: int  # секунд до освобождения слота


class RateLimiter:
    """Скользящее окно запросов на клиента (in-memory, в пределах процесса)"""

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_requests <= 0 or window_seconds <= 0:
            raise ValueError("max_requests and window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._lock = threading.Lock()
        self._last_sweep = clock()

    def hit(self, key: str) -> RateLimitState:
        """Регистрирует запрос; отклоненные запросы в окно не записываются"""
        now = self._clock()
        with self._lock:
            if now - self._last_sweep >= self.window_seconds:
                self._sweep(now)

            hits = self._hits.get(key)
            if hits is not None:
                self._prune(hits, now)

            count = len(hits) if hits else 0
            allowed = count < self.max_requests
            if allowed:
                if hits is None:
                    hits = self._hits[key] = deque()
                hits.append(now)
                count += 1

            reset_after = self.window_seconds - (now - hits[0]) if hits else self.window_seconds
            return RateLimitState(
                allowed=allowed,
                limit=self.max_requests,
                remaining=max(0, self.max_requests - count),
                reset_after=max(1, math.ceil(reset_after)),
            )

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()
            self._last_sweep = self._clock()

    def _prune(self, hits: Deque[float], now: float) -> None:
        while hits and now - hits[0] >= self.window_seconds:
            hits.popleft()

    def _sweep(self, now: float) -> None:
        """Удаляет клиентов, у которых все запросы вышли из окна"""
        for key in list(self._hits):
            hits = self._hits[key]
            self._prune(hits, now)
            if not hits:
                del self._hits[key]
        self._last_sweep = now
