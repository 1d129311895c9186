"""
Fixed-window admission control for outbound registry requests.

A single counter is shared by every caller of one ``AdmissionGate``. Each
admission check increments it and compares the new value with the limit; a
background scheduler overwrites it with zero once per window. Resets are not
coordinated with in-flight checks, so a burst straddling a window boundary
can briefly exceed the nominal rate.
"""

from __future__ import annotations

import math
import threading
import time
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional, Union

from shared.errors import InvalidConfigurationError
from shared.logging import get_logger

WindowDuration = Union[int, float, timedelta]


@dataclass(frozen=True)
class RateLimitConfig:
    """Window length and the number of admissions allowed within it."""

    window_seconds: float
    max_requests: int

    def __post_init__(self) -> None:
        if isinstance(self.max_requests, bool) or not isinstance(self.max_requests, int):
            raise InvalidConfigurationError(
                "max_requests must be an integer",
                details={"max_requests": repr(self.max_requests)}
            )
        if self.max_requests < 0:
            raise InvalidConfigurationError(
                "max_requests must be non-negative",
                details={"max_requests": self.max_requests}
            )
        if isinstance(self.window_seconds, bool) or not isinstance(self.window_seconds, (int, float)):
            raise InvalidConfigurationError(
                "window must be a number of seconds or a timedelta",
                details={"window": repr(self.window_seconds)}
            )
        # NaN fails this comparison too
        if not self.window_seconds > 0:
            raise InvalidConfigurationError(
                "window must be a positive duration",
                details={"window_seconds": self.window_seconds}
            )
        if not math.isfinite(self.window_seconds) or self.window_seconds > threading.TIMEOUT_MAX:
            raise InvalidConfigurationError(
                "window exceeds the longest timer wait supported by the platform",
                details={"window_seconds": self.window_seconds, "max_seconds": threading.TIMEOUT_MAX}
            )

    @classmethod
    def create(cls, window: WindowDuration, max_requests: int) -> "RateLimitConfig":
        """Build a config from seconds or a ``timedelta``."""
        if isinstance(window, timedelta):
            window = window.total_seconds()
        return cls(window_seconds=window, max_requests=max_requests)


class RequestCounter:
    """Integer supporting atomic increment-and-get and atomic store."""

    def __init__(self) -> None:
        self._value = 0
        self._lock = threading.Lock()

    def increment_and_get(self) -> int:
        with self._lock:
            self._value += 1
            return self._value

    def reset(self) -> None:
        with self._lock:
            self._value = 0

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class WindowResetScheduler:
    """Periodically overwrites a counter with zero.

    The first tick runs synchronously in ``start()``; later ticks fire on a
    daemon thread at a fixed rate measured on the monotonic clock. A tick that
    falls behind is dropped rather than replayed.
    """

    def __init__(self, counter: RequestCounter, period_seconds: float):
        self.counter = counter
        self.period_seconds = period_seconds
        self.logger = get_logger("registry.scheduler")

        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._ticks = 0

    @property
    def ticks(self) -> int:
        """Number of resets performed so far."""
        return self._ticks

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Fire the first tick and start the background timer."""
        if self.running:
            return

        self._stopped.clear()
        first_tick = time.monotonic()
        self._tick()
        self._thread = threading.Thread(
            target=self._run,
            args=(first_tick,),
            name="window-reset",
            daemon=True
        )
        self._thread.start()
        self.logger.info("Window reset scheduler started", period_seconds=self.period_seconds)

    def stop(self, timeout: Optional[float] = 5.0) -> None:
        """Cancel the timer and wait for the background thread to exit."""
        thread = self._thread
        if thread is None:
            return

        self._stopped.set()
        if thread is not threading.current_thread():
            thread.join(timeout)
        self._thread = None
        self.logger.info("Window reset scheduler stopped", ticks=self._ticks)

    def _tick(self) -> None:
        self.counter.reset()
        self._ticks += 1

    def _run(self, first_tick: float) -> None:
        next_tick = first_tick + self.period_seconds
        while True:
            now = time.monotonic()
            if next_tick <= now:
                # skip missed ticks
                behind = int((now - next_tick) // self.period_seconds) + 1
                next_tick += behind * self.period_seconds
            if self._stopped.wait(next_tick - now):
                return
            self._tick()
            next_tick += self.period_seconds


class AdmissionGate:
    """Answers whether one more request fits in the current window.

    Every check counts, including rejected ones: the counter is incremented
    before it is compared with the limit and is never rolled back.
    """

    def __init__(self, window: WindowDuration, max_requests: int):
        self.config = RateLimitConfig.create(window, max_requests)
        self.logger = get_logger("registry.gate")

        self._counter = RequestCounter()
        self._scheduler = WindowResetScheduler(self._counter, self.config.window_seconds)
        self._scheduler.start()
        self.logger.info(
            "Admission gate created",
            window_seconds=self.config.window_seconds,
            max_requests=self.config.max_requests
        )

    @property
    def max_requests(self) -> int:
        return self.config.max_requests

    @property
    def window_seconds(self) -> float:
        return self.config.window_seconds

    @property
    def current_count(self) -> int:
        """Attempts counted since the last reset."""
        return self._counter.value

    @property
    def scheduler(self) -> WindowResetScheduler:
        return self._scheduler

    @property
    def closed(self) -> bool:
        return not self._scheduler.running

    def try_acquire(self) -> bool:
        """Count one attempt and return True if it is within the limit."""
        return self._counter.increment_and_get() <= self.config.max_requests

    def close(self) -> None:
        """Stop resetting the window."""
        self._scheduler.stop()
        self.logger.info("Admission gate closed")

    def __enter__(self) -> "AdmissionGate":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
