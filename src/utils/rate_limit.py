"""Per-caller admission control with a fixed point budget per time window."""

import logging
import threading
import time
from dataclasses import dataclass
from typing import Callable

from cachetools import TTLCache

logger = logging.getLogger(__name__)

ANONYMOUS_KEY = "anonymous"


@dataclass
class RateState:
    """Budget bookkeeping for one caller."""

    key: str
    remaining: int
    window_start: float


@dataclass(frozen=True)
class Admission:
    """Outcome of a single ``admit`` call."""

    allowed: bool
    remaining: int
    retry_after: float = 0.0

    def __bool__(self) -> bool:
        return self.allowed


class RateLimiter:
    """Token-bucket style limiter: ``points`` admissions per ``duration`` seconds per key.

    Keys with no prior traffic start with a full budget. Denial is immediate and
    never raises. Idle keys drop out of the state table once their window ends.
    """

    def __init__(
        self,
        points: int = 120,
        duration: float = 300.0,
        max_keys: int = 10000,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize the limiter.

        Args:
            points: Admissions allowed per window per key
            duration: Window length in seconds
            max_keys: Maximum number of tracked callers
            clock: Monotonic time source, injectable for tests
        """
        self.points = points
        self.duration = duration
        self._clock = clock
        self._lock = threading.Lock()
        # States are mutated in place, so each entry expires with its window
        self._states: TTLCache = TTLCache(maxsize=max_keys, ttl=duration, timer=clock)

    def admit(self, key: str | None) -> Admission:
        """Consume one point for ``key``.

        Args:
            key: Caller identity (IP address). Empty or None shares the anonymous bucket.

        Returns:
            Admission describing whether the call is allowed
        """
        key = key or ANONYMOUS_KEY
        with self._lock:
            now = self._clock()
            state = self._states.get(key)
            if state is None or now >= state.window_start + self.duration:
                state = RateState(key=key, remaining=self.points, window_start=now)
                self._states[key] = state

            if state.remaining <= 0:
                retry_after = max(0.0, state.window_start + self.duration - now)
                admission = Admission(allowed=False, remaining=0, retry_after=retry_after)
            else:
                state.remaining -= 1
                admission = Admission(allowed=True, remaining=state.remaining)

        if not admission.allowed:
            logger.info(f"Rate limit exceeded for {key} (retry in {admission.retry_after:.0f}s)")
        return admission

    def remaining(self, key: str | None) -> int:
        """Points left for ``key`` in its current window, without consuming."""
        key = key or ANONYMOUS_KEY
        with self._lock:
            state = self._states.get(key)
            if state is None or self._clock() >= state.window_start + self.duration:
                return self.points
            return state.remaining

    def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when none is given."""
        with self._lock:
            if key is None:
                self._states.clear()
            else:
                self._states.pop(key, None)


def load_rate_limiter_from_config(config: dict) -> RateLimiter:
    """Build the process-wide limiter from configuration."""
    return RateLimiter(
        points=config.get("rate_limit_points", 120),
        duration=config.get("rate_limit_window_seconds", 300.0),
    )
