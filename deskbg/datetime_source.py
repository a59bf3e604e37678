"""A one-shot wake-up keyed to wall-clock time rather than monotonic time."""

from __future__ import annotations

import logging
import math
import time
from datetime import datetime
from typing import Callable

__all__ = ["DateTimeSource"]

log = logging.getLogger(__name__)

USEC_PER_SECOND = 1_000_000


def _real_time_us() -> int:
    return time.time_ns() // 1000


def _monotonic_us() -> int:
    return time.monotonic_ns() // 1000


class DateTimeSource:
    """Fires once when wall-clock time reaches ``expiry``.

    All times passed to the methods are in microseconds. With
    ``cancel_on_set`` the source also fires once a second, since clock
    changes cannot otherwise be detected.
    """

    def __init__(
        self,
        now: datetime,
        expiry: datetime,
        cancel_on_set: bool = False,
        callback: Callable[[], object] | None = None,
        monotonic_now: int | None = None,
    ) -> None:
        self.now = now
        self.expiry = expiry
        self.cancel_on_set = cancel_on_set
        self.callback = callback
        self.initially_expired = False
        self.real_expiration = math.floor(expiry.timestamp()) * USEC_PER_SECOND
        self.wakeup_expiration = 0
        self._reschedule(_monotonic_us() if monotonic_now is None else monotonic_now)

    def _reschedule(self, from_monotonic: int) -> None:
        self.wakeup_expiration = from_monotonic + USEC_PER_SECOND

    def is_expired(self, real_now: int | None = None, monotonic_now: int | None = None) -> bool:
        """Return whether the source should fire now."""
        real_now = _real_time_us() if real_now is None else real_now
        monotonic_now = _monotonic_us() if monotonic_now is None else monotonic_now
        if self.initially_expired:
            return True
        if self.real_expiration <= real_now:
            return True
        return self.cancel_on_set and monotonic_now >= self.wakeup_expiration

    def prepare(
        self, real_now: int | None = None, monotonic_now: int | None = None
    ) -> tuple[bool, int]:
        """Return ``(ready, timeout_ms)`` for the next poll."""
        monotonic_now = _monotonic_us() if monotonic_now is None else monotonic_now
        if monotonic_now < self.wakeup_expiration:
            # Round up so the next attempt is never too early.
            timeout = (self.wakeup_expiration - monotonic_now + 999) // 1000
            return False, timeout
        return self.is_expired(real_now, monotonic_now), 0

    def check(self, real_now: int | None = None, monotonic_now: int | None = None) -> bool:
        """Check the wall clock after a poll; reschedule if not yet due."""
        monotonic_now = _monotonic_us() if monotonic_now is None else monotonic_now
        if self.is_expired(real_now, monotonic_now):
            return True
        self._reschedule(monotonic_now)
        return False

    def dispatch(self) -> bool:
        """Run the callback; always returns False since the source fires once."""
        self.initially_expired = False
        if self.callback is None:
            log.warning(
                "Timeout source dispatched without callback. "
                "A callback must be set."
            )
            return False
        self.callback()
        return False