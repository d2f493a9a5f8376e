from __future__ import annotations

"""
Cooperative Cancellation Context.

A CallContext is threaded through every remote call of a walk. It is only
consulted at call boundaries: once cancelled or past its deadline, the
next call fails with WalkCancelledError, which the walker then offers to
the visitor like any other transport failure.
"""

import threading
import time
from typing import Optional

from ghwalk.domain.errors import WalkCancelledError


class CallContext:
    """
    Deadline and cancellation flag for a sequence of remote calls.

    Args:
        timeout: Seconds from construction until the deadline; None for no deadline.
    """

    def __init__(self, timeout: Optional[float] = None) -> None:
        self._deadline: Optional[float] = None
        if timeout is not None:
            self._deadline = time.monotonic() + timeout
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> "CallContext":
        """Context that is never cancelled and has no deadline."""
        return cls()

    def cancel(self) -> None:
        """Request cancellation. Safe to call from another thread."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def check(self) -> None:
        """
        Raise if no further remote call may be issued.

        Raises:
            WalkCancelledError: The context was cancelled or its deadline passed.
        """
        if self._cancelled.is_set():
            raise WalkCancelledError("context canceled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise WalkCancelledError("context deadline exceeded")

    def request_timeout(self, default: float) -> float:
        """
        HTTP timeout for the next call, bounded by the deadline.

        Raises:
            WalkCancelledError: The deadline passed since the last check().
        """
        remaining = self.remaining()
        if remaining is None:
            return default
        if remaining <= 0:
            raise WalkCancelledError("context deadline exceeded")
        return min(default, remaining)
