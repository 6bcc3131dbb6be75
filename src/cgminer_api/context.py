"""Cancellation and deadline handle for the dial phase of a call."""

from __future__ import annotations

import threading
import time


class ContextCancelled(ConnectionAbortedError):
    """Raised when a dial is attempted with a cancelled or expired context."""


class Context:
    """Caller-owned cancellation handle.

    Only dialing consults the context. Once connected, reads and writes are
    bounded by the client's fixed deadline instead.

    Usage::

        ctx = Context.with_timeout(2.0)
        client.call_context(ctx, summary(), out)
    """

    def __init__(self, deadline: float | None = None) -> None:
        self.deadline = deadline
        self._cancelled = threading.Event()

    @classmethod
    def background(cls) -> Context:
        """A context that is never cancelled and has no deadline."""
        return cls()

    @classmethod
    def with_timeout(cls, seconds: float) -> Context:
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def remaining(self) -> float | None:
        """Seconds left until the deadline, or None without a deadline."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """Raise if the context is cancelled or its deadline has passed.

        Raises:
            ContextCancelled: After :meth:`cancel`.
            TimeoutError: Once the deadline is reached.
        """
        if self.cancelled:
            raise ContextCancelled("context cancelled")
        remaining = self.remaining()
        if remaining is not None and remaining <= 0:
            raise TimeoutError("context deadline exceeded")
