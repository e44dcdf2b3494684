"""Request deadlines shared between the event loop and worker threads.

A ``Deadline`` is handed to a synchronous operation running on a worker
thread. The operation checks it before each blocking step and claims it with
``begin_commit()`` right before committing. The awaiting side calls
``cancel()`` when its wait runs out. Both claims are taken under one lock, so
either the commit proceeds and the caller waits for its outcome, or the token
is cancelled and the commit never starts.
"""

import asyncio
import logging
import threading
import time
from functools import partial
from typing import Any, Callable, Optional, TypeVar

from fastapi.concurrency import run_in_threadpool

from banking.core.exceptions import RequestTimeoutError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class Deadline:
    """Cancellation token with an expiry time."""

    def __init__(
        self,
        timeout_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._clock = clock
        self._expires_at = clock() + timeout_seconds
        self._lock = threading.Lock()
        self._cancelled = False
        self._committing = False

    @property
    def remaining(self) -> float:
        """Seconds left before expiry (never negative)."""
        return max(0.0, self._expires_at - self._clock())

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def expired(self) -> bool:
        return self._cancelled or self._clock() >= self._expires_at

    def check(self) -> None:
        """Raise RequestTimeoutError if the deadline has passed."""
        if self.expired:
            raise RequestTimeoutError("request deadline exceeded")

    def begin_commit(self) -> None:
        """
        Claim the deadline for a commit.

        After this returns, ``cancel()`` no longer succeeds and the caller
        waits for the commit instead.
        """
        with self._lock:
            if self._cancelled or self._clock() >= self._expires_at:
                raise RequestTimeoutError("request deadline exceeded")
            self._committing = True

    def cancel(self) -> bool:
        """
        Cancel the operation unless a commit has already been claimed.

        Returns:
            True if the token is now cancelled, False if a commit is in flight.
        """
        with self._lock:
            if self._committing:
                return False
            self._cancelled = True
            return True


def _log_abandoned(future: "asyncio.Future[Any]") -> None:
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None and not isinstance(exc, RequestTimeoutError):
        logger.warning("Abandoned operation failed after timeout: %s", exc)


async def run_with_deadline(
    func: Callable[..., T],
    *args: Any,
    timeout_seconds: float,
    **kwargs: Any,
) -> T:
    """
    Run ``func(*args, deadline=..., **kwargs)`` on a worker thread.

    The call is bound to a fresh ``Deadline``. If the wait times out and the
    operation has not claimed a commit, the token is cancelled and
    ``RequestTimeoutError`` is raised; the worker rolls back when it next
    checks the token. If a commit is already in flight, its outcome is
    awaited and returned.
    """
    deadline = Deadline(timeout_seconds)
    future = asyncio.ensure_future(
        run_in_threadpool(partial(func, *args, deadline=deadline, **kwargs))
    )
    try:
        return await asyncio.wait_for(asyncio.shield(future), timeout=timeout_seconds)
    except asyncio.TimeoutError:
        if future.done():
            return future.result()
        if deadline.cancel():
            future.add_done_callback(_log_abandoned)
            raise RequestTimeoutError("request deadline exceeded")
        return await future
