"""Pass-level cancellation and deadline handling."""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Awaitable
from typing import TypeVar

from .exceptions import CancellationError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CancellationScope:
    """
    Cancellation signal shared by every suspension point of one check pass.

    The scope is cancelled either explicitly through :meth:`cancel` or
    implicitly once its optional deadline has passed. Waits performed through
    the scope end early with :class:`CancellationError` in both cases.
    """

    def __init__(self, timeout: float | None = None) -> None:
        """
        Initialize the scope.

        Args:
            timeout: Seconds until the pass deadline; None or 0 for no deadline.
        """
        self._event = asyncio.Event()
        self._deadline = time.monotonic() + timeout if timeout else None
        self._reason = ""

    @property
    def cancelled(self) -> bool:
        """Check if the scope was cancelled or its deadline has passed."""
        return self._event.is_set() or self._deadline_passed()

    @property
    def reason(self) -> str:
        """Why the scope ended, empty while it is still live."""
        if self._event.is_set():
            return self._reason
        if self._deadline_passed():
            return "deadline exceeded"
        return ""

    def cancel(self, reason: str = "cancelled by caller") -> None:
        """Cancel the scope, waking up any pending wait."""
        if not self._event.is_set():
            self._reason = reason
            self._event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        """Raise :class:`CancellationError` if the scope has ended."""
        if self.cancelled:
            raise CancellationError(self.reason)

    async def sleep(self, delay: float) -> None:
        """
        Sleep for ``delay`` seconds unless the scope ends first.

        Raises:
            CancellationError: If the scope ends before or during the sleep.
        """
        self.raise_if_cancelled()
        with contextlib.suppress(TimeoutError):
            await asyncio.wait_for(self._event.wait(), timeout=self._bound(delay))
        self.raise_if_cancelled()

    async def run(self, awaitable: Awaitable[T], timeout: float | None = None) -> T:
        """
        Await ``awaitable`` bounded by ``timeout`` and by the scope.

        Args:
            awaitable: Work to run, typically a gateway query.
            timeout: Per-call limit in seconds; None or 0 disables it.

        Returns:
            Whatever the awaitable returns.

        Raises:
            CancellationError: If the scope ends while the work is in flight.
            TimeoutError: If the per-call limit elapses first.
        """
        if self.cancelled:
            if asyncio.iscoroutine(awaitable):
                awaitable.close()
            self.raise_if_cancelled()
        remaining = self.remaining()
        deadline_first = remaining is not None and (not timeout or remaining <= timeout)

        task = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait(
                {task, waiter},
                timeout=self._bound(timeout),
                return_when=asyncio.FIRST_COMPLETED,
            )
        finally:
            waiter.cancel()
            if not task.done():
                task.cancel()

        if task in done:
            return task.result()

        task.add_done_callback(_discard_outcome)
        self.raise_if_cancelled()
        if deadline_first:
            raise CancellationError("deadline exceeded")
        msg = f"timed out after {timeout}s"
        raise TimeoutError(msg)

    def _bound(self, timeout: float | None) -> float | None:
        """Combine a per-call timeout with the scope deadline."""
        limits = [t for t in (timeout or None, self.remaining()) if t is not None]
        return min(limits) if limits else None

    def _deadline_passed(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline


def _discard_outcome(task: asyncio.Future) -> None:
    """Retrieve the outcome of abandoned work so it is not reported as lost."""
    if not task.cancelled() and task.exception() is not None:
        logger.debug("Abandoned lookup ended with %r", task.exception())
