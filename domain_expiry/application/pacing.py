"""Spacing of registry lookups within one check pass."""

from __future__ import annotations

import logging
import time

from .cancellation import CancellationScope

logger = logging.getLogger(__name__)


class RequestPacer:
    """
    Enforces a minimum interval between consecutive registry lookups.

    The first lookup of a pass is never delayed. One pacer belongs to one pass.
    """

    def __init__(self, interval: float) -> None:
        """
        Initialize the pacer.

        Args:
            interval: Minimum seconds between lookup starts; 0 disables pacing.
        """
        self._interval = max(0.0, interval)
        self._last_start: float | None = None

    @property
    def enabled(self) -> bool:
        """Check if lookups are spaced at all."""
        return self._interval > 0

    async def wait(self, scope: CancellationScope) -> None:
        """
        Block until the next lookup may start.

        Raises:
            CancellationError: If the scope ends while waiting.
        """
        if self.enabled and self._last_start is not None:
            delay = self._last_start + self._interval - time.monotonic()
            if delay > 0:
                logger.debug("Pacing next lookup by %.3fs", delay)
                await scope.sleep(delay)
        scope.raise_if_cancelled()
        self._last_start = time.monotonic()
