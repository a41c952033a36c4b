"""Alert window value object."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from typing import ClassVar, Self

from ..exceptions import InvalidAlertWindowError


@dataclass(frozen=True, slots=True)
class AlertWindow:
    """
    How close to its expiry a domain must be to count as expiring.

    A domain is expiring iff ``expiry - now <= duration``. Calendar dates are
    read as midnight UTC of that day.
    """

    DEFAULT: ClassVar[timedelta] = timedelta(hours=24)

    duration: timedelta = DEFAULT

    def __post_init__(self) -> None:
        """Reject negative windows and apply the default for a zero one."""
        if self.duration < timedelta(0):
            msg = f"Alert window must not be negative, got {self.duration}"
            raise InvalidAlertWindowError(msg)
        if not self.duration:
            object.__setattr__(self, "duration", self.DEFAULT)

    @classmethod
    def from_days(cls, days: int) -> Self:
        """Build a window from a day count (0 falls back to the default)."""
        return cls(duration=timedelta(days=days))

    @property
    def hours(self) -> float:
        """Window length in hours."""
        return self.duration.total_seconds() / 3600

    def time_left(self, expiry: date, now: datetime | None = None) -> timedelta:
        """Time remaining from ``now`` until the start of the expiry day."""
        now = now or datetime.now(UTC)
        if now.tzinfo is None:
            now = now.replace(tzinfo=UTC)
        return datetime.combine(expiry, time.min, tzinfo=UTC) - now

    def contains(self, expiry: date, now: datetime | None = None) -> bool:
        """Check whether the expiry date falls inside the window."""
        return self.time_left(expiry, now) <= self.duration
