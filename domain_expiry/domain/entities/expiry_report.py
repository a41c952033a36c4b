"""Expiry report aggregate root."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from ..value_objects import AlertWindow
from .domain_record import DomainRecord
from .failure_record import FailureRecord


@dataclass(slots=True)
class ExpiryReport:
    """Aggregate root holding the classification produced by one check pass."""

    expiring: list[DomainRecord]
    failures: list[FailureRecord]
    alert_window: AlertWindow
    checked_count: int = 0
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def expiring_count(self) -> int:
        """Count of domains inside the alert window."""
        return len(self.expiring)

    @property
    def failure_count(self) -> int:
        """Count of domains without a usable expiry."""
        return len(self.failures)

    @property
    def requires_notification(self) -> bool:
        """Check if anything in this report needs a human."""
        return bool(self.expiring or self.failures)

    @property
    def expired(self) -> list[DomainRecord]:
        """Expiring domains whose expiry day has already started."""
        today = self.generated_at.astimezone(UTC).date()
        return [r for r in self.expiring if r.expiry and date.fromisoformat(r.expiry) <= today]

    def get_summary(self) -> str:
        """Generate a human-readable summary of the report."""
        if not self.requires_notification:
            return f"All {self.checked_count} domains are outside the alert window"

        parts: list[str] = []
        if self.expiring_count:
            parts.append(f"{self.expiring_count} expiring")
        if self.failure_count:
            parts.append(f"{self.failure_count} failed")
        return f"{self.checked_count} domains checked: {', '.join(parts)}"
