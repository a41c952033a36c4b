"""Domain record entity - one registrable name to verify."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Self

from ..value_objects import CacheKey


@dataclass(slots=True)
class DomainRecord:
    """A domain to check, the account it came from and an optional known expiry."""

    domain: str
    source: str
    expiry: str | None = None

    @property
    def key(self) -> CacheKey:
        """Cache identity of this record."""
        return CacheKey.of(self.domain, self.source)

    @property
    def has_explicit_expiry(self) -> bool:
        """Check if the loader already supplied an expiry string."""
        return bool(self.expiry and self.expiry.strip())

    def normalized(self) -> Self:
        """Return a copy with surrounding whitespace removed from every field."""
        expiry = self.expiry.strip() if self.expiry else None
        return replace(
            self,
            domain=(self.domain or "").strip(),
            source=(self.source or "").strip(),
            expiry=expiry or None,
        )

    def with_expiry(self, expiry: date) -> Self:
        """Return a copy carrying the resolved expiry as ``YYYY-MM-DD``."""
        return replace(self, expiry=expiry.isoformat())
