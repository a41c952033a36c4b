"""Cache entry entity."""

from __future__ import annotations

from dataclasses import dataclass

from ..value_objects import CacheKey


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A remembered expiry date for a (domain, source) pair."""

    domain: str
    source: str
    expiry: str

    @property
    def key(self) -> CacheKey:
        """Cache identity of this entry."""
        return CacheKey.of(self.domain, self.source)

    @property
    def is_complete(self) -> bool:
        """Check that domain, source and expiry are all present."""
        return self.key.is_complete and bool(self.expiry.strip())
