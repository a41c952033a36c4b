"""Cache key value object."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Self


def normalize_name(value: str | None) -> str:
    """Lowercase, trim and strip one trailing dot."""
    cleaned = (value or "").strip().lower()
    if cleaned.endswith("."):
        cleaned = cleaned[:-1]
    return cleaned


@dataclass(frozen=True, slots=True)
class CacheKey:
    """Identity of a cached expiry: normalized domain plus normalized source."""

    domain: str
    source: str

    def __str__(self) -> str:
        return f"{self.domain}|{self.source}"

    @property
    def is_complete(self) -> bool:
        """Both key parts are non-empty."""
        return bool(self.domain and self.source)

    @classmethod
    def of(cls, domain: str | None, source: str | None) -> Self:
        """Build a key from raw domain and source values."""
        return cls(domain=normalize_name(domain), source=normalize_name(source))
