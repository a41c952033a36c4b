"""Port for check result persistence - driven/secondary port."""

from collections.abc import Sequence
from typing import Protocol

from ...domain.entities import CacheEntry, DomainRecord, FailureRecord


class ExpiryRepository(Protocol):
    """
    Port for persisting check outputs and the expiry cache.

    Every method is a full overwrite of its backing store.
    """

    def load_expiry_cache(self) -> list[CacheEntry]:
        """
        Read the expiry cache.

        Returns:
            Cached entries; empty when no cache has been written yet.

        Raises:
            PersistenceError: If an existing cache cannot be read.
        """
        ...

    def save_expiry_cache(self, entries: Sequence[CacheEntry]) -> None:
        """Replace the expiry cache, omitting entries with an empty field."""
        ...

    def save_expiring(self, records: Sequence[DomainRecord]) -> None:
        """Replace the list of domains inside the alert window."""
        ...

    def save_failures(self, records: Sequence[FailureRecord]) -> None:
        """Replace the list of domains whose expiry could not be determined."""
        ...
