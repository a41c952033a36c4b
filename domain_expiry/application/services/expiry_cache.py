"""Expiry cache store built on the repository port."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ...domain.entities import CacheEntry
from ...domain.value_objects import CacheKey
from ..ports import ExpiryRepository

logger = logging.getLogger(__name__)


class ExpiryCacheStore:
    """
    Loads and saves the (domain, source) to expiry cache.

    Incomplete entries are dropped on the way in and on the way out; they are
    never repaired.
    """

    def __init__(self, repository: ExpiryRepository) -> None:
        """Initialize the store with the persistence port."""
        self._repository = repository

    def load(self) -> dict[CacheKey, CacheEntry]:
        """
        Load the cache keyed by normalized (domain, source).

        Returns:
            Mapping of cache keys to entries; empty when nothing was cached.

        Raises:
            PersistenceError: If an existing cache cannot be read.
        """
        entries: dict[CacheKey, CacheEntry] = {}
        dropped = 0

        for entry in self._repository.load_expiry_cache():
            if not entry.is_complete:
                dropped += 1
                continue
            entries[entry.key] = entry

        if dropped:
            logger.warning("Dropped %d incomplete expiry cache entries", dropped)
        logger.debug("Loaded %d expiry cache entries", len(entries))
        return entries

    def save(self, entries: Iterable[CacheEntry]) -> None:
        """
        Replace the persisted cache with ``entries``.

        Raises:
            PersistenceError: If the cache cannot be written.
        """
        complete = [e for e in entries if e.is_complete]
        self._repository.save_expiry_cache(complete)
        logger.info("Saved %d expiry cache entries", len(complete))
