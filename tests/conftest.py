"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

import pytest

from domain_expiry.application.exceptions import PersistenceError
from domain_expiry.domain.entities import CacheEntry, DomainRecord, FailureRecord
from domain_expiry.domain.value_objects import AlertWindow

FIXED_NOW = datetime(2030, 1, 1, 12, 0, tzinfo=UTC)


class FakeGateway:
    """
    In-memory LookupGateway.

    ``responses`` maps a domain to the raw text to return, or to an exception
    to raise. ``delay`` makes every query sleep first.
    """

    def __init__(self, responses: dict[str, str | Exception] | None = None, delay: float = 0.0) -> None:
        self.responses = dict(responses or {})
        self.delay = delay
        self.calls: list[str] = []
        self.call_times: list[float] = []

    async def query(self, domain: str) -> str:
        self.calls.append(domain)
        self.call_times.append(asyncio.get_running_loop().time())
        if self.delay:
            await asyncio.sleep(self.delay)
        response = self.responses.get(domain, "")
        if isinstance(response, Exception):
            raise response
        return response


class InMemoryRepository:
    """In-memory ExpiryRepository recording every save."""

    def __init__(self, cache: Sequence[CacheEntry] = (), fail_on_save: bool = False) -> None:
        self.cache = list(cache)
        self.fail_on_save = fail_on_save
        self.fail_on_load = False
        self.expiring: list[DomainRecord] | None = None
        self.failures: list[FailureRecord] | None = None
        self.cache_saves = 0

    def load_expiry_cache(self) -> list[CacheEntry]:
        if self.fail_on_load:
            raise PersistenceError("cache unreadable")
        return list(self.cache)

    def save_expiry_cache(self, entries: Sequence[CacheEntry]) -> None:
        self._check()
        self.cache = list(entries)
        self.cache_saves += 1

    def save_expiring(self, records: Sequence[DomainRecord]) -> None:
        self._check()
        self.expiring = list(records)

    def save_failures(self, records: Sequence[FailureRecord]) -> None:
        self._check()
        self.failures = list(records)

    def _check(self) -> None:
        if self.fail_on_save:
            raise PersistenceError("disk full")


@pytest.fixture
def now() -> datetime:
    """Fixed current time for deterministic classification."""
    return FIXED_NOW


@pytest.fixture
def clock(now: datetime):
    """Clock callable returning the fixed current time."""
    return lambda: now


@pytest.fixture
def two_day_window() -> AlertWindow:
    """A 48 hour alert window."""
    return AlertWindow(duration=timedelta(hours=48))


@pytest.fixture
def gateway() -> FakeGateway:
    """Empty fake lookup gateway."""
    return FakeGateway()


@pytest.fixture
def repository() -> InMemoryRepository:
    """Empty in-memory repository."""
    return InMemoryRepository()
