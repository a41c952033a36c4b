"""Use case for checking domains against their registry expiry dates."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from datetime import UTC, date, datetime

from ...domain.entities import (
    CacheEntry,
    DomainRecord,
    ExpiryReport,
    FailureRecord,
)
from ...domain.services import ExpiryTextResolver, parse_strict_date
from ...domain.value_objects import AlertWindow, CacheKey, CheckState
from ..cancellation import CancellationScope
from ..exceptions import (
    ApplicationError,
    CancellationError,
    ConfigurationError,
    ExtractionFailure,
    LookupFailure,
    PersistenceError,
)
from ..pacing import RequestPacer
from ..ports import DomainSourceLoader, ExpiryRepository, LookupGateway
from ..services import ExpiryCacheStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CheckResult:
    """Result of one check pass."""

    report: ExpiryReport
    lookups: int = 0
    cache_dirty: bool = False
    error: ApplicationError | None = None

    @property
    def expiring(self) -> list[DomainRecord]:
        """Domains inside the alert window, in input order."""
        return self.report.expiring

    @property
    def failures(self) -> list[FailureRecord]:
        """Domains without a usable expiry, in input order."""
        return self.report.failures

    @property
    def success(self) -> bool:
        """Check if the pass completed and its output was saved."""
        return self.error is None

    @property
    def cancelled(self) -> bool:
        """Check if the pass was cut short by cancellation."""
        return isinstance(self.error, CancellationError)


@dataclass(slots=True)
class _PassState:
    """Working set owned by a single pass."""

    cache: dict[CacheKey, CacheEntry]
    expiring: list[DomainRecord] = field(default_factory=list)
    failures: list[FailureRecord] = field(default_factory=list)
    cache_dirty: bool = False
    lookups: int = 0
    checked: int = 0

    def remember(self, record: DomainRecord, expiry: date) -> None:
        entry = CacheEntry(domain=record.domain, source=record.source, expiry=expiry.isoformat())
        if self.cache.get(record.key) != entry:
            self.cache[record.key] = entry
            self.cache_dirty = True

    def evict(self, key: CacheKey) -> None:
        if self.cache.pop(key, None) is not None:
            self.cache_dirty = True

    def fail(self, record: DomainRecord) -> None:
        self.failures.append(FailureRecord(domain=record.domain, source=record.source))


class CheckExpiringDomains:
    """
    Rate-limited check pipeline.

    Walks a batch of domain records strictly in order, answers from the expiry
    cache where the cached date is safely outside the alert window, paces and
    times out registry lookups, and classifies each domain as expiring, failed
    or neither. Per-domain failures never abort the batch; only cancellation
    does.
    """

    def __init__(
        self,
        lookup_gateway: LookupGateway | None,
        repository: ExpiryRepository | None = None,
        *,
        alert_window: AlertWindow | None = None,
        rate_limit: float = 0.0,
        query_timeout: float = 0.0,
        source_loader: DomainSourceLoader | None = None,
        resolver: ExpiryTextResolver | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """
        Initialize the use case.

        Args:
            lookup_gateway: Adapter performing WHOIS/RDAP queries (required).
            repository: Persistence for outputs and the expiry cache.
            alert_window: Expiring threshold; defaults to 24 hours.
            rate_limit: Minimum seconds between lookups; 0 disables pacing.
            query_timeout: Per-lookup limit in seconds; 0 disables it.
            source_loader: Where :meth:`execute` reads its batch from.
            resolver: Free-text expiry extractor.
            clock: Source of the current time, UTC-aware.
        """
        self._gateway = lookup_gateway
        self._repository = repository
        self._cache_store = ExpiryCacheStore(repository) if repository is not None else None
        self._alert_window = alert_window or AlertWindow()
        self._rate_limit = rate_limit
        self._query_timeout = query_timeout
        self._source_loader = source_loader
        self._resolver = resolver or ExpiryTextResolver()
        self._clock = clock or (lambda: datetime.now(UTC))

    @property
    def alert_window(self) -> AlertWindow:
        """Configured alert window."""
        return self._alert_window

    async def execute(self, scope: CancellationScope | None = None) -> CheckResult:
        """
        Load the configured batch and check it.

        Returns:
            CheckResult for the loaded batch.
        """
        if self._source_loader is None:
            return self._abort(ConfigurationError("No domain source loader configured"))

        try:
            domains = self._source_loader.load_sources()
        except PersistenceError as e:
            logger.exception("Failed to load domain sources")
            return self._abort(e)

        logger.info("Loaded %d domains from sources", len(domains))
        return await self.check(domains, scope)

    async def check(
        self,
        domains: Sequence[DomainRecord],
        scope: CancellationScope | None = None,
    ) -> CheckResult:
        """
        Run one check pass over ``domains``.

        Args:
            domains: Batch to verify, processed in order.
            scope: Pass cancellation scope; a fresh one is used if omitted.

        Returns:
            CheckResult with the expiring and failed domains. On cancellation
            it carries the partial results gathered so far and nothing is saved.
        """
        if self._gateway is None:
            logger.error("Expiry check refused: lookup gateway is not configured")
            return self._abort(ConfigurationError("Lookup gateway is not configured"))

        scope = scope or CancellationScope()
        state = _PassState(cache=self._load_cache())
        pacer = RequestPacer(self._rate_limit)

        logger.info(
            "Starting expiry check: %d domains, alert window %.1fh, rate limit %.2fs",
            len(domains),
            self._alert_window.hours,
            self._rate_limit,
        )

        for record in domains:
            try:
                await self._check_one(record.normalized(), state, pacer, scope)
            except CancellationError as e:
                logger.warning(
                    "[expiry] pass_cancelled reason=%s checked=%d expiring=%d failed=%d",
                    e,
                    state.checked,
                    len(state.expiring),
                    len(state.failures),
                )
                return self._result(state, error=e)

        error = self._persist(state)
        result = self._result(state, error=error)
        logger.info(
            "Expiry check complete: %s (lookups=%d, cache_dirty=%s)",
            result.report.get_summary(),
            state.lookups,
            state.cache_dirty,
        )
        return result

    async def _check_one(
        self,
        record: DomainRecord,
        state: _PassState,
        pacer: RequestPacer,
        scope: CancellationScope,
    ) -> None:
        """Drive one record from UNVERIFIED to a terminal state."""
        state.checked += 1

        if not record.domain:
            logger.warning("[expiry] empty_domain source=%s", record.source)
            state.fail(record)
            return

        if record.has_explicit_expiry:
            expiry = parse_strict_date(record.expiry)
            if expiry is None:
                logger.warning(
                    "[expiry] invalid_explicit_expiry domain=%s expiry=%s",
                    record.domain,
                    record.expiry,
                )
                state.fail(record)
                return
            state.remember(record, expiry)
            self._classify(record, expiry, state)
            return

        key = record.key
        cached = state.cache.get(key)
        if cached is not None:
            cached_date = parse_strict_date(cached.expiry)
            if cached_date is not None and not self._alert_window.contains(cached_date, self._clock()):
                self._trace(record, CheckState.CACHED_FRESH)
                return
            self._trace(record, CheckState.STALE_RECHECK)

        await pacer.wait(scope)
        state.lookups += 1
        self._trace(record, CheckState.QUERIED)

        try:
            expiry = await self._lookup(record.domain, scope)
        except LookupFailure as e:
            logger.warning("[expiry] lookup_failed domain=%s error=%s", record.domain, e)
            self._trace(record, CheckState.LOOKUP_FAILED)
            state.evict(key)
            state.fail(record)
            return
        except ExtractionFailure as e:
            logger.warning("[expiry] extract_failed domain=%s error=%s", record.domain, e)
            self._trace(record, CheckState.EXTRACT_FAILED)
            state.evict(key)
            state.fail(record)
            return

        self._trace(record, CheckState.RESOLVED)
        state.remember(record, expiry)
        self._classify(record, expiry, state)

    async def _lookup(self, domain: str, scope: CancellationScope) -> date:
        """
        Query the gateway and resolve its response to a date.

        Raises:
            LookupFailure: If the gateway errors or times out.
            ExtractionFailure: If the response has no usable date.
            CancellationError: If the pass scope ends mid-query.
        """
        try:
            raw = await scope.run(self._gateway.query(domain), self._query_timeout)
        except (CancellationError, LookupFailure):
            raise
        except TimeoutError as e:
            raise LookupFailure(f"query timed out after {self._query_timeout}s") from e
        except Exception as e:
            raise LookupFailure(f"{type(e).__name__}: {e}") from e

        direct = parse_strict_date(raw)
        if direct is not None:
            return direct

        extracted, found = self._resolver.extract_for_domain(domain, raw)
        if not found:
            raise ExtractionFailure("no expiry date in registry response")

        expiry = parse_strict_date(extracted)
        if expiry is None:
            raise ExtractionFailure(f"unparsable expiry {extracted!r}")
        return expiry

    def _classify(self, record: DomainRecord, expiry: date, state: _PassState) -> None:
        """Add the record to the expiring set if it falls inside the window."""
        if self._alert_window.contains(expiry, self._clock()):
            logger.info("[expiry] expiring domain=%s expiry=%s", record.domain, expiry.isoformat())
            state.expiring.append(record.with_expiry(expiry))
        self._trace(record, CheckState.CLASSIFIED)

    def _load_cache(self) -> dict[CacheKey, CacheEntry]:
        """Load the expiry cache, starting empty if it cannot be read."""
        if self._cache_store is None:
            return {}
        try:
            return self._cache_store.load()
        except PersistenceError:
            logger.exception("Expiry cache unreadable; starting with an empty cache")
            return {}

    def _persist(self, state: _PassState) -> PersistenceError | None:
        """Save both output sets, then the cache if this pass changed it."""
        if self._repository is None:
            return None
        try:
            self._repository.save_expiring(state.expiring)
            self._repository.save_failures(state.failures)
            if state.cache_dirty and self._cache_store is not None:
                self._cache_store.save(state.cache.values())
        except PersistenceError as e:
            logger.exception("Failed to persist expiry check results")
            return e
        return None

    def _result(self, state: _PassState, *, error: ApplicationError | None = None) -> CheckResult:
        report = ExpiryReport(
            expiring=state.expiring,
            failures=state.failures,
            alert_window=self._alert_window,
            checked_count=state.checked,
            generated_at=self._clock(),
        )
        return CheckResult(
            report=report,
            lookups=state.lookups,
            cache_dirty=state.cache_dirty,
            error=error,
        )

    def _abort(self, error: ApplicationError) -> CheckResult:
        report = ExpiryReport(expiring=[], failures=[], alert_window=self._alert_window)
        return CheckResult(report=report, error=error)

    @staticmethod
    def _trace(record: DomainRecord, state: CheckState) -> None:
        logger.debug("[expiry] domain=%s source=%s state=%s", record.domain, record.source, state)
