"""FastAPI application factory."""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from fastapi import FastAPI, HTTPException, status
from fastapi.responses import JSONResponse

from ....domain.entities import ExpiryReport
from .models import (
    AlertWindowResponse,
    CheckResponse,
    ErrorResponse,
    HealthResponse,
    ReportResponse,
    StatisticsResponse,
)

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Coroutine

    from ....application.use_cases import CheckResult

logger = logging.getLogger(__name__)


def _report_to_response(report: ExpiryReport) -> ReportResponse:
    """Convert a domain report to its API response."""
    return ReportResponse(
        generated_at=report.generated_at,
        summary=report.get_summary(),
        statistics=StatisticsResponse(
            checked_count=report.checked_count,
            expiring_count=report.expiring_count,
            failure_count=report.failure_count,
            expired_count=len(report.expired),
        ),
        alert_window=AlertWindowResponse(hours=report.alert_window.hours),
        expiring_domains=[r.domain for r in report.expiring],
        failed_domains=[f.domain for f in report.failures],
        requires_notification=report.requires_notification,
    )


class ApiState:
    """Shared state for API endpoints."""

    def __init__(
        self,
        check_func: Callable[[], Coroutine[None, None, CheckResult]],
        version: str = "1.0.0",
    ) -> None:
        """Initialize API state."""
        self.check_func = check_func
        self.version = version
        self.last_report: ExpiryReport | None = None
        self.last_check_at: datetime | None = None
        # Serializes check passes.
        self.check_lock = asyncio.Lock()


def create_app(
    check_func: Callable[[], Coroutine[None, None, CheckResult]],
    version: str = "1.0.0",
) -> FastAPI:
    """
    Create FastAPI application.

    Args:
        check_func: Async function running one expiry check pass.
        version: Application version string.

    Returns:
        Configured FastAPI application.
    """
    state = ApiState(check_func=check_func, version=version)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler."""
        logger.info("API server starting...")
        yield
        logger.info("API server shutting down...")

    app = FastAPI(
        title="Domain Expiry Watch API",
        description="Check registry expiry dates of monitored domains. "
        "Provides health checks, the latest pass summary and on-demand checks.",
        version=version,
        lifespan=lifespan,
        responses={
            500: {"model": ErrorResponse, "description": "Internal server error"},
        },
    )

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["Health"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return HealthResponse(
            status="healthy",
            version=state.version,
            timestamp=datetime.now(UTC),
        )

    @app.get(
        "/api/v1/report",
        response_model=ReportResponse,
        tags=["Reports"],
        summary="Get latest report",
        responses={
            404: {"model": ErrorResponse, "description": "No report available"},
        },
    )
    async def get_report() -> ReportResponse:
        if state.last_report is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="No report available. Trigger a check first using POST /api/v1/check",
            )
        return _report_to_response(state.last_report)

    @app.post(
        "/api/v1/check",
        response_model=CheckResponse,
        tags=["Operations"],
        summary="Trigger expiry check",
        description="Run one expiry check pass over the configured domain sources.",
        responses={
            409: {"model": ErrorResponse, "description": "A check is already running"},
        },
    )
    async def trigger_check() -> CheckResponse:
        if state.check_lock.locked():
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="An expiry check is already running",
            )

        async with state.check_lock:
            logger.info("API: Triggering expiry check...")
            result = await state.check_func()

        state.last_report = result.report
        state.last_check_at = datetime.now(UTC)

        return CheckResponse(
            success=result.success,
            message="Check completed successfully" if result.success else "Check completed with errors",
            report=_report_to_response(result.report),
            lookups=result.lookups,
            cache_updated=result.cache_dirty,
            error=str(result.error) if result.error else None,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc: Exception) -> JSONResponse:  # noqa: ARG001
        """Handle uncaught exceptions."""
        logger.exception("Unhandled exception in API")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "detail": str(exc)},
        )

    return app
