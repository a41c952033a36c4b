#!/usr/bin/env python3
"""
Domain Expiry Watch

Composition root and application entry point.
Wires together all layers following hexagonal architecture principles.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from croniter import croniter

from . import __version__
from .application.cancellation import CancellationScope
from .application.use_cases import CheckExpiringDomains
from .infrastructure.adapters import FileExpiryRepository, RdapWhoisLookupGateway
from .infrastructure.config import Settings, load_settings

if TYPE_CHECKING:
    from .application.use_cases import CheckResult

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


class ApplicationContainer:
    """
    Dependency injection container.

    Responsible for creating and wiring all application components.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize container with settings."""
        self._settings = settings

    def create_repository(self) -> FileExpiryRepository:
        """Create the file repository adapter."""
        return FileExpiryRepository(self._settings.repository_config)

    def create_lookup_gateway(self) -> RdapWhoisLookupGateway:
        """Create the RDAP/WHOIS lookup gateway."""
        config = self._settings.lookup_config
        logger.info(
            "Lookup gateway: RDAP via %s, WHOIS fallback %s",
            config.rdap_base_url,
            "enabled" if config.whois_fallback else "disabled",
        )
        return RdapWhoisLookupGateway(config)

    def create_check_use_case(self) -> CheckExpiringDomains:
        """Create the main use case with all dependencies."""
        repository = self.create_repository()
        return CheckExpiringDomains(
            lookup_gateway=self.create_lookup_gateway(),
            repository=repository,
            alert_window=self._settings.alert_window,
            rate_limit=self._settings.rate_limit_seconds,
            query_timeout=self._settings.query_timeout_seconds,
            source_loader=repository,
        )


class Application:
    """
    Main application orchestrator.

    Handles run modes (single execution, scheduled, or API) and lifecycle.
    """

    def __init__(self, settings: Settings, container: ApplicationContainer | None = None) -> None:
        """Initialize application with settings."""
        self._settings = settings
        self._container = container or ApplicationContainer(settings)

    async def run_once(self) -> CheckResult:
        """Execute a single expiry check pass."""
        use_case = self._container.create_check_use_case()
        scope = CancellationScope(timeout=self._settings.pass_timeout_seconds or None)
        result = await use_case.execute(scope)

        if result.report.requires_notification:
            for record in result.expiring:
                logger.warning(
                    "Domain expiring: %s (source: %s, expiry: %s)",
                    record.domain,
                    record.source,
                    record.expiry,
                )
            for failure in result.failures:
                logger.warning("Domain check failed: %s (source: %s)", failure.domain, failure.source)
        if result.error is not None:
            logger.error("Expiry check did not complete: %s", result.error)
        return result

    async def run_scheduled(self) -> None:
        """Run in scheduled mode with cron expression."""
        logger.info("Starting scheduled mode with cron: %s", self._settings.cron_schedule)

        # Run immediately on startup
        logger.info("Running initial check on startup...")
        await self.run_once()

        cron = croniter(self._settings.cron_schedule, datetime.now(UTC))

        while True:
            next_run = cron.get_next(datetime)
            now = datetime.now(UTC)

            # Handle timezone-naive datetime from croniter
            if next_run.tzinfo is None:
                next_run = next_run.replace(tzinfo=UTC)

            sleep_seconds = (next_run - now).total_seconds()

            if sleep_seconds > 0:
                logger.info("Next check scheduled for %s", next_run.isoformat())
                await asyncio.sleep(sleep_seconds)

            logger.info("Running scheduled check...")
            await self.run_once()

    async def run_api(self) -> None:
        """Run in API server mode."""
        import uvicorn

        from .infrastructure.adapters.api import create_app

        logger.info(
            "Starting API server on %s:%d",
            self._settings.api_host,
            self._settings.api_port,
        )

        app = create_app(
            check_func=self.run_once,
            version=__version__,
        )

        config = uvicorn.Config(
            app,
            host=self._settings.api_host,
            port=self._settings.api_port,
            log_level=self._settings.log_level.lower(),
        )
        await uvicorn.Server(config).serve()

    async def run(self) -> int:
        """
        Run the application based on configured mode.

        Returns:
            Exit code (0 for success, 1 for failure).
        """
        # API mode takes precedence if enabled
        if self._settings.api_enabled:
            await self.run_api()
            return 0

        match self._settings.run_mode.lower():
            case "once":
                logger.info("Running in single-execution mode")
                result = await self.run_once()
                return 0 if result.success else 1

            case "scheduled":
                await self.run_scheduled()
                return 0  # Never reached in scheduled mode

            case _:
                logger.error(
                    "Invalid RUN_MODE: %s (use 'once', 'scheduled', or set API_ENABLED=true)",
                    self._settings.run_mode,
                )
                return 1


async def async_main() -> int:
    """Async entry point."""
    try:
        logger.info("Domain Expiry Watch %s starting...", __version__)

        settings = load_settings()
        logging.getLogger().setLevel(settings.log_level.upper())

        app = Application(settings)
        return await app.run()

    except ValueError as e:
        logger.error("Configuration error: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        return 0
    except Exception:
        logger.exception("Unexpected error")
        return 1


def main() -> None:
    """Main entry point."""
    exit_code = asyncio.run(async_main())
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
