"""Application settings loaded from environment variables."""

import os
from dataclasses import dataclass, field
from functools import cached_property

from ...domain.value_objects import AlertWindow
from ..adapters.lookup import LookupGatewayConfig
from ..adapters.storage import FileRepositoryConfig

RUN_MODES = ("once", "scheduled")


def _env_bool(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    return os.environ.get(key, str(default)).lower() in ("true", "1", "yes")


def _env_int(key: str, default: int) -> int:
    """Get integer from environment variable."""
    return int(os.environ.get(key, str(default)))


def _env_float(key: str, default: float) -> float:
    """Get float from environment variable."""
    return float(os.environ.get(key, str(default)))


def _env_str(key: str, default: str = "") -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


def _env_list(key: str, default: str = "") -> tuple[str, ...]:
    """Get comma-separated list from environment variable."""
    return tuple(p.strip() for p in os.environ.get(key, default).split(",") if p.strip())


@dataclass
class Settings:
    """Application settings container."""

    # Check pipeline
    alert_days: int = field(default_factory=lambda: _env_int("ALERT_DAYS", 1))
    rate_limit_seconds: float = field(default_factory=lambda: _env_float("RATE_LIMIT_SECONDS", 1.0))
    query_timeout_seconds: float = field(default_factory=lambda: _env_float("QUERY_TIMEOUT_SECONDS", 15.0))
    pass_timeout_seconds: float = field(default_factory=lambda: _env_float("PASS_TIMEOUT_SECONDS", 0.0))

    # Files
    domain_files: tuple[str, ...] = field(default_factory=lambda: _env_list("DOMAIN_FILES", "domains.txt"))
    expiring_file: str = field(default_factory=lambda: _env_str("EXPIRING_FILE", "expiring_domains.txt"))
    failed_file: str = field(default_factory=lambda: _env_str("FAILED_FILE", "failed_domains.txt"))
    expiry_cache_file: str = field(default_factory=lambda: _env_str("EXPIRY_CACHE_FILE", "expiry_cache.txt"))

    # Lookups
    rdap_base_url: str = field(default_factory=lambda: _env_str("RDAP_BASE_URL", "https://rdap.org"))
    whois_fallback: bool = field(default_factory=lambda: _env_bool("WHOIS_FALLBACK", default=True))

    # Run configuration
    run_mode: str = field(default_factory=lambda: _env_str("RUN_MODE", "once"))
    cron_schedule: str = field(default_factory=lambda: _env_str("CRON_SCHEDULE", "0 15 * * *"))
    log_level: str = field(default_factory=lambda: _env_str("LOG_LEVEL", "INFO"))

    # API settings
    api_enabled: bool = field(default_factory=lambda: _env_bool("API_ENABLED"))
    api_host: str = field(default_factory=lambda: _env_str("API_HOST", "0.0.0.0"))  # noqa: S104
    api_port: int = field(default_factory=lambda: _env_int("API_PORT", 8080))

    def validate(self) -> None:
        """Validate settings."""
        problems: list[str] = []

        if self.alert_days < 0:
            problems.append("ALERT_DAYS must not be negative")
        if self.rate_limit_seconds < 0:
            problems.append("RATE_LIMIT_SECONDS must not be negative")
        if self.query_timeout_seconds < 0:
            problems.append("QUERY_TIMEOUT_SECONDS must not be negative")
        if self.pass_timeout_seconds < 0:
            problems.append("PASS_TIMEOUT_SECONDS must not be negative")
        if not self.domain_files:
            problems.append("DOMAIN_FILES must name at least one file")
        if not self.api_enabled and self.run_mode.lower() not in RUN_MODES:
            problems.append(f"RUN_MODE must be one of {', '.join(RUN_MODES)}")

        if problems:
            msg = f"Invalid configuration: {'; '.join(problems)}"
            raise ValueError(msg)

    @cached_property
    def alert_window(self) -> AlertWindow:
        """Get the alert window."""
        return AlertWindow.from_days(self.alert_days)

    @cached_property
    def repository_config(self) -> FileRepositoryConfig:
        """Get file repository configuration."""
        return FileRepositoryConfig(
            source_paths=self.domain_files,
            expiring_path=self.expiring_file,
            failures_path=self.failed_file,
            cache_path=self.expiry_cache_file,
        )

    @cached_property
    def lookup_config(self) -> LookupGatewayConfig:
        """Get lookup gateway configuration."""
        # RDAP is capped at the per-query timeout.
        rdap_timeout = self.query_timeout_seconds or 10.0
        return LookupGatewayConfig(
            rdap_base_url=self.rdap_base_url,
            rdap_timeout=rdap_timeout,
            whois_fallback=self.whois_fallback,
        )


def load_settings() -> Settings:
    """Load and validate settings from environment."""
    settings = Settings()
    settings.validate()
    return settings
