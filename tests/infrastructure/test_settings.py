"""Tests for environment-driven settings."""

from __future__ import annotations

import pytest

from domain_expiry.infrastructure.config import Settings, load_settings

ENV_VARS = (
    "ALERT_DAYS",
    "RATE_LIMIT_SECONDS",
    "QUERY_TIMEOUT_SECONDS",
    "PASS_TIMEOUT_SECONDS",
    "DOMAIN_FILES",
    "EXPIRING_FILE",
    "FAILED_FILE",
    "EXPIRY_CACHE_FILE",
    "RDAP_BASE_URL",
    "WHOIS_FALLBACK",
    "RUN_MODE",
    "CRON_SCHEDULE",
    "LOG_LEVEL",
    "API_ENABLED",
    "API_HOST",
    "API_PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Start every test from an empty configuration."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self) -> None:
        """Defaults match the documented values."""
        settings = load_settings()
        assert settings.alert_window.hours == 24
        assert settings.rate_limit_seconds == 1.0
        assert settings.query_timeout_seconds == 15.0
        assert settings.pass_timeout_seconds == 0.0
        assert settings.domain_files == ("domains.txt",)
        assert settings.run_mode == "once"
        assert settings.cron_schedule == "0 15 * * *"
        assert settings.api_enabled is False
        assert settings.api_port == 8080

    def test_repository_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """File settings flow into the repository config."""
        monkeypatch.setenv("DOMAIN_FILES", "cf.txt, aws.txt,,")
        monkeypatch.setenv("EXPIRY_CACHE_FILE", "/var/lib/cache.txt")

        config = Settings().repository_config

        assert config.source_paths == ("cf.txt", "aws.txt")
        assert config.cache_path == "/var/lib/cache.txt"
        assert config.expiring_path == "expiring_domains.txt"

    def test_lookup_config(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Lookup settings flow into the gateway config."""
        monkeypatch.setenv("RDAP_BASE_URL", "https://rdap.example")
        monkeypatch.setenv("WHOIS_FALLBACK", "false")
        monkeypatch.setenv("QUERY_TIMEOUT_SECONDS", "5")

        config = Settings().lookup_config

        assert config.rdap_base_url == "https://rdap.example"
        assert config.whois_fallback is False
        assert config.rdap_timeout == 5.0

    def test_alert_days(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """ALERT_DAYS sets the window; zero means the default."""
        monkeypatch.setenv("ALERT_DAYS", "3")
        assert Settings().alert_window.hours == 72
        monkeypatch.setenv("ALERT_DAYS", "0")
        assert Settings().alert_window.hours == 24

    @pytest.mark.parametrize(
        ("name", "value"),
        [
            ("ALERT_DAYS", "-1"),
            ("RATE_LIMIT_SECONDS", "-0.5"),
            ("QUERY_TIMEOUT_SECONDS", "-1"),
            ("PASS_TIMEOUT_SECONDS", "-1"),
            ("DOMAIN_FILES", " , "),
            ("RUN_MODE", "hourly"),
        ],
    )
    def test_invalid_values(self, monkeypatch: pytest.MonkeyPatch, name: str, value: str) -> None:
        """Invalid settings are rejected with ValueError."""
        monkeypatch.setenv(name, value)
        with pytest.raises(ValueError, match=name):
            load_settings()

    def test_run_mode_ignored_in_api_mode(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """API mode does not need a valid RUN_MODE."""
        monkeypatch.setenv("API_ENABLED", "true")
        monkeypatch.setenv("RUN_MODE", "whatever")
        assert load_settings().api_enabled is True

    def test_non_numeric_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Non-numeric numbers fail with ValueError."""
        monkeypatch.setenv("RATE_LIMIT_SECONDS", "fast")
        with pytest.raises(ValueError):
            load_settings()
