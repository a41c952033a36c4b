"""Tests for the composition root."""

from __future__ import annotations

import asyncio
from pathlib import Path

import pytest

from domain_expiry.application.use_cases import CheckExpiringDomains
from domain_expiry.infrastructure.config import Settings
from domain_expiry.main import Application, ApplicationContainer, async_main


class StubContainer(ApplicationContainer):
    """Container wiring a canned gateway into the real file repository."""

    def __init__(self, settings: Settings, gateway) -> None:
        super().__init__(settings)
        self._gateway = gateway

    def create_lookup_gateway(self):
        return self._gateway


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings writing into a temporary directory."""
    (tmp_path / "domains.txt").write_text(
        "soon.com|cloudflare\nfar.com|cloudflare\nfixed.com|route53|2099-01-01\n",
        encoding="utf-8",
    )
    return Settings(
        alert_days=1,
        rate_limit_seconds=0,
        query_timeout_seconds=1.0,
        pass_timeout_seconds=0,
        domain_files=(str(tmp_path / "domains.txt"),),
        expiring_file=str(tmp_path / "expiring_domains.txt"),
        failed_file=str(tmp_path / "failed_domains.txt"),
        expiry_cache_file=str(tmp_path / "expiry_cache.txt"),
        run_mode="once",
        api_enabled=False,
    )


class TestApplicationContainer:
    """Tests for ApplicationContainer."""

    def test_wires_use_case(self, settings: Settings) -> None:
        """The container builds a fully configured use case."""
        use_case = ApplicationContainer(settings).create_check_use_case()
        assert isinstance(use_case, CheckExpiringDomains)
        assert use_case.alert_window.hours == 24


class TestApplication:
    """Tests for Application run modes."""

    def test_run_once_writes_files(self, settings: Settings, gateway, tmp_path: Path) -> None:
        """A single run reads sources, checks them and writes every output file."""
        gateway.responses = {"soon.com": "Registry Expiry Date: 2000-01-01T00:00:00Z", "far.com": "garbage"}
        app = Application(settings, StubContainer(settings, gateway))

        result = asyncio.run(app.run_once())

        assert result.success
        assert gateway.calls == ["soon.com", "far.com"]
        expiring = (tmp_path / "expiring_domains.txt").read_text(encoding="utf-8").splitlines()
        assert expiring == ["soon.com|cloudflare|2000-01-01"]
        failed = (tmp_path / "failed_domains.txt").read_text(encoding="utf-8").splitlines()
        assert failed == ["far.com|cloudflare|"]
        cache = (tmp_path / "expiry_cache.txt").read_text(encoding="utf-8").splitlines()
        assert cache == ["soon.com|cloudflare|2000-01-01", "fixed.com|route53|2099-01-01"]

    def test_run_once_exit_code(self, settings: Settings, gateway) -> None:
        """Once mode exits 0 after a successful pass."""
        app = Application(settings, StubContainer(settings, gateway))
        assert asyncio.run(app.run()) == 0

    def test_invalid_run_mode(self, settings: Settings, gateway) -> None:
        """An unknown run mode exits 1."""
        settings.run_mode = "hourly"
        app = Application(settings, StubContainer(settings, gateway))
        assert asyncio.run(app.run()) == 1


def test_configuration_error_exit_code(monkeypatch: pytest.MonkeyPatch) -> None:
    """Invalid configuration exits with code 1."""
    monkeypatch.setenv("ALERT_DAYS", "-5")
    monkeypatch.delenv("API_ENABLED", raising=False)
    assert asyncio.run(async_main()) == 1
