"""Tests for the pipe-delimited file repository."""

from __future__ import annotations

from pathlib import Path

import pytest

from domain_expiry.application.exceptions import PersistenceError
from domain_expiry.domain.entities import CacheEntry, DomainRecord, FailureRecord
from domain_expiry.infrastructure.adapters.storage import (
    FileExpiryRepository,
    FileRepositoryConfig,
)


@pytest.fixture
def config(tmp_path: Path) -> FileRepositoryConfig:
    """Repository config pointing into a temporary directory."""
    return FileRepositoryConfig(
        source_paths=(str(tmp_path / "domains.txt"),),
        expiring_path=str(tmp_path / "expiring_domains.txt"),
        failures_path=str(tmp_path / "failed_domains.txt"),
        cache_path=str(tmp_path / "expiry_cache.txt"),
    )


@pytest.fixture
def repo(config: FileRepositoryConfig) -> FileExpiryRepository:
    """Repository under test."""
    return FileExpiryRepository(config)


class TestFileRepositoryConfig:
    """Tests for FileRepositoryConfig."""

    def test_defaults(self) -> None:
        """Default file names match the classic layout."""
        config = FileRepositoryConfig()
        assert config.source_paths == ()
        assert config.expiring_path == "expiring_domains.txt"
        assert config.failures_path == "failed_domains.txt"
        assert config.cache_path == "expiry_cache.txt"

    def test_config_is_frozen(self) -> None:
        """Config should be immutable."""
        with pytest.raises(AttributeError):
            FileRepositoryConfig().cache_path = "x"  # type: ignore[misc]


class TestLoadSources:
    """Tests for reading domain source files."""

    def test_parses_lines(self, repo: FileExpiryRepository, config: FileRepositoryConfig) -> None:
        """Lines are domain|source|expiry with optional trailing fields."""
        path = Path(config.source_paths[0])
        path.write_text(
            "a.com|cloudflare|2030-01-01\n"
            " b.com | route53 \n"
            "\n"
            "|orphan\n"
            "c.com\n",
            encoding="utf-8",
        )

        records = repo.load_sources()

        assert records == [
            DomainRecord("a.com", "cloudflare", "2030-01-01"),
            DomainRecord("b.com", "route53", None),
            DomainRecord("c.com", str(path), None),
        ]

    def test_missing_source_file(self, repo: FileExpiryRepository) -> None:
        """An unreadable source file is a persistence error."""
        with pytest.raises(PersistenceError, match="Cannot read domain file"):
            repo.load_sources()


class TestExpiryCache:
    """Tests for the cache file."""

    def test_missing_cache_is_empty(self, repo: FileExpiryRepository) -> None:
        """No cache file yet means an empty cache."""
        assert repo.load_expiry_cache() == []

    def test_short_lines_skipped(self, repo: FileExpiryRepository, config: FileRepositoryConfig) -> None:
        """Lines with fewer than three fields are ignored."""
        Path(config.cache_path).write_text("a.com|src|2030-01-01\nb.com|src\n\n", encoding="utf-8")

        assert repo.load_expiry_cache() == [CacheEntry("a.com", "src", "2030-01-01")]

    def test_save_omits_incomplete_entries(
        self, repo: FileExpiryRepository, config: FileRepositoryConfig
    ) -> None:
        """Entries with an empty field are not written."""
        repo.save_expiry_cache(
            [
                CacheEntry("a.com", "src", "2030-01-01"),
                CacheEntry("b.com", " ", "2030-01-01"),
                CacheEntry("c.com", "src", ""),
            ]
        )

        assert Path(config.cache_path).read_text(encoding="utf-8") == "a.com|src|2030-01-01\n"

    def test_save_then_load(self, repo: FileExpiryRepository) -> None:
        """Saved entries read back unchanged."""
        entries = [CacheEntry("a.com", "src", "2030-01-01"), CacheEntry("b.com", "src", "2031-02-03")]
        repo.save_expiry_cache(entries)
        assert repo.load_expiry_cache() == entries

    def test_no_temp_file_left(self, repo: FileExpiryRepository, tmp_path: Path) -> None:
        """Atomic replace leaves no temporary sibling behind."""
        repo.save_expiry_cache([CacheEntry("a.com", "src", "2030-01-01")])
        assert not list(tmp_path.glob("*.tmp"))


class TestOutputs:
    """Tests for expiring and failure output files."""

    def test_save_expiring(self, repo: FileExpiryRepository, config: FileRepositoryConfig) -> None:
        """Expiring records are written in order."""
        repo.save_expiring([DomainRecord("b.com", "src", "2030-01-02"), DomainRecord("a.com", "src", "2030-01-01")])

        assert Path(config.expiring_path).read_text(encoding="utf-8") == (
            "b.com|src|2030-01-02\na.com|src|2030-01-01\n"
        )

    def test_save_failures_with_empty_reason(
        self, repo: FileExpiryRepository, config: FileRepositoryConfig
    ) -> None:
        """Failures are written as domain|source| with an empty reason."""
        repo.save_failures([FailureRecord("a.com", "src")])

        assert Path(config.failures_path).read_text(encoding="utf-8") == "a.com|src|\n"

    def test_empty_save_truncates(self, repo: FileExpiryRepository, config: FileRepositoryConfig) -> None:
        """Saving nothing clears the previous run's content."""
        Path(config.expiring_path).write_text("stale.com|src|2030-01-01\n", encoding="utf-8")

        repo.save_expiring([])

        assert Path(config.expiring_path).read_text(encoding="utf-8") == ""

    def test_unwritable_target(self, tmp_path: Path) -> None:
        """Write errors become persistence errors."""
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")
        repo = FileExpiryRepository(FileRepositoryConfig(expiring_path=str(blocker / "out.txt")))

        with pytest.raises(PersistenceError, match="Cannot write"):
            repo.save_expiring([])
