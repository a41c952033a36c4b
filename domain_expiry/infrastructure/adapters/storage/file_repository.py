"""Pipe-delimited text file repository."""

from __future__ import annotations

import contextlib
import logging
import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from ....application.exceptions import PersistenceError
from ....domain.entities import CacheEntry, DomainRecord, FailureRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FileRepositoryConfig:
    """Locations of the files backing the repository."""

    source_paths: tuple[str, ...] = field(default_factory=tuple)
    expiring_path: str = "expiring_domains.txt"
    failures_path: str = "failed_domains.txt"
    cache_path: str = "expiry_cache.txt"


class FileExpiryRepository:
    """
    Repository storing every record as one ``a|b|c`` line.

    Implements the ExpiryRepository and DomainSourceLoader ports. Writes replace
    the whole file through a temporary sibling so readers never observe a
    half-written file.
    """

    def __init__(self, config: FileRepositoryConfig) -> None:
        """Initialize the repository with its file locations."""
        self._config = config

    def load_sources(self) -> list[DomainRecord]:
        """
        Read ``domain[|source[|expiry]]`` lines from every source file.

        Blank lines and lines with an empty domain are skipped. The source
        falls back to the file path when the second column is missing.

        Raises:
            PersistenceError: If a source file cannot be read.
        """
        records: list[DomainRecord] = []

        for path in self._config.source_paths:
            try:
                lines = Path(path).read_text(encoding="utf-8").splitlines()
            except OSError as e:
                msg = f"Cannot read domain file {path}: {e}"
                raise PersistenceError(msg) from e

            for line in lines:
                parts = [p.strip() for p in line.strip().split("|")]
                if not parts[0]:
                    continue
                source = parts[1] if len(parts) >= 2 and parts[1] else path.strip()
                expiry = parts[2] if len(parts) >= 3 else ""
                records.append(DomainRecord(domain=parts[0], source=source, expiry=expiry or None))

        logger.info(
            "Loaded %d domain records from %d files",
            len(records),
            len(self._config.source_paths),
        )
        return records

    def load_expiry_cache(self) -> list[CacheEntry]:
        """
        Read ``domain|source|expiry`` cache lines.

        Returns:
            Parsed entries; an absent cache file yields an empty list. Lines
            with fewer than three fields are skipped.

        Raises:
            PersistenceError: If an existing cache file cannot be read.
        """
        path = Path(self._config.cache_path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            logger.info("No expiry cache at %s yet", path)
            return []
        except OSError as e:
            msg = f"Cannot read expiry cache {path}: {e}"
            raise PersistenceError(msg) from e

        entries: list[CacheEntry] = []
        for line in text.splitlines():
            parts = line.strip().split("|")
            if len(parts) < 3:
                continue
            entries.append(
                CacheEntry(
                    domain=parts[0].strip(),
                    source=parts[1].strip(),
                    expiry=parts[2].strip(),
                )
            )
        return entries

    def save_expiry_cache(self, entries: Sequence[CacheEntry]) -> None:
        """Overwrite the cache file, omitting entries with an empty field."""
        rows = (
            (e.domain, e.source, e.expiry)
            for e in entries
            if e.domain.strip() and e.source.strip() and e.expiry.strip()
        )
        self._replace(self._config.cache_path, rows)

    def save_expiring(self, records: Sequence[DomainRecord]) -> None:
        """Overwrite the expiring file with ``domain|source|expiry`` lines."""
        self._replace(
            self._config.expiring_path,
            ((r.domain, r.source, r.expiry or "") for r in records),
        )

    def save_failures(self, records: Sequence[FailureRecord]) -> None:
        """Overwrite the failure file with ``domain|source|reason`` lines."""
        self._replace(
            self._config.failures_path,
            ((r.domain, r.source, r.reason) for r in records),
        )

    @staticmethod
    def _replace(target: str, rows: Iterable[tuple[str, str, str]]) -> None:
        """Atomically replace ``target`` with one trimmed line per row."""
        path = Path(target)
        tmp = path.with_name(path.name + ".tmp")
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tmp.open("w", encoding="utf-8") as fh:
                for row in rows:
                    fh.write("|".join(value.strip() for value in row) + "\n")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            msg = f"Cannot write {path}: {e}"
            raise PersistenceError(msg) from e
