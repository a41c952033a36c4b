"""Domain service for pulling an expiry date out of registry response text."""

from __future__ import annotations

import logging
import re
from datetime import date, datetime
from typing import ClassVar

logger = logging.getLogger(__name__)

_STRICT_DATE = re.compile(r"\d{4}-\d{2}-\d{2}")

# Label first, then the next run of date-like characters on the same line.
_EXPIRY_PATTERN = re.compile(
    r"\b(expiration date|expiration|expiry|expires|expires on"
    r"|registry expiry date|registry expiration date|paid-till)\b"
    r"[^0-9A-Za-z]*([0-9A-Za-z ,:/\-T.Z+]+)",
    re.IGNORECASE,
)

# "Expiry date:" and "Expires on:" leave the rest of the label in the capture.
_LABEL_TAIL = re.compile(r"^(?:date|on)\b[\s:]*", re.IGNORECASE)

# strptime reads at most microseconds; nanosecond timestamps are trimmed.
_SUBMICRO_FRACTION = re.compile(r"(\.\d{6})\d+")

_SNIPPET_LIMIT = 300


def parse_strict_date(text: str | None) -> date | None:
    """
    Parse a canonical ``YYYY-MM-DD`` string.

    Args:
        text: Candidate date string; surrounding whitespace is ignored.

    Returns:
        The parsed date, or None if the string is not a valid canonical date.
    """
    cleaned = (text or "").strip()
    if not _STRICT_DATE.fullmatch(cleaned):
        return None
    try:
        return date.fromisoformat(cleaned)
    except ValueError:
        return None


class ExpiryTextResolver:
    """
    Extracts a registry expiry date from free-form WHOIS/RDAP output.

    Only dates anchored to an expiry label are considered, so creation and
    update dates elsewhere in the response are never picked up.
    """

    # Tried in order; the first match wins. strptime is looser than fixed-width
    # layouts: %d also takes a one-digit day and %z also takes "+0000" or "Z".
    LAYOUTS: ClassVar[tuple[str, ...]] = (
        "%Y-%m-%d",
        "%Y/%m/%d",
        "%Y.%m.%d",
        "%d-%b-%Y",
        "%b %d, %Y",
        "%B %d %Y",
        "%Y-%m-%dT%H:%M:%S%z",
        "%Y-%m-%dT%H:%M:%S.%f%z",
        "%Y-%m-%dT%H:%M:%SZ",
        "%Y-%m-%d %H:%M:%S",
    )

    def extract(self, raw_text: str | None) -> tuple[str, bool]:
        """
        Find the expiry date in a raw registry response.

        Args:
            raw_text: Response body as returned by the lookup gateway.

        Returns:
            ``(YYYY-MM-DD, True)`` on success, ``("", False)`` otherwise.
        """
        text = normalize_line_breaks(raw_text or "")
        match = _EXPIRY_PATTERN.search(text)
        if match is None:
            return "", False

        parsed = self.parse_token(match.group(2))
        if parsed is None:
            return "", False
        return parsed, True

    def extract_for_domain(self, domain: str, raw_text: str | None) -> tuple[str, bool]:
        """Same as :meth:`extract`, logging the outcome for ``domain``."""
        expiry, found = self.extract(raw_text)
        if found:
            logger.info("[expiry] extracted domain=%s expiry=%s", domain, expiry)
            return expiry, True

        snippet = normalize_line_breaks(raw_text or "")
        if len(snippet) > _SNIPPET_LIMIT:
            snippet = snippet[:_SNIPPET_LIMIT] + " ... (truncated)"
        logger.warning("[expiry] not_found domain=%s whois_snippet=%r", domain, snippet)
        return "", False

    def parse_token(self, token: str) -> str | None:
        """
        Parse a captured date token against the known layouts.

        Returns:
            The date rendered as ``YYYY-MM-DD``, or None if no layout matches.
        """
        cleaned = " ".join(token.strip().strip(":").split())
        cleaned = _LABEL_TAIL.sub("", cleaned, count=1)
        cleaned = _SUBMICRO_FRACTION.sub(r"\1", cleaned, count=1)

        for layout in self.LAYOUTS:
            try:
                parsed = datetime.strptime(cleaned, layout)
            except ValueError:
                continue
            return parsed.date().isoformat()
        return None


def normalize_line_breaks(text: str) -> str:
    """Convert CRLF and lone CR line endings to LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")
