"""WHOIS client backed by python-whois."""

from __future__ import annotations

import asyncio
import logging

import whois

logger = logging.getLogger(__name__)


class WhoisClient:
    """
    Fetches raw WHOIS text for a domain.

    python-whois is blocking, so each query runs in a worker thread.
    """

    async def get_raw(self, domain: str) -> str:
        """
        Query WHOIS for ``domain``.

        Returns:
            The raw WHOIS response text, possibly empty.
        """
        entry = await asyncio.to_thread(whois.whois, domain)
        text = getattr(entry, "text", "") or ""
        logger.debug("[whois] raw_response domain=%s bytes=%d", domain, len(text))
        return text
