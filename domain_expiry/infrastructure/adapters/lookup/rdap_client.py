"""Async RDAP client."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class RdapClientConfig:
    """Configuration for the RDAP client."""

    base_url: str = "https://rdap.org"
    timeout: float = 10.0


class RdapClient:
    """
    Async client for RDAP domain queries.

    Queries go to an RDAP redirector which forwards to the authoritative
    registry server for the domain's TLD.
    """

    HEADERS: ClassVar[dict[str, str]] = {"Accept": "application/rdap+json, application/json"}

    def __init__(
        self,
        config: RdapClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the RDAP client."""
        self._config = config
        self._transport = transport

    async def get_domain(self, domain: str) -> dict[str, Any] | None:
        """
        Fetch the RDAP record of a domain.

        Returns:
            The decoded RDAP object, or None if the registry does not know it.

        Raises:
            httpx.HTTPError: On transport errors and unexpected statuses.
        """
        url = f"{self._config.base_url.rstrip('/')}/domain/{domain}"

        async with httpx.AsyncClient(
            timeout=self._config.timeout,
            follow_redirects=True,
            transport=self._transport,
        ) as client:
            response = await client.get(url, headers=self.HEADERS)
            if response.status_code == httpx.codes.NOT_FOUND:
                return None
            response.raise_for_status()
            return response.json()

    async def get_expiration(self, domain: str) -> str | None:
        """
        Return the raw date of the domain's ``expiration`` event.

        Returns:
            Event date as sent by the registry, or None if there is none.
        """
        data = await self.get_domain(domain)
        if not data:
            return None

        for event in data.get("events") or []:
            if not isinstance(event, dict):
                continue
            if str(event.get("eventAction", "")).lower() == "expiration":
                return str(event.get("eventDate") or "") or None
        return None
