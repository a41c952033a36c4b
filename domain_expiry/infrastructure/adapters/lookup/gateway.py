"""Lookup gateway combining RDAP and WHOIS."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ....application.exceptions import LookupFailure
from ....domain.services import ExpiryTextResolver, normalize_line_breaks
from .rdap_client import RdapClient, RdapClientConfig
from .whois_client import WhoisClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LookupGatewayConfig:
    """Configuration for the RDAP/WHOIS lookup gateway."""

    rdap_base_url: str = "https://rdap.org"
    rdap_timeout: float = 10.0
    whois_fallback: bool = True


class RdapWhoisLookupGateway:
    """
    LookupGateway implementation: RDAP first, WHOIS as fallback.

    A usable RDAP expiration event is returned already normalized to
    ``YYYY-MM-DD``; otherwise the raw WHOIS text is returned for extraction.
    """

    def __init__(
        self,
        config: LookupGatewayConfig,
        *,
        rdap_client: RdapClient | None = None,
        whois_client: WhoisClient | None = None,
    ) -> None:
        """Initialize the gateway."""
        self._config = config
        self._rdap = rdap_client or RdapClient(
            RdapClientConfig(base_url=config.rdap_base_url, timeout=config.rdap_timeout)
        )
        self._whois = whois_client or WhoisClient()
        self._resolver = ExpiryTextResolver()

    async def query(self, domain: str) -> str:
        """
        Look up the expiry information of ``domain``.

        Raises:
            LookupFailure: If neither RDAP nor WHOIS produced anything usable.
        """
        expiry = await self._query_rdap(domain)
        if expiry:
            return expiry

        if not self._config.whois_fallback:
            msg = "RDAP returned no expiration and WHOIS fallback is disabled"
            raise LookupFailure(msg)

        try:
            text = await self._whois.get_raw(domain)
        except Exception as e:
            logger.warning("[whois] query_failed domain=%s err=%s", domain, e)
            msg = f"WHOIS query failed: {e}"
            raise LookupFailure(msg) from e

        if not text.strip():
            logger.warning("[whois] empty_response domain=%s", domain)
            raise LookupFailure("WHOIS returned an empty response")

        logger.debug("[whois] response domain=%s bytes=%d", domain, len(text))
        return normalize_line_breaks(text)

    async def _query_rdap(self, domain: str) -> str | None:
        """Return the normalized RDAP expiration date, or None."""
        try:
            raw = await self._rdap.get_expiration(domain)
        except Exception as e:
            logger.info("[rdap] query_failed domain=%s err=%s", domain, e)
            return None

        if raw is None:
            logger.info("[rdap] no_expiration domain=%s", domain)
            return None

        parsed = self._resolver.parse_token(raw)
        if parsed is None:
            logger.info("[rdap] parse_failed domain=%s raw=%s", domain, raw)
            return None

        logger.info("[rdap] success domain=%s expiry=%s raw=%s", domain, parsed, raw)
        return parsed
