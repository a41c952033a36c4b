"""Port for registry lookups - driven/secondary port."""

from typing import Protocol


class LookupGateway(Protocol):
    """
    Port for querying WHOIS/RDAP registries.

    This is a driven (secondary) port. Implementations must give up promptly
    when the awaiting task is cancelled; they may retry internally.
    """

    async def query(self, domain: str) -> str:
        """
        Look up a domain at its registry.

        Args:
            domain: Registrable domain name.

        Returns:
            Raw response text, or an already normalized ``YYYY-MM-DD`` date.

        Raises:
            LookupFailure: If the registry could not be queried.
        """
        ...
