"""Port for loading the domains to check - driven/secondary port."""

from typing import Protocol

from ...domain.entities import DomainRecord


class DomainSourceLoader(Protocol):
    """Port for reading the batch of domains a pass should verify."""

    def load_sources(self) -> list[DomainRecord]:
        """
        Load every configured domain record, in source order.

        Raises:
            PersistenceError: If a configured source cannot be read.
        """
        ...
