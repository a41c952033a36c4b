"""Infrastructure adapters - Implementations of application ports."""

from .lookup import LookupGatewayConfig, RdapWhoisLookupGateway
from .storage import FileExpiryRepository, FileRepositoryConfig

__all__ = [
    "FileExpiryRepository",
    "FileRepositoryConfig",
    "LookupGatewayConfig",
    "RdapWhoisLookupGateway",
]
