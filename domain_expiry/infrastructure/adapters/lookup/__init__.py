"""Registry lookup adapters."""

from .gateway import LookupGatewayConfig, RdapWhoisLookupGateway
from .rdap_client import RdapClient, RdapClientConfig
from .whois_client import WhoisClient

__all__ = [
    "LookupGatewayConfig",
    "RdapClient",
    "RdapClientConfig",
    "RdapWhoisLookupGateway",
    "WhoisClient",
]
