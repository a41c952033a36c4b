"""Application ports - Interfaces for external adapters."""

from .domain_source import DomainSourceLoader
from .expiry_repository import ExpiryRepository
from .lookup_gateway import LookupGateway

__all__ = [
    "DomainSourceLoader",
    "ExpiryRepository",
    "LookupGateway",
]
