"""Domain entities - Objects with identity and lifecycle."""

from .cache_entry import CacheEntry
from .domain_record import DomainRecord
from .expiry_report import ExpiryReport
from .failure_record import FailureRecord

__all__ = [
    "CacheEntry",
    "DomainRecord",
    "ExpiryReport",
    "FailureRecord",
]
