"""Application use cases."""

from .check_expiring_domains import CheckExpiringDomains, CheckResult

__all__ = ["CheckExpiringDomains", "CheckResult"]
