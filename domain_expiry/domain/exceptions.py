"""Domain exceptions."""


class DomainError(Exception):
    """Base exception for domain errors."""


class InvalidAlertWindowError(DomainError):
    """Raised when an alert window is negative."""
