"""Application layer exceptions."""


class ApplicationError(Exception):
    """Base exception for application errors."""


class ConfigurationError(ApplicationError):
    """Raised when a required collaborator or setting is missing."""


class LookupFailure(ApplicationError):
    """Raised when a registry lookup fails or times out."""


class ExtractionFailure(ApplicationError):
    """Raised when no confident expiry date can be read from a response."""


class CancellationError(ApplicationError):
    """Raised when a check pass is cancelled or runs past its deadline."""


class PersistenceError(ApplicationError):
    """Raised when check results or the expiry cache cannot be saved."""
