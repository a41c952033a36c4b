"""Domain value objects - Immutable objects defined by their attributes."""

from .alert_window import AlertWindow
from .cache_key import CacheKey, normalize_name
from .check_state import CheckState

__all__ = [
    "AlertWindow",
    "CacheKey",
    "CheckState",
    "normalize_name",
]
