"""Application services - Stateful helpers composed by use cases."""

from .expiry_cache import ExpiryCacheStore

__all__ = ["ExpiryCacheStore"]
