"""File storage adapter."""

from .file_repository import FileExpiryRepository, FileRepositoryConfig

__all__ = ["FileExpiryRepository", "FileRepositoryConfig"]
