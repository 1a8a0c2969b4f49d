"""Service orchestrators."""

from .library_service import LibraryService

__all__ = ["LibraryService"]
