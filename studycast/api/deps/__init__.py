"""API-specific dependencies."""

from .dependencies import (
    ServiceContainer,
    get_conversation_engine,
    get_coordinator,
    get_library_service,
    get_quiz_engine,
    get_services,
)

__all__ = [
    "ServiceContainer",
    "get_conversation_engine",
    "get_coordinator",
    "get_library_service",
    "get_quiz_engine",
    "get_services",
]
