"""
Core business logic module.

Contains the exception hierarchy and the orchestration engines: upload
ingestion, quiz sessions and conversations. Engines are imported from their
subpackages so boundary modules can depend on core.exceptions alone.
"""

from studycast.core.exceptions import (
    ErrorKind,
    NotFoundError,
    StudycastError,
    ValidationError,
)

__all__ = [
    "ErrorKind",
    "NotFoundError",
    "StudycastError",
    "ValidationError",
]
