"""Language model boundary."""

from studycast.boundary.llm.language_model import (
    ChatModelLanguageService,
    LanguageModelService,
    create_language_service,
)

__all__ = [
    "ChatModelLanguageService",
    "LanguageModelService",
    "create_language_service",
]
