"""API routers."""

from .conversations import router as conversations_router
from .documents import router as documents_router
from .health import router as health_router
from .quizzes import router as quizzes_router
from .uploads import router as uploads_router

__all__ = [
    "conversations_router",
    "documents_router",
    "health_router",
    "quizzes_router",
    "uploads_router",
]
