"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, studycast.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from studycast.api.deps.dependencies import ServiceContainer
from studycast.configs import get_settings
from studycast.observability.logger import configure_logging
from studycast.observability.middleware import CorrelationMiddleware, RequestLoggingMiddleware

from .routers import (
    conversations_router,
    documents_router,
    health_router,
    quizzes_router,
    uploads_router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Builds the service container unless one was supplied to create_app(),
    and closes it on shutdown.
    """
    logger = logging.getLogger("uvicorn")

    # Startup
    if getattr(app.state, "services", None) is None:
        logger.info("Building service container...")
        app.state.services = await ServiceContainer.from_settings()
        logger.info("Service container ready")

    yield

    # Shutdown
    await app.state.services.close()
    logger.info("Service container closed")


def create_app(services: ServiceContainer | None = None) -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Args:
        services: Prebuilt service container (tests); built from settings otherwise

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    app = FastAPI(
        title="Studycast API",
        description="Study documents to summaries, narrations, quizzes and tutoring chat",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.services = services

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Add observability middleware
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(uploads_router, prefix="/api/v1")
    app.include_router(documents_router, prefix="/api/v1")
    app.include_router(quizzes_router, prefix="/api/v1")
    app.include_router(conversations_router, prefix="/api/v1")

    return app


if __name__ == "__main__":
    configure_logging(get_settings().log_level)
    uvicorn.run(
        "studycast.api.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8000,
    )
