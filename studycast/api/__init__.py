"""
API routes module.

FastAPI application factory and routers for all HTTP endpoints.
"""

from studycast.api.main import create_app

__all__ = ["create_app"]
