"""
Request-scoped dependencies.
"""
from fastapi import Request

from app.core.config import Settings
from app.services.completion_client import CompletionClient


def get_completion_client(request: Request) -> CompletionClient:
    """FastAPI dependency for the shared upstream client."""
    return request.app.state.completion_client


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency for the settings the app was built with."""
    return request.app.state.settings

# Re-export the dependencies
__all__ = ['get_completion_client', 'get_app_settings']
