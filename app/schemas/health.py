"""
Health check response schema.
"""
from pydantic import BaseModel


class HealthResponse(BaseModel):
    """Response for /health."""
    status: str
    timestamp: str
    environment: str
