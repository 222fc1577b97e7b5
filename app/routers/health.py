"""
Liveness endpoint.
"""
from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.core.config import Settings
from app.dependencies.clients import get_app_settings
from app.schemas.health import HealthResponse

router = APIRouter()


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a trailing Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_app_settings)):
    return HealthResponse(
        status="OK",
        timestamp=utc_timestamp(),
        environment=settings.ENVIRONMENT,
    )
