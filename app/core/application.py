"""
Core FastAPI application instance and configuration.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import Settings, get_settings
from app.core.errors import ChatError, ErrorType, STATUS_CODES
from app.core.middleware import LoggingMiddleware
from app.middleware.rate_limit import RateLimitMiddleware
from app.routers import chat, health
from app.services.completion_client import CompletionClient

logger = logging.getLogger(__name__)


def _error_response(error_type: ErrorType, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=STATUS_CODES[error_type],
        content={"error": message, "type": error_type.value},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    app.state.completion_client = CompletionClient.from_settings(settings)
    logger.info("Server starting", extra={
        "environment": settings.ENVIRONMENT,
        "api_key_configured": bool(settings.OPENAI_API_KEY.get_secret_value()),
    })
    try:
        yield
    finally:
        await app.state.completion_client.close()


def create_application(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure FastAPI application."""
    settings = settings or get_settings()

    app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)
    app.state.settings = settings

    # Add middleware, outermost last
    app.add_middleware(
        RateLimitMiddleware,
        max_requests=settings.rate_limit_max_requests,
        window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )
    app.add_middleware(LoggingMiddleware)

    # Add exception handlers
    @app.exception_handler(ChatError)
    async def chat_error_handler(request: Request, exc: ChatError):
        if exc.error_type == ErrorType.VALIDATION_ERROR:
            logger.info("Validation failed", extra={"path": request.url.path, "reason": exc.message})
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(ErrorType.VALIDATION_ERROR, "Invalid request")

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Unknown paths and unsupported methods on known paths are both "not found"
        if exc.status_code in (404, 405):
            return _error_response(ErrorType.NOT_FOUND, "Endpoint not found")
        logger.error("HTTP Exception", extra={
            "status_code": exc.status_code,
            "detail": exc.detail,
            "path": request.url.path,
        })
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": str(exc.detail), "type": ErrorType.SERVER_ERROR.value},
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled Exception", extra={
            "error": str(exc),
            "type": type(exc).__name__,
            "path": request.url.path,
        }, exc_info=True)
        return _error_response(ErrorType.SERVER_ERROR, "Internal server error")

    # Include routers
    app.include_router(health.router)
    app.include_router(chat.router)

    return app
