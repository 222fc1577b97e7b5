"""
Maps upstream outcomes to the normalized response envelope.
"""
import asyncio
import logging
from typing import Any, Optional

import openai

from app.core.errors import ChatError, ErrorType, UpstreamTimeoutError
from app.schemas.chat import ChatResponse, Usage

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated"
GENERIC_ERROR_MESSAGE = "An error occurred while processing your request"

ERROR_MESSAGES = {
    ErrorType.QUOTA_EXCEEDED: "API quota exceeded. Please check your billing details.",
    ErrorType.INVALID_KEY: "Invalid API key. Please check your configuration.",
    ErrorType.MODEL_NOT_FOUND: "The specified model is not available.",
    ErrorType.RATE_LIMIT: "Rate limit exceeded. Please try again later.",
    ErrorType.TIMEOUT: "The request timed out. Please try again.",
    ErrorType.SERVER_ERROR: GENERIC_ERROR_MESSAGE,
}

ERROR_CODES = {
    "insufficient_quota": ErrorType.QUOTA_EXCEEDED,
    "invalid_api_key": ErrorType.INVALID_KEY,
    "model_not_found": ErrorType.MODEL_NOT_FOUND,
    "rate_limit_exceeded": ErrorType.RATE_LIMIT,
}


def _error_code(exc: Exception) -> Optional[str]:
    code = getattr(exc, "code", None)
    if code:
        return str(code)
    body = getattr(exc, "body", None)
    if isinstance(body, dict):
        nested = body.get("error", body)
        if isinstance(nested, dict) and nested.get("code"):
            return str(nested["code"])
    return None


def classify_upstream_error(exc: Exception) -> ErrorType:
    """Pick an error type from the upstream error's code, then its class."""
    code = _error_code(exc)
    if code in ERROR_CODES:
        return ERROR_CODES[code]

    if isinstance(exc, (UpstreamTimeoutError, asyncio.TimeoutError, openai.APITimeoutError)):
        return ErrorType.TIMEOUT
    if isinstance(exc, openai.AuthenticationError):
        return ErrorType.INVALID_KEY
    if isinstance(exc, openai.RateLimitError):
        return ErrorType.RATE_LIMIT
    return ErrorType.SERVER_ERROR


def translate_upstream_error(exc: Exception) -> ChatError:
    """Turn an upstream failure into a sanitized ChatError."""
    error_type = classify_upstream_error(exc)
    logger.error(
        "Upstream API error",
        extra={
            "error_type": error_type.value,
            "upstream_error": type(exc).__name__,
            "upstream_code": _error_code(exc),
            "detail": str(exc),
        },
    )
    return ChatError(error_type, ERROR_MESSAGES[error_type])


def _usage(completion: Any) -> Usage:
    usage = getattr(completion, "usage", None)
    if usage is None:
        return Usage()
    return Usage(
        prompt_tokens=getattr(usage, "prompt_tokens", 0) or 0,
        completion_tokens=getattr(usage, "completion_tokens", 0) or 0,
        total_tokens=getattr(usage, "total_tokens", 0) or 0,
    )


def translate_completion(completion: Any) -> ChatResponse:
    """Extract the first choice's text, usage and resolved model."""
    content = None
    choices = getattr(completion, "choices", None)
    if choices:
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)

    return ChatResponse(
        success=True,
        content=content or NO_RESPONSE_TEXT,
        usage=_usage(completion),
        model=getattr(completion, "model", None),
    )
