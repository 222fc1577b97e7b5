"""
Validation of incoming chat request bodies.
"""
import logging
from typing import Any

from pydantic import ValidationError

from app.core.errors import ChatError, ErrorType
from app.schemas.chat import (
    ALLOWED_MODELS,
    MAX_SYSTEM_PROMPT_LENGTH,
    MAX_USER_PROMPT_LENGTH,
    ChatRequest,
)

logger = logging.getLogger(__name__)

USER_PROMPT_REQUIRED = "User prompt is required"

# Client-facing message per body field
FIELD_MESSAGES = {
    "userPrompt": f"User prompt must be a string of at most {MAX_USER_PROMPT_LENGTH} characters",
    "systemPrompt": f"System prompt must be a string of at most {MAX_SYSTEM_PROMPT_LENGTH} characters",
    "model": f"Model must be one of: {', '.join(ALLOWED_MODELS)}",
    "temperature": "Temperature must be a number between 0 and 2",
    "maxTokens": "Max tokens must be an integer between 1 and 4000",
    "presencePenalty": "Presence penalty must be a number between 0 and 2",
    "frequencyPenalty": "Frequency penalty must be a number between 0 and 2",
    "stopSequence": "Stop sequence must be a string",
}


def _field_alias(name) -> str:
    field = ChatRequest.model_fields.get(name)
    if field is not None and field.alias:
        return field.alias
    return name


def error_message(error: dict) -> str:
    """Turn the first pydantic error into a client-facing message."""
    if not error["loc"]:
        return "Request body must be a JSON object"
    field = _field_alias(error["loc"][0])
    if field == "userPrompt" and error["type"] in ("missing", "value_error"):
        return USER_PROMPT_REQUIRED
    return FIELD_MESSAGES.get(field, "Invalid request")


def validate_chat_request(raw: Any) -> ChatRequest:
    """Check a decoded request body and return a ChatRequest.

    Raises a ChatError of type ``validation_error`` describing the first
    rule that failed. Out-of-range values are rejected, never clamped.
    """
    if raw is None:
        raise ChatError(ErrorType.VALIDATION_ERROR, "Request body must be a JSON object")
    try:
        request = ChatRequest.model_validate(raw)
    except ValidationError as e:
        raise ChatError(ErrorType.VALIDATION_ERROR, error_message(e.errors()[0]))
    logger.debug("Chat request passed validation")
    return request
