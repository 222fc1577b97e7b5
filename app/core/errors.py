"""
Error taxonomy returned to API clients.
"""
from enum import Enum


class ErrorType(str, Enum):
    """Opaque error tags exposed in the `type` field of error bodies."""
    VALIDATION_ERROR = "validation_error"
    INVALID_KEY = "invalid_key"
    QUOTA_EXCEEDED = "quota_exceeded"
    MODEL_NOT_FOUND = "model_not_found"
    RATE_LIMIT = "rate_limit"
    TIMEOUT = "timeout"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"
    NOT_FOUND = "not_found"
    SERVER_ERROR = "server_error"


STATUS_CODES = {
    ErrorType.VALIDATION_ERROR: 400,
    ErrorType.INVALID_KEY: 401,
    ErrorType.QUOTA_EXCEEDED: 402,
    ErrorType.MODEL_NOT_FOUND: 400,
    ErrorType.RATE_LIMIT: 429,
    ErrorType.TIMEOUT: 408,
    ErrorType.RATE_LIMIT_EXCEEDED: 429,
    ErrorType.NOT_FOUND: 404,
    ErrorType.SERVER_ERROR: 500,
}


class ChatError(Exception):
    """A failure that terminates a request with a `{error, type}` body."""

    def __init__(self, error_type: ErrorType, message: str):
        super().__init__(message)
        self.error_type = error_type
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.error_type]

    def to_dict(self) -> dict:
        return {"error": self.message, "type": self.error_type.value}


class UpstreamTimeoutError(Exception):
    """Raised when the upstream call does not finish before its deadline."""
