"""
Chat request and response schemas.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional

DEFAULT_MODEL = "gpt-3.5-turbo"
ALLOWED_MODELS = ("gpt-3.5-turbo", "gpt-4", "gpt-4-turbo-preview")
ModelName = Literal["gpt-3.5-turbo", "gpt-4", "gpt-4-turbo-preview"]

MAX_USER_PROMPT_LENGTH = 8000
MAX_SYSTEM_PROMPT_LENGTH = 4000

# Floats cannot hold integers much larger than this
MAX_NUMERIC_MAGNITUDE = 10 ** 15


class ChatRequest(BaseModel):
    """Chat completion request as sent by the playground UI.

    Use ``ChatRequest.model_construct`` to build one without validation.
    """
    model_config = ConfigDict(populate_by_name=True)

    model: Optional[ModelName] = None
    system_prompt: Optional[str] = Field(
        default=None, alias="systemPrompt", strict=True, max_length=MAX_SYSTEM_PROMPT_LENGTH
    )
    user_prompt: str = Field(alias="userPrompt", strict=True, max_length=MAX_USER_PROMPT_LENGTH)
    temperature: Optional[float] = Field(default=None, ge=0, le=2, strict=True, allow_inf_nan=False)
    max_tokens: Optional[int] = Field(default=None, alias="maxTokens", ge=1, le=4000, strict=True)
    presence_penalty: Optional[float] = Field(
        default=None, alias="presencePenalty", ge=0, le=2, strict=True, allow_inf_nan=False
    )
    frequency_penalty: Optional[float] = Field(
        default=None, alias="frequencyPenalty", ge=0, le=2, strict=True, allow_inf_nan=False
    )
    stop_sequence: Optional[str] = Field(default=None, alias="stopSequence", strict=True)

    @field_validator("user_prompt", mode="before")
    @classmethod
    def require_user_prompt(cls, value):
        if value is None or (isinstance(value, str) and not value.strip()):
            raise ValueError("User prompt is required")
        return value

    @field_validator("temperature", "max_tokens", "presence_penalty", "frequency_penalty", mode="before")
    @classmethod
    def reject_oversized_integers(cls, value):
        if isinstance(value, int) and not isinstance(value, bool) and abs(value) > MAX_NUMERIC_MAGNITUDE:
            raise ValueError("number out of range")
        return value


class Usage(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class ChatResponse(BaseModel):
    success: bool
    content: Optional[str] = None
    usage: Optional[Usage] = None
    model: Optional[str] = None
