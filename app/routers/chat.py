"""
Chat completion endpoint.
"""
import logging

from fastapi import APIRouter, Depends, Request

from app.core.errors import ChatError, ErrorType
from app.dependencies.clients import get_completion_client
from app.schemas.chat import ChatResponse
from app.services.completion_client import CompletionClient
from app.services.error_translator import translate_completion, translate_upstream_error
from app.services.request_builder import build_completion_payload, summarize_payload
from app.services.validator import validate_chat_request

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")


async def _read_json(request: Request):
    try:
        return await request.json()
    except ValueError:
        # Malformed JSON, bad encoding, or integers too long to parse
        raise ChatError(ErrorType.VALIDATION_ERROR, "Request body must be valid JSON")


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def chat_completion(
    request: Request,
    client: CompletionClient = Depends(get_completion_client),
):
    """Validate the prompt, forward it upstream and return the completion."""
    chat_request = validate_chat_request(await _read_json(request))

    payload = build_completion_payload(chat_request)
    logger.info("Making chat completion request", extra=summarize_payload(payload))

    try:
        completion = await client.create_completion(payload)
    except Exception as e:
        raise translate_upstream_error(e)

    response = translate_completion(completion)
    logger.info("Chat completion succeeded", extra={
        "model": response.model,
        "total_tokens": response.usage.total_tokens if response.usage else None,
    })
    return response
