"""
Builds the upstream chat-completion payload from a validated request.
"""
from typing import Any, Dict, List, Optional

from app.schemas.chat import DEFAULT_MODEL, ChatRequest

DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1000
DEFAULT_PENALTY = 0.0

MAX_STOP_SEQUENCES = 4
MAX_STOP_SEQUENCE_LENGTH = 100


def clamp(value, low, high):
    """Restrict value to the closed range [low, high]."""
    return max(low, min(high, value))


def parse_stop_sequences(text: Optional[str]) -> List[str]:
    """Split comma separated stop sequences, keeping at most the first four usable ones."""
    if not text:
        return []
    stops = [part.strip() for part in text.split(",")]
    stops = [s for s in stops if s and len(s) <= MAX_STOP_SEQUENCE_LENGTH]
    return stops[:MAX_STOP_SEQUENCES]


def _or_default(value, default):
    return default if value is None else value


def build_messages(request: ChatRequest) -> List[Dict[str, str]]:
    messages = []
    if request.system_prompt and request.system_prompt.strip():
        messages.append({"role": "system", "content": request.system_prompt.strip()})
    messages.append({"role": "user", "content": request.user_prompt.strip()})
    return messages


def build_completion_payload(request: ChatRequest) -> Dict[str, Any]:
    """Assemble keyword arguments for ``chat.completions.create``.

    Numeric parameters are clamped again here so nothing out of range is
    forwarded even when validation was skipped.
    """
    payload: Dict[str, Any] = {
        "model": request.model or DEFAULT_MODEL,
        "messages": build_messages(request),
        "temperature": clamp(float(_or_default(request.temperature, DEFAULT_TEMPERATURE)), 0.0, 2.0),
        "max_tokens": clamp(int(_or_default(request.max_tokens, DEFAULT_MAX_TOKENS)), 1, 4000),
        "presence_penalty": clamp(float(_or_default(request.presence_penalty, DEFAULT_PENALTY)), 0.0, 2.0),
        "frequency_penalty": clamp(float(_or_default(request.frequency_penalty, DEFAULT_PENALTY)), 0.0, 2.0),
    }

    stop = parse_stop_sequences(request.stop_sequence)
    if stop:
        payload["stop"] = stop
    return payload


def summarize_payload(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Loggable view of a payload without any prompt text."""
    return {
        "model": payload["model"],
        "temperature": payload["temperature"],
        "max_tokens": payload["max_tokens"],
        "presence_penalty": payload["presence_penalty"],
        "frequency_penalty": payload["frequency_penalty"],
        "stop": payload.get("stop"),
        "messages_count": len(payload["messages"]),
    }
