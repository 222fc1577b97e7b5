"""
Client for the upstream chat-completion API.
"""
import asyncio
import logging
from typing import Any, Dict

from openai import AsyncOpenAI

from app.core.config import Settings
from app.core.errors import UpstreamTimeoutError

logger = logging.getLogger(__name__)


class CompletionClient:
    """Issues one chat-completion call per request with a hard deadline."""

    def __init__(self, openai_client: AsyncOpenAI, timeout: float = 30.0):
        self.openai_client = openai_client
        self.timeout = timeout

    @classmethod
    def from_settings(cls, settings: Settings) -> "CompletionClient":
        """Build a client from the configured credential, with SDK retries disabled."""
        openai_client = AsyncOpenAI(
            api_key=settings.OPENAI_API_KEY.get_secret_value(),
            base_url=settings.OPENAI_BASE_URL,
            timeout=settings.UPSTREAM_TIMEOUT_SECONDS,
            max_retries=0,
        )
        logger.info("OpenAI client initialized")
        return cls(openai_client, timeout=settings.UPSTREAM_TIMEOUT_SECONDS)

    async def create_completion(self, payload: Dict[str, Any]):
        """Send the payload and return the SDK's ChatCompletion.

        Raises UpstreamTimeoutError if the deadline passes; the in-flight
        call is cancelled. SDK errors propagate unchanged.
        """
        try:
            return await asyncio.wait_for(
                self.openai_client.chat.completions.create(**payload),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(f"Upstream call exceeded {self.timeout:g}s deadline")
            raise UpstreamTimeoutError(f"No response within {self.timeout:g} seconds")

    async def close(self):
        await self.openai_client.close()
