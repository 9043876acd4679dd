"""
Chat-completions client for the upstream provider.

Wraps the OpenAI SDK pointed at an OpenAI-compatible base URL. Exactly one
attempt is made per call; SDK retries are disabled.
"""
import logging
from typing import Any, List, Optional, Sequence

import openai
from openai import AsyncOpenAI

from explain_relay.api.models.explain import ChatMessage
from explain_relay.config.settings import Settings
from explain_relay.exceptions import EmptyCompletionError, UpstreamError

logger = logging.getLogger(__name__)


class CompletionClient:
    """Sends chat message sequences to the provider and returns the reply text."""

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        """
        Initialize the completion client.

        Args:
            settings: Application settings with provider URL, key and model options
            client: Pre-built OpenAI-compatible async client; built from settings when omitted
        """
        self.settings = settings
        self.client = client or AsyncOpenAI(
            base_url=settings.llm_base_url,
            api_key=settings.api_key,
            timeout=settings.llm_timeout_seconds,
            max_retries=0,
        )

    def _build_payload(self, messages: Sequence[ChatMessage]) -> dict:
        payload = {
            "model": self.settings.llm_model,
            "messages": [message.model_dump() for message in messages],
            "temperature": self.settings.llm_temperature,
        }
        if self.settings.llm_max_tokens:
            payload["max_tokens"] = self.settings.llm_max_tokens
        return payload

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        """
        Run a single chat completion.

        Args:
            messages: Ordered message sequence to send

        Returns:
            Content of the first choice's message

        Raises:
            UpstreamError: On network, timeout or non-2xx failures
            EmptyCompletionError: If the response carries no usable content
        """
        try:
            response = await self.client.chat.completions.create(
                **self._build_payload(messages)
            )
        except openai.APIError as e:
            raise UpstreamError(details=e.message) from e

        choices: List[Any] = getattr(response, "choices", None) or []
        if not choices:
            raise EmptyCompletionError()

        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
        if not content:
            raise EmptyCompletionError()

        return content

    async def aclose(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self.client.close()
