"""
Controller for code explanation.

Validates the request, builds the prompt, relays it to the completion
provider and shapes the response.
"""
import logging

from explain_relay.api.models.explain import ExplainRequest, ExplainResponse
from explain_relay.exceptions import RelayError, ValidationError
from explain_relay.services.completion_client import CompletionClient
from explain_relay.services.prompts import build_explain_messages

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "unknown"


class ExplainController:
    """Controller for code explanation operations."""

    def __init__(self, completion_client: CompletionClient):
        self.completion_client = completion_client

    def _validate_request(self, request: ExplainRequest) -> None:
        """
        Validate an explanation request.

        Raises:
            ValidationError: If code is missing, empty or whitespace only
        """
        if not request.code or not request.code.strip():
            raise ValidationError("Code is required")

    async def explain_code(self, request: ExplainRequest) -> ExplainResponse:
        """
        Explain a code snippet.

        Args:
            request: ExplainRequest with code and optional language

        Returns:
            ExplainResponse with the explanation and echoed language

        Raises:
            ValidationError: If the request has no code
            UpstreamError: If the provider call fails
            EmptyCompletionError: If the provider returns no content
        """
        self._validate_request(request)

        messages = build_explain_messages(request.code, request.language)

        try:
            explanation = await self.completion_client.complete(messages)
        except RelayError as e:
            logger.error(
                f"Code Explain API Error: {e.message}",
                extra={"endpoint": "explain-code", "details": e.details},
                exc_info=True,
            )
            raise

        return ExplainResponse(
            explanation=explanation,
            language=request.language or DEFAULT_LANGUAGE,
        )
