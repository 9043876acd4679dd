"""
Code explanation endpoints.

Relays a code snippet to the completion provider and returns the
generated explanation.
"""
from fastapi import APIRouter, Depends, status

from explain_relay.api.dependencies import get_explain_controller
from explain_relay.api.models import ErrorResponse, ExplainRequest, ExplainResponse
from explain_relay.controllers.explain_controller import ExplainController

router = APIRouter()


@router.post(
    "/explain-code",
    status_code=status.HTTP_200_OK,
    response_model=ExplainResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Code is missing"},
        500: {"model": ErrorResponse, "description": "Upstream or internal failure"},
    },
)
async def explain_code(
    request: ExplainRequest,
    controller: ExplainController = Depends(get_explain_controller),
) -> ExplainResponse:
    """
    Explain a code snippet.

    Builds a senior-engineer prompt around the code and optional language
    hint, makes a single chat-completion call and returns the first
    choice's text. The language is echoed back, defaulting to "unknown".
    """
    return await controller.explain_code(request)
