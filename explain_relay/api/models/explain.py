"""
Request and response models for the code explanation endpoint.
"""
from typing import Literal, Optional

from pydantic import BaseModel, Field


class ExplainRequest(BaseModel):
    """Payload for code explanation.

    - code: the snippet to explain; presence is checked by the controller so
      that a missing field maps to a 400 instead of a schema error
    - language: optional free-form tag used only in the prompt text
    """
    code: Optional[str] = Field(
        None,
        description="Code snippet to explain",
        examples=["print(1)"],
    )
    language: Optional[str] = Field(
        None,
        description="Language hint, e.g. python",
        examples=["python"],
    )


class ChatMessage(BaseModel):
    """A single chat-completions message."""
    role: Literal["system", "user"]
    content: str


class ExplainResponse(BaseModel):
    """Response model for code explanation."""
    explanation: str = Field(..., description="Model-generated explanation text")
    language: str = Field(..., description="Echoed language tag, 'unknown' when omitted")
