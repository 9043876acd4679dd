"""
Code explanation prompts for LLM interactions.
"""
from typing import List, Optional

from explain_relay.api.models.explain import ChatMessage

EXPLAIN_SYSTEM_PROMPT = (
    "You are a senior software engineer. "
    "Explain code step-by-step and suggest improvements."
)


def build_explain_messages(code: str, language: Optional[str] = None) -> List[ChatMessage]:
    """
    Build the system + user message pair for a code explanation.

    The code is embedded verbatim inside a fenced block tagged with the
    language hint (empty tag when no hint is given).
    """
    language = language or ""
    subject = f"{language} code" if language else "code"
    user_content = f"Explain this {subject}:\n\n```{language}\n{code}\n```"

    return [
        ChatMessage(role="system", content=EXPLAIN_SYSTEM_PROMPT),
        ChatMessage(role="user", content=user_content),
    ]
