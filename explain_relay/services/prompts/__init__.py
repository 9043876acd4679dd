from .explain_prompts import (
    EXPLAIN_SYSTEM_PROMPT,
    build_explain_messages,
)

__all__ = [
    "EXPLAIN_SYSTEM_PROMPT",
    "build_explain_messages",
]
