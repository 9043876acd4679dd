from .error import ErrorResponse
from .explain import ChatMessage, ExplainRequest, ExplainResponse
from .health import HealthStatus

__all__ = [
    "ErrorResponse",
    "ChatMessage",
    "ExplainRequest",
    "ExplainResponse",
    "HealthStatus",
]
