"""
Error handling middleware.
Catches anything a handler failed to convert into a response.
"""
import json
import logging
from typing import Callable, Optional

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


class ErrorHandlingMiddleware(BaseHTTPMiddleware):
    """Middleware for centralized handling and logging of unhandled errors."""

    def _get_request_body(self, request: Request) -> Optional[dict]:
        """
        Request body for error logging, if an outer middleware cached it.
        """
        body_bytes = getattr(request.state, "body", None)
        if not body_bytes:
            return None

        try:
            body = json.loads(body_bytes.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            return None

        if isinstance(body, dict) and isinstance(body.get("code"), str):
            body = {**body, "code": f"<{len(body['code'])} chars>"}
        return body

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)

        except Exception as e:
            body = self._get_request_body(request)

            logger.error(
                "Unhandled error",
                extra={
                    "path": request.url.path,
                    "method": request.method,
                    "error": str(e),
                    "error_type": type(e).__name__,
                    "request_body": body,
                },
                exc_info=True,
            )

            # Internal details stay in the server log
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={"error": "Internal server error"},
            )
