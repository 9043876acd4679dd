"""
Request limiting middleware.
Per-client rate limiting and request body size limits.
"""
import logging
from typing import Callable

from fastapi import HTTPException, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from explain_relay.utils.client_ip import get_client_ip
from explain_relay.utils.rate_limiter import FixedWindowRateLimiter, seconds_header

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests from this IP, please try again later."
TOO_LARGE_MESSAGE = "Request entity too large"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Rejects clients that exceed their fixed-window request budget."""

    def __init__(self, app, limiter: FixedWindowRateLimiter, trust_proxy_headers: bool = False):
        super().__init__(app)
        self.limiter = limiter
        self.trust_proxy_headers = trust_proxy_headers

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client_ip = get_client_ip(request, self.trust_proxy_headers)
        result = self.limiter.hit(client_ip)

        headers = {
            "RateLimit-Limit": str(result.limit),
            "RateLimit-Remaining": str(result.remaining),
            "RateLimit-Reset": seconds_header(result.reset_after),
        }

        if not result.allowed:
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.url.path}")
            headers["Retry-After"] = seconds_header(result.reset_after)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={"error": RATE_LIMIT_MESSAGE},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response


class BodySizeLimitMiddleware:
    """
    Rejects request bodies larger than ``max_body_bytes`` with a 413.

    A declared ``Content-Length`` is checked up front; bodies without one
    (chunked uploads) are counted as they are received.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            if not content_length.isdigit():
                response = JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"error": "Invalid Content-Length header"},
                )
                await response(scope, receive, send)
                return
            if int(content_length) > self.max_body_bytes:
                await self._too_large()(scope, receive, send)
                return

        received = 0
        response_started = False

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_bytes:
                    # Re-raised by FastAPI's body parsing and rendered by the HTTP error handler
                    raise HTTPException(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        detail=TOO_LARGE_MESSAGE,
                    )
            return message

        async def tracking_send(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await self.app(scope, limited_receive, tracking_send)
        except StarletteHTTPException as e:
            if e.status_code != status.HTTP_413_REQUEST_ENTITY_TOO_LARGE or response_started:
                raise
            logger.warning(f"Request body over {self.max_body_bytes} bytes on {scope.get('path')}")
            await self._too_large()(scope, receive, send)

    def _too_large(self) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={"error": TOO_LARGE_MESSAGE},
        )
