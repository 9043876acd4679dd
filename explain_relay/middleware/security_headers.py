"""
Security headers middleware.
Applies the conventional hardening headers to every response.
"""
from typing import Callable, Dict

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

CONTENT_SECURITY_POLICY = (
    "default-src 'self';base-uri 'self';font-src 'self' https: data:;"
    "form-action 'self';frame-ancestors 'self';img-src 'self' data:;"
    "object-src 'none';script-src 'self';script-src-attr 'none';"
    "style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
)

DEFAULT_SECURITY_HEADERS: Dict[str, str] = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware adding security headers to responses."""

    def __init__(self, app, csp_exempt_paths: tuple = ()):
        super().__init__(app)
        # Interactive docs load their assets from a CDN
        self.csp_exempt_paths = csp_exempt_paths or ("/docs", "/redoc")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)

        for name, value in DEFAULT_SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        if not request.url.path.startswith(self.csp_exempt_paths):
            response.headers.setdefault("Content-Security-Policy", CONTENT_SECURITY_POLICY)

        return response
