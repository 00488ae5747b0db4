"""
Marketplace Backend — Security Headers Middleware
===================================================

What:  Adds defensive HTTP headers to every response.
Why:   The API only ever serves JSON; browsers should never sniff, frame,
       or cache its responses.

Headers:
    - X-Content-Type-Options: nosniff
    - X-Frame-Options: DENY
    - Referrer-Policy: no-referrer
    - Cache-Control: no-store (balances and payments must never be cached);
      left alone for the docs pages
"""

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "DENY",
    "Referrer-Policy": "no-referrer",
}

UNCACHED_EXCLUDED_PATHS = {"/docs", "/redoc", "/openapi.json"}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        response = await call_next(request)

        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)

        if request.url.path not in UNCACHED_EXCLUDED_PATHS:
            response.headers.setdefault("Cache-Control", "no-store")

        return response
