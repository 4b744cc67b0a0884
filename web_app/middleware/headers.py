"""Forwarded headers middleware."""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from typing import Callable

from shortener.common.headers import extract_forwarded_headers, get_client_ip


class ForwardedHeadersMiddleware(BaseHTTPMiddleware):
    """Middleware to extract X-Forwarded-* headers and the originating client IP."""

    async def dispatch(self, request: Request, call_next: Callable):
        """Process request and extract forwarded headers."""
        headers = dict(request.headers)
        forwarded = extract_forwarded_headers(headers)

        # Store forwarded headers in request state for easy access
        request.state.forwarded_proto = forwarded["forwarded_proto"]
        request.state.forwarded_host = forwarded["forwarded_host"]
        request.state.forwarded_for = forwarded["forwarded_for"]
        config = getattr(request.app.state, "config", None)
        request.state.client_ip = get_client_ip(
            headers,
            peer_host=request.client.host if request.client else None,
            trust_forwarded=bool(config and config.trust_forwarded_for),
        )

        response = await call_next(request)
        return response
