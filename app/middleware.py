# =============================================================================
# app/middleware.py - HTTP Middleware
# =============================================================================
# - SecurityHeadersMiddleware: fixed security headers on every response
# - BodySizeLimitMiddleware: reject request bodies over the configured limit,
#   declared or streamed
# =============================================================================

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.config import settings

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware that adds security headers to every response.
    """

    def __init__(self, app, content_security_policy: str | None = None):
        super().__init__(app)
        self.headers = {
            "X-Content-Type-Options": "nosniff",
            "X-Frame-Options": "DENY",
            "X-XSS-Protection": "1; mode=block",
            "Referrer-Policy": "strict-origin-when-cross-origin",
            "Content-Security-Policy": content_security_policy or settings.CONTENT_SECURITY_POLICY,
        }

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for key, value in self.headers.items():
            response.headers[key] = value
        return response


class BodySizeLimitMiddleware:
    """
    ASGI middleware that rejects request bodies over the configured size.

    A declared Content-Length is checked up front, so the body of a
    rejected request is never read. Bodies sent without one (chunked
    transfer encoding) are read until they end or pass the limit; accepted
    bodies are then replayed to the app unchanged.
    """

    def __init__(self, app: ASGIApp, max_bytes: int | None = None):
        self.app = app
        self.max_bytes = max_bytes or settings.body_size_limit_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        content_length = request.headers.get("content-length")

        if content_length is not None:
            try:
                size = int(content_length)
            except ValueError:
                response = JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"detail": "Invalid Content-Length header", "code": "BAD_CONTENT_LENGTH"},
                )
                await response(scope, receive, send)
                return

            if size > self.max_bytes:
                await self._reject(request, size)(scope, receive, send)
                return

            await self.app(scope, receive, send)
            return

        messages, size = await self._read_body(receive)
        if size > self.max_bytes:
            await self._reject(request, size)(scope, receive, send)
            return

        async def replay() -> Message:
            if messages:
                return messages.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _read_body(self, receive: Receive) -> tuple[list[Message], int]:
        """Read body messages until the body ends, the client leaves or the limit is passed."""
        messages: list[Message] = []
        size = 0

        while True:
            message = await receive()
            messages.append(message)
            if message["type"] != "http.request":
                break

            size += len(message.get("body", b""))
            if size > self.max_bytes or not message.get("more_body", False):
                break

        return messages, size

    def _reject(self, request: Request, size: int) -> JSONResponse:
        logger.warning(
            f"Rejected {request.method} {request.url.path}: body of {size} bytes "
            f"exceeds {self.max_bytes}"
        )
        return JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={
                "detail": "Request body too large",
                "code": "BODY_TOO_LARGE",
                "suggestion": f"Send at most {self.max_bytes} bytes",
            },
        )
