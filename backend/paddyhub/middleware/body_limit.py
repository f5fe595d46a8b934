"""
PaddyHub Backend: Body Size Limit Middleware
============================================

What:  Rejects request bodies above MAX_BODY_SIZE with 413.
Why:   Scan and stock payloads are small; a 50MB ceiling leaves room for
       bulk board uploads while stopping runaway clients early.
How:   Two checks.
    1. A declared Content-Length above the limit is answered with 413
       before the body is read. A malformed header is a 400.
    2. Every body chunk handed to the app is counted, so chunked uploads
       (no Content-Length) and under-declared bodies are cut off too. Once
       the count passes the limit, receive() raises PayloadTooLargeError
       and the registered exception handler answers 413.

Written as a plain ASGI middleware (like Starlette's own GZip and CORS
middleware) because BaseHTTPMiddleware does not expose the receive channel.
"""

import logging

from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from paddyhub.config import settings
from paddyhub.exceptions import PayloadTooLargeError
from paddyhub.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:

    def __init__(self, app: ASGIApp, max_body_size: int | None = None):
        self.app = app
        self.max_body_size = max_body_size or settings.max_body_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared is not None:
            try:
                length = int(declared)
            except ValueError:
                response = JSONResponse(
                    status_code=400,
                    content={
                        "error": "validation_error",
                        "message": "Invalid Content-Length header",
                        "request_id": request_id_var.get(""),
                    },
                )
                await response(scope, receive, send)
                return

            if length > self.max_body_size:
                self._log_rejection(scope, length)
                await self._too_large()(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_body_size:
                    self._log_rejection(scope, received)
                    raise PayloadTooLargeError(limit=self.max_body_size)
            return message

        await self.app(scope, limited_receive, send)

    def _too_large(self) -> JSONResponse:
        exc = PayloadTooLargeError(limit=self.max_body_size)
        return JSONResponse(
            status_code=413,
            content={
                "error": "payload_too_large",
                "message": exc.message,
                "details": exc.context,
                "request_id": request_id_var.get(""),
            },
        )

    def _log_rejection(self, scope: Scope, size: int) -> None:
        logger.warning(
            "[%s] Rejected %s %s: body of %d+ bytes over %d limit",
            request_id_var.get(""),
            scope.get("method"),
            scope.get("path"),
            size,
            self.max_body_size,
        )
