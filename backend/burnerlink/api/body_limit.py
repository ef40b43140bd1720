"""Body Size Limit — refuse request bodies above the configured ceiling.

Invariants:
    - The ceiling applies to bytes actually received, not just Content-Length
    - A declared Content-Length above the ceiling is refused without reading the body
    - Refusals use the PAYLOAD_TOO_LARGE envelope with status 413
    - Accepted bodies are replayed to the app unchanged

Design Decisions:
    - Pure ASGI middleware: BaseHTTPMiddleware cannot intercept receive()
    - Body buffered up to the ceiling, matching a JSON body parser with a limit
"""

import logging

from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from burnerlink.core.errors import ErrorContext, PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        declared = Headers(scope=scope).get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_bytes:
            await self._refuse(scope, receive, send, {"declared": int(declared)})
            return

        chunks: list[bytes] = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            received += len(chunk)
            if received > self.max_bytes:
                await self._refuse(scope, receive, send, {"received": received})
                return
            chunks.append(chunk)
            more_body = message.get("more_body", False)

        body = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _refuse(
        self, scope: Scope, receive: Receive, send: Send, debug_info: dict,
    ) -> None:
        exc = PayloadTooLargeError(self.max_bytes, ErrorContext(debug_info=debug_info))
        logger.warning(
            exc.message,
            extra={"error_code": exc.code, "path": scope.get("path")},
        )
        response = JSONResponse(status_code=exc.http_status, content=exc.to_response())
        await response(scope, receive, send)
