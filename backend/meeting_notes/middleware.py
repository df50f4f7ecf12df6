"""ASGI middleware enforcing ``MAX_REQUEST_BYTES`` on request bodies."""

from __future__ import annotations

import logging

from fastapi import status
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from meeting_notes.config import settings

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware:
    """Reject bodies larger than ``settings.MAX_REQUEST_BYTES`` with 413.

    A declared ``Content-Length`` is checked up front.  Bodies without one
    (chunked uploads) are buffered while counting bytes and replayed to the
    application once complete.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        limit = settings.MAX_REQUEST_BYTES
        declared = Headers(scope=scope).get("content-length")
        if declared is not None and declared.isdigit():
            if int(declared) > limit:
                await self._reject(scope, receive, send, int(declared))
                return
            await self.app(scope, receive, send)
            return

        buffered: list[Message] = []
        received = 0
        while True:
            message = await receive()
            buffered.append(message)
            if message["type"] != "http.request":
                break
            received += len(message.get("body", b""))
            if received > limit:
                await self._reject(scope, receive, send, received)
                return
            if not message.get("more_body", False):
                break

        async def replay() -> Message:
            if buffered:
                return buffered.pop(0)
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        logger.warning("Rejected %s %s: body of at least %d bytes", scope.get("method"), scope.get("path"), size)
        response = JSONResponse(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            content={"error": "Request body too large"},
        )
        await response(scope, receive, send)
