# middleware/compression.py
"""Compression middleware for ASGI applications."""
from starlette.requests import Request
from starlette.types import Message, Receive, Scope, Send
import logging

from ..compression import Compression
from ..transport import ASGIResponse
from .base import ASGIMiddleware

logger = logging.getLogger("httpcompression.middleware.compression")


class CompressionMiddleware(ASGIMiddleware):
    """
    gzip/deflate response compression.

    Options are those of ``Compression``: ``filter``, ``threshold`` and
    codec options such as ``level``. The per-request proxy is available to
    endpoints as ``request.state.compression``. Streaming endpoints can
    ``await request.state.compression_flush()`` after yielding a chunk to
    push the compressed output produced so far to the client.
    """

    def setup(self):
        self.compression = Compression(**self.config)
        self.high_water_mark = self.compression.options.chunk_size

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        response = ASGIResponse(send, high_water_mark=self.high_water_mark)
        proxy = self.compression(request, response)

        async def flush() -> None:
            proxy.flush()
            await response.flush_pending()

        state = scope.setdefault("state", {})
        state["compression"] = proxy
        state["compression_flush"] = flush

        async def receive_wrapper() -> Message:
            message = await receive()
            if message["type"] == "http.disconnect":
                response.close()
            return message

        async def send_wrapper(message: Message) -> None:
            message_type = message["type"]

            if message_type == "http.response.start":
                response.start(message)
                return

            if message_type == "http.response.body":
                body = message.get("body", b"")
                if message.get("more_body", False):
                    proxy.write(body)
                else:
                    proxy.end(body or None)
                await response.flush_pending()
                return

            # Anything else (trailers, pathsend, ...) goes out as-is after
            # the headers, which are committed without compression.
            if not response.headers_sent:
                response.write_head()
            await response.flush_pending()
            await send(message)

        await self.app(scope, receive_wrapper, send_wrapper)
        await response.flush_pending()
