# transport.py
"""
ASGI response transport.

Adapts an ASGI ``send`` callable to the synchronous write/end/event
surface the compression proxy drives. Messages are queued by ``write``
and ``end`` and transmitted by ``flush_pending``, which is where
backpressure is relieved and ``drain`` is emitted.
"""
from collections import deque
from typing import Deque
import logging

from starlette.datastructures import MutableHeaders
from starlette.types import Message, Send

from .core.exceptions import StreamStateError
from .events import EventEmitter
from .utils.bytes import to_bytes

logger = logging.getLogger("httpcompression.transport")

DEFAULT_HIGH_WATER_MARK = 16 * 1024


class ASGIResponse(EventEmitter):
    """
    One HTTP response being sent over ASGI.

    Events:
        drain: queued body bytes were transmitted after ``write`` returned False
        finish: the final body message was queued
        close: the client disconnected
    """

    def __init__(self, send: Send, high_water_mark: int = DEFAULT_HIGH_WATER_MARK):
        super().__init__()
        self._send = send
        self.high_water_mark = high_water_mark

        self.status_code = 200
        self.headers = MutableHeaders(raw=[])
        self._start_message: Message = {"type": "http.response.start", "status": 200}

        self._pending: Deque[Message] = deque()
        self._pending_size = 0
        self._need_drain = False

        self.headers_sent = False
        self.finished = False
        self.closed = False

    def start(self, message: Message) -> None:
        """Record the application's response start without sending it."""
        if self.headers_sent:
            raise StreamStateError(
                "response already started",
                context={"status": message.get("status")}
            )
        self._start_message = dict(message)
        self.status_code = message["status"]
        self.headers = MutableHeaders(raw=list(message.get("headers", [])))

    def write_head(self) -> None:
        """Commit the status line and headers."""
        if self.headers_sent:
            return
        self.headers_sent = True
        if self.closed:
            return
        self._queue({**self._start_message, "headers": self.headers.raw})

    def write(self, chunk, encoding: str = 'utf-8') -> bool:
        """Queue a body chunk. Returns False once the queue is over the high-water mark."""
        if self.closed:
            return False
        if self.finished:
            raise StreamStateError("write after end")

        if not self.headers_sent:
            self.write_head()

        data = to_bytes(chunk, encoding)
        if data:
            self._queue({"type": "http.response.body", "body": data, "more_body": True})

        if self._pending_size >= self.high_water_mark:
            self._need_drain = True
            return False
        return True

    def end(self, chunk=None, encoding: str = 'utf-8') -> None:
        """Queue the final body message."""
        if self.closed or self.finished:
            return

        if not self.headers_sent:
            self.write_head()

        body = to_bytes(chunk, encoding) if chunk is not None else b""
        self.finished = True
        self._queue({"type": "http.response.body", "body": body, "more_body": False})
        self.emit('finish')

    def close(self) -> None:
        """Mark the connection closed; queued and future output is discarded."""
        if self.closed:
            return
        self.closed = True
        logger.debug(f"Client disconnected, dropping {len(self._pending)} queued messages")
        self._pending.clear()
        self._pending_size = 0
        self.emit('close')

    async def flush_pending(self) -> None:
        """Transmit queued messages in order, relieving backpressure as they go."""
        while True:
            while self._pending and not self.closed:
                message = self._pending.popleft()
                self._pending_size -= len(message.get("body", b""))
                await self._send(message)

            if not self._need_drain or self.closed:
                break
            self._need_drain = False
            self.emit('drain')

            if not self._pending:
                break

    def _queue(self, message: Message) -> None:
        self._pending.append(message)
        self._pending_size += len(message.get("body", b""))
