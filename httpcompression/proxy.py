# proxy.py
"""
Transport proxy and decision point.

``CompressionProxy`` stands in for a response transport for the lifetime
of one exchange. Everything the application does before the outbound
headers are committed is recorded; at commit time the proxy decides,
once, whether the body is compressed, and from then on routes writes
either straight to the transport or through a ``CompressionRelay``.
"""
from typing import Any, Callable, Dict, List, Optional, Tuple
import logging

from .events import Listener
from .policy import (
    below_threshold,
    is_encoded,
    known_length,
    negotiate_method,
    should_compress,
)
from .relay import CompressionRelay
from .utils.bytes import chunk_length, to_bytes
from .utils.vary import vary

logger = logging.getLogger("httpcompression.proxy")

Filter = Callable[[Any, Any], bool]


class CompressionProxy:
    """
    Response surface handed to the application for one exchange.

    Args:
        request: Object exposing ``method`` and ``headers``
        transport: The real response transport (``headers``, ``headers_sent``,
            ``write_head``, ``write``, ``end``, ``on``)
        filter: Predicate deciding whether compression is attempted at all
        threshold: Bodies known to be smaller than this are not compressed
        codec_options: Passed to the codec stream constructor
    """

    def __init__(
        self,
        request: Any,
        transport: Any,
        *,
        filter: Filter = should_compress,
        threshold: int = 1024,
        codec_options: Optional[Dict[str, Any]] = None,
    ):
        self.request = request
        self.transport = transport
        self.filter = filter
        self.threshold = threshold
        self.codec_options = codec_options or {}

        self.method: Optional[str] = None
        self.length: Optional[int] = None
        self.relay: Optional[CompressionRelay] = None

        self._listeners: Optional[List[Tuple[str, Listener]]] = []
        self._decided = False
        self._ended = False
        self._closed = False

        transport.on('close', self._on_close)

    @property
    def headers(self):
        return self.transport.headers

    @property
    def headers_sent(self) -> bool:
        return self.transport.headers_sent

    @property
    def decided(self) -> bool:
        return self._decided

    @property
    def closed(self) -> bool:
        return self._closed

    def write_head(self) -> None:
        """Commit the response headers, deciding on compression first."""
        if not self._decided:
            self._decide()
        self.transport.write_head()

    def write(self, chunk, encoding: str = 'utf-8') -> bool:
        """Write a body chunk. Returns False when the caller should wait for ``drain``."""
        if self._closed:
            return False

        if not self.headers_sent:
            self.write_head()

        if self.relay is not None:
            return self.relay.write(to_bytes(chunk, encoding))
        return self.transport.write(chunk, encoding)

    def end(self, chunk=None, encoding: str = 'utf-8') -> None:
        """Write an optional final chunk and finish the response."""
        if self._closed or self._ended:
            return

        if not self.headers_sent:
            # estimate the length
            if not self.headers.get('content-length'):
                self.length = chunk_length(chunk, encoding)
            self.write_head()

        self._ended = True

        if self.relay is None:
            if chunk is None:
                self.transport.end()
            else:
                self.transport.end(chunk, encoding)
            return

        self.relay.end(to_bytes(chunk, encoding) if chunk else None)

    def on(self, event: str, listener: Listener) -> 'CompressionProxy':
        """Subscribe to a response event; ``drain`` follows the effective write target."""
        if event != 'drain':
            self.transport.on(event, listener)
        elif self.relay is not None:
            self.relay.stream.on(event, listener)
        elif self._listeners is None:
            self.transport.on(event, listener)
        else:
            # buffer listeners for future stream
            self._listeners.append((event, listener))
        return self

    def flush(self) -> None:
        """Push compressed bytes buffered by the codec out immediately."""
        if self.relay is not None:
            self.relay.flush()

    def _decide(self) -> None:
        self._decided = True

        # determine if request is filtered
        try:
            accepted = self.filter(self.request, self)
        except Exception:
            self._no_compress('filter raised')
            raise

        if not accepted:
            self._no_compress('filtered')
            return

        vary(self.headers, 'Accept-Encoding')

        if below_threshold(known_length(self.headers, self.length), self.threshold):
            self._no_compress('size below threshold')
            return

        if is_encoded(self.headers):
            self._no_compress('already encoded')
            return

        if self.request.method == 'HEAD':
            self._no_compress('HEAD request')
            return

        method = negotiate_method(self.request.headers.get('accept-encoding'))
        if not method or method == 'identity':
            self._no_compress('not acceptable')
            return

        logger.debug(f"{method} compression")
        self.method = method
        self.relay = CompressionRelay(method, self.transport, **self.codec_options)
        self.relay.add_listeners(self._listeners)
        self._listeners = None

        self.headers['Content-Encoding'] = method
        if 'content-length' in self.headers:
            del self.headers['content-length']

    def _no_compress(self, reason: str) -> None:
        logger.debug(f"no compression: {reason}")
        self.method = 'identity'
        for event, listener in self._listeners:
            self.transport.on(event, listener)
        self._listeners = None

    def _on_close(self) -> None:
        if self._closed:
            return
        logger.debug("Connection closed, discarding further writes")
        self._closed = True
        if self.relay is not None:
            self.relay.destroy()
