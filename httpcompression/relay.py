# relay.py
"""
Compression relay: pipes proxied body bytes through a codec stream and
the codec's output back to the transport, relaying backpressure both ways.
"""
from typing import Any, Iterable, Optional, Tuple
import logging

from .codec import CodecStream, create_codec
from .events import Listener

logger = logging.getLogger("httpcompression.relay")


class CompressionRelay:
    """Owns the codec stream of one compressed exchange."""

    def __init__(self, method: str, transport: Any, **codec_options: Any):
        self.method = method
        self.transport = transport
        self.stream: CodecStream = create_codec(method, **codec_options)

        self.stream.on('data', self._on_data)
        self.stream.on('end', self._on_end)
        transport.on('drain', self._on_drain)

    def add_listeners(self, listeners: Iterable[Tuple[str, Listener]]) -> None:
        """Attach subscriptions recorded before the codec existed, in order."""
        for event, listener in listeners:
            self.stream.on(event, listener)

    def write(self, chunk: bytes) -> bool:
        return self.stream.write(chunk)

    def end(self, chunk: Optional[bytes] = None) -> None:
        self.stream.end(chunk)

    def flush(self) -> None:
        """Force compressed output buffered inside zlib out to the transport."""
        self.stream.flush()

    def destroy(self) -> None:
        self.stream.destroy()

    def _on_data(self, chunk: bytes) -> None:
        if self.transport.write(chunk) is False:
            logger.debug(f"Transport backpressure, pausing {self.method} stream")
            self.stream.pause()

    def _on_drain(self) -> None:
        self.stream.resume()

    def _on_end(self) -> None:
        self.transport.end()
