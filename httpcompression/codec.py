# codec.py
"""
Compression codec streams.

A codec stream wraps a zlib compressor in the stream contract the
compression relay drives: ``write``/``end``/``flush`` on the input side,
``data``/``end``/``drain`` events on the output side, and ``pause``/
``resume`` for backpressure coming from the transport.
"""
import zlib
from collections import deque
from typing import Any, Deque, Dict, Optional, Type
import logging

from .core.exceptions import StreamStateError
from .events import EventEmitter

logger = logging.getLogger("httpcompression.codec")

DEFAULT_CHUNK_SIZE = 16 * 1024


class CodecStream(EventEmitter):
    """
    Base class for zlib-backed compression streams.

    Compressed output is queued and delivered through ``data`` events
    while the stream is flowing. ``write`` returns False once the queued
    output reaches ``chunk_size`` bytes; ``drain`` is emitted when the
    queue falls back under that mark. ``end`` is emitted after the final
    byte of output has been delivered.
    """

    encoding: str = ""

    def __init__(
        self,
        level: int = zlib.Z_DEFAULT_COMPRESSION,
        mem_level: int = 8,
        strategy: int = zlib.Z_DEFAULT_STRATEGY,
        window_bits: int = zlib.MAX_WBITS,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        **kwargs: Any
    ) -> None:
        super().__init__()
        if kwargs:
            logger.debug(f"Ignoring unsupported {self.encoding} options: {sorted(kwargs)}")

        self.level = level
        self.high_water_mark = chunk_size
        self._compressor = zlib.compressobj(
            level, zlib.DEFLATED, self._wbits(window_bits), mem_level, strategy
        )
        self._buffer: Deque[bytes] = deque()
        self._buffered = 0
        self._need_drain = False
        self._flowing_lock = False

        self.paused = False
        self.ended = False
        self.finished = False
        self.destroyed = False

    def _wbits(self, window_bits: int) -> int:
        raise NotImplementedError

    @property
    def buffered(self) -> int:
        """Bytes of compressed output waiting to be delivered."""
        return self._buffered

    def write(self, data: bytes) -> bool:
        """Compress ``data``. Returns False when the caller should wait for ``drain``."""
        if self.ended:
            raise StreamStateError(
                "write after end",
                context={"encoding": self.encoding}
            )
        if self.destroyed:
            return False

        self._push(self._compressor.compress(data))
        return self._check_backpressure()

    def flush(self) -> None:
        """Emit everything compressed so far without ending the stream."""
        if self.ended or self.destroyed:
            return
        self._push(self._compressor.flush(zlib.Z_SYNC_FLUSH))

    def end(self, data: Optional[bytes] = None) -> None:
        """Compress the final ``data`` and finish the stream."""
        if self.ended or self.destroyed:
            return

        output = self._compressor.compress(data) if data else b""
        output += self._compressor.flush(zlib.Z_FINISH)
        self.ended = True
        self._push(output)

    def pause(self) -> None:
        self.paused = True

    def resume(self) -> None:
        if not self.paused:
            return
        self.paused = False
        self._deliver()

    def destroy(self) -> None:
        """Discard queued output and stop emitting."""
        if self.destroyed:
            return
        self.destroyed = True
        self._buffer.clear()
        self._buffered = 0
        self.emit('close')

    def _push(self, output: bytes) -> None:
        if output:
            self._buffer.append(output)
            self._buffered += len(output)
        self._deliver()

    def _deliver(self) -> None:
        # Listeners may write, pause or resume re-entrantly; only the
        # outermost call drives the loop.
        if self._flowing_lock:
            return

        self._flowing_lock = True
        try:
            while self._buffer and not self.paused and not self.destroyed:
                chunk = self._buffer.popleft()
                self._buffered -= len(chunk)
                self.emit('data', chunk)
        finally:
            self._flowing_lock = False

        if self.destroyed:
            return

        if self._need_drain and self._buffered < self.high_water_mark:
            self._need_drain = False
            self.emit('drain')

        if self.ended and not self._buffer and not self.paused and not self.finished:
            self.finished = True
            self.emit('end')

    def _check_backpressure(self) -> bool:
        if self._buffered >= self.high_water_mark:
            self._need_drain = True
            return False
        return True


class GzipStream(CodecStream):
    """gzip content-coding (RFC 1952 container)."""

    encoding = "gzip"

    def _wbits(self, window_bits: int) -> int:
        return 16 + window_bits


class DeflateStream(CodecStream):
    """HTTP ``deflate`` content-coding (zlib container, RFC 1950)."""

    encoding = "deflate"

    def _wbits(self, window_bits: int) -> int:
        return window_bits


CODECS: Dict[str, Type[CodecStream]] = {
    GzipStream.encoding: GzipStream,
    DeflateStream.encoding: DeflateStream,
}


def create_codec(method: str, **options: Any) -> CodecStream:
    """
    Create a codec stream for a negotiated content-coding.

    Args:
        method: "gzip" or "deflate"
        **options: Passed through to the codec constructor

    Returns:
        CodecStream: A fresh, flowing codec stream
    """
    try:
        codec_class = CODECS[method]
    except KeyError:
        raise ValueError(f"Unsupported compression method: {method}")
    return codec_class(**options)
