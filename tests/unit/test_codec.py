"""
Unit tests for codec streams.
"""
import gzip
import zlib

import pytest

from httpcompression.codec import DeflateStream, GzipStream, create_codec
from httpcompression.core.exceptions import StreamStateError


def collect(stream):
    chunks = []
    events = []
    stream.on('data', chunks.append)
    stream.on('end', lambda: events.append('end'))
    stream.on('drain', lambda: events.append('drain'))
    return chunks, events


class TestCodecStream:
    """Test cases for the zlib-backed codec streams."""

    def test_gzip_round_trip(self):
        stream = GzipStream()
        chunks, events = collect(stream)

        stream.write(b"hello ")
        stream.end(b"world")

        assert gzip.decompress(b"".join(chunks)) == b"hello world"
        assert events == ['end']

    def test_deflate_uses_zlib_container(self):
        stream = DeflateStream()
        chunks, _ = collect(stream)

        stream.end(b"payload")

        assert zlib.decompress(b"".join(chunks)) == b"payload"

    def test_create_codec(self):
        assert isinstance(create_codec("gzip"), GzipStream)
        assert isinstance(create_codec("deflate", level=1), DeflateStream)
        with pytest.raises(ValueError):
            create_codec("br")

    def test_unknown_options_are_ignored(self):
        stream = create_codec("gzip", level=9, something_else=True)
        assert stream.level == 9

    def test_flush_emits_buffered_output(self):
        stream = GzipStream()
        chunks, _ = collect(stream)

        stream.write(b"partial")
        before = len(b"".join(chunks))
        stream.flush()

        data = b"".join(chunks)
        assert len(data) > before
        decompressor = zlib.decompressobj(16 + zlib.MAX_WBITS)
        assert decompressor.decompress(data) == b"partial"

    def test_paused_stream_holds_output_until_resumed(self):
        stream = GzipStream()
        chunks, events = collect(stream)

        stream.pause()
        stream.end(b"data")
        assert chunks == []
        assert events == []

        stream.resume()
        assert gzip.decompress(b"".join(chunks)) == b"data"
        assert events == ['end']

    def test_backpressure_and_drain(self):
        stream = GzipStream(chunk_size=64, level=0)
        chunks, events = collect(stream)
        stream.pause()

        assert stream.write(b"x" * (256 * 1024)) is False
        assert stream.buffered >= 64

        stream.resume()
        assert stream.buffered == 0
        assert events == ['drain']

    def test_write_after_end(self):
        stream = GzipStream()
        stream.end()
        with pytest.raises(StreamStateError):
            stream.write(b"late")

    def test_end_is_idempotent(self):
        stream = GzipStream()
        _, events = collect(stream)
        stream.end(b"once")
        stream.end(b"twice")
        assert events == ['end']

    def test_destroy_discards_output(self):
        stream = GzipStream()
        chunks, events = collect(stream)
        closed = []
        stream.on('close', lambda: closed.append(True))

        stream.pause()
        stream.write(b"abc")
        stream.flush()
        stream.destroy()
        stream.resume()

        assert chunks == []
        assert closed == [True]
        assert stream.write(b"more") is False
