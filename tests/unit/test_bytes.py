"""
Unit tests for byte size parsing.
"""
import pytest

from httpcompression.utils.bytes import chunk_length, parse_bytes, to_bytes


class TestParseBytes:
    """Test cases for human-readable size parsing."""

    @pytest.mark.parametrize("value, expected", [
        (1024, 1024),
        (0, 0),
        ("1024", 1024),
        ("100b", 100),
        ("1kb", 1024),
        ("1KB", 1024),
        ("1 kb", 1024),
        ("1.5mb", 1572864),
        ("2gb", 2 * 1024 ** 3),
        ("1tb", 1024 ** 4),
        ("1pb", 1024 ** 5),
        ("-1kb", -1024),
    ])
    def test_valid_sizes(self, value, expected):
        assert parse_bytes(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", "1 xb", "kb", True, [], "1.2.3kb"])
    def test_invalid_sizes(self, value):
        assert parse_bytes(value) is None

    def test_float_is_truncated(self):
        assert parse_bytes(10.9) == 10


class TestChunkHelpers:
    """Test cases for chunk length and coercion."""

    def test_length_of_missing_chunk_is_zero(self):
        assert chunk_length(None) == 0
        assert chunk_length(b"") == 0

    def test_length_of_str_uses_encoding(self):
        assert chunk_length("héllo") == 6
        assert chunk_length("héllo", "latin-1") == 5

    def test_length_of_bytes(self):
        assert chunk_length(b"abc") == 3

    def test_to_bytes(self):
        assert to_bytes("abc") == b"abc"
        assert to_bytes(b"abc") == b"abc"
        assert to_bytes(bytearray(b"abc")) == b"abc"
        assert to_bytes(memoryview(b"abc")) == b"abc"
