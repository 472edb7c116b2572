"""Human-readable byte sizes."""
import re
from typing import Optional, Union

UNITS = {
    'b': 1,
    'kb': 1 << 10,
    'mb': 1 << 20,
    'gb': 1 << 30,
    'tb': 1 << 40,
    'pb': 1 << 50,
}

_SIZE_RE = re.compile(r'^([-+]?\d+(?:\.\d+)?) *(b|kb|mb|gb|tb|pb)?$', re.IGNORECASE)


def parse_bytes(value: Union[int, float, str, None]) -> Optional[int]:
    """
    Parse a size specification into a number of bytes.

    Integers are returned unchanged, floats are truncated. Strings accept an
    optional unit suffix (b, kb, mb, gb, tb, pb; case-insensitive), e.g.
    ``"1kb"`` -> 1024 or ``"1.5 mb"`` -> 1572864. Units are powers of 1024.

    Args:
        value: The size to parse

    Returns:
        int: The size in bytes, or None if the value cannot be parsed
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value)

    if not isinstance(value, str):
        return None

    match = _SIZE_RE.match(value.strip())
    if not match:
        return None

    number, unit = match.groups()
    return int(float(number) * UNITS[(unit or 'b').lower()])


def chunk_length(chunk, encoding: str = 'utf-8') -> int:
    """Byte length of a response chunk; 0 when there is no chunk."""
    if not chunk:
        return 0
    if isinstance(chunk, str):
        return len(chunk.encode(encoding))
    return len(chunk)


def to_bytes(chunk, encoding: str = 'utf-8') -> bytes:
    """Coerce a str or bytes-like chunk to bytes."""
    if isinstance(chunk, str):
        return chunk.encode(encoding)
    if isinstance(chunk, bytes):
        return chunk
    return bytes(chunk)
