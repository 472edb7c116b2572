"""Vary header maintenance."""
import re
from typing import List

from starlette.datastructures import MutableHeaders

# RFC 7230 token
_FIELD_NAME_RE = re.compile(r"^[!#$%&'*+.^_`|~0-9A-Za-z-]+$")


def _parse(header: str) -> List[str]:
    return [field.strip() for field in header.split(',') if field.strip()]


def append_vary(header: str, field: str) -> str:
    """
    Append ``field`` to a Vary header value.

    Field names are compared case-insensitively and never duplicated.
    ``*`` absorbs every other field.
    """
    fields = _parse(field)
    for name in fields:
        if not _FIELD_NAME_RE.match(name):
            raise ValueError(f"field argument contains an invalid header name: {name!r}")

    if header == '*':
        return header

    result = header
    existing = [name.lower() for name in _parse(header)]

    if '*' in fields or '*' in existing:
        return '*'

    for name in fields:
        if name.lower() not in existing:
            existing.append(name.lower())
            result = f"{result}, {name}" if result else name

    return result


def vary(headers: MutableHeaders, field: str) -> None:
    """Add ``field`` to the Vary header of a response's headers."""
    current = ', '.join(headers.getlist('vary'))
    value = append_vary(current, field)
    if value:
        headers['Vary'] = value
