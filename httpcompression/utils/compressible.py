"""Classification of MIME types as compressible."""
import re
from typing import Dict, Optional

# Types with an explicit verdict. Anything else falls back to the
# text/* and structured-suffix rule below.
COMPRESSIBLE_TYPES: Dict[str, bool] = {
    'application/atom+xml': True,
    'application/dart': True,
    'application/ecmascript': True,
    'application/geo+json': True,
    'application/graphql': True,
    'application/javascript': True,
    'application/json': True,
    'application/ld+json': True,
    'application/manifest+json': True,
    'application/msword': True,
    'application/ndjson': True,
    'application/postscript': True,
    'application/problem+json': True,
    'application/rss+xml': True,
    'application/rtf': True,
    'application/tar': True,
    'application/vnd.api+json': True,
    'application/vnd.ms-excel': True,
    'application/vnd.ms-fontobject': True,
    'application/wasm': True,
    'application/x-font-opentype': True,
    'application/x-font-truetype': True,
    'application/x-font-ttf': True,
    'application/x-httpd-php': True,
    'application/x-javascript': True,
    'application/x-ndjson': True,
    'application/x-perl': True,
    'application/x-sh': True,
    'application/x-tar': True,
    'application/x-www-form-urlencoded': True,
    'application/xhtml+xml': True,
    'application/xml': True,
    'font/opentype': True,
    'font/otf': True,
    'font/ttf': True,
    'image/bmp': True,
    'image/svg+xml': True,
    'image/vnd.microsoft.icon': True,
    'image/x-icon': True,
    'multipart/bag': True,
    'multipart/mixed': True,
    'text/event-stream': True,
    # already compressed formats
    'application/gzip': False,
    'application/octet-stream': False,
    'application/pdf': False,
    'application/x-bzip2': False,
    'application/x-gzip': False,
    'application/zip': False,
    'application/zstd': False,
    'font/woff': False,
    'font/woff2': False,
    'image/gif': False,
    'image/jpeg': False,
    'image/png': False,
    'image/webp': False,
}

_COMPRESSIBLE_TYPE_RE = re.compile(r'^text/|\+(?:json|text|xml)$', re.IGNORECASE)
_EXTRACT_TYPE_RE = re.compile(r'^\s*([^;\s]*)(?:;|\s|$)')


def compressible(content_type: Optional[str]) -> Optional[bool]:
    """
    Check whether a Content-Type value names a compressible type.

    Parameters such as ``charset`` are ignored. Returns None when the
    type is unknown and matches no compressible pattern.
    """
    if not content_type or not isinstance(content_type, str):
        return False

    match = _EXTRACT_TYPE_RE.match(content_type)
    mime_type = match.group(1).lower() if match else ''
    if not mime_type:
        return False

    verdict = COMPRESSIBLE_TYPES.get(mime_type)
    if verdict is not None:
        return verdict

    if _COMPRESSIBLE_TYPE_RE.search(mime_type):
        return True

    return None
