# policy.py
"""
Eligibility policy: pure decisions about whether, and how, a response
may be compressed.
"""
from typing import Any, Optional
import logging

from .utils.compressible import compressible
from .utils.negotiation import AcceptEncoding

logger = logging.getLogger("httpcompression.policy")

# Candidate content-codings, most preferred first.
PREFERRED_METHODS = ('gzip', 'deflate', 'identity')


def should_compress(request: Any, response: Any) -> bool:
    """
    Default filter: compress only responses whose Content-Type is compressible.

    Args:
        request: The incoming request (unused by the default filter)
        response: Anything exposing response ``headers``

    Returns:
        bool: True if the declared content type is worth compressing
    """
    content_type = response.headers.get('content-type')

    if content_type is None or not compressible(content_type):
        logger.debug(f"{content_type} not compressible")
        return False

    return True


def known_length(headers: Any, estimated: Optional[int] = None) -> Optional[int]:
    """
    The best known uncompressed body length.

    A numeric Content-Length header is authoritative; otherwise the
    estimate taken when the response was ended is used.
    """
    value = headers.get('content-length')
    if value is not None:
        try:
            return int(value)
        except (TypeError, ValueError):
            return None
    return estimated


def below_threshold(length: Optional[int], threshold: int) -> bool:
    """True when the length is known and smaller than the threshold."""
    return length is not None and length < threshold


def is_encoded(headers: Any) -> bool:
    """True when the response already declares a non-identity Content-Encoding."""
    encoding = headers.get('content-encoding') or 'identity'
    return encoding.strip().lower() != 'identity'


def negotiate_method(accept_encoding: Optional[str]) -> Optional[str]:
    """
    Pick the compression method for an Accept-Encoding header.

    gzip is taken over deflate whenever the client accepts gzip at all.

    Returns:
        "gzip", "deflate", "identity", or None when nothing is acceptable
    """
    accept = AcceptEncoding(accept_encoding)
    method = accept.best(PREFERRED_METHODS)

    # we really don't prefer deflate
    if method == 'deflate' and accept.accepts('gzip'):
        method = accept.best(['gzip', 'identity'])

    return method
