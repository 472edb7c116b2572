"""
HTTP helpers used by the compression policy: byte sizes, content
negotiation, the compressible MIME type table and Vary handling.
"""
from .bytes import parse_bytes, chunk_length, to_bytes
from .compressible import compressible
from .negotiation import AcceptEncoding, negotiate_encoding
from .vary import append_vary, vary

__all__ = [
    'parse_bytes', 'chunk_length', 'to_bytes', 'compressible',
    'AcceptEncoding', 'negotiate_encoding', 'append_vary', 'vary',
]
