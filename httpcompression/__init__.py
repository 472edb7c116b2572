#main __init__.py
"""
httpcompression - gzip/deflate response compression for Python web applications.

A per-response proxy stands in for the response transport, decides once
(when headers are committed) whether the body should be compressed, and
then streams it either straight through or through a zlib codec while
relaying backpressure. ``CompressionMiddleware`` plugs it into any ASGI
application, including FastAPI and Starlette.
"""

__version__ = "0.1.0"

from .core import settings, configure_logging
from .core.exceptions import CompressionError, ConfigurationError, StreamStateError
from .core.options import CompressionOptions
from .compression import Compression, compression
from .policy import should_compress, negotiate_method
from .proxy import CompressionProxy
from .relay import CompressionRelay
from .codec import CodecStream, GzipStream, DeflateStream, create_codec
from .transport import ASGIResponse
from .middleware import CompressionMiddleware, MiddlewareManager

# Default filter, exported under the name applications pass as an option
filter = should_compress

__all__ = [
    'Compression', 'compression', 'CompressionOptions', 'CompressionProxy',
    'CompressionRelay', 'CompressionMiddleware', 'MiddlewareManager',
    'CodecStream', 'GzipStream', 'DeflateStream', 'create_codec',
    'ASGIResponse', 'should_compress', 'negotiate_method', 'filter',
    'CompressionError', 'ConfigurationError', 'StreamStateError',
    'settings', 'configure_logging',
]
