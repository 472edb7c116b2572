# compression.py
"""Transport-agnostic entry point: validated options plus a proxy factory."""
from typing import Any
import logging

from .core.options import CompressionOptions
from .proxy import CompressionProxy

logger = logging.getLogger("httpcompression")


class Compression:
    """
    Compress response bodies with gzip or deflate.

    Calling an instance with a request and its response transport returns
    the ``CompressionProxy`` the application should write to.

    Args:
        filter: Predicate ``(request, response) -> bool``; defaults to the
            Content-Type compressibility check
        threshold: Minimum body size to compress, as bytes or a string like "1kb"
        **options: Codec options (level, mem_level, strategy, window_bits,
            chunk_size); anything else is passed to the codec verbatim

    Raises:
        ConfigurationError: If the options are invalid
    """

    def __init__(self, **options: Any):
        self.options = CompressionOptions.parse(options)
        logger.debug(f"Compression configured with threshold={self.options.threshold}")

    @property
    def threshold(self) -> int:
        return self.options.threshold

    @property
    def filter(self):
        return self.options.filter

    def __call__(self, request: Any, transport: Any) -> CompressionProxy:
        return CompressionProxy(
            request,
            transport,
            filter=self.options.filter,
            threshold=self.options.threshold,
            codec_options=self.options.codec_options,
        )


def compression(**options: Any) -> Compression:
    """Create a ``Compression`` from keyword options."""
    return Compression(**options)
