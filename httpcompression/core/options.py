# core/options.py
"""
Per-instance compression options.

Options are validated once, when a middleware (or ``Compression``) is
constructed, so a malformed configuration fails at startup rather than
on the first request.
"""
from typing import Any, Callable, Dict, Optional
import zlib

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..policy import should_compress
from ..utils.bytes import parse_bytes
from .config import settings
from .exceptions import ConfigurationError

CODEC_FIELDS = ('level', 'mem_level', 'strategy', 'window_bits', 'chunk_size')


class CompressionOptions(BaseModel):
    """
    Validated compression options.

    Any option not declared here is kept verbatim and passed to the codec
    stream constructor.
    """
    model_config = ConfigDict(extra="allow", frozen=True, arbitrary_types_allowed=True)

    filter: Callable[[Any, Any], bool] = should_compress
    threshold: Optional[int] = Field(default=None, validate_default=True)

    # codec options
    level: int = Field(default_factory=lambda: settings.COMPRESSION_LEVEL, ge=-1, le=9)
    mem_level: int = Field(default_factory=lambda: settings.COMPRESSION_MEM_LEVEL, ge=1, le=9)
    strategy: int = zlib.Z_DEFAULT_STRATEGY
    window_bits: int = Field(default_factory=lambda: settings.COMPRESSION_WINDOW_BITS, ge=9, le=15)
    chunk_size: int = Field(default_factory=lambda: settings.COMPRESSION_CHUNK_SIZE, ge=64)

    @field_validator("filter", mode="before")
    def default_filter(cls, v):
        if v is None:
            return should_compress
        if not callable(v):
            raise ValueError("filter must be callable")
        return v

    @field_validator("threshold", mode="before")
    def parse_threshold(cls, v):
        if v is None:
            v = settings.COMPRESSION_THRESHOLD

        threshold = parse_bytes(v)
        if threshold is None:
            raise ValueError(f"invalid threshold: {v!r}")
        if threshold < 0:
            raise ValueError(f"threshold must not be negative: {v!r}")
        return threshold

    @classmethod
    def parse(cls, options: Dict[str, Any]) -> 'CompressionOptions':
        """Validate raw options, raising ConfigurationError on failure."""
        options = dict(options)
        try:
            return cls(**options)
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid compression options: {e}",
                context={"options": options},
                original_exception=e
            ) from e

    @property
    def codec_options(self) -> Dict[str, Any]:
        """Keyword arguments for the codec stream constructor."""
        options = {name: getattr(self, name) for name in CODEC_FIELDS}
        options.update(self.model_extra or {})
        return options
