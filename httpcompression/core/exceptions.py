"""
Custom exceptions for the compression package.
"""
from typing import Optional, Dict, Any


class CompressionError(Exception):
    """Base exception for all compression-related errors."""

    def __init__(
        self,
        message: str,
        *,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error message
            context: Additional context about the error
            original_exception: The original exception that caused this error
        """
        super().__init__(message)
        self.context = context or {}
        self.original_exception = original_exception


class ConfigurationError(CompressionError):
    """Raised when compression options fail validation."""
    pass


class StreamStateError(CompressionError):
    """Raised when a stream is written to after it has been ended."""
    pass
