"""
Core functionality for the compression package: settings, options,
exceptions and logging setup.
"""
import logging

from .config import settings, get_settings, Settings
from .exceptions import CompressionError, ConfigurationError, StreamStateError

logger = logging.getLogger("httpcompression")


def configure_logging(debug: bool = None) -> None:
    """
    Configure logging for applications using the compression middleware.

    Args:
        debug: Log at DEBUG level (every compression decision is logged).
            Defaults to the DEBUG setting.
    """
    if debug is None:
        debug = settings.DEBUG

    level = logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL, logging.INFO)
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    logger.setLevel(level)


__all__ = [
    'Settings', 'settings', 'get_settings', 'configure_logging',
    'CompressionError', 'ConfigurationError', 'StreamStateError',
]
