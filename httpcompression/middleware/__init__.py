# middleware/__init__.py
"""
Compression Middleware

Registers the compression middleware on FastAPI applications.
"""
from typing import Any, Callable, Dict, List, Optional, Union
from fastapi import FastAPI
import logging as log

from ..core.options import CompressionOptions
from .base import ASGIMiddleware
from .compression import CompressionMiddleware

logger = log.getLogger("httpcompression.middleware")


class MiddlewareManager:
    """Manages middleware registration and configuration for FastAPI apps."""

    def __init__(self):
        self.middlewares: List[Dict[str, Any]] = []
        self._builtin_middlewares = {
            'compression': CompressionMiddleware,
        }

    def add_middleware(
        self,
        middleware_class: Union[str, type],
        **options
    ) -> 'MiddlewareManager':
        """Add middleware to the stack."""
        if isinstance(middleware_class, str):
            if middleware_class not in self._builtin_middlewares:
                raise ValueError(f"Unknown middleware: {middleware_class}")
            middleware_class = self._builtin_middlewares[middleware_class]

        self.middlewares.append({
            'class': middleware_class,
            'options': options
        })
        return self

    def configure_compression(
        self,
        enabled: bool = True,
        threshold: Union[int, str, None] = None,
        filter: Optional[Callable[[Any, Any], bool]] = None,
        **kwargs
    ) -> 'MiddlewareManager':
        """Configure compression middleware."""
        if enabled:
            options = {
                'threshold': threshold,
                'filter': filter,
                **kwargs
            }
            # FastAPI builds its middleware stack lazily; fail here instead
            CompressionOptions.parse(options)
            return self.add_middleware('compression', **options)
        return self

    def apply_to_app(self, app: FastAPI) -> None:
        """Apply all configured middlewares to the FastAPI app."""
        # Apply middlewares in reverse order (LIFO stack)
        for middleware_config in reversed(self.middlewares):
            middleware_class = middleware_config['class']
            options = middleware_config['options']

            try:
                app.add_middleware(middleware_class, **options)
                logger.info(f"Added middleware: {middleware_class.__name__}")
            except Exception as e:
                logger.error(f"Failed to add middleware {middleware_class.__name__}: {e}")
                raise


middleware_manager = MiddlewareManager()

__all__ = [
    'MiddlewareManager',
    'ASGIMiddleware',
    'CompressionMiddleware',
    'middleware_manager',
]
