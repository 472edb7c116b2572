# middleware/base.py
"""Base middleware classes for the compression package."""
from starlette.types import ASGIApp, Receive, Scope, Send


class ASGIMiddleware:
    """
    Base class for pure ASGI middlewares with keyword configuration.

    Subclasses receive their options in ``self.config`` and wrap ``send``
    themselves, so responses are processed while they stream.
    """

    def __init__(self, app: ASGIApp, **kwargs):
        self.app = app
        self.config = kwargs
        self.setup()

    def setup(self) -> None:
        """Override this method for middleware-specific setup."""
        pass

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.app(scope, receive, send)
