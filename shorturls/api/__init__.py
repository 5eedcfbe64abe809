"""API package for the URL shortener application.

This package contains the HTTP layer: routes, request/response schemas,
and dependency providers.
"""

from shorturls.api.routes import api_router

__all__ = ["api_router"]
