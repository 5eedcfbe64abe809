"""Routes package initialization.

This module exports the route collection for the application.
Routers are included in priority order, the first match wins, so the
single-segment catch-all routes come last.
"""

from fastapi import APIRouter

from shorturls.api.routes import health, links, web, redirect
from shorturls.core.config import settings

# (router, prefix) in match priority order
ROUTERS = [
    (health.router, ""),
    (links.router, settings.API_PREFIX),
    (web.router, ""),
    (web.catch_all_router, ""),
    (redirect.router, ""),
]

api_router = APIRouter()

for router, prefix in ROUTERS:
    api_router.include_router(router, prefix=prefix)

__all__ = ["api_router"]
