"""Decorators for the URL shortener application.

This module contains reusable decorators for common functionality
across the application.
"""

import functools

from fastapi import Request

from shorturls.core.url_logger import log_link_click


def log_link_click_decorator():
    """Click logging decorator that preserves route function signature.

    The wrapped route must accept ``request`` and ``shorturl`` keyword
    arguments.

    Returns:
        callable: Decorator function
    """
    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, request: Request, shorturl: str, **kwargs):
            ip_address = request.client.host if request.client else "unknown"
            user_agent = request.headers.get("user-agent", "")

            log_link_click(
                short=shorturl,
                ip_address=ip_address,
                user_agent=user_agent
            )

            return await func(*args, request=request, shorturl=shorturl, **kwargs)
        return wrapper
    return decorator
