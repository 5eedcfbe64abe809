"""Validation utilities for destination URLs and short codes."""

import re
from urllib.parse import urlsplit

ALLOWED_SCHEMES = ("http", "https")

CODE_PATTERN = re.compile(r"[A-Za-z0-9]{6,8}")


def is_valid_url(value) -> bool:
    """Return True if ``value`` is an absolute http(s) URL with a host.

    Never raises: anything that fails to parse is simply invalid.
    """
    if not isinstance(value, str):
        return False

    candidate = value.strip()
    if not candidate or any(ch.isspace() for ch in candidate):
        return False

    try:
        parts = urlsplit(candidate)
        # Accessing hostname/port validates brackets and port digits
        hostname = parts.hostname
        parts.port
    except ValueError:
        return False

    return parts.scheme in ALLOWED_SCHEMES and bool(hostname)


def is_valid_code(code) -> bool:
    """Return True if ``code`` is 6-8 ASCII letters or digits."""
    if not isinstance(code, str):
        return False
    return CODE_PATTERN.fullmatch(code) is not None
