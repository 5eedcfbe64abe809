"""Core module for the URL shortener application."""

from shorturls.core.config import settings

__all__ = ["settings"]
