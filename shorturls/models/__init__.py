"""
Data models for the URL shortener application.

This module imports and exports all SQLModel models used in the application.
"""

from shorturls.models.link import Link, LinkBase, LinkCreate

__all__ = [
    "Link",
    "LinkBase",
    "LinkCreate",
]
