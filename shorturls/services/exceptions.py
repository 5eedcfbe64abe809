"""Exceptions for the URL shortener service layer.

This module contains the exception hierarchy for the service layer,
providing domain-specific exceptions that abstract underlying implementation details.
"""


class ServiceError(Exception):
    """Base exception for all service-level errors."""
    pass


class LinkError(ServiceError):
    """Base exception for link-related errors."""
    pass


class LinkValidationError(LinkError):
    """Input failed validation checks."""
    pass


class MissingURLError(LinkValidationError):
    """No destination URL was supplied."""
    pass


class InvalidURLError(LinkValidationError):
    """The destination URL is not an absolute http(s) URL."""
    pass


class InvalidCodeError(LinkValidationError):
    """The requested short code is not 6-8 alphanumeric characters."""
    pass


class LinkCreationError(LinkError):
    """Error occurred during link creation."""
    pass


class ShortCodeGenerationError(LinkCreationError):
    """Failed to generate a unique short code."""
    pass


class CodeAlreadyExistsError(LinkCreationError):
    """The requested short code is already in use."""
    pass


class LinkNotFoundError(LinkError):
    """No link matches the given short code or id."""
    pass


class LinkLookupError(LinkError):
    """Error occurred while reading links."""
    pass


class LinkDeletionError(LinkError):
    """Error occurred while deleting a link."""
    pass


class ClickTrackingError(LinkError):
    """Error occurred while recording a redirect."""
    pass
