"""
Error Types

Every failure the core reports derives from WledError so callers can
catch one type and print it.
"""

from typing import Optional


class WledError(Exception):
    """Base class for wled-control errors."""


# =============================================================================
# Image Errors
# =============================================================================

class ImageError(WledError):
    """The image could not be loaded."""

    def __init__(self, path, message: str):
        self.path = path
        super().__init__(f"{message}: {path}")


class ImageNotFoundError(ImageError):
    def __init__(self, path):
        super().__init__(path, "Image path incorrect, or file does not exist")


class ImageDecodeError(ImageError):
    def __init__(self, path, reason: str = ""):
        self.reason = reason
        message = "Could not decode image"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(path, message)


# =============================================================================
# Input Errors
# =============================================================================

class InvalidInputError(WledError):
    """A value handed to the core is out of range or empty."""


# =============================================================================
# Transport Errors
# =============================================================================

class TransportError(WledError):
    """The request to the device failed."""

    def __init__(self, message: str, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class ConnectionFailedError(TransportError):
    pass


class TransportTimeoutError(TransportError):
    pass


class NonSuccessStatusError(TransportError):
    """The device answered with a status outside 2xx."""

    def __init__(self, status_code: int, url: Optional[str] = None, body: str = ""):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Device returned HTTP {status_code}", url)
