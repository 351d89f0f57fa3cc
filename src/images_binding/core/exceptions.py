"""Custom exceptions for the images binding."""

from __future__ import annotations

from typing import Optional

INVALID_REQUEST_CODE = 9523
UNSUPPORTED_FORMAT_CODE = 9520


class ImagesBindingError(Exception):
    """Base exception for all images binding errors.

    Every subclass carries the HTTP status, the machine error code echoed in
    the ``cf-images-binding`` header and a default human message.
    """

    status_code: int = 500
    error_code: int = INVALID_REQUEST_CODE
    default_message: str = "ERROR: Internal error"

    def __init__(self, message: Optional[str] = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidImageError(ImagesBindingError):
    """Raised when the ``image`` field is missing or is not a file."""

    status_code = 400
    default_message = "ERROR: Expected image in request"


class InvalidTransformsError(ImagesBindingError):
    """Raised when ``transforms`` is missing or is not a JSON array."""

    status_code = 400
    default_message = "ERROR: Expected JSON transforms in transforms field"


class UnsupportedInputError(ImagesBindingError):
    """Raised when the engine cannot decode the uploaded image."""

    status_code = 415
    error_code = UNSUPPORTED_FORMAT_CODE
    default_message = "ERROR: Unsupported image type"


class UnsupportedOutputError(ImagesBindingError):
    """Raised when the requested output format cannot be produced locally."""

    status_code = 415
    error_code = UNSUPPORTED_FORMAT_CODE
    default_message = "ERROR: Unsupported output format"


class InternalInconsistencyError(ImagesBindingError):
    """Raised when engine metadata breaks its contract for raster input."""

    status_code = 500
    default_message = "ERROR: Expected size, width and height for bitmap input"


class ImageEngineError(ImagesBindingError):
    """Raised for unexpected failures inside the image engine."""

    status_code = 500
    default_message = "ERROR: Image engine failure"


class ConfigurationError(ImagesBindingError):
    """Error raised for invalid configuration options."""
