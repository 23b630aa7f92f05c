"""Exception hierarchy shared by the session, the payload codec and the Gemini client."""

from __future__ import annotations


GENERIC_FAILURE_MESSAGE = "Failed to process image. Please try again."
MISSING_API_KEY_MESSAGE = "API Key not found"


class ProductCleanError(Exception):
    """Base class for every error raised by ``product_clean``."""


class ValidationError(ProductCleanError):
    """Raised when the caller supplied no image, an empty instruction or a non-image file."""


class ImagePayloadError(ValidationError):
    """Raised when a data URI cannot be decoded into an image payload."""


class RemoteServiceError(ProductCleanError):
    """Raised when the remote edit call fails or returns no image."""

    def __init__(self, message: str = GENERIC_FAILURE_MESSAGE) -> None:
        message = message or GENERIC_FAILURE_MESSAGE
        super().__init__(message)
        self.message = message


class CredentialError(RemoteServiceError):
    """Raised when no Gemini API key is available at call time."""

    def __init__(self) -> None:
        super().__init__(MISSING_API_KEY_MESSAGE)
