"""
Purpose:
- Error taxonomy for the description service.
- Every error knows its HTTP status and the message the client sees; main.py renders
  them as {"error": message}.
"""

from __future__ import annotations

MSG_NO_IMAGE = "No image provided"
MSG_INVALID_TYPE = "Invalid image type"
MSG_TOO_LARGE = "Image size too large"
MSG_GENERATION_FAILED = "Failed to generate description"
MSG_NOT_FOUND = "Not found"

class DescriptionError(Exception):
    """Base for every error surfaced to the client."""
    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

# --- client input (400) ------------------------------------------------------

class InvalidImageError(DescriptionError):
    status_code = 400

class NoImageProvided(InvalidImageError):
    def __init__(self):
        super().__init__(MSG_NO_IMAGE)

class InvalidImageType(InvalidImageError):
    def __init__(self):
        super().__init__(MSG_INVALID_TYPE)

class ImageTooLarge(InvalidImageError):
    def __init__(self):
        super().__init__(MSG_TOO_LARGE)

# --- upstream (500) ----------------------------------------------------------

class ProviderError(DescriptionError):
    """Transport failure talking to the provider; message is passed through as-is."""

    @classmethod
    def from_exception(cls, exc: BaseException) -> "ProviderError":
        return cls(str(exc) or exc.__class__.__name__)

class GenerationFailed(DescriptionError):
    """The call went through but there is no usable description in the reply."""

    def __init__(self):
        super().__init__(MSG_GENERATION_FAILED)
