"""Domain models."""

from .errors import ErrorCode, ErrorResponse
from .image import ImageRecord

__all__ = ["ErrorCode", "ErrorResponse", "ImageRecord"]
