"""Structured exception types for Code Store.

Each exception maps to an HTTP status code and an error code, so the API
layer handles all of them with a single exception handler.

Usage:
    from codestore.exceptions import InvalidCodeException

    # In service layer
    if not is_valid_code(code):
        raise InvalidCodeException("A valid 4-digit code is required")
"""

from .models.errors import ErrorCode


class CodeStoreException(Exception):
    """Base exception for Code Store.

    Attributes:
        error_code: ErrorCode enum value for API responses
        status_code: HTTP status code to return
        message: Human-readable error message
    """

    error_code: ErrorCode = ErrorCode.STORAGE_WRITE_FAILED
    status_code: int = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidCodeException(CodeStoreException):
    """Raised when a code is missing or not exactly four digits."""

    error_code = ErrorCode.INVALID_CODE
    status_code = 400


class InvalidFileException(CodeStoreException):
    """Raised when the image file is missing or is not an image."""

    error_code = ErrorCode.INVALID_FILE
    status_code = 400


class PayloadTooLargeException(CodeStoreException):
    """Raised when an uploaded file exceeds the size limit."""

    error_code = ErrorCode.PAYLOAD_TOO_LARGE
    status_code = 413


class ImageNotFoundException(CodeStoreException):
    """Raised when no image is stored for a code."""

    error_code = ErrorCode.NOT_FOUND
    status_code = 404


class StorageUnavailableException(CodeStoreException):
    """Raised when the content directory cannot be read."""

    error_code = ErrorCode.STORAGE_UNAVAILABLE
    status_code = 500


class StorageWriteFailedException(CodeStoreException):
    """Raised when writing, renaming or deleting a stored file fails."""

    error_code = ErrorCode.STORAGE_WRITE_FAILED
    status_code = 500
