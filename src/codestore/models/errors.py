"""Error response models."""

from enum import Enum

from pydantic import BaseModel, Field


class ErrorCode(str, Enum):
    """Error codes for API responses."""

    INVALID_CODE = "INVALID_CODE"
    INVALID_FILE = "INVALID_FILE"
    PAYLOAD_TOO_LARGE = "PAYLOAD_TOO_LARGE"
    NOT_FOUND = "NOT_FOUND"
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"
    STORAGE_WRITE_FAILED = "STORAGE_WRITE_FAILED"


class ErrorResponse(BaseModel):
    """Unified error response format."""

    detail: str = Field(..., description="Error description")
    code: str = Field(..., description="Error code")
