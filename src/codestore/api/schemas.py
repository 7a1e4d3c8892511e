"""Pydantic request/response schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models import ImageRecord


class ImageResponse(BaseModel):
    """Stored image response."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    code: str = Field(..., description="4-digit image code")
    image_url: str = Field(..., description="URL the image is served under")
    uploaded_at: datetime | None = Field(
        default=None, description="Last upload time, if known"
    )

    @classmethod
    def from_record(cls, record: ImageRecord) -> "ImageResponse":
        """Build a response from a domain record."""
        return cls(code=record.code, image_url=record.image_url, uploaded_at=record.uploaded_at)
