"""Image domain model."""

from dataclasses import dataclass
from datetime import datetime

URL_PREFIX = "/uploads"


@dataclass(frozen=True)
class ImageRecord:
    """A stored image, reconstructed from the content directory."""

    code: str
    filename: str
    uploaded_at: datetime | None = None

    @property
    def image_url(self) -> str:
        """Public URL the stored file is served under."""
        return f"{URL_PREFIX}/{self.filename}"
