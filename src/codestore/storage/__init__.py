"""Storage layer."""

from .file_storage import FileStorage
from .timestamp_store import TimestampStore

__all__ = ["FileStorage", "TimestampStore"]
