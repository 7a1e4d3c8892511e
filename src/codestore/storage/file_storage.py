"""File system operations for the content directory."""

import os
import re
from pathlib import Path
from uuid import uuid4

IMAGE_PREFIX = "image-"
TEMP_PREFIX = "temp-"

_EXTENSION_PATTERN = re.compile(r"\.[A-Za-z0-9]{1,10}")


def safe_extension(original_name: str | None) -> str:
    """
    Extract the file extension from a client-supplied file name.

    Args:
        original_name: Name as sent by the client, e.g. 'holiday.JPG'.

    Returns:
        The suffix including the dot, or '' when missing or unusual.
    """
    if not original_name:
        return ""
    suffix = Path(original_name).suffix
    if not _EXTENSION_PATTERN.fullmatch(suffix):
        return ""
    return suffix


def image_filename(code: str, extension: str) -> str:
    """Get the stored file name for a code."""
    return f"{IMAGE_PREFIX}{code}{extension}"


def code_from_filename(filename: str) -> str:
    """Get the code from a stored file name: the 4 characters after the first dash."""
    return filename.split("-", 1)[1][:4]


class FileStorage:
    """Flat content directory holding one file per code.

    Errors from the underlying file system propagate as OSError; the service
    layer translates them into API errors.
    """

    def __init__(self, content_dir: Path) -> None:
        """Initialize file storage."""
        self.content_dir = Path(content_dir)

    def ensure_directories(self) -> None:
        """Ensure the content directory exists."""
        self.content_dir.mkdir(parents=True, exist_ok=True)

    def get_path(self, filename: str) -> Path:
        """Get the absolute path of a file in the content directory."""
        return self.content_dir / filename

    def list_image_files(self) -> list[str]:
        """List stored image file names in directory order."""
        with os.scandir(self.content_dir) as entries:
            return [
                entry.name
                for entry in entries
                if entry.name.startswith(IMAGE_PREFIX) and entry.is_file()
            ]

    def find_image(self, code: str) -> str | None:
        """Find the stored file name for a code, if any."""
        prefix = f"{IMAGE_PREFIX}{code}"
        for filename in self.list_image_files():
            if filename.startswith(prefix):
                return filename
        return None

    def new_temp_path(self, extension: str) -> Path:
        """Get a fresh temp file path for an incoming upload."""
        return self.get_path(f"{TEMP_PREFIX}{uuid4().hex}{extension}")

    def discard(self, path: Path) -> None:
        """Remove a file if it still exists."""
        path.unlink(missing_ok=True)

    def replace_image(self, temp_path: Path, code: str, extension: str) -> tuple[str, str | None]:
        """
        Move an uploaded temp file into place for a code.

        Any existing file for the code is deleted first, so at most one file
        per code exists afterwards.

        Args:
            temp_path: Path of the received upload.
            code: Validated 4-digit code.
            extension: Extension for the stored file.

        Returns:
            Tuple of the new file name and the replaced file name (or None).
        """
        existing = self.find_image(code)
        if existing:
            self.get_path(existing).unlink()

        filename = image_filename(code, extension)
        os.replace(temp_path, self.get_path(filename))
        return filename, existing
