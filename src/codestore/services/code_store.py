"""Code-keyed image upload and lookup service."""

import asyncio
import random
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Protocol

from starlette.datastructures import UploadFile

from ..exceptions import (
    ImageNotFoundException,
    InvalidCodeException,
    InvalidFileException,
    PayloadTooLargeException,
    StorageUnavailableException,
    StorageWriteFailedException,
)
from ..logging_config import get_logger
from ..models import ImageRecord
from ..storage import FileStorage, TimestampStore
from ..storage.file_storage import code_from_filename, safe_extension
from ..utils.codes import generate_code, is_valid_code

logger = get_logger(__name__)

DEFAULT_MAX_UPLOAD_BYTES = 5 * 1024 * 1024
_CHUNK_SIZE = 64 * 1024


class CodeLocks:
    """Per-code mutual exclusion for the delete-then-write sequence."""

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, code: str) -> asyncio.Lock:
        """Get the lock for a code, creating it on first use."""
        lock = self._locks.get(code)
        if lock is None:
            lock = self._locks[code] = asyncio.Lock()
        return lock


@dataclass
class StagedUpload:
    """An uploaded file that passed type and size checks."""

    temp_path: Path
    extension: str
    original_name: str
    size: int


class CodeStrategy(Protocol):
    """Decides which code a staged upload is stored under."""

    def resolve(self, storage: FileStorage) -> str: ...


@dataclass
class ExplicitCode:
    """Use the client-supplied code, which must be 4 digits."""

    raw: str | None

    def resolve(self, storage: FileStorage) -> str:
        if not is_valid_code(self.raw):
            raise InvalidCodeException("A valid 4-digit code is required")
        return self.raw


@dataclass
class RandomCode:
    """Draw a random code, resampling while the drawn code is already in use."""

    rng: random.Random
    attempts: int = 20

    def candidates(self) -> Iterator[str]:
        for _ in range(self.attempts):
            yield generate_code(self.rng)

    def resolve(self, storage: FileStorage) -> str:
        try:
            taken = {code_from_filename(name) for name in storage.list_image_files()}
        except OSError as e:
            raise StorageUnavailableException("Failed to read images directory") from e

        code = ""
        for code in self.candidates():
            if code not in taken:
                return code
            logger.debug("auto_code_collision", code=code)

        # Every draw collided; the last one replaces its current image
        logger.warning("auto_code_space_crowded", code=code, attempts=self.attempts)
        return code


class CodeStore:
    """Stores at most one image per 4-digit code and answers lookups."""

    def __init__(
        self,
        storage: FileStorage,
        timestamps: TimestampStore,
        max_upload_bytes: int = DEFAULT_MAX_UPLOAD_BYTES,
        auto_code_attempts: int = 20,
        rng: random.Random | None = None,
    ) -> None:
        """Initialize the code store."""
        self.storage = storage
        self.timestamps = timestamps
        self.max_upload_bytes = max_upload_bytes
        self.auto_code_attempts = auto_code_attempts
        self.rng = rng or random.Random()
        self.locks = CodeLocks()

    def _to_record(self, filename: str) -> ImageRecord:
        code = code_from_filename(filename)
        return ImageRecord(
            code=code,
            filename=filename,
            uploaded_at=self.timestamps.get(code),
        )

    def list_images(self) -> list[ImageRecord]:
        """
        List every stored image.

        Returns:
            One record per stored file, in directory order.
        """
        try:
            filenames = self.storage.list_image_files()
        except OSError as e:
            logger.error("storage_read_failed", error=str(e), path=str(self.storage.content_dir))
            raise StorageUnavailableException("Failed to read images directory") from e

        return [self._to_record(filename) for filename in filenames]

    def get_image(self, code: str) -> ImageRecord:
        """
        Get the stored image for a code.

        Raises:
            InvalidCodeException: If the code is not exactly 4 digits.
            ImageNotFoundException: If nothing is stored for the code.
            StorageUnavailableException: If the directory cannot be read.
        """
        if not is_valid_code(code):
            raise InvalidCodeException("A valid 4-digit code is required")

        try:
            filename = self.storage.find_image(code)
        except OSError as e:
            logger.error("storage_read_failed", error=str(e), code=code)
            raise StorageUnavailableException("Failed to read images directory") from e

        if filename is None:
            raise ImageNotFoundException("Image not found")

        return ImageRecord(code=code, filename=filename, uploaded_at=self.timestamps.get(code))

    async def upload_with_code(self, upload: UploadFile | None, code: str | None) -> ImageRecord:
        """Store an image under a client-supplied code, replacing any previous one."""
        return await self._upload(upload, ExplicitCode(code))

    async def upload_auto(self, upload: UploadFile | None) -> ImageRecord:
        """Store an image under a freshly generated code."""
        return await self._upload(upload, RandomCode(self.rng, self.auto_code_attempts))

    async def _upload(self, upload: UploadFile | None, strategy: CodeStrategy) -> ImageRecord:
        """Receive, validate and persist an upload under the strategy's code."""
        staged = await self._receive(upload)

        # Covers cancellation too; after a successful commit the temp file is gone
        try:
            code = strategy.resolve(self.storage)
            return await self._commit(staged, code)
        except BaseException:
            self.storage.discard(staged.temp_path)
            raise

    async def _receive(self, upload: UploadFile | None) -> StagedUpload:
        """
        Check the upload is an image and stream it into a temp file.

        The temp file is removed again if receiving fails or is cancelled.
        """
        if upload is None or not upload.filename:
            raise InvalidFileException("No image file provided")

        content_type = upload.content_type or ""
        if not content_type.startswith("image/"):
            logger.info("upload_rejected", reason="not_an_image", content_type=content_type)
            raise InvalidFileException("Only image files are allowed!")

        extension = safe_extension(upload.filename)
        temp_path = self.storage.new_temp_path(extension)
        size = 0
        try:
            with open(temp_path, "wb") as f:
                while chunk := await upload.read(_CHUNK_SIZE):
                    size += len(chunk)
                    if size > self.max_upload_bytes:
                        raise PayloadTooLargeException(
                            f"File too large (limit is {self.max_upload_bytes} bytes)"
                        )
                    f.write(chunk)
        except PayloadTooLargeException:
            self.storage.discard(temp_path)
            logger.info("upload_rejected", reason="too_large", limit=self.max_upload_bytes)
            raise
        except OSError as e:
            self.storage.discard(temp_path)
            logger.error("upload_write_failed", error=str(e), path=str(temp_path))
            raise StorageWriteFailedException("Failed to process the image") from e
        except BaseException:
            self.storage.discard(temp_path)
            raise

        return StagedUpload(
            temp_path=temp_path,
            extension=extension,
            original_name=upload.filename,
            size=size,
        )

    def _replace_and_record(
        self, staged: StagedUpload, code: str
    ) -> tuple[str, str | None, datetime]:
        """Move the staged file into place and record its upload time. Blocking."""
        filename, replaced = self.storage.replace_image(staged.temp_path, code, staged.extension)
        uploaded_at = self.timestamps.record(code, filename)
        return filename, replaced, uploaded_at

    async def _commit(self, staged: StagedUpload, code: str) -> ImageRecord:
        """Replace whatever is stored for a code with the staged file."""
        async with self.locks.get(code):
            try:
                filename, replaced, uploaded_at = await asyncio.to_thread(
                    self._replace_and_record, staged, code
                )
            except OSError as e:
                logger.error("image_commit_failed", code=code, error=str(e))
                raise StorageWriteFailedException("Failed to process the image") from e

        if replaced:
            logger.info("image_replaced", code=code, old=replaced, new=filename)
        logger.info("image_uploaded", code=code, filename=filename, size=staged.size)
        return ImageRecord(code=code, filename=filename, uploaded_at=uploaded_at)
