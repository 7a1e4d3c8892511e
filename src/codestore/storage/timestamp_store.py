"""Upload timestamp storage with optional YAML sidecars."""

from datetime import UTC, datetime
from pathlib import Path

import yaml

from ..logging_config import get_logger

logger = get_logger(__name__)


class TimestampStore:
    """Tracks when each code was last uploaded.

    The in-memory mapping is always kept. When a metadata directory is given,
    each code also gets a `<code>.yml` record there so timestamps survive a
    restart. The content directory stays the source of truth for which images
    exist; this store only enriches records.
    """

    def __init__(self, metadata_dir: Path | None = None) -> None:
        """Initialize timestamp store."""
        self.metadata_dir = Path(metadata_dir) if metadata_dir is not None else None
        self._timestamps: dict[str, datetime] = {}

    @property
    def persistent(self) -> bool:
        """Whether timestamps are written to disk."""
        return self.metadata_dir is not None

    def ensure_directories(self) -> None:
        """Ensure the metadata directory exists."""
        if self.metadata_dir is not None:
            self.metadata_dir.mkdir(parents=True, exist_ok=True)

    def _get_record_path(self, metadata_dir: Path, code: str) -> Path:
        return metadata_dir / f"{code}.yml"

    def record(self, code: str, filename: str, uploaded_at: datetime | None = None) -> datetime:
        """
        Record an upload for a code.

        Args:
            code: The image code.
            filename: Stored file name, kept in the sidecar for reference.
            uploaded_at: Upload time; defaults to now (UTC).

        Returns:
            The recorded timestamp.
        """
        uploaded_at = uploaded_at or datetime.now(UTC)
        self._timestamps[code] = uploaded_at

        if self.metadata_dir is not None:
            data = {"code": code, "filename": filename, "uploaded_at": uploaded_at.isoformat()}
            try:
                self.ensure_directories()
                record_path = self._get_record_path(self.metadata_dir, code)
                with open(record_path, "w", encoding="utf-8") as f:
                    yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)
            except OSError as e:
                logger.warning("timestamp_persist_failed", code=code, error=str(e))

        return uploaded_at

    def get(self, code: str) -> datetime | None:
        """Get the last upload time for a code, if known."""
        if code in self._timestamps:
            return self._timestamps[code]
        if self.metadata_dir is None:
            return None

        uploaded_at = self._load(self.metadata_dir, code)
        if uploaded_at is not None:
            self._timestamps[code] = uploaded_at
        return uploaded_at

    def _load(self, metadata_dir: Path, code: str) -> datetime | None:
        """Load a timestamp from the sidecar record."""
        record_path = self._get_record_path(metadata_dir, code)
        if not record_path.exists():
            return None
        try:
            with open(record_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            return self._parse_datetime(data.get("uploaded_at"))
        except (OSError, yaml.YAMLError) as e:
            logger.warning("timestamp_load_failed", code=code, error=str(e))
            return None

    def _parse_datetime(self, value: str | datetime | None) -> datetime | None:
        """Parse a datetime stored in YAML."""
        if value is None:
            return None
        if isinstance(value, datetime):
            return value
        try:
            return datetime.fromisoformat(value)
        except ValueError:
            return None
