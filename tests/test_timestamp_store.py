"""Tests for the upload timestamp store."""

from datetime import UTC, datetime
from pathlib import Path

import yaml

from codestore.storage import TimestampStore


class TestInMemory:
    """Tests for TimestampStore without a metadata directory."""

    def test_unknown_code(self) -> None:
        store = TimestampStore()
        assert store.persistent is False
        assert store.get("1234") is None

    def test_record_defaults_to_now(self) -> None:
        store = TimestampStore()
        before = datetime.now(UTC)
        recorded = store.record("1234", "image-1234.jpg")
        after = datetime.now(UTC)

        assert before <= recorded <= after
        assert store.get("1234") == recorded

    def test_record_overwrites(self) -> None:
        store = TimestampStore()
        store.record("1234", "image-1234.jpg", datetime(2024, 1, 1, tzinfo=UTC))
        store.record("1234", "image-1234.png", datetime(2024, 6, 1, tzinfo=UTC))
        assert store.get("1234") == datetime(2024, 6, 1, tzinfo=UTC)


class TestPersistent:
    """Tests for TimestampStore with YAML sidecars."""

    def test_writes_sidecar_record(self, tmp_path: Path) -> None:
        store = TimestampStore(tmp_path / "meta")
        when = datetime(2024, 3, 4, 5, 6, 7, tzinfo=UTC)
        store.record("0042", "image-0042.png", when)

        data = yaml.safe_load((tmp_path / "meta" / "0042.yml").read_text(encoding="utf-8"))
        assert data == {
            "code": "0042",
            "filename": "image-0042.png",
            "uploaded_at": when.isoformat(),
        }

    def test_survives_restart(self, tmp_path: Path) -> None:
        when = datetime(2024, 3, 4, 5, 6, 7, tzinfo=UTC)
        TimestampStore(tmp_path).record("0042", "image-0042.png", when)

        assert TimestampStore(tmp_path).get("0042") == when

    def test_missing_sidecar(self, tmp_path: Path) -> None:
        assert TimestampStore(tmp_path).get("0042") is None

    def test_corrupt_sidecar_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "0042.yml").write_text("uploaded_at: not-a-date\n", encoding="utf-8")
        assert TimestampStore(tmp_path).get("0042") is None

    def test_invalid_yaml_is_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "0042.yml").write_text("uploaded_at: [unclosed\n", encoding="utf-8")
        assert TimestampStore(tmp_path).get("0042") is None
