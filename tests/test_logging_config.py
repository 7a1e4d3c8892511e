"""Tests for logging setup."""

import pytest
import structlog

from codestore.logging_config import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    """Drop configuration bound to the captured stream."""
    yield
    structlog.reset_defaults()


def test_console_logger_filters_by_level(capsys):
    """Test the configured logger drops events below the level."""
    setup_logging("WARNING")
    logger = get_logger("codestore.test")

    logger.info("hidden_event")
    logger.warning("shown_event", code="1234")

    err = capsys.readouterr().err
    assert "hidden_event" not in err
    assert "shown_event" in err
    assert "1234" in err


def test_json_logger_emits_json(capsys):
    """Test JSON output carries the event and its fields."""
    setup_logging("INFO", json_format=True)
    get_logger("codestore.test").info("image_uploaded", code="0007")

    err = capsys.readouterr().err
    assert '"event": "image_uploaded"' in err
    assert '"code": "0007"' in err
