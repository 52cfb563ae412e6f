"""Unit tests for structured logging configuration."""

from __future__ import annotations

import json

from core.constants import DEFAULT_LOG_LEVEL
from core.logging_config import configure_logging, get_logger


def test_logger_writes_json_events_to_stderr(capsys) -> None:
    """Enabled events should render as one JSON object per line on stderr."""
    configure_logging("INFO")
    try:
        get_logger("storekey.test").info("layout_checked", item_count=3)
    finally:
        configure_logging(DEFAULT_LOG_LEVEL)
    captured = capsys.readouterr()

    payload = json.loads(captured.err.strip().splitlines()[-1])
    assert payload["event"] == "layout_checked" and payload["item_count"] == 3
    assert captured.out == ""


def test_logger_filters_events_below_level(capsys) -> None:
    """Events below the configured level should be dropped."""
    configure_logging("WARNING")

    get_logger("storekey.test").info("hidden_event")

    assert "hidden_event" not in capsys.readouterr().err
