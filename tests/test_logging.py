from __future__ import annotations

import io
import logging
from pathlib import Path
from warehouse_heartbeat.logging_config import configure_logging


def test_configure_logging_adds_stream_handler() -> None:
    # Ensure configuring logging doesn't raise and attaches a StreamHandler
    configure_logging(None)
    root = logging.getLogger()
    assert any(isinstance(h, logging.StreamHandler) for h in root.handlers)


def test_configure_logging_writes_file_and_custom_stream(tmp_path: Path) -> None:
    stream = io.StringIO()
    log_path = tmp_path / "logs" / "heartbeat.log"
    configure_logging(log_path, stream=stream)

    logging.getLogger("warehouse_heartbeat.test").info("hello feeds")
    for h in logging.getLogger().handlers:
        h.flush()

    assert "| INFO | warehouse_heartbeat.test | hello feeds" in stream.getvalue()
    assert "hello feeds" in log_path.read_text(encoding="utf-8")
    configure_logging(None)
