"""Unit tests for loguru sink configuration."""

import sys

from loguru import logger

from src.core.logging_config import configure_logging


def test_file_sink_receives_debug_records(tmp_path):
    log_file = tmp_path / "engine.log"
    configure_logging("ERROR", str(log_file))
    try:
        logger.debug("ledger rebuilt")
    finally:
        logger.remove()
        logger.add(sys.stderr)

    assert "ledger rebuilt" in log_file.read_text(encoding="utf-8")
