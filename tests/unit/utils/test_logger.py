"""Tests for configure_logging."""

import sys
from pathlib import Path

from loguru import logger

from statetable.model import Settings
from statetable.utils.logger import configure_logging


def test_file_sink(tmp_path: Path) -> None:
    log_file = tmp_path / "statetable.log"
    configure_logging(Settings(log_level="DEBUG", log_file=str(log_file)))
    try:
        logger.info("hello from the test")
    finally:
        logger.remove()
        logger.add(sys.stderr)

    content = log_file.read_text(encoding="utf-8")
    assert "hello from the test" in content


def test_level_filters_messages(tmp_path: Path) -> None:
    log_file = tmp_path / "statetable.log"
    configure_logging(Settings(log_level="WARNING", log_file=str(log_file)))
    try:
        logger.info("not written")
        logger.warning("written")
    finally:
        logger.remove()
        logger.add(sys.stderr)

    content = log_file.read_text(encoding="utf-8")
    assert "written" in content
    assert "not written" not in content
