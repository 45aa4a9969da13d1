import io
import logging
import sys
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1]))

from whispcli.log import build_logger, quiet_level


def test_levels_and_format():
    buf = io.StringIO()
    logger = build_logger("warn", stream=buf)
    logger.info("hidden")
    logger.warning("shown")
    assert "hidden" not in buf.getvalue()
    assert "| WARNING | shown" in buf.getvalue()


def test_silent_drops_everything():
    buf = io.StringIO()
    logger = build_logger("silent", stream=buf)
    logger.critical("nope")
    assert buf.getvalue() == ""


def test_rebuild_replaces_handler():
    first, second = io.StringIO(), io.StringIO()
    build_logger("info", stream=first)
    logger = build_logger("info", stream=second)
    logger.info("once")
    assert first.getvalue() == ""
    assert len(logger.handlers) == 1


def test_quiet_level():
    assert quiet_level("debug") == "error"
    assert quiet_level("info") == "error"
    assert quiet_level("silent") == "silent"
    assert logging.getLevelName(logging.ERROR) == "ERROR"


def test_unknown_level():
    with pytest.raises(ValueError):
        build_logger("verbose")
