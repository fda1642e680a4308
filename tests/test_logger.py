"""Unit tests for core.logger."""

import logging

import pytest

from signal_bot.core.logger import get_logger, setup_logging


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logger = get_logger()
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)


def test_setup_logging_writes_file(tmp_path):
    logger = setup_logging("debug", tmp_path / "logs", "bot.log")
    assert logger.level == logging.DEBUG
    assert len(logger.handlers) == 2
    get_logger("strategy").debug("hello file")
    for handler in logger.handlers:
        handler.flush()
    line = (tmp_path / "logs" / "bot.log").read_text(encoding="utf-8").strip()
    assert line.endswith("| signal_bot.strategy | hello file")
    assert "Z | DEBUG" in line


def test_setup_logging_console_only():
    logger = setup_logging("WARNING")
    assert logger.level == logging.WARNING
    assert len(logger.handlers) == 1


def test_setup_logging_file_only(tmp_path):
    logger = setup_logging(logging.ERROR, tmp_path, "bot.log", console=False)
    assert logger.level == logging.ERROR
    assert [type(h) for h in logger.handlers] == [logging.FileHandler]


def test_unknown_level_falls_back_to_info():
    assert setup_logging("chatty").level == logging.INFO


def test_rerun_replaces_own_handlers_only(tmp_path):
    logger = get_logger()
    foreign = logging.NullHandler()
    logger.addHandler(foreign)
    first = setup_logging("INFO", tmp_path, "bot.log")
    file_handler = [h for h in first.handlers if isinstance(h, logging.FileHandler)][0]

    setup_logging("INFO")
    assert foreign in logger.handlers
    assert file_handler not in logger.handlers
    assert file_handler.stream is None  # closed
    assert len(logger.handlers) == 2


def test_get_logger_names():
    assert get_logger().name == "signal_bot"
    assert get_logger("replay").name == "signal_bot.replay"
