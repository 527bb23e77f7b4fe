import logging
from datetime import datetime

import pytest

from wordle_cup.config import Config
from wordle_cup.utils.logger import PACKAGE_LOGGER, configure_logging, log_file_path, setup_logger


@pytest.fixture
def log_dir(monkeypatch, tmp_path):
    directory = tmp_path / 'logs'
    monkeypatch.setattr(Config, 'LOG_DIR', str(directory))
    monkeypatch.setattr(Config, 'LOG_LEVEL', 'INFO')
    monkeypatch.setattr(Config, 'DEBUG', False)
    yield directory

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()


def test_service_loggers_reach_the_day_file(log_dir):
    package_logger = configure_logging(force=True)
    logging.getLogger('wordle_cup.services.scoring').info("Day 100: player 9 scored 3")
    for handler in package_logger.handlers:
        handler.flush()

    path = log_file_path()
    assert path.parent == log_dir
    contents = path.read_text(encoding='utf-8')
    assert "wordle_cup.services.scoring - INFO - Day 100: player 9 scored 3" in contents


def test_day_file_name():
    assert log_file_path(datetime(2024, 2, 1)).name == 'wordle_cup_20240201.log'


def test_level_follows_config(log_dir, monkeypatch):
    monkeypatch.setattr(Config, 'LOG_LEVEL', 'warning')
    assert configure_logging(force=True).level == logging.WARNING

    monkeypatch.setattr(Config, 'LOG_LEVEL', 'nonsense')
    assert configure_logging(force=True).level == logging.INFO

    monkeypatch.setattr(Config, 'DEBUG', True)
    assert configure_logging(force=True).level == logging.DEBUG


def test_empty_log_dir_logs_to_console_only(log_dir, monkeypatch):
    monkeypatch.setattr(Config, 'LOG_DIR', '')
    package_logger = configure_logging(force=True)

    assert log_file_path() is None
    assert [type(h) for h in package_logger.handlers] == [logging.StreamHandler]
    assert not log_dir.exists()


def test_setup_logger_does_not_duplicate_handlers(log_dir):
    configure_logging(force=True)
    handlers = list(logging.getLogger(PACKAGE_LOGGER).handlers)

    first = setup_logger('wordle_cup.cogs.results')
    second = setup_logger('wordle_cup.cogs.results')

    assert first is second
    assert first.handlers == []
    assert logging.getLogger(PACKAGE_LOGGER).handlers == handlers
