"""
Logging for the Wordle Cup bot.

Handlers are attached once to the "wordle_cup" package logger. Module loggers
(``setup_logger(__name__)`` in the bot, cogs and database layer,
``logging.getLogger(__name__)`` in the services) propagate to it, so score
recording, medal moves and cup rollovers all land in the same console stream
and day file. LOG_LEVEL and LOG_DIR come from Config; DEBUG overrides the level.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from wordle_cup.config import Config

PACKAGE_LOGGER = 'wordle_cup'
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def log_level() -> int:
    if Config.DEBUG:
        return logging.DEBUG
    level = logging.getLevelName(Config.LOG_LEVEL.upper())
    # Unknown names come back as "Level X"; Config.validate() reports them
    return level if isinstance(level, int) else logging.INFO


def log_file_path(day: Optional[datetime] = None) -> Optional[Path]:
    """Log file for a day, None when LOG_DIR is empty (console only)."""
    if not Config.LOG_DIR:
        return None
    day = day or datetime.now()
    return Path(Config.LOG_DIR) / f'wordle_cup_{day.strftime("%Y%m%d")}.log'


def configure_logging(force: bool = False) -> logging.Logger:
    """Attach console and file handlers to the package logger."""
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.handlers and not force:
        return package_logger

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    level = log_level()
    package_logger.setLevel(level)
    formatter = logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    path = log_file_path()
    if path is not None:
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding='utf-8')
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    return package_logger


def setup_logger(name: str) -> logging.Logger:
    """Logger for a module, with the package handlers in place"""
    configure_logging()
    return logging.getLogger(name)
