"""Logging setup: shared handlers attached to every chatroute logger."""

import logging

from .ansi import LEVEL_STYLES, make_style, should_colorize
from .debug import is_debug, set_debug

__all__ = [
    "LogObjects",
    "ScreenLogFormatter",
    "get_logger",
    "init_logger",
]

FILE_FORMAT = r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"


class LogObjects:
    """Handlers given to the loggers created by `get_logger`."""

    handlers: list[logging.Handler] = []


class ScreenLogFormatter(logging.Formatter):
    """Terminal formatter: bare messages, colored by level when supported.

    In debug mode the logger name and source location are added.
    """

    def __init__(self) -> None:
        super().__init__()
        log_format = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        colored = should_colorize()
        self._plain = logging.Formatter(log_format)
        self._by_level: dict[int, logging.Formatter] = {}
        for level, style in LEVEL_STYLES.items():
            prefix, suffix = make_style(*style) if colored else ("", "")
            self._by_level[level] = logging.Formatter(prefix + log_format + suffix)

    def format(self, record: logging.LogRecord) -> str:
        return self._by_level.get(record.levelno, self._plain).format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Create the shared handlers, replacing previous ones.

    Args:
        filename: Also write logs to this file
        force_debug: Turn debug mode on
    """
    if force_debug:
        set_debug(True)

    LogObjects.handlers.clear()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=FILE_FORMAT))
        LogObjects.handlers.append(file_handler)
    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(ScreenLogFormatter())
    LogObjects.handlers.append(stream_handler)


def get_logger(name: str = "chatroute", level: int | None = None) -> logging.Logger:
    """Return the logger `name`, wired to the shared handlers.

    Args:
        name: Logger name
        level: Logger level; DEBUG in debug mode, WARNING otherwise when unset

    Returns:
        The logger instance
    """
    logger = logging.getLogger(name)
    if level is None:
        level = logging.DEBUG if is_debug() else logging.WARNING
    logger.setLevel(level)
    logger.propagate = False
    for handler in LogObjects.handlers:
        if handler not in logger.handlers:
            logger.addHandler(handler)
    logger.debug('Logger "%s" initialized', name)
    return logger
