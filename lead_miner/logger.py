"""Logging setup for **LeadMiner**.

Handlers live on the project logger ``LeadMiner`` only; modules take a
child from :func:`get_logger` so records carry their origin::

    log = get_logger("fetcher")      # -> "LeadMiner.fetcher"
    log.debug("Cache hit: %s", url)

Console records go to *stderr*: the CLI prints the scrape response as JSON
on stdout and the two streams must not mix.
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

LOGGER_NAME: Final[str] = "LeadMiner"
DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

LevelT = Union[int, str]


def resolve_level(level: LevelT) -> int:
    """``"debug"``, ``"INFO"`` or ``10`` -> numeric level. Unknown names raise ValueError."""
    if isinstance(level, int):
        return level
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return value


def _build_handlers(log_file: Optional[Union[str, Path]], fmt: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def configure(
    *,
    level: LevelT = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """Applies *level* and handlers to the project logger and returns it.

    With ``replace_handlers`` the previous handlers are detached and closed
    (file handles included); otherwise the new ones are appended.
    """
    project = logging.getLogger(LOGGER_NAME)
    project.setLevel(resolve_level(level))

    if replace_handlers:
        for handler in list(project.handlers):
            project.removeHandler(handler)
            handler.close()

    for handler in _build_handlers(log_file, log_format):
        project.addHandler(handler)

    project.propagate = False
    return project


def init_logging(
    level: LevelT = "WARNING",
    log_file: Optional[Union[str, Path]] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """CLI entry: fresh handlers at *level*."""
    return configure(level=level, log_file=log_file, log_format=log_format, replace_handlers=True)


def get_logger(component: Optional[str] = None) -> logging.Logger:
    if not component:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{component}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger", "resolve_level"]
