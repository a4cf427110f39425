# topmark:header:start
#
#   project      : NotifyURL
#   file         : logging.py
#   file_relpath : src/notifyurl/config/logging.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Logging for NotifyURL: a TRACE level, a typed logger and colored output.

Every module obtains its logger through `get_logger(__name__)`. The codec logs
decode and encode steps at DEBUG and per-field detail at TRACE; caller mistakes
such as bad values, unknown keys or missing fields are raised, never logged as
warnings. Applications opt into console output with `setup_logging()`, which
falls back to the ``NOTIFYURL_LOG_LEVEL`` environment variable.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import TYPE_CHECKING, Final, cast

from yachalk import chalk

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping
    from typing import TextIO

TRACE_LEVEL: Final[int] = logging.DEBUG - 5

LOG_LEVEL_ENV_VAR: Final[str] = "NOTIFYURL_LOG_LEVEL"

LOG_FORMAT: Final[str] = "[%(levelname)s] %(message)s"
DEBUG_LOG_FORMAT: Final[str] = "[%(levelname)s] %(name)s:%(lineno)d %(message)s"


class NotifyurlLogger(logging.Logger):
    """Logger with a `trace()` method for the level below DEBUG."""

    def trace(
        self,
        msg: object,
        *args: object,
        extra: Mapping[str, object] | None = None,
    ) -> None:
        """Log ``msg % args`` at TRACE level.

        Args:
            msg (object): Message, possibly with ``%`` placeholders.
            *args (object): Arguments merged into ``msg``.
            extra (Mapping[str, object] | None): Extra record attributes.
        """
        if self.isEnabledFor(TRACE_LEVEL):
            self._log(TRACE_LEVEL, msg, args, extra=extra, stacklevel=2)


if logging.getLevelName(TRACE_LEVEL) != "TRACE":
    logging.addLevelName(TRACE_LEVEL, "TRACE")

logging.setLoggerClass(NotifyurlLogger)


# Highest threshold first; the first one the record reaches picks the color.
_LEVEL_STYLES: Final[tuple[tuple[int, Callable[[str], str]], ...]] = (
    (logging.CRITICAL, chalk.red_bright),
    (logging.ERROR, chalk.red),
    (logging.WARNING, chalk.yellow),
    (logging.INFO, chalk.green),
    (logging.DEBUG, chalk.gray),
    (TRACE_LEVEL, chalk.blue),
)


class ChalkFormatter(logging.Formatter):
    """Formatter that colors each line according to the record's level."""

    def format(self, record: logging.LogRecord) -> str:
        text: str = super().format(record)
        for threshold, style in _LEVEL_STYLES:
            if record.levelno >= threshold:
                return style(text)
        return chalk.dim(text)


_LEVEL_NAMES: Final[Mapping[str, int]] = {
    "TRACE": TRACE_LEVEL,
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
    "FATAL": logging.CRITICAL,
    "NOTSET": logging.NOTSET,
}


def level_from_name(name: str) -> int | None:
    """Map a level name (any case) or a decimal string to a numeric level.

    Returns None for anything else.
    """
    token: str = name.strip().upper()
    if token.isdigit():
        return int(token)
    return _LEVEL_NAMES.get(token)


def resolve_env_log_level() -> int | None:
    """Level named by ``NOTIFYURL_LOG_LEVEL``, or None when unset or unknown."""
    raw: str = os.environ.get(LOG_LEVEL_ENV_VAR, "")
    return level_from_name(raw) if raw else None


def setup_logging(level: int | None = None, stream: TextIO | None = None) -> None:
    """Route all logging to a single colored console handler.

    Existing root handlers are replaced, so repeated calls never duplicate
    output.

    Args:
        level (int | None): Root level. When None, the environment variable is
            consulted and CRITICAL is used if it is unset.
        stream (TextIO | None): Destination stream, ``sys.stdout`` by default.
    """
    if level is None:
        level = resolve_env_log_level() or logging.CRITICAL

    root: logging.Logger = logging.getLogger()
    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(ChalkFormatter(LOG_FORMAT if level >= logging.INFO else DEBUG_LOG_FORMAT))
    root.addHandler(handler)


def get_logger(name: str) -> NotifyurlLogger:
    """Return the `NotifyurlLogger` registered under ``name``."""
    return cast("NotifyurlLogger", logging.getLogger(name))
