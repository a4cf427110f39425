# topmark:header:start
#
#   project      : NotifyURL
#   file         : logger.py
#   file_relpath : src/notifyurl/services/logger.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Local service that writes notifications to the NotifyURL logger.

```
logger://?level=Warning&title=deploy
```
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING, ClassVar, Final

from notifyurl.config.logging import TRACE_LEVEL, get_logger
from notifyurl.schema.enums import EnumFormatter
from notifyurl.schema.fields import enum_field, text_field
from notifyurl.service import ServiceConfig, StandardService

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notifyurl.config.logging import NotifyurlLogger

logger: NotifyurlLogger = get_logger(__name__)


class LogLevel(IntEnum):
    """Severity notifications are logged with."""

    Trace = 0
    Debug = 1
    Info = 2
    Warning = 3
    Error = 4


LOG_LEVELS: Final[EnumFormatter] = EnumFormatter.from_enum(LogLevel, aliases={"warn": 3})

_LOGGING_LEVELS: Final[Mapping[LogLevel, int]] = {
    LogLevel.Trace: TRACE_LEVEL,
    LogLevel.Debug: logging.DEBUG,
    LogLevel.Info: logging.INFO,
    LogLevel.Warning: logging.WARNING,
    LogLevel.Error: logging.ERROR,
}


@dataclass
class LoggerConfig(ServiceConfig):
    """Severity and title prefix of logged notifications."""

    scheme: ClassVar[str] = "logger"

    level: LogLevel = enum_field(LOG_LEVELS, key="level", default="Info", desc="Log level")
    title: str = text_field(key="title", desc="Prefix written before the message")


class LoggerService(StandardService[LoggerConfig]):
    """Service that "delivers" messages by logging them."""

    def __init__(self) -> None:
        super().__init__(LoggerConfig)

    def send(self, message: str, params: Mapping[str, str] | None = None) -> None:
        config: LoggerConfig = self.params_config(params)
        text: str = f"{config.title}: {message}" if config.title else message
        logger.log(_LOGGING_LEVELS[config.level], "%s", text)
