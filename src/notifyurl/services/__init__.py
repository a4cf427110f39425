# topmark:header:start
#
#   project      : NotifyURL
#   file         : __init__.py
#   file_relpath : src/notifyurl/services/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Built-in service configurations.

Service modules are imported on first use of `builtin_services()` so that
importing `notifyurl` stays cheap.
"""

from __future__ import annotations

import functools
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notifyurl.service import ServiceConfig


@functools.cache
def builtin_services() -> Mapping[str, type[ServiceConfig]]:
    """Return the built-in configuration types keyed by scheme."""
    from notifyurl.services.generic import GenericConfig
    from notifyurl.services.gotify import GotifyConfig
    from notifyurl.services.logger import LoggerConfig
    from notifyurl.services.ntfy import NtfyConfig
    from notifyurl.services.pushover import PushoverConfig
    from notifyurl.services.slack import SlackConfig
    from notifyurl.services.smtp import SMTPConfig
    from notifyurl.services.teams import TeamsConfig
    from notifyurl.services.telegram import TelegramConfig

    configs: tuple[type[ServiceConfig], ...] = (
        GenericConfig,
        GotifyConfig,
        LoggerConfig,
        NtfyConfig,
        PushoverConfig,
        SlackConfig,
        SMTPConfig,
        TeamsConfig,
        TelegramConfig,
    )
    return MappingProxyType({config.scheme: config for config in configs})
