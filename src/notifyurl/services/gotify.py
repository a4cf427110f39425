# topmark:header:start
#
#   project      : NotifyURL
#   file         : gotify.py
#   file_relpath : src/notifyurl/services/gotify.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Gotify configuration.

The host field also carries the port and the application token is the only
path segment; a server sub-path goes into the query:

```
gotify://push.example.com:8443/Aaa.bbb.ccc?priority=5&subpath=gotify
```
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Final

from notifyurl.schema.fields import bool_field, int_field, text_field
from notifyurl.service import ServiceConfig

TOKEN_PATTERN: Final[re.Pattern[str]] = re.compile(r"^A[-_.a-zA-Z0-9]{14}$")


@dataclass
class GotifyConfig(ServiceConfig):
    """Gotify server, application token and message options."""

    scheme: ClassVar[str] = "gotify"

    host: str = text_field(url="host", required=True, desc="Server hostname (and optionally port)")
    token: str = text_field(url="path", required=True, desc="Application token")
    path: str = text_field(key="subpath", desc="Server subpath")
    priority: int = int_field(key="priority", default="0")
    title: str = text_field(key="title", default="NotifyURL notification")
    disable_tls: bool = bool_field(key="disabletls", default="No")

    def has_valid_token(self) -> bool:
        """Return True if ``token`` looks like a Gotify application token."""
        return TOKEN_PATTERN.fullmatch(self.token) is not None

    def message_url(self) -> str:
        """Return the REST endpoint messages are posted to."""
        protocol: str = "http" if self.disable_tls else "https"
        prefix: str = f"/{self.path}" if self.path else ""
        return f"{protocol}://{self.host}{prefix}/message?token={self.token}"
