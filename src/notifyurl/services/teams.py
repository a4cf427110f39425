# topmark:header:start
#
#   project      : NotifyURL
#   file         : teams.py
#   file_relpath : src/notifyurl/services/teams.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Microsoft Teams incoming webhook configuration.

A webhook URL

```
https://<org>.webhook.office.com/webhookb2/<group>@<tenant>/IncomingWebhook/<altId>/<groupOwner>/<extraId>
```

maps onto the service URL

```
teams://<group>@<tenant>/<altId>/<groupOwner>/<extraId>?host=<org>.webhook.office.com
```
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import ClassVar, Final

from notifyurl.codec.url import decompose
from notifyurl.core.errors import DecodeError
from notifyurl.schema.fields import text_field
from notifyurl.service import ServiceConfig

WEBHOOK_DOMAIN: Final[str] = ".webhook.office.com"
WEBHOOK_PATH: Final[str] = "webhookb2"
PROVIDER_NAME: Final[str] = "IncomingWebhook"

UUID4_LENGTH: Final[int] = 36
HASH_LENGTH: Final[int] = 32

_WEBHOOK_RE: Final[re.Pattern[str]] = re.compile(
    r"^https://(?P<org>[^./]+)"
    + re.escape(WEBHOOK_DOMAIN)
    + "/"
    + WEBHOOK_PATH
    + r"/(?P<group>[0-9a-f-]{36})@(?P<tenant>[0-9a-f-]{36})/"
    + PROVIDER_NAME
    + r"/(?P<alt_id>[0-9a-f]{32})/(?P<group_owner>[0-9a-f-]{36})/(?P<extra_id>[^/?#]+)"
)


@dataclass
class TeamsConfig(ServiceConfig):
    """Webhook identifiers and message options."""

    scheme: ClassVar[str] = "teams"
    force_query: ClassVar[bool] = True

    group: str = text_field(url="user", required=True)
    tenant: str = text_field(url="host", required=True)
    alt_id: str = text_field(url="path1", required=True)
    group_owner: str = text_field(url="path2", required=True)
    extra_id: str = text_field(url="path3", required=True)

    title: str = text_field(key="title")
    color: str = text_field(key="color")
    host: str = text_field(key="host", required=True, desc="Organization webhook domain")

    @classmethod
    def from_webhook_url(cls, webhook_url: str) -> TeamsConfig:
        """Build a configuration from a Teams incoming webhook URL.

        Raises:
            DecodeError: If ``webhook_url`` does not have the webhook layout.
        """
        match: re.Match[str] | None = _WEBHOOK_RE.match(webhook_url)
        if match is None:
            raise DecodeError("invalid webhook URL format", value=webhook_url)
        config: TeamsConfig = cls.defaults()
        config.host = match.group("org") + WEBHOOK_DOMAIN
        config.group = match.group("group")
        config.tenant = match.group("tenant")
        config.alt_id = match.group("alt_id")
        config.group_owner = match.group("group_owner")
        config.extra_id = match.group("extra_id")
        config.verify_webhook_parts()
        return config

    def webhook_url(self) -> str:
        """Return the Teams webhook URL this configuration posts to."""
        return (
            f"https://{self.host}/{WEBHOOK_PATH}/{self.group}@{self.tenant}/"
            f"{PROVIDER_NAME}/{self.alt_id}/{self.group_owner}/{self.extra_id}"
        )

    def verify_webhook_parts(self) -> None:
        """Check the lengths of the webhook identifiers.

        Raises:
            DecodeError: If an identifier has the wrong length.
        """
        expected: tuple[tuple[str, str, int], ...] = (
            ("group", self.group, UUID4_LENGTH),
            ("tenant", self.tenant, UUID4_LENGTH),
            ("alt_id", self.alt_id, HASH_LENGTH),
            ("group_owner", self.group_owner, UUID4_LENGTH),
        )
        for name, value, length in expected:
            if value and len(value) != length:
                raise DecodeError(
                    f"must be {length} characters, got {len(value)}", value=value, key=name
                )
        if not self.host.endswith(WEBHOOK_DOMAIN):
            raise DecodeError(f"host must end with {WEBHOOK_DOMAIN}", value=self.host, key="host")

    def _decode_url(self, url: str) -> None:
        decompose(self, url)
        self.verify_webhook_parts()
