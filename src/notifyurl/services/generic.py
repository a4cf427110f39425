# topmark:header:start
#
#   project      : NotifyURL
#   file         : generic.py
#   file_relpath : src/notifyurl/services/generic.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Generic webhook configuration.

The service URL *is* the webhook URL with its scheme replaced by ``generic``.
Query parameters are split three ways:

    - ``@Name=value`` becomes an HTTP header (name normalized to ``Title-Case``);
    - ``$name=value`` becomes an extra payload field;
    - keys matching a configuration field set that field; everything else is
      forwarded to the webhook. Forwarded keys that collide with a field are
      written with a ``__`` prefix.

```
generic://example.com/api/notify?@Authorization=Bearer+x&$source=ci&template=json&__title=raw
```
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Final

from notifyurl.codec.query import build_query, first_values, set_config_props_from_query
from notifyurl.codec.url import URLParts, join_url, split_url
from notifyurl.config.logging import get_logger
from notifyurl.constants import EXTRA_DATA_KEY_PREFIX, HEADER_KEY_PREFIX
from notifyurl.core.errors import ServiceURLError
from notifyurl.schema.fields import bool_field, text_field
from notifyurl.service import ServiceConfig

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notifyurl.config.logging import NotifyurlLogger

logger: NotifyurlLogger = get_logger(__name__)

DEFAULT_WEBHOOK_SCHEME: Final[str] = "https"


def normalized_header_key(key: str) -> str:
    """Return ``key`` in ``Title-Case`` with dashes between words.

    ``contentType`` and ``content-type`` both become ``Content-Type``.
    """
    chars: list[str] = []
    for i, c in enumerate(key):
        if "A" <= c <= "Z":
            if i > 0 and key[i - 1] != "-":
                chars.append("-")
        elif i == 0 or key[i - 1] == "-":
            c = c.upper()
        chars.append(c)
    return "".join(chars)


def strip_custom_query_values(
    pairs: Iterable[tuple[str, str]],
) -> tuple[dict[str, str], dict[str, str], list[tuple[str, str]]]:
    """Separate header and extra-data parameters from the rest of a query.

    Returns:
        tuple[dict[str, str], dict[str, str], list[tuple[str, str]]]: Headers,
            extra data, and the remaining pairs in input order.
    """
    headers: dict[str, str] = {}
    extra_data: dict[str, str] = {}
    rest: list[tuple[str, str]] = []
    for key, value in pairs:
        if key.startswith(HEADER_KEY_PREFIX):
            headers[normalized_header_key(key[1:])] = value
        elif key.startswith(EXTRA_DATA_KEY_PREFIX):
            extra_data[key[1:]] = value
        else:
            rest.append((key, value))
    return headers, extra_data, rest


def _default_webhook() -> URLParts:
    return URLParts(scheme=DEFAULT_WEBHOOK_SCHEME)


@dataclass
class GenericConfig(ServiceConfig):
    """Webhook target, request options and custom parameters."""

    scheme: ClassVar[str] = "generic"

    content_type: str = text_field(
        key="contenttype",
        default="application/json",
        desc="The value of the Content-Type header",
    )
    disable_tls: bool = bool_field(key="disabletls", default="No")
    template: str = text_field(
        key="template", desc="The template used for creating the request payload"
    )
    title: str = text_field(key="title", default="")
    title_key: str = text_field(
        key="titlekey", default="title", desc="The key that will be used for the title value"
    )
    message_key: str = text_field(
        key="messagekey",
        default="message",
        desc="The key that will be used for the message value",
    )
    request_method: str = text_field(key="method", default="POST")

    # Webhook state; not part of the configuration schema.
    webhook: URLParts = field(default_factory=_default_webhook)
    custom_query: list[tuple[str, str]] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    extra_data: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_webhook_url(cls, webhook_url: str) -> GenericConfig:
        """Build a configuration that posts to ``webhook_url``.

        Every query parameter of the webhook URL is kept as a custom parameter,
        except ``@header`` and ``$extra`` parameters.
        """
        parts: URLParts = split_url(webhook_url)
        config: GenericConfig = cls.defaults()
        config.headers, config.extra_data, config.custom_query = strip_custom_query_values(
            first_values(parts.query)
        )
        config.webhook = dataclasses.replace(parts, query=(), force_query=False)
        config.disable_tls = parts.scheme == "http"
        return config

    def webhook_url(self) -> str:
        """Return the URL requests are sent to."""
        scheme: str = "http" if self.disable_tls else DEFAULT_WEBHOOK_SCHEME
        return join_url(
            dataclasses.replace(self.webhook, scheme=scheme, query=tuple(self.custom_query))
        )

    def get_url(self) -> str:
        pairs: list[tuple[str, str]] = build_query(self.resolver(), self.custom_query)
        pairs.extend((HEADER_KEY_PREFIX + key, value) for key, value in self.headers.items())
        pairs.extend(
            (EXTRA_DATA_KEY_PREFIX + key, value) for key, value in self.extra_data.items()
        )
        pairs.sort(key=lambda pair: pair[0])
        return join_url(dataclasses.replace(self.webhook, scheme=self.scheme, query=tuple(pairs)))

    def _decode_url(self, url: str) -> None:
        parts: URLParts = split_url(url)
        if parts.scheme != self.scheme:
            raise ServiceURLError(f"scheme {parts.scheme!r} does not match {self.scheme!r}")

        headers, extra_data, rest = strip_custom_query_values(first_values(parts.query))
        self.custom_query = set_config_props_from_query(self.resolver(), rest, allow_custom=True)
        self.headers = headers
        self.extra_data = extra_data
        self.webhook = dataclasses.replace(
            parts, scheme=DEFAULT_WEBHOOK_SCHEME, query=(), force_query=False
        )
        logger.debug(
            "Generic webhook: %d header(s), %d extra field(s), %d custom parameter(s)",
            len(headers),
            len(extra_data),
            len(self.custom_query),
        )
