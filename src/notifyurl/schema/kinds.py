# topmark:header:start
#
#   project      : NotifyURL
#   file         : kinds.py
#   file_relpath : src/notifyurl/schema/kinds.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Semantic field kinds and URL placement slots.

`FieldKind` classifies a configuration field for the value codec independently
of the Python type that stores it. `UrlPart` names the structural slot of a
service URL a field is serialized to; indexed path segments are expressed as
`UrlPart.PATH` plus a 1-based index.
"""

from __future__ import annotations

import re
from typing import Final

from notifyurl.core.enum_mixins import KeyedStrEnum


class FieldKind(KeyedStrEnum):
    """Codec-level classification of a configuration field."""

    TEXT = ("text", "Text")
    BOOL = ("bool", "Boolean", ("boolean",))
    INT = ("int", "Signed integer")
    UINT = ("uint", "Unsigned integer")
    ENUM = ("enum", "Enumeration")
    LIST = ("list", "List")
    MAP = ("map", "String-keyed map")
    COMPOSITE = ("composite", "Custom value", ("prop",))

    @property
    def is_integer(self) -> bool:
        """Whether values of this kind are width-checked integers."""
        return self in (FieldKind.INT, FieldKind.UINT)


class UrlPart(KeyedStrEnum):
    """Structural URL slot a field is placed into.

    ``QUERY`` means the field has no structural slot and is carried as a
    query parameter under its keys.
    """

    QUERY = ("query", "Query parameter", ("",))
    USER = ("user", "URL user name", ("username",))
    PASSWORD = ("password", "URL password", ("pass",))
    HOST = ("host", "Host name")
    PORT = ("port", "Port number")
    PATH = ("path", "Path segment", ("path1",))

    @property
    def is_slot(self) -> bool:
        """Whether this part is a structural slot rather than the query string."""
        return self is not UrlPart.QUERY

    @property
    def suffix(self) -> str:
        """Separator between this part and the one that follows it in a URL."""
        if self in (UrlPart.USER, UrlPart.HOST):
            return ":"
        if self is UrlPart.PASSWORD:
            return "@"
        return "/"


_PATH_INDEX_RE: Final[re.Pattern[str]] = re.compile(r"^path(?P<index>[0-9]+)$")


def parse_url_part(token: str | UrlPart) -> tuple[UrlPart, int]:
    """Parse a URL placement token into its part and path index.

    Accepted tokens are ``user``, ``pass``/``password``, ``host``, ``port``,
    ``path``/``path1``, ``pathN`` for N >= 2, and ``query`` or the empty string.

    Args:
        token (str | UrlPart): Placement token, or an already parsed part.

    Returns:
        tuple[UrlPart, int]: The part and its 1-based path index (0 unless the
            part is `UrlPart.PATH`).

    Raises:
        ValueError: If the token names no known URL part.
    """
    if isinstance(token, UrlPart):
        return token, 1 if token is UrlPart.PATH else 0

    part: UrlPart | None = UrlPart.parse(token)
    if part is not None:
        return part, 1 if part is UrlPart.PATH else 0

    match: re.Match[str] | None = _PATH_INDEX_RE.match(token.strip().lower())
    if match is not None:
        index = int(match.group("index"))
        if index >= 1:
            return UrlPart.PATH, index

    expected: str = ", ".join(UrlPart.accepted_tokens())
    raise ValueError(f"unknown URL part {token!r} (expected one of {expected}, or pathN)")
