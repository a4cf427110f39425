# topmark:header:start
#
#   project      : NotifyURL
#   file         : query.py
#   file_relpath : src/notifyurl/codec/query.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Query-string serialization of configuration fields.

Query parameters are handled as ordered ``(key, value)`` pairs of *decoded*
text; percent/form encoding is left to `notifyurl.codec.url`.

Custom parameters:
    Some services (e.g. the generic webhook) forward query parameters that are
    not configuration fields. When such a custom key collides with a field
    alias it is escaped with the ``__`` prefix on output, and unescaped again
    when read back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from notifyurl.config.logging import get_logger
from notifyurl.constants import ESCAPED_KEY_PREFIX
from notifyurl.core.errors import UnsupportedKeyError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from notifyurl.config.logging import NotifyurlLogger
    from notifyurl.resolver import PropKeyResolver

logger: NotifyurlLogger = get_logger(__name__)


def escape_key(key: str) -> str:
    """Prefix ``key`` so it can no longer match a field alias."""
    return ESCAPED_KEY_PREFIX + key


def unescape_key(key: str) -> str:
    """Undo `escape_key`; keys without the prefix are returned unchanged."""
    if key.startswith(ESCAPED_KEY_PREFIX):
        return key[len(ESCAPED_KEY_PREFIX) :]
    return key


def first_values(pairs: Iterable[tuple[str, str]]) -> list[tuple[str, str]]:
    """Drop repeated keys, keeping the first occurrence of each (in order)."""
    seen: set[str] = set()
    result: list[tuple[str, str]] = []
    for key, value in pairs:
        if key in seen:
            logger.debug("Ignoring repeated query key %r", key)
            continue
        seen.add(key)
        result.append((key, value))
    return result


def build_query(
    resolver: PropKeyResolver,
    custom: Iterable[tuple[str, str]] | None = None,
) -> list[tuple[str, str]]:
    """Serialize the query-carried fields of the bound record.

    Every field that is not placed in a structural URL slot is emitted under
    its canonical key, defaults included. Custom pairs are appended, escaping
    keys that would otherwise be read back as configuration fields.

    Args:
        resolver (PropKeyResolver): Resolver bound to the record to serialize.
        custom (Iterable[tuple[str, str]] | None): Extra parameters to carry.

    Returns:
        list[tuple[str, str]]: Pairs sorted by key, so equal records always
            produce identical query strings.

    Raises:
        EncodeError: If a field value cannot be encoded.
    """
    pairs: list[tuple[str, str]] = [(key, resolver.get(key)) for key in resolver.query_fields()]
    for key, value in custom or ():
        if key in resolver or key.startswith(ESCAPED_KEY_PREFIX):
            key = escape_key(key)
        pairs.append((key, value))
    pairs.sort(key=lambda pair: pair[0])
    return pairs


def set_config_props_from_query(
    resolver: PropKeyResolver,
    pairs: Iterable[tuple[str, str]],
    *,
    allow_custom: bool = False,
) -> list[tuple[str, str]]:
    """Assign query parameters to the fields of the bound record.

    Args:
        resolver (PropKeyResolver): Resolver bound to the target record.
        pairs (Iterable[tuple[str, str]]): Decoded query parameters.
        allow_custom (bool): Collect unknown and escaped keys instead of
            rejecting them.

    Returns:
        list[tuple[str, str]]: The custom parameters (keys unescaped), in input
            order. Always empty when ``allow_custom`` is False.

    Raises:
        UnsupportedKeyError: If a key matches no field and custom keys are not
            allowed.
        DecodeError: If a value does not match its field's kind.
    """
    custom: list[tuple[str, str]] = []
    for key, value in pairs:
        if allow_custom and key.startswith(ESCAPED_KEY_PREFIX):
            custom.append((unescape_key(key), value))
        elif key in resolver:
            resolver.set(key, value)
        elif allow_custom:
            custom.append((key, value))
        else:
            raise UnsupportedKeyError(key, type(resolver.config).__qualname__)
    if custom:
        logger.trace("Kept %d custom query parameter(s)", len(custom))
    return custom
