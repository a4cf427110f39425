# topmark:header:start
#
#   project      : NotifyURL
#   file         : constants.py
#   file_relpath : src/notifyurl/constants.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""NotifyURL Constants."""

from __future__ import annotations

from importlib.metadata import version as get_version
from typing import Final

NOTIFYURL_VERSION: str = get_version("notifyurl")

# Separator between list items unless a field declares its own.
DEFAULT_ITEM_SEPARATOR: Final[str] = ","

# Map values are encoded as "key:value" pairs joined by ",".
MAP_PAIR_SEPARATOR: Final[str] = ","
MAP_KEY_VALUE_SEPARATOR: Final[str] = ":"

# Canonical boolean literals emitted by the encoder.
BOOL_TRUE: Final[str] = "Yes"
BOOL_FALSE: Final[str] = "No"

# Literals accepted by the boolean decoder (compared case-insensitively).
BOOL_TRUE_LITERALS: Final[frozenset[str]] = frozenset({"1", "true", "yes"})
BOOL_FALSE_LITERALS: Final[frozenset[str]] = frozenset({"0", "false", "no"})

# Prefix used to escape custom query keys that collide with config keys.
ESCAPED_KEY_PREFIX: Final[str] = "__"

# Prefixes of custom query keys carried by webhook-style configs.
HEADER_KEY_PREFIX: Final[str] = "@"
EXTRA_DATA_KEY_PREFIX: Final[str] = "$"

# Printed by enum formatters for ordinals outside the enumerated set.
ENUM_UNKNOWN_NAME: Final[str] = "?"

# Instance attribute holding the names of explicitly assigned fields.
ASSIGNED_FIELDS_ATTR: Final[str] = "_assigned_fields"
