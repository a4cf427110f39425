# topmark:header:start
#
#   project      : NotifyURL
#   file         : __init__.py
#   file_relpath : src/notifyurl/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""NotifyURL package.

NotifyURL configures notification back-ends through a single string format,
the *service URL*. Each back-end declares its settings once as a typed
dataclass; the library derives a schema from it and converts between records
and URLs in both directions, with validation, defaults, enum handling and
deterministic output.
"""

from __future__ import annotations

from notifyurl.codec.url import URLParts, compose, decompose, join_url, split_url
from notifyurl.codec.values import decode_value, encode_value
from notifyurl.constants import NOTIFYURL_VERSION
from notifyurl.core.errors import (
    DecodeError,
    EncodeError,
    EnumValueError,
    ItemCountError,
    MissingRequiredError,
    NotifyurlError,
    SchemaError,
    ServiceNotFoundError,
    ServiceStateError,
    ServiceURLError,
    UnsupportedKeyError,
)
from notifyurl.registry import ServiceRegistry
from notifyurl.resolver import PropKeyResolver
from notifyurl.schema.descriptor import FieldDescriptor, ValueSpec
from notifyurl.schema.enums import ENUM_INVALID, EnumFormatter, create_enum_formatter
from notifyurl.schema.extractor import get_descriptors
from notifyurl.schema.fields import (
    bool_field,
    enum_field,
    int_field,
    list_field,
    map_field,
    prop_field,
    text_field,
    uint_field,
)
from notifyurl.schema.kinds import FieldKind, UrlPart
from notifyurl.schema.props import ConfigProp
from notifyurl.service import Service, ServiceConfig, StandardService

__version__: str = NOTIFYURL_VERSION

__all__ = [
    "ENUM_INVALID",
    "ConfigProp",
    "DecodeError",
    "EncodeError",
    "EnumFormatter",
    "EnumValueError",
    "FieldDescriptor",
    "FieldKind",
    "ItemCountError",
    "MissingRequiredError",
    "NotifyurlError",
    "PropKeyResolver",
    "SchemaError",
    "Service",
    "ServiceConfig",
    "ServiceNotFoundError",
    "ServiceRegistry",
    "ServiceStateError",
    "ServiceURLError",
    "StandardService",
    "URLParts",
    "UnsupportedKeyError",
    "UrlPart",
    "ValueSpec",
    "bool_field",
    "compose",
    "create_enum_formatter",
    "decode_value",
    "decompose",
    "encode_value",
    "enum_field",
    "get_descriptors",
    "int_field",
    "join_url",
    "list_field",
    "map_field",
    "prop_field",
    "split_url",
    "text_field",
    "uint_field",
]
