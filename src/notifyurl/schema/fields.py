# topmark:header:start
#
#   project      : NotifyURL
#   file         : fields.py
#   file_relpath : src/notifyurl/schema/fields.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Declarative field constructors for configuration dataclasses.

Each constructor returns a ``dataclasses.field()`` whose Python default is the
kind's zero value and whose metadata carries a `FieldSpec`. The schema is
therefore written once, next to the attribute it describes:

```python
@dataclass
class MailConfig(ServiceConfig):
    scheme: ClassVar[str] = "mail"

    host: str = text_field(url="host", required=True, desc="SMTP server")
    port: int = uint_field(bits=16, url="port", default="25")
    to_addresses: list[str] = list_field(key="toaddresses,to", required=True)
    use_html: bool = bool_field(key="usehtml", default="No")
```

Common keyword arguments:
    key: Query-key aliases, either ``"primary,alias"`` or a sequence. Query-only
        fields without keys get their lowercased attribute name as key.
    url: URL placement token (``user``, ``pass``, ``host``, ``port``, ``path``,
        ``path2``, ...) or a `UrlPart`. Defaults to the query string.
    default: Raw default text, decoded when defaults are applied.
    required: Whether the field must be present in a parsed URL.
    desc: Human description.

Plain dataclass fields declared without these constructors are private to the
record and invisible to the codec. Nothing here is validated eagerly; schema
errors surface when `notifyurl.schema.extractor.get_descriptors` first
inspects the type.
"""

from __future__ import annotations

from dataclasses import field
from typing import TYPE_CHECKING, Any

from notifyurl.codec.values import zero_value
from notifyurl.constants import DEFAULT_ITEM_SEPARATOR
from notifyurl.schema.descriptor import SCHEMA_METADATA_KEY, FieldSpec, ValueSpec
from notifyurl.schema.kinds import FieldKind, UrlPart

if TYPE_CHECKING:
    from collections.abc import Sequence

    from notifyurl.schema.enums import EnumFormatter


def _normalize_keys(key: str | Sequence[str] | None) -> tuple[str, ...]:
    """Split a ``"a,b"`` key declaration (or copy a sequence) into a tuple."""
    if key is None:
        return ()
    if isinstance(key, str):
        return tuple(part.strip() for part in key.split(","))
    return tuple(key)


def _schema_field(
    value: ValueSpec,
    *,
    key: str | Sequence[str] | None,
    url: str | UrlPart,
    default: str | None,
    required: bool,
    desc: str,
) -> Any:
    spec = FieldSpec(
        value=value,
        keys=_normalize_keys(key),
        url=url,
        default=default,
        required=required,
        description=desc,
    )
    metadata: dict[str, FieldSpec] = {SCHEMA_METADATA_KEY: spec}
    if value.kind in (FieldKind.LIST, FieldKind.MAP, FieldKind.COMPOSITE):
        return field(default_factory=lambda: zero_value(value), metadata=metadata)
    return field(default=zero_value(value), metadata=metadata)


def item_spec(item: FieldKind | str | type[Any] | ValueSpec | None, *, bits: int = 64) -> ValueSpec:
    """Build the element spec of a list or map field.

    Args:
        item (FieldKind | str | type[Any] | ValueSpec | None): ``None`` or
            ``"text"`` for text, a kind (name), a `ConfigProp` class for
            composite items, or a ready-made spec.
        bits (int): Bit width for integer kinds.

    Returns:
        ValueSpec: The element spec. Whether the codec supports it in the given
            position is checked during extraction.
    """
    if item is None:
        return ValueSpec(kind=FieldKind.TEXT)
    if isinstance(item, ValueSpec):
        return item
    if isinstance(item, type) and not issubclass(item, str):
        return ValueSpec(kind=FieldKind.COMPOSITE, prop_type=item)
    kind: FieldKind | None = item if isinstance(item, FieldKind) else FieldKind.parse(str(item))
    if kind is None:
        raise ValueError(f"unknown field kind {item!r}")
    return ValueSpec(kind=kind, bits=bits if kind.is_integer else 0)


def text_field(
    *,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare a text field."""
    return _schema_field(
        ValueSpec(kind=FieldKind.TEXT),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )


def bool_field(
    *,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare a boolean field (encoded as ``Yes``/``No``)."""
    return _schema_field(
        ValueSpec(kind=FieldKind.BOOL),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )


def int_field(
    *,
    bits: int = 64,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare a signed integer field of ``bits`` width."""
    return _schema_field(
        ValueSpec(kind=FieldKind.INT, bits=bits),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )


def uint_field(
    *,
    bits: int = 64,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare an unsigned integer field of ``bits`` width."""
    return _schema_field(
        ValueSpec(kind=FieldKind.UINT, bits=bits),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )


def enum_field(
    formatter: EnumFormatter,
    *,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare an enumerated field whose names are given by ``formatter``."""
    return _schema_field(
        ValueSpec(kind=FieldKind.ENUM, enum_formatter=formatter),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )


def list_field(
    *,
    item: FieldKind | str | type[Any] | ValueSpec | None = None,
    sep: str = DEFAULT_ITEM_SEPARATOR,
    length: int | None = None,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare a list of text or composite items.

    Args:
        item (FieldKind | str | type[Any] | ValueSpec | None): Item kind; text
            when omitted, or a `ConfigProp` class.
        sep (str): Item separator.
        length (int | None): Fixed item count, or None for a variable-length list.
        key (str | Sequence[str] | None): Query-key aliases.
        url (str | UrlPart): URL placement.
        default (str | None): Raw default text.
        required (bool): Whether the field must be present in a parsed URL.
        desc (str): Human description.

    Returns:
        Any: A ``dataclasses.field()`` carrying the declaration.
    """
    return _schema_field(
        ValueSpec(kind=FieldKind.LIST, item=item_spec(item), separator=sep, length=length),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )


def map_field(
    *,
    value: FieldKind | str | ValueSpec | None = None,
    bits: int = 64,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare a string-keyed map with text or integer values."""
    return _schema_field(
        ValueSpec(kind=FieldKind.MAP, item=item_spec(value, bits=bits)),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )


def prop_field(
    prop_type: type[Any],
    *,
    key: str | Sequence[str] | None = None,
    url: str | UrlPart = UrlPart.QUERY,
    default: str | None = None,
    required: bool = False,
    desc: str = "",
) -> Any:
    """Declare a composite field whose encoding is owned by ``prop_type``."""
    return _schema_field(
        ValueSpec(kind=FieldKind.COMPOSITE, prop_type=prop_type),
        key=key,
        url=url,
        default=default,
        required=required,
        desc=desc,
    )
