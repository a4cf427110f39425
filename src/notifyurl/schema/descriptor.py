# topmark:header:start
#
#   project      : NotifyURL
#   file         : descriptor.py
#   file_relpath : src/notifyurl/schema/descriptor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Immutable schema metadata for configuration fields.

Three layers:
    - `ValueSpec`: how a single value is encoded (kind, width, enum formatter,
      composite type, item spec for collections).
    - `FieldSpec`: what a field *declares* in its ``dataclasses.field()``
      metadata. It does not yet know its attribute name or owning type.
    - `FieldDescriptor`: a validated, named field of one configuration type,
      produced once by `notifyurl.schema.extractor` and never mutated after.

Descriptors are schema metadata, not per-instance state: documentation
renderers and resolvers may read them freely but must not modify them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Final

from notifyurl.constants import DEFAULT_ITEM_SEPARATOR
from notifyurl.schema.kinds import FieldKind, UrlPart

if TYPE_CHECKING:
    from notifyurl.schema.enums import EnumFormatter

# Key under which a `FieldSpec` is stored in ``dataclasses.Field.metadata``.
SCHEMA_METADATA_KEY: Final[str] = "notifyurl"


@dataclass(frozen=True)
class ValueSpec:
    """Encoding rules for one value.

    Attributes:
        kind (FieldKind): Semantic kind used to dispatch encode/decode.
        bits (int): Bit width for integer kinds (0 otherwise).
        enum_formatter (EnumFormatter | None): Name/ordinal mapping for ``ENUM``.
        prop_type (type[Any] | None): `ConfigProp` class for ``COMPOSITE``.
        item (ValueSpec | None): Element spec for ``LIST`` items and ``MAP`` values.
        separator (str): Item separator for ``LIST``.
        length (int | None): Fixed item count for ``LIST``; None for variable length.
    """

    kind: FieldKind
    bits: int = 0
    enum_formatter: EnumFormatter | None = None
    prop_type: type[Any] | None = None
    item: ValueSpec | None = None
    separator: str = DEFAULT_ITEM_SEPARATOR
    length: int | None = None

    @property
    def signed(self) -> bool:
        """Whether an integer kind accepts negative values."""
        return self.kind is FieldKind.INT

    def describe(self) -> str:
        """Return a short type label such as ``uint16`` or ``list[text]``."""
        if self.kind.is_integer:
            return f"{self.kind.key}{self.bits}"
        if self.kind is FieldKind.COMPOSITE and self.prop_type is not None:
            return self.prop_type.__name__
        if self.kind is FieldKind.LIST and self.item is not None:
            size: str = f", {self.length}" if self.length is not None else ""
            return f"list[{self.item.describe()}{size}]"
        if self.kind is FieldKind.MAP and self.item is not None:
            return f"map[text, {self.item.describe()}]"
        return self.kind.key


@dataclass(frozen=True)
class FieldSpec:
    """Field declaration as written on a configuration dataclass.

    Attributes:
        value (ValueSpec): Encoding rules for the field value.
        keys (tuple[str, ...]): Declared query-key aliases (may be empty).
        url (str | UrlPart): Raw URL placement token (parsed during extraction).
        default (str | None): Raw default text, decoded when defaults are applied.
        required (bool): Whether absence after decoding a URL is an error.
        description (str): Human description for documentation.
    """

    value: ValueSpec
    keys: tuple[str, ...] = ()
    url: str | UrlPart = UrlPart.QUERY
    default: str | None = None
    required: bool = False
    description: str = ""


@dataclass(frozen=True)
class FieldDescriptor:
    """Validated metadata of one configuration field.

    Attributes:
        name (str): Attribute name on the configuration record.
        spec (ValueSpec): Encoding rules.
        query_keys (tuple[str, ...]): Ordered aliases; the first one is canonical.
        url_part (UrlPart): Structural slot, or ``UrlPart.QUERY``.
        path_index (int): 1-based path segment index for ``UrlPart.PATH``, else 0.
        default (str | None): Raw default text.
        required (bool): Whether absence after decoding a URL is an error.
        description (str): Human description.
    """

    name: str
    spec: ValueSpec
    query_keys: tuple[str, ...]
    url_part: UrlPart
    path_index: int
    default: str | None
    required: bool
    description: str

    @property
    def kind(self) -> FieldKind:
        """Semantic kind of the field."""
        return self.spec.kind

    @property
    def canonical_key(self) -> str | None:
        """First query-key alias, used when serializing; None if the field has no keys."""
        return self.query_keys[0] if self.query_keys else None

    @property
    def is_placed(self) -> bool:
        """Whether the field occupies a structural URL slot."""
        return self.url_part.is_slot

    @property
    def item_separator(self) -> str:
        """Separator between list items."""
        return self.spec.separator

    @property
    def enum_formatter(self) -> EnumFormatter | None:
        """Name/ordinal mapping of an enum field."""
        return self.spec.enum_formatter

    @property
    def has_default(self) -> bool:
        """Whether the schema declares a default for this field."""
        return self.default is not None

    @property
    def slot_label(self) -> str:
        """Placement label as written in declarations (``host``, ``path2``, ...)."""
        if self.url_part is UrlPart.PATH and self.path_index > 1:
            return f"path{self.path_index}"
        return self.url_part.key
