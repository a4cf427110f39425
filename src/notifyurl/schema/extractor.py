# topmark:header:start
#
#   project      : NotifyURL
#   file         : extractor.py
#   file_relpath : src/notifyurl/schema/extractor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Field descriptor extraction and schema validation.

`get_descriptors` inspects a configuration dataclass once, in declaration
order, and returns an immutable tuple of `FieldDescriptor`. The result is cached
per type; a failing type raises `SchemaError` every time it is asked for, so
an invalid schema can never be used half-way.

Checks performed:
    - the type is a dataclass;
    - each kind maps onto a codec case (lists hold text or composite items,
      maps hold text or integer values, composite types implement `ConfigProp`,
      integer widths are positive, enum fields carry a formatter);
    - URL placement tokens are valid, every structural slot holds at most one
      field, and path indices are contiguous from 1;
    - query-key aliases are non-empty and unique across the type;
    - query-only fields have at least one key;
    - ``required`` fields declare no default;
    - every default decodes with the field's codec.
"""

from __future__ import annotations

import dataclasses
import functools
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from notifyurl.codec.values import decode_value
from notifyurl.config.logging import get_logger
from notifyurl.core.errors import DecodeError, SchemaError
from notifyurl.schema.descriptor import SCHEMA_METADATA_KEY, FieldDescriptor, FieldSpec, ValueSpec
from notifyurl.schema.kinds import FieldKind, UrlPart, parse_url_part
from notifyurl.schema.props import is_config_prop_type

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notifyurl.config.logging import NotifyurlLogger

logger: NotifyurlLogger = get_logger(__name__)


def _check_value_spec(config_type: type, name: str, spec: ValueSpec, *, nested: str = "") -> None:
    """Raise `SchemaError` if ``spec`` cannot be handled by the value codec."""
    where: str = f"field {name!r}{nested}"
    kind: FieldKind = spec.kind

    if kind.is_integer and spec.bits <= 0:
        raise SchemaError(config_type, f"{where}: integer width must be positive, got {spec.bits}")
    if kind is FieldKind.ENUM and (spec.enum_formatter is None or not spec.enum_formatter.names()):
        raise SchemaError(config_type, f"{where}: enum fields need a non-empty formatter")
    if kind is FieldKind.COMPOSITE and not is_config_prop_type(spec.prop_type):
        raise SchemaError(
            config_type,
            f"{where}: {spec.prop_type!r} does not implement import_from_text/export_to_text",
        )
    if kind is FieldKind.LIST:
        item: ValueSpec | None = spec.item
        if item is None or item.kind not in (FieldKind.TEXT, FieldKind.COMPOSITE):
            label: str = item.describe() if item is not None else "nothing"
            raise SchemaError(config_type, f"{where}: list items of kind {label} are not supported")
        if not spec.separator:
            raise SchemaError(config_type, f"{where}: list separator must not be empty")
        if spec.length is not None and spec.length <= 0:
            raise SchemaError(config_type, f"{where}: fixed list length must be positive")
        _check_value_spec(config_type, name, item, nested=" (item)")
    if kind is FieldKind.MAP:
        value: ValueSpec | None = spec.item
        if value is None or not (value.kind is FieldKind.TEXT or value.kind.is_integer):
            label = value.describe() if value is not None else "nothing"
            raise SchemaError(config_type, f"{where}: map values of kind {label} are not supported")
        _check_value_spec(config_type, name, value, nested=" (value)")


def _build_descriptor(config_type: type, name: str, declared: FieldSpec) -> FieldDescriptor:
    """Validate one declaration and bind it to its attribute name."""
    _check_value_spec(config_type, name, declared.value)

    try:
        url_part, path_index = parse_url_part(declared.url)
    except ValueError as exc:
        raise SchemaError(config_type, f"field {name!r}: {exc}") from exc

    keys: tuple[str, ...] = declared.keys
    if any(not k for k in keys):
        raise SchemaError(config_type, f"field {name!r}: empty query key in {keys!r}")
    if not keys and url_part is UrlPart.QUERY:
        keys = (name.lower(),)

    if declared.required and declared.default is not None:
        raise SchemaError(config_type, f"field {name!r}: required fields cannot declare a default")

    if declared.default is not None:
        try:
            decode_value(declared.value, declared.default)
        except DecodeError as exc:
            raise SchemaError(
                config_type, f"field {name!r}: invalid default {declared.default!r}: {exc}"
            ) from exc

    return FieldDescriptor(
        name=name,
        spec=declared.value,
        query_keys=keys,
        url_part=url_part,
        path_index=path_index,
        default=declared.default,
        required=declared.required,
        description=declared.description,
    )


def _check_placement(config_type: type, descriptors: tuple[FieldDescriptor, ...]) -> None:
    """Raise `SchemaError` on slot collisions and gaps in path indices."""
    slots: dict[str, str] = {}
    for d in descriptors:
        if not d.is_placed:
            continue
        label: str = d.slot_label
        if label in slots:
            raise SchemaError(
                config_type,
                f"fields {slots[label]!r} and {d.name!r} are both placed in the {label} slot",
            )
        slots[label] = d.name

    indices: list[int] = sorted(d.path_index for d in descriptors if d.url_part is UrlPart.PATH)
    if indices != list(range(1, len(indices) + 1)):
        raise SchemaError(config_type, f"path indices must be contiguous from 1, got {indices}")


def _check_aliases(config_type: type, descriptors: tuple[FieldDescriptor, ...]) -> None:
    """Raise `SchemaError` if a query key is declared twice."""
    owners: dict[str, str] = {}
    for d in descriptors:
        for key in d.query_keys:
            if key in owners:
                raise SchemaError(
                    config_type,
                    f"query key {key!r} is declared by both {owners[key]!r} and {d.name!r}",
                )
            owners[key] = d.name


@functools.cache
def get_descriptors(config_type: type) -> tuple[FieldDescriptor, ...]:
    """Return the validated field descriptors of ``config_type``.

    Fields appear in declaration order (base classes first, as laid out by
    ``dataclasses``). Fields without schema metadata are skipped.

    Args:
        config_type (type): A dataclass declaring its fields with the
            constructors from `notifyurl.schema.fields`.

    Returns:
        tuple[FieldDescriptor, ...]: Immutable, cached descriptors.

    Raises:
        SchemaError: If the type is not a dataclass or its declarations cannot
            be mapped onto the codec.
    """
    if not isinstance(config_type, type) or not dataclasses.is_dataclass(config_type):
        label: type | str = config_type if isinstance(config_type, type) else repr(config_type)
        raise SchemaError(label, "configuration types must be dataclasses")

    descriptors: list[FieldDescriptor] = []
    for f in dataclasses.fields(config_type):
        declared: Any = f.metadata.get(SCHEMA_METADATA_KEY)
        if declared is None:
            continue
        if not isinstance(declared, FieldSpec):
            raise SchemaError(config_type, f"field {f.name!r}: unexpected schema metadata {declared!r}")
        descriptors.append(_build_descriptor(config_type, f.name, declared))

    result: tuple[FieldDescriptor, ...] = tuple(descriptors)
    _check_placement(config_type, result)
    _check_aliases(config_type, result)

    logger.debug(
        "Extracted %d field descriptor(s) for %s", len(result), config_type.__qualname__
    )
    return result


@functools.cache
def descriptor_map(config_type: type) -> Mapping[str, FieldDescriptor]:
    """Return a read-only mapping of attribute name to descriptor."""
    return MappingProxyType({d.name: d for d in get_descriptors(config_type)})


@functools.cache
def key_map(config_type: type) -> Mapping[str, FieldDescriptor]:
    """Return a read-only mapping of every query-key alias to its descriptor."""
    keys: dict[str, FieldDescriptor] = {}
    for d in get_descriptors(config_type):
        for key in d.query_keys:
            keys[key] = d
    return MappingProxyType(keys)
