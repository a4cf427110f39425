# topmark:header:start
#
#   project      : NotifyURL
#   file         : values.py
#   file_relpath : src/notifyurl/codec/values.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Type-directed value codec.

Every supported `FieldKind` has one encoder (value -> text) and one decoder
(text -> value). Dispatch happens on ``spec.kind`` through two tables; adding a
kind means adding one entry to each.

| Kind        | Encode                          | Decode                                   |
|-------------|---------------------------------|------------------------------------------|
| text        | identity                        | identity                                 |
| bool        | ``Yes`` / ``No``                | ``1/true/yes``, ``0/false/no`` (any case)|
| int / uint  | base-10                         | optional ``0x``/``#``, ``0o``, ``0b``    |
| enum        | formatter name                  | formatter lookup (case-insensitive)      |
| list        | items joined by the separator   | split on the separator                   |
| map         | sorted ``key:value`` pairs      | split on ``,`` then on the first ``:``   |
| composite   | ``export_to_text()``            | ``import_from_text()``                   |

All functions are pure: they never touch shared state and never perform I/O.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Final

from notifyurl.constants import (
    BOOL_FALSE,
    BOOL_FALSE_LITERALS,
    BOOL_TRUE,
    BOOL_TRUE_LITERALS,
    MAP_KEY_VALUE_SEPARATOR,
    MAP_PAIR_SEPARATOR,
)
from notifyurl.core.errors import (
    DecodeError,
    EncodeError,
    EnumValueError,
    ItemCountError,
    NotifyurlError,
)
from notifyurl.schema.enums import ENUM_INVALID
from notifyurl.schema.kinds import FieldKind

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from notifyurl.schema.descriptor import ValueSpec
    from notifyurl.schema.enums import EnumFormatter

_DIGITS_BY_BASE: Final[Mapping[int, re.Pattern[str]]] = {
    2: re.compile(r"[01]+"),
    8: re.compile(r"[0-7]+"),
    10: re.compile(r"[0-9]+"),
    16: re.compile(r"[0-9a-fA-F]+"),
}


# --- Scalars ------------------------------------------------------------------


def parse_bool(text: str) -> bool | None:
    """Parse a boolean literal.

    Args:
        text (str): Candidate literal; ``1/true/yes`` and ``0/false/no`` are
            accepted in any letter case.

    Returns:
        bool | None: The parsed value, or None if ``text`` is not a known literal.
    """
    token: str = text.strip().lower()
    if token in BOOL_TRUE_LITERALS:
        return True
    if token in BOOL_FALSE_LITERALS:
        return False
    return None


def format_bool(value: bool) -> str:
    """Return the canonical literal (``Yes``/``No``) for ``value``."""
    return BOOL_TRUE if value else BOOL_FALSE


def strip_number_prefix(text: str) -> tuple[str, int]:
    """Split a base prefix off an unsigned number literal.

    ``0x``/``0X`` and ``#`` select base 16, ``0o`` base 8 and ``0b`` base 2;
    anything else is base 10.

    Args:
        text (str): Number literal without sign.

    Returns:
        tuple[str, int]: The remaining digits and the selected base.
    """
    if text.startswith("#"):
        return text[1:], 16
    prefix: str = text[:2].lower()
    if prefix == "0x":
        return text[2:], 16
    if prefix == "0o":
        return text[2:], 8
    if prefix == "0b":
        return text[2:], 2
    return text, 10


def int_bounds(bits: int, signed: bool) -> tuple[int, int]:
    """Return the inclusive ``(min, max)`` range of a ``bits`` wide integer."""
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def parse_int(text: str, bits: int, signed: bool) -> int:
    """Parse an integer literal and check that it fits in ``bits`` bits.

    The base prefix is resolved before the width-checked conversion. Signs are
    only accepted for signed fields; underscores and surrounding whitespace are
    rejected.

    Args:
        text (str): Integer literal, e.g. ``"42"``, ``"-0x1F"``, ``"0b101"``.
        bits (int): Declared bit width.
        signed (bool): Whether negative values are allowed.

    Returns:
        int: The parsed value.

    Raises:
        DecodeError: If the literal is not numeric or out of range.
    """
    body: str = text
    negative: bool = False
    if body[:1] in ("+", "-"):
        if not signed:
            raise DecodeError("unsigned value cannot carry a sign", value=text)
        negative = body[0] == "-"
        body = body[1:]

    digits, base = strip_number_prefix(body)
    if not _DIGITS_BY_BASE[base].fullmatch(digits):
        raise DecodeError(f"not a valid base-{base} number", value=text)

    value: int = int(digits, base)
    if negative:
        value = -value

    lo, hi = int_bounds(bits, signed)
    if not lo <= value <= hi:
        label: str = f"{'int' if signed else 'uint'}{bits}"
        raise DecodeError(f"value out of range for {label} ({lo}..{hi})", value=text)
    return value


# --- Zero values --------------------------------------------------------------


def zero_value(spec: ValueSpec) -> Any:
    """Return the value an empty record holds for a field of ``spec``.

    Collections and composites get a fresh instance on every call.
    """
    kind: FieldKind = spec.kind
    if kind is FieldKind.TEXT:
        return ""
    if kind is FieldKind.BOOL:
        return False
    if kind.is_integer:
        return 0
    if kind is FieldKind.ENUM:
        formatter: EnumFormatter | None = spec.enum_formatter
        if formatter is not None and formatter.names():
            return formatter.to_value(0)
        return 0
    if kind is FieldKind.LIST:
        if spec.length is not None and spec.item is not None:
            return [zero_value(spec.item) for _ in range(spec.length)]
        return []
    if kind is FieldKind.MAP:
        return {}
    if kind is FieldKind.COMPOSITE and spec.prop_type is not None:
        return spec.prop_type()
    return None


# --- Encoders -----------------------------------------------------------------


def _encode_text(spec: ValueSpec, value: Any) -> str:
    if not isinstance(value, str):
        raise EncodeError(f"expected text, got {type(value).__name__}")
    return value


def _encode_bool(spec: ValueSpec, value: Any) -> str:
    return format_bool(bool(value))


def _encode_int(spec: ValueSpec, value: Any) -> str:
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"expected integer, got {type(value).__name__}")
    lo, hi = int_bounds(spec.bits, spec.signed)
    if not lo <= value <= hi:
        raise EncodeError(f"{value} does not fit in {spec.describe()}")
    return str(int(value))


def _encode_enum(spec: ValueSpec, value: Any) -> str:
    formatter: EnumFormatter | None = spec.enum_formatter
    if formatter is None:
        raise EncodeError("enum field has no formatter")
    if isinstance(value, bool) or not isinstance(value, int):
        raise EncodeError(f"expected enum ordinal, got {type(value).__name__}")
    ordinal: int = int(value)
    if not 0 <= ordinal < len(formatter.names()):
        raise EncodeError(f"{ordinal} is not a valid ordinal for {', '.join(formatter.names())}")
    return formatter.print(ordinal)


def _encode_list(spec: ValueSpec, value: Any) -> str:
    item_spec: ValueSpec | None = spec.item
    if item_spec is None:
        raise EncodeError("list field has no item spec")
    items: list[Any] = list(value)
    if spec.length is not None and len(items) != spec.length:
        raise EncodeError(f"list needs exactly {spec.length} items, got {len(items)}")
    parts: list[str] = []
    for item in items:
        text: str = encode_value(item_spec, item)
        if spec.separator in text:
            raise EncodeError(f"list item {text!r} contains the separator {spec.separator!r}")
        parts.append(text)
    if parts == [""] and spec.length is None:
        raise EncodeError("a list holding one empty item encodes like an empty list")
    return spec.separator.join(parts)


def _encode_map(spec: ValueSpec, value: Any) -> str:
    item_spec: ValueSpec | None = spec.item
    if item_spec is None:
        raise EncodeError("map field has no value spec")
    mapping: Mapping[str, Any] = value
    pairs: list[str] = []
    for key in sorted(mapping):
        if MAP_KEY_VALUE_SEPARATOR in key or MAP_PAIR_SEPARATOR in key:
            raise EncodeError(f"map key {key!r} contains a reserved separator")
        text: str = encode_value(item_spec, mapping[key])
        if MAP_PAIR_SEPARATOR in text:
            raise EncodeError(f"map value {text!r} contains the separator {MAP_PAIR_SEPARATOR!r}")
        pairs.append(f"{key}{MAP_KEY_VALUE_SEPARATOR}{text}")
    return MAP_PAIR_SEPARATOR.join(pairs)


def _encode_composite(spec: ValueSpec, value: Any) -> str:
    try:
        return value.export_to_text()
    except NotifyurlError:
        raise
    except ValueError as exc:
        raise EncodeError(str(exc)) from exc


_ENCODERS: Final[Mapping[FieldKind, Callable[[ValueSpec, Any], str]]] = {
    FieldKind.TEXT: _encode_text,
    FieldKind.BOOL: _encode_bool,
    FieldKind.INT: _encode_int,
    FieldKind.UINT: _encode_int,
    FieldKind.ENUM: _encode_enum,
    FieldKind.LIST: _encode_list,
    FieldKind.MAP: _encode_map,
    FieldKind.COMPOSITE: _encode_composite,
}


def encode_value(spec: ValueSpec, value: Any) -> str:
    """Encode ``value`` as text according to ``spec``.

    Args:
        spec (ValueSpec): Encoding rules of the field.
        value (Any): Current field value.

    Returns:
        str: The textual encoding.

    Raises:
        EncodeError: If the value cannot be represented losslessly.
    """
    return _ENCODERS[spec.kind](spec, value)


# --- Decoders -----------------------------------------------------------------


def _decode_text(spec: ValueSpec, text: str) -> str:
    return text


def _decode_bool(spec: ValueSpec, text: str) -> bool:
    value: bool | None = parse_bool(text)
    if value is None:
        raise DecodeError("accepted values are 1, true, yes or 0, false, no", value=text)
    return value


def _decode_int(spec: ValueSpec, text: str) -> int:
    return parse_int(text, spec.bits, spec.signed)


def _decode_enum(spec: ValueSpec, text: str) -> int:
    formatter: EnumFormatter | None = spec.enum_formatter
    if formatter is None:
        raise DecodeError("enum field has no formatter", value=text)
    ordinal: int = formatter.parse(text)
    if ordinal == ENUM_INVALID:
        raise EnumValueError(formatter.names(), value=text)
    return formatter.to_value(ordinal)


def _decode_list(spec: ValueSpec, text: str) -> list[Any]:
    item_spec: ValueSpec | None = spec.item
    if item_spec is None:
        raise DecodeError("list field has no item spec", value=text)
    if text == "" and spec.length is None:
        return []
    parts: list[str] = text.split(spec.separator)
    if spec.length is not None and len(parts) != spec.length:
        raise ItemCountError(spec.length, len(parts), value=text)
    return [decode_value(item_spec, part) for part in parts]


def _decode_map(spec: ValueSpec, text: str) -> dict[str, Any]:
    item_spec: ValueSpec | None = spec.item
    if item_spec is None:
        raise DecodeError("map field has no value spec", value=text)
    result: dict[str, Any] = {}
    if text == "":
        return result
    for pair in text.split(MAP_PAIR_SEPARATOR):
        key, sep, raw = pair.partition(MAP_KEY_VALUE_SEPARATOR)
        if not sep:
            raise DecodeError("invalid field value format, expected key:value", value=pair)
        result[key] = decode_value(item_spec, raw)
    return result


def _decode_composite(spec: ValueSpec, text: str) -> Any:
    if spec.prop_type is None:
        raise DecodeError("composite field has no value type", value=text)
    prop: Any = spec.prop_type()
    try:
        prop.import_from_text(text)
    except NotifyurlError:
        raise
    except ValueError as exc:
        raise DecodeError(str(exc), value=text) from exc
    return prop


_DECODERS: Final[Mapping[FieldKind, Callable[[ValueSpec, str], Any]]] = {
    FieldKind.TEXT: _decode_text,
    FieldKind.BOOL: _decode_bool,
    FieldKind.INT: _decode_int,
    FieldKind.UINT: _decode_int,
    FieldKind.ENUM: _decode_enum,
    FieldKind.LIST: _decode_list,
    FieldKind.MAP: _decode_map,
    FieldKind.COMPOSITE: _decode_composite,
}


def decode_value(spec: ValueSpec, text: str) -> Any:
    """Decode ``text`` into a value according to ``spec``.

    Args:
        spec (ValueSpec): Encoding rules of the field.
        text (str): Raw text taken from a URL, a default or a parameter map.

    Returns:
        Any: The decoded value.

    Raises:
        DecodeError: If ``text`` does not match the declared kind, width or
            enumerated set. Subclasses distinguish enum misses
            (`EnumValueError`) and fixed-length count mismatches
            (`ItemCountError`).
    """
    return _DECODERS[spec.kind](spec, text)
