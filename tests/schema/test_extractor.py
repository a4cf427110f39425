# topmark:header:start
#
#   project      : NotifyURL
#   file         : test_extractor.py
#   file_relpath : tests/schema/test_extractor.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for descriptor extraction and schema validation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import pytest

from notifyurl.core.errors import SchemaError
from notifyurl.schema.enums import create_enum_formatter
from notifyurl.schema.extractor import descriptor_map, get_descriptors, key_map
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
from tests.conftest import mark_schema
from tests.sample_configs import Badge, SampleConfig

if TYPE_CHECKING:
    from notifyurl.schema.descriptor import FieldDescriptor


@mark_schema
def test_descriptors_follow_declaration_order() -> None:
    """Descriptors are listed in declaration order and skip plain attributes."""
    names: list[str] = [d.name for d in get_descriptors(SampleConfig)]
    assert names == [
        "user",
        "secret",
        "host",
        "port",
        "channel",
        "thread",
        "title",
        "retries",
        "offset",
        "enabled",
        "level",
        "tags",
        "limits",
        "badge",
    ]
    assert "note" not in descriptor_map(SampleConfig)


@mark_schema
def test_descriptors_are_cached_per_type() -> None:
    assert get_descriptors(SampleConfig) is get_descriptors(SampleConfig)


@mark_schema
def test_descriptor_metadata() -> None:
    fields: dict[str, FieldDescriptor] = dict(descriptor_map(SampleConfig))

    port: FieldDescriptor = fields["port"]
    assert port.kind is FieldKind.UINT
    assert port.spec.describe() == "uint16"
    assert port.url_part is UrlPart.PORT
    assert port.is_placed
    assert port.query_keys == ()
    assert port.default == "8080"

    thread: FieldDescriptor = fields["thread"]
    assert thread.url_part is UrlPart.PATH
    assert thread.path_index == 2
    assert thread.slot_label == "path2"

    title: FieldDescriptor = fields["title"]
    assert title.query_keys == ("title", "subject")
    assert title.canonical_key == "title"
    assert not title.is_placed

    # Query-only fields without keys are addressed by their lowercased name.
    assert fields["retries"].query_keys == ("retries",)
    assert fields["limits"].spec.describe() == "map[text, uint16]"
    assert fields["badge"].spec.describe() == "Badge"


@mark_schema
def test_key_map_resolves_every_alias() -> None:
    keys = key_map(SampleConfig)
    assert keys["title"] is keys["subject"]
    assert keys["on"].name == "enabled"
    with pytest.raises(TypeError):
        keys["new"] = keys["on"]  # type: ignore[index]


@mark_schema
def test_non_dataclass_is_rejected() -> None:
    class NotADataclass:
        host: str = ""

    with pytest.raises(SchemaError, match="must be dataclasses"):
        get_descriptors(NotADataclass)


@mark_schema
def test_duplicate_alias_is_rejected() -> None:
    @dataclass
    class Duplicate:
        a: str = text_field(key="name")
        b: str = text_field(key="other,name")

    with pytest.raises(SchemaError, match="'name' is declared by both 'a' and 'b'"):
        get_descriptors(Duplicate)


@mark_schema
def test_empty_alias_is_rejected() -> None:
    @dataclass
    class EmptyKey:
        a: str = text_field(key="a,")

    with pytest.raises(SchemaError, match="empty query key"):
        get_descriptors(EmptyKey)


@mark_schema
def test_slot_collision_is_rejected() -> None:
    @dataclass
    class TwoHosts:
        a: str = text_field(url="host")
        b: str = text_field(url="host")

    with pytest.raises(SchemaError, match="both placed in the host slot"):
        get_descriptors(TwoHosts)


@mark_schema
def test_path_indices_must_be_contiguous() -> None:
    @dataclass
    class Gap:
        first: str = text_field(url="path1")
        third: str = text_field(url="path3")

    with pytest.raises(SchemaError, match="contiguous"):
        get_descriptors(Gap)


@mark_schema
def test_unknown_url_part_is_rejected() -> None:
    @dataclass
    class BadSlot:
        a: str = text_field(url="fragment")

    with pytest.raises(SchemaError, match="unknown URL part 'fragment'"):
        get_descriptors(BadSlot)


@mark_schema
def test_required_field_cannot_have_default() -> None:
    @dataclass
    class Both:
        a: str = text_field(key="a", required=True, default="x")

    with pytest.raises(SchemaError, match="required fields cannot declare a default"):
        get_descriptors(Both)


@mark_schema
def test_invalid_default_is_rejected_eagerly() -> None:
    @dataclass
    class BadDefault:
        port: int = uint_field(bits=8, key="port", default="300")

    with pytest.raises(SchemaError, match="invalid default '300'"):
        get_descriptors(BadDefault)


@mark_schema
def test_invalid_schema_keeps_failing() -> None:
    """A failing type is never cached as valid."""

    @dataclass
    class BadDefault:
        flag: bool = bool_field(key="flag", default="maybe")

    for _ in range(2):
        with pytest.raises(SchemaError):
            get_descriptors(BadDefault)


@mark_schema
def test_unsupported_collection_items_are_rejected() -> None:
    @dataclass
    class BoolList:
        flags: list[bool] = list_field(item="bool", key="flags")

    @dataclass
    class BoolMap:
        flags: dict[str, bool] = map_field(value="bool", key="flags")

    with pytest.raises(SchemaError, match="list items of kind bool"):
        get_descriptors(BoolList)
    with pytest.raises(SchemaError, match="map values of kind bool"):
        get_descriptors(BoolMap)


@mark_schema
def test_composite_type_must_implement_the_capability() -> None:
    class Opaque:
        pass

    @dataclass
    class UsesOpaque:
        value: Opaque = prop_field(Opaque, key="value")

    with pytest.raises(SchemaError, match="does not implement"):
        get_descriptors(UsesOpaque)


@mark_schema
def test_enum_needs_names_and_integers_need_width() -> None:
    @dataclass
    class EmptyEnum:
        mode: int = enum_field(create_enum_formatter([]), key="mode")

    @dataclass
    class ZeroWidth:
        count: int = int_field(bits=0, key="count")

    with pytest.raises(SchemaError, match="non-empty formatter"):
        get_descriptors(EmptyEnum)
    with pytest.raises(SchemaError, match="width must be positive"):
        get_descriptors(ZeroWidth)


@mark_schema
def test_composite_list_items_are_accepted() -> None:
    @dataclass
    class Badges:
        badges: list[Badge] = list_field(item=Badge, key="badges", sep=";")

    (d,) = get_descriptors(Badges)
    assert d.spec.describe() == "list[Badge]"
    assert d.item_separator == ";"
