# topmark:header:start
#
#   project      : NotifyURL
#   file         : sample_configs.py
#   file_relpath : tests/sample_configs.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Configuration types shared by the codec, resolver and property tests.

`SampleConfig` touches every field kind and every URL slot; the smaller types
isolate one layout rule each.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import ClassVar

from notifyurl.schema.enums import EnumFormatter
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
from notifyurl.service import ServiceConfig


class Level(IntEnum):
    Low = 0
    Normal = 1
    High = 2


LEVELS: EnumFormatter = EnumFormatter.from_enum(Level, aliases={"urgent": 2})


@dataclass
class Badge:
    """Composite value encoded as ``label/count``; the empty text is the empty badge."""

    label: str = ""
    count: int = 0

    def import_from_text(self, text: str) -> None:
        if text == "":
            self.label, self.count = "", 0
            return
        label, sep, count = text.partition("/")
        if not sep or not count.isdigit():
            raise ValueError("badge must look like label/count")
        self.label, self.count = label, int(count)

    def export_to_text(self) -> str:
        if not self.label:
            return ""
        return f"{self.label}/{self.count}"


@dataclass
class SampleConfig(ServiceConfig):
    scheme: ClassVar[str] = "sample"

    user: str = text_field(url="user")
    secret: str = text_field(url="pass")
    host: str = text_field(url="host", required=True)
    port: int = uint_field(bits=16, url="port", default="8080")
    channel: str = text_field(url="path", required=True)
    thread: str = text_field(url="path2")

    title: str = text_field(key="title,subject", default="Hello")
    retries: int = uint_field(bits=8, key="retries")
    offset: int = int_field(bits=8, key="offset")
    enabled: bool = bool_field(key="enabled,on", default="Yes")
    level: Level = enum_field(LEVELS, key="level", default="Normal")
    tags: list[str] = list_field(key="tags")
    limits: dict[str, int] = map_field(value="uint", bits=16, key="limits")
    badge: Badge = prop_field(Badge, key="badge")

    # Plain attribute; invisible to the codec.
    note: str = ""


@dataclass
class HostOnlyConfig(ServiceConfig):
    """Schema without a port field: the host slot carries ``host:port``."""

    scheme: ClassVar[str] = "hostonly"

    host: str = text_field(url="host", required=True)
    token: str = text_field(key="token")


@dataclass
class FixedHostConfig(ServiceConfig):
    """Schema without a host field, addressed through a constant host name."""

    scheme: ClassVar[str] = "fixed"
    fixed_host: ClassVar[str] = "api"
    force_query: ClassVar[bool] = True

    user: str = text_field(url="user", required=True)
    items: list[str] = list_field(key="items", sep=";")


@dataclass
class PairConfig(ServiceConfig):
    """Schema with a fixed-length list and an aliased query-only field."""

    scheme: ClassVar[str] = "pair"

    point: list[str] = list_field(key="point", length=2, default="0,0")
    label: str = text_field()
