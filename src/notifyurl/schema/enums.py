# topmark:header:start
#
#   project      : NotifyURL
#   file         : enums.py
#   file_relpath : src/notifyurl/schema/enums.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Name/ordinal mapping for enumerated configuration fields.

An `EnumFormatter` maps ordinals (positions in its name list) to canonical
names and back. Parsing is case-insensitive and also honours optional aliases,
so ``"urgent"`` may resolve to the same ordinal as ``"Max"``.

Formatters are immutable and shared by every record of a configuration type.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

from notifyurl.constants import ENUM_UNKNOWN_NAME

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

# Returned by `EnumFormatter.parse()` for names outside the enumerated set.
ENUM_INVALID: Final[int] = -1


@dataclass(frozen=True)
class EnumFormatter:
    """Immutable ordinal <-> name mapping.

    Attributes:
        enum_names (tuple[str, ...]): Canonical names, indexed by ordinal.
        aliases (Mapping[str, int]): Extra lowercase names mapped to ordinals.
        enum_type (type[IntEnum] | None): When set, decoded values are members of
            this enum rather than plain ints.
    """

    enum_names: tuple[str, ...]
    aliases: Mapping[str, int] = field(default_factory=lambda: MappingProxyType({}), hash=False)
    enum_type: type[IntEnum] | None = None

    def __post_init__(self) -> None:
        lookup: dict[str, int] = {}
        for ordinal, name in enumerate(self.enum_names):
            lookup.setdefault(name.lower(), ordinal)
        for alias, ordinal in self.aliases.items():
            if not 0 <= ordinal < len(self.enum_names):
                raise ValueError(f"alias {alias!r} points to unknown ordinal {ordinal}")
            lookup.setdefault(alias.lower(), ordinal)
        object.__setattr__(self, "_lookup", MappingProxyType(lookup))

    @classmethod
    def from_enum(
        cls,
        enum_type: type[IntEnum],
        aliases: Mapping[str, int] | None = None,
    ) -> EnumFormatter:
        """Build a formatter from an `IntEnum` whose values are 0..N-1.

        Args:
            enum_type (type[IntEnum]): Enumeration to mirror; member names become
                the canonical names.
            aliases (Mapping[str, int] | None): Optional extra names.

        Returns:
            EnumFormatter: Formatter that decodes to members of ``enum_type``.

        Raises:
            ValueError: If the member values are not contiguous from 0.
        """
        members: list[IntEnum] = sorted(enum_type, key=int)
        if [int(m) for m in members] != list(range(len(members))):
            raise ValueError(f"{enum_type.__qualname__} values must be contiguous from 0")
        return cls(
            enum_names=tuple(m.name for m in members),
            aliases=MappingProxyType(dict(aliases or {})),
            enum_type=enum_type,
        )

    def names(self) -> tuple[str, ...]:
        """Return the canonical names in ordinal order."""
        return self.enum_names

    def print(self, ordinal: int) -> str:
        """Return the canonical name for ``ordinal``, or ``"?"`` when out of range."""
        if 0 <= ordinal < len(self.enum_names):
            return self.enum_names[ordinal]
        return ENUM_UNKNOWN_NAME

    def parse(self, name: str) -> int:
        """Return the ordinal for ``name`` (case-insensitive), or `ENUM_INVALID`."""
        lookup: Mapping[str, int] = getattr(self, "_lookup")
        return lookup.get(name.lower(), ENUM_INVALID)

    def to_value(self, ordinal: int) -> int:
        """Return the stored representation of ``ordinal`` (enum member or int)."""
        if self.enum_type is not None:
            return self.enum_type(ordinal)
        return ordinal


def create_enum_formatter(
    names: Sequence[str],
    aliases: Mapping[str, int] | None = None,
) -> EnumFormatter:
    """Create an `EnumFormatter` from an ordered list of names.

    Args:
        names (Sequence[str]): Canonical names; the position is the ordinal.
        aliases (Mapping[str, int] | None): Optional extra names.

    Returns:
        EnumFormatter: The new formatter.
    """
    return EnumFormatter(
        enum_names=tuple(names),
        aliases=MappingProxyType(dict(aliases or {})),
    )
