# topmark:header:start
#
#   project      : NotifyURL
#   file         : enum_mixins.py
#   file_relpath : src/notifyurl/core/enum_mixins.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Token-keyed string enums used by the schema layer.

`KeyedStrEnum` members carry a canonical token (their ``.value``), a short
description and any number of alternative spellings. Schema declarations refer
to members by token (``url="pass"``, ``list_field(item="bool")``), so lookup is
forgiving about case, surrounding blanks, and ``-`` versus ``_``.

Example:
    ```python
    class Slot(KeyedStrEnum):
        USER = ("user", "URL user name")
        PASSWORD = ("password", "URL password", ("pass",))

    assert Slot.parse("Pass") is Slot.PASSWORD
    assert Slot.accepted_tokens() == ("pass", "password", "user")
    ```
"""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

_KS = TypeVar("_KS", bound="KeyedStrEnum")

# Per-class token index, filled on first lookup.
_TOKEN_INDEX: dict[type[KeyedStrEnum], Mapping[str, KeyedStrEnum]] = {}


def _norm_token(s: str) -> str:
    return s.strip().lower().replace("-", "_")


class KeyedStrEnum(str, Enum):
    """String enum addressed by canonical token, member name or alias.

    Attributes:
        description (str): Short human-readable description of the member.
        aliases (tuple[str, ...]): Extra tokens accepted by `parse()`.
    """

    description: str
    aliases: tuple[str, ...]

    def __new__(
        cls: type[_KS],
        token: str,
        description: str,
        aliases: Iterable[str] = (),
    ) -> _KS:
        member: _KS = str.__new__(cls, token)
        member._value_ = token
        member.description = description
        member.aliases = tuple(aliases)
        return member

    @property
    def key(self) -> str:
        """Canonical token (same as ``.value``)."""
        return str(self.value)

    def __str__(self) -> str:
        return self.key

    @classmethod
    def _index(cls: type[_KS]) -> Mapping[str, _KS]:
        index = _TOKEN_INDEX.get(cls)
        if index is None:
            table: dict[str, KeyedStrEnum] = {}
            for member in cls:
                for token in (member.value, member.name, *member.aliases):
                    table.setdefault(_norm_token(token), member)
            index = MappingProxyType(table)
            _TOKEN_INDEX[cls] = index
        return index  # type: ignore[return-value]

    @classmethod
    def parse(cls: type[_KS], raw: str | None) -> _KS | None:
        """Return the member matching ``raw``, or None when nothing matches."""
        if raw is None:
            return None
        return cls._index().get(_norm_token(raw))

    @classmethod
    def accepted_tokens(cls) -> tuple[str, ...]:
        """All spellings `parse()` accepts, sorted, empty token excluded."""
        return tuple(sorted(token for token in cls._index() if token))
