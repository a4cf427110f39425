# topmark:header:start
#
#   project      : NotifyURL
#   file         : props.py
#   file_relpath : src/notifyurl/schema/props.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Extension point for custom (composite) field values.

A composite value owns its textual encoding. The codec creates an empty
instance with a no-argument constructor and calls `import_from_text`; on
serialization it calls `export_to_text`. Importers report malformed input by
raising `notifyurl.core.errors.DecodeError` (or a subclass); a plain
`ValueError` is accepted too and wrapped by the codec.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class ConfigProp(Protocol):
    """Two-method capability implemented by composite field values."""

    def import_from_text(self, text: str) -> None:
        """Replace this value's state with the one encoded in ``text``."""
        ...

    def export_to_text(self) -> str:
        """Return the textual encoding of this value."""
        ...


def is_config_prop_type(prop_type: object) -> bool:
    """Return True if ``prop_type`` is a class implementing `ConfigProp`."""
    return (
        isinstance(prop_type, type)
        and callable(getattr(prop_type, "import_from_text", None))
        and callable(getattr(prop_type, "export_to_text", None))
    )
