# topmark:header:start
#
#   project      : NotifyURL
#   file         : resolver.py
#   file_relpath : src/notifyurl/resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Key-based access to one configuration record.

`PropKeyResolver` binds the (shared, immutable) descriptors of a configuration
type to one record instance. It offers:

    - ``get`` / ``set`` by query key, resolving aliases;
    - ``set_default_props`` to apply schema defaults;
    - ``update_from_params`` to overlay per-call parameters on a private copy.

Concurrency:
    A record is an ordinary mutable value without locking. Concurrent ``set``
    calls against one shared record are not supported; per-call overrides go
    through ``update_from_params``, which never touches the bound record unless
    ``commit=True`` is passed.

A resolver holds a reference to its record and is cheap to create; many
resolvers may view the same record.
"""

from __future__ import annotations

import copy
import dataclasses
from typing import TYPE_CHECKING, Any

from notifyurl.codec.values import decode_value, encode_value, zero_value
from notifyurl.config.logging import get_logger
from notifyurl.constants import ASSIGNED_FIELDS_ATTR
from notifyurl.core.errors import DecodeError, EncodeError, UnsupportedKeyError
from notifyurl.schema.extractor import descriptor_map, get_descriptors, key_map
from notifyurl.schema.kinds import FieldKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notifyurl.config.logging import NotifyurlLogger
    from notifyurl.schema.descriptor import FieldDescriptor

logger: NotifyurlLogger = get_logger(__name__)


def _holds_zero_value(d: FieldDescriptor, value: Any) -> bool:
    zero: Any = zero_value(d.spec)
    if d.kind is FieldKind.COMPOSITE:
        try:
            return encode_value(d.spec, value) == encode_value(d.spec, zero)
        except EncodeError:
            return False
    return bool(value == zero)


def is_explicitly_set(record: Any, d: FieldDescriptor) -> bool:
    """Return True if field ``d`` of ``record`` was given a value.

    Records that track assignments (`notifyurl.service.ServiceConfig`) answer
    from their assignment set, so an explicit ``False``, ``0`` or first enum
    member counts as set. Plain dataclasses cannot tell an assigned zero value
    from an untouched field; for them any non-zero value counts as set.
    """
    assigned: set[str] | None = getattr(record, ASSIGNED_FIELDS_ATTR, None)
    if assigned is not None:
        return d.name in assigned
    return not _holds_zero_value(d, getattr(record, d.name))


def copy_fields(source: Any, target: Any) -> None:
    """Copy every dataclass field of ``source`` onto ``target``.

    The assignment set travels along, so fields only copied over do not turn
    into explicit assignments.
    """
    for f in dataclasses.fields(source):
        setattr(target, f.name, getattr(source, f.name))
    assigned: set[str] | None = getattr(source, ASSIGNED_FIELDS_ATTR, None)
    if assigned is not None:
        object.__setattr__(target, ASSIGNED_FIELDS_ATTR, set(assigned))


class PropKeyResolver:
    """Key Resolver bound to one configuration record.

    Args:
        config (Any): Configuration record (a dataclass instance declaring its
            fields with `notifyurl.schema.fields`).

    Raises:
        SchemaError: If the record's type has an invalid schema.
    """

    def __init__(self, config: Any) -> None:
        self._config: Any = config
        self._config_type: type = type(config)
        self._descriptors: tuple[FieldDescriptor, ...] = get_descriptors(self._config_type)
        self._keys: Mapping[str, FieldDescriptor] = key_map(self._config_type)
        self._fields: Mapping[str, FieldDescriptor] = descriptor_map(self._config_type)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._config_type.__qualname__})"

    @property
    def config(self) -> Any:
        """The bound configuration record."""
        return self._config

    @property
    def descriptors(self) -> tuple[FieldDescriptor, ...]:
        """Field descriptors of the bound record's type, in declaration order."""
        return self._descriptors

    def bind(self, config: Any) -> PropKeyResolver:
        """Return a new resolver viewing ``config`` instead of the bound record."""
        return type(self)(config)

    # --- Key lookup -----------------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key in self._keys

    def keys(self) -> tuple[str, ...]:
        """Return every query-key alias, in declaration order."""
        return tuple(self._keys)

    def query_fields(self) -> list[str]:
        """Return the canonical keys of all query-carried fields, sorted.

        Fields placed in a structural URL slot are not listed even if they
        also declare query keys.
        """
        return sorted(
            d.query_keys[0] for d in self._descriptors if not d.is_placed and d.query_keys
        )

    def keys_for_field(self, field_name: str) -> tuple[str, ...]:
        """Return the aliases of the field named ``field_name`` (canonical first)."""
        d: FieldDescriptor | None = self._fields.get(field_name)
        return d.query_keys if d is not None else ()

    def descriptor_for(self, key: str) -> FieldDescriptor:
        """Resolve a query key (canonical or alias) to its descriptor.

        Raises:
            UnsupportedKeyError: If no field declares ``key``.
        """
        d: FieldDescriptor | None = self._keys.get(key)
        if d is None:
            raise UnsupportedKeyError(key, self._config_type.__qualname__)
        return d

    def field(self, field_name: str) -> FieldDescriptor:
        """Return the descriptor of the field named ``field_name``.

        Raises:
            UnsupportedKeyError: If the type has no codec-visible field of that name.
        """
        d: FieldDescriptor | None = self._fields.get(field_name)
        if d is None:
            raise UnsupportedKeyError(field_name, self._config_type.__qualname__)
        return d

    # --- Field access ---------------------------------------------------------

    def encode_field(self, d: FieldDescriptor) -> str:
        """Return the textual encoding of field ``d`` on the bound record."""
        return encode_value(d.spec, getattr(self._config, d.name))

    def decode_field(self, d: FieldDescriptor, text: str, *, via: str | None = None) -> None:
        """Decode ``text`` into field ``d`` of the bound record.

        Args:
            d (FieldDescriptor): Target field.
            text (str): Raw text.
            via (str | None): Key or URL part the text came from; attached to a
                raised `DecodeError` that does not name its key yet.

        Raises:
            DecodeError: Propagated from the value codec.
        """
        try:
            value: Any = decode_value(d.spec, text)
        except DecodeError as exc:
            if exc.key is None:
                exc.key = via or d.name
            raise
        setattr(self._config, d.name, value)
        logger.trace("Set %s.%s via %s", self._config_type.__qualname__, d.name, via or d.name)

    def get(self, key: str) -> str:
        """Return the encoded value of the field addressed by ``key``.

        Raises:
            UnsupportedKeyError: If no field declares ``key``.
            EncodeError: If the current value cannot be encoded.
        """
        return self.encode_field(self.descriptor_for(key))

    def set(self, key: str, value: str) -> None:
        """Decode ``value`` into the field addressed by ``key``.

        Codec errors are propagated unchanged apart from recording ``key`` on them.

        Raises:
            UnsupportedKeyError: If no field declares ``key``.
            DecodeError: If ``value`` does not match the field's kind.
        """
        self.decode_field(self.descriptor_for(key), value, via=key)

    def is_default(self, key: str, value: str) -> bool:
        """Return True if ``value`` is the schema default of the field addressed by ``key``."""
        d: FieldDescriptor | None = self._keys.get(key)
        return d is not None and d.default is not None and d.default == value

    # --- Bulk operations ------------------------------------------------------

    def set_default_props(self, config: Any | None = None) -> None:
        """Apply schema defaults to ``config`` (the bound record when omitted).

        Only fields that were never explicitly set are touched, so values
        assigned before this call survive, zero values included. Defaults were
        validated during schema extraction, so this cannot fail for a record of
        a valid type.
        """
        target: PropKeyResolver = self if config is None else self.bind(config)
        applied: int = 0
        for d in target.descriptors:
            if d.default is None:
                continue
            if is_explicitly_set(target.config, d):
                continue
            target.decode_field(d, d.default, via="default")
            applied += 1
        logger.debug(
            "Applied %d default(s) to %s", applied, target.config.__class__.__qualname__
        )

    def update_from_params(
        self,
        params: Mapping[str, str] | None,
        *,
        commit: bool = False,
    ) -> Any:
        """Overlay per-call parameters on a private copy of the bound record.

        The caller's ``params`` mapping is only read. The bound record is left
        untouched unless ``commit`` is True, in which case the fully updated
        copy is written back after every parameter was applied successfully.

        Args:
            params (Mapping[str, str] | None): Key/value overrides; keys may be
                canonical keys or aliases.
            commit (bool): Write the result back to the bound record.

        Returns:
            Any: The updated copy (or the bound record when ``commit`` is True).

        Raises:
            UnsupportedKeyError: If a parameter key matches no field.
            DecodeError: If a parameter value does not match its field's kind.
        """
        working: Any = copy.deepcopy(self._config)
        overlay: PropKeyResolver = self.bind(working)
        for key, value in (params or {}).items():
            overlay.set(key, value)

        if not commit:
            return working

        copy_fields(working, self._config)
        return self._config
