# topmark:header:start
#
#   project      : NotifyURL
#   file         : errors.py
#   file_relpath : src/notifyurl/core/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions raised by the NotifyURL configuration codec.

Taxonomy:
    - `SchemaError`: a configuration type declares something the codec cannot
      handle. Raised when descriptors are first extracted, never deferred to
      URL parsing.
    - `ServiceURLError`: the URL text itself is malformed (surfaced from the
      standard library URL parser) or addresses the wrong scheme.
    - `DecodeError`: a value does not match its declared kind, width or enum.
    - `EncodeError`: a value cannot be rendered into URL text.
    - `MissingRequiredError`: a ``required`` field is absent after decoding.
    - `UnsupportedKeyError`: a key matches no field alias.
    - `ServiceNotFoundError`: no configuration type is registered for a scheme.
    - `ServiceStateError`: a service is used before it was initialized.

Usage:
    Adapters surface these as configuration-initialization failures, typically
    before any network call is attempted. None of them are retried internally.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence


class NotifyurlError(Exception):
    """Base class for all NotifyURL errors."""


class SchemaError(NotifyurlError, TypeError):
    """Error for configuration types that cannot be mapped onto the codec."""

    def __init__(self, config_type: type | str, message: str) -> None:
        name: str = config_type if isinstance(config_type, str) else config_type.__qualname__
        super().__init__(f"invalid schema {name}: {message}")
        self.config_type_name: str = name


class ServiceURLError(NotifyurlError, ValueError):
    """Error for service URLs that cannot be split into their parts."""


class DecodeError(NotifyurlError, ValueError):
    """Error for values that do not match their declared kind.

    Attributes:
        reason (str): Human-readable cause (e.g. ``"value out of range"``).
        value (str | None): Offending raw text, when known.
        key (str | None): Query key or field name the value was set through.
            The key resolver fills this in before re-raising.
    """

    def __init__(self, reason: str, *, value: str | None = None, key: str | None = None) -> None:
        super().__init__(reason)
        self.reason: str = reason
        self.value: str | None = value
        self.key: str | None = key

    def __str__(self) -> str:
        if self.key is None and self.value is None:
            return self.reason
        if self.key is None:
            return f"invalid value {self.value!r}: {self.reason}"
        if self.value is None:
            return f"invalid value for {self.key!r}: {self.reason}"
        return f"invalid value {self.value!r} for {self.key!r}: {self.reason}"


class EnumValueError(DecodeError):
    """Error for names outside an enumerated set; the message lists the valid names."""

    def __init__(self, names: Sequence[str], *, value: str | None = None) -> None:
        super().__init__(f"not one of {', '.join(names)}", value=value)
        self.names: tuple[str, ...] = tuple(names)


class ItemCountError(DecodeError):
    """Error for fixed-length lists decoded from the wrong number of items."""

    def __init__(self, expected: int, actual: int, *, value: str | None = None) -> None:
        super().__init__(f"field value count needs to be {expected}, got {actual}", value=value)
        self.expected: int = expected
        self.actual: int = actual


class EncodeError(NotifyurlError, ValueError):
    """Error for field values that cannot be rendered as URL text."""


class MissingRequiredError(NotifyurlError, ValueError):
    """Error for ``required`` fields left unset after decoding a URL."""

    def __init__(self, field_name: str, where: str = "") -> None:
        suffix: str = f" ({where})" if where else ""
        super().__init__(f"required field {field_name!r} is missing{suffix}")
        self.field_name: str = field_name


class UnsupportedKeyError(NotifyurlError, LookupError):
    """Error for keys that match no field alias of the bound configuration."""

    def __init__(self, key: str, config_name: str = "") -> None:
        where: str = f" for {config_name}" if config_name else ""
        super().__init__(f"{key!r} is not a valid config key{where}")
        self.key: str = key

    def __str__(self) -> str:
        # LookupError would otherwise render the repr of the single argument.
        return str(self.args[0])


class ServiceNotFoundError(NotifyurlError, LookupError):
    """Error for service URLs whose scheme has no registered configuration type."""

    def __init__(self, scheme: str) -> None:
        super().__init__(f"unknown service {scheme!r}")
        self.scheme: str = scheme

    def __str__(self) -> str:
        return str(self.args[0])


class ServiceStateError(NotifyurlError, RuntimeError):
    """Error for service operations attempted before ``initialize()``."""
