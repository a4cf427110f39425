# topmark:header:start
#
#   project      : NotifyURL
#   file         : service.py
#   file_relpath : src/notifyurl/service.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Service configuration base class and the adapter contract.

A notification back-end is described by a `ServiceConfig` dataclass whose
fields are declared with `notifyurl.schema.fields`. The base class wires the
schema to the URL codec:

```python
@dataclass
class GotifyConfig(ServiceConfig):
    scheme: ClassVar[str] = "gotify"

    host: str = text_field(url="host", required=True)
    token: str = text_field(url="path", required=True)
    priority: int = int_field(key="priority", default="0")


config = GotifyConfig.from_url("gotify://push.example.com/Aaa.bbb?priority=5")
config.get_url()
```

Adapters (`Service`) consume a configuration through three calls:
``initialize(url)``, ``send(message, params)`` and ``config_url()``.
`StandardService` implements the first and last and offers `params_config` so
``send`` never mutates the shared configuration.
"""

from __future__ import annotations

import copy
import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, ClassVar, Generic, Protocol, TypeVar

from notifyurl.codec.url import compose, decompose
from notifyurl.config.logging import get_logger
from notifyurl.constants import ASSIGNED_FIELDS_ATTR
from notifyurl.core.errors import ServiceStateError
from notifyurl.resolver import PropKeyResolver, copy_fields
from notifyurl.schema.extractor import get_descriptors

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notifyurl.config.logging import NotifyurlLogger
    from notifyurl.schema.descriptor import FieldDescriptor

logger: NotifyurlLogger = get_logger(__name__)

_C = TypeVar("_C", bound="ServiceConfig")


@dataclass
class ServiceConfig:
    """Base class of all service configuration records.

    Class attributes:
        scheme: URL scheme identifying the service.
        force_query: Emit ``?`` even when the query string is empty.
        fixed_host: Host emitted (and accepted) when the schema has no host field.

    Records remember which fields were explicitly assigned, through the
    constructor or later attribute assignment, so schema defaults never
    overwrite an assigned zero value such as ``False`` or ``0``.
    """

    scheme: ClassVar[str] = ""
    force_query: ClassVar[bool] = False
    fixed_host: ClassVar[str] = ""

    def __new__(cls: type[_C], *args: Any, **kwargs: Any) -> _C:
        record: _C = object.__new__(cls)
        init_names: list[str] = [f.name for f in dataclasses.fields(cls) if f.init]
        object.__setattr__(record, ASSIGNED_FIELDS_ATTR, {*init_names[: len(args)], *kwargs})
        object.__setattr__(record, "_tracking", False)
        return record

    def __post_init__(self) -> None:
        # Constructor assignments of untouched defaults are not explicit.
        object.__setattr__(self, "_tracking", True)

    def __setattr__(self, name: str, value: Any) -> None:
        super().__setattr__(name, value)
        if self.__dict__.get("_tracking"):
            getattr(self, ASSIGNED_FIELDS_ATTR).add(name)

    def assigned_fields(self) -> frozenset[str]:
        """Names of the fields explicitly assigned on this record."""
        return frozenset(getattr(self, ASSIGNED_FIELDS_ATTR))

    @classmethod
    def descriptors(cls) -> tuple[FieldDescriptor, ...]:
        """Return the validated field descriptors of this configuration type."""
        return get_descriptors(cls)

    @classmethod
    def defaults(cls: type[_C]) -> _C:
        """Return a new record with every schema default applied."""
        config: _C = cls()
        PropKeyResolver(config).set_default_props()
        return config

    @classmethod
    def from_url(cls: type[_C], url: str) -> _C:
        """Build a record from its service URL (defaults first, then the URL).

        Raises:
            NotifyurlError: Any codec error raised while decoding ``url``.
        """
        config: _C = cls.defaults()
        config.set_url(url)
        return config

    def resolver(self) -> PropKeyResolver:
        """Return a key resolver bound to this record."""
        return PropKeyResolver(self)

    def clone(self: _C) -> _C:
        """Return a deep copy of this record."""
        return copy.deepcopy(self)

    def get_url(self) -> str:
        """Return the service URL of the current field values."""
        return compose(self)

    def set_url(self, url: str) -> None:
        """Update this record from a service URL.

        The URL is decoded into a clone first, so a failing URL leaves the
        record unchanged.
        """
        working: ServiceConfig = self.clone()
        working._decode_url(url)
        copy_fields(working, self)

    def _decode_url(self, url: str) -> None:
        """Decode ``url`` into this record in place; override for custom layouts."""
        decompose(self, url)


class Service(Protocol):
    """Adapter contract consumed by routers and command-line front ends."""

    @property
    def service_id(self) -> str:
        """Scheme of the configured back-end."""
        ...

    def initialize(self, url: str) -> None:
        """Parse ``url`` and keep the resulting configuration."""
        ...

    def send(self, message: str, params: Mapping[str, str] | None = None) -> None:
        """Deliver ``message``, applying per-call ``params`` to a private copy."""
        ...

    def config_url(self) -> str:
        """Return the service URL of the current configuration."""
        ...


class StandardService(ABC, Generic[_C]):
    """Shared adapter plumbing on top of a `ServiceConfig` type.

    Subclasses implement ``send``; the configuration is parsed once in
    ``initialize`` and only read afterwards.

    Args:
        config_type (type[_C]): Configuration record type of the back-end.
    """

    def __init__(self, config_type: type[_C]) -> None:
        self.config_type: type[_C] = config_type
        self._config: _C | None = None

    @property
    def service_id(self) -> str:
        return self.config_type.scheme

    @property
    def config(self) -> _C:
        """The configuration parsed by ``initialize``.

        Raises:
            ServiceStateError: If the service was not initialized.
        """
        if self._config is None:
            raise ServiceStateError(f"{self.service_id} service is not initialized")
        return self._config

    def initialize(self, url: str) -> None:
        self._config = self.config_type.from_url(url)
        logger.debug("Initialized %s service", self.service_id)

    def config_url(self) -> str:
        return self.config.get_url()

    def params_config(self, params: Mapping[str, str] | None) -> _C:
        """Return a private copy of the configuration with ``params`` applied.

        Raises:
            UnsupportedKeyError: If a parameter key matches no field.
            DecodeError: If a parameter value does not match its field.
        """
        updated: Any = self.config.resolver().update_from_params(params)
        return updated

    @abstractmethod
    def send(self, message: str, params: Mapping[str, str] | None = None) -> None:
        """Deliver ``message``; use `params_config` for per-call ``params``."""
