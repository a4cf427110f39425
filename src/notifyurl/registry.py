# topmark:header:start
#
#   project      : NotifyURL
#   file         : registry.py
#   file_relpath : src/notifyurl/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Scheme to configuration type registry.

Notes:
    * All public views (`as_mapping()`, `names()`, etc.) are derived from a
      **composed** registry (built-in services + local overlays - removals) and
      are returned as `MappingProxyType` to prevent accidental mutation.
    * `register()` / `unregister()` perform **overlay-only** changes. They do not
      mutate the built-in table of `notifyurl.services`. Overlays are
      process-local and guarded by an `RLock`.
"""

from __future__ import annotations

from threading import RLock
from types import MappingProxyType
from typing import TYPE_CHECKING

from notifyurl.codec.url import split_url
from notifyurl.config.logging import get_logger
from notifyurl.core.errors import ServiceNotFoundError
from notifyurl.schema.extractor import get_descriptors

if TYPE_CHECKING:
    from collections.abc import Mapping

    from notifyurl.config.logging import NotifyurlLogger
    from notifyurl.service import ServiceConfig

logger: NotifyurlLogger = get_logger(__name__)


class ServiceRegistry:
    """Read-mostly registry of service configuration types, keyed by scheme."""

    _lock = RLock()

    # Local overlays; applied on top of the built-in services.
    _overrides: dict[str, type[ServiceConfig]] = {}
    _removals: set[str] = set()

    @classmethod
    def _compose(cls) -> dict[str, type[ServiceConfig]]:
        """Compose the built-in table with local overlays/removals."""
        from notifyurl.services import builtin_services as _builtins

        base: dict[str, type[ServiceConfig]] = dict(_builtins())
        # Overrides (late wins)
        base.update(cls._overrides)
        for scheme in cls._removals:
            base.pop(scheme, None)
        return base

    @classmethod
    def names(cls) -> tuple[str, ...]:
        """Return all registered schemes (sorted)."""
        with cls._lock:
            return tuple(sorted(cls._compose()))

    @classmethod
    def get(cls, scheme: str) -> type[ServiceConfig] | None:
        """Return the configuration type registered for ``scheme``.

        Args:
            scheme (str): URL scheme (case-insensitive).

        Returns:
            type[ServiceConfig] | None: The configuration type if found, else None.
        """
        with cls._lock:
            return cls._compose().get(scheme.lower())

    @classmethod
    def as_mapping(cls) -> Mapping[str, type[ServiceConfig]]:
        """Return a read-only mapping of scheme to configuration type."""
        with cls._lock:
            return MappingProxyType(cls._compose())

    @classmethod
    def register(cls, config_type: type[ServiceConfig]) -> None:
        """Register a configuration type under its ``scheme``.

        The type's schema is validated before it is registered.

        Args:
            config_type (type[ServiceConfig]): Configuration type with a unique,
                non-empty ``scheme``.

        Raises:
            ValueError: If ``scheme`` is empty or already registered.
            SchemaError: If the type's schema is invalid.

        Notes:
            - This mutates process-global registry state. Prefer temporary usage
              in tests with try/finally to ensure cleanup.
        """
        scheme: str = (config_type.scheme or "").lower()
        if not scheme:
            raise ValueError(f"{config_type.__qualname__}.scheme is required.")
        get_descriptors(config_type)
        with cls._lock:
            if scheme in cls._compose():
                raise ValueError(f"Duplicate service scheme: {scheme}")
            cls._removals.discard(scheme)
            cls._overrides[scheme] = config_type
        logger.debug("Registered %s for scheme %r", config_type.__qualname__, scheme)

    @classmethod
    def unregister(cls, scheme: str) -> bool:
        """Unregister a scheme.

        Args:
            scheme (str): Registered scheme.

        Returns:
            bool: `True` if the entry existed and was removed, else `False`.
        """
        scheme = scheme.lower()
        with cls._lock:
            existed: bool = False
            if scheme in cls._overrides:
                existed = True
                cls._overrides.pop(scheme, None)
            # Built-ins are hidden rather than removed
            if scheme in cls._compose():
                existed = True
                cls._removals.add(scheme)
            return existed

    @classmethod
    def parse_url(cls, url: str) -> ServiceConfig:
        """Build the configuration addressed by a service URL.

        Args:
            url (str): Service URL; its scheme selects the configuration type.

        Returns:
            ServiceConfig: A record with defaults applied and then overlaid with
                the URL's values.

        Raises:
            ServiceNotFoundError: If no type is registered for the scheme.
            ServiceURLError: If the URL is malformed.
        """
        scheme: str = split_url(url).scheme
        config_type: type[ServiceConfig] | None = cls.get(scheme)
        if config_type is None:
            raise ServiceNotFoundError(scheme)
        return config_type.from_url(url)
