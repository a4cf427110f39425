# topmark:header:start
#
#   project      : NotifyURL
#   file         : conftest.py
#   file_relpath : tests/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Pytest configuration for the NotifyURL test suite.

This file sets up global fixtures and customizes the logging configuration for test runs,
ensuring consistent and verbose logging output during testing.

Notes:
    Tests should respect the record/resolver split:

    - Build records with ``SomeConfig.defaults()`` (or ``SomeConfig()`` for a
      record holding only zero values) and mutate them directly or through a
      `notifyurl.resolver.PropKeyResolver`.
    - Do **not** register configuration types permanently; use the
      ``registered`` fixture so the process-global registry is restored.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, TypeVar, cast

import pytest

from notifyurl.config import logging
from notifyurl.registry import ServiceRegistry

F = TypeVar("F", bound=Callable[..., object])

# This defines the type for the decorator function itself:
# It takes a Callable (F) and returns the same Callable (F).
DecoratorType = Callable[[F], F]


def as_typed_mark(mark: Any) -> DecoratorType[Any]:
    """Wrap a pytest mark so static type checkers preserve the function type.

    Args:
        mark (Any): A pytest mark decorator such as `pytest.mark.codec`.

    Returns:
        DecoratorType[Any]: A decorator that preserves the wrapped function's type.
    """

    def _decorator(func: F) -> F:
        return cast("F", mark(func))

    return _decorator


mark_schema: DecoratorType[Any] = as_typed_mark(pytest.mark.schema)
mark_codec: DecoratorType[Any] = as_typed_mark(pytest.mark.codec)
mark_services: DecoratorType[Any] = as_typed_mark(pytest.mark.services)


def parametrize(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.mark.parametrize`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.mark.parametrize`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.mark.parametrize`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    mark: pytest.MarkDecorator = pytest.mark.parametrize(*args, **kwargs)
    return as_typed_mark(mark)


def hookimpl(*args: Any, **kwargs: Any) -> Callable[[F], F]:
    """Typed wrapper for `pytest.hookimpl`.

    Args:
        *args (Any): Positional arguments forwarded to `pytest.hookimpl`.
        **kwargs (Any): Keyword arguments forwarded to `pytest.hookimpl`.

    Returns:
        Callable[[F], F]: A decorator that preserves the wrapped function's type.
    """
    return as_typed_mark(pytest.hookimpl(*args, **kwargs))


@pytest.fixture(autouse=True)
def silence_notifyurl_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure NotifyURL's runtime log level is not forced via env during tests.

    This avoids accidental DEBUG/TRACE noise when the developer has exported
    NOTIFYURL_LOG_LEVEL in their shell. Individual tests can still raise the level
    via `pytest_configure` or `caplog`.

    Args:
        monkeypatch (pytest.MonkeyPatch): Pytest monkeypatch fixture used to manipulate
            environment variables.
    """
    monkeypatch.delenv(logging.LOG_LEVEL_ENV_VAR, raising=False)


@hookimpl(tryfirst=True)
def pytest_configure(config: pytest.Config) -> None:  # pylint: disable=unused-argument
    """Configure pytest settings and customize logging for the test suite.

    This function sets the logging level to TRACE for all tests,
    ensuring detailed output is captured during test execution.

    Args:
        config (pytest.Config): The pytest configuration object.
    """
    logging.setup_logging(level=logging.TRACE_LEVEL)


@pytest.fixture
def registered() -> Iterator[Callable[[type[Any]], None]]:
    """Register configuration types for the duration of one test.

    Yields:
        Callable[[type[Any]], None]: Function registering a configuration type;
            every type registered through it is unregistered afterwards.
    """
    schemes: list[str] = []

    def _register(config_type: type[Any]) -> None:
        ServiceRegistry.register(config_type)
        schemes.append(config_type.scheme)

    yield _register

    for scheme in schemes:
        ServiceRegistry.unregister(scheme)
        # Un-hide the scheme so later tests can register it again
        ServiceRegistry._removals.discard(scheme)  # pyright: ignore[reportPrivateUsage]
