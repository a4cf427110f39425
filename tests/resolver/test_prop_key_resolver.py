# topmark:header:start
#
#   project      : NotifyURL
#   file         : test_prop_key_resolver.py
#   file_relpath : tests/resolver/test_prop_key_resolver.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for key-based access to configuration records."""

from __future__ import annotations

import pytest

from notifyurl.core.errors import DecodeError, EnumValueError, UnsupportedKeyError
from notifyurl.resolver import PropKeyResolver
from notifyurl.services.logger import LoggerConfig, LogLevel
from tests.conftest import parametrize
from tests.sample_configs import Level, PairConfig, SampleConfig


def test_keys_and_query_fields() -> None:
    resolver = PropKeyResolver(SampleConfig())
    assert "subject" in resolver
    assert "port" not in resolver
    assert 42 not in resolver
    assert resolver.keys_for_field("enabled") == ("enabled", "on")
    assert resolver.keys_for_field("host") == ()
    assert resolver.query_fields() == [
        "badge",
        "enabled",
        "level",
        "limits",
        "offset",
        "retries",
        "tags",
        "title",
    ]
    assert repr(resolver) == "PropKeyResolver(SampleConfig)"


@parametrize("key", ["title", "subject"])
def test_aliases_address_the_same_field(key: str) -> None:
    config = SampleConfig()
    resolver = PropKeyResolver(config)
    resolver.set(key, "Greetings")
    assert config.title == "Greetings"
    assert resolver.get("title") == resolver.get("subject") == "Greetings"


def test_unknown_key_is_rejected() -> None:
    resolver = PropKeyResolver(SampleConfig())
    with pytest.raises(UnsupportedKeyError, match="'colour' is not a valid config key"):
        resolver.set("colour", "red")
    with pytest.raises(UnsupportedKeyError):
        resolver.get("colour")
    with pytest.raises(UnsupportedKeyError):
        resolver.field("colour")


def test_failed_set_names_key_and_keeps_value() -> None:
    config = SampleConfig()
    config.level = Level.High
    resolver = PropKeyResolver(config)
    with pytest.raises(EnumValueError) as exc_info:
        resolver.set("level", "extreme")
    assert exc_info.value.key == "level"
    assert str(exc_info.value) == "invalid value 'extreme' for 'level': not one of Low, Normal, High"
    assert config.level is Level.High


def test_set_default_props() -> None:
    config = SampleConfig()
    config.title = "Kept"
    PropKeyResolver(config).set_default_props()

    assert config.title == "Kept"
    assert config.port == 8080
    assert config.enabled is True
    assert config.level is Level.Normal
    assert config.retries == 0


def test_set_default_props_on_other_record() -> None:
    bound = SampleConfig()
    other = PairConfig()
    PropKeyResolver(bound).set_default_props(other)
    assert other.point == ["0", "0"]
    assert bound.port == 0


def test_set_default_props_keeps_assigned_zero_values() -> None:
    config = SampleConfig()
    config.enabled = False
    config.port = 0
    config.level = Level.Low
    PropKeyResolver(config).set_default_props()

    assert config.enabled is False
    assert config.port == 0
    assert config.level is Level.Low
    assert config.title == "Hello"
    assert config.assigned_fields() >= {"enabled", "port", "level", "title"}


def test_set_default_props_keeps_constructor_arguments() -> None:
    config = LoggerConfig(level=LogLevel.Trace)
    assert config.assigned_fields() == {"level"}
    PropKeyResolver(config).set_default_props()
    assert config.level is LogLevel.Trace

    untouched = LoggerConfig()
    PropKeyResolver(untouched).set_default_props()
    assert untouched.level is LogLevel.Info


def test_set_url_preserves_assignment_state() -> None:
    config = SampleConfig()
    config.set_url("sample://example.com/general?enabled=No")
    assert "enabled" in config.assigned_fields()
    assert "retries" not in config.assigned_fields()

    PropKeyResolver(config).set_default_props()
    assert config.enabled is False
    assert config.title == "Hello"


def test_is_default() -> None:
    resolver = PropKeyResolver(SampleConfig())
    assert resolver.is_default("title", "Hello")
    assert resolver.is_default("on", "Yes")
    assert not resolver.is_default("title", "Bye")
    assert not resolver.is_default("retries", "0")
    assert not resolver.is_default("missing", "")


def test_update_from_params_leaves_record_untouched() -> None:
    config: SampleConfig = SampleConfig.defaults()
    config.tags = ["shared"]
    params: dict[str, str] = {"subject": "Per call", "tags": "a,b"}

    updated: SampleConfig = PropKeyResolver(config).update_from_params(params)

    assert updated is not config
    assert (updated.title, updated.tags) == ("Per call", ["a", "b"])
    assert (config.title, config.tags) == ("Hello", ["shared"])
    assert params == {"subject": "Per call", "tags": "a,b"}

    # Deep copy: mutating the copy's collections leaves the original alone.
    updated.tags.append("c")
    assert config.tags == ["shared"]


def test_update_from_params_commit_is_atomic() -> None:
    config: SampleConfig = SampleConfig.defaults()
    resolver = PropKeyResolver(config)

    with pytest.raises(DecodeError):
        resolver.update_from_params({"title": "Changed", "retries": "-1"}, commit=True)
    assert config.title == "Hello"

    result = resolver.update_from_params({"title": "Changed", "retries": "7"}, commit=True)
    assert result is config
    assert (config.title, config.retries) == ("Changed", 7)


def test_update_from_params_accepts_none() -> None:
    config: SampleConfig = SampleConfig.defaults()
    assert PropKeyResolver(config).update_from_params(None) == config


def test_bind_views_another_record() -> None:
    first, second = SampleConfig(), SampleConfig()
    resolver = PropKeyResolver(first)
    resolver.bind(second).set("retries", "5")
    assert (first.retries, second.retries) == (0, 5)
    assert resolver.config is first
