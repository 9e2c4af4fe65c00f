"""Tests for ContextVar-based parse configuration."""

from threading import Thread

import pytest

from leafmark import (
    Heading,
    Paragraph,
    ParseConfig,
    get_parse_config,
    parse,
    parse_config_context,
    reset_parse_config,
    set_parse_config,
)
from leafmark.errors import ConfigError


class TestParseConfigDataclass:
    """Test ParseConfig frozen dataclass behavior."""

    def test_default_values(self) -> None:
        config = ParseConfig()
        assert config.setext_headings is True
        assert config.duplicate_labels == "first"
        assert config.tab_size == 4

    def test_immutability(self) -> None:
        config = ParseConfig()
        with pytest.raises(AttributeError):
            config.setext_headings = False  # type: ignore[misc]

    def test_invalid_duplicate_policy(self) -> None:
        with pytest.raises(ConfigError, match="duplicate_labels"):
            ParseConfig(duplicate_labels="newest")

    def test_invalid_tab_size(self) -> None:
        with pytest.raises(ConfigError, match="tab_size"):
            ParseConfig(tab_size=0)


class TestFromDict:
    """ParseConfig.from_dict filtering and validation."""

    def test_known_keys(self) -> None:
        config = ParseConfig.from_dict({"setext_headings": False, "duplicate_labels": "last"})
        assert config.setext_headings is False
        assert config.duplicate_labels == "last"

    def test_unknown_keys_ignored(self) -> None:
        config = ParseConfig.from_dict({"tables_enabled": True})
        assert config == ParseConfig()

    def test_invalid_value_raises(self) -> None:
        with pytest.raises(ConfigError):
            ParseConfig.from_dict({"duplicate_labels": "middle"})


class TestContextVarFunctions:
    """Test get/set/reset functions."""

    def teardown_method(self) -> None:
        reset_parse_config()

    def test_default_config(self) -> None:
        assert get_parse_config() == ParseConfig()

    def test_set_and_get(self) -> None:
        set_parse_config(ParseConfig(setext_headings=False))
        assert get_parse_config().setext_headings is False

    def test_reset(self) -> None:
        set_parse_config(ParseConfig(tab_size=2))
        reset_parse_config()
        assert get_parse_config().tab_size == 4

    def test_set_config_affects_parse(self) -> None:
        set_parse_config(ParseConfig(setext_headings=False))
        assert isinstance(parse("a\n=").children[0], Paragraph)


class TestContextManager:
    """Test parse_config_context."""

    def test_restores_previous(self) -> None:
        with parse_config_context(ParseConfig(setext_headings=False)):
            assert get_parse_config().setext_headings is False
        assert get_parse_config().setext_headings is True

    def test_restores_on_exception(self) -> None:
        with pytest.raises(RuntimeError):
            with parse_config_context(ParseConfig(setext_headings=False)):
                raise RuntimeError("boom")
        assert get_parse_config().setext_headings is True


class TestThreadIsolation:
    """Config set in one thread does not leak into another."""

    def test_threads_are_independent(self) -> None:
        results: dict[str, type] = {}

        def worker(name: str, setext: bool) -> None:
            with parse_config_context(ParseConfig(setext_headings=setext)):
                results[name] = type(parse("Title\n=====").children[0])

        threads = [
            Thread(target=worker, args=("on", True)),
            Thread(target=worker, args=("off", False)),
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert results == {"on": Heading, "off": Paragraph}
        assert get_parse_config().setext_headings is True
