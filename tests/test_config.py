"""Tests for configuration loading (config.py)."""

import pytest

from stencil_lens.config import PluginConfig, load_config
from stencil_lens.core.errors import ConfigError, ErrorCode


class TestLoadConfig:

    def test_defaults(self) -> None:
        config = load_config({})

        assert isinstance(config, PluginConfig)
        assert config.model_dump() == PluginConfig().model_dump()
        assert config.remove == ["caller"]
        assert config.quick_info_cache_size == 512
        assert config.excluded_tag_prefixes == ["test-"]
        assert config.logging.level == "INFO"

    def test_plugin_config_block(self) -> None:
        config = load_config({
            "name": "stencil-lens",
            "remove": ["caller", "apply"],
            "logging": {"level": "debug"},
        })

        assert config.remove == ["caller", "apply"]
        assert config.logging.level == "DEBUG"

    def test_environment_overrides_plugin_config(self, monkeypatch) -> None:
        monkeypatch.setenv("STENCIL_LENS__QUICK_INFO_CACHE_SIZE", "64")
        monkeypatch.setenv("STENCIL_LENS__LOGGING__LEVEL", "WARNING")
        monkeypatch.setenv("STENCIL_LENS__EXCLUDED_TAG_PREFIXES", '["test-", "demo-"]')
        monkeypatch.setenv("UNRELATED", "1")

        config = load_config({"quick_info_cache_size": 10, "logging": {"format": "json"}})

        assert config.quick_info_cache_size == 64
        assert config.logging.level == "WARNING"
        assert config.logging.format == "json"
        assert config.excluded_tag_prefixes == ["test-", "demo-"]

    def test_environment_names_are_case_insensitive(self, monkeypatch) -> None:
        monkeypatch.setenv("stencil_lens__quick_info_cache_size", "7")

        assert load_config({}).quick_info_cache_size == 7

    def test_keyword_overrides_win(self, monkeypatch) -> None:
        monkeypatch.setenv("STENCIL_LENS__QUICK_INFO_CACHE_SIZE", "64")

        config = load_config({"quick_info_cache_size": 10}, quick_info_cache_size=3)

        assert config.quick_info_cache_size == 3

    def test_invalid_value_raises_config_error(self) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config({"quick_info_cache_size": 0})

        assert exc_info.value.code is ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"] == "quick_info_cache_size"
        assert "quick_info_cache_size" in str(exc_info.value)

    def test_error_codes(self) -> None:
        assert {code.name for code in ErrorCode} == {"CONFIG_INVALID_VALUE", "GRAMMAR_UNAVAILABLE"}
