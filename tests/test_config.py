"""
Tests for settings loading.
"""

from lua_index.core.config import Settings, split_setting
from lua_index.models.index_config import DEFAULT_INCLUDE_KEYWORDS, LuaVersion


class TestConfiguration:
    """Test configuration management."""

    def test_default_values(self, monkeypatch):
        """Test default configuration values."""
        for name in ("PORT", "LUA_SEARCH_PATHS", "LUA_INCLUDE_KEYWORDS", "LUA_VERSION", "GLOBAL_SCRIPT_PATTERNS"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.port == 8080
        assert settings.global_patterns == ["Scripts/*.lua", "../_fallback/Scripts/*.lua"]
        assert settings.to_index_config().include_keywords == DEFAULT_INCLUDE_KEYWORDS

    def test_settings_from_environment(self, monkeypatch):
        """Environment variables feed the index configuration."""
        monkeypatch.setenv("LUA_SEARCH_PATHS", "libs; vendor/?.lua ;")
        monkeypatch.setenv("LUA_INCLUDE_KEYWORDS", "require, Import")
        monkeypatch.setenv("LUA_VERSION", "LuaJIT")
        monkeypatch.setenv("RESOLVE_FUNCTION_DECLARATIONS", "true")

        config = Settings(_env_file=None).to_index_config()

        assert config.search_paths == ["libs", "vendor/?.lua"]
        assert config.include_keywords == ["require", "Import"]
        assert config.lua_version == LuaVersion.LUAJIT
        assert config.resolve_function_declarations is True

    def test_split_setting(self):
        """Blank entries are dropped."""
        assert split_setting("", ",") == []
        assert split_setting("a,,b ,", ",") == ["a", "b"]
