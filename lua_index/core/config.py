"""
Configuration management for the Lua Code Index.
"""

import logging
import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..models.index_config import IndexConfig, LuaVersion

logger = logging.getLogger(__name__)

# ENV_FILE wins over a local .env
env_file = os.environ.get("ENV_FILE", None)
if env_file and Path(env_file).exists():
    load_dotenv(env_file)
    logger.debug(f"Loaded environment from {env_file} (from ENV_FILE)")
elif Path(".env").exists():
    load_dotenv(".env")
    logger.debug("Loaded environment from .env")


def split_setting(value: str, separator: str) -> List[str]:
    """Split a separator-delimited setting, dropping blank entries."""
    if not value:
        return []
    return [item.strip() for item in value.split(separator) if item.strip()]


class Settings(BaseSettings):
    """Application settings, read from the environment."""

    # Application settings
    app_name: str = "Lua Code Index"
    app_version: str = "0.1.0"
    debug: bool = Field(default=False)
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=8080)

    # Workspace settings
    workspace_root: str = Field(default_factory=os.getcwd)
    global_script_patterns: str = Field(default="Scripts/*.lua;../_fallback/Scripts/*.lua")

    # Index settings
    lua_search_paths: str = Field(default="")  # ';' separated
    lua_include_keywords: str = Field(default="")  # ',' separated, empty means defaults
    lua_version: LuaVersion = Field(default=LuaVersion.LUA_51)
    resolve_function_declarations: bool = Field(default=False)

    # API settings
    cors_origins: str = Field(default="*")  # ',' separated

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def search_paths(self) -> List[str]:
        return split_setting(self.lua_search_paths, ";")

    @property
    def include_keywords(self) -> List[str]:
        return split_setting(self.lua_include_keywords, ",")

    @property
    def global_patterns(self) -> List[str]:
        return split_setting(self.global_script_patterns, ";")

    @property
    def cors_origin_list(self) -> List[str]:
        return split_setting(self.cors_origins, ",") or ["*"]

    def to_index_config(self) -> IndexConfig:
        """Build the index configuration snapshot from these settings."""
        return IndexConfig(
            search_paths=self.search_paths,
            include_keywords=self.include_keywords,
            lua_version=self.lua_version,
            resolve_function_declarations=self.resolve_function_declarations,
        )


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
