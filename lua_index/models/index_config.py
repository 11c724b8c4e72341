"""
Index configuration snapshot shared by the walker and the dependency resolver.
"""

from enum import Enum
from typing import Dict, Final, List
from pydantic import BaseModel, Field, field_validator


DEFAULT_INCLUDE_KEYWORDS: Final[List[str]] = ["Include", "Require", "require", "dofile", "include"]


class LuaVersion(str, Enum):
    """Lua dialects accepted by the parser."""

    LUA_51 = "5.1"
    LUA_52 = "5.2"
    LUA_53 = "5.3"
    LUA_54 = "5.4"
    LUAJIT = "LuaJIT"

    def supports(self, required: "LuaVersion") -> bool:
        """Check whether this dialect accepts syntax introduced in `required`."""
        return _FEATURE_LEVELS[self] >= _FEATURE_LEVELS[required]


# LuaJIT accepts goto and labels but none of the 5.3/5.4 syntax
_FEATURE_LEVELS: Dict[LuaVersion, int] = {
    LuaVersion.LUA_51: 1,
    LuaVersion.LUA_52: 2,
    LuaVersion.LUA_53: 3,
    LuaVersion.LUA_54: 4,
    LuaVersion.LUAJIT: 2,
}


class IndexConfig(BaseModel):
    """Configuration snapshot. Changes replace the whole snapshot."""

    search_paths: List[str] = Field(default_factory=list, description="Directories or '?' templates searched for modules, in order")
    include_keywords: List[str] = Field(default_factory=lambda: list(DEFAULT_INCLUDE_KEYWORDS), description="Call names treated as module imports")
    lua_version: LuaVersion = Field(LuaVersion.LUA_51, description="Dialect passed to the parser")
    resolve_function_declarations: bool = Field(False, description="Also match named function declarations in definition queries")

    @field_validator('search_paths')
    @classmethod
    def drop_blank_paths(cls, v):
        """Drop empty entries left by trailing separators."""
        return [path.strip() for path in v if path and path.strip()]

    @field_validator('include_keywords')
    @classmethod
    def default_include_keywords(cls, v):
        """Fall back to the default keyword set when none are given."""
        keywords = [keyword.strip() for keyword in v if keyword and keyword.strip()]
        return keywords or list(DEFAULT_INCLUDE_KEYWORDS)
