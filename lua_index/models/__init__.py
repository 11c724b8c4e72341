"""
Data models for the Lua Code Index.
"""

from .index_config import DEFAULT_INCLUDE_KEYWORDS, IndexConfig, LuaVersion
from .source_file import (
    Assignment,
    Declaration,
    DefinitionLocation,
    FunctionDeclaration,
    IdentifierOccurrence,
    OutlineSymbol,
    Position,
    Range,
    SourceFile,
)

__all__ = [
    "Assignment",
    "Declaration",
    "DEFAULT_INCLUDE_KEYWORDS",
    "DefinitionLocation",
    "FunctionDeclaration",
    "IdentifierOccurrence",
    "IndexConfig",
    "LuaVersion",
    "OutlineSymbol",
    "Position",
    "Range",
    "SourceFile",
]
