"""
Core indexing logic for the Lua Code Index.
"""

from .locks import IndexLock
from .parser import LuaParser, LuaSyntaxError, ParseResult
from .indexer import SourceIndex, get_source_index
from .definitions import DefinitionResolver
from .resolver import DependencyResolver
from .workspace import scan_global_files

__all__ = [
    "IndexLock",
    "LuaParser",
    "LuaSyntaxError",
    "ParseResult",
    "SourceIndex",
    "get_source_index",
    "DefinitionResolver",
    "DependencyResolver",
    "scan_global_files",
]
