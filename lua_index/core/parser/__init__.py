"""
Lua parsing using Tree-sitter.
"""

from .base import LanguageParser, LuaSyntaxError, ParseResult
from .lua import LuaParser

__all__ = [
    'LanguageParser',
    'LuaParser',
    'LuaSyntaxError',
    'ParseResult',
]
