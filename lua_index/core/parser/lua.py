"""
Lua parser using Tree-sitter.
"""

import logging
from pathlib import Path
from typing import Final, FrozenSet, List, Optional
from tree_sitter import Language, Node, Parser
import tree_sitter_lua as ts_lua

from ...models.index_config import LuaVersion
from .base import LanguageParser, LuaSyntaxError, ParseResult

logger = logging.getLogger(__name__)

# Integer division and bitwise operators arrived in 5.3
INTEGER_OPERATORS: Final[FrozenSet[str]] = frozenset({"//", "&", "|", "~", "<<", ">>"})


class LuaParser(LanguageParser):
    """Lua parser using Tree-sitter."""

    EXTENSIONS: Final[List[str]] = ['.lua']
    LANGUAGE_NAME: Final[str] = 'lua'
    LANGUAGE: Final[Language] = Language(ts_lua.language())

    def __init__(self, lua_version: LuaVersion = LuaVersion.LUA_51):
        super().__init__(LuaParser.LANGUAGE_NAME)
        self.parser = Parser(LuaParser.LANGUAGE)
        self.lua_version = lua_version

    def detect_language(self, file_path: str) -> bool:
        """Check if file is Lua."""
        ext = Path(file_path).suffix.lower()
        return ext in LuaParser.EXTENSIONS

    def parse(self, content: str) -> ParseResult:
        """
        Parse Lua content.

        Args:
            content: Source text

        Returns:
            ParseResult wrapping the syntax tree

        Raises:
            LuaSyntaxError: if the text does not parse, or uses syntax the
                configured Lua version does not have
        """
        source = content.encode('utf8')
        tree = self.parser.parse(source)
        root_node = tree.root_node

        if root_node.has_error:
            raise self._syntax_error(root_node)
        self._check_version(root_node)

        return ParseResult(tree, source, LuaParser.LANGUAGE_NAME)

    def _syntax_error(self, root_node: Node) -> LuaSyntaxError:
        """Build an error pointing at the first error or missing node."""
        stack = [root_node]
        while stack:
            node = stack.pop()
            if node.is_missing:
                return self._error_at(node, f"missing '{node.type}'")
            if node.is_error:
                snippet = node.text.decode('utf8', errors='replace').split("\n")[0][:40]
                return self._error_at(node, f"unexpected '{snippet}'")
            if node.has_error:
                stack.extend(reversed(node.children))
        return self._error_at(root_node, "invalid syntax")

    def _check_version(self, root_node: Node):
        """Reject syntax newer than the configured Lua version."""
        if self.lua_version == LuaVersion.LUA_54:
            return

        stack = [root_node]
        while stack:
            node = stack.pop()
            required = self._required_version(node)
            if required is not None and not self.lua_version.supports(required):
                logger.debug(f"Rejecting '{node.type}' under Lua {self.lua_version.value}")
                raise self._error_at(
                    node,
                    f"'{node.type}' requires Lua {required.value} (configured: {self.lua_version.value})"
                )
            stack.extend(reversed(node.named_children))

    def _required_version(self, node: Node) -> Optional[LuaVersion]:
        """Minimum Lua version for the syntax at this node, if any."""
        if node.type in ('goto_statement', 'label_statement'):
            return LuaVersion.LUA_52
        if node.type == 'attribute':
            return LuaVersion.LUA_54
        if node.type in ('binary_expression', 'unary_expression'):
            for child in node.children:
                if not child.is_named and child.type in INTEGER_OPERATORS:
                    return LuaVersion.LUA_53
        return None

    def _error_at(self, node: Node, message: str) -> LuaSyntaxError:
        row, column = node.start_point
        return LuaSyntaxError(message, line=row + 1, column=column)
