"""
Base classes for language-specific parsers.
"""

import logging
from typing import List
from tree_sitter import Node, Tree

logger = logging.getLogger(__name__)


class LuaSyntaxError(Exception):
    """Raised when source text cannot be parsed.

    `line` is 1-based and `column` 0-based, matching the parser's spans.
    """

    def __init__(self, message: str, line: int, column: int):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    def __str__(self) -> str:
        return f"[{self.line}:{self.column}] {self.message}"


class ParseResult:
    """Result of parsing a file."""

    def __init__(self, tree: Tree, source: bytes, language: str):
        self.tree = tree
        self.source = source
        self.language = language
        self.lines: List[bytes] = source.split(b"\n")

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def character(self, row: int, byte_column: int) -> int:
        """Convert a byte column reported by the parser into a character column."""
        if row >= len(self.lines):
            return byte_column
        line = self.lines[row]
        if line.isascii():
            return byte_column
        return len(line[:byte_column].decode('utf8', errors='replace'))


class LanguageParser:
    """Base class for language-specific parsers."""

    def __init__(self, language_name: str):
        self.language_name = language_name

    def parse(self, content: str) -> ParseResult:
        """Parse file content into a syntax tree."""
        raise NotImplementedError("Subclasses must implement parse method")

    def detect_language(self, file_path: str) -> bool:
        """Check if this parser can handle the given file."""
        raise NotImplementedError("Subclasses must implement detect_language method")
