"""
Source file records holding the symbol facts extracted from one Lua file.
"""

from typing import List, Optional
from pydantic import BaseModel, Field, field_validator


class Position(BaseModel):
    """Zero-based line and character position."""

    line: int = Field(..., ge=0, description="Zero-based line number")
    character: int = Field(..., ge=0, description="Zero-based character column")


class Range(BaseModel):
    """Source span of a node."""

    start: Position = Field(..., description="Start of the span")
    end: Position = Field(..., description="End of the span (column after the last character)")

    def contains(self, line: int, character: int) -> bool:
        """Check whether a position falls inside the span, inclusive on both ends."""
        return (
            self.start.line <= line <= self.end.line
            and self.start.character <= character <= self.end.character
        )


class IdentifierOccurrence(BaseModel):
    """An identifier-like token seen while walking a file."""

    name: str = Field(..., description="Bare name, or the dotted form for qualified occurrences")
    base: Optional[str] = Field(None, description="Qualified string of the accessed table, None for plain names")
    range: Range = Field(..., description="Span of the token")


class Declaration(BaseModel):
    """Unqualified declaration: a local variable or a function parameter."""

    label: str = Field(..., description="Declared name")
    range: Range = Field(..., description="Span of the declared name")
    uri: str = Field(..., description="Owning file")


class Assignment(BaseModel):
    """Assignment to a plain name or to a member of a table."""

    label: str = Field(..., description="Assigned name or member name")
    base: Optional[str] = Field(None, description="Qualified string of the owning table, None for plain names")
    range: Range = Field(..., description="Span of the assignment target")
    uri: str = Field(..., description="Owning file")


class FunctionDeclaration(BaseModel):
    """Named function declaration, top-level or member."""

    label: str = Field(..., description="Bare function name")
    base: Optional[str] = Field(None, description="Qualified string of the owning table for member functions")
    range: Range = Field(..., description="Span of the whole declaration")
    uri: str = Field(..., description="Owning file")
    is_local: bool = Field(False, description="Declared with 'local function'")


class OutlineSymbol(BaseModel):
    """Coarse symbol for document outline queries."""

    label: str = Field(..., description="Symbol name")
    kind: str = Field("function", description="'function' or 'method'")
    range: Range = Field(..., description="Span of the symbol")
    uri: str = Field(..., description="Owning file")

    @field_validator('kind')
    @classmethod
    def validate_kind(cls, v):
        """Validate symbol kinds."""
        if v not in ['function', 'method']:
            raise ValueError("Kind must be 'function' or 'method'")
        return v


class DefinitionLocation(BaseModel):
    """A declaring location returned by a definition query."""

    label: str = Field(..., description="Declared name")
    uri: str = Field(..., description="File holding the declaration")
    range: Range = Field(..., description="Span of the declaration")


class SourceFile(BaseModel):
    """All symbol facts extracted from one normalized file."""

    uri: str = Field(..., description="Normalized file identifier")
    dirty: bool = Field(False, description="Edited since the last index")
    dependencies: List[str] = Field(default_factory=list, description="Files this file's imports resolved to")
    identifiers: List[IdentifierOccurrence] = Field(default_factory=list)
    locals: List[Declaration] = Field(default_factory=list)
    parameters: List[Declaration] = Field(default_factory=list)
    assignments: List[Assignment] = Field(default_factory=list)
    functions: List[FunctionDeclaration] = Field(default_factory=list)
    outline: List[OutlineSymbol] = Field(default_factory=list)

    def reset(self) -> None:
        """Clear every binding collection. Dependency edges are kept."""
        self.identifiers = []
        self.locals = []
        self.parameters = []
        self.assignments = []
        self.functions = []
        self.outline = []

    def add_dependency(self, uri: str) -> None:
        """Record a dependency edge, ignoring duplicates."""
        if uri not in self.dependencies:
            self.dependencies.append(uri)
