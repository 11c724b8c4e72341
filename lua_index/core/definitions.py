"""
Go-to-definition queries over the source index.
"""

import logging
from typing import Iterable, List, Optional

from ..models.source_file import DefinitionLocation, IdentifierOccurrence, SourceFile
from .indexer import SourceIndex

logger = logging.getLogger(__name__)


def same_base(left: Optional[str], right: Optional[str]) -> bool:
    """Compare qualifying strings, treating a missing base like an empty one."""
    return (left or "") == (right or "")


def occurrence_at(source_file: SourceFile, line: int, character: int) -> Optional[IdentifierOccurrence]:
    """First identifier occurrence whose range contains the position."""
    for occurrence in source_file.identifiers:
        if occurrence.range.contains(line, character):
            return occurrence
    return None


class DefinitionResolver:
    """Resolves the identifier under a position to its declaring locations."""

    def __init__(self, index: SourceIndex):
        self.index = index

    def resolve(self, uri: str, line: int, character: int) -> List[DefinitionLocation]:
        """
        Find the declarations of the identifier at a position.

        The current file is searched first. When nothing matches there, the
        same search runs over every global file and all matches are returned.

        Args:
            uri: File the query position belongs to
            line: Zero-based line
            character: Zero-based character column

        Returns:
            Declaring locations in search order, empty when nothing matches
        """
        with self.index.lock:
            source_file = self.index.refresh(uri)
            occurrence = occurrence_at(source_file, line, character)
            if occurrence is None:
                logger.debug(f"No identifier at {source_file.uri}:{line}:{character}")
                return []

            results = self.definitions_for(source_file, occurrence)
            if results:
                return results

            for global_uri in self.index.global_files:
                global_file = self.index.get(global_uri)
                if global_file is None:
                    continue
                global_file = self.index.refresh(global_uri)
                results.extend(self.definitions_for(global_file, occurrence))

            logger.debug(f"'{occurrence.name}' resolved to {len(results)} global definitions")
            return results

    def definitions_for(self, source_file: SourceFile, occurrence: IdentifierOccurrence) -> List[DefinitionLocation]:
        """Declarations of one occurrence inside a single file, in search order."""
        results: List[DefinitionLocation] = []

        if occurrence.base is None:
            results.extend(self._matching(source_file.locals, occurrence.name))
            results.extend(self._matching(source_file.parameters, occurrence.name))

        for assignment in source_file.assignments:
            if assignment.label == occurrence.name and same_base(assignment.base, occurrence.base):
                results.append(self._location(assignment))

        if self.index.config.resolve_function_declarations:
            for function in source_file.functions:
                if function.label == occurrence.name and same_base(function.base, occurrence.base):
                    results.append(self._location(function))
        return results

    def _matching(self, declarations: Iterable, name: str) -> List[DefinitionLocation]:
        return [self._location(declaration) for declaration in declarations if declaration.label == name]

    @staticmethod
    def _location(declaration) -> DefinitionLocation:
        return DefinitionLocation(label=declaration.label, uri=declaration.uri, range=declaration.range)
