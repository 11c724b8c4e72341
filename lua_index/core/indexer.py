"""
Source index: one SourceFile record per normalized uri, kept in sync lazily.
"""

import logging
import os
from typing import Dict, List, Optional

from ..models.index_config import IndexConfig
from ..models.source_file import OutlineSymbol, SourceFile
from .documents import DocumentStore
from .locks import IndexLock
from .parser import LuaParser, LuaSyntaxError
from .paths import normalize_uri, path_to_uri
from .resolver import DependencyResolver
from .walker import IndexingWalker

logger = logging.getLogger(__name__)


class SourceIndex:
    """
    Owns every SourceFile record and the global file set.

    Records are created on first sight and never removed. A record whose file
    fails to read or parse keeps its previous contents (or stays empty) and
    the failure is logged; callers never see the exception.
    """

    def __init__(
        self,
        config: Optional[IndexConfig] = None,
        documents: Optional[DocumentStore] = None,
        workspace_root: Optional[str] = None,
    ):
        """
        Initialize the source index.

        Args:
            config: Index configuration snapshot (defaults apply when omitted)
            documents: Text provider for open buffers and disk reads
            workspace_root: Directory searched for modules after the importer's directory
        """
        self.config = config or IndexConfig()
        self.documents = documents or DocumentStore()
        self.workspace_root = os.path.abspath(workspace_root or os.getcwd())
        self.files: Dict[str, SourceFile] = {}
        self.global_files: List[str] = []
        self.lock = IndexLock()
        self.parser = LuaParser(self.config.lua_version)
        self.resolver = DependencyResolver(self)

    def get(self, uri: str) -> Optional[SourceFile]:
        """Record for a uri, without indexing it."""
        return self.files.get(normalize_uri(uri))

    def all_files(self) -> List[SourceFile]:
        with self.lock:
            return [self.files[uri] for uri in sorted(self.files)]

    def ensure_indexed(self, uri: str) -> SourceFile:
        """
        Return the record for `uri`, indexing the file if it has none yet.

        The record is registered before the walk starts, so a file that is
        reached again through an import cycle is not walked twice.
        """
        key = normalize_uri(uri)
        with self.lock:
            record = self.files.get(key)
            if record is not None:
                return record

            record = SourceFile(uri=key)
            self.files[key] = record
            logger.info(f"Indexing {key}")
            self._index_text(record)
            return record

    def mark_dirty(self, uri: str) -> SourceFile:
        """Flag a file as edited. Its first notification indexes it."""
        with self.lock:
            record = self.ensure_indexed(uri)
            record.dirty = True
            return record

    def refresh(self, uri: str) -> SourceFile:
        """Bring a record in sync with the current text: index if absent, re-index if dirty."""
        key = normalize_uri(uri)
        with self.lock:
            record = self.files.get(key)
            if record is None:
                return self.ensure_indexed(key)
            if record.dirty:
                record.dirty = False
                logger.info(f"Re-indexing {key}")
                self._index_text(record)
            return record

    def reindex_on_save(self, uri: str) -> SourceFile:
        logger.debug(f"Save notification for {normalize_uri(uri)}")
        return self.refresh(uri)

    def outline(self, uri: str) -> List[OutlineSymbol]:
        with self.lock:
            return list(self.refresh(uri).outline)

    def index_dependency(self, parent_uri: Optional[str], path: str, is_global: bool = False) -> str:
        """
        Index a file found on disk and link it to the file that imported it.

        Args:
            parent_uri: Importing file, None for global files
            path: Path of the dependency on disk
            is_global: Add the file to the global file set

        Returns:
            Normalized uri of the dependency
        """
        uri = path_to_uri(path)
        with self.lock:
            self.ensure_indexed(uri)
            if parent_uri:
                parent = self.files.get(normalize_uri(parent_uri))
                if parent is not None:
                    parent.add_dependency(uri)
            if is_global and uri not in self.global_files:
                self.global_files.append(uri)
                logger.info(f"Registered global file {uri}")
        return uri

    def configure(self, config: IndexConfig):
        """
        Replace the configuration snapshot.

        Every record is marked dirty so it is re-indexed under the new
        settings the next time it is queried.
        """
        with self.lock:
            self.config = config
            self.parser = LuaParser(config.lua_version)
            for record in self.files.values():
                record.dirty = True
            logger.info(
                f"Configuration replaced: lua_version={config.lua_version.value}, "
                f"{len(config.search_paths)} search paths, keywords={config.include_keywords}"
            )

    def _index_text(self, record: SourceFile) -> bool:
        """Parse the current text of a record and re-walk it. Returns False on failure."""
        uri = record.uri
        try:
            text = self.documents.get_text(uri)
        except OSError as e:
            logger.error(f"Error reading {uri}: {e}")
            return False
        if text is None:
            logger.warning(f"No text available for {uri}")
            return False

        try:
            parse_result = self.parser.parse(text)
        except LuaSyntaxError as e:
            logger.error(f"Error parsing {uri}: {e}")
            return False

        record.reset()
        walker = IndexingWalker(
            record,
            parse_result,
            self.config.include_keywords,
            self.resolver.resolve,
        )
        try:
            walker.walk(parse_result.root_node)
        except RecursionError:
            record.reset()
            logger.error(f"Error indexing {uri}: syntax tree nested too deeply")
            return False

        logger.debug(
            f"Indexed {uri}: {len(record.identifiers)} identifiers, {len(record.locals)} locals, "
            f"{len(record.assignments)} assignments, {len(record.functions)} functions"
        )
        return True


# Global index instance
_source_index: Optional[SourceIndex] = None


def get_source_index() -> SourceIndex:
    """Get the application source index, building it from settings on first use."""
    global _source_index
    if _source_index is None:
        from .config import get_settings

        settings = get_settings()
        _source_index = SourceIndex(
            config=settings.to_index_config(),
            documents=DocumentStore(),
            workspace_root=settings.workspace_root,
        )
    return _source_index
