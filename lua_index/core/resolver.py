"""
Dependency resolution for require/include-style calls.
"""

import logging
import os
from typing import TYPE_CHECKING, List, Optional

from .paths import uri_to_path

if TYPE_CHECKING:
    from .indexer import SourceIndex

logger = logging.getLogger(__name__)

LUA_EXTENSION = ".lua"
TEMPLATE_MARK = "?"


def module_path(module_ref: str, is_dotted: bool) -> str:
    """Turn a module reference into a relative path (`a.b.c` -> `a/b/c` for require)."""
    if is_dotted:
        module_ref = os.path.normpath(module_ref.replace(".", os.sep))
    return module_ref


class DependencyResolver:
    """
    Maps a module reference to the files it may load and indexes them.

    Candidates are tried in order: next to the importing file, under the
    workspace root, then under every search path. Each location is tried
    as-is and with a `.lua` suffix.
    """

    def __init__(self, index: "SourceIndex"):
        self.index = index

    def candidates(self, importer_uri: Optional[str], module_ref: str, is_dotted: bool) -> List[str]:
        """Ordered candidate paths for a module reference, existing or not."""
        relpath = module_path(module_ref, is_dotted)
        relpath_lua = relpath + LUA_EXTENSION

        roots: List[str] = []
        if importer_uri:
            roots.append(os.path.dirname(uri_to_path(importer_uri)))
        roots.append(self.index.workspace_root)

        paths: List[str] = []
        for root in roots:
            paths.append(os.path.join(root, relpath))
            paths.append(os.path.join(root, relpath_lua))

        for search_path in self.index.config.search_paths:
            if TEMPLATE_MARK in search_path:
                # package.path style entry, e.g. "libs/?.lua"
                paths.append(search_path.replace(TEMPLATE_MARK, relpath))
            else:
                paths.append(os.path.join(search_path, relpath))
                paths.append(os.path.join(search_path, relpath_lua))
        return paths

    def find(self, importer_uri: Optional[str], module_ref: Optional[str], is_dotted: bool = False) -> List[str]:
        """Existing files for a module reference, as absolute paths without duplicates."""
        if not module_ref:
            return []

        found: List[str] = []
        for candidate in self.candidates(importer_uri, module_ref, is_dotted):
            if not os.path.isfile(candidate):
                continue
            absolute = os.path.abspath(candidate)
            if absolute not in found:
                found.append(absolute)

        if not found:
            logger.warning(f"No file found for module '{module_ref}' imported by {importer_uri}")
        return found

    def resolve(self, importer_uri: Optional[str], module_ref: Optional[str], is_dotted: bool = False) -> List[str]:
        """
        Resolve a module reference and index every matching file.

        Args:
            importer_uri: Normalized uri of the importing file
            module_ref: String literal passed to the include call
            is_dotted: True for `require`, whose references use dots as separators

        Returns:
            Absolute paths of the resolved files, in candidate order
        """
        paths = self.find(importer_uri, module_ref, is_dotted)
        for path in paths:
            self.index.index_dependency(importer_uri, path)
        return paths
