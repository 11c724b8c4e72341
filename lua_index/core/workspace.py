"""
Workspace scanning for globally visible script files.
"""

import glob
import logging
import os
from typing import Iterable, List

from .indexer import SourceIndex

logger = logging.getLogger(__name__)


def scan_global_files(index: SourceIndex, root: str, patterns: Iterable[str]) -> List[str]:
    """
    Index every file matching the global patterns and add it to the global file set.

    Patterns are globbed relative to `root`; matches are visited in sorted
    order and anything that is not a regular Lua file is skipped.

    Returns:
        Normalized uris registered by this scan
    """
    registered: List[str] = []
    for pattern in patterns:
        matches = sorted(glob.glob(os.path.join(root, pattern)))
        logger.info(f"Global pattern '{pattern}' matched {len(matches)} entries")
        for path in matches:
            if not os.path.isfile(path) or not index.parser.detect_language(path):
                logger.debug(f"Skipping non-Lua entry {path}")
                continue
            uri = index.index_dependency(None, path, is_global=True)
            if uri not in registered:
                registered.append(uri)
    return registered
