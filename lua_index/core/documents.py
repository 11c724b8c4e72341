"""
Text buffers of documents currently open in an editor.
"""

import logging
from typing import Dict, List, Optional

from .paths import normalize_uri, uri_to_path

logger = logging.getLogger(__name__)


class DocumentStore:
    """Open-document buffers keyed by normalized uri, with a disk fallback."""

    def __init__(self):
        self._buffers: Dict[str, str] = {}

    def open(self, uri: str, text: str) -> str:
        key = normalize_uri(uri)
        self._buffers[key] = text
        logger.debug(f"Opened document {key}")
        return key

    def update(self, uri: str, text: str) -> str:
        """Replace the buffer of a document with its full new text."""
        key = normalize_uri(uri)
        self._buffers[key] = text
        return key

    def close(self, uri: str) -> bool:
        """Drop the buffer. Returns False if the document was not open."""
        key = normalize_uri(uri)
        if self._buffers.pop(key, None) is None:
            logger.warning(f"Close for document that was not open: {key}")
            return False
        logger.debug(f"Closed document {key}")
        return True

    def is_open(self, uri: str) -> bool:
        return normalize_uri(uri) in self._buffers

    def open_uris(self) -> List[str]:
        return sorted(self._buffers)

    def get_text(self, uri: str) -> Optional[str]:
        """
        Current text of a document.

        The open buffer wins; otherwise the file is read from disk. Returns
        None only when the document is not open and does not exist.

        Raises:
            OSError: if the file exists but cannot be read
        """
        key = normalize_uri(uri)
        if key in self._buffers:
            return self._buffers[key]

        path = uri_to_path(key)
        try:
            with open(path, 'r', encoding='utf-8', errors='replace') as f:
                return f.read()
        except FileNotFoundError:
            return None
