"""
Shared fixtures for the Lua Code Index tests.
"""

from pathlib import Path

import pytest

from lua_index.core.documents import DocumentStore
from lua_index.core.indexer import SourceIndex
from lua_index.core.paths import path_to_uri
from lua_index.models.index_config import IndexConfig


def write_lua(root: Path, relpath: str, text: str) -> Path:
    """Write a Lua file under `root`, creating parent directories."""
    path = root / relpath
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def open_document(index: SourceIndex, path: Path, text: str) -> str:
    """Open an editor buffer for `path` and index it. Returns the normalized uri."""
    uri = index.documents.open(path_to_uri(str(path)), text)
    index.ensure_indexed(uri)
    return uri


@pytest.fixture
def workspace(tmp_path) -> Path:
    """Empty workspace directory."""
    return tmp_path


@pytest.fixture
def index(workspace) -> SourceIndex:
    """Source index rooted at the workspace with default configuration."""
    return SourceIndex(config=IndexConfig(), documents=DocumentStore(), workspace_root=str(workspace))
