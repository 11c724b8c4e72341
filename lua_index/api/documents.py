"""
Document lifecycle endpoints: open, change, save and close notifications.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from ..core.indexer import SourceIndex, get_source_index
from ..core.paths import normalize_uri

logger = logging.getLogger(__name__)

router = APIRouter()


class OpenDocumentRequest(BaseModel):
    """Request model for an opened document."""
    uri: str = Field(..., min_length=1)
    text: str


class ChangeDocumentRequest(BaseModel):
    """Request model for a full-text change."""
    uri: str = Field(..., min_length=1)
    text: str


class SaveDocumentRequest(BaseModel):
    """Request model for a saved document. `text` is optional."""
    uri: str = Field(..., min_length=1)
    text: Optional[str] = None


class CloseDocumentRequest(BaseModel):
    """Request model for a closed document."""
    uri: str = Field(..., min_length=1)


class DocumentStatusResponse(BaseModel):
    """Index state of one document."""
    uri: str
    open: bool
    dirty: bool
    dependencies: List[str]
    outline_count: int


def document_status(index: SourceIndex, uri: str) -> DocumentStatusResponse:
    record = index.get(uri)
    return DocumentStatusResponse(
        uri=normalize_uri(uri),
        open=index.documents.is_open(uri),
        dirty=record.dirty if record else False,
        dependencies=list(record.dependencies) if record else [],
        outline_count=len(record.outline) if record else 0,
    )


@router.post("/open", response_model=DocumentStatusResponse)
async def open_document(
    request: OpenDocumentRequest,
    index: SourceIndex = Depends(get_source_index)
) -> DocumentStatusResponse:
    """Store the buffer and index it. Reopening re-indexes from the new buffer."""
    with index.lock:
        uri = index.documents.open(request.uri, request.text)
        logger.info(f"Document opened: {uri}")
        if index.get(uri) is None:
            index.ensure_indexed(uri)
        else:
            index.mark_dirty(uri)
            index.refresh(uri)
        return document_status(index, uri)


@router.post("/change", response_model=DocumentStatusResponse)
async def change_document(
    request: ChangeDocumentRequest,
    index: SourceIndex = Depends(get_source_index)
) -> DocumentStatusResponse:
    """Replace the buffer and mark the document dirty; it is re-indexed lazily."""
    with index.lock:
        uri = index.documents.update(request.uri, request.text)
        index.mark_dirty(uri)
        return document_status(index, uri)


@router.post("/save", response_model=DocumentStatusResponse)
async def save_document(
    request: SaveDocumentRequest,
    index: SourceIndex = Depends(get_source_index)
) -> DocumentStatusResponse:
    """Re-index a saved document if it changed since it was last indexed."""
    with index.lock:
        uri = normalize_uri(request.uri)
        try:
            current = index.documents.get_text(uri)
        except OSError as e:
            logger.warning(f"Error reading {uri} on save: {e}")
            current = None
        if request.text is not None and request.text != current:
            index.documents.update(uri, request.text)
            if index.get(uri) is not None:
                index.mark_dirty(uri)
        index.reindex_on_save(uri)
        return document_status(index, uri)


@router.post("/close", response_model=DocumentStatusResponse)
async def close_document(
    request: CloseDocumentRequest,
    index: SourceIndex = Depends(get_source_index)
) -> DocumentStatusResponse:
    """Drop the buffer. The index record stays and later reads come from disk."""
    with index.lock:
        if not index.documents.close(request.uri):
            raise HTTPException(
                status_code=404,
                detail=f"Document not open: {request.uri}"
            )
        return document_status(index, request.uri)
