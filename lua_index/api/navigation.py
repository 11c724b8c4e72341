"""
Navigation endpoints: go to definition and document outline.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from ..core.definitions import DefinitionResolver
from ..core.indexer import SourceIndex, get_source_index
from ..models.source_file import DefinitionLocation, OutlineSymbol

logger = logging.getLogger(__name__)

router = APIRouter()


class DefinitionRequest(BaseModel):
    """Request model for a definition query."""
    uri: str = Field(..., min_length=1)
    line: int = Field(..., ge=0, description="Zero-based line")
    character: int = Field(..., ge=0, description="Zero-based character column")


class OutlineRequest(BaseModel):
    """Request model for a document outline."""
    uri: str = Field(..., min_length=1)


@router.post("/definition", response_model=List[DefinitionLocation])
async def find_definition(
    request: DefinitionRequest,
    index: SourceIndex = Depends(get_source_index)
) -> List[DefinitionLocation]:
    """
    Resolve the identifier at a position to its declarations.

    Returns an empty list when no identifier is under the position or when
    nothing declares it.
    """
    locations = DefinitionResolver(index).resolve(request.uri, request.line, request.character)
    logger.info(f"Definition {request.uri}:{request.line}:{request.character} -> {len(locations)} locations")
    return locations


@router.post("/outline", response_model=List[OutlineSymbol])
async def document_outline(
    request: OutlineRequest,
    index: SourceIndex = Depends(get_source_index)
) -> List[OutlineSymbol]:
    """Named functions declared in a document, in source order."""
    return index.outline(request.uri)
