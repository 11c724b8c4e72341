"""
Files API endpoints for inspecting the source index.
"""

from typing import List

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..core.indexer import SourceIndex, get_source_index
from ..models.source_file import SourceFile

router = APIRouter()


class FileSummaryResponse(BaseModel):
    """Response model for one indexed file."""
    uri: str
    dirty: bool
    is_global: bool
    dependencies: List[str]
    identifier_count: int
    local_count: int
    parameter_count: int
    assignment_count: int
    function_count: int


def summarize(source_file: SourceFile, global_files: List[str]) -> FileSummaryResponse:
    return FileSummaryResponse(
        uri=source_file.uri,
        dirty=source_file.dirty,
        is_global=source_file.uri in global_files,
        dependencies=list(source_file.dependencies),
        identifier_count=len(source_file.identifiers),
        local_count=len(source_file.locals),
        parameter_count=len(source_file.parameters),
        assignment_count=len(source_file.assignments),
        function_count=len(source_file.functions),
    )


@router.get("/", response_model=List[FileSummaryResponse])
async def list_files(index: SourceIndex = Depends(get_source_index)) -> List[FileSummaryResponse]:
    """List every indexed file, sorted by uri."""
    with index.lock:
        return [summarize(source_file, index.global_files) for source_file in index.all_files()]


@router.get("/globals", response_model=List[str])
async def list_global_files(index: SourceIndex = Depends(get_source_index)) -> List[str]:
    """Global file set in search order."""
    with index.lock:
        return list(index.global_files)
