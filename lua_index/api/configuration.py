"""
Configuration endpoints for the index settings snapshot.
"""

from fastapi import APIRouter, Depends

from ..core.indexer import SourceIndex, get_source_index
from ..models.index_config import IndexConfig

router = APIRouter()


@router.get("", response_model=IndexConfig)
async def get_configuration(index: SourceIndex = Depends(get_source_index)) -> IndexConfig:
    """Current configuration snapshot."""
    return index.config


@router.put("", response_model=IndexConfig)
async def replace_configuration(
    config: IndexConfig,
    index: SourceIndex = Depends(get_source_index)
) -> IndexConfig:
    """Replace the whole snapshot. Indexed files are re-indexed on their next query."""
    index.configure(config)
    return index.config
