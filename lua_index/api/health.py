"""
Health check API endpoints.
"""

import time
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from .. import __version__
from ..core.indexer import SourceIndex, get_source_index

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str
    timestamp: str
    uptime: float
    version: str
    checks: Dict[str, Any]


# Track application start time
start_time = time.time()


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(
        status="healthy",
        timestamp=utc_timestamp(),
        uptime=time.time() - start_time,
        version=__version__,
        checks={
            "api": "healthy",
        }
    )


@router.get("/ready")
async def readiness_check(index: SourceIndex = Depends(get_source_index)) -> Dict[str, Any]:
    """Readiness check: reports index size and the global file set."""
    with index.lock:
        return {
            "status": "ready",
            "timestamp": utc_timestamp(),
            "uptime": time.time() - start_time,
            "indexed_files": len(index.files),
            "global_files": len(index.global_files),
            "open_documents": len(index.documents.open_uris()),
            "lua_version": index.config.lua_version.value,
        }
