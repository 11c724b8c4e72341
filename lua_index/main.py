"""
Main FastAPI application entry point for the Lua Code Index.
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .api import (
    configuration_router,
    documents_router,
    files_router,
    health_router,
    navigation_router,
)
from .core.config import get_settings
from .core.indexer import get_source_index
from .core.workspace import scan_global_files

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if get_settings().debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Lua Code Index...")

    try:
        settings = get_settings()
        logger.info(f"Configuration loaded for workspace: {settings.workspace_root}")

        index = get_source_index()
        registered = scan_global_files(index, index.workspace_root, settings.global_patterns)
        logger.info(f"Indexed {len(registered)} global files")

    except Exception as e:
        logger.error(f"Failed to initialize services: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down Lua Code Index...")


# Create FastAPI application
app = FastAPI(
    title="Lua Code Index",
    description="Symbol indexing, go-to-definition and document outline for Lua workspaces",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origin_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Include routers
app.include_router(health_router, prefix="/health", tags=["health"])
app.include_router(documents_router, prefix="/documents", tags=["documents"])
app.include_router(navigation_router, tags=["navigation"])
app.include_router(files_router, prefix="/files", tags=["files"])
app.include_router(configuration_router, prefix="/configuration", tags=["configuration"])


@app.get("/", tags=["root"])
async def root() -> Dict[str, Any]:
    """Root endpoint with system information."""
    return {
        "name": "Lua Code Index",
        "version": __version__,
        "description": "Symbol indexing, go-to-definition and document outline for Lua workspaces",
        "docs": "/docs",
        "health": "/health",
        "status": "operational"
    }


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "message": "An unexpected error occurred",
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")
        }
    )
