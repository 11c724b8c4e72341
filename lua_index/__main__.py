#!/usr/bin/env python3
"""
Main entry point for running the FastAPI server as a module.
This allows the package to be run with: python -m lua_index
"""

import uvicorn

from .core.config import get_settings

if __name__ == "__main__":
    settings = get_settings()

    uvicorn.run(
        "lua_index.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level="debug" if settings.debug else "info"
    )
