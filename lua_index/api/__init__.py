"""
API routes for the Lua Code Index.
"""

from .configuration import router as configuration_router
from .documents import router as documents_router
from .files import router as files_router
from .health import router as health_router
from .navigation import router as navigation_router

__all__ = [
    "configuration_router",
    "documents_router",
    "files_router",
    "health_router",
    "navigation_router",
]
