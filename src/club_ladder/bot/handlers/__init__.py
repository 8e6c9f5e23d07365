"""Bot handlers module."""

from .admin import router as admin_router
from .common import router as common_router
from .matches import router as matches_router
from .rankings import router as rankings_router

__all__ = ["admin_router", "common_router", "matches_router", "rankings_router"]
