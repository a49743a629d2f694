"""
API route modules.

This package contains all API endpoint routers organized by functionality.
"""

from ranker.api.routes.rank import router as rank_router

__all__ = ["rank_router"]
