# app/api/v1/__init__.py
"""
API v1 package.

The router composition lives in `app.api.v1.router`; include it with:

    from app.api.v1 import api_router
    app.include_router(api_router, prefix=settings.API_V1_STR)
"""

from .router import router as api_router

__all__ = ["api_router"]
