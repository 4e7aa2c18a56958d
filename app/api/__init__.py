# app/api/__init__.py
"""
HTTP layer: dependencies and versioned routers.

    from app.api.v1 import api_router
    app.include_router(api_router, prefix=settings.API_V1_STR)
"""
