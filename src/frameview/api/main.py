"""
FastAPI Application Factory

Assembles the API app:
- Routes (products, viewers, system)
- CORS middleware
- Exception handlers

The same factory is used by main_asyncio.py and by the API tests.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from frameview import __version__
from frameview.api.middleware.error_handler import register_exception_handlers
from frameview.api.routes import products, system, viewers
from frameview.models.enums import LogCategory
from frameview.utils.logger import get_logger

log = get_logger().for_category(LogCategory.SYSTEM)


def create_app(
    title: str = "Frameview 360° Viewer",
    description: str = "REST API for interactive 360° product frame viewers",
    version: str = __version__,
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None
) -> FastAPI:
    """
    Create and configure FastAPI application.

    Args:
        title: API title (shown in docs)
        description: API description
        version: API version
        docs_enabled: Enable /docs and /redoc
        cors_origins: CORS allowed origins (default: local dev servers)

    Returns:
        Configured FastAPI application ready to run
    """
    app = FastAPI(
        title=title,
        description=description,
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None
    )

    log.info(f"Creating FastAPI app: {title} v{version}")

    # =========================================================================
    # CORS Configuration
    # =========================================================================

    if cors_origins is None:
        cors_origins = [
            "http://localhost:3000",
            "http://localhost:5173",
            "http://127.0.0.1:3000",
            "http://127.0.0.1:5173",
        ]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    log.debug(f"CORS enabled for origins: {cors_origins}")

    # =========================================================================
    # Exception Handlers
    # =========================================================================

    register_exception_handlers(app)

    # =========================================================================
    # Routes
    # =========================================================================

    app.include_router(products.router, prefix="/api/v1")
    app.include_router(viewers.router, prefix="/api/v1")
    app.include_router(system.router, prefix="/api/v1")

    log.debug("Routes registered: products, viewers, system (/api/v1)")

    # =========================================================================
    # Health Check Endpoint
    # =========================================================================

    @app.get(
        "/api/health",
        tags=["System"],
        summary="Health check",
        description="Check if API is running and responding"
    )
    async def health_check():
        return {
            "status": "healthy",
            "service": "frameview-api",
            "version": version
        }

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse(
            {
                "message": title,
                "docs": "/docs",
                "health": "/api/health"
            }
        )

    log.info(f"FastAPI app created successfully: {title}")

    return app
