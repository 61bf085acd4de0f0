"""
FastAPI application with assembled routers.

Initializes FastAPI app with all API routers and configures uvicorn server.

Dependencies: fastapi, legally.api.routers, uvicorn
System role: API entry point with router assembly and server launch
"""

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import logging
from legally.api.deps.dependencies import get_service_cache
from legally.configs import get_settings
from legally.observability import configure_logging
from legally.api import api_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    """
    configure_logging()
    logger = logging.getLogger("uvicorn")

    # Startup
    settings = get_settings()
    if settings.vector_store.store_type.lower() == "pgvector":
        from legally.boundary.db.create_tables import create_all_tables
        logger.info("Ensuring pgvector tables exist...")
        await create_all_tables()

    logger.info("Pre-warming service cache...")
    cache = get_service_cache()
    # Trigger property access to load instances; the embedding model itself loads on first use
    _ = cache.vector_index
    _ = cache.orchestrator
    _ = cache.assembler
    logger.info("Service cache pre-warmed")

    yield

    # Shutdown
    cache.clear()
    logger.info("Service cache cleared")


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application with routers.

    Returns:
        FastAPI: Configured application instance with all routers registered
    """
    # Interactive docs are not served in production
    is_production = get_settings().environment == "production"
    app = FastAPI(
        title="Legally RAG API",
        description="Indian legal assistant with document-grounded streaming answers",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None if is_production else "/docs",
        redoc_url=None if is_production else "/redoc",
    )

    # Add CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register all routers with /api/v1 prefix for versioning
    app.include_router(api_router, prefix="/api/v1")

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "legally.api.main:app",
        host="0.0.0.0",
        port=8000,
    )
