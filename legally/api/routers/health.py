"""
Health check API endpoints.

Routes: GET /health, GET /health/vector-store

Dependencies: legally.api.deps, legally.boundary.vdb
System role: Health check HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from legally.api.deps import ServiceCache, get_service_cache, get_settings_dependency
from legally.configs import Settings
from legally.models.document import VectorStoreHealthResponse

logger = logging.getLogger(__name__)


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/vector-store", response_model=VectorStoreHealthResponse)
async def health_check_vector_store(
    cache: ServiceCache = Depends(get_service_cache),
    settings: Settings = Depends(get_settings_dependency),
) -> VectorStoreHealthResponse:
    """
    Vector store health check.

    Raises:
        HTTPException(503): Vector store unreachable
    """
    try:
        chunk_count = await cache.vector_index.count()
    except Exception as e:
        logger.exception("Vector store health check failed", extra={"error": str(e)})
        raise HTTPException(status_code=503, detail="Vector store unavailable")

    return VectorStoreHealthResponse(
        status="healthy",
        store_type=settings.vector_store.store_type,
        chunk_count=chunk_count,
    )
