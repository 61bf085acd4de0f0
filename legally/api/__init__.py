"""
API routes module.

FastAPI routers for all HTTP endpoints.
"""

from fastapi import APIRouter

from .routers import (
    chat_stream_router,
    documents_router,
    health_router,
    retrieval_router,
)

api_router = APIRouter()

# Include all routers
api_router.include_router(health_router)
api_router.include_router(documents_router)
api_router.include_router(retrieval_router)
api_router.include_router(chat_stream_router)

__all__ = ["api_router"]
