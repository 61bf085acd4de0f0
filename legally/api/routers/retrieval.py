"""
Retrieval API endpoints.

Routes: POST /retrieval/context

Dependencies: legally.api.deps, legally.core.retrieval
System role: Context retrieval HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from legally.api.deps import ServiceCache, get_owner_id, get_service_cache
from legally.core.exceptions import EmbeddingUnavailable, StoreQueryError
from legally.models.chat import RetrievalRequest, RetrievalResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/retrieval", tags=["retrieval"])


@router.post("/context", response_model=RetrievalResponse)
async def retrieve_context(
    request: RetrievalRequest,
    owner_id: str = Depends(get_owner_id),
    cache: ServiceCache = Depends(get_service_cache),
) -> RetrievalResponse:
    """
    Build the formatted context block for a question.

    Returns an empty context when no chunk of the owner is relevant.

    Raises:
        HTTPException(503): Embedding model unavailable
        HTTPException(500): Vector search failed
    """
    try:
        context = await cache.orchestrator.retrieve(
            request.query,
            owner_id=owner_id,
            document_id=request.document_id,
            max_chunks=request.max_chunks,
        )
    except EmbeddingUnavailable as e:
        logger.warning("Embedding model unavailable", extra={"owner_id": owner_id, "error": str(e)})
        raise HTTPException(status_code=503, detail="Embedding model unavailable, please retry")
    except StoreQueryError as e:
        logger.exception("Context retrieval failed", extra={"owner_id": owner_id, "error": str(e)})
        raise HTTPException(status_code=500, detail="Failed to retrieve context")

    return RetrievalResponse(context=context)
