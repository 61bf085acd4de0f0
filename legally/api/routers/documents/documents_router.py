"""
Document API endpoints.

Routes:
- POST /documents/{document_id}/index - Index (or re-index) extracted text
- DELETE /documents/{document_id} - Remove a document's chunks

A document whose chunks belong to another owner answers 404 on both routes.

Dependencies: legally.application.services, legally.models
System role: Document HTTP API
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from legally.api.deps import get_document_service, get_owner_id
from legally.application.services.document_service import DocumentService
from legally.core.exceptions import DocumentOwnershipError, VectorStoreError
from legally.models.document import IndexDocumentRequest, IngestionReport

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("/{document_id}/index", response_model=IngestionReport)
async def index_document(
    document_id: str,
    request: IndexDocumentRequest,
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> IngestionReport:
    """
    Index a document's extracted text for retrieval.

    Existing chunks of the document are replaced. Embedding or storage
    failures are reported in the response body with status ``failed``.

    Args:
        document_id: Document identifier
        request: Extracted text
        owner_id: Requesting owner (X-Owner-Id header)
        document_service: Injected DocumentService

    Returns:
        IngestionReport: indexed, skipped or failed with chunk count

    Raises:
        HTTPException(404): Document belongs to another owner
    """
    logger.info(
        "Document index request",
        extra={"document_id": document_id, "owner_id": owner_id, "text_length": len(request.text)},
    )
    try:
        return await document_service.index_document(document_id, owner_id, request.text)
    except DocumentOwnershipError:
        raise HTTPException(status_code=404, detail="Document not found")


@router.delete("/{document_id}", status_code=204)
async def delete_document(
    document_id: str,
    owner_id: str = Depends(get_owner_id),
    document_service: DocumentService = Depends(get_document_service),
) -> None:
    """
    Delete all chunks of a document.

    Deleting a document with no chunks succeeds.

    Returns:
        204 No Content on success

    Raises:
        HTTPException(404): Document belongs to another owner
        HTTPException(500): Deletion failed
    """
    logger.info(
        "Document deletion request",
        extra={"document_id": document_id, "owner_id": owner_id},
    )

    try:
        removed = await document_service.remove_document(document_id, owner_id)
    except DocumentOwnershipError:
        raise HTTPException(status_code=404, detail="Document not found")
    except VectorStoreError as e:
        logger.exception(
            "Failed to delete document",
            extra={"document_id": document_id, "error": str(e)},
        )
        raise HTTPException(status_code=500, detail="Failed to delete document")

    logger.info(
        "Document deleted successfully",
        extra={"document_id": document_id, "removed_chunks": removed},
    )
