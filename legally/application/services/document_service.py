"""
Document service orchestrator.

Coordinates indexing, re-indexing and removal of documents in the vector
index. Document records themselves live outside this service; it only
owns their chunks.

Dependencies: legally.core.retrieval, legally.core.exceptions, legally.models.document
System role: Document indexing orchestration
"""

import logging
from collections.abc import Iterable

from legally.core.exceptions import DocumentOwnershipError, EmbeddingUnavailable, VectorStoreError
from legally.core.retrieval.orchestrator import RetrievalOrchestrator
from legally.models.document import IndexingStatus, IngestionReport
from legally.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class DocumentService:
    """
    Document service orchestrator.

    Indexing a document replaces whatever was stored for it before, and
    reports failures per document instead of raising them. A document id
    whose chunks belong to another owner can be neither re-indexed nor
    removed.
    """

    def __init__(self, orchestrator: RetrievalOrchestrator) -> None:
        """
        Initialize document service.

        Args:
            orchestrator: Retrieval orchestrator owning chunk storage
        """
        self.orchestrator = orchestrator

    async def index_document(self, document_id: str, owner_id: str, text: str) -> IngestionReport:
        """
        Index (or re-index) a document's extracted text.

        Steps:
        1. Check the document is not another owner's
        2. Delete the owner's existing chunks of the document
        3. Chunk, embed and store the new text

        Args:
            document_id: Document identifier
            owner_id: Owner of the document
            text: Extracted document text

        Returns:
            IngestionReport: indexed, skipped (text too short) or failed

        Raises:
            DocumentOwnershipError: The document belongs to another owner
        """
        logger.info(f"{__name__}:index_document - START document_id={document_id}")
        try:
            await self._check_owner(document_id, owner_id)
            await self.orchestrator.delete_document(document_id, owner_id=owner_id)
            result = await self.orchestrator.ingest(document_id, owner_id, text)
        except (EmbeddingUnavailable, VectorStoreError) as e:
            log_exception_with_context(
                logger,
                f"{__name__}:index_document - FAILED",
                e,
                document_id=document_id,
                owner_id=owner_id,
            )
            return IngestionReport(
                document_id=document_id,
                status=IndexingStatus.FAILED,
                chunk_count=getattr(e, "committed_count", 0),
                error=e.message,
            )

        status = IndexingStatus.SKIPPED if result.skipped else IndexingStatus.INDEXED
        logger.info(
            f"{__name__}:index_document - END document_id={document_id}, "
            f"status={status.value}, chunks={result.chunk_count}"
        )
        return IngestionReport(
            document_id=document_id,
            status=status,
            chunk_count=result.chunk_count,
        )

    async def index_documents(
        self,
        owner_id: str,
        documents: Iterable[tuple[str, str]],
    ) -> list[IngestionReport]:
        """
        Index several documents one after another.

        A failing document, or one owned by someone else, does not stop the
        others; it is reported as failed.

        Args:
            owner_id: Owner of all documents
            documents: (document_id, text) pairs

        Returns:
            list[IngestionReport]: One report per document, in input order
        """
        reports = []
        for document_id, text in documents:
            try:
                reports.append(await self.index_document(document_id, owner_id, text))
            except DocumentOwnershipError as e:
                reports.append(IngestionReport(
                    document_id=document_id,
                    status=IndexingStatus.FAILED,
                    error=e.message,
                ))
        failed = sum(1 for report in reports if report.status == IndexingStatus.FAILED)
        logger.info(f"{__name__}:index_documents - {len(reports)} documents, {failed} failed")
        return reports

    async def remove_document(self, document_id: str, owner_id: str) -> int:
        """
        Delete all chunks of a document. Removing an unknown document is a no-op.

        Args:
            document_id: Document identifier
            owner_id: Requesting owner

        Returns:
            int: Number of chunks removed

        Raises:
            DocumentOwnershipError: The document belongs to another owner
            VectorStoreError: If the lookup or delete fails
        """
        await self._check_owner(document_id, owner_id)
        removed = await self.orchestrator.delete_document(document_id, owner_id=owner_id)
        logger.info(f"{__name__}:remove_document - document_id={document_id}, removed={removed}")
        return removed

    async def _check_owner(self, document_id: str, owner_id: str) -> None:
        owners = await self.orchestrator.document_owners(document_id)
        if owners - {owner_id}:
            logger.warning(
                f"{__name__}:_check_owner - document_id={document_id} is not owned by owner_id={owner_id}"
            )
            raise DocumentOwnershipError(document_id, owner_id)
