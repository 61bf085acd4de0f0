"""
Chat service for conversational legal Q&A with RAG.

Orchestrates one chat turn: history loading, context retrieval, answer
streaming and message persistence. Supports document analysis streaming
through the same assembler.

Dependencies: legally.core.retrieval, legally.core.generation, legally.application.adapters
System role: Chat service orchestration layer
"""

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import aclosing

from langchain_core.messages import BaseMessage

from legally.application.adapters.conversation_store import (
    ConversationStore,
    generate_conversation_title,
)
from legally.core.generation.answer_assembler import StreamingAnswerAssembler
from legally.core.generation.prompts import history_to_messages
from legally.core.retrieval.orchestrator import RetrievalOrchestrator
from legally.models.streaming import StreamEvent, StreamEventType
from legally.observability.log_utils import log_exception_with_context

logger = logging.getLogger(__name__)


class ChatService:
    """
    Chat service for conversational Q&A.

    Coordinates history retrieval, context retrieval, answer streaming and
    message persistence for multi-turn conversations.
    """

    def __init__(
        self,
        orchestrator: RetrievalOrchestrator,
        assembler: StreamingAnswerAssembler,
        conversation_store: ConversationStore | None = None,
        max_chunks: int = 5,
    ) -> None:
        """
        Initialize chat service.

        Args:
            orchestrator: Retrieval orchestrator for document context
            assembler: Streams answers from the generation gateway
            conversation_store: Optional store for conversation history
            max_chunks: Maximum context chunks per question
        """
        self.orchestrator = orchestrator
        self.assembler = assembler
        self.conversation_store = conversation_store
        self.max_chunks = max_chunks

    async def _owned_conversation(self, conversation_id: str | None, owner_id: str) -> str | None:
        """
        Return ``conversation_id`` when it is a stored conversation of ``owner_id``.

        Unknown conversations and conversations of other owners resolve to
        None: their history is not loaded and the turn is not stored.
        """
        if not conversation_id or self.conversation_store is None:
            return None
        conversation = await self.conversation_store.get_conversation(conversation_id)
        if conversation is None or conversation.owner_id != owner_id:
            logger.warning(
                f"{__name__}:stream_chat - conversation_id={conversation_id} not found for owner_id={owner_id}, "
                f"answering without stored history"
            )
            return None
        return conversation_id

    async def _load_history(
        self,
        conversation_id: str | None,
        history: Sequence[dict],
    ) -> list[BaseMessage]:
        if conversation_id is not None:
            records = await self.conversation_store.get_messages(conversation_id)
            return history_to_messages([record.model_dump() for record in records])
        return history_to_messages(history)

    async def _retrieve_context(
        self,
        message: str,
        owner_id: str,
        document_id: str | None,
    ) -> str:
        """Fetch context; any retrieval failure degrades to answering without it."""
        try:
            return await self.orchestrator.retrieve(
                message,
                owner_id=owner_id,
                document_id=document_id,
                max_chunks=self.max_chunks,
            )
        except Exception as e:
            log_exception_with_context(
                logger,
                f"{__name__}:stream_chat - Context retrieval failed, continuing without context",
                e,
                level=logging.WARNING,
                owner_id=owner_id,
                document_id=document_id,
            )
            return ""

    async def stream_chat(
        self,
        owner_id: str,
        message: str,
        conversation_id: str | None = None,
        document_id: str | None = None,
        document_name: str | None = None,
        language: str | None = None,
        history: Sequence[dict] = (),
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream chat response tokens for real-time WebSocket delivery.

        Flow:
        1. Load history (the owner's stored conversation, else caller-supplied turns)
        2. Retrieve document context
        3. Stream events from the assembler
        4. Store user and assistant messages after COMPLETE

        Nothing is stored when the turn ends in ERROR, the consumer stops
        iterating before COMPLETE, or the conversation is not the owner's.
        A failure to store a completed turn is logged; COMPLETE has already
        been sent by then.

        Args:
            owner_id: Requesting owner
            message: User's message
            conversation_id: Stored conversation, if any
            document_id: Restrict context to one document
            document_name: Name shown with the context
            language: UI language code
            history: Earlier ``{"role", "content"}`` turns when no conversation is stored

        Yields:
            StreamEvent: TOKEN events, then one COMPLETE or ERROR event
        """
        logger.info(
            f"{__name__}:stream_chat - START owner_id={owner_id}, "
            f"conversation_id={conversation_id}, document_id={document_id}"
        )

        # Step 1: History
        conversation_id = await self._owned_conversation(conversation_id, owner_id)
        chat_history = await self._load_history(conversation_id, history)
        logger.info(f"{__name__}:stream_chat - Step 1 OK: {len(chat_history)} history messages")

        # Step 2: Context
        context = await self._retrieve_context(message, owner_id, document_id)
        logger.info(f"{__name__}:stream_chat - Step 2 OK: context_len={len(context)}")

        # Step 3: Stream answer
        full_answer: str | None = None
        stream = self.assembler.astream(
            question=message,
            history=chat_history,
            context=context,
            document_name=document_name,
            language=language,
        )
        async with aclosing(stream) as events:
            async for event in events:
                if event.event == StreamEventType.COMPLETE:
                    full_answer = event.data.get("full_answer", "")
                yield event

        # Step 4: Persist completed turn
        if full_answer is None:
            logger.info(f"{__name__}:stream_chat - Turn did not complete, nothing stored")
            return
        if conversation_id is not None:
            try:
                await self._store_turn(conversation_id, message, full_answer, first_turn=not chat_history)
            except Exception as e:
                log_exception_with_context(
                    logger,
                    f"{__name__}:stream_chat - Failed to store completed turn",
                    e,
                    owner_id=owner_id,
                    conversation_id=conversation_id,
                )

        logger.info(f"{__name__}:stream_chat - END owner_id={owner_id}, answer_len={len(full_answer)}")

    async def _store_turn(
        self,
        conversation_id: str,
        message: str,
        answer: str,
        first_turn: bool,
    ) -> None:
        await self.conversation_store.add_message(conversation_id, "user", message)
        await self.conversation_store.add_message(conversation_id, "assistant", answer)
        if first_turn:
            await self.conversation_store.update_title(conversation_id, generate_conversation_title(message))
        logger.info(f"{__name__}:stream_chat - Stored turn in conversation {conversation_id}")

    async def stream_analysis(
        self,
        document_text: str,
        file_name: str,
        language: str | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream a structured analysis of a whole document.

        Yields:
            StreamEvent: TOKEN events, then one COMPLETE or ERROR event
        """
        async with aclosing(self.assembler.analyze_document(document_text, file_name, language)) as events:
            async for event in events:
                yield event
