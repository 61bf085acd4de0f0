"""
Streaming answer assembler.

Builds the prompt for a chat turn (or a document analysis), streams the
gateway's answer as TOKEN events and closes the turn with exactly one
COMPLETE or ERROR event. Persists nothing; the caller decides what to
store once the turn completes.

Dependencies: langchain_core.messages, legally.core.generation, legally.models.streaming
System role: Answer generation for WebSocket chat
"""

import logging
from collections.abc import AsyncGenerator, Sequence
from contextlib import aclosing

from langchain_core.messages import BaseMessage

from legally.core.exceptions import GenerationError
from legally.core.generation.gateway_client import GenerationClient
from legally.core.generation.prompts import build_analysis_messages, build_chat_messages
from legally.models.streaming import StreamEvent, StreamEventType

logger = logging.getLogger(__name__)


def error_event(error: GenerationError) -> StreamEvent:
    """Terminal ERROR event carrying the error's stable code and user-facing message."""
    return StreamEvent(
        event=StreamEventType.ERROR,
        data={
            "code": error.code,
            "message": error.user_message,
            "retryable": error.retryable,
        },
    )


class StreamingAnswerAssembler:
    """Turns a question plus context into a stream of answer events."""

    def __init__(self, client: GenerationClient, history_window: int = 20) -> None:
        """
        Args:
            client: Gateway client used for every turn
            history_window: Most recent history messages sent with a question
        """
        self._client = client
        self._history_window = history_window

    async def astream(
        self,
        question: str,
        history: Sequence[BaseMessage] = (),
        context: str = "",
        document_name: str | None = None,
        language: str | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream the answer to a chat question.

        Closing the generator early cancels the gateway request.

        Args:
            question: User's question
            history: Earlier turns, oldest first
            context: Retrieved context ("" when none)
            document_name: Name of the document the context came from
            language: UI language code

        Yields:
            StreamEvent: TOKEN events, then one COMPLETE or ERROR event
        """
        logger.info(
            f"{__name__}:astream - START question_len={len(question)}, "
            f"history={len(history)}, context_len={len(context)}, language={language}"
        )
        recent = list(history)[-self._history_window:] if self._history_window else []
        messages = build_chat_messages(
            question=question,
            history=recent,
            context=context,
            document_name=document_name,
            language=language,
        )
        async with aclosing(self._stream(messages)) as events:
            async for event in events:
                yield event

    async def analyze_document(
        self,
        document_text: str,
        file_name: str,
        language: str | None = None,
    ) -> AsyncGenerator[StreamEvent, None]:
        """
        Stream a structured legal analysis of a whole document.

        Yields:
            StreamEvent: TOKEN events, then one COMPLETE or ERROR event
        """
        logger.info(f"{__name__}:analyze_document - START file_name={file_name}, text_len={len(document_text)}")
        messages = build_analysis_messages(document_text, file_name, language)
        async with aclosing(self._stream(messages)) as events:
            async for event in events:
                yield event

    async def _stream(self, messages: list[BaseMessage]) -> AsyncGenerator[StreamEvent, None]:
        full_answer = ""
        token_index = 0
        try:
            async with aclosing(self._client.stream_completion(messages)) as tokens:
                async for token in tokens:
                    full_answer += token
                    yield StreamEvent(
                        event=StreamEventType.TOKEN,
                        data={"token": token, "index": token_index},
                    )
                    token_index += 1
        except GenerationError as e:
            logger.error(f"{__name__}:_stream - FAILED after {token_index} tokens: {e.code}: {e}")
            yield error_event(e)
            return

        logger.info(f"{__name__}:_stream - END tokens={token_index}, answer_len={len(full_answer)}")
        yield StreamEvent(
            event=StreamEventType.COMPLETE,
            data={"full_answer": full_answer},
        )
