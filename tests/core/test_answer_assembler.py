"""
Test suite for StreamingAnswerAssembler and prompt construction.

Uses a scripted gateway client in place of the HTTP gateway.

System role: Verification of answer streaming and event sequencing
"""

import pytest
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from legally.core.exceptions import GenerationQuotaExceeded, GenerationRateLimited
from legally.core.generation.answer_assembler import StreamingAnswerAssembler
from legally.core.generation.prompts import (
    DOCUMENT_ANALYSIS_PROMPT,
    SYSTEM_PROMPT,
    build_chat_messages,
    history_to_messages,
    with_language,
    CHAT_LANGUAGE_ADDONS,
)
from legally.models.streaming import StreamEventType


class ScriptedClient:
    """Gateway stand-in that streams fixed tokens, optionally failing afterwards."""

    def __init__(self, tokens: list[str], error: Exception | None = None) -> None:
        self.tokens = tokens
        self.error = error
        self.requests: list[list] = []
        self.closed = False

    async def stream_completion(self, messages):
        self.requests.append(messages)
        try:
            for token in self.tokens:
                yield token
            if self.error is not None:
                raise self.error
        finally:
            self.closed = True


class TestPrompts:
    """Test suite for prompt helpers."""

    def test_with_language_should_append_tamil_addon(self) -> None:
        """Test Tamil selection appends the Tamil instruction."""
        prompt = with_language("base", "ta", CHAT_LANGUAGE_ADDONS)

        assert prompt == f"base\n\n{CHAT_LANGUAGE_ADDONS['ta']}"

    @pytest.mark.parametrize("language", [None, "en", "fr"])
    def test_with_language_should_leave_other_languages_unchanged(self, language) -> None:
        """Test English, unknown or missing languages add nothing."""
        assert with_language("base", language, CHAT_LANGUAGE_ADDONS) == "base"

    def test_build_chat_messages_should_order_system_context_history_question(self) -> None:
        """Test message order and the delimited context block."""
        # Arrange
        history = [HumanMessage(content="Hi"), AIMessage(content="Hello")]

        # Act
        messages = build_chat_messages(
            question="Can my landlord evict me?",
            history=history,
            context="[Chunk 1, Relevance: 80.0%]\nNotice period is 30 days.",
            document_name="lease.pdf",
        )

        # Assert
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == SYSTEM_PROMPT
        assert isinstance(messages[1], SystemMessage)
        assert '<document_context name="lease.pdf">' in messages[1].content
        assert "Notice period is 30 days." in messages[1].content
        assert messages[2:4] == history
        assert messages[-1] == HumanMessage(content="Can my landlord evict me?")

    def test_build_chat_messages_should_omit_empty_context(self) -> None:
        """Test no context block is added when context is empty."""
        messages = build_chat_messages(question="What is bail?")

        assert len(messages) == 2
        assert "document_context" not in messages[0].content

    def test_history_to_messages_should_map_roles_and_drop_unknown(self) -> None:
        """Test user/assistant turns convert and other roles are dropped."""
        messages = history_to_messages([
            {"role": "user", "content": "q"},
            {"role": "system", "content": "ignored"},
            {"role": "assistant", "content": "a"},
        ])

        assert messages == [HumanMessage(content="q"), AIMessage(content="a")]


class TestAstream:
    """Test suite for StreamingAnswerAssembler.astream."""

    @pytest.mark.asyncio
    async def test_astream_should_yield_tokens_then_complete(self) -> None:
        """Test TOKEN events carry index and COMPLETE carries the full answer."""
        # Arrange
        assembler = StreamingAnswerAssembler(ScriptedClient(["Under ", "Article 21"]))

        # Act
        events = [event async for event in assembler.astream("Right to life?")]

        # Assert
        assert [e.event for e in events] == [
            StreamEventType.TOKEN,
            StreamEventType.TOKEN,
            StreamEventType.COMPLETE,
        ]
        assert events[0].data == {"token": "Under ", "index": 0}
        assert events[1].data == {"token": "Article 21", "index": 1}
        assert events[-1].data == {"full_answer": "Under Article 21"}
        assert events[-1].is_terminal

    @pytest.mark.asyncio
    async def test_astream_should_complete_with_empty_answer(self) -> None:
        """Test a stream with no tokens still terminates with COMPLETE."""
        assembler = StreamingAnswerAssembler(ScriptedClient([]))

        events = [event async for event in assembler.astream("Hello")]

        assert len(events) == 1
        assert events[0].event == StreamEventType.COMPLETE
        assert events[0].data == {"full_answer": ""}

    @pytest.mark.asyncio
    async def test_astream_should_end_with_error_on_rate_limit(self) -> None:
        """Test a rate limit becomes one terminal ERROR event after earlier tokens."""
        # Arrange
        assembler = StreamingAnswerAssembler(ScriptedClient(["par"], error=GenerationRateLimited(status_code=429)))

        # Act
        events = [event async for event in assembler.astream("q")]

        # Assert
        assert [e.event for e in events] == [StreamEventType.TOKEN, StreamEventType.ERROR]
        assert events[-1].data == {
            "code": "RATE_LIMITED",
            "message": "Rate limits exceeded. Please try again in a moment.",
            "retryable": True,
        }

    @pytest.mark.asyncio
    async def test_astream_should_report_quota_as_not_retryable(self) -> None:
        """Test quota exhaustion asks the user to add credits."""
        assembler = StreamingAnswerAssembler(ScriptedClient([], error=GenerationQuotaExceeded(status_code=402)))

        events = [event async for event in assembler.astream("q")]

        assert events[-1].event == StreamEventType.ERROR
        assert events[-1].data["code"] == "QUOTA_EXCEEDED"
        assert events[-1].data["retryable"] is False
        assert "add credits" in events[-1].data["message"]

    @pytest.mark.asyncio
    async def test_astream_should_send_context_history_and_language(self) -> None:
        """Test gateway request includes the context block, trimmed history and language add-on."""
        # Arrange
        client = ScriptedClient(["ok"])
        assembler = StreamingAnswerAssembler(client, history_window=2)
        history = [HumanMessage(content=f"turn {i}") for i in range(5)]

        # Act
        _ = [event async for event in assembler.astream(
            "Explain Section 420",
            history=history,
            context="[Chunk 1, Relevance: 70.0%]\ncheating clause",
            language="hi",
        )]

        # Assert
        sent = client.requests[0]
        assert isinstance(sent[0], SystemMessage)
        assert sent[0].content.endswith(CHAT_LANGUAGE_ADDONS["hi"])
        assert "cheating clause" in sent[1].content
        assert [m.content for m in sent[2:4]] == ["turn 3", "turn 4"]
        assert sent[-1] == HumanMessage(content="Explain Section 420")

    @pytest.mark.asyncio
    async def test_closing_stream_should_close_gateway_request(self) -> None:
        """Test a consumer that stops early closes the underlying gateway stream."""
        # Arrange
        client = ScriptedClient(["one", "two", "three"])
        assembler = StreamingAnswerAssembler(client)
        stream = assembler.astream("q")

        # Act
        first = await stream.__anext__()
        await stream.aclose()

        # Assert
        assert first.data["token"] == "one"
        assert client.closed is True


class TestAnalyzeDocument:
    """Test suite for StreamingAnswerAssembler.analyze_document."""

    @pytest.mark.asyncio
    async def test_analyze_document_should_use_analysis_prompt(self) -> None:
        """Test analysis requests use the analysis instruction and name the file."""
        # Arrange
        client = ScriptedClient(["**Document Type**: Lease"])
        assembler = StreamingAnswerAssembler(client)

        # Act
        events = [event async for event in assembler.analyze_document("Lease text", "lease.pdf", language="ta")]

        # Assert
        system, user = client.requests[0]
        assert system.content.startswith(DOCUMENT_ANALYSIS_PROMPT)
        assert "Tamil" in system.content
        assert user.content == 'Please analyze this legal document named "lease.pdf":\n\nLease text'
        assert events[-1].data == {"full_answer": "**Document Type**: Lease"}
