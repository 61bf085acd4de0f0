"""
Streaming client for the OpenAI-compatible chat completions gateway.

Wraps a LangChain ``ChatOpenAI`` model pointed at the gateway and yields
content deltas from ``astream`` until the stream ends or stays idle for
longer than the configured timeout.

Dependencies: langchain_openai, openai, httpx, legally.core.exceptions, legally.configs
System role: LLM gateway adapter for answer generation
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Sequence

import httpx
import openai
from langchain_core.messages import BaseMessage, BaseMessageChunk
from langchain_openai import ChatOpenAI

from legally.configs import Settings, get_settings
from legally.core.exceptions import GenerationFailure, generation_error_for_status

logger = logging.getLogger(__name__)


def chunk_text(chunk: BaseMessageChunk) -> str:
    """Text of a streamed chunk; list content (content blocks) is flattened."""
    if isinstance(chunk.content, list):
        return "".join(
            item if isinstance(item, str) else (str(item.get("text", "")) if isinstance(item, dict) else str(item))
            for item in chunk.content
        )
    return str(chunk.content or "")


class GenerationClient:
    """
    Chat completions client with streamed responses.

    The underlying model is built on first use. Retries are disabled so
    rate limit and quota answers surface to the user immediately.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        model: str,
        connect_timeout: float = 10.0,
        stream_idle_timeout: float = 30.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """
        Args:
            base_url: Gateway base URL (``.../v1``)
            api_key: Bearer token
            model: Model identifier sent with each request
            connect_timeout: Seconds allowed to establish the connection
            stream_idle_timeout: Seconds without a chunk before the stream is treated as done
            http_client: Optional async httpx client (tests pass one on httpx.MockTransport)
        """
        self.base_url = base_url
        self.model = model
        self._api_key = api_key
        self._connect_timeout = connect_timeout
        self._stream_idle_timeout = stream_idle_timeout
        self._http_client = http_client
        self._chat_model: ChatOpenAI | None = None

    def _get_chat_model(self) -> ChatOpenAI:
        if self._chat_model is None:
            self._chat_model = ChatOpenAI(
                model=self.model,
                base_url=self.base_url,
                api_key=self._api_key,
                streaming=True,
                max_retries=0,
                timeout=httpx.Timeout(None, connect=self._connect_timeout),
                http_async_client=self._http_client,
            )
        return self._chat_model

    async def stream_completion(self, messages: Sequence[BaseMessage]) -> AsyncIterator[str]:
        """
        Stream answer text for a chat request.

        Args:
            messages: Prompt messages, system instruction first

        Yields:
            str: Content deltas in arrival order

        Raises:
            GenerationRateLimited: Gateway answered 429
            GenerationQuotaExceeded: Gateway answered 402
            GenerationFailure: Any other status, a transport error, or a missing API key
        """
        if not self._api_key:
            raise GenerationFailure("Generation gateway API key is not configured")

        chunks = self._get_chat_model().astream(list(messages))
        logger.info(f"{__name__}:stream_completion - Streaming response (model={self.model})")
        try:
            while True:
                try:
                    chunk = await asyncio.wait_for(chunks.__anext__(), self._stream_idle_timeout)
                except StopAsyncIteration:
                    break
                except asyncio.TimeoutError:
                    logger.warning(
                        f"{__name__}:stream_completion - No data for "
                        f"{self._stream_idle_timeout}s, treating stream as done"
                    )
                    break
                text = chunk_text(chunk)
                if text:
                    yield text
        except openai.APIStatusError as e:
            logger.error(f"{__name__}:stream_completion - Gateway error {e.status_code}: {e.message[:200]}")
            raise generation_error_for_status(e.status_code, e.message) from e
        except openai.APIError as e:
            logger.error(f"{__name__}:stream_completion - Transport error: {type(e).__name__}: {e}")
            raise GenerationFailure(f"Generation gateway request failed: {e}") from e
        finally:
            await chunks.aclose()


def get_generation_client(settings: Settings | None = None) -> GenerationClient:
    """Build a gateway client from GENERATION_* settings."""
    config = (settings or get_settings()).generation
    return GenerationClient(
        base_url=config.base_url,
        api_key=config.api_key.get_secret_value(),
        model=config.model,
        connect_timeout=config.connect_timeout,
        stream_idle_timeout=config.stream_idle_timeout,
    )
