"""
WebSocket streaming chat endpoint.

Provides real-time token streaming for chat answers and document analysis.

Routes: WS /ws/chat

Dependencies: legally.application.services.chat_service
System role: WebSocket streaming HTTP API
"""

import json
import logging
from collections.abc import AsyncGenerator
from contextlib import aclosing

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from pydantic import ValidationError

from legally.api.deps import get_chat_service
from legally.application.services.chat_service import ChatService
from legally.models.chat import DocumentAnalysisRequest
from legally.models.streaming import (
    ClientChatEvent,
    ClientEventType,
    StreamEvent,
    StreamEventType,
)

logger = logging.getLogger(__name__)
router = APIRouter(tags=["streaming"])


def _error(code: str, message: str) -> dict:
    return {"event": StreamEventType.ERROR.value, "data": {"code": code, "message": message}}


def resolve_owner_id(websocket: WebSocket) -> str | None:
    """Owner from the X-Owner-Id header, or the owner_id query parameter for browser clients."""
    owner_id = websocket.headers.get("x-owner-id") or websocket.query_params.get("owner_id")
    return owner_id.strip() if owner_id and owner_id.strip() else None


async def _forward(websocket: WebSocket, stream: AsyncGenerator[StreamEvent, None]) -> int:
    """Send every event of a stream; closes the stream if the client goes away mid-answer."""
    event_count = 0
    async with aclosing(stream) as events:
        async for event in events:
            await websocket.send_json(event.to_dict())
            event_count += 1
    return event_count


@router.websocket("/ws/chat")
async def websocket_chat(
    websocket: WebSocket,
    chat_service: ChatService = Depends(get_chat_service),
) -> None:
    """
    WebSocket endpoint for streaming chat responses.

    Client sends:
        {"event": "chat", "data": {"message": "...", "conversation_id": "...",
                                   "document_id": "...", "language": "ta", "history": [...]}}
        {"event": "analyze", "data": {"document_content": "...", "file_name": "...", "language": "hi"}}
        {"event": "ping"}

    Server sends:
        {"event": "connected", "data": {"owner_id": "..."}}
        {"event": "token", "data": {"token": "...", "index": 0}}
        {"event": "complete", "data": {"full_answer": "..."}}
        {"event": "error", "data": {"code": "...", "message": "..."}}
        {"event": "pong"}

    Args:
        websocket: WebSocket connection
        chat_service: Injected ChatService
    """
    owner_id = resolve_owner_id(websocket)
    if owner_id is None:
        logger.warning("WebSocket rejected: missing owner id", extra={"client_host": websocket.client})
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    logger.info("WebSocket connection established", extra={"owner_id": owner_id})

    await websocket.send_json({
        "event": StreamEventType.CONNECTED.value,
        "data": {"owner_id": owner_id},
    })

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                data = json.loads(raw_data)
            except json.JSONDecodeError as e:
                logger.warning(
                    "Failed to parse JSON",
                    extra={"owner_id": owner_id, "error_msg": str(e), "raw_data_preview": raw_data[:50]},
                )
                await websocket.send_json(_error("INVALID_JSON", "Invalid JSON format"))
                continue

            if not isinstance(data, dict):
                await websocket.send_json(_error("INVALID_JSON", "Expected a JSON object"))
                continue

            event_type = data.get("event")
            event_data = data.get("data") or {}

            if event_type == ClientEventType.PING.value:
                await websocket.send_json({"event": StreamEventType.PONG.value})
                continue

            if event_type == ClientEventType.CHAT.value:
                if not isinstance(event_data, dict) or not event_data.get("message"):
                    await websocket.send_json(_error("MISSING_MESSAGE", "Message is required"))
                    continue
                try:
                    chat_event = ClientChatEvent.model_validate(event_data)
                except ValidationError as e:
                    await websocket.send_json(_error("INVALID_PAYLOAD", str(e)))
                    continue

                logger.info(
                    "Chat event received",
                    extra={
                        "owner_id": owner_id,
                        "conversation_id": chat_event.conversation_id,
                        "document_id": chat_event.document_id,
                        "message_length": len(chat_event.message),
                    },
                )
                try:
                    event_count = await _forward(
                        websocket,
                        chat_service.stream_chat(
                            owner_id=owner_id,
                            message=chat_event.message,
                            conversation_id=chat_event.conversation_id,
                            document_id=chat_event.document_id,
                            document_name=chat_event.document_name,
                            language=chat_event.language,
                            history=[turn.model_dump() for turn in chat_event.history],
                        ),
                    )
                    logger.info("Chat stream completed", extra={"owner_id": owner_id, "total_events": event_count})
                except WebSocketDisconnect:
                    raise
                except Exception as e:
                    logger.exception(
                        "Unexpected error during chat stream",
                        extra={"owner_id": owner_id, "error_type": type(e).__name__, "error_msg": str(e)},
                    )
                    await websocket.send_json(_error("PROCESSING_ERROR", "Failed to process message"))
                continue

            if event_type == ClientEventType.ANALYZE.value:
                try:
                    analysis = DocumentAnalysisRequest.model_validate(event_data)
                except ValidationError as e:
                    await websocket.send_json(_error("INVALID_PAYLOAD", str(e)))
                    continue

                logger.info(
                    "Analyze event received",
                    extra={"owner_id": owner_id, "file_name": analysis.file_name},
                )
                try:
                    await _forward(
                        websocket,
                        chat_service.stream_analysis(
                            analysis.document_content,
                            analysis.file_name,
                            analysis.language,
                        ),
                    )
                except WebSocketDisconnect:
                    raise
                except Exception as e:
                    logger.exception(
                        "Unexpected error during document analysis",
                        extra={"owner_id": owner_id, "error_type": type(e).__name__, "error_msg": str(e)},
                    )
                    await websocket.send_json(_error("PROCESSING_ERROR", "Failed to analyze document"))
                continue

            logger.warning(
                "Unknown event type received",
                extra={"owner_id": owner_id, "event_type": str(event_type), "full_data": str(data)[:200]},
            )
            await websocket.send_json(_error("UNKNOWN_EVENT", f"Unknown event type: {event_type}"))

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected", extra={"owner_id": owner_id})
