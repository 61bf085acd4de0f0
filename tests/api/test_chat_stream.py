"""
Test suite for the WebSocket chat endpoint.

The gateway is served by httpx.MockTransport, so answers stream the
tokens of the ``gateway_tokens`` fixture.

System role: Verification of WebSocket streaming API
"""

import pytest
from fastapi.testclient import TestClient
from starlette.websockets import WebSocketDisconnect

WS_URL = "/api/v1/ws/chat"


def _receive_until_terminal(websocket) -> list[dict]:
    events = []
    while True:
        event = websocket.receive_json()
        events.append(event)
        if event["event"] in ("complete", "error"):
            return events


class TestConnection:
    """Test suite for connection handling."""

    def test_connect_should_send_connected_event(self, client: TestClient, owner_headers: dict) -> None:
        """Test the first message confirms the owner identity."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            assert websocket.receive_json() == {"event": "connected", "data": {"owner_id": "owner-a"}}

    def test_connect_should_accept_owner_query_param(self, client: TestClient) -> None:
        """Test browser clients can pass the owner as a query parameter."""
        with client.websocket_connect(f"{WS_URL}?owner_id=owner-q") as websocket:
            assert websocket.receive_json()["data"] == {"owner_id": "owner-q"}

    def test_connect_should_reject_missing_owner(self, client: TestClient) -> None:
        """Test connections without an owner are closed with a policy violation."""
        with pytest.raises(WebSocketDisconnect) as exc_info:
            with client.websocket_connect(WS_URL) as websocket:
                websocket.receive_json()

        assert exc_info.value.code == 1008

    def test_ping_should_get_pong(self, client: TestClient, owner_headers: dict) -> None:
        """Test keepalive pings are answered."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "ping"})

            assert websocket.receive_json() == {"event": "pong"}


class TestChatEvent:
    """Test suite for chat events."""

    def test_chat_should_stream_tokens_then_complete(
        self, client: TestClient, owner_headers: dict, gateway_tokens: list[str]
    ) -> None:
        """Test a question streams indexed tokens and a full answer."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()

            # Act
            websocket.send_json({"event": "chat", "data": {"message": "What notice must a landlord give?"}})
            events = _receive_until_terminal(websocket)

        # Assert
        assert events == [
            {"event": "token", "data": {"token": gateway_tokens[0], "index": 0}},
            {"event": "token", "data": {"token": gateway_tokens[1], "index": 1}},
            {"event": "complete", "data": {"full_answer": "".join(gateway_tokens)}},
        ]

    def test_chat_should_keep_connection_open_between_turns(
        self, client: TestClient, owner_headers: dict
    ) -> None:
        """Test several questions can be asked on one connection."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()

            for question in ("First question", "Second question"):
                websocket.send_json({"event": "chat", "data": {"message": question}})
                assert _receive_until_terminal(websocket)[-1]["event"] == "complete"

    def test_chat_should_require_message(self, client: TestClient, owner_headers: dict) -> None:
        """Test a chat event without a message is rejected."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "chat", "data": {}})

            event = websocket.receive_json()

        assert event["event"] == "error"
        assert event["data"]["code"] == "MISSING_MESSAGE"

    def test_chat_should_reject_invalid_history(self, client: TestClient, owner_headers: dict) -> None:
        """Test malformed history turns are reported as an invalid payload."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "chat", "data": {"message": "hi", "history": [{"role": "user"}]}})

            event = websocket.receive_json()

        assert event["data"]["code"] == "INVALID_PAYLOAD"


class TestAnalyzeEvent:
    """Test suite for document analysis events."""

    def test_analyze_should_stream_analysis(
        self, client: TestClient, owner_headers: dict, gateway_tokens: list[str]
    ) -> None:
        """Test an analyze request streams to a complete event."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()
            websocket.send_json({
                "event": "analyze",
                "data": {"document_content": "FIR No. 12 of 2024 ...", "file_name": "fir.pdf"},
            })
            events = _receive_until_terminal(websocket)

        assert events[-1] == {"event": "complete", "data": {"full_answer": "".join(gateway_tokens)}}

    def test_analyze_should_reject_missing_content(self, client: TestClient, owner_headers: dict) -> None:
        """Test an analyze request without document text is rejected."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "analyze", "data": {"file_name": "empty.pdf"}})

            event = websocket.receive_json()

        assert event["data"]["code"] == "INVALID_PAYLOAD"


class TestMalformedInput:
    """Test suite for malformed client messages."""

    def test_invalid_json_should_return_error_and_keep_connection(
        self, client: TestClient, owner_headers: dict
    ) -> None:
        """Test unparseable frames get an error and the socket stays usable."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()
            websocket.send_text("{not json")

            error = websocket.receive_json()
            websocket.send_json({"event": "ping"})

            assert error["data"]["code"] == "INVALID_JSON"
            assert websocket.receive_json() == {"event": "pong"}

    def test_unknown_event_should_return_error(self, client: TestClient, owner_headers: dict) -> None:
        """Test unsupported event types are reported."""
        with client.websocket_connect(WS_URL, headers=owner_headers) as websocket:
            websocket.receive_json()
            websocket.send_json({"event": "subscribe"})

            event = websocket.receive_json()

        assert event["data"] == {"code": "UNKNOWN_EVENT", "message": "Unknown event type: subscribe"}
