"""
Test suite for chat API endpoint.

Tests POST /api/chat with FastAPI TestClient and a mocked ChatService.

System role: Verification of chat HTTP API endpoint
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from assistant.api.deps import get_chat_service
from assistant.api.main import create_app
from assistant.models.chat import ChatResponse, ChatSource


@pytest.fixture
def chat_service() -> AsyncMock:
    service = AsyncMock()
    service.chat.return_value = ChatResponse(
        answer="RiverMeadow is a migration platform.",
        sources=[ChatSource(source="kb.md", content="fact", score=0.9)],
    )
    return service


@pytest.fixture
def client(chat_service: AsyncMock) -> TestClient:
    app = create_app()
    app.dependency_overrides[get_chat_service] = lambda: chat_service
    return TestClient(app)


class TestChatEndpoint:
    """Test suite for POST /api/chat."""

    def test_should_return_answer_and_sources(self, client: TestClient, chat_service: AsyncMock) -> None:
        """Test a chat turn returns the service response."""
        # Act
        response = client.post(
            "/api/chat",
            json={"message": "What is RiverMeadow?", "history": [{"role": "user", "content": "hi"}]},
        )

        # Assert
        assert response.status_code == 200
        body = response.json()
        assert body["answer"] == "RiverMeadow is a migration platform."
        assert body["sources"][0]["source"] == "kb.md"
        assert body["diagram"] is None
        request = chat_service.chat.await_args.args[0]
        assert request.history[0].content == "hi"

    def test_empty_message_should_return_422(self, client: TestClient) -> None:
        """Test request validation."""
        assert client.post("/api/chat", json={"message": ""}).status_code == 422

    def test_invalid_role_should_return_422(self, client: TestClient) -> None:
        """Test history roles are restricted."""
        response = client.post(
            "/api/chat",
            json={"message": "hi", "history": [{"role": "system", "content": "x"}]},
        )

        assert response.status_code == 422

    def test_service_failure_should_return_500(self, client: TestClient, chat_service: AsyncMock) -> None:
        """Test an answer failure is a JSON 500."""
        chat_service.chat.side_effect = RuntimeError("model down")

        response = client.post("/api/chat", json={"message": "What is RiverMeadow?"})

        assert response.status_code == 500
        assert response.json() == {"detail": "Failed to generate answer"}
