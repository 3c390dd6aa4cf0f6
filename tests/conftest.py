import pytest
from unittest.mock import AsyncMock

from tests.fixtures.responses import SAMPLE_RESUME_TEXT


@pytest.fixture
def anyio_backend():
    """Run anyio-marked tests on asyncio, the event loop the code is written for."""
    return "asyncio"


@pytest.fixture
def mock_extractor():
    """Resume extractor stub returning canned resume text."""
    extractor = AsyncMock()
    extractor.extract.return_value = SAMPLE_RESUME_TEXT
    return extractor


@pytest.fixture
def store():
    """In-memory conversation store with default limits."""
    from services.conversation_store import ConversationStore
    return ConversationStore(max_messages=30, max_conversations=20)


@pytest.fixture
def prompt_builder(mock_extractor):
    from services.prompt_builder import SystemPromptBuilder
    return SystemPromptBuilder(extractor=mock_extractor)


@pytest.fixture
def llm_client_builder():
    from tests.fixtures.mock_clients import LLMClientBuilder
    return LLMClientBuilder()


@pytest.fixture
def llm_client(llm_client_builder):
    """Upstream mock answering every call with the default reply."""
    return llm_client_builder.build()


@pytest.fixture
def make_relay(store, prompt_builder):
    """Build a ChatRelay wired to a given fake upstream client."""
    from services.chat_relay import ChatRelay

    def _make(client):
        return ChatRelay(
            store=store,
            prompt_builder=prompt_builder,
            resume_source="https://example.com/resume.pdf",
            client_factory=lambda: client
        )
    return _make


@pytest.fixture
def relay(make_relay, llm_client):
    return make_relay(llm_client)


@pytest.fixture
def model_config():
    from models.chat_models import ModelConfig
    return ModelConfig(
        model="google/gemini-flash-1.5-8b",
        endpoint="https://openrouter.ai/api/v1/chat/completions",
        credential="sk-or-test",
        temperature=0.1
    )


@pytest.fixture
def auth_headers():
    """Authentication headers for API requests."""
    return {"X-API-Key": "test-key"}


@pytest.fixture
def configured_app(monkeypatch, relay):
    """Pre-configured app with the relay wired to the fake upstream."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from auth import APIKeyMiddleware
    from routes import chat
    from config import Config

    monkeypatch.setattr(APIKeyMiddleware, "API_KEY", "test-key")
    monkeypatch.setattr(Config, "OPENROUTER_API_KEY", "sk-or-test")
    monkeypatch.setattr(Config, "CANDIDATE_NAME", "Jordan Reyes")

    app = FastAPI()
    app.add_middleware(APIKeyMiddleware)
    app.include_router(chat.router)
    app.state.relay = relay

    with TestClient(app) as client:
        yield client
