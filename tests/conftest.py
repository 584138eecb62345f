"""Shared test fixtures and configuration."""
import os
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

# Set test environment variables before importing app
os.environ.setdefault("XAI_API_KEY", "xai-test-key")
os.environ.setdefault("ELEVENLABS_API_KEY", "test-elevenlabs-key")
os.environ.setdefault("ELEVENLABS_VOICE_ID", "test-voice")

from app.main import app
from app.core.dependencies import (
    get_audio_store,
    get_completion_provider,
    get_conversation_store,
    get_speech_synthesizer,
)
from app.services.agent.dialog import DialogController
from app.services.agent.pipeline import ResponsePipeline
from app.services.audio.store import AudioStore
from app.services.call_session.store import ConversationStore


class FakeClock:
    """Manually advanced clock for TTL tests."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock():
    """Clock starting at t=1000s."""
    return FakeClock()


@pytest.fixture
def conversation_store(fake_clock):
    """Conversation store on the fake clock."""
    return ConversationStore(clock=fake_clock)


@pytest.fixture
def audio_store(fake_clock):
    """Audio store on the fake clock."""
    return AudioStore(clock=fake_clock)


@pytest.fixture
def mock_completion():
    """Completion provider that always answers."""
    provider = Mock()
    provider.complete = AsyncMock(return_value="Hi! I'm Grok. What's on your mind?")
    return provider


@pytest.fixture
def mock_synthesizer():
    """Speech synthesizer returning fixed MP3 bytes."""
    synthesizer = Mock()
    synthesizer.content_type = "audio/mpeg"
    synthesizer.synthesize = AsyncMock(return_value=b"ID3-fake-mp3")
    return synthesizer


@pytest.fixture
def pipeline(conversation_store, audio_store, mock_completion, mock_synthesizer):
    """Response pipeline wired to the mocks."""
    return ResponsePipeline(conversation_store, audio_store, mock_completion, mock_synthesizer)


@pytest.fixture
def controller(conversation_store, pipeline):
    """Dialog controller wired to the test pipeline."""
    return DialogController(conversation_store, pipeline)


@pytest.fixture
def test_client(conversation_store, audio_store, mock_completion, mock_synthesizer):
    """Create FastAPI test client with overrides."""
    app.dependency_overrides[get_conversation_store] = lambda: conversation_store
    app.dependency_overrides[get_audio_store] = lambda: audio_store
    app.dependency_overrides[get_completion_provider] = lambda: mock_completion
    app.dependency_overrides[get_speech_synthesizer] = lambda: mock_synthesizer

    client = TestClient(app)

    yield client

    # Clear overrides
    app.dependency_overrides.clear()
