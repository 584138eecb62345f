"""Unit tests for the response pipeline."""
from unittest.mock import AsyncMock, Mock

import pytest

from app.services.agent.completion import XAICompletionProvider
from app.services.agent.constants import (
    COMPLETION_ERROR_FALLBACK,
    COMPLETION_TIMEOUT_FALLBACK,
)
from app.services.agent.errors import (
    CompletionProviderError,
    CompletionTimeout,
    SynthesisError,
)
from app.services.agent.pipeline import ResponsePipeline
from app.services.agent.prompt import SYSTEM_PROMPT


class TestResponsePipeline:
    """Test one turn through completion, synthesis and audio storage."""

    @pytest.mark.asyncio
    async def test_successful_turn(
        self, pipeline, conversation_store, audio_store, mock_completion, mock_synthesizer
    ):
        conversation_store.create("CA123", "+15550001111")

        url = await pipeline.respond("CA123", "hello", base_url="https://relay.example.com")

        assert url.startswith("https://relay.example.com/audio/audio_")
        audio_id = url.rsplit("/", 1)[1]
        artifact = audio_store.get(audio_id)
        assert artifact.payload == b"ID3-fake-mp3"
        assert artifact.content_type == "audio/mpeg"

        history = conversation_store.get("CA123").history
        assert [(m.role, m.content) for m in history] == [
            ("user", "hello"),
            ("assistant", "Hi! I'm Grok. What's on your mind?"),
        ]
        mock_synthesizer.synthesize.assert_awaited_once_with(
            "Hi! I'm Grok. What's on your mind?"
        )

    @pytest.mark.asyncio
    async def test_request_starts_with_system_prompt(self, pipeline, mock_completion):
        await pipeline.respond("CA123", "what time is it on mars")

        messages = mock_completion.complete.await_args.args[0]
        assert messages[0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert messages[1] == {"role": "user", "content": "what time is it on mars"}

    @pytest.mark.asyncio
    async def test_session_created_lazily(self, pipeline, conversation_store):
        """Test a turn for an unknown call creates its session."""
        await pipeline.respond("CA-unknown", "hello")

        session = conversation_store.get("CA-unknown")
        assert session is not None
        assert len(session.history) == 2

    @pytest.mark.asyncio
    async def test_history_window_is_bounded(self, pipeline, conversation_store, mock_completion):
        """Test that only the last 10 entries are sent no matter how long the call runs."""
        for turn in range(1, 12):
            await pipeline.respond("CA123", f"question {turn}")

        await pipeline.respond("CA123", "question 12")

        messages = mock_completion.complete.await_args.args[0]
        assert len(messages) == 11
        assert messages[0]["role"] == "system"
        assert messages[-1] == {"role": "user", "content": "question 12"}
        assert {"role": "user", "content": "question 1"} not in messages

        # Storage keeps the whole conversation
        assert len(conversation_store.get("CA123").history) == 24

    @pytest.mark.asyncio
    async def test_completion_timeout_uses_fallback(
        self, pipeline, conversation_store, audio_store, mock_completion, mock_synthesizer
    ):
        """Test a timed-out completion still produces playable audio."""
        mock_completion.complete.side_effect = CompletionTimeout("too slow")

        url = await pipeline.respond("CA123", "tell me a story")

        assert "/audio/audio_" in url
        assert audio_store.size() == 1
        mock_synthesizer.synthesize.assert_awaited_once_with(COMPLETION_TIMEOUT_FALLBACK)

        # User entry kept, no assistant entry for the fallback
        history = conversation_store.get("CA123").history
        assert [(m.role, m.content) for m in history] == [("user", "tell me a story")]

    @pytest.mark.asyncio
    async def test_completion_error_uses_fallback(
        self, pipeline, conversation_store, mock_completion, mock_synthesizer
    ):
        mock_completion.complete.side_effect = CompletionProviderError("No response from Grok API")

        url = await pipeline.respond("CA123", "hello")

        assert "/audio/" in url
        mock_synthesizer.synthesize.assert_awaited_once_with(COMPLETION_ERROR_FALLBACK)
        history = conversation_store.get("CA123").history
        assert [m.role for m in history] == ["user"]

    @pytest.mark.asyncio
    async def test_unexpected_completion_error_uses_fallback(
        self, pipeline, conversation_store, audio_store, mock_completion, mock_synthesizer
    ):
        """Test that errors outside the provider taxonomy still produce fallback audio."""
        mock_completion.complete.side_effect = RuntimeError("malformed response")

        url = await pipeline.respond("CA123", "hello")

        assert "/audio/audio_" in url
        assert audio_store.size() == 1
        mock_synthesizer.synthesize.assert_awaited_once_with(COMPLETION_ERROR_FALLBACK)
        history = conversation_store.get("CA123").history
        assert [(m.role, m.content) for m in history] == [("user", "hello")]

    @pytest.mark.asyncio
    async def test_synthesis_error_propagates(
        self, pipeline, audio_store, mock_synthesizer
    ):
        """Test that failing synthesis is not downgraded to a fallback."""
        mock_synthesizer.synthesize.side_effect = SynthesisError("Failed to generate speech")

        with pytest.raises(SynthesisError):
            await pipeline.respond("CA123", "hello")

        assert audio_store.size() == 0

    @pytest.mark.asyncio
    async def test_identical_replies_get_distinct_artifacts(self, pipeline, audio_store):
        first = await pipeline.respond("CA123", "hello")
        second = await pipeline.respond("CA123", "hello")

        assert first != second
        assert audio_store.get(first.rsplit("/", 1)[1]) is not None
        assert audio_store.get(second.rsplit("/", 1)[1]) is not None

    @pytest.mark.asyncio
    async def test_empty_reply_falls_back_without_assistant_entry(
        self, conversation_store, audio_store, mock_synthesizer
    ):
        """Test a blank model answer is spoken as the connectivity line, not stored."""
        completion = Mock(choices=[Mock(message=Mock(content=None))])
        client = Mock()
        client.chat.completions.create = AsyncMock(return_value=completion)
        pipeline = ResponsePipeline(
            conversation_store,
            audio_store,
            XAICompletionProvider(client=client),
            mock_synthesizer,
        )

        await pipeline.respond("CA123", "hello")

        mock_synthesizer.synthesize.assert_awaited_once_with(COMPLETION_ERROR_FALLBACK)
        history = conversation_store.get("CA123").history
        assert [(m.role, m.content) for m in history] == [("user", "hello")]
