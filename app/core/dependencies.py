"""FastAPI dependencies."""
from functools import lru_cache

from fastapi import Depends

from app.core.config import settings
from app.services.agent.completion import CompletionProvider, XAICompletionProvider
from app.services.agent.dialog import DialogController
from app.services.agent.pipeline import ResponsePipeline
from app.services.audio.store import AudioStore
from app.services.call_session.store import ConversationStore
from app.services.reaper import SessionReaper
from app.services.speech.tts import ElevenLabsSynthesizer, SpeechSynthesizer


@lru_cache
def get_conversation_store() -> ConversationStore:
    """Get the process-wide conversation store."""
    return ConversationStore()


@lru_cache
def get_audio_store() -> AudioStore:
    """Get the process-wide audio store."""
    return AudioStore()


@lru_cache
def get_completion_provider() -> CompletionProvider:
    """Get the completion provider."""
    return XAICompletionProvider()


@lru_cache
def get_speech_synthesizer() -> SpeechSynthesizer:
    """Get the speech synthesizer."""
    return ElevenLabsSynthesizer()


def get_response_pipeline(
    conversation_store: ConversationStore = Depends(get_conversation_store),
    audio_store: AudioStore = Depends(get_audio_store),
    completion_provider: CompletionProvider = Depends(get_completion_provider),
    synthesizer: SpeechSynthesizer = Depends(get_speech_synthesizer),
) -> ResponsePipeline:
    """Get response pipeline."""
    return ResponsePipeline(conversation_store, audio_store, completion_provider, synthesizer)


def get_dialog_controller(
    conversation_store: ConversationStore = Depends(get_conversation_store),
    pipeline: ResponsePipeline = Depends(get_response_pipeline),
) -> DialogController:
    """Get dialog controller."""
    return DialogController(conversation_store, pipeline)


def create_reaper() -> SessionReaper:
    """Build the reaper over the process-wide stores."""
    return SessionReaper(
        conversation_store=get_conversation_store(),
        audio_store=get_audio_store(),
        interval=settings.cleanup_interval_seconds,
        session_max_age=settings.conversation_timeout_seconds,
        audio_max_age=settings.audio_max_age_seconds,
    )
