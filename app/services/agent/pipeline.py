"""Response pipeline: transcript in, playable audio URL out."""
import logging

from app.services.agent.completion import CompletionProvider
from app.services.agent.constants import (
    COMPLETION_ERROR_FALLBACK,
    COMPLETION_TIMEOUT_FALLBACK,
    HISTORY_WINDOW,
)
from app.services.agent.errors import CompletionProviderError, CompletionTimeout
from app.services.agent.prompt import build_messages
from app.services.audio.store import AudioStore
from app.services.call_session.store import ConversationStore
from app.services.speech.tts import SpeechSynthesizer

logger = logging.getLogger(__name__)


class ResponsePipeline:
    """Runs one conversational turn against the completion and speech providers."""

    def __init__(
        self,
        conversation_store: ConversationStore,
        audio_store: AudioStore,
        completion_provider: CompletionProvider,
        synthesizer: SpeechSynthesizer,
        history_window: int = HISTORY_WINDOW,
    ):
        self.conversation_store = conversation_store
        self.audio_store = audio_store
        self.completion_provider = completion_provider
        self.synthesizer = synthesizer
        self.history_window = history_window

    async def get_reply_text(self, call_sid: str, transcript: str) -> str:
        """
        Record the caller's words and get the text to speak back.

        Completion failures never escape: a timeout yields one fixed fallback
        line, any other failure the connectivity line. Only a real reply is
        added to the history.
        """
        session = self.conversation_store.get_or_create(call_sid)
        session.add_message("user", transcript)
        messages = build_messages(session, self.history_window)

        logger.info(
            f"[PIPELINE] Sending to Grok - CallSid: {call_sid}, "
            f"Messages: {len(messages)}, Text: '{transcript[:100]}'"
        )
        try:
            reply = await self.completion_provider.complete(messages)
        except CompletionTimeout:
            logger.warning(f"[PIPELINE] Completion timed out, using fallback - CallSid: {call_sid}")
            return COMPLETION_TIMEOUT_FALLBACK
        except CompletionProviderError as e:
            logger.error(f"[PIPELINE] Completion failed, using fallback - CallSid: {call_sid}, Error: {e}")
            return COMPLETION_ERROR_FALLBACK
        except Exception as e:
            logger.error(
                f"[PIPELINE] Unexpected completion error, using fallback - CallSid: {call_sid}, "
                f"Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            return COMPLETION_ERROR_FALLBACK

        session.add_message("assistant", reply)
        logger.info(f"[PIPELINE] Grok response - CallSid: {call_sid}, Text: '{reply[:100]}'")
        return reply

    async def respond(self, call_sid: str, transcript: str, base_url: str = "") -> str:
        """
        Produce a playable reply for one caller utterance.

        Args:
            call_sid: Twilio call SID
            transcript: What the caller said
            base_url: Public base URL the audio link is built on

        Returns:
            URL of the stored audio artifact

        Raises:
            SynthesisError: speech could not be generated
        """
        text = await self.get_reply_text(call_sid, transcript)
        payload = await self.synthesizer.synthesize(text)
        artifact = self.audio_store.add(payload, self.synthesizer.content_type)
        logger.info(
            f"[PIPELINE] Stored audio - CallSid: {call_sid}, AudioId: {artifact.audio_id}, "
            f"Bytes: {len(payload)}"
        )
        return f"{base_url.rstrip('/')}/audio/{artifact.audio_id}"
