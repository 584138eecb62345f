"""Dialog controller: the per-call turn-taking state machine."""
import logging
import math
from typing import Any, List, Optional

from app.services.agent.constants import (
    APOLOGY_MESSAGE,
    CONFIDENCE_THRESHOLD,
    FAREWELL_MESSAGE,
    GOODBYE_PHRASES,
    NO_SPEECH_REPROMPT,
    UNSURE_REPROMPT,
    WELCOME_MESSAGE,
)
from app.services.agent.directives import Directive, Hangup, Listen, Play, Speak
from app.services.agent.pipeline import ResponsePipeline
from app.services.agent.stages import DialogState
from app.services.call_session.store import ConversationStore

logger = logging.getLogger(__name__)

GATHER_PATH = "/webhooks/voice/gather"


def parse_confidence(value: Any) -> float:
    """Parse a recognizer confidence, treating anything unusable as 0."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        confidence = float(value)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(confidence):
        return 0.0
    return confidence


def is_goodbye(transcript: str) -> bool:
    """Check whether the caller is saying goodbye."""
    text = transcript.lower()
    return any(phrase in text for phrase in GOODBYE_PHRASES)


def gather_url(base_url: str = "") -> str:
    return f"{base_url.rstrip('/')}{GATHER_PATH}"


class DialogController:
    """Decides what the call does after each caller utterance."""

    def __init__(
        self,
        conversation_store: ConversationStore,
        pipeline: ResponsePipeline,
        confidence_threshold: float = CONFIDENCE_THRESHOLD,
    ):
        self.conversation_store = conversation_store
        self.pipeline = pipeline
        self.confidence_threshold = confidence_threshold

    def get_state(self, call_sid: str) -> Optional[DialogState]:
        """Current dialog state of a call, or None if it has no session."""
        session = self.conversation_store.get(call_sid)
        return session.dialog_state if session else None

    def _transition(self, call_sid: str, state: DialogState) -> None:
        session = self.conversation_store.get_or_create(call_sid)
        if session.dialog_state != state:
            logger.debug(
                f"[DIALOG] State changed: {session.dialog_state.value} -> {state.value} "
                f"- CallSid: {call_sid}"
            )
        session.dialog_state = state

    def start_call(self, call_sid: str, caller: str = "", base_url: str = "") -> List[Directive]:
        """Create the session for a new call and greet the caller."""
        logger.info(f"[DIALOG] Call started - CallSid: {call_sid}, From: {caller}")
        self.conversation_store.create(call_sid, caller)
        self._transition(call_sid, DialogState.GREETING)
        directives: List[Directive] = [Speak(text=WELCOME_MESSAGE)]
        self._transition(call_sid, DialogState.LISTENING)
        directives.append(Listen(action_url=gather_url(base_url)))
        return directives

    async def handle_speech(
        self,
        call_sid: str,
        transcript: Optional[str],
        confidence: Any = None,
        base_url: str = "",
    ) -> List[Directive]:
        """
        Handle one speech recognition result.

        Args:
            call_sid: Twilio call SID
            transcript: Recognized text, possibly empty
            confidence: Recognizer confidence; non-numeric or missing counts as 0
            base_url: Public base URL for the next gather and the audio link

        Returns:
            Directives for the telephony layer
        """
        score = parse_confidence(confidence)
        listen = Listen(action_url=gather_url(base_url))

        if not transcript or score < self.confidence_threshold:
            self._transition(call_sid, DialogState.REPROMPTING)
            message = UNSURE_REPROMPT if transcript else NO_SPEECH_REPROMPT
            logger.info(
                f"[DIALOG] Reprompting - CallSid: {call_sid}, Confidence: {score}, "
                f"Heard: {bool(transcript)}"
            )
            self._transition(call_sid, DialogState.LISTENING)
            return [Speak(text=message), listen]

        if is_goodbye(transcript):
            logger.info(f"[DIALOG] Goodbye detected, ending call - CallSid: {call_sid}")
            self._transition(call_sid, DialogState.ENDED)
            return [Speak(text=FAREWELL_MESSAGE), Hangup()]

        self._transition(call_sid, DialogState.RESPONDING)
        try:
            audio_url = await self.pipeline.respond(call_sid, transcript, base_url=base_url)
        except Exception as e:
            logger.error(
                f"[DIALOG] Turn failed - CallSid: {call_sid}, "
                f"Error: {type(e).__name__}: {str(e)}",
                exc_info=True,
            )
            self._transition(call_sid, DialogState.LISTENING)
            return [Speak(text=APOLOGY_MESSAGE), listen]

        self._transition(call_sid, DialogState.LISTENING)
        return [Play(url=audio_url), listen]

    def end_call(self, call_sid: str) -> bool:
        """Drop the session of a call that has ended. Returns True if one existed."""
        removed = self.conversation_store.end(call_sid)
        logger.info(f"[DIALOG] Call ended - CallSid: {call_sid}, Session removed: {removed}")
        return removed
