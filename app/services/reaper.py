"""Background eviction of stale sessions and audio."""
import asyncio
import logging
from typing import Optional, Tuple

from app.services.audio.store import AudioStore
from app.services.call_session.store import ConversationStore

logger = logging.getLogger(__name__)


class SessionReaper:
    """
    Periodically sweeps the conversation and audio stores.

    The loop runs as an asyncio task owned by the application lifespan.
    ``sweep_once`` can be called directly with an explicit time to drive
    eviction without waiting on the interval.
    """

    def __init__(
        self,
        conversation_store: ConversationStore,
        audio_store: AudioStore,
        interval: float,
        session_max_age: float,
        audio_max_age: float,
    ):
        self.conversation_store = conversation_store
        self.audio_store = audio_store
        self.interval = interval
        self.session_max_age = session_max_age
        self.audio_max_age = audio_max_age
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep_once(self, now: Optional[float] = None) -> Tuple[int, int]:
        """
        Run a single sweep of both stores.

        Returns:
            (sessions removed, audio artifacts removed)
        """
        sessions = self.conversation_store.sweep(self.session_max_age, now)
        audio = self.audio_store.sweep(self.audio_max_age, now)
        if sessions or audio:
            logger.info(
                f"[REAPER] Cleaned up {sessions} old conversations and {audio} audio files"
            )
        return sessions, audio

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval)
            try:
                self.sweep_once()
            except Exception as e:
                logger.error(f"[REAPER] Sweep failed: {type(e).__name__}: {str(e)}", exc_info=True)

    def start(self) -> None:
        """Start the sweep loop on the running event loop."""
        if self.running:
            return
        logger.info(f"[REAPER] Starting, interval: {self.interval}s")
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Cancel the sweep loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("[REAPER] Stopped")
