"""Conversation store keyed by call SID."""
import logging
import time
from typing import Optional

from pydantic import BaseModel

from app.services.cache.ttl_cache import Clock, TTLCache
from app.services.call_session.models import CallSession

logger = logging.getLogger(__name__)


class ConversationStats(BaseModel):
    """Aggregate view over the live sessions."""

    total: int = 0
    active: int = 0
    avg_messages: int = 0
    total_messages: int = 0


class ConversationStore:
    """Owns every live CallSession, one per call SID."""

    def __init__(self, clock: Clock = time.monotonic):
        self._cache: TTLCache[str, CallSession] = TTLCache(clock=clock)

    def create(self, call_sid: str, caller: str = "") -> CallSession:
        """Create a fresh session, replacing any existing one for the same SID."""
        if call_sid in self._cache:
            logger.warning(f"[CONVERSATIONS] Replacing existing session - CallSid: {call_sid}")
        session = CallSession(
            call_sid=call_sid,
            caller=caller,
            started_at=self._cache.now(),
        )
        self._cache.put(call_sid, session)
        return session

    def get(self, call_sid: str) -> Optional[CallSession]:
        """Get an existing session."""
        return self._cache.get(call_sid)

    def get_or_create(self, call_sid: str) -> CallSession:
        """Get the session for a call, lazily creating one if it is missing."""
        session = self._cache.get(call_sid)
        if session is None:
            logger.info(f"[CONVERSATIONS] No session found, creating one - CallSid: {call_sid}")
            session = self.create(call_sid)
        return session

    def end(self, call_sid: str) -> bool:
        """Drop a session immediately. Returns True if one existed."""
        return self._cache.delete(call_sid)

    def sweep(self, max_age: float, now: Optional[float] = None) -> int:
        """Remove sessions older than ``max_age`` seconds."""
        return self._cache.sweep(max_age, now)

    def size(self) -> int:
        return self._cache.size()

    def __len__(self) -> int:
        return self._cache.size()

    def stats(self, timeout: float, now: Optional[float] = None) -> ConversationStats:
        """
        Summarize the stored sessions.

        A session counts as active while it is younger than ``timeout``;
        ``avg_messages`` is the total history length divided by the active
        count, rounded.
        """
        if now is None:
            now = self._cache.now()
        stats = ConversationStats()
        for session in self._cache.values():
            stats.total += 1
            if now - session.started_at < timeout:
                stats.active += 1
            stats.total_messages += len(session.history)
        if stats.active > 0:
            stats.avg_messages = round(stats.total_messages / stats.active)
        return stats
