"""Audio store for synthesized replies."""
import itertools
import time
from typing import Optional

from app.services.audio.models import AudioArtifact
from app.services.cache.ttl_cache import Clock, TTLCache


class AudioStore:
    """
    Short-lived holder of generated audio.

    Artifacts are never removed explicitly; they live until a sweep finds
    them older than the configured max age.
    """

    def __init__(self, clock: Clock = time.monotonic):
        self._cache: TTLCache[str, AudioArtifact] = TTLCache(clock=clock)
        self._counter = itertools.count()

    def _next_id(self) -> str:
        # Counter makes ids unique even when the millisecond repeats.
        return f"audio_{int(time.time() * 1000)}_{next(self._counter)}"

    def add(self, payload: bytes, content_type: str) -> AudioArtifact:
        """Store a new artifact under a freshly minted id."""
        audio_id = self._next_id()
        while audio_id in self._cache:
            audio_id = self._next_id()
        artifact = AudioArtifact(
            audio_id=audio_id,
            payload=payload,
            content_type=content_type,
            created_at=self._cache.now(),
        )
        self._cache.put(audio_id, artifact)
        return artifact

    def get(self, audio_id: str) -> Optional[AudioArtifact]:
        """Get an artifact, or None if it is unknown or already evicted."""
        return self._cache.get(audio_id)

    def sweep(self, max_age: float, now: Optional[float] = None) -> int:
        """Remove artifacts older than ``max_age`` seconds."""
        return self._cache.sweep(max_age, now)

    def size(self) -> int:
        return self._cache.size()

    def __len__(self) -> int:
        return self._cache.size()
