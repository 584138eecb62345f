"""Generic in-memory cache with age-based sweeping."""
import time
from typing import Callable, Dict, Generic, Iterator, List, Optional, Tuple, TypeVar

K = TypeVar("K")
V = TypeVar("V")

Clock = Callable[[], float]


class TTLCache(Generic[K, V]):
    """
    Mapping from key to (value, inserted_at).

    Reads never touch the timestamp: an entry ages from the moment it was
    put, no matter how often it is read. Entries only disappear through
    ``delete`` or ``sweep``.

    The cache is not thread-safe. All access is expected to happen on a
    single event loop; a threaded caller must wrap it in a lock.
    """

    def __init__(self, clock: Clock = time.monotonic):
        self._clock = clock
        self._entries: Dict[K, Tuple[V, float]] = {}

    def now(self) -> float:
        """Current time according to the cache clock."""
        return self._clock()

    def put(self, key: K, value: V) -> None:
        """Insert or overwrite ``key``, stamping the current time."""
        self._entries[key] = (value, self._clock())

    def get(self, key: K) -> Optional[V]:
        """Return the value for ``key`` or None if absent."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        return entry[0]

    def inserted_at(self, key: K) -> Optional[float]:
        entry = self._entries.get(key)
        return entry[1] if entry else None

    def delete(self, key: K) -> bool:
        """Remove ``key``. Returns True if an entry was removed."""
        return self._entries.pop(key, None) is not None

    def size(self) -> int:
        return len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def values(self) -> Iterator[V]:
        """Iterate over a snapshot of the live values."""
        return iter([value for value, _ in list(self._entries.values())])

    def sweep(self, max_age: float, now: Optional[float] = None) -> int:
        """
        Delete every entry older than ``max_age`` seconds.

        Args:
            max_age: Maximum age in seconds. Entries exactly ``max_age`` old survive.
            now: Reference time; defaults to the cache clock.

        Returns:
            Number of entries removed
        """
        if now is None:
            now = self._clock()
        expired: List[K] = [
            key
            for key, (_, inserted_at) in self._entries.items()
            if now - inserted_at > max_age
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
