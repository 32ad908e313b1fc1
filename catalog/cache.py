"""In-memory cache for the last successfully loaded event set."""
import logging
import time
from typing import Callable, List, Optional

from processor.models import EventRecord

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 300  # 5 minutes


class EventCache:
    """Holds at most one event set together with the time it was loaded.

    Expiry is lazy: an entry older than the TTL is still held but
    ``get()`` reports it as absent.
    """

    def __init__(
        self,
        ttl_seconds: float = CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        """
        Initialize an empty cache.

        Args:
            ttl_seconds: Time-to-live for a cached entry (default: 300)
            clock: Callable returning the current time in seconds
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._events: Optional[List[EventRecord]] = None
        self._loaded_at: Optional[float] = None

    @property
    def loaded_at(self) -> Optional[float]:
        """Timestamp of the stored entry, or None when empty."""
        return self._loaded_at

    def get(self) -> Optional[List[EventRecord]]:
        """
        Return the cached event set if it is still fresh.

        Returns:
            Cached list of events, or None if empty or expired
        """
        if not self._events or self._loaded_at is None:
            logger.debug("Cache miss: no cached events")
            return None

        age = self._clock() - self._loaded_at
        if age >= self.ttl_seconds:
            logger.debug(f"Cache miss: entry expired {age:.3f}s after load")
            return None

        logger.debug(f"Cache hit: {len(self._events)} events, age {age:.3f}s")
        return self._events

    def put(self, events: List[EventRecord]) -> None:
        """Store an event set stamped with the current time."""
        self._events = events
        self._loaded_at = self._clock()

    def invalidate(self) -> None:
        """Drop the cached entry."""
        self._events = None
        self._loaded_at = None
