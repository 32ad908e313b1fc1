"""Loader producing the event set, consulting the cache first."""
import logging
import time
from typing import Callable, List, Protocol

from catalog.cache import EventCache
from processor.models import (
    EventRecord,
    LifecycleSignal,
    Loaded,
    LoadError,
    Loading,
)

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    """Anything that can produce an event set or fail trying."""

    name: str

    def fetch_events(self) -> List[EventRecord]:
        ...


class LoadFailure(Exception):
    """Raised when the data source did not produce events."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class EventLoader:
    """Loads events from a source, memoized through an EventCache."""

    ERROR_MESSAGE = "Failed to load events from {source}. Please try again later."

    def __init__(
        self,
        source: EventSource,
        cache: EventCache,
        on_signal: Callable[[LifecycleSignal], None]
    ):
        """
        Initialize the loader.

        Args:
            source: Data source with a fetch_events() method
            cache: Cache consulted before fetching
            on_signal: Callback receiving lifecycle signals
        """
        self.source = source
        self.cache = cache
        self.on_signal = on_signal

    def load(self) -> List[EventRecord]:
        """
        Return the event set, from cache when it is still fresh.

        Returns:
            List of EventRecord objects

        Raises:
            LoadFailure: If the source fails on a cache miss
        """
        cached = self.cache.get()
        if cached is not None:
            logger.info(f"Serving {len(cached)} events from cache")
            self.on_signal(Loaded(events=cached, loaded_at=self.cache.loaded_at))
            return cached

        return self._fetch()

    def refresh(self) -> List[EventRecord]:
        """
        Drop the cache and fetch from the source unconditionally.

        Returns:
            List of EventRecord objects

        Raises:
            LoadFailure: If the source fails
        """
        logger.info("Refresh requested, invalidating cache")
        self.cache.invalidate()
        return self._fetch()

    def _fetch(self) -> List[EventRecord]:
        self.on_signal(Loading())

        start_time = time.time()
        try:
            logger.info(f"Fetching events from {self.source.name}")
            events = self.source.fetch_events()
        except Exception as e:
            logger.error(
                f"Error loading events from {self.source.name}: {e}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            message = self.ERROR_MESSAGE.format(source=self.source.name)
            self.on_signal(LoadError(message=message))
            raise LoadFailure(message) from e

        self.cache.put(events)
        logger.info(
            f"Loaded {len(events)} events from {self.source.name} "
            f"in {time.time() - start_time:.2f}s"
        )
        self.on_signal(Loaded(events=events, loaded_at=self.cache.loaded_at))
        return events
