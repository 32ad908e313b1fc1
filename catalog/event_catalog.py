"""Application state for the events catalog and its inbound operations."""
import dataclasses
import logging
from typing import List, Optional, Protocol

from catalog.cache import EventCache
from catalog.facets import derive_facets
from catalog.filter_engine import FilterEngine
from catalog.loader import EventLoader, EventSource, LoadFailure
from processor.models import (
    EventRecord,
    FacetIndex,
    FilteredResult,
    FilterState,
    LifecycleSignal,
)

logger = logging.getLogger(__name__)


class CatalogView(Protocol):
    """Rendering side of the catalog."""

    def show_lifecycle(self, signal: LifecycleSignal) -> None:
        ...

    def show_facets(self, facets: FacetIndex) -> None:
        ...

    def show_results(self, result: FilteredResult) -> None:
        ...


class EventCatalog:
    """Owns the loaded events, facets and filter state for one view.

    After a failed load the last good event set is kept, so filter
    changes keep working against it while the view shows the error.
    """

    def __init__(
        self,
        source: EventSource,
        view: CatalogView,
        cache: Optional[EventCache] = None,
        filter_engine: Optional[FilterEngine] = None
    ):
        self.view = view
        self.cache = cache if cache is not None else EventCache()
        self.loader = EventLoader(source, self.cache, view.show_lifecycle)
        self.filter_engine = filter_engine or FilterEngine()

        self.events: List[EventRecord] = []
        self.facets = FacetIndex()
        self.filter_state = FilterState()
        self.result: Optional[FilteredResult] = None

    def start(self) -> bool:
        """Run the initial load. Returns True when events were loaded."""
        logger.info("Starting events catalog")
        return self.load()

    def load(self) -> bool:
        """
        Load events (cache first) and recompute facets and results.

        Returns:
            True on success, False if the load failed
        """
        try:
            events = self.loader.load()
        except LoadFailure:
            return False
        self._process_events(events)
        return True

    def on_refresh_requested(self) -> bool:
        """Force a live fetch, bypassing any fresh cache entry."""
        try:
            events = self.loader.refresh()
        except LoadFailure:
            return False
        self._process_events(events)
        return True

    def on_search_text_changed(self, text: Optional[str]) -> FilteredResult:
        return self._update_filter(search_text=text or '')

    def on_country_selected(self, value: Optional[str]) -> FilteredResult:
        return self._update_filter(country=value or None)

    def on_type_selected(self, value: Optional[str]) -> FilteredResult:
        return self._update_filter(event_type=value or None)

    def on_participation_selected(self, value: Optional[str]) -> FilteredResult:
        return self._update_filter(participation_mode=value or None)

    def on_clear_filters_requested(self) -> FilteredResult:
        logger.info("Clearing all filters")
        return self.set_filter_state(FilterState())

    def set_filter_state(self, state: FilterState) -> FilteredResult:
        """Replace every criterion at once and re-filter."""
        self.filter_state = state
        return self.refilter()

    def refilter(self) -> FilteredResult:
        """Evaluate the current filter state over the full event set."""
        self.result = self.filter_engine.apply(self.events, self.filter_state)
        self.view.show_results(self.result)
        return self.result

    def _update_filter(self, **changes) -> FilteredResult:
        self.filter_state = dataclasses.replace(self.filter_state, **changes)
        return self.refilter()

    def _process_events(self, events: List[EventRecord]) -> None:
        self.events = events
        self.facets = derive_facets(events)
        logger.info(
            f"Derived {len(self.facets.countries)} countries and "
            f"{len(self.facets.event_types)} event types from {len(events)} events"
        )
        self.view.show_facets(self.facets)
        self.refilter()
