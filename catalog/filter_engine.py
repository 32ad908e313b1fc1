"""Multi-criteria filtering of an event set."""
import logging
from typing import List

from processor.models import EventRecord, FilteredResult, FilterState

logger = logging.getLogger(__name__)


class FilterEngine:
    """Evaluates a FilterState against every record of an event set.

    Each call recomputes the predicate over the whole set; nothing is
    memoized between calls.
    """

    def apply(self, events: List[EventRecord], state: FilterState) -> FilteredResult:
        """
        Compute the visible subset of an event set.

        Args:
            events: Full event set in load order
            state: Current filter criteria

        Returns:
            FilteredResult with records in their original order
        """
        search_term = (state.search_text or '').lower()
        visible = [
            event for event in events
            if self._matches(event, state, search_term)
        ]

        logger.debug(
            f"Filter {state} matched {len(visible)} of {len(events)} events"
        )
        return FilteredResult(
            visible=visible,
            visible_count=len(visible),
            total_count=len(events)
        )

    def matches(self, event: EventRecord, state: FilterState) -> bool:
        """Return True if a single record satisfies every criterion."""
        return self._matches(event, state, (state.search_text or '').lower())

    def _matches(self, event: EventRecord, state: FilterState, search_term: str) -> bool:
        matches_search = (
            not search_term or
            search_term in event.title.lower() or
            search_term in event.description.lower()
        )
        matches_country = not state.country or event.country == state.country
        matches_type = not state.event_type or event.event_type == state.event_type
        matches_participation = (
            not state.participation_mode or
            event.participation_mode == state.participation_mode
        )

        return (
            matches_search and
            matches_country and
            matches_type and
            matches_participation
        )
