"""Facet derivation over a full event set."""
from typing import Iterable

from processor.models import EventRecord, FacetIndex


def derive_facets(events: Iterable[EventRecord]) -> FacetIndex:
    """
    Collect the distinct countries and event types of an event set.

    Empty values are left out. Both lists are sorted ascending for display.

    Args:
        events: The full loaded event set

    Returns:
        FacetIndex with sorted, de-duplicated values
    """
    countries = set()
    event_types = set()

    for event in events:
        if event.country:
            countries.add(event.country)
        if event.event_type:
            event_types.add(event.event_type)

    return FacetIndex(
        countries=sorted(countries),
        event_types=sorted(event_types)
    )
