"""Unit tests for EventCatalog, including the end-to-end sample flow."""
from unittest.mock import Mock

import pytest

from catalog.cache import EventCache
from catalog.event_catalog import EventCatalog
from conftest import make_event
from processor.models import FacetIndex, FilterState, Loaded, LoadError, Loading
from sources.sample_events import SampleEventSource


def ids(result):
    return [event.id for event in result.visible]


@pytest.fixture
def catalog(recording_view, fake_clock):
    """Catalog over the sample source with a controllable clock."""
    return EventCatalog(
        source=SampleEventSource(),
        view=recording_view,
        cache=EventCache(clock=fake_clock)
    )


class TestEventCatalog:
    """Test cases for EventCatalog class."""

    def test_start_emits_lifecycle_facets_and_results(self, catalog, recording_view):
        """Test the initial load pipeline."""
        assert catalog.start() is True

        assert isinstance(recording_view.signals[0], Loading)
        assert isinstance(recording_view.signals[1], Loaded)
        assert len(recording_view.signals[1].events) == 8

        facets = recording_view.facets[-1]
        assert "Germany" in facets.countries
        assert facets.event_types[0] == "Competition"

        result = recording_view.results[-1]
        assert result.visible_count == 8
        assert result.total_count == 8

    def test_search_text_wiki(self, catalog):
        """Test searching the sample set for "wiki"."""
        catalog.start()

        result = catalog.on_search_text_changed("Wiki")

        assert ids(result)[:3] == [1, 2, 3]
        assert 6 not in ids(result)
        assert catalog.filter_state.search_text == "Wiki"

    def test_country_germany_returns_event_two(self, catalog):
        """Test the Germany country filter on the sample set."""
        catalog.start()

        result = catalog.on_country_selected("Germany")

        assert ids(result) == [2]
        assert result.total_count == 8

    def test_filters_accumulate(self, catalog):
        """Test that each inbound change keeps the other criteria."""
        catalog.start()

        catalog.on_type_selected("Workshop")
        result = catalog.on_participation_selected("in-person")

        assert ids(result) == [5]
        assert catalog.filter_state == FilterState(
            event_type="Workshop", participation_mode="in-person"
        )

    def test_selecting_none_unsets_criterion(self, catalog):
        """Test that None returns a criterion to "any"."""
        catalog.start()
        catalog.on_country_selected("Germany")

        result = catalog.on_country_selected(None)

        assert result.visible_count == 8
        assert catalog.filter_state.country is None

    def test_clear_filters_returns_full_set(self, catalog, sample_events):
        """Test that clearing filters shows every event in order."""
        catalog.start()
        catalog.on_search_text_changed("wiki")
        catalog.on_country_selected("Germany")
        catalog.on_type_selected("Workshop")
        catalog.on_participation_selected("hybrid")

        result = catalog.on_clear_filters_requested()

        assert catalog.filter_state == FilterState()
        assert result.visible == sample_events

    def test_filter_change_does_not_recompute_facets(self, catalog, recording_view):
        """Test that facets are only derived on load."""
        catalog.start()

        catalog.on_search_text_changed("wiki")
        catalog.on_country_selected("France")

        assert len(recording_view.facets) == 1

    def test_empty_result_is_reported(self, catalog, recording_view):
        """Test that a filter with no matches emits an empty result."""
        catalog.start()

        catalog.on_search_text_changed("no such event anywhere")

        assert recording_view.results[-1].visible == []
        assert recording_view.results[-1].visible_count == 0

    def test_second_load_served_from_cache(self, recording_view, fake_clock):
        """Test that a repeat load within the TTL does not refetch."""
        source = Mock()
        source.name = "mock"
        source.fetch_events.return_value = [make_event(1)]
        catalog = EventCatalog(source, recording_view, cache=EventCache(clock=fake_clock))

        catalog.load()
        catalog.load()

        source.fetch_events.assert_called_once()
        assert len(recording_view.facets) == 2

    def test_refresh_refetches_and_rederives(self, recording_view, fake_clock):
        """Test that refresh replaces events and facets."""
        source = Mock()
        source.name = "mock"
        source.fetch_events.side_effect = [
            [make_event(1, country="Spain")],
            [make_event(2, country="Italy"), make_event(3, country="Chile")],
        ]
        catalog = EventCatalog(source, recording_view, cache=EventCache(clock=fake_clock))
        catalog.start()

        assert catalog.on_refresh_requested() is True

        assert source.fetch_events.call_count == 2
        assert catalog.facets == FacetIndex(countries=["Chile", "Italy"], event_types=["Workshop"])
        assert catalog.result.total_count == 2

    def test_failed_refresh_keeps_previous_events(self, recording_view, fake_clock):
        """Test that a failed refresh shows an error but keeps the stale set."""
        source = Mock()
        source.name = "mock"
        source.fetch_events.side_effect = [
            [make_event(1, country="Spain"), make_event(2, country="Italy")],
            ConnectionError("offline"),
        ]
        catalog = EventCatalog(source, recording_view, cache=EventCache(clock=fake_clock))
        catalog.start()

        assert catalog.on_refresh_requested() is False

        assert isinstance(recording_view.signals[-1], LoadError)
        assert len(recording_view.facets) == 1
        assert [event.id for event in catalog.events] == [1, 2]

        result = catalog.on_country_selected("Italy")
        assert ids(result) == [2]

    def test_initial_load_failure(self, recording_view):
        """Test that a failed first load emits no facets or results."""
        source = Mock()
        source.name = "mock"
        source.fetch_events.side_effect = TimeoutError("slow")
        catalog = EventCatalog(source, recording_view)

        assert catalog.start() is False

        assert isinstance(recording_view.signals[-1], LoadError)
        assert recording_view.facets == []
        assert recording_view.results == []
        assert catalog.events == []

    def test_set_filter_state_replaces_all_criteria(self, catalog):
        """Test replacing the whole filter state at once."""
        catalog.start()
        catalog.on_search_text_changed("wiki")

        result = catalog.set_filter_state(FilterState(country="Canada"))

        assert ids(result) == [8]
        assert catalog.filter_state.search_text == ''
