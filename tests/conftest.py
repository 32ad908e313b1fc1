"""Shared fixtures for catalog tests."""
from datetime import date

import pytest

from processor.models import EventRecord, ParticipationMode
from sources.sample_events import SampleEventSource


class FakeClock:
    """Controllable clock returning seconds."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class RecordingView:
    """View that records everything the catalog emits."""

    def __init__(self):
        self.signals = []
        self.facets = []
        self.results = []

    def show_lifecycle(self, signal):
        self.signals.append(signal)

    def show_facets(self, facets):
        self.facets.append(facets)

    def show_results(self, result):
        self.results.append(result)


def make_event(event_id, **overrides):
    """Build an EventRecord with sensible defaults."""
    fields = {
        'id': event_id,
        'title': f"Event {event_id}",
        'description': f"Description for event {event_id}",
        'start_date': date(2025, 9, 1),
        'end_date': date(2025, 9, 1),
        'country': "Germany",
        'location': "Berlin",
        'event_type': "Workshop",
        'participation_mode': ParticipationMode.ONLINE,
        'link': f"https://example.com/events/{event_id}",
        'organizer': "Example Org"
    }
    fields.update(overrides)
    return EventRecord(**fields)


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def recording_view():
    return RecordingView()


@pytest.fixture
def sample_events():
    """The eight built-in sample events."""
    return SampleEventSource().fetch_events()
