"""Unit tests for HttpEventSource."""
from unittest.mock import patch

import pytest
import responses
from requests.exceptions import RequestException, Timeout

from sources.http_source import HttpEventSource

FEED_URL = "https://events.example.org/feed.json"

FEED_EVENTS = [
    {
        'id': 10,
        'title': "Wiki Loves Earth",
        'description': "Photography contest for natural heritage.",
        'start_date': "2025-06-01",
        'end_date': "2025-06-30",
        'country': "Global",
        'event_type': "Competition",
        'participation_mode': "online",
        'link': "https://commons.wikimedia.org",
        'organizer': "Wikimedia Commons"
    },
    {
        'id': 11,
        'title': "Edit-a-thon Lisbon",
        'description': "Improve articles about Portuguese history.",
        'start_date': "2025-07-12",
        'country': "Portugal",
        'location': "Lisbon",
        'event_type': "Meetup",
        'participation_mode': "in-person",
        'link': "https://pt.wikipedia.org",
        'organizer': "Wikimedia Portugal"
    }
]


@pytest.fixture(autouse=True)
def no_sleep():
    """Skip backoff delays."""
    with patch('sources.http_source.time.sleep') as mock_sleep:
        yield mock_sleep


class TestHttpEventSource:
    """Test cases for HttpEventSource class."""

    @responses.activate
    def test_fetch_events_success(self):
        """Test fetching a list-shaped feed."""
        responses.add(responses.GET, FEED_URL, json=FEED_EVENTS, status=200)

        source = HttpEventSource(FEED_URL, timeout=30)
        events = source.fetch_events()

        assert [event.id for event in events] == [10, 11]
        assert events[0].title == "Wiki Loves Earth"
        assert events[1].location == "Lisbon"
        assert events[1].end_date == events[1].start_date

    @responses.activate
    def test_fetch_events_wrapped_feed(self):
        """Test fetching a feed wrapped in an events object."""
        responses.add(responses.GET, FEED_URL, json={'events': FEED_EVENTS}, status=200)

        events = HttpEventSource(FEED_URL).fetch_events()

        assert len(events) == 2

    @responses.activate
    def test_fetch_events_with_retry_success(self, no_sleep):
        """Test retry logic succeeds after initial failures."""
        responses.add(responses.GET, FEED_URL, body="Server Error", status=500)
        responses.add(responses.GET, FEED_URL, body="Server Error", status=500)
        responses.add(responses.GET, FEED_URL, json=FEED_EVENTS, status=200)

        events = HttpEventSource(FEED_URL).fetch_events()

        assert len(events) == 2
        assert len(responses.calls) == 3
        assert [c.args[0] for c in no_sleep.call_args_list] == [1, 2]

    @responses.activate
    def test_fetch_events_all_retries_fail(self):
        """Test that the last error propagates when all retries fail."""
        for _ in range(3):
            responses.add(responses.GET, FEED_URL, body="Server Error", status=500)

        source = HttpEventSource(FEED_URL)

        with pytest.raises(RequestException):
            source.fetch_events()

        assert len(responses.calls) == 3

    @responses.activate
    def test_fetch_events_timeout(self):
        """Test timeout handling."""
        for _ in range(3):
            responses.add(responses.GET, FEED_URL, body=Timeout("Request timed out"))

        with pytest.raises(Timeout):
            HttpEventSource(FEED_URL).fetch_events()

        assert len(responses.calls) == 3

    @responses.activate
    def test_fetch_events_unexpected_payload(self):
        """Test that a payload without an events list is rejected."""
        responses.add(responses.GET, FEED_URL, json={'status': 'ok'}, status=200)

        with pytest.raises(ValueError):
            HttpEventSource(FEED_URL).fetch_events()

    @responses.activate
    def test_malformed_json_not_retried(self, no_sleep):
        """Test that a non-JSON success response fails on the first attempt."""
        responses.add(responses.GET, FEED_URL, body="<html>maintenance</html>", status=200)

        with pytest.raises(ValueError) as exc_info:
            HttpEventSource(FEED_URL).fetch_events()

        assert not isinstance(exc_info.value, RequestException)
        assert "not valid JSON" in str(exc_info.value)
        assert len(responses.calls) == 1
        no_sleep.assert_not_called()

    @responses.activate
    def test_invalid_records_skipped(self):
        """Test that invalid records in the feed are dropped."""
        feed = FEED_EVENTS + [{'id': 12, 'start_date': "2025-01-01"}, "not a record"]
        responses.add(responses.GET, FEED_URL, json=feed, status=200)

        events = HttpEventSource(FEED_URL).fetch_events()

        assert [event.id for event in events] == [10, 11]

    def test_source_name_is_url(self):
        """Test that the source names itself after the feed URL."""
        assert HttpEventSource(FEED_URL).name == FEED_URL
