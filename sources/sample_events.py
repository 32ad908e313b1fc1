"""Built-in sample events used when no live feed is configured."""
import logging
from typing import List

from processor.event_processor import EventProcessor
from processor.models import EventRecord

logger = logging.getLogger(__name__)


SAMPLE_EVENTS = [
    {
        'id': 1,
        'title': "Wiki Loves Monuments Photography Contest",
        'description': "Global photography contest focusing on monuments and cultural heritage sites across the world.",
        'start_date': "2025-09-01",
        'end_date': "2025-09-30",
        'country': "Global",
        'location': "Worldwide",
        'event_type': "Competition",
        'participation_mode': "online",
        'link': "https://commons.wikimedia.org/wiki/Commons:Wiki_Loves_Monuments",
        'organizer': "Wikimedia Commons"
    },
    {
        'id': 2,
        'title': "WikiData Tutorial Workshop",
        'description': "Learn how to contribute structured data to Wikidata, the free knowledge base.",
        'start_date': "2025-08-25",
        'end_date': "2025-08-25",
        'country': "Germany",
        'location': "Berlin",
        'event_type': "Workshop",
        'participation_mode': "hybrid",
        'link': "https://www.wikidata.org",
        'organizer': "Wikimedia Deutschland"
    },
    {
        'id': 3,
        'title': "Wikipedia Writing Marathon",
        'description': "Join fellow editors in a day-long writing session to improve Wikipedia articles.",
        'start_date': "2025-08-30",
        'end_date': "2025-08-30",
        'country': "United States",
        'location': "San Francisco",
        'event_type': "Meetup",
        'participation_mode': "in-person",
        'link': "https://en.wikipedia.org",
        'organizer': "Wikimedia Foundation"
    },
    {
        'id': 4,
        'title': "Wikimania 2025 Conference",
        'description': "Annual international conference celebrating Wikipedia and the broader Wikimedia movement.",
        'start_date': "2025-08-15",
        'end_date': "2025-08-17",
        'country': "Singapore",
        'location': "Singapore",
        'event_type': "Conference",
        'participation_mode': "hybrid",
        'link': "https://wikimania.wikimedia.org",
        'organizer': "Wikimedia Foundation"
    },
    {
        'id': 5,
        'title': "Commons Photo Workshop",
        'description': "Learn photography techniques and how to contribute high-quality images to Wikimedia Commons.",
        'start_date': "2025-09-05",
        'end_date': "2025-09-05",
        'country': "France",
        'location': "Paris",
        'event_type': "Workshop",
        'participation_mode': "in-person",
        'link': "https://commons.wikimedia.org",
        'organizer': "Wikimedia France"
    },
    {
        'id': 6,
        'title': "Edit-a-thon: Climate Change",
        'description': "Collaborative editing event focused on improving climate change-related articles.",
        'start_date': "2025-09-12",
        'end_date': "2025-09-12",
        'country': "United Kingdom",
        'location': "London",
        'event_type': "Meetup",
        'participation_mode': "online",
        'link': "https://en.wikipedia.org",
        'organizer': "Wikimedia UK"
    },
    {
        'id': 7,
        'title': "MediaWiki Development Hackathon",
        'description': "Technical event for developers working on MediaWiki software and related tools.",
        'start_date': "2025-09-20",
        'end_date': "2025-09-22",
        'country': "Netherlands",
        'location': "Amsterdam",
        'event_type': "Hackathon",
        'participation_mode': "hybrid",
        'link': "https://www.mediawiki.org",
        'organizer': "Wikimedia Foundation"
    },
    {
        'id': 8,
        'title': "Wikipedia Education Training",
        'description': "Training session for educators on how to integrate Wikipedia into classroom activities.",
        'start_date': "2025-08-28",
        'end_date': "2025-08-28",
        'country': "Canada",
        'location': "Toronto",
        'event_type': "Training",
        'participation_mode': "hybrid",
        'link': "https://outreach.wikimedia.org/wiki/Education",
        'organizer': "Wikimedia Canada"
    }
]


class SampleEventSource:
    """Event source serving the static sample events."""

    name = "sample data"

    def __init__(self, processor: EventProcessor = None):
        self.processor = processor or EventProcessor()

    def fetch_events(self) -> List[EventRecord]:
        logger.info(f"Producing {len(SAMPLE_EVENTS)} sample events")
        return self.processor.process_records(SAMPLE_EVENTS)
