"""Event source reading a JSON events feed over HTTP."""
import logging
import time
from typing import Any, Dict, List

import requests

from processor.event_processor import EventProcessor
from processor.models import EventRecord

logger = logging.getLogger(__name__)


class HttpEventSource:
    """Fetches events from a JSON feed.

    The feed is either a list of event objects or an object with an
    ``events`` list.
    """

    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(self, url: str, timeout: int = 30, processor: EventProcessor = None):
        """
        Initialize the HTTP event source.

        Args:
            url: URL of the JSON events feed
            timeout: HTTP request timeout in seconds (default: 30)
            processor: EventProcessor used to normalize records
        """
        self.url = url
        self.timeout = timeout
        self.processor = processor or EventProcessor()
        self.name = url

    def fetch_events(self) -> List[EventRecord]:
        """
        Fetch and normalize events from the feed.

        Returns:
            List of EventRecord objects

        Raises:
            requests.RequestException: If all retry attempts fail
            ValueError: If the feed payload is not an events list
        """
        response = self._fetch_feed()

        # Malformed bodies are not retried
        try:
            payload = response.json()
        except ValueError as e:
            raise ValueError(f"Events feed at {self.url} is not valid JSON: {e}") from e

        raw_records = self._extract_records(payload)

        events = self.processor.process_records(raw_records)
        logger.info(f"Successfully fetched {len(events)} events from {self.url}")
        return events

    def _fetch_feed(self) -> requests.Response:
        """
        Fetch the feed with retry logic.

        Returns:
            Successful HTTP response

        Raises:
            requests.RequestException: If all retry attempts fail
        """
        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(
                    f"Fetching events feed (attempt {attempt + 1}/{self.MAX_RETRIES})"
                )
                response = requests.get(
                    self.url,
                    headers={'Accept': 'application/json'},
                    timeout=self.timeout
                )
                response.raise_for_status()
                return response

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    # Exponential backoff
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. Last error: {e}"
                    )
                    raise

    def _extract_records(self, payload: Any) -> List[Dict[str, Any]]:
        if isinstance(payload, dict):
            payload = payload.get('events')

        if not isinstance(payload, list):
            raise ValueError(
                f"Events feed at {self.url} did not contain an events list"
            )

        return [record for record in payload if isinstance(record, dict)]
