"""Event processor for validating and normalizing raw event records."""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from processor.models import EventRecord, ParticipationMode

logger = logging.getLogger(__name__)


class EventProcessor:
    """Processor turning raw event dictionaries into EventRecord objects."""

    MAX_TITLE_LENGTH = 200
    MAX_DESCRIPTION_LENGTH = 2000

    # Spellings seen in feeds that mean in-person attendance
    PARTICIPATION_ALIASES = {
        'in person': ParticipationMode.IN_PERSON,
        'inperson': ParticipationMode.IN_PERSON,
        'in_person': ParticipationMode.IN_PERSON,
        'offline': ParticipationMode.IN_PERSON,
    }

    def process_records(self, raw_records: List[Dict[str, Any]]) -> List[EventRecord]:
        """
        Validate and normalize raw event records.

        Invalid records and records repeating an already seen id are
        skipped. Load order is preserved.

        Args:
            raw_records: List of raw event dictionaries from a data source

        Returns:
            List of valid EventRecord objects
        """
        records = []
        seen_ids = set()

        for raw in raw_records:
            try:
                record = self._process_single_record(raw)
            except Exception as e:
                logger.warning(
                    f"Failed to process event record {raw.get('id')!r}: {e}"
                )
                continue

            if record is None:
                continue

            if record.id in seen_ids:
                logger.warning(
                    f"Skipping event '{record.title}' with duplicate id {record.id!r}"
                )
                continue

            seen_ids.add(record.id)
            records.append(record)

        logger.info(
            f"Processed {len(records)} valid events out of "
            f"{len(raw_records)} total records"
        )
        return records

    def _process_single_record(self, raw: Dict[str, Any]) -> Optional[EventRecord]:
        """
        Process a single raw record.

        Args:
            raw: Raw event dictionary

        Returns:
            EventRecord object or None if validation fails
        """
        if not self._validate_required_fields(raw):
            return None

        title = self._clean(raw.get('title'))

        start_date = self._normalize_date(raw['start_date'])
        if start_date is None:
            logger.warning(
                f"Invalid start date for event '{title}': {raw['start_date']}"
            )
            return None

        end_date = start_date
        if raw.get('end_date'):
            end_date = self._normalize_date(raw['end_date'])
            if end_date is None:
                logger.warning(
                    f"Invalid end date for event '{title}': {raw['end_date']}"
                )
                return None

        if end_date < start_date:
            logger.warning(
                f"Event '{title}' ends ({end_date}) before it starts ({start_date})"
            )
            return None

        return EventRecord(
            id=raw['id'],
            title=title[:self.MAX_TITLE_LENGTH],
            description=self._clean(raw.get('description'))[:self.MAX_DESCRIPTION_LENGTH],
            start_date=start_date,
            end_date=end_date,
            country=self._clean(raw.get('country')),
            location=self._clean(raw.get('location')) or None,
            event_type=self._clean(raw.get('event_type')),
            participation_mode=self.normalize_participation(
                raw.get('participation_mode', raw.get('participation_options'))
            ),
            link=self._clean(raw.get('link')),
            organizer=self._clean(raw.get('organizer'))
        )

    def _validate_required_fields(self, raw: Dict[str, Any]) -> bool:
        """
        Validate that required fields are present and non-empty.

        Args:
            raw: Raw event dictionary

        Returns:
            True if valid, False otherwise
        """
        if raw.get('id') is None or raw.get('id') == '':
            logger.warning("Event record missing required field: id")
            return False

        if not self._clean(raw.get('title')):
            logger.warning(f"Event {raw['id']!r} missing required field: title")
            return False

        if not raw.get('start_date'):
            logger.warning(f"Event {raw['id']!r} missing required field: start_date")
            return False

        return True

    def _normalize_date(self, value: Union[str, date]) -> Optional[date]:
        """
        Parse a calendar date.

        Args:
            value: Date string in one of several formats, or a date

        Returns:
            date object or None if parsing fails
        """
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value

        date_formats = [
            '%Y-%m-%d',      # ISO 8601
            '%m/%d/%Y',      # US format
            '%m-%d-%Y',      # US format with dashes
            '%B %d, %Y',     # Full month name
            '%b %d, %Y',     # Abbreviated month name
            '%d/%m/%Y',      # European format
            '%Y/%m/%d',      # Alternative ISO format
        ]

        text = str(value).strip()
        # Full ISO timestamps carry the date in the first ten characters
        if len(text) > 10 and text[4] == '-' and text[10] in 'T ':
            text = text[:10]

        for fmt in date_formats:
            try:
                return datetime.strptime(text, fmt).date()
            except ValueError:
                continue

        return None

    def normalize_participation(
        self, value: Optional[str]
    ) -> Union[ParticipationMode, str]:
        """
        Map a participation value onto ParticipationMode.

        Unrecognized values are returned as the stripped raw string so
        they can still be displayed and filtered on.

        Args:
            value: Raw participation value

        Returns:
            ParticipationMode member or the raw string
        """
        text = self._clean(value)
        key = text.lower()

        try:
            return ParticipationMode(key)
        except ValueError:
            pass

        if key in self.PARTICIPATION_ALIASES:
            return self.PARTICIPATION_ALIASES[key]

        if text:
            logger.warning(f"Unrecognized participation mode: {text!r}")
        return text

    @staticmethod
    def _clean(value: Any) -> str:
        if value is None:
            return ''
        return str(value).strip()
