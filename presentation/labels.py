"""Display labels and badge styling for event fields."""
from datetime import date
from typing import Optional, Tuple, Union

from processor.models import ParticipationMode

DEFAULT_BADGE_CLASS = 'bg-secondary'

PARTICIPATION_BADGES = {
    ParticipationMode.ONLINE: ('Online', 'participation-online'),
    ParticipationMode.IN_PERSON: ('In Person', 'participation-in-person'),
    ParticipationMode.HYBRID: ('Hybrid', 'participation-hybrid'),
}

EVENT_TYPE_BADGES = {
    'Conference': 'bg-primary',
    'Workshop': 'bg-success',
    'Meetup': 'bg-warning',
    'Hackathon': 'bg-danger',
    'Training': 'bg-info',
    'Competition': 'bg-dark',
}

PARTICIPATION_OPTIONS = [
    (mode.value, PARTICIPATION_BADGES[mode][0]) for mode in ParticipationMode
]


def participation_badge(mode: Union[ParticipationMode, str, None]) -> Tuple[str, str]:
    """
    Look up the label and CSS class for a participation mode.

    Args:
        mode: ParticipationMode or raw participation string

    Returns:
        (label, css_class); unknown values give (raw value, neutral class)
    """
    try:
        return PARTICIPATION_BADGES[ParticipationMode(mode)]
    except ValueError:
        return mode or '', DEFAULT_BADGE_CLASS


def event_type_badge(event_type: Optional[str]) -> Tuple[str, str]:
    """Return (label, css_class) for an event type."""
    return event_type or '', EVENT_TYPE_BADGES.get(event_type, DEFAULT_BADGE_CLASS)


def format_event_date(value: Optional[date]) -> str:
    """Format a date the way en-US locales show a medium date, e.g. "Aug 5, 2025"."""
    if value is None:
        return 'Date TBD'
    return f"{value:%b} {value.day}, {value.year}"


def format_date_range(start: Optional[date], end: Optional[date]) -> str:
    if end is None or end == start:
        return format_event_date(start)
    return f"{format_event_date(start)} - {format_event_date(end)}"
