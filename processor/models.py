"""Data models for the events catalog."""
from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional, Union


class ParticipationMode(str, Enum):
    """How an event can be attended."""
    ONLINE = 'online'
    IN_PERSON = 'in-person'
    HYBRID = 'hybrid'


@dataclass(frozen=True)
class EventRecord:
    """A single community event, immutable once loaded.

    ``participation_mode`` holds a ParticipationMode for known values and
    the raw string for anything else.
    """
    id: Union[int, str]
    title: str
    description: str
    start_date: date
    end_date: date
    country: str
    location: Optional[str]
    event_type: str
    participation_mode: Union[ParticipationMode, str]
    link: str
    organizer: str


@dataclass(frozen=True)
class FacetIndex:
    """Distinct filter values derived from a full event set."""
    countries: List[str] = field(default_factory=list)
    event_types: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class FilterState:
    """Current filter criteria. None or empty string means "any"."""
    search_text: str = ''
    country: Optional[str] = None
    event_type: Optional[str] = None
    participation_mode: Optional[str] = None


@dataclass(frozen=True)
class FilteredResult:
    """Visible subset of an event set for one filter pass."""
    visible: List[EventRecord]
    visible_count: int
    total_count: int


@dataclass(frozen=True)
class Loading:
    """Lifecycle signal: a fetch is in progress."""


@dataclass(frozen=True)
class Loaded:
    """Lifecycle signal: events are available."""
    events: List[EventRecord]
    loaded_at: Optional[float] = None


@dataclass(frozen=True)
class LoadError:
    """Lifecycle signal: the fetch failed."""
    message: str


LifecycleSignal = Union[Loading, Loaded, LoadError]
