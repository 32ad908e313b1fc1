"""HTML rendering of the events catalog."""
import logging
from datetime import datetime
from typing import Dict, Optional

from bs4 import BeautifulSoup

from presentation.labels import (
    PARTICIPATION_OPTIONS,
    event_type_badge,
    format_date_range,
    participation_badge,
)
from processor.models import (
    EventRecord,
    FacetIndex,
    FilteredResult,
    FilterState,
    LifecycleSignal,
    Loaded,
    LoadError,
    Loading,
)

logger = logging.getLogger(__name__)

PAGE_SKELETON = """<!DOCTYPE html>
<html lang="en">
<head><meta charset="utf-8"><title>Community Events</title></head>
<body><div class="container"></div></body>
</html>"""


class HtmlCatalogView:
    """Catalog view that remembers the latest state and renders it as HTML."""

    def __init__(self, title: str = "Community Events"):
        self.title = title
        self.lifecycle: LifecycleSignal = Loading()
        self.facets = FacetIndex()
        self.result: Optional[FilteredResult] = None
        self.filter_state = FilterState()
        self.total_events = 0
        self.last_updated: Optional[float] = None
        # Document of the most recent render_page() call
        self.soup: Optional[BeautifulSoup] = None

    def show_lifecycle(self, signal: LifecycleSignal) -> None:
        self.lifecycle = signal
        if isinstance(signal, Loaded):
            self.total_events = len(signal.events)
            self.last_updated = signal.loaded_at
        elif isinstance(signal, LoadError):
            logger.warning(f"Showing error state: {signal.message}")

    def show_facets(self, facets: FacetIndex) -> None:
        self.facets = facets

    def show_results(self, result: FilteredResult) -> None:
        self.result = result

    @property
    def state_name(self) -> str:
        if isinstance(self.lifecycle, LoadError):
            return 'error'
        if isinstance(self.lifecycle, Loaded):
            return 'loaded'
        return 'loading'

    def render_page(self, filter_state: Optional[FilterState] = None) -> str:
        """
        Render the full catalog page.

        Args:
            filter_state: Criteria to mark as selected in the filter controls

        Returns:
            HTML document as a string
        """
        self.filter_state = filter_state or FilterState()
        self.soup = BeautifulSoup(PAGE_SKELETON, 'html.parser')
        self.soup.title.string = self.title
        container = self.soup.find('div', class_='container')

        container.append(self._tag('h1', self.title))
        container.append(self._render_loading())
        container.append(self._render_error())
        container.append(self._render_main())

        return str(self.soup)

    def _tag(self, name: str, text: Optional[str] = None, attrs: Optional[Dict[str, str]] = None):
        tag = self.soup.new_tag(name, attrs=attrs or {})
        if text is not None:
            tag.string = text
        return tag

    def _section(self, element_id: str, visible: bool):
        return self._tag('div', attrs={
            'id': element_id,
            'style': 'display: block' if visible else 'display: none'
        })

    def _render_loading(self):
        section = self._section('loadingIndicator', self.state_name == 'loading')
        section.append(self._tag('p', 'Loading events...'))
        return section

    def _render_error(self):
        section = self._section('errorMessage', self.state_name == 'error')
        section['class'] = 'alert alert-danger'
        message = self.lifecycle.message if isinstance(self.lifecycle, LoadError) else ''
        section.append(self._tag('p', message, {'id': 'errorText'}))
        section.append(self._tag('a', 'Try again', {'href': '?refresh=1', 'class': 'btn btn-primary'}))
        return section

    def _render_main(self):
        section = self._section('mainContent', self.state_name == 'loaded')
        section.append(self._render_stats())
        section.append(self._render_filters())
        section.append(self._render_results())
        return section

    def _render_stats(self):
        stats = self._tag('div', attrs={'class': 'stats mb-3'})

        total = self._tag('p', 'Total events: ')
        total.append(self._tag('span', str(self.total_events), {'id': 'totalEvents'}))
        stats.append(total)

        if self.last_updated is not None:
            updated_time = datetime.fromtimestamp(self.last_updated)
            updated = self._tag('p', 'Last updated: ')
            updated.append(self._tag(
                'span',
                updated_time.strftime('%I:%M:%S %p').lstrip('0'),
                {'id': 'lastUpdated'}
            ))
            stats.append(updated)

        stats.append(self._tag('a', 'Refresh', {'href': '?refresh=1', 'class': 'btn btn-outline-primary btn-sm'}))
        return stats

    def _render_filters(self):
        state = self.filter_state
        form = self._tag('form', attrs={'method': 'get', 'class': 'filters mb-4'})

        form.append(self._tag('input', attrs={
            'type': 'search',
            'id': 'searchInput',
            'name': 'q',
            'placeholder': 'Search events...',
            'value': state.search_text or ''
        }))
        form.append(self._render_select(
            'countryFilter', 'country', 'All Countries',
            [(country, country) for country in self.facets.countries],
            state.country
        ))
        form.append(self._render_select(
            'typeFilter', 'type', 'All Types',
            [(event_type, event_type) for event_type in self.facets.event_types],
            state.event_type
        ))
        form.append(self._render_select(
            'participationFilter', 'participation', 'All Participation',
            PARTICIPATION_OPTIONS,
            state.participation_mode
        ))
        form.append(self._tag('button', 'Apply', {'type': 'submit', 'class': 'btn btn-primary'}))
        form.append(self._tag('a', 'Clear filters', {'href': '?clear=1', 'class': 'btn btn-link'}))
        return form

    def _render_select(self, element_id, name, any_label, options, selected):
        select = self._tag('select', attrs={'id': element_id, 'name': name, 'class': 'form-select'})
        select.append(self._tag('option', any_label, {'value': ''}))

        for value, label in options:
            option = self._tag('option', label, {'value': value})
            if selected and value == selected:
                option['selected'] = 'selected'
            select.append(option)

        return select

    def _render_results(self):
        wrapper = self._tag('div', attrs={'class': 'results'})
        result = self.result or FilteredResult(visible=[], visible_count=0, total_count=0)

        counts = self._tag('p', 'Showing ')
        counts.append(self._tag('span', str(result.visible_count), {'id': 'filteredCount'}))
        counts.append(' of ')
        counts.append(self._tag('span', str(result.total_count), {'id': 'totalCount'}))
        counts.append(' events')
        wrapper.append(counts)

        no_events = self._section('noEvents', result.visible_count == 0)
        no_events.append(self._tag('p', 'No events match your filters.'))
        wrapper.append(no_events)

        cards = self._tag('div', attrs={'id': 'eventsContainer', 'class': 'row'})
        for event in result.visible:
            cards.append(self._render_card(event))
        wrapper.append(cards)

        return wrapper

    def _render_card(self, event: EventRecord):
        column = self._tag('div', attrs={'class': 'col-md-6 col-lg-4 mb-4'})
        card = self._tag('div', attrs={'class': 'card event-card border', 'data-event-id': str(event.id)})
        body = self._tag('div', attrs={'class': 'card-body'})

        heading = self._tag('h5', attrs={'class': 'card-title'})
        heading.append(self._tag('a', event.title, {'href': event.link, 'target': '_blank'}))
        body.append(heading)

        badges = self._tag('div', attrs={'class': 'mb-2'})
        type_label, type_class = event_type_badge(event.event_type)
        badges.append(self._tag('span', type_label, {'class': f'badge {type_class}'}))
        mode_label, mode_class = participation_badge(event.participation_mode)
        badges.append(self._tag('span', mode_label, {'class': f'badge {mode_class}'}))
        body.append(badges)

        body.append(self._tag('p', event.description, {'class': 'card-text'}))
        body.append(self._tag(
            'small',
            format_date_range(event.start_date, event.end_date),
            {'class': 'event-date'}
        ))
        body.append(self._tag('small', event.location or event.country, {'class': 'event-location'}))
        if event.organizer:
            body.append(self._tag('small', event.organizer, {'class': 'event-organizer'}))
        body.append(self._tag(
            'a', 'View Event',
            {'href': event.link, 'target': '_blank', 'class': 'btn btn-primary btn-sm'}
        ))

        card.append(body)
        column.append(card)
        return column
