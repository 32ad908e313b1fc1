"""AWS Lambda handler serving the community events catalog page."""
import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from catalog.event_catalog import EventCatalog
from presentation.html_view import HtmlCatalogView
from processor.models import FilterState
from sources.http_source import HttpEventSource
from sources.sample_events import SampleEventSource
from storage.dynamodb_source import DynamoDBEventSource

TRUTHY = {'1', 'true', 'yes', 'on'}

# Attributes every LogRecord carries; anything else came in through `extra`
_RESERVED_LOG_ATTRS = set(
    logging.LogRecord('', logging.INFO, '', 0, '', (), None).__dict__
) | {'message', 'asctime'}


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """JSON formatter that also emits the fields passed through `extra`."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_LOG_ATTRS and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def setup_logging(log_level: str = 'INFO') -> None:
    """
    Configure logging with JSON formatter.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    root_logger = logging.getLogger()

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Create new handler with JSON formatter
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    # Set log level
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


@dataclass
class CatalogConfig:
    """Settings read from environment variables."""
    event_source: str = 'sample'
    source_url: Optional[str] = None
    table_name: str = 'community-events'
    region_name: Optional[str] = None
    timeout_seconds: int = 30
    log_level: str = 'INFO'

    @classmethod
    def from_env(cls) -> 'CatalogConfig':
        return cls(
            event_source=os.environ.get('EVENT_SOURCE', 'sample').lower(),
            source_url=os.environ.get('SOURCE_URL'),
            table_name=os.environ.get('TABLE_NAME', 'community-events'),
            region_name=os.environ.get('AWS_REGION'),
            timeout_seconds=int(os.environ.get('TIMEOUT_SECONDS', '30')),
            log_level=os.environ.get('LOG_LEVEL', 'INFO')
        )


def create_source(config: CatalogConfig):
    """
    Build the event source selected by configuration.

    Args:
        config: Catalog configuration

    Returns:
        Event source object

    Raises:
        ValueError: If the source type is unknown or misconfigured
    """
    if config.event_source == 'sample':
        return SampleEventSource()
    if config.event_source == 'http':
        if not config.source_url:
            raise ValueError("SOURCE_URL must be set when EVENT_SOURCE is 'http'")
        return HttpEventSource(config.source_url, timeout=config.timeout_seconds)
    if config.event_source == 'dynamodb':
        return DynamoDBEventSource(config.table_name, region_name=config.region_name)
    raise ValueError(f"Unknown EVENT_SOURCE: {config.event_source!r}")


def create_catalog(config: CatalogConfig) -> EventCatalog:
    """Construct the catalog and its HTML view for a fresh container."""
    return EventCatalog(source=create_source(config), view=HtmlCatalogView())


# Built on the first invocation and reused while the container stays warm,
# which is what keeps the event cache alive between requests.
_catalog: Optional[EventCatalog] = None


def get_catalog(config: CatalogConfig) -> EventCatalog:
    global _catalog
    if _catalog is None:
        _catalog = create_catalog(config)
    return _catalog


def filter_state_from_query(params: Optional[Dict[str, str]]) -> FilterState:
    """Translate query-string parameters into a FilterState."""
    params = params or {}
    return FilterState(
        search_text=params.get('q') or '',
        country=params.get('country') or None,
        event_type=params.get('type') or None,
        participation_mode=params.get('participation') or None
    )


def handle_request(catalog: EventCatalog, event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Apply one HTTP request to the catalog and render the page.

    Args:
        catalog: Catalog state for this container
        event: API Gateway / Function URL event payload

    Returns:
        Response dict with statusCode, headers and HTML body
    """
    logger = logging.getLogger(__name__)
    params = event.get('queryStringParameters') or {}

    if (params.get('refresh') or '').lower() in TRUTHY:
        logger.info("Refreshing events")
        catalog.on_refresh_requested()
    else:
        catalog.load()

    if (params.get('clear') or '').lower() in TRUTHY:
        catalog.on_clear_filters_requested()
    else:
        catalog.set_filter_state(filter_state_from_query(params))

    view = catalog.view
    body = view.render_page(catalog.filter_state)

    return {
        'statusCode': 503 if view.state_name == 'error' else 200,
        'headers': {'Content-Type': 'text/html; charset=utf-8'},
        'body': body
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler function for the events catalog.

    Args:
        event: HTTP event payload
        context: Lambda context object

    Returns:
        Response dict with statusCode, headers and body
    """
    config = CatalogConfig.from_env()

    setup_logging(config.log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Lambda execution started",
        extra={'event_source': config.event_source}
    )

    try:
        catalog = get_catalog(config)
        response = handle_request(catalog, event or {})

        duration = time.time() - start_time
        result = catalog.result
        logger.info(
            "Lambda execution completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'status_code': response['statusCode'],
                'visible_events': result.visible_count if result else 0,
                'total_events': result.total_count if result else 0
            }
        )
        return response

    except Exception as e:
        duration = time.time() - start_time

        logger.error(
            f"Lambda execution failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )

        return {
            'statusCode': 500,
            'headers': {'Content-Type': 'application/json'},
            'body': json.dumps({
                'message': 'Failed to render events catalog',
                'error': str(e),
                'error_type': type(e).__name__,
                'duration_seconds': round(duration, 2)
            })
        }
