"""Read-only event source backed by a DynamoDB table."""
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

import boto3
from botocore.exceptions import ClientError

from processor.event_processor import EventProcessor
from processor.models import EventRecord

logger = logging.getLogger(__name__)


class DynamoDBEventSource:
    """Loads every event item from a DynamoDB table."""

    def __init__(
        self,
        table_name: str,
        region_name: Optional[str] = None,
        processor: EventProcessor = None
    ):
        """
        Initialize DynamoDB resource and table reference.

        Args:
            table_name: Name of the DynamoDB table
            region_name: AWS region, defaults to the environment's region
            processor: EventProcessor used to normalize items
        """
        self.table_name = table_name
        self.name = f"DynamoDB table {table_name}"
        self.dynamodb = boto3.resource('dynamodb', region_name=region_name)
        self.table = self.dynamodb.Table(table_name)
        self.processor = processor or EventProcessor()
        logger.info(f"Initialized DynamoDBEventSource for table: {table_name}")

    def fetch_events(self) -> List[EventRecord]:
        """
        Scan the table and normalize its items.

        Items are ordered by id so the load order is stable across scans.

        Returns:
            List of EventRecord objects

        Raises:
            ClientError: If the scan fails
        """
        items = self._scan_all_items()
        raw_records = [self._item_to_record(item) for item in items]
        raw_records.sort(key=self._sort_key)
        return self.processor.process_records(raw_records)

    @staticmethod
    def _sort_key(record: Dict[str, Any]):
        event_id = record.get('id')
        if isinstance(event_id, int):
            return (0, event_id, '')
        return (1, 0, str(event_id))

    def _scan_all_items(self) -> List[Dict[str, Any]]:
        logger.info("Scanning DynamoDB table for all events")

        try:
            response = self.table.scan()
            items = response.get('Items', [])

            # Handle pagination
            while 'LastEvaluatedKey' in response:
                response = self.table.scan(
                    ExclusiveStartKey=response['LastEvaluatedKey']
                )
                items.extend(response.get('Items', []))

        except ClientError as e:
            logger.error(f"Error scanning DynamoDB table: {e}")
            raise

        logger.info(f"Retrieved {len(items)} items from DynamoDB")
        return items

    def _item_to_record(self, item: Dict[str, Any]) -> Dict[str, Any]:
        """
        Convert a DynamoDB item to a raw event dictionary.

        Numbers come back from DynamoDB as Decimal; integral ones become int.

        Args:
            item: DynamoDB item dictionary

        Returns:
            Raw event dictionary
        """
        record = {}
        for key, value in item.items():
            if isinstance(value, Decimal):
                value = int(value) if value == value.to_integral_value() else float(value)
            record[key] = value

        if 'id' not in record and 'event_id' in record:
            record['id'] = record.pop('event_id')

        return record
