"""S3 publisher for the generated event feed."""
import logging
from dataclasses import dataclass
from typing import List

import boto3
from botocore.exceptions import ClientError

from processor.models import Event
from processor.serialization import events_to_json

logger = logging.getLogger(__name__)


@dataclass
class PublishResult:
    """Result of a publish operation."""
    bucket: str
    key: str
    event_count: int
    size_bytes: int


class EventFeedPublisher:
    """Publisher writing the event array as a JSON object in S3."""

    CONTENT_TYPE = 'application/json; charset=utf-8'

    def __init__(self, bucket_name: str, key: str = 'events.json'):
        """
        Initialize S3 client and target object.

        Args:
            bucket_name: Name of the S3 bucket
            key: Object key of the feed (default: events.json)
        """
        self.bucket_name = bucket_name
        self.key = key
        self.s3 = boto3.client('s3')
        logger.info(f"Initialized EventFeedPublisher for s3://{bucket_name}/{key}")

    def publish(self, events: List[Event]) -> PublishResult:
        """
        Replace the feed object with the given events.

        Args:
            events: Complete list of events, in output order

        Returns:
            PublishResult describing the written object

        Raises:
            ClientError: If the object cannot be written
        """
        body = events_to_json(events).encode('utf-8')
        logger.info(f"Publishing {len(events)} events ({len(body)} bytes)")

        try:
            self.s3.put_object(
                Bucket=self.bucket_name,
                Key=self.key,
                Body=body,
                ContentType=self.CONTENT_TYPE
            )
        except ClientError as e:
            logger.error(f"Error writing s3://{self.bucket_name}/{self.key}: {e}")
            raise

        logger.info(f"Published event feed to s3://{self.bucket_name}/{self.key}")
        return PublishResult(
            bucket=self.bucket_name,
            key=self.key,
            event_count=len(events),
            size_bytes=len(body)
        )
