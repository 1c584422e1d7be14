"""AWS Lambda handler for the markdown calendar event feed."""
import json
import logging
import os
import time
from typing import Dict, Any

from calendar_parser.errors import ParseError
from calendar_parser.grammar import CalendarParser
from processor.pipeline import CalendarPipeline
from reader.calendar_document import CalendarDocumentReader
from storage.s3_publisher import EventFeedPublisher


# Configure JSON logging
class JsonFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            'timestamp': self.formatTime(record),
            'level': record.levelname,
            'message': record.getMessage(),
            'logger': record.name
        }

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data)


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

    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    root_logger.addHandler(handler)

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def _error_response(status_code: int, message: str, error: Exception,
                    start_time: float, **details: Any) -> Dict[str, Any]:
    duration = time.time() - start_time
    body = {
        'message': message,
        'error': str(error),
        'error_type': type(error).__name__,
        'duration_seconds': round(duration, 2)
    }
    body.update(details)
    return {'statusCode': status_code, 'body': json.dumps(body)}


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler: read the calendar, generate events, publish the feed.

    Args:
        event: EventBridge event payload
        context: Lambda context object

    Returns:
        Response dict with statusCode and summary statistics
    """
    # Read configuration from environment variables
    source_url = os.environ.get('SOURCE_URL', 'README.md')
    bucket_name = os.environ.get('BUCKET_NAME', 'calendar-events')
    output_key = os.environ.get('OUTPUT_KEY', 'events.json')
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Lambda execution started",
        extra={
            'source_url': source_url,
            'bucket_name': bucket_name,
            'output_key': output_key
        }
    )

    try:
        reader = CalendarDocumentReader(timeout=timeout_seconds)
        pipeline = CalendarPipeline(parser=CalendarParser())
        publisher = EventFeedPublisher(bucket_name=bucket_name, key=output_key)

        try:
            logger.info("Reading calendar document")
            raw_text = reader.read(source_url)
        except Exception as e:
            logger.error(
                f"Failed to read calendar document: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response(500, 'Failed to read calendar document', e, start_time)

        try:
            logger.info("Generating events")
            events = pipeline.run(raw_text)
        except ParseError as e:
            # Nothing is published for a partially valid calendar
            logger.error(
                f"Calendar document does not parse: {e.message}",
                extra={'error_type': type(e).__name__}
            )
            return _error_response(
                422, 'Calendar document does not parse', e, start_time,
                parse_error=e.to_dict(),
                note='Previous event feed left unchanged'
            )

        try:
            logger.info("Publishing event feed")
            result = publisher.publish(events)
        except Exception as e:
            logger.error(
                f"Error publishing event feed: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return _error_response(
                500, 'Failed to publish event feed', e, start_time,
                note='Previous event feed left unchanged'
            )

        duration = time.time() - start_time
        logger.info(
            "Lambda execution completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'events_published': result.event_count,
                'size_bytes': result.size_bytes
            }
        )

        return {
            'statusCode': 200,
            'body': json.dumps({
                'message': 'Event feed published successfully',
                'statistics': {
                    'events_published': result.event_count,
                    'size_bytes': result.size_bytes,
                    'duration_seconds': round(duration, 2)
                },
                'location': f"s3://{result.bucket}/{result.key}"
            })
        }

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
        return _error_response(500, 'Event generation failed', e, start_time)
