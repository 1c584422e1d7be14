"""Integration tests for Lambda handler."""
import json
import logging
import os
from unittest.mock import Mock, patch

import pytest

from calendar_parser.errors import ParseError, SourceLocation
from lambda_function import JsonFormatter, lambda_handler, setup_logging
from storage.s3_publisher import PublishResult


@pytest.fixture
def mock_env():
    """Set up environment variables for testing."""
    env_vars = {
        'SOURCE_URL': 'https://raw.example.com/calendar/README.md',
        'BUCKET_NAME': 'test-calendar-events',
        'OUTPUT_KEY': 'events.json',
        'LOG_LEVEL': 'INFO',
        'TIMEOUT_SECONDS': '15'
    }
    with patch.dict(os.environ, env_vars):
        yield env_vars


@pytest.fixture
def mock_context():
    """Create a mock Lambda context."""
    context = Mock()
    context.function_name = 'test-function'
    context.memory_limit_in_mb = 512
    context.invoked_function_arn = 'arn:aws:lambda:us-east-1:123456789012:function:test-function'
    context.aws_request_id = 'test-request-id'
    return context


@pytest.fixture
def mock_reader(sample_calendar):
    with patch('lambda_function.CalendarDocumentReader') as reader_class:
        reader_class.return_value.read.return_value = sample_calendar
        yield reader_class


@pytest.fixture
def mock_publisher():
    with patch('lambda_function.EventFeedPublisher') as publisher_class:
        publisher_class.return_value.publish.side_effect = lambda events: PublishResult(
            bucket='test-calendar-events',
            key='events.json',
            event_count=len(events),
            size_bytes=1024
        )
        yield publisher_class


class TestLambdaHandler:
    """Test cases for Lambda handler."""

    def test_successful_run(self, mock_env, mock_context, mock_reader, mock_publisher):
        """Test successful end-to-end run with the real parser."""
        response = lambda_handler({}, mock_context)

        assert response['statusCode'] == 200
        body = json.loads(response['body'])
        assert body['message'] == 'Event feed published successfully'
        assert body['statistics']['events_published'] == 5
        assert body['statistics']['size_bytes'] == 1024
        assert 'duration_seconds' in body['statistics']
        assert body['location'] == 's3://test-calendar-events/events.json'

        mock_reader.assert_called_once_with(timeout=15)
        mock_reader.return_value.read.assert_called_once_with(mock_env['SOURCE_URL'])
        mock_publisher.assert_called_once_with(bucket_name='test-calendar-events', key='events.json')
        published = mock_publisher.return_value.publish.call_args.args[0]
        assert [event.title for event in published][:2] == [
            "PyCon Thailand 2024",
            "Bangkok JavaScript Meetup",
        ]

    def test_read_failure(self, mock_env, mock_context, mock_reader, mock_publisher):
        """Test error handling for document read failures."""
        mock_reader.return_value.read.side_effect = Exception('Network error')

        response = lambda_handler({}, mock_context)

        assert response['statusCode'] == 500
        body = json.loads(response['body'])
        assert body['message'] == 'Failed to read calendar document'
        assert 'Network error' in body['error']
        assert body['error_type'] == 'Exception'
        assert 'duration_seconds' in body
        assert not mock_publisher.return_value.publish.called

    @patch('lambda_function.CalendarPipeline')
    def test_parse_failure(self, mock_pipeline_class, mock_env, mock_context,
                           mock_reader, mock_publisher):
        """Test that a parse error is reported and nothing is published."""
        error = ParseError(
            location=SourceLocation(line=3, column=5),
            expected=frozenset({'DAY'}),
            found='five Meetup',
            section_title='May 2024',
            section_start_line=40
        )
        mock_pipeline_class.return_value.run.side_effect = error

        response = lambda_handler({}, mock_context)

        assert response['statusCode'] == 422
        body = json.loads(response['body'])
        assert body['message'] == 'Calendar document does not parse'
        assert body['error_type'] == 'ParseError'
        assert body['parse_error']['line'] == 3
        assert body['parse_error']['column'] == 5
        assert body['parse_error']['absolute_line'] == 42
        assert body['parse_error']['section'] == 'May 2024'
        assert body['parse_error']['expected'] == ['DAY']
        assert body['parse_error']['found'] == 'five Meetup'
        assert body['note'] == 'Previous event feed left unchanged'
        assert not mock_publisher.return_value.publish.called

    def test_parse_failure_from_document(self, mock_env, mock_context, mock_reader, mock_publisher):
        """Test a real grammar failure in the fetched document."""
        mock_reader.return_value.read.return_value = "## May 2024\n\n### 5 Meetup\n"

        response = lambda_handler({}, mock_context)

        assert response['statusCode'] == 422
        body = json.loads(response['body'])
        assert body['parse_error']['section'] == 'May 2024'
        assert body['parse_error']['found'] is None

    def test_publish_failure(self, mock_env, mock_context, mock_reader, mock_publisher):
        """Test error handling for S3 publish failures."""
        mock_publisher.return_value.publish.side_effect = Exception('S3 error')

        response = lambda_handler({}, mock_context)

        assert response['statusCode'] == 500
        body = json.loads(response['body'])
        assert body['message'] == 'Failed to publish event feed'
        assert 'S3 error' in body['error']
        assert body['note'] == 'Previous event feed left unchanged'
        mock_reader.return_value.read.assert_called_once()

    def test_setup_failure(self, mock_env, mock_context, mock_reader):
        """Test error handling when a component cannot be created."""
        with patch('lambda_function.EventFeedPublisher', side_effect=Exception('No region')):
            response = lambda_handler({}, mock_context)

        assert response['statusCode'] == 500
        body = json.loads(response['body'])
        assert body['message'] == 'Event generation failed'
        assert 'No region' in body['error']

    @patch('lambda_function.setup_logging')
    def test_logging_output(self, mock_setup_logging, mock_env, mock_context,
                            mock_reader, mock_publisher, caplog):
        """Test that logging output is generated correctly."""
        with caplog.at_level(logging.INFO, logger='lambda_function'):
            response = lambda_handler({}, mock_context)

        assert response['statusCode'] == 200
        log_messages = [record.message for record in caplog.records]
        assert any('Lambda execution started' in msg for msg in log_messages)
        assert any('Reading calendar document' in msg for msg in log_messages)
        assert any('Generating events' in msg for msg in log_messages)
        assert any('Publishing event feed' in msg for msg in log_messages)
        assert any('Lambda execution completed successfully' in msg for msg in log_messages)
        mock_setup_logging.assert_called_once_with('INFO')


class TestSetupLogging:
    """Test cases for logging setup."""

    def test_setup_logging_default_level(self):
        """Test logging setup with default INFO level."""
        setup_logging()
        assert logging.getLogger().level == logging.INFO

    def test_setup_logging_debug_level(self):
        """Test logging setup with DEBUG level."""
        setup_logging('DEBUG')
        assert logging.getLogger().level == logging.DEBUG

    def test_setup_logging_unknown_level(self):
        """Test that an unknown level falls back to INFO."""
        setup_logging('CHATTY')
        assert logging.getLogger().level == logging.INFO

    def test_json_formatter(self):
        """Test that records are formatted as JSON objects."""
        record = logging.LogRecord('calendar', logging.WARNING, __file__, 1, 'hello %s', ('world',), None)

        data = json.loads(JsonFormatter().format(record))

        assert data['level'] == 'WARNING'
        assert data['message'] == 'hello world'
        assert data['logger'] == 'calendar'
        assert 'timestamp' in data
