"""AWS Lambda handler for the operations calendar feed."""
import json
import logging
import os
import time
from typing import Dict, Any

from auth.authorization import (
    UnauthorizedError,
    extract_caller_email,
    parse_domains,
    require_authorized,
)
from processor.calendar_pipeline import get_calendar_events
from processor.constants import CACHE_EXPIRATION_SECONDS
from sheets.sheets_client import SheetsClient
from storage.data_repository import DataRepository
from storage.dynamodb_cache import DynamoDBCache


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

        return json.dumps(log_data, ensure_ascii=False)


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


def _response(status_code: int, body: Any) -> Dict[str, Any]:
    return {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json; charset=utf-8'},
        'body': json.dumps(body, ensure_ascii=False)
    }


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    """
    Main Lambda handler returning the calendar events of the caller.

    Args:
        event: API Gateway proxy event with authorizer claims
        context: Lambda context object

    Returns:
        Proxy response whose body is the JSON list of calendar events,
        a 403 for unauthorized callers, or a 500 on unexpected failure
    """
    # Read configuration from environment variables
    spreadsheet_id = os.environ.get('SPREADSHEET_ID', '')
    api_key = os.environ.get('SHEETS_API_KEY')
    cache_table_name = os.environ.get('CACHE_TABLE_NAME', 'calendar-cache')
    cache_ttl_seconds = int(os.environ.get('CACHE_TTL_SECONDS', str(CACHE_EXPIRATION_SECONDS)))
    authorized_domains = parse_domains(os.environ.get('AUTHORIZED_DOMAINS'))
    log_level = os.environ.get('LOG_LEVEL', 'INFO')
    timeout_seconds = int(os.environ.get('TIMEOUT_SECONDS', '30'))

    setup_logging(log_level)
    logger = logging.getLogger(__name__)

    start_time = time.time()
    logger.info(
        "Calendar request started",
        extra={
            'spreadsheet_id': spreadsheet_id,
            'cache_table_name': cache_table_name
        }
    )

    try:
        require_authorized(extract_caller_email(event), authorized_domains)
    except UnauthorizedError as e:
        return _response(403, {
            'error': 'UNAUTHORIZED',
            'message': str(e)
        })

    try:
        repository = DataRepository(
            sheets_client=SheetsClient(
                spreadsheet_id=spreadsheet_id,
                api_key=api_key,
                timeout=timeout_seconds
            ),
            cache=DynamoDBCache(table_name=cache_table_name),
            ttl_seconds=cache_ttl_seconds
        )

        calendar_events = get_calendar_events(repository)

        duration = time.time() - start_time
        logger.info(
            "Calendar request completed successfully",
            extra={
                'duration_seconds': round(duration, 2),
                'events_returned': len(calendar_events)
            }
        )
        return _response(200, calendar_events)

    except Exception as e:
        duration = time.time() - start_time
        logger.error(
            f"Calendar request failed: {str(e)}",
            extra={
                'duration_seconds': round(duration, 2),
                'error_type': type(e).__name__
            },
            exc_info=True
        )
        return _response(500, {
            'message': 'Failed to load calendar events',
            'error': str(e),
            'error_type': type(e).__name__,
            'duration_seconds': round(duration, 2)
        })
