"""Date and time parsing for sheet cell values."""
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

# Day zero of spreadsheet serial dates
SERIAL_EPOCH = datetime(1899, 12, 30)

DATE_FORMATS = [
    '%Y-%m-%d',      # ISO 8601
    '%Y-%m-%dT%H:%M:%S',
    '%Y-%m-%d %H:%M:%S',
    '%Y-%m-%dT%H:%M',
    '%Y-%m-%d %H:%M',
    # Text cells follow the spreadsheet's day-first locale
    '%d/%m/%Y',
    '%d/%m/%Y %H:%M:%S',
    '%d/%m/%Y %H:%M',
    '%d.%m.%Y',
    '%Y/%m/%d',      # Alternative ISO format
    '%B %d, %Y',     # Full month name
    '%b %d, %Y',     # Abbreviated month name
]

TIME_FORMATS = [
    '%H:%M',         # 24-hour format
    '%H:%M:%S',      # 24-hour with seconds
    '%I:%M %p',      # 12-hour format with AM/PM
    '%I:%M%p',       # 12-hour format without space
    '%I:%M:%S %p',   # 12-hour with seconds and AM/PM
]


def parse_date(value: Any) -> Optional[datetime]:
    """
    Parse a sheet cell into a datetime.

    Args:
        value: datetime/date object, serial number, or date string

    Returns:
        Parsed datetime or None if the value is empty or unparseable
    """
    if value is None or value == '' or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value

    if isinstance(value, date):
        return datetime(value.year, value.month, value.day)

    if isinstance(value, (int, float)):
        try:
            return SERIAL_EPOCH + timedelta(days=value)
        except OverflowError:
            return None

    text = str(value).strip()
    if not text:
        return None

    try:
        return datetime.fromisoformat(text.replace('Z', '+00:00')).replace(tzinfo=None)
    except ValueError:
        pass

    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(text, fmt)
        except ValueError:
            continue

    return None


def parse_time(value: Any) -> Optional[time]:
    """
    Parse a sheet cell into a time of day.

    Args:
        value: time/datetime object, day fraction, or time string

    Returns:
        Parsed time (minute precision) or None
    """
    if value is None or value == '' or isinstance(value, bool):
        return None

    if isinstance(value, datetime):
        return value.time().replace(second=0, microsecond=0)

    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)

    if isinstance(value, (int, float)):
        fraction = value % 1
        minutes = int(round(fraction * 24 * 60)) % (24 * 60)
        return time(minutes // 60, minutes % 60)

    text = str(value).strip()

    for fmt in TIME_FORMATS:
        try:
            return datetime.strptime(text, fmt).time().replace(second=0)
        except ValueError:
            continue

    # Time columns sometimes carry a full date-time
    parsed = parse_date(text)
    if parsed is not None and ':' in text:
        return parsed.time().replace(second=0, microsecond=0)

    return None
