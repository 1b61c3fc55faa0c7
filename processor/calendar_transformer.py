"""Transformation of enriched events into calendar widget events."""
import logging
from datetime import datetime, time
from typing import List, Optional, Tuple

from processor.constants import (
    CALENDAR_EVENT_CLASS,
    CALENDAR_EVENT_TYPE,
    NO_PROJECT,
    STATUS_NOT_DEFINED,
    UNASSIGNED,
)
from processor.dates import parse_date
from processor.models import CalendarEvent, EnrichedEvent, ExtendedProps

logger = logging.getLogger(__name__)

TITLE_SEPARATOR = ' - '


def format_start(date_in, time_in: Optional[time]) -> Tuple[Optional[str], bool]:
    """
    Format the start of an event as ISO 8601.

    Args:
        date_in: Start date (datetime or raw cell value)
        time_in: Optional time of day

    Returns:
        Tuple of (ISO string or None if the date is invalid, has_time)
    """
    start_date = date_in if isinstance(date_in, datetime) else parse_date(date_in)
    if start_date is None:
        return None, False

    if time_in is not None:
        start = datetime.combine(start_date.date(), time_in)
        return start.strftime('%Y-%m-%dT%H:%M:%S'), True

    return start_date.strftime('%Y-%m-%d'), False


def is_calendar_event(event: EnrichedEvent) -> bool:
    return event.task_type_name == CALENDAR_EVENT_TYPE


def build_event_title(event: EnrichedEvent) -> str:
    """
    Build the human-readable event title.

    Calendar-event tasks show only the project name. Other tasks join the
    non-empty parts of type, project, location and task manager.
    """
    if is_calendar_event(event):
        return event.project_name or ''

    parts = [
        event.task_type_name,
        event.project_name,
        event.location_name,
        event.task_manager_name,
    ]
    return TITLE_SEPARATOR.join(part for part in parts if part)


class CalendarTransformer:
    """Transformer from enriched events to calendar events."""

    def transform(self, events: List[EnrichedEvent]) -> List[CalendarEvent]:
        """
        Transform enriched events, skipping those without a usable start.

        Args:
            events: Enriched and filtered events

        Returns:
            List of CalendarEvent objects in input order
        """
        if not events:
            return []

        calendar_events = []
        for event in events:
            calendar_event = self._transform_single_event(event)
            if calendar_event:
                calendar_events.append(calendar_event)

        logger.info(f"Transformed {len(calendar_events)} calendar events")
        return calendar_events

    def _transform_single_event(self, event: EnrichedEvent) -> Optional[CalendarEvent]:
        start, has_time = format_start(event.task.date_in, event.task.time_in)
        if not start:
            logger.warning(f"Skipping task {event.task.task_id}: invalid start date")
            return None

        calendar_type = is_calendar_event(event)

        return CalendarEvent(
            id=event.task.task_id,
            title=build_event_title(event),
            start=start,
            all_day=calendar_type or not has_time,
            background_color=event.background_color,
            text_color=event.text_color,
            border_color=event.background_color,
            class_names=[CALENDAR_EVENT_CLASS] if calendar_type else [],
            extended_props=ExtendedProps(
                description=event.task.notes or '',
                status=event.task_status_hebrew or STATUS_NOT_DEFINED,
                project=event.project_name or NO_PROJECT,
                user=event.project_manager_name or UNASSIGNED,
                folder_link=event.project_folder or '',
                task_type_name=event.task_type_name or ''
            )
        )
