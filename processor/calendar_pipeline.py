"""Request pipeline producing calendar events from the data bundle."""
import logging
from typing import Any, Dict, List

from processor.calendar_transformer import CalendarTransformer
from processor.enrichment import EventEnricher
from storage.data_repository import DataRepository

logger = logging.getLogger(__name__)


def get_calendar_events(repository: DataRepository) -> List[Dict[str, Any]]:
    """
    Load the data bundle and produce calendar events.

    Args:
        repository: Source of the task and lookup data

    Returns:
        List of calendar events as JSON-serializable dicts

    Raises:
        Exception: Any unexpected failure, after logging it
    """
    try:
        result = repository.load_bundle()
        if result.error:
            logger.warning(
                f"Serving fallback data bundle: {result.error}",
                extra={'bundle_source': result.source}
            )

        enriched = EventEnricher().enrich(
            result.bundle.task_data,
            result.bundle.supporting_data
        )
        calendar_events = CalendarTransformer().transform(enriched)

        logger.info(
            f"Built {len(calendar_events)} calendar events",
            extra={'bundle_source': result.source}
        )
        return [event.to_dict() for event in calendar_events]

    except Exception as e:
        logger.error(
            f"Error building calendar events: {str(e)}",
            extra={'error_type': type(e).__name__},
            exc_info=True
        )
        raise
