"""Join of task rows with supporting lookup data, and status filtering."""
import logging
from typing import Dict, List, Optional

from processor.constants import (
    BACKGROUND_COLOR,
    COLOR_NAMES,
    DEFAULT_TEXT_COLOR,
    INACTIVE_PROJECT_STATUSES,
    INACTIVE_TASK_STATUSES,
)
from processor.models import (
    EnrichedEvent,
    Employee,
    Location,
    Project,
    ProjectStatusInfo,
    SupportingData,
    Task,
    TaskStatusInfo,
    TaskTypeInfo,
)
from processor.tabular import Record
from processor.validator import TaskValidator

logger = logging.getLogger(__name__)


def map_color_name_to_hex(color_name: Optional[str], default_hex: str) -> str:
    """
    Translate an English colour name to a hex code.

    Args:
        color_name: Colour name such as "red" or "Blue"
        default_hex: Hex code returned for unknown or missing names

    Returns:
        Hex colour code
    """
    if not color_name or not isinstance(color_name, str):
        return default_hex
    return COLOR_NAMES.get(color_name.strip().lower(), default_hex)


def normalize_label(value: str) -> str:
    """Trim and lower-case a classification label for comparison."""
    return (value or '').strip().lower()


def is_active(event: EnrichedEvent) -> bool:
    """Return False for events whose project or task status is inactive."""
    if event.project_status in INACTIVE_PROJECT_STATUSES:
        return False
    if event.task_status_hebrew in INACTIVE_TASK_STATUSES:
        return False
    return True


def _lookup(table: Dict[str, Record], key: str) -> Record:
    # Missing references resolve to an empty record
    if not key:
        return {}
    return table.get(key.strip()) or {}


class EventEnricher:
    """Enricher that joins validated tasks with their supporting data."""

    def __init__(self, validator: Optional[TaskValidator] = None):
        self.validator = validator or TaskValidator()

    def enrich(self, task_records: List[Record], supporting: SupportingData) -> List[EnrichedEvent]:
        """
        Validate, join and filter task rows.

        Args:
            task_records: Raw task records from the Task sheet
            supporting: Lookup maps for the supporting sheets

        Returns:
            Enriched events whose project and task status are active
        """
        if not task_records or supporting is None:
            return []

        tasks = self.validator.validate_tasks(task_records)
        enriched = [self.enrich_task(task, supporting) for task in tasks]
        active = [event for event in enriched if is_active(event)]

        logger.info(
            f"Enriched {len(enriched)} tasks, {len(enriched) - len(active)} "
            f"filtered out by status"
        )
        return active

    def enrich_task(self, task: Task, supporting: SupportingData) -> EnrichedEvent:
        """
        Resolve the references of a single task into display fields.

        Args:
            task: Validated task
            supporting: Lookup maps for the supporting sheets

        Returns:
            EnrichedEvent with flattened, normalized fields
        """
        project = Project.from_record(_lookup(supporting.projects, task.project))
        project_status = ProjectStatusInfo.from_record(
            _lookup(supporting.project_statuses, project.project_status)
        )
        task_type = TaskTypeInfo.from_record(_lookup(supporting.task_types, task.task_type))
        task_status = TaskStatusInfo.from_record(
            _lookup(supporting.task_statuses, task.task_status)
        )
        location = Location.from_record(_lookup(supporting.locations, project.location))
        task_manager = Employee.from_record(_lookup(supporting.employees, task.task_manager))
        project_manager = Employee.from_record(
            _lookup(supporting.employees, project.project_manager)
        )

        return EnrichedEvent(
            task=task,
            project_name=project.name,
            project_folder=project.folder,
            location_name=location.name,
            task_manager_name=task_manager.full_name,
            project_manager_name=project_manager.full_name,
            project_status=normalize_label(project_status.status),
            task_type_name=normalize_label(task_type.label or task.task_label),
            task_status_hebrew=normalize_label(task_status.label),
            background_color=BACKGROUND_COLOR,
            text_color=map_color_name_to_hex(task_type.color, DEFAULT_TEXT_COLOR)
        )
