"""Validation of raw task rows before enrichment."""
import logging
from typing import List

from processor.constants import UNKNOWN_TASK_ID
from processor.dates import parse_date, parse_time
from processor.models import Task
from processor.tabular import Record, cell_to_str, first_present

logger = logging.getLogger(__name__)


def _task_label(record: Record) -> str:
    return first_present(record, 'ID', default=UNKNOWN_TASK_ID)


def validate_task(record: Record) -> List[str]:
    """
    Check a raw task row for structural problems.

    The end date is only checked when the start date is valid, so a bad
    start date does not also produce an end date error.

    Args:
        record: Raw task record from the Task sheet

    Returns:
        List of error descriptions; empty if the task is valid
    """
    errors = []
    task_id = _task_label(record)

    start = parse_date(record.get('dateIn'))
    if start is None:
        errors.append(f"Task {task_id}: start date (dateIn) is missing or invalid.")

    if not errors and cell_to_str(record.get('dateOut')):
        end = parse_date(record.get('dateOut'))
        if end is None:
            errors.append(f"Task {task_id}: end date (dateOut) is invalid.")
        elif end < start:
            errors.append(f"Task {task_id}: end date is earlier than start date.")

    if not cell_to_str(record.get('Project')):
        errors.append(f"Task {task_id}: not linked to a project (Project).")

    return errors


class TaskValidator:
    """Validator that turns raw task rows into typed tasks."""

    def validate_tasks(self, records: List[Record]) -> List[Task]:
        """
        Validate task rows, dropping and logging invalid ones.

        Args:
            records: Raw task records

        Returns:
            Typed Task objects for the valid rows, in input order
        """
        tasks = []

        for record in records:
            errors = validate_task(record)
            if errors:
                logger.warning(
                    f"Validation failed for task ID {_task_label(record)}; "
                    f"task will not be shown: {'; '.join(errors)}"
                )
                continue

            tasks.append(self._to_task(record))

        logger.info(f"Validated {len(tasks)} tasks out of {len(records)} rows")
        return tasks

    def _to_task(self, record: Record) -> Task:
        date_out = record.get('dateOut')
        return Task(
            task_id=record.get('ID'),
            date_in=parse_date(record.get('dateIn')),
            date_out=parse_date(date_out) if cell_to_str(date_out) else None,
            time_in=parse_time(record.get('timeIn')),
            project=cell_to_str(record.get('Project')),
            task_type=cell_to_str(record.get('TaskType')),
            task_status=cell_to_str(record.get('TaskStatus')),
            task_manager=cell_to_str(record.get('TaskManager')),
            task_label=cell_to_str(record.get('Task')),
            notes=cell_to_str(record.get('TaskNotes'))
        )
