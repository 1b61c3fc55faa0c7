"""Data models for calendar event processing."""
import json
from dataclasses import dataclass, field
from datetime import datetime, time
from typing import Any, Dict, List, Optional

from processor.tabular import Record, first_present


@dataclass
class Task:
    """Validated task row."""
    task_id: Any
    date_in: datetime
    date_out: Optional[datetime]
    time_in: Optional[time]
    project: str
    task_type: str
    task_status: str
    task_manager: str
    task_label: str
    notes: str


@dataclass
class Project:
    """Project lookup row."""
    name: str = ''
    folder: str = ''
    location: str = ''
    project_status: str = ''
    project_manager: str = ''

    @classmethod
    def from_record(cls, record: Record) -> 'Project':
        return cls(
            name=first_present(record, 'name'),
            folder=first_present(record, 'folder'),
            location=first_present(record, 'Location'),
            project_status=first_present(record, 'ProjectStatus'),
            project_manager=first_present(record, 'ProjectManager')
        )


@dataclass
class Employee:
    """Employee lookup row."""
    first_name: str = ''
    last_name: str = ''

    @classmethod
    def from_record(cls, record: Record) -> 'Employee':
        return cls(
            first_name=first_present(record, 'fName'),
            last_name=first_present(record, 'sName')
        )

    @property
    def full_name(self) -> str:
        return ' '.join(part for part in (self.first_name, self.last_name) if part)


@dataclass
class TaskTypeInfo:
    """TaskType lookup row."""
    label: str = ''
    color: str = ''

    @classmethod
    def from_record(cls, record: Record) -> 'TaskTypeInfo':
        return cls(
            label=first_present(record, 'hebrew'),
            color=first_present(record, 'color')
        )


@dataclass
class TaskStatusInfo:
    """TaskStatus lookup row."""
    label: str = ''

    @classmethod
    def from_record(cls, record: Record) -> 'TaskStatusInfo':
        return cls(label=first_present(record, 'hebrew', 'TaskStatus'))


@dataclass
class Location:
    """Location lookup row."""
    name: str = ''

    @classmethod
    def from_record(cls, record: Record) -> 'Location':
        return cls(name=first_present(record, 'name'))


@dataclass
class ProjectStatusInfo:
    """ProjectStatus lookup row."""
    status: str = ''

    @classmethod
    def from_record(cls, record: Record) -> 'ProjectStatusInfo':
        return cls(status=first_present(record, 'Status'))


@dataclass
class EnrichedEvent:
    """Task joined with its supporting data."""
    task: Task
    project_name: str
    project_folder: str
    location_name: str
    task_manager_name: str
    project_manager_name: str
    project_status: str
    task_type_name: str
    task_status_hebrew: str
    background_color: str
    text_color: str


@dataclass
class ExtendedProps:
    """Extra event details shown by the calendar widget."""
    description: str
    status: str
    project: str
    user: str
    folder_link: str
    task_type_name: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'description': self.description,
            'status': self.status,
            'project': self.project,
            'user': self.user,
            'folderLink': self.folder_link,
            'taskTypeName': self.task_type_name
        }


@dataclass
class CalendarEvent:
    """Event in the shape consumed by the calendar widget."""
    id: Any
    title: str
    start: str
    all_day: bool
    background_color: str
    text_color: str
    border_color: str
    class_names: List[str]
    extended_props: ExtendedProps

    def to_dict(self) -> Dict[str, Any]:
        """
        Serialize to the calendar wire format.

        ``end`` is never emitted so every event renders on its start day.
        """
        return {
            'id': self.id,
            'title': self.title,
            'start': self.start,
            'allDay': self.all_day,
            'backgroundColor': self.background_color,
            'textColor': self.text_color,
            'borderColor': self.border_color,
            'classNames': list(self.class_names),
            'extendedProps': self.extended_props.to_dict()
        }


@dataclass
class SupportingData:
    """ID-keyed lookup maps for the six supporting sheets."""
    projects: Dict[str, Record] = field(default_factory=dict)
    employees: Dict[str, Record] = field(default_factory=dict)
    task_statuses: Dict[str, Record] = field(default_factory=dict)
    task_types: Dict[str, Record] = field(default_factory=dict)
    locations: Dict[str, Record] = field(default_factory=dict)
    project_statuses: Dict[str, Record] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Dict[str, Record]]:
        return {
            'projects': self.projects,
            'employees': self.employees,
            'taskStatuses': self.task_statuses,
            'taskTypes': self.task_types,
            'locations': self.locations,
            'projectStatuses': self.project_statuses
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Dict[str, Record]]) -> 'SupportingData':
        return cls(
            projects=data.get('projects') or {},
            employees=data.get('employees') or {},
            task_statuses=data.get('taskStatuses') or {},
            task_types=data.get('taskTypes') or {},
            locations=data.get('locations') or {},
            project_statuses=data.get('projectStatuses') or {}
        )


@dataclass
class DataBundle:
    """Task rows plus all lookup maps, cached as one unit."""
    task_data: List[Record] = field(default_factory=list)
    supporting_data: SupportingData = field(default_factory=SupportingData)

    def to_json(self) -> str:
        """Serialize the bundle; non-JSON cell values are stored as text."""
        return json.dumps(
            {
                'taskData': self.task_data,
                'supportingData': self.supporting_data.to_dict()
            },
            ensure_ascii=False,
            default=str
        )

    @classmethod
    def from_json(cls, payload: str) -> 'DataBundle':
        data = json.loads(payload)
        return cls(
            task_data=data.get('taskData') or [],
            supporting_data=SupportingData.from_dict(data.get('supportingData') or {})
        )


@dataclass
class BundleResult:
    """Outcome of loading the data bundle."""
    bundle: DataBundle
    source: str  # 'cache', 'sheets' or 'fallback'
    error: Optional[str] = None

