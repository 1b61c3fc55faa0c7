"""Fixed configuration data for the calendar pipeline."""
from types import MappingProxyType

# Backing store sheets
TASK_SHEET = 'Task'
ID_FIELD = 'ID'

# Supporting bundle key -> sheet name
LOOKUP_SHEETS = MappingProxyType({
    'projects': 'Project',
    'employees': 'Employee',
    'taskStatuses': 'TaskStatus',
    'taskTypes': 'TaskType',
    'locations': 'Location',
    'projectStatuses': 'ProjectStatus',
})

ALL_SHEETS = (TASK_SHEET,) + tuple(LOOKUP_SHEETS.values())

# Cache
CACHE_KEY = 'all_data_v1'
CACHE_EXPIRATION_SECONDS = 3600

# Statuses are compared after trim + lower-case
INACTIVE_PROJECT_STATUSES = frozenset({
    'מבוטל',      # canceled
    'אופציונלי',  # optional
    'טנטטיבי',    # tentative
    'נדחה',       # postponed
    'canceled',
    'cancelled',
    'tentative',
})

INACTIVE_TASK_STATUSES = frozenset({
    'מבוטל',
    'נדחה',
    'canceled',
    'cancelled',
})

CALENDAR_EVENT_TYPE = 'ארוע לוח שנה'
CALENDAR_EVENT_CLASS = 'calendar-event'

BACKGROUND_COLOR = '#f0f2f5'
DEFAULT_TEXT_COLOR = '#000000'

COLOR_NAMES = MappingProxyType({
    'red': '#FF0000',
    'blue': '#0000FF',
    'green': '#008000',
    'black': '#000000',
    'white': '#FFFFFF',
    'orange': '#FFA500',
    'purple': '#800080',
    'yellow': '#FFFF00',
    'grey': '#808080',
    'gray': '#808080',
})

# Display fallbacks sent to the calendar widget
UNKNOWN_TASK_ID = 'לא ידוע'
STATUS_NOT_DEFINED = 'לא הוגדר'
NO_PROJECT = 'ללא פרויקט'
UNASSIGNED = 'לא שויך'
