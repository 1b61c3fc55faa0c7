"""Conversion of raw sheet grids into keyed records and lookup maps."""
import logging
from typing import Any, Dict, List, Sequence

from processor.constants import ID_FIELD

logger = logging.getLogger(__name__)

# A cell is a string, number, boolean, date-like value or empty
Record = Dict[str, Any]


def cell_to_str(value: Any) -> str:
    """
    Render a cell value as trimmed text.

    Integral floats lose their trailing ``.0`` so that numeric IDs read
    from the sheet match references typed as text.

    Args:
        value: Raw cell value

    Returns:
        Trimmed string, empty for missing values
    """
    if value is None:
        return ''
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def first_present(record: Record, *fields: str, default: str = '') -> str:
    """
    Resolve a display field from an ordered list of candidate columns.

    Returns the first candidate whose value is non-empty after trimming,
    falling back to ``default``. Every derived field in the pipeline is
    resolved through this function.

    Args:
        record: Source record (may be empty)
        fields: Candidate column names in priority order
        default: Value used when no candidate is present

    Returns:
        Resolved string value
    """
    for field in fields:
        text = cell_to_str(record.get(field))
        if text:
            return text
    return default


def rows_to_records(rows: Sequence[Sequence[Any]]) -> List[Record]:
    """
    Convert a 2D grid with a header row into a list of records.

    Args:
        rows: Grid rows, row 0 being the header

    Returns:
        One record per data row; empty if there are no data rows
    """
    if not rows or len(rows) < 2:
        return []

    headers = [cell_to_str(header) for header in rows[0]]
    records = []

    for row in rows[1:]:
        record = {}
        for index, header in enumerate(headers):
            if not header:
                continue
            record[header] = row[index] if index < len(row) else ''
        records.append(record)

    return records


def key_text(value: Any) -> str:
    """
    Render a key cell as text, empty when it cannot identify a row.

    Numeric zero and False count as empty keys.
    """
    if isinstance(value, (bool, int, float)) and not value:
        return ''
    return cell_to_str(value)


def filter_records_with_id(records: List[Record], key_field: str = ID_FIELD) -> List[Record]:
    """Drop records whose key field is empty."""
    kept = [record for record in records if key_text(record.get(key_field))]
    dropped = len(records) - len(kept)
    if dropped:
        logger.info(f"Dropped {dropped} records without {key_field}")
    return kept


def records_to_map(records: List[Record], key_field: str = ID_FIELD) -> Dict[str, Record]:
    """
    Index records by a key field.

    Records with an empty key are skipped. When two records share a key
    the later one wins.

    Args:
        records: Records in sheet order
        key_field: Column used as the map key

    Returns:
        Mapping from key text to record
    """
    lookup = {}
    for record in records:
        if not record:
            continue
        key = key_text(record.get(key_field))
        if key:
            lookup[key] = record
    return lookup
