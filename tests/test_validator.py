"""Unit tests for task validation and date parsing."""
from datetime import date, datetime, time

import pytest

from processor.dates import parse_date, parse_time
from processor.validator import TaskValidator, validate_task


class TestValidateTask:
    """Test cases for validate_task."""

    def test_valid_task(self):
        """Test that a complete task has no errors."""
        task = {'ID': 1, 'dateIn': '2024-03-01', 'dateOut': '2024-03-02', 'Project': 'P1'}

        assert validate_task(task) == []

    def test_missing_start_date(self):
        """Test that a missing dateIn is reported."""
        errors = validate_task({'ID': 1, 'Project': 'P1'})

        assert len(errors) == 1
        assert 'dateIn' in errors[0]

    def test_unparseable_start_date(self):
        """Test that an unparseable dateIn is reported."""
        errors = validate_task({'ID': 1, 'dateIn': 'not-a-date', 'Project': 'P1'})

        assert len(errors) == 1
        assert 'dateIn' in errors[0]

    def test_end_date_not_checked_when_start_invalid(self):
        """Test that dateOut is skipped when dateIn already failed."""
        errors = validate_task({'ID': 1, 'dateIn': '', 'dateOut': 'garbage', 'Project': 'P1'})

        assert len(errors) == 1
        assert 'dateOut' not in errors[0]

    def test_unparseable_end_date(self):
        """Test that an unparseable dateOut is reported."""
        errors = validate_task({'ID': 1, 'dateIn': '2024-03-01', 'dateOut': 'garbage', 'Project': 'P1'})

        assert len(errors) == 1
        assert 'dateOut' in errors[0]

    def test_end_before_start(self):
        """Test that dateOut earlier than dateIn is reported."""
        errors = validate_task({'ID': 1, 'dateIn': '2024-03-02', 'dateOut': '2024-03-01', 'Project': 'P1'})

        assert len(errors) == 1
        assert 'earlier' in errors[0]

    def test_end_on_start_day(self):
        """Test that a task ending on its start day is valid."""
        task = {'ID': 1, 'dateIn': '2024-03-01', 'dateOut': '2024-03-01', 'Project': 'P1'}

        assert validate_task(task) == []

    def test_end_later_same_day(self):
        """Test that an end time later on the start day is valid."""
        task = {'ID': 1, 'dateIn': '2024-03-01T08:00', 'dateOut': '2024-03-01T17:30', 'Project': 'P1'}

        assert validate_task(task) == []

    def test_end_earlier_same_day(self):
        """Test that an end time earlier on the start day is reported."""
        task = {'ID': 1, 'dateIn': '2024-03-01T17:30', 'dateOut': '2024-03-01T08:00', 'Project': 'P1'}

        errors = validate_task(task)

        assert len(errors) == 1
        assert 'earlier' in errors[0]

    def test_serial_dates(self):
        """Test that serial-number date cells compare as dates."""
        task = {'ID': 9, 'dateIn': 45363, 'dateOut': 45364, 'Project': 'P1'}

        assert validate_task(task) == []

    def test_day_first_text_dates(self):
        """Test that day-first text dates are read consistently."""
        task = {'ID': 9, 'dateIn': '12/03/2024', 'dateOut': '13/03/2024', 'Project': 'P1'}

        assert validate_task(task) == []
        assert parse_date('05/03/2024') == datetime(2024, 3, 5)
        assert parse_date('12/03/2024') == datetime(2024, 3, 12)

    def test_all_errors_collected(self):
        """Test that start date and project errors are both reported."""
        errors = validate_task({'ID': 1})

        assert len(errors) == 2
        assert 'Project' in errors[1]

    def test_unknown_id_marker(self):
        """Test that tasks without ID use the unknown marker."""
        errors = validate_task({'Project': 'P1'})

        assert 'לא ידוע' in errors[0]


class TestTaskValidator:
    """Test cases for TaskValidator."""

    def test_drops_invalid_and_types_valid(self, caplog):
        """Test that invalid rows are dropped and logged with reasons."""
        records = [
            {'ID': 1, 'dateIn': '2024-03-01', 'Project': 'P1', 'timeIn': '09:30',
             'TaskType': 'T1', 'TaskNotes': 'Bring cables'},
            {'ID': 2, 'dateIn': 'bad', 'Project': 'P1'},
        ]

        with caplog.at_level('WARNING'):
            tasks = TaskValidator().validate_tasks(records)

        assert len(tasks) == 1
        task = tasks[0]
        assert task.task_id == 1
        assert task.date_in == datetime(2024, 3, 1)
        assert task.date_out is None
        assert task.time_in == time(9, 30)
        assert task.project == 'P1'
        assert task.task_type == 'T1'
        assert task.notes == 'Bring cables'
        assert any('task ID 2' in record.message for record in caplog.records)

    def test_invalid_time_is_dropped_not_fatal(self):
        """Test that an unparseable timeIn does not invalidate the task."""
        tasks = TaskValidator().validate_tasks(
            [{'ID': 1, 'dateIn': '2024-03-01', 'Project': 'P1', 'timeIn': 'soon'}]
        )

        assert len(tasks) == 1
        assert tasks[0].time_in is None


class TestDateParsing:
    """Test cases for date and time parsing."""

    @pytest.mark.parametrize('value', [
        '2024-03-01',
        '01/03/2024',
        '01.03.2024',
        'March 1, 2024',
        '2024-03-01T00:00:00',
        date(2024, 3, 1),
        45352,
    ])
    def test_parse_date_formats(self, value):
        """Test that supported representations parse to the same day."""
        assert parse_date(value).date() == date(2024, 3, 1)

    @pytest.mark.parametrize('value', [None, '', 'invalid-date', True])
    def test_parse_date_invalid(self, value):
        """Test that empty and unparseable values return None."""
        assert parse_date(value) is None

    @pytest.mark.parametrize('value,expected', [
        ('19:00', time(19, 0)),
        ('7:00 PM', time(19, 0)),
        ('9:30 AM', time(9, 30)),
        ('7:00PM', time(19, 0)),
        ('1899-12-30T14:15:00', time(14, 15)),
        (0.5, time(12, 0)),
        (datetime(2024, 1, 1, 8, 45), time(8, 45)),
    ])
    def test_parse_time_formats(self, value, expected):
        """Test supported time representations."""
        assert parse_time(value) == expected

    def test_parse_time_invalid(self):
        """Test that invalid times return None."""
        assert parse_time('invalid-time') is None
        assert parse_time('') is None
