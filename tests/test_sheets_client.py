"""Unit tests for SheetsClient."""
from unittest.mock import patch

import pytest
import responses
from requests.exceptions import RequestException

from sheets.sheets_client import SheetsClient

METADATA_URL = "https://sheets.googleapis.com/v4/spreadsheets/sheet-123"
BATCH_URL = "https://sheets.googleapis.com/v4/spreadsheets/sheet-123/values:batchGet"


@pytest.fixture(autouse=True)
def no_sleep():
    """Skip retry backoff delays."""
    with patch('sheets.sheets_client.time.sleep') as mock_sleep:
        yield mock_sleep


def _metadata(*titles):
    return {'sheets': [{'properties': {'title': title}} for title in titles]}


class TestSheetsClient:
    """Test cases for SheetsClient class."""

    @responses.activate
    def test_fetch_sheets_success(self):
        """Test fetching several sheets in one batch request."""
        responses.add(responses.GET, METADATA_URL, json=_metadata('Task', 'Project'), status=200)
        responses.add(
            responses.GET,
            BATCH_URL,
            json={
                'spreadsheetId': 'sheet-123',
                'valueRanges': [
                    {'range': 'Task!A1:C2', 'values': [['ID', 'dateIn'], [1, '2024-03-01']]},
                    {'range': 'Project!A1:B2', 'values': [['ID', 'name'], ['P1', 'Expo']]},
                ]
            },
            status=200
        )

        client = SheetsClient('sheet-123', api_key='key-abc', timeout=30)
        grids = client.fetch_sheets(['Task', 'Project'])

        assert grids == {
            'Task': [['ID', 'dateIn'], [1, '2024-03-01']],
            'Project': [['ID', 'name'], ['P1', 'Expo']],
        }
        assert len(responses.calls) == 2
        batch_url = responses.calls[1].request.url
        assert 'ranges=%27Task%27' in batch_url
        assert 'ranges=%27Project%27' in batch_url
        assert 'key=key-abc' in batch_url
        assert 'valueRenderOption=UNFORMATTED_VALUE' in batch_url
        assert 'dateTimeRenderOption=SERIAL_NUMBER' in batch_url

    @responses.activate
    def test_missing_sheet_yields_empty_grid(self):
        """Test that sheets absent from the spreadsheet map to no rows."""
        responses.add(responses.GET, METADATA_URL, json=_metadata('Task'), status=200)
        responses.add(
            responses.GET,
            BATCH_URL,
            json={'valueRanges': [{'range': 'Task!A1:A1', 'values': [['ID']]}]},
            status=200
        )

        grids = SheetsClient('sheet-123').fetch_sheets(['Task', 'Location'])

        assert grids == {'Task': [['ID']], 'Location': []}

    @responses.activate
    def test_empty_sheet_has_no_values(self):
        """Test that a value range without values maps to no rows."""
        responses.add(responses.GET, METADATA_URL, json=_metadata('Task'), status=200)
        responses.add(
            responses.GET,
            BATCH_URL,
            json={'valueRanges': [{'range': 'Task!A1:Z1000'}]},
            status=200
        )

        assert SheetsClient('sheet-123').fetch_sheets(['Task']) == {'Task': []}

    @responses.activate
    def test_no_sheets_present_skips_batch(self):
        """Test that no batch request is made when no sheet exists."""
        responses.add(responses.GET, METADATA_URL, json=_metadata('Other'), status=200)

        grids = SheetsClient('sheet-123').fetch_sheets(['Task'])

        assert grids == {'Task': []}
        assert len(responses.calls) == 1

    @responses.activate
    def test_retry_success(self, no_sleep):
        """Test retry logic succeeds after initial failures."""
        responses.add(responses.GET, METADATA_URL, body="Server Error", status=500)
        responses.add(responses.GET, METADATA_URL, body="Server Error", status=500)
        responses.add(responses.GET, METADATA_URL, json=_metadata('Task'), status=200)

        titles = SheetsClient('sheet-123').list_sheet_titles()

        assert titles == ['Task']
        assert len(responses.calls) == 3
        assert [call.args[0] for call in no_sleep.call_args_list] == [1, 2]

    @responses.activate
    def test_all_retries_fail(self):
        """Test that exception is raised when all retries fail."""
        for _ in range(3):
            responses.add(responses.GET, METADATA_URL, body="Server Error", status=500)

        client = SheetsClient('sheet-123')

        with pytest.raises(RequestException):
            client.fetch_sheets(['Task'])

        assert len(responses.calls) == 3
