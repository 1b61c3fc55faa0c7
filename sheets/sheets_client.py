"""Read-only client for the Google Sheets values API."""
import logging
import time
from typing import Any, Dict, List, Optional, Sequence

import requests

logger = logging.getLogger(__name__)


class SheetsClient:
    """Client reading whole sheets from a spreadsheet as 2D grids."""

    BASE_URL = "https://sheets.googleapis.com/v4/spreadsheets"
    MAX_RETRIES = 3
    BASE_DELAY = 1  # seconds

    def __init__(self, spreadsheet_id: str, api_key: Optional[str] = None, timeout: int = 30):
        """
        Initialize the Sheets client.

        Args:
            spreadsheet_id: ID of the spreadsheet to read
            api_key: Google API key with read access to the spreadsheet
            timeout: HTTP request timeout in seconds (default: 30)
        """
        self.spreadsheet_id = spreadsheet_id
        self.api_key = api_key
        self.timeout = timeout

    def fetch_sheets(self, sheet_names: Sequence[str]) -> Dict[str, List[List[Any]]]:
        """
        Fetch several sheets in a single pass.

        The spreadsheet's sheet list is read first so that missing sheets
        can be reported and skipped instead of failing the batch.

        Args:
            sheet_names: Names of the sheets (tabs) to read

        Returns:
            Mapping from sheet name to rows; missing sheets map to []

        Raises:
            requests.RequestException: If all retry attempts fail
        """
        available = set(self.list_sheet_titles())
        present = [name for name in sheet_names if name in available]

        grids: Dict[str, List[List[Any]]] = {}
        for name in sheet_names:
            if name not in available:
                logger.error(f"Sheet \"{name}\" not found in spreadsheet {self.spreadsheet_id}")
                grids[name] = []

        if not present:
            return grids

        logger.info(f"Fetching {len(present)} sheets from spreadsheet {self.spreadsheet_id}")
        data = self._get(
            f"{self.BASE_URL}/{self.spreadsheet_id}/values:batchGet",
            params={
                'ranges': [self._quote_range(name) for name in present],
                'majorDimension': 'ROWS',
                'valueRenderOption': 'UNFORMATTED_VALUE',
                'dateTimeRenderOption': 'SERIAL_NUMBER'
            }
        )

        # valueRanges come back in request order
        value_ranges = data.get('valueRanges', [])
        for name, value_range in zip(present, value_ranges):
            grids[name] = value_range.get('values', [])

        logger.info(
            "Fetched sheets: " + ", ".join(
                f"{name}={len(grids.get(name, []))} rows" for name in present
            )
        )
        return grids

    def list_sheet_titles(self) -> List[str]:
        """
        List the titles of all sheets in the spreadsheet.

        Returns:
            Sheet titles in spreadsheet order
        """
        data = self._get(
            f"{self.BASE_URL}/{self.spreadsheet_id}",
            params={'fields': 'sheets.properties.title'}
        )
        return [
            sheet.get('properties', {}).get('title', '')
            for sheet in data.get('sheets', [])
        ]

    def _quote_range(self, sheet_name: str) -> str:
        escaped = sheet_name.replace("'", "''")
        return f"'{escaped}'"

    def _get(self, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        """
        Perform a GET request with retry logic.

        Args:
            url: Request URL
            params: Query parameters

        Returns:
            Decoded JSON response

        Raises:
            requests.RequestException: If all retry attempts fail
        """
        if self.api_key:
            params = dict(params, key=self.api_key)

        for attempt in range(self.MAX_RETRIES):
            try:
                logger.info(f"Requesting Sheets API (attempt {attempt + 1}/{self.MAX_RETRIES})")
                response = requests.get(url, params=params, timeout=self.timeout)
                response.raise_for_status()
                return response.json()

            except requests.RequestException as e:
                if attempt < self.MAX_RETRIES - 1:
                    # Calculate exponential backoff delay
                    delay = self.BASE_DELAY * (2 ** attempt)
                    logger.warning(
                        f"Request failed (attempt {attempt + 1}/{self.MAX_RETRIES}): {e}. "
                        f"Retrying in {delay} seconds..."
                    )
                    time.sleep(delay)
                else:
                    logger.error(
                        f"All {self.MAX_RETRIES} retry attempts failed. Last error: {e}"
                    )
                    raise
