"""Loading of the task/lookup data bundle through the cache."""
import logging
from typing import Dict, List

from processor.constants import (
    ALL_SHEETS,
    CACHE_EXPIRATION_SECONDS,
    CACHE_KEY,
    ID_FIELD,
    LOOKUP_SHEETS,
    TASK_SHEET,
)
from processor.models import BundleResult, DataBundle, SupportingData
from processor.tabular import filter_records_with_id, records_to_map, rows_to_records
from sheets.sheets_client import SheetsClient
from storage.dynamodb_cache import DynamoDBCache

logger = logging.getLogger(__name__)


class DataRepository:
    """Repository serving the data bundle from cache or the spreadsheet."""

    def __init__(
        self,
        sheets_client: SheetsClient,
        cache: DynamoDBCache,
        cache_key: str = CACHE_KEY,
        ttl_seconds: int = CACHE_EXPIRATION_SECONDS
    ):
        self.sheets_client = sheets_client
        self.cache = cache
        self.cache_key = cache_key
        self.ttl_seconds = ttl_seconds

    def load_bundle(self) -> BundleResult:
        """
        Load the full data bundle.

        A valid cache entry is returned without touching the spreadsheet.
        Otherwise all sheets are read in one pass, the bundle is cached on a
        best-effort basis, and a spreadsheet failure yields an empty bundle.

        Returns:
            BundleResult with the bundle, its source and any error
        """
        cached = self.cache.get(self.cache_key)
        if cached:
            try:
                bundle = DataBundle.from_json(cached)
                logger.info(
                    f"Loaded data bundle from cache with {len(bundle.task_data)} tasks"
                )
                return BundleResult(bundle=bundle, source='cache')
            except (ValueError, TypeError, AttributeError) as e:
                logger.warning(f"Discarding unreadable cache entry: {e}")

        try:
            grids = self.sheets_client.fetch_sheets(ALL_SHEETS)
        except Exception as e:
            logger.error(
                f"Failed to read spreadsheet, serving empty data: {str(e)}",
                extra={'error_type': type(e).__name__},
                exc_info=True
            )
            return BundleResult(bundle=DataBundle(), source='fallback', error=str(e))

        bundle = self.build_bundle(grids)
        self.cache.put(self.cache_key, bundle.to_json(), self.ttl_seconds)
        return BundleResult(bundle=bundle, source='sheets')

    def build_bundle(self, grids: Dict[str, List[list]]) -> DataBundle:
        """
        Build a bundle from raw sheet grids.

        Args:
            grids: Mapping from sheet name to its rows (header first)

        Returns:
            DataBundle with ID-gated task rows and ID-keyed lookups
        """
        task_data = filter_records_with_id(rows_to_records(grids.get(TASK_SHEET, [])))

        lookups = {
            bundle_key: records_to_map(rows_to_records(grids.get(sheet_name, [])), ID_FIELD)
            for bundle_key, sheet_name in LOOKUP_SHEETS.items()
        }

        logger.info(
            f"Built data bundle with {len(task_data)} tasks",
            extra={name: len(lookup) for name, lookup in lookups.items()}
        )
        return DataBundle(
            task_data=task_data,
            supporting_data=SupportingData.from_dict(lookups)
        )
