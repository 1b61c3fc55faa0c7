"""DynamoDB-backed key/value cache with expiration."""
import logging
import time
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class DynamoDBCache:
    """Time-expiring string cache stored in a DynamoDB table."""

    KEY_ATTRIBUTE = 'cache_key'
    VALUE_ATTRIBUTE = 'payload'
    EXPIRY_ATTRIBUTE = 'expires_at'  # Also the table's TTL attribute

    def __init__(self, table_name: str):
        """
        Initialize DynamoDB resource and table reference.

        Args:
            table_name: Name of the DynamoDB cache table
        """
        self.table_name = table_name
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)
        logger.info(f"Initialized DynamoDBCache for table: {table_name}")

    def get(self, key: str) -> Optional[str]:
        """
        Read a cached value.

        DynamoDB removes expired items lazily, so expiry is checked here.
        Read failures are logged and reported as a miss.

        Args:
            key: Cache key

        Returns:
            Cached string, or None on miss, expiry or error
        """
        try:
            response = self.table.get_item(
                Key={self.KEY_ATTRIBUTE: key},
                ConsistentRead=True
            )
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Error reading cache key {key}: {e}")
            return None

        item = response.get('Item')
        if not item:
            logger.info(f"Cache miss for key: {key}")
            return None

        expires_at = int(item.get(self.EXPIRY_ATTRIBUTE, 0))
        if expires_at <= int(time.time()):
            logger.info(f"Cache entry expired for key: {key}")
            return None

        logger.info(f"Cache hit for key: {key}")
        return item.get(self.VALUE_ATTRIBUTE)

    def put(self, key: str, value: str, ttl_seconds: int) -> bool:
        """
        Store a value with an expiration.

        Write failures, such as an item over the DynamoDB size limit, are
        logged and never raised.

        Args:
            key: Cache key
            value: Serialized value
            ttl_seconds: Seconds until the entry expires

        Returns:
            True if the value was stored, False otherwise
        """
        item = {
            self.KEY_ATTRIBUTE: key,
            self.VALUE_ATTRIBUTE: value,
            self.EXPIRY_ATTRIBUTE: int(time.time()) + ttl_seconds
        }

        try:
            self.table.put_item(Item=item)
        except (ClientError, BotoCoreError) as e:
            logger.error(
                f"Could not cache key {key} ({len(value)} characters); "
                f"data might be too large: {e}"
            )
            return False

        logger.info(f"Cached key {key} for {ttl_seconds} seconds")
        return True
