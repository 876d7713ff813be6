"""
DynamoDB utility functions for data access.
"""
import os
from typing import Dict, List, Optional, Any
import boto3
from boto3.dynamodb.conditions import Key

# Singleton instance
_dynamo_instance = None

def get_dynamo() -> 'DynamoDBClient':
    """
    Get or create singleton DynamoDB client instance.

    This is the only way the record store reaches DynamoDB. Never instantiate
    DynamoDBClient directly.

    Returns:
        DynamoDBClient: Singleton instance of DynamoDB client

    Raises:
        EnvironmentError: If CYCLE_TABLE_NAME environment variable is not set
    """
    global _dynamo_instance
    if _dynamo_instance is None:
        try:
            table_name = os.environ['CYCLE_TABLE_NAME']
        except KeyError:
            raise EnvironmentError(
                "CYCLE_TABLE_NAME environment variable not set. "
                "This variable must be set to the DynamoDB table name."
            )
        _dynamo_instance = DynamoDBClient(table_name)
    return _dynamo_instance

class DynamoDBClient:
    """Client for interacting with DynamoDB table."""

    def __init__(self, table_name: str):
        self.dynamodb = boto3.resource('dynamodb')
        self.table = self.dynamodb.Table(table_name)

    def put_item(self, item: Dict[str, Any]) -> Dict[str, Any]:
        return self.table.put_item(Item=item)

    def get_item(self, key: Dict[str, str]) -> Optional[Dict[str, Any]]:
        """
        Get a single item from the table.

        Returns:
            Item if found, None otherwise
        """
        response = self.table.get_item(Key=key)
        return response.get('Item')

    def query_items(
        self,
        partition_key: str,
        partition_value: str,
        sort_key_prefix: Optional[str] = None
    ) -> List[Dict[str, Any]]:
        """
        Query items by partition key, following pagination.

        Args:
            partition_key: Name of partition key
            partition_value: Value of partition key
            sort_key_prefix: Optional prefix the sort key must begin with

        Returns:
            List of matching items
        """
        key_condition = Key(partition_key).eq(partition_value)
        if sort_key_prefix:
            key_condition = key_condition & Key('SK').begins_with(sort_key_prefix)

        items: List[Dict[str, Any]] = []
        kwargs: Dict[str, Any] = {'KeyConditionExpression': key_condition}
        while True:
            response = self.table.query(**kwargs)
            items.extend(response.get('Items', []))
            last_key = response.get('LastEvaluatedKey')
            if not last_key:
                return items
            kwargs['ExclusiveStartKey'] = last_key

    def delete_item(self, key: Dict[str, str]) -> Dict[str, Any]:
        return self.table.delete_item(Key=key)

def create_pk(user_id: str) -> str:
    """Create partition key from user ID."""
    return f"USER#{user_id}"

PERIOD_SK_PREFIX = "PERIOD#"
SYMPTOM_SK_PREFIX = "SYMPTOM#"
CONFIG_SK = "CONFIG"

def create_period_sk(period_id: str) -> str:
    """Create sort key for period records."""
    return f"{PERIOD_SK_PREFIX}{period_id}"

def create_symptom_sk(date_str: str, symptom_id: str) -> str:
    """
    Create sort key for symptom log entries.

    Entries are unique per date and symptom, so logging the same symptom
    twice on one day overwrites the earlier entry.

    Args:
        date_str: ISO format date string
        symptom_id: Symptom identifier

    Returns:
        Sort key in format "SYMPTOM#{date_str}#{symptom_id}"
    """
    return f"{SYMPTOM_SK_PREFIX}{date_str}#{symptom_id}"
