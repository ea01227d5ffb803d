"""
DynamoDB client wrapper with error handling.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ..constants import LOCAL_REGION
from ..exceptions import (
    AWSPermissionError,
    AWSThrottlingError,
    ConditionFailedError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TableToolError,
)
from ..models import ConnectionConfig, TableState


def create_session(config: ConnectionConfig) -> boto3.Session:
    """
    Create a boto3 session for the configured target.

    Args:
        config: Connection configuration

    Returns:
        boto3 Session
    """
    if config.cloud:
        return boto3.Session(profile_name=config.profile, region_name=config.region)
    # The local simulator accepts any credentials; the tenant id stands in for both
    return boto3.Session(
        aws_access_key_id=config.tenant_id,
        aws_secret_access_key=config.tenant_id,
        region_name=LOCAL_REGION,
    )


def _error_code(error: Exception) -> str | None:
    """Return the service error code, or None for transport and credential errors."""
    if isinstance(error, ClientError):
        return error.response["Error"]["Code"]  # type: ignore[no-any-return]
    return None


class DynamoDBClient:
    """DynamoDB client wrapper with error handling."""

    def __init__(self, config: ConnectionConfig, session: Any = None):
        """
        Initialize DynamoDB client.

        Args:
            config: Connection configuration (local endpoint or cloud)
            session: Optional pre-built boto3 session
        """
        session = session or create_session(config)
        self.config = config
        self.dynamodb = session.resource("dynamodb", endpoint_url=config.endpoint_url)
        self.client = session.client("dynamodb", endpoint_url=config.endpoint_url)

    def table(self, table_name: str) -> Any:
        """Return the boto3 Table resource for a table name."""
        return self.dynamodb.Table(table_name)

    def get_table_state(self, table_name: str) -> TableState:
        """
        Fetch the current lifecycle state of a table.

        A table that does not exist (or no longer exists) is reported as DROPPED.

        Args:
            table_name: Table name

        Returns:
            Current TableState

        Raises:
            TableToolError: For DynamoDB errors other than table not found
        """
        try:
            response = self.client.describe_table(TableName=table_name)
        except (ClientError, BotoCoreError) as e:
            if _error_code(e) == "ResourceNotFoundException":
                return TableState.from_status(None)
            self._handle_error(e, table_name)
            raise  # For type checker
        return TableState.from_status(response["Table"].get("TableStatus"))

    def describe_table(self, table_name: str) -> dict[str, Any]:
        """
        Describe a table.

        Raises:
            TableNotFoundError: If table does not exist
        """
        try:
            response = self.client.describe_table(TableName=table_name)
            return response["Table"]  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, table_name)
            raise  # For type checker

    def create_table(self, table_name: str, **kwargs: Any) -> dict[str, Any]:
        """
        Submit a create table request.

        Raises:
            TableAlreadyExistsError: If table already exists
        """
        try:
            response = self.client.create_table(TableName=table_name, **kwargs)
            return response["TableDescription"]  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            if _error_code(e) == "ResourceInUseException":
                raise TableAlreadyExistsError(f"Table '{table_name}' already exists")
            self._handle_error(e, table_name)
            raise  # For type checker

    def delete_table(self, table_name: str) -> dict[str, Any]:
        """
        Submit a drop table request.

        Raises:
            TableNotFoundError: If table does not exist
        """
        try:
            response = self.client.delete_table(TableName=table_name)
            return response["TableDescription"]  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, table_name)
            raise  # For type checker

    def list_tables(self) -> list[str]:
        """List all table names visible to this connection."""
        names: list[str] = []
        kwargs: dict[str, Any] = {}
        try:
            while True:
                response = self.client.list_tables(**kwargs)
                names.extend(response.get("TableNames", []))
                last = response.get("LastEvaluatedTableName")
                if not last:
                    return names
                kwargs["ExclusiveStartTableName"] = last
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, "")
            raise  # For type checker

    def put_item(
        self, table_name: str, item: dict[str, Any], condition_expression: str | None = None
    ) -> dict[str, Any]:
        """
        Put item with optional condition.

        Raises:
            ConditionFailedError: If condition fails
            TableToolError: For other DynamoDB errors
        """
        try:
            kwargs: dict[str, Any] = {"Item": item}
            if condition_expression:
                kwargs["ConditionExpression"] = condition_expression
            return self.table(table_name).put_item(**kwargs)  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, table_name)
            raise  # For type checker

    def get_item(self, table_name: str, key: dict[str, Any]) -> dict[str, Any] | None:
        """
        Get item by key.

        Returns:
            Item if found, None otherwise
        """
        try:
            response = self.table(table_name).get_item(Key=key, ConsistentRead=True)
            return response.get("Item")  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, table_name)
            raise  # For type checker

    def delete_item(self, table_name: str, key: dict[str, Any]) -> dict[str, Any] | None:
        """
        Delete item by key.

        Returns:
            The deleted item, or None if nothing was stored under the key
        """
        try:
            response = self.table(table_name).delete_item(Key=key, ReturnValues="ALL_OLD")
            return response.get("Attributes")  # type: ignore[no-any-return]
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, table_name)
            raise  # For type checker

    def query(
        self,
        table_name: str,
        key_condition_expression: Any,
        index_name: str | None = None,
        limit: int | None = None,
    ) -> list[dict[str, Any]]:
        """
        Query items by key condition, following pagination.

        Args:
            table_name: Table name
            key_condition_expression: Key condition expression
            index_name: Optional secondary index to query
            limit: Maximum number of items to return

        Returns:
            List of items
        """
        kwargs: dict[str, Any] = {"KeyConditionExpression": key_condition_expression}
        if index_name:
            kwargs["IndexName"] = index_name
        return self._paginate(table_name, "query", kwargs, limit)

    def scan(self, table_name: str, limit: int | None = None) -> list[dict[str, Any]]:
        """Read every item in a table, following pagination."""
        return self._paginate(table_name, "scan", {}, limit)

    def batch_delete(self, table_name: str, keys: list[dict[str, Any]]) -> int:
        """
        Delete many items by key.

        Returns:
            Number of delete requests sent
        """
        try:
            with self.table(table_name).batch_writer() as batch:
                for key in keys:
                    batch.delete_item(Key=key)
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, table_name)
            raise  # For type checker
        return len(keys)

    def _paginate(
        self, table_name: str, operation: str, kwargs: dict[str, Any], limit: int | None
    ) -> list[dict[str, Any]]:
        table = self.table(table_name)
        items: list[dict[str, Any]] = []
        try:
            while True:
                if limit:
                    kwargs["Limit"] = limit - len(items)
                response = getattr(table, operation)(**kwargs)
                items.extend(response.get("Items", []))
                last_key = response.get("LastEvaluatedKey")
                if not last_key or (limit and len(items) >= limit):
                    return items
                kwargs["ExclusiveStartKey"] = last_key
        except (ClientError, BotoCoreError) as e:
            self._handle_error(e, table_name)
            raise  # For type checker

    def _handle_error(self, error: ClientError | BotoCoreError, table_name: str) -> None:
        """
        Convert boto3 errors to table tool exceptions.

        Errors raised before a response arrives (unreachable endpoint, missing
        credentials or region) have no service error code and become TableToolError.

        Args:
            error: ClientError or BotoCoreError from boto3
            table_name: Table the request targeted

        Raises:
            ConditionFailedError: If condition check failed
            TableNotFoundError: If table not found
            AWSThrottlingError: If throttled
            AWSPermissionError: If permission denied
            TableToolError: For other errors
        """
        code = _error_code(error)

        if code == "ConditionalCheckFailedException":
            raise ConditionFailedError(f"Condition failed: {error}")
        elif code == "ResourceNotFoundException":
            raise TableNotFoundError(f"Table '{table_name}' not found")
        elif code == "ResourceInUseException":
            raise TableToolError(f"Table '{table_name}' is busy with another operation")
        elif code in ("ProvisionedThroughputExceededException", "ThrottlingException"):
            raise AWSThrottlingError("DynamoDB throttling - retry with backoff")
        elif code in ("AccessDeniedException", "UnrecognizedClientException"):
            raise AWSPermissionError("AWS permission denied")
        else:
            raise TableToolError(f"DynamoDB error: {error}")
