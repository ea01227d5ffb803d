"""
Row operations: put, get, delete, multi-delete and query.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json
from decimal import Decimal
from typing import Any

from boto3.dynamodb.conditions import Key

from ..exceptions import RowNotFoundError
from ..utils import to_plain
from .client import DynamoDBClient


def _floats_to_decimal(value: Any) -> Any:
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {k: _floats_to_decimal(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_floats_to_decimal(v) for v in value]
    return value


def parse_row(row: dict[str, Any] | str) -> dict[str, Any]:
    """
    Normalize a row given as a dict or a JSON document.

    Floats are converted to Decimal since DynamoDB rejects binary floats.

    Raises:
        ValueError: If the JSON is invalid or not an object
    """
    if isinstance(row, str):
        try:
            parsed = json.loads(row, parse_float=Decimal)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON row: {e}") from e
        if not isinstance(parsed, dict):
            raise ValueError("Row must be a JSON object")
        return parsed
    return _floats_to_decimal(row)  # type: ignore[no-any-return]


def coerce_key_value(value: Any, attr_type: str) -> Any:
    """
    Convert a key value typed on the command line to the attribute's type.

    Raises:
        ValueError: If a numeric key value is not a number
    """
    if attr_type == "N" and isinstance(value, str):
        try:
            return Decimal(value)
        except ArithmeticError as e:
            raise ValueError(f"Expected a number, got '{value}'") from e
    return value


def get_key_info(client: DynamoDBClient, table_name: str) -> tuple[str, str | None, dict[str, str]]:
    """
    Look up the key layout of a table.

    Returns:
        Tuple of (shard key name, sort key name or None, attribute types by name)
    """
    table = client.describe_table(table_name)
    schema = table.get("KeySchema", [])
    shard_key = next(k["AttributeName"] for k in schema if k["KeyType"] == "HASH")
    sort_key = next((k["AttributeName"] for k in schema if k["KeyType"] == "RANGE"), None)
    types = {a["AttributeName"]: a["AttributeType"] for a in table.get("AttributeDefinitions", [])}
    return shard_key, sort_key, types


def put_row(client: DynamoDBClient, table_name: str, row: dict[str, Any] | str) -> dict[str, Any]:
    """
    Insert or replace a row.

    Args:
        client: DynamoDB client
        table_name: Table name
        row: Row as dict or JSON string; must contain all primary key fields

    Returns:
        The stored row
    """
    item = parse_row(row)
    client.put_item(table_name, item)
    return to_plain(item)  # type: ignore[no-any-return]


def get_row(client: DynamoDBClient, table_name: str, key: dict[str, Any] | str) -> dict[str, Any]:
    """
    Get a row by primary key.

    Raises:
        RowNotFoundError: If no row exists for the key
    """
    parsed = parse_row(key)
    item = client.get_item(table_name, parsed)
    if item is None:
        raise RowNotFoundError(
            f"No row in '{table_name}' for key {json.dumps(to_plain(parsed))}"
        )
    return to_plain(item)  # type: ignore[no-any-return]


def delete_row(
    client: DynamoDBClient, table_name: str, key: dict[str, Any] | str
) -> dict[str, Any]:
    """
    Delete a row by primary key. Deleting a missing row succeeds.

    Returns:
        Dict with the key and whether a row was actually removed
    """
    parsed = parse_row(key)
    old = client.delete_item(table_name, parsed)
    return {"table": table_name, "key": to_plain(parsed), "deleted": old is not None}


def multi_delete(client: DynamoDBClient, table_name: str, shard_value: Any) -> dict[str, Any]:
    """
    Delete every row that shares a shard key value.

    Rows with the same shard key are co-located, so they can be found with a
    single partition query and removed together.

    Args:
        client: DynamoDB client
        table_name: Table name
        shard_value: Value of the shard (partition) key

    Returns:
        Dict with the shard key and number of rows deleted
    """
    shard_key, sort_key, types = get_key_info(client, table_name)
    shard_value = coerce_key_value(shard_value, types.get(shard_key, "S"))
    rows = client.query(table_name, Key(shard_key).eq(shard_value))

    key_names = [shard_key] + ([sort_key] if sort_key else [])
    keys = [{name: row[name] for name in key_names} for row in rows]
    deleted = client.batch_delete(table_name, keys) if keys else 0

    return {
        "table": table_name,
        "shard_key": {shard_key: to_plain(shard_value)},
        "deleted": deleted,
    }


def query_rows(
    client: DynamoDBClient,
    table_name: str,
    shard_value: Any = None,
    index_name: str | None = None,
    index_key: str | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """
    Query rows by shard key, by secondary index, or read the whole table.

    Args:
        client: DynamoDB client
        table_name: Table name
        shard_value: Key value to match (table shard key, or index_key for an index)
        index_name: Secondary index to query (requires index_key and shard_value)
        index_key: Partition key attribute of the index
        limit: Maximum number of rows to return

    Returns:
        Dict with rows and count

    Raises:
        ValueError: If an index is given without its key and value
    """
    if index_name:
        if index_key is None or shard_value is None:
            raise ValueError("Index query requires an index key and a value")
        _, _, types = get_key_info(client, table_name)
        value = coerce_key_value(shard_value, types.get(index_key, "S"))
        rows = client.query(table_name, Key(index_key).eq(value), index_name, limit)
    elif shard_value is not None:
        shard_key, _, types = get_key_info(client, table_name)
        value = coerce_key_value(shard_value, types.get(shard_key, "S"))
        rows = client.query(table_name, Key(shard_key).eq(value), limit=limit)
    else:
        rows = client.scan(table_name, limit)

    plain = to_plain(rows)
    return {"table": table_name, "rows": plain, "count": len(plain)}
