"""
Table management operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any, Literal

from ..exceptions import TableAlreadyExistsError, TableNotFoundError
from ..models import KeyAttribute, KeySchema
from .client import DynamoDBClient

BillingMode = Literal["PAY_PER_REQUEST", "PROVISIONED"]


def _key_elements(partition: KeyAttribute, sort: KeyAttribute | None) -> list[dict[str, str]]:
    elements = [{"AttributeName": partition.name, "KeyType": "HASH"}]
    if sort:
        elements.append({"AttributeName": sort.name, "KeyType": "RANGE"})
    return elements


def build_create_request(
    key_schema: KeySchema,
    billing_mode: BillingMode = "PAY_PER_REQUEST",
    read_units: int = 5,
    write_units: int = 5,
) -> dict[str, Any]:
    """
    Build create_table keyword arguments from a key schema.

    Args:
        key_schema: Primary key and secondary index layout
        billing_mode: Billing mode (PAY_PER_REQUEST or PROVISIONED)
        read_units: Read capacity units (PROVISIONED only)
        write_units: Write capacity units (PROVISIONED only)

    Returns:
        Keyword arguments for DynamoDB CreateTable (without TableName)
    """
    attributes: dict[str, str] = {}
    for attr in (key_schema.shard_key, key_schema.sort_key):
        if attr:
            attributes[attr.name] = attr.type
    for index in key_schema.indexes:
        for attr in (index.partition_key, index.sort_key):
            if attr:
                attributes[attr.name] = attr.type

    throughput = {"ReadCapacityUnits": read_units, "WriteCapacityUnits": write_units}

    request: dict[str, Any] = {
        "KeySchema": _key_elements(key_schema.shard_key, key_schema.sort_key),
        "AttributeDefinitions": [
            {"AttributeName": name, "AttributeType": attr_type}
            for name, attr_type in attributes.items()
        ],
        "BillingMode": billing_mode,
        "Tags": [{"Key": "ManagedBy", "Value": "nosql-table-tool"}],
    }
    if billing_mode == "PROVISIONED":
        request["ProvisionedThroughput"] = throughput

    if key_schema.indexes:
        indexes = []
        for index in key_schema.indexes:
            gsi: dict[str, Any] = {
                "IndexName": index.name,
                "KeySchema": _key_elements(index.partition_key, index.sort_key),
                "Projection": {"ProjectionType": "ALL"},
            }
            if billing_mode == "PROVISIONED":
                gsi["ProvisionedThroughput"] = throughput
            indexes.append(gsi)
        request["GlobalSecondaryIndexes"] = indexes

    return request


def create_table(
    client: DynamoDBClient,
    table_name: str,
    key_schema: KeySchema,
    billing_mode: BillingMode = "PAY_PER_REQUEST",
    if_not_exists: bool = False,
) -> dict[str, Any]:
    """
    Create a table. The table starts out CREATING; wait for ACTIVE before use.

    Args:
        client: DynamoDB client
        table_name: Table name
        key_schema: Primary key and secondary index layout
        billing_mode: Billing mode (PAY_PER_REQUEST or PROVISIONED)
        if_not_exists: Return the existing table instead of failing

    Returns:
        Table description

    Raises:
        TableAlreadyExistsError: If table already exists and if_not_exists is False
    """
    request = build_create_request(key_schema, billing_mode)
    try:
        return client.create_table(table_name, **request)
    except TableAlreadyExistsError:
        if not if_not_exists:
            raise
        return client.describe_table(table_name)


def drop_table(
    client: DynamoDBClient, table_name: str, if_exists: bool = False
) -> dict[str, Any] | None:
    """
    Drop a table. The table moves through DROPPING before it disappears.

    Args:
        client: DynamoDB client
        table_name: Table name
        if_exists: Succeed quietly when the table does not exist

    Returns:
        Table description, or None if the table did not exist and if_exists is True

    Raises:
        TableNotFoundError: If table does not exist and if_exists is False
    """
    try:
        return client.delete_table(table_name)
    except TableNotFoundError:
        if not if_exists:
            raise
        return None


def describe_table(client: DynamoDBClient, table_name: str) -> dict[str, Any]:
    """
    Summarize a table: state, key schema, indexes and size.

    Raises:
        TableNotFoundError: If table does not exist
    """
    table = client.describe_table(table_name)

    summary: dict[str, Any] = {
        "table": table_name,
        "status": table["TableStatus"],
        "arn": table.get("TableArn"),
        "item_count": table.get("ItemCount", 0),
        "size_bytes": table.get("TableSizeBytes", 0),
        "key_schema": {k["KeyType"]: k["AttributeName"] for k in table.get("KeySchema", [])},
    }

    gsi_list = table.get("GlobalSecondaryIndexes", [])
    if gsi_list:
        summary["indexes"] = [
            {"name": gsi["IndexName"], "status": gsi.get("IndexStatus")} for gsi in gsi_list
        ]

    return summary

