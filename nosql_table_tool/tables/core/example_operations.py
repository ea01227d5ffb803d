"""
Scripted walk-throughs of common table workflows.

Each walk-through creates what it needs, waits for asynchronous table
operations with the table waiter, and reports progress through an emit
callback so the caller decides where messages go.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json
from typing import Any, Callable

from ..constants import (
    DELETE_EXAMPLE_TABLE,
    DROP_EXAMPLE_TABLE,
    INDEX_EXAMPLE_INDEX,
    INDEX_EXAMPLE_TABLE,
)
from ..models import IndexSpec, KeyAttribute, KeySchema, TableState
from .client import DynamoDBClient
from .row_operations import multi_delete, put_row, query_rows
from .table_operations import create_table, drop_table
from .waiter import wait_for_state

Emit = Callable[[str], None]

DELETE_EXAMPLE_SCHEMA = KeySchema(
    shard_key=KeyAttribute("pin", "N"),
    sort_key=KeyAttribute("id", "N"),
)

INDEX_EXAMPLE_SCHEMA = KeySchema(
    shard_key=KeyAttribute("id", "N"),
    indexes=(IndexSpec(INDEX_EXAMPLE_INDEX, KeyAttribute("firstName", "S")),),
)

DELETE_EXAMPLE_SHARD = 1234567

ADDRESS_ROWS: list[dict[str, Any] | str] = [
    {"id": 1, "pin": 1234567, "address_line1": "Schiffbauergasse 14", "address_line2": "Potsdam"},
    '{"id": 2, "pin": 1234567, "address_line1": "Behrenstr. 40", "address_line2": "Berlin"}',
    '{"id": 3, "pin": 1234567, "address_line1": "Alexanderplatz 1", "address_line2": "Berlin"}',
    '{"id": 4, "pin": 87654321, "address_line1": "Riesstr. 25", "address_line2": "München"}',
]

USER_INFOS = [
    {"firstName": "myname", "lastName": "mylastName", "age": 33},
    {"firstName": "newname", "lastName": "mynewName", "age": 35},
    {"firstName": "friendsname", "lastName": "friendslastName", "age": 30},
    {"firstName": "relativesname", "lastName": "relativeslastName", "age": 43},
]


def _create_and_wait(
    client: DynamoDBClient,
    table_name: str,
    schema: KeySchema,
    timeout_millis: int,
    poll_millis: int,
) -> None:
    create_table(client, table_name, schema, if_not_exists=True)
    wait_for_state(client, table_name, TableState.ACTIVE, timeout_millis, poll_millis)


def _emit_rows(emit: Emit, rows: list[dict[str, Any]]) -> None:
    for row in rows:
        emit(f"\t{json.dumps(row, ensure_ascii=False)}")


def run_delete_example(
    client: DynamoDBClient, timeout_millis: int, poll_millis: int, emit: Emit
) -> dict[str, Any]:
    """
    Create the address table, insert rows and delete one shard's rows at once.

    The table's primary key is (pin, id) with pin as the shard key, so every
    address sharing a pin can be removed with a single multi-delete.

    Returns:
        Summary with rows inserted, deleted and remaining
    """
    table = DELETE_EXAMPLE_TABLE
    _create_and_wait(client, table, DELETE_EXAMPLE_SCHEMA, timeout_millis, poll_millis)
    emit(f"Table '{table}' is ACTIVE (shard key: pin, sort key: id)")

    for row in ADDRESS_ROWS:
        put_row(client, table, row)

    inserted = query_rows(client, table)
    emit(f"Number of rows inserted: {inserted['count']}")
    _emit_rows(emit, inserted["rows"])

    deleted = multi_delete(client, table, DELETE_EXAMPLE_SHARD)
    emit(f"Multiple rows deleted: {deleted['deleted']}")

    remaining = query_rows(client, table)
    emit(f"Number of remaining rows: {remaining['count']}")
    _emit_rows(emit, remaining["rows"])

    return {
        "table": table,
        "inserted": inserted["count"],
        "deleted": deleted["deleted"],
        "remaining": remaining["rows"],
    }


def run_index_example(
    client: DynamoDBClient, timeout_millis: int, poll_millis: int, emit: Emit
) -> dict[str, Any]:
    """
    Create a table with a secondary index on first name and query through it.

    Returns:
        Summary with the index query and its results
    """
    table = INDEX_EXAMPLE_TABLE
    _create_and_wait(client, table, INDEX_EXAMPLE_SCHEMA, timeout_millis, poll_millis)
    emit(f"Table '{table}' is ACTIVE with index '{INDEX_EXAMPLE_INDEX}' on firstName")

    for row_id, info in enumerate(USER_INFOS, start=1):
        # Indexes need a top-level attribute, so the first name is copied out of userInfo
        row = {"id": row_id, "firstName": info["firstName"], "userInfo": info}
        stored = put_row(client, table, row)
        emit(f"Put row: {json.dumps(stored)}")

    emit(f"Query: {INDEX_EXAMPLE_INDEX} where firstName = 'myname'")
    result = query_rows(
        client, table, "myname", index_name=INDEX_EXAMPLE_INDEX, index_key="firstName"
    )
    emit(f"Number of query results: {result['count']}")
    _emit_rows(emit, result["rows"])

    return {"table": table, "index": INDEX_EXAMPLE_INDEX, "rows": result["rows"]}


def run_drop_example(
    client: DynamoDBClient, timeout_millis: int, poll_millis: int, emit: Emit
) -> dict[str, Any]:
    """
    Drop the example table if it exists and wait until it is gone.

    Returns:
        Summary with the final table state
    """
    table = DROP_EXAMPLE_TABLE
    if drop_table(client, table, if_exists=True) is None:
        emit(f"Table '{table}' does not exist")
        return {"table": table, "state": TableState.DROPPED.value, "existed": False}

    outcome = wait_for_state(client, table, TableState.DROPPED, timeout_millis, poll_millis)
    emit(f"Table '{table}' dropped")
    return {"table": table, "state": outcome.state.value, "existed": True}
