"""
Documentation data for table commands.

Structured data for agent-oriented documentation generation.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any

WAIT_TABLE_DOC = {
    "name": "wait-table - Block Until a Table Reaches a State",
    "synopsis": (
        "nosql-table-tool tables wait-table TABLE [--state STATE] "
        "[--timeout MS] [--poll MS] [--no-fail-fast]"
    ),
    "description": (
        "Table create, drop and update requests are asynchronous. wait-table "
        "checks the table state immediately and then every --poll milliseconds "
        "until the state matches --state or --timeout milliseconds have passed. "
        "A table that does not exist is reported as DROPPED."
    ),
    "properties": {
        "Blocking": "Yes, returns only on match, timeout or error",
        "Side effects": "None, read-only state checks",
        "State checks": "1 + number of polls; --timeout 0 means exactly one check",
        "Upper bound": "Returns within timeout + poll interval",
    },
    "guarantees": [
        "Immediate check: no sleep before the first state check",
        "Deadline check before every state check, never polls past the timeout",
        "Service errors are reported at once, never retried",
        "Fail fast: a DROPPED or DROPPING table never waits out the timeout for ACTIVE",
    ],
    "when_to_apply": [
        "After create-table --no-wait before writing rows",
        "After drop-table --no-wait before re-creating a table with the same name",
        "In scripts that create several tables and wait for all of them",
    ],
    "examples": [
        {
            "title": "Wait for a new table",
            "code": """nosql-table-tool tables create-table userAddress \\
  --shard-key pin:integer --sort-key id:integer --no-wait
nosql-table-tool tables wait-table userAddress --timeout 60000 --poll 1000""",
        },
        {
            "title": "Wait for a drop to complete",
            "code": "nosql-table-tool tables wait-table ittage --state DROPPED",
        },
    ],
    "composability": [
        {
            "title": "Create tables in parallel, then wait for each",
            "code": """for t in orders customers; do
  nosql-table-tool tables create-table "$t" --shard-key id --no-wait
done
for t in orders customers; do
  nosql-table-tool tables wait-table "$t" || exit 1
done""",
            "note": "Waits are independent; each owns its own deadline",
        },
    ],
    "failure_modes": [
        "exit 1: target state not reached within --timeout",
        "exit 1: table can never reach target state (fail fast)",
        "exit 2: missing TABLE argument",
        "exit 3: service error while checking state",
    ],
    "see_also": ["create-table", "drop-table", "describe-table"],
}

PUT_DOC = {
    "name": "put - Insert or Replace a Row",
    "synopsis": "nosql-table-tool tables put TABLE ROW_JSON",
    "description": (
        "Stores a row given as a JSON object. The row must contain every "
        "primary key field. An existing row with the same key is replaced."
    ),
    "properties": {
        "Operation": "Upsert (INSERT or REPLACE)",
        "Atomicity": "Single-row write is atomic",
        "Idempotency": "Repeating the same put stores the same row",
    },
    "guarantees": [
        "Atomicity: the row is written completely or not at all",
        "Durability: acknowledged writes survive restarts",
    ],
    "when_to_apply": [
        "Loading sample rows into a new table",
        "Replacing a row wholesale",
    ],
    "examples": [
        {
            "title": "Put an address",
            "code": """nosql-table-tool tables put userAddress \\
  '{"id": 1, "pin": 1234567, "address_line1": "Schiffbauergasse 14"}'""",
        },
    ],
    "composability": [
        {
            "title": "Bulk load from a JSON lines file",
            "code": """while read -r row; do
  nosql-table-tool tables put userAddress "$row"
done < rows.jsonl""",
        },
    ],
    "failure_modes": [
        "exit 1: table does not exist",
        "exit 2: row is not a JSON object",
        "exit 3: service error (missing key fields, permissions)",
    ],
    "see_also": ["get", "delete", "query"],
}

COMMAND_DOCS = {
    "wait-table": WAIT_TABLE_DOC,
    "put": PUT_DOC,
}


def get_doc_data(command: str) -> dict[str, Any] | None:
    """
    Retrieve documentation data for a command.

    Args:
        command: Command name (e.g., "wait-table", "put")

    Returns:
        Documentation data dictionary or None if not found
    """
    return COMMAND_DOCS.get(command)
