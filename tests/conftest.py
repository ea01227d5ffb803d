from __future__ import annotations

import copy
from typing import Any

import pytest

from nosql_table_tool.tables.exceptions import (
    TableAlreadyExistsError,
    TableNotFoundError,
    TableToolError,
)
from nosql_table_tool.tables.models import TableState


class FakeClock:
    """Monotonic clock whose sleep just advances time."""

    def __init__(self, start: float = 100.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedStateService:
    """Returns states (or raises errors) from a script, repeating the last entry."""

    def __init__(self, script: list[TableState | Exception], clock: FakeClock | None = None,
                 query_cost: float = 0.0):
        self.script = list(script)
        self.calls: list[str] = []
        self.clock = clock
        self.query_cost = query_cost

    def get_table_state(self, table_name: str) -> TableState:
        self.calls.append(table_name)
        if self.clock is not None:
            self.clock.now += self.query_cost
        index = min(len(self.calls) - 1, len(self.script) - 1)
        entry = self.script[index]
        if isinstance(entry, Exception):
            raise entry
        return entry


def _condition_key_value(condition: Any) -> tuple[str, Any]:
    key, value = condition.get_expression()["values"]
    return key.name, value


class FakeTable:
    def __init__(self, name: str, request: dict[str, Any]):
        self.name = name
        self.request = request
        self.status = "CREATING"
        self.pending = ["CREATING"]
        self.items: list[dict[str, Any]] = []
        self.hash_key = next(
            k["AttributeName"] for k in request["KeySchema"] if k["KeyType"] == "HASH"
        )
        self.range_key = next(
            (k["AttributeName"] for k in request["KeySchema"] if k["KeyType"] == "RANGE"), None
        )

    def key_of(self, item: dict[str, Any]) -> tuple[Any, ...]:
        names = [self.hash_key] + ([self.range_key] if self.range_key else [])
        return tuple(item[name] for name in names)

    def description(self, status: str) -> dict[str, Any]:
        desc = {
            "TableName": self.name,
            "TableStatus": status,
            "TableArn": f"arn:aws:dynamodb:local:000000000000:table/{self.name}",
            "KeySchema": self.request["KeySchema"],
            "AttributeDefinitions": self.request["AttributeDefinitions"],
            "ItemCount": len(self.items),
            "TableSizeBytes": 0,
        }
        if "GlobalSecondaryIndexes" in self.request:
            desc["GlobalSecondaryIndexes"] = [
                {"IndexName": g["IndexName"], "KeySchema": g["KeySchema"], "IndexStatus": "ACTIVE"}
                for g in self.request["GlobalSecondaryIndexes"]
            ]
        return desc


class FakeClient:
    """In-memory stand-in for DynamoDBClient.

    Newly created tables report CREATING once, then ACTIVE. Dropped tables
    report DELETING once, then disappear.
    """

    def __init__(self) -> None:
        self.tables: dict[str, FakeTable] = {}
        self.dropping: dict[str, int] = {}
        self.calls: list[str] = []
        self.fail_with: TableToolError | None = None

    def _check(self, op: str) -> None:
        self.calls.append(op)
        if self.fail_with is not None:
            raise self.fail_with

    def _table(self, table_name: str) -> FakeTable:
        if table_name not in self.tables:
            raise TableNotFoundError(f"Table '{table_name}' not found")
        return self.tables[table_name]

    def add_table(self, name: str, request: dict[str, Any], status: str = "ACTIVE") -> FakeTable:
        table = FakeTable(name, request)
        table.status = status
        table.pending = []
        self.tables[name] = table
        return table

    def get_table_state(self, table_name: str) -> TableState:
        self._check("get_table_state")
        if table_name in self.dropping:
            if self.dropping[table_name] > 0:
                self.dropping[table_name] -= 1
                return TableState.DROPPING
            del self.dropping[table_name]
            self.tables.pop(table_name, None)
        if table_name not in self.tables:
            return TableState.DROPPED
        table = self.tables[table_name]
        if table.pending:
            return TableState.from_status(table.pending.pop(0))
        table.status = "ACTIVE"
        return TableState.ACTIVE

    def describe_table(self, table_name: str) -> dict[str, Any]:
        self._check("describe_table")
        table = self._table(table_name)
        return table.description(table.status)

    def create_table(self, table_name: str, **kwargs: Any) -> dict[str, Any]:
        self._check("create_table")
        if table_name in self.tables:
            raise TableAlreadyExistsError(f"Table '{table_name}' already exists")
        table = FakeTable(table_name, kwargs)
        self.tables[table_name] = table
        return table.description("CREATING")

    def delete_table(self, table_name: str) -> dict[str, Any]:
        self._check("delete_table")
        table = self._table(table_name)
        self.dropping[table_name] = 1
        return table.description("DELETING")

    def list_tables(self) -> list[str]:
        self._check("list_tables")
        return sorted(self.tables)

    def put_item(self, table_name: str, item: dict[str, Any],
                 condition_expression: str | None = None) -> dict[str, Any]:
        self._check("put_item")
        table = self._table(table_name)
        key = table.key_of(item)
        table.items = [i for i in table.items if table.key_of(i) != key]
        table.items.append(copy.deepcopy(item))
        return {}

    def get_item(self, table_name: str, key: dict[str, Any]) -> dict[str, Any] | None:
        self._check("get_item")
        table = self._table(table_name)
        wanted = table.key_of(key)
        return next((copy.deepcopy(i) for i in table.items if table.key_of(i) == wanted), None)

    def delete_item(self, table_name: str, key: dict[str, Any]) -> dict[str, Any] | None:
        self._check("delete_item")
        table = self._table(table_name)
        wanted = table.key_of(key)
        old = next((i for i in table.items if table.key_of(i) == wanted), None)
        table.items = [i for i in table.items if table.key_of(i) != wanted]
        return old

    def query(self, table_name: str, key_condition_expression: Any,
              index_name: str | None = None, limit: int | None = None) -> list[dict[str, Any]]:
        self._check(f"query:{index_name}" if index_name else "query")
        table = self._table(table_name)
        name, value = _condition_key_value(key_condition_expression)
        rows = [copy.deepcopy(i) for i in table.items if i.get(name) == value]
        return rows[:limit] if limit else rows

    def scan(self, table_name: str, limit: int | None = None) -> list[dict[str, Any]]:
        self._check("scan")
        rows = [copy.deepcopy(i) for i in self._table(table_name).items]
        return rows[:limit] if limit else rows

    def batch_delete(self, table_name: str, keys: list[dict[str, Any]]) -> int:
        self._check("batch_delete")
        table = self._table(table_name)
        doomed = {table.key_of(k) for k in keys}
        table.items = [i for i in table.items if table.key_of(i) not in doomed]
        return len(keys)


ADDRESS_TABLE_REQUEST = {
    "KeySchema": [
        {"AttributeName": "pin", "KeyType": "HASH"},
        {"AttributeName": "id", "KeyType": "RANGE"},
    ],
    "AttributeDefinitions": [
        {"AttributeName": "pin", "AttributeType": "N"},
        {"AttributeName": "id", "AttributeType": "N"},
    ],
}


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture
def address_client(fake_client: FakeClient) -> FakeClient:
    fake_client.add_table("userAddress", ADDRESS_TABLE_REQUEST)
    return fake_client
