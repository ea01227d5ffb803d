from decimal import Decimal
from typing import Any

import pytest
from boto3.dynamodb.conditions import ConditionBase
from botocore.exceptions import ClientError, EndpointConnectionError, NoCredentialsError

from nosql_table_tool.tables.core.client import DynamoDBClient, create_session
from nosql_table_tool.tables.core.row_operations import multi_delete
from nosql_table_tool.tables.exceptions import (
    AWSPermissionError,
    AWSThrottlingError,
    ConditionFailedError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TableToolError,
)
from nosql_table_tool.tables.models import ConnectionConfig, TableState


def _client_error(code: str, operation: str = "DescribeTable") -> ClientError:
    return ClientError({"Error": {"Code": code, "Message": code}}, operation)


class _LowLevelClient:
    def __init__(self) -> None:
        self.describe_responses: list[Any] = []
        self.list_pages: list[dict[str, Any]] = []
        self.error: Exception | None = None

    def describe_table(self, TableName: str) -> dict[str, Any]:
        response = self.describe_responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def create_table(self, TableName: str, **kwargs: Any) -> dict[str, Any]:
        if self.error:
            raise self.error
        return {"TableDescription": {"TableName": TableName, "TableStatus": "CREATING"}}

    def delete_table(self, TableName: str) -> dict[str, Any]:
        if self.error:
            raise self.error
        return {"TableDescription": {"TableName": TableName, "TableStatus": "DELETING"}}

    def list_tables(self, **kwargs: Any) -> dict[str, Any]:
        if self.error:
            raise self.error
        return self.list_pages.pop(0)


class _Table:
    def __init__(self) -> None:
        self.pages: list[dict[str, Any]] = []
        self.requests: list[dict[str, Any]] = []
        self.deleted_keys: list[dict[str, Any]] = []
        self.error: Exception | None = None

    def query(self, **kwargs: Any) -> dict[str, Any]:
        self.requests.append(dict(kwargs))
        return self.pages.pop(0)

    def scan(self, **kwargs: Any) -> dict[str, Any]:
        self.requests.append(dict(kwargs))
        return self.pages.pop(0)

    def put_item(self, **kwargs: Any) -> dict[str, Any]:
        if self.error:
            raise self.error
        self.requests.append(kwargs)
        return {}

    def delete_item(self, **kwargs: Any) -> dict[str, Any]:
        self.requests.append(kwargs)
        return {"Attributes": {"pin": 1, "id": 2}}

    def batch_writer(self) -> "_BatchWriter":
        return _BatchWriter(self)


class _BatchWriter:
    def __init__(self, table: _Table) -> None:
        self.table = table

    def __enter__(self) -> "_BatchWriter":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        if self.table.error:
            raise self.table.error

    def delete_item(self, Key: dict[str, Any]) -> None:  # noqa: N803
        self.table.deleted_keys.append(Key)


class _Resource:
    def __init__(self, table: _Table) -> None:
        self.table = table

    def Table(self, name: str) -> _Table:  # noqa: N802
        return self.table


class _Session:
    def __init__(self) -> None:
        self.low_level = _LowLevelClient()
        self.table = _Table()
        self.endpoints: list[str | None] = []

    def client(self, service: str, endpoint_url: str | None = None) -> _LowLevelClient:
        self.endpoints.append(endpoint_url)
        return self.low_level

    def resource(self, service: str, endpoint_url: str | None = None) -> _Resource:
        self.endpoints.append(endpoint_url)
        return _Resource(self.table)


@pytest.fixture
def session() -> _Session:
    return _Session()


@pytest.fixture
def client(session: _Session) -> DynamoDBClient:
    return DynamoDBClient(ConnectionConfig(port=8080), session=session)


def test_client_targets_local_endpoint(session: _Session, client: DynamoDBClient):
    assert session.endpoints == ["http://localhost:8080", "http://localhost:8080"]


def test_local_session_uses_tenant_as_credentials():
    session = create_session(ConnectionConfig(tenant_id="TestTenant"))
    credentials = session.get_credentials()

    assert credentials.access_key == "TestTenant"
    assert credentials.secret_key == "TestTenant"
    assert session.region_name == "us-east-1"


def test_cloud_session_uses_region():
    session = create_session(ConnectionConfig(cloud=True, region="eu-central-1"))
    assert session.region_name == "eu-central-1"


@pytest.mark.parametrize(
    "status, state",
    [("CREATING", TableState.CREATING), ("ACTIVE", TableState.ACTIVE),
     ("DELETING", TableState.DROPPING)],
)
def test_get_table_state_maps_status(session: _Session, client: DynamoDBClient, status, state):
    session.low_level.describe_responses = [{"Table": {"TableStatus": status}}]
    assert client.get_table_state("userAddress") is state


def test_get_table_state_reports_missing_table_as_dropped(
    session: _Session, client: DynamoDBClient
):
    session.low_level.describe_responses = [_client_error("ResourceNotFoundException")]
    assert client.get_table_state("userAddress") is TableState.DROPPED


@pytest.mark.parametrize(
    "code, error_type",
    [
        ("AccessDeniedException", AWSPermissionError),
        ("ProvisionedThroughputExceededException", AWSThrottlingError),
        ("InternalServerError", TableToolError),
    ],
)
def test_get_table_state_translates_other_errors(
    session: _Session, client: DynamoDBClient, code, error_type
):
    session.low_level.describe_responses = [_client_error(code)]
    with pytest.raises(error_type):
        client.get_table_state("userAddress")


def test_describe_missing_table_raises_not_found(session: _Session, client: DynamoDBClient):
    session.low_level.describe_responses = [_client_error("ResourceNotFoundException")]
    with pytest.raises(TableNotFoundError, match="'userAddress' not found"):
        client.describe_table("userAddress")


def test_create_existing_table_raises_already_exists(session: _Session, client: DynamoDBClient):
    session.low_level.error = _client_error("ResourceInUseException", "CreateTable")
    with pytest.raises(TableAlreadyExistsError):
        client.create_table("userAddress", KeySchema=[])


def test_drop_busy_table_is_not_reported_as_existing(session: _Session, client: DynamoDBClient):
    session.low_level.error = _client_error("ResourceInUseException", "DeleteTable")
    with pytest.raises(TableToolError, match="busy") as exc_info:
        client.delete_table("userAddress")
    assert not isinstance(exc_info.value, TableAlreadyExistsError)


def test_conditional_put_failure(session: _Session, client: DynamoDBClient):
    session.table.error = _client_error("ConditionalCheckFailedException", "PutItem")
    with pytest.raises(ConditionFailedError):
        client.put_item("userAddress", {"pin": 1, "id": 1}, "attribute_not_exists(pin)")


def test_delete_item_returns_old_attributes(session: _Session, client: DynamoDBClient):
    assert client.delete_item("userAddress", {"pin": 1, "id": 2}) == {"pin": 1, "id": 2}
    assert session.table.requests[-1]["ReturnValues"] == "ALL_OLD"


def test_list_tables_follows_pagination(session: _Session, client: DynamoDBClient):
    session.low_level.list_pages = [
        {"TableNames": ["a", "b"], "LastEvaluatedTableName": "b"},
        {"TableNames": ["c"]},
    ]
    assert client.list_tables() == ["a", "b", "c"]


def test_scan_follows_pagination(session: _Session, client: DynamoDBClient):
    session.table.pages = [
        {"Items": [{"id": 1}], "LastEvaluatedKey": {"id": 1}},
        {"Items": [{"id": 2}]},
    ]

    assert client.scan("userAddress") == [{"id": 1}, {"id": 2}]
    assert session.table.requests[1]["ExclusiveStartKey"] == {"id": 1}


def test_query_stops_at_limit(session: _Session, client: DynamoDBClient):
    session.table.pages = [
        {"Items": [{"id": 1}, {"id": 2}], "LastEvaluatedKey": {"id": 2}},
    ]

    items = client.query("usersInfo", "condition", index_name="idx1", limit=2)

    assert items == [{"id": 1}, {"id": 2}]
    assert session.table.requests[0]["IndexName"] == "idx1"
    assert session.table.requests[0]["Limit"] == 2


@pytest.mark.parametrize(
    "error",
    [
        EndpointConnectionError(endpoint_url="http://localhost:8080/"),
        NoCredentialsError(),
    ],
)
def test_transport_and_credential_errors_become_tool_errors(
    session: _Session, client: DynamoDBClient, error
):
    session.low_level.describe_responses = [error]
    session.low_level.error = error

    with pytest.raises(TableToolError, match="DynamoDB error"):
        client.get_table_state("userAddress")
    with pytest.raises(TableToolError, match="DynamoDB error"):
        client.list_tables()


def test_multi_delete_queries_shard_and_batch_deletes(session: _Session, client: DynamoDBClient):
    session.low_level.describe_responses = [
        {
            "Table": {
                "KeySchema": [
                    {"AttributeName": "pin", "KeyType": "HASH"},
                    {"AttributeName": "id", "KeyType": "RANGE"},
                ],
                "AttributeDefinitions": [
                    {"AttributeName": "pin", "AttributeType": "N"},
                    {"AttributeName": "id", "AttributeType": "N"},
                ],
            }
        }
    ]
    session.table.pages = [
        {
            "Items": [
                {"pin": Decimal(1234567), "id": Decimal(1), "city": "Potsdam"},
                {"pin": Decimal(1234567), "id": Decimal(2), "city": "Berlin"},
            ]
        }
    ]

    result = multi_delete(client, "userAddress", "1234567")

    condition = session.table.requests[0]["KeyConditionExpression"]
    assert isinstance(condition, ConditionBase)
    key, value = condition.get_expression()["values"]
    assert (key.name, value) == ("pin", Decimal(1234567))
    assert session.table.deleted_keys == [
        {"pin": Decimal(1234567), "id": Decimal(1)},
        {"pin": Decimal(1234567), "id": Decimal(2)},
    ]
    assert result == {"table": "userAddress", "shard_key": {"pin": 1234567}, "deleted": 2}


def test_batch_delete_failure_is_translated(session: _Session, client: DynamoDBClient):
    session.table.error = _client_error("ProvisionedThroughputExceededException", "BatchWriteItem")

    with pytest.raises(AWSThrottlingError):
        client.batch_delete("userAddress", [{"pin": 1, "id": 1}])
