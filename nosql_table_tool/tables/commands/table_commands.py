"""
Table management commands.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any, Literal

import click

from ..core.client import DynamoDBClient
from ..core.table_operations import create_table, describe_table, drop_table
from ..core.waiter import wait_for_state
from ..doc_data import get_doc_data
from ..doc_generator import display_doc, generate_doc
from ..exceptions import (
    IncompatibleTableStateError,
    TableAlreadyExistsError,
    TableNotFoundError,
    TableToolError,
    WaitTimeoutError,
)
from ..logging_config import get_logger, setup_logging
from ..models import ConnectionConfig, IndexSpec, KeyAttribute, KeySchema, TableState
from ..options import connection_options, output_options, wait_options
from ..utils import (
    output_error,
    output_json,
    output_text,
    parse_key_attribute,
    validate_table_name,
)

logger = get_logger(__name__)

STATE_NAMES = [state.value for state in TableState]


def _key_attribute(
    ctx: click.Context, param: click.Parameter, value: str | None
) -> KeyAttribute | None:
    if value is None:
        return None
    try:
        return parse_key_attribute(value)
    except ValueError as e:
        raise click.BadParameter(str(e))


def _index_specs(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> tuple[IndexSpec, ...]:
    specs = []
    for value in values:
        name, _, attr = value.partition(":")
        if not name or not attr:
            raise click.BadParameter(f"Expected NAME:ATTRIBUTE[:TYPE], got '{value}'")
        try:
            specs.append(IndexSpec(name, parse_key_attribute(attr)))
        except ValueError as e:
            raise click.BadParameter(str(e))
    return tuple(specs)


def wait_and_report(
    ctx: click.Context,
    client: DynamoDBClient,
    table: str,
    state: TableState,
    timeout: int,
    poll: int,
    text: bool,
    fail_fast: bool = True,
) -> dict[str, Any]:
    """Run the table waiter and turn wait failures into CLI errors."""
    logger.info(f"Waiting for table '{table}' to become {state.value}")
    logger.debug(f"Timeout: {timeout}ms, Poll: {poll}ms")
    try:
        outcome = wait_for_state(client, table, state, timeout, poll, fail_fast=fail_fast)
    except WaitTimeoutError as e:
        output_error(ctx, str(e), "Retry with a larger --timeout", 1, text)
        raise  # For type checker
    except IncompatibleTableStateError as e:
        output_error(ctx, str(e), "Check whether another process dropped the table", 1, text)
        raise  # For type checker

    logger.info(f"Table '{table}' is {outcome.state.value} after {outcome.attempts} checks")
    return outcome.to_dict()


@click.command("create-table")
@click.argument("table")
@click.option(
    "--shard-key",
    required=True,
    callback=_key_attribute,
    help="Shard (partition) key as NAME[:TYPE], e.g. pin:integer",
)
@click.option("--sort-key", callback=_key_attribute, help="Sort key as NAME[:TYPE]")
@click.option(
    "--index",
    "indexes",
    multiple=True,
    callback=_index_specs,
    help="Secondary index as NAME:ATTRIBUTE[:TYPE] (repeatable)",
)
@click.option(
    "--billing",
    type=click.Choice(["on-demand", "provisioned"]),
    default="on-demand",
    help="Billing mode (default: on-demand)",
)
@click.option("--if-not-exists", is_flag=True, help="Succeed if the table already exists")
@click.option("--wait/--no-wait", default=True, help="Wait for the table to become ACTIVE")
@wait_options
@connection_options
@output_options
@click.pass_context
def create_table_command(
    ctx: click.Context,
    table: str,
    shard_key: KeyAttribute,
    sort_key: KeyAttribute | None,
    indexes: tuple[IndexSpec, ...],
    billing: str,
    if_not_exists: bool,
    wait: bool,
    timeout: int,
    poll: int,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Create a table and wait for it to become ACTIVE.

    Table creation is asynchronous: the table starts out CREATING and can
    only be used once it is ACTIVE.

    Examples:

    \b
        # Table keyed by shard key pin and id
        nosql-table-tool tables create-table userAddress \\
            --shard-key pin:integer --sort-key id:integer

    \b
        # Table with a secondary index on firstName
        nosql-table-tool tables create-table usersInfo \\
            --shard-key id:integer --index idx1:firstName:string

    \b
    Output Format:
        Returns JSON with table details:
        {"table": "...", "status": "ACTIVE", "arn": "..."}
    """
    setup_logging(verbose)

    try:
        validate_table_name(table)
    except ValueError as e:
        output_error(ctx, str(e), "Use 3-255 characters: letters, digits, - _ .", 2, text)

    try:
        logger.info(f"Creating table '{table}'")
        logger.debug(f"{connection.describe()}, Billing: {billing}")

        billing_mode: Literal["PAY_PER_REQUEST", "PROVISIONED"] = (
            "PAY_PER_REQUEST" if billing == "on-demand" else "PROVISIONED"
        )
        client = DynamoDBClient(connection)
        schema = KeySchema(shard_key, sort_key, indexes)
        table_desc = create_table(client, table, schema, billing_mode, if_not_exists)

        result: dict[str, Any] = {
            "table": table,
            "status": table_desc["TableStatus"],
            "arn": table_desc.get("TableArn"),
        }
        if wait:
            outcome = wait_and_report(ctx, client, table, TableState.ACTIVE, timeout, poll, text)
            result["status"] = outcome["state"]

        if text:
            output_text(f"✅ Table '{table}' created")
            output_text(f"Status: {result['status']}")
        else:
            output_json(result)

    except TableAlreadyExistsError as e:
        output_error(
            ctx,
            str(e),
            "Use --if-not-exists, a different table name, or drop the existing table",
            1,
            text,
        )

    except TableToolError as e:
        output_error(ctx, str(e), "Check the endpoint, credentials and permissions", 3, text)


@click.command("drop-table")
@click.argument("table")
@click.option("--approve", is_flag=True, help="Required flag to confirm table deletion")
@click.option("--if-exists", is_flag=True, help="Succeed if the table does not exist")
@click.option("--wait/--no-wait", default=True, help="Wait for the table to be DROPPED")
@wait_options
@connection_options
@output_options
@click.pass_context
def drop_table_command(
    ctx: click.Context,
    table: str,
    approve: bool,
    if_exists: bool,
    wait: bool,
    timeout: int,
    poll: int,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Drop a table and wait until it is gone.

    WARNING: This permanently deletes the table and ALL rows.

    Examples:

    \b
        # Drop with approval
        nosql-table-tool tables drop-table userAddress --approve

    \b
        # Drop if present, do not wait
        nosql-table-tool tables drop-table ittage --approve --if-exists --no-wait

    \b
    Output Format:
        Returns JSON with confirmation:
        {"table": "...", "status": "DROPPED"}
    """
    setup_logging(verbose)

    if not approve:
        output_error(
            ctx,
            "Table deletion requires approval",
            f"Add --approve flag to confirm: nosql-table-tool tables drop-table {table} --approve",
            2,
            text,
        )

    try:
        logger.info(f"Dropping table '{table}'")
        logger.debug(connection.describe())

        client = DynamoDBClient(connection)
        table_desc = drop_table(client, table, if_exists)

        if table_desc is None:
            result: dict[str, Any] = {"table": table, "status": TableState.DROPPED.value}
        else:
            result = {"table": table, "status": table_desc["TableStatus"]}
            if wait:
                outcome = wait_and_report(
                    ctx, client, table, TableState.DROPPED, timeout, poll, text
                )
                result["status"] = outcome["state"]

        if text:
            output_text(f"✅ Table '{table}' dropped")
            output_text(f"Status: {result['status']}")
        else:
            output_json(result)

    except TableNotFoundError as e:
        output_error(
            ctx, str(e), "Check table name with 'nosql-table-tool tables list-tables'", 1, text
        )

    except TableToolError as e:
        output_error(ctx, str(e), "Check the endpoint, credentials and permissions", 3, text)


@click.command("describe-table")
@click.argument("table")
@connection_options
@output_options
@click.pass_context
def describe_table_command(
    ctx: click.Context,
    table: str,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Show table status, key schema and indexes.

    Examples:

    \b
        nosql-table-tool tables describe-table userAddress --text
    """
    setup_logging(verbose)

    try:
        logger.info(f"Describing table '{table}'")
        client = DynamoDBClient(connection)
        summary = describe_table(client, table)

        if text:
            output_text(f"Table: {summary['table']}")
            output_text(f"Status: {summary['status']}")
            for key_type, name in summary["key_schema"].items():
                output_text(f"{'Shard key' if key_type == 'HASH' else 'Sort key'}: {name}")
            for index in summary.get("indexes", []):
                output_text(f"Index: {index['name']} ({index['status']})")
            output_text(f"Rows: {summary['item_count']}")
        else:
            output_json(summary)

    except TableNotFoundError as e:
        output_error(
            ctx, str(e), "Check table name with 'nosql-table-tool tables list-tables'", 1, text
        )

    except TableToolError as e:
        output_error(ctx, str(e), "Check the endpoint, credentials and permissions", 3, text)


@click.command("list-tables")
@connection_options
@output_options
@click.pass_context
def list_tables_command(
    ctx: click.Context,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """List existing tables.

    Examples:

    \b
        nosql-table-tool tables list-tables
    """
    setup_logging(verbose)

    try:
        logger.info("Listing tables")
        logger.debug(connection.describe())
        tables = DynamoDBClient(connection).list_tables()

        if text:
            output_text(f"Existing tables: {', '.join(tables) if tables else '(none)'}")
        else:
            output_json({"tables": tables, "count": len(tables)})

    except TableToolError as e:
        output_error(ctx, str(e), "Check the endpoint, credentials and permissions", 3, text)


@click.command("wait-table")
@click.argument("table", required=False)
@click.option(
    "--state",
    type=click.Choice(STATE_NAMES, case_sensitive=False),
    default=TableState.ACTIVE.value,
    show_default=True,
    help="Target table state",
)
@click.option(
    "--fail-fast/--no-fail-fast",
    default=True,
    help="Stop early when the table can never reach the target state",
)
@wait_options
@connection_options
@output_options
@click.option(
    "--doc",
    is_flag=True,
    help="Show AI agent-optimized documentation (semantics, guarantees, composability)",
)
@click.pass_context
def wait_table_command(
    ctx: click.Context,
    table: str | None,
    state: str,
    fail_fast: bool,
    timeout: int,
    poll: int,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
    doc: bool,
) -> None:
    """Wait for a table to reach a state.

    Checks the table state immediately, then every --poll milliseconds until
    the state matches or --timeout milliseconds have passed.

    Examples:

    \b
        # Wait up to 60s for a new table
        nosql-table-tool tables wait-table userAddress

    \b
        # Wait for a drop to complete, checking every 2s
        nosql-table-tool tables wait-table ittage --state DROPPED --poll 2000

    \b
    Output Format:
        Returns JSON:
        {"table": "...", "state": "ACTIVE", "attempts": 3, "elapsed_ms": 2004}
    """
    if doc:
        doc_data = get_doc_data("wait-table")
        if doc_data:
            display_doc(generate_doc(**doc_data))
        else:
            click.echo("Documentation not available for: wait-table", err=True)
            ctx.exit(1)

    setup_logging(verbose)

    if table is None:
        logger.error("Missing required argument TABLE")
        click.echo("Try 'nosql-table-tool tables wait-table --help' for usage", err=True)
        ctx.exit(2)
        return

    try:
        client = DynamoDBClient(connection)
        target = TableState(state.upper())
        result = wait_and_report(ctx, client, table, target, timeout, poll, text, fail_fast)

        if text:
            output_text(f"✅ Table '{table}' is {result['state']}")
            output_text(f"Checks: {result['attempts']}, elapsed: {result['elapsed_ms']}ms")
        else:
            output_json(result)

    except TableToolError as e:
        output_error(ctx, str(e), "Check the endpoint, credentials and permissions", 3, text)
