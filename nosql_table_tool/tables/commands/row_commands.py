"""
Row commands: put, get, delete, multi-delete and query.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import json

import click

from ..core.client import DynamoDBClient
from ..core.row_operations import delete_row, get_row, multi_delete, put_row, query_rows
from ..doc_data import get_doc_data
from ..doc_generator import display_doc, generate_doc
from ..exceptions import RowNotFoundError, TableNotFoundError, TableToolError
from ..logging_config import get_logger, setup_logging
from ..models import ConnectionConfig
from ..options import connection_options, output_options
from ..utils import output_error, output_json, output_text

logger = get_logger(__name__)

TABLE_SOLUTION = "Create the table first with 'nosql-table-tool tables create-table'"
SERVICE_SOLUTION = "Check the endpoint, credentials and permissions"


@click.command("put")
@click.argument("table", required=False)
@click.argument("row", required=False)
@connection_options
@output_options
@click.option(
    "--doc",
    is_flag=True,
    help="Show AI agent-optimized documentation (semantics, guarantees, composability)",
)
@click.pass_context
def put_command(
    ctx: click.Context,
    table: str | None,
    row: str | None,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
    doc: bool,
) -> None:
    """Insert or replace a row.

    ROW is a JSON object containing at least the primary key fields.
    Use '-' to read the row from stdin.

    Examples:

    \b
        nosql-table-tool tables put userAddress \\
            '{"id": 1, "pin": 1234567, "address_line1": "Schiffbauergasse 14"}'

    \b
        cat row.json | nosql-table-tool tables put userAddress -

    \b
    Output Format:
        Returns JSON with the stored row:
        {"table": "...", "row": {...}}
    """
    if doc:
        doc_data = get_doc_data("put")
        if doc_data:
            display_doc(generate_doc(**doc_data))
        else:
            click.echo("Documentation not available for: put", err=True)
            ctx.exit(1)

    setup_logging(verbose)

    if table is None or row is None:
        logger.error("Missing required arguments TABLE and ROW")
        click.echo("Try 'nosql-table-tool tables put --help' for usage", err=True)
        ctx.exit(2)
        return

    if row == "-":
        row = click.get_text_stream("stdin").read()

    try:
        logger.info(f"Putting row into '{table}'")
        logger.debug(connection.describe())

        stored = put_row(DynamoDBClient(connection), table, row)

        if text:
            output_text(f"✅ Put row into '{table}': {json.dumps(stored)}")
        else:
            output_json({"table": table, "row": stored})

    except ValueError as e:
        output_error(ctx, str(e), "Pass the row as a JSON object", 2, text)

    except TableNotFoundError as e:
        output_error(ctx, str(e), TABLE_SOLUTION, 1, text)

    except TableToolError as e:
        output_error(ctx, str(e), SERVICE_SOLUTION, 3, text)


@click.command("get")
@click.argument("table")
@click.argument("key")
@connection_options
@output_options
@click.pass_context
def get_command(
    ctx: click.Context,
    table: str,
    key: str,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Get a row by primary key.

    KEY is a JSON object with every primary key field.

    Examples:

    \b
        nosql-table-tool tables get userAddress '{"pin": 1234567, "id": 1}'
    """
    setup_logging(verbose)

    try:
        logger.info(f"Getting row from '{table}'")
        found = get_row(DynamoDBClient(connection), table, key)

        if text:
            output_text(json.dumps(found, indent=2))
        else:
            output_json({"table": table, "row": found})

    except ValueError as e:
        output_error(ctx, str(e), "Pass the key as a JSON object", 2, text)

    except RowNotFoundError as e:
        output_error(ctx, str(e), "Check the key fields and values", 1, text)

    except TableNotFoundError as e:
        output_error(ctx, str(e), TABLE_SOLUTION, 1, text)

    except TableToolError as e:
        output_error(ctx, str(e), SERVICE_SOLUTION, 3, text)


@click.command("delete")
@click.argument("table")
@click.argument("key")
@connection_options
@output_options
@click.pass_context
def delete_command(
    ctx: click.Context,
    table: str,
    key: str,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Delete a row by primary key.

    Deleting a row that does not exist succeeds with "deleted": false.

    Examples:

    \b
        nosql-table-tool tables delete userAddress '{"pin": 87654321, "id": 4}'
    """
    setup_logging(verbose)

    try:
        logger.info(f"Deleting row from '{table}'")
        result = delete_row(DynamoDBClient(connection), table, key)

        if text:
            status = "Deleted" if result["deleted"] else "No row for"
            output_text(f"✅ {status} key {json.dumps(result['key'])}")
        else:
            output_json(result)

    except ValueError as e:
        output_error(ctx, str(e), "Pass the key as a JSON object", 2, text)

    except TableNotFoundError as e:
        output_error(ctx, str(e), TABLE_SOLUTION, 1, text)

    except TableToolError as e:
        output_error(ctx, str(e), SERVICE_SOLUTION, 3, text)


@click.command("multi-delete")
@click.argument("table")
@click.argument("shard_value")
@connection_options
@output_options
@click.pass_context
def multi_delete_command(
    ctx: click.Context,
    table: str,
    shard_value: str,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Delete all rows sharing a shard key value.

    Examples:

    \b
        # Delete every address with pin 1234567
        nosql-table-tool tables multi-delete userAddress 1234567

    \b
    Output Format:
        Returns JSON:
        {"table": "...", "shard_key": {"pin": 1234567}, "deleted": 3}
    """
    setup_logging(verbose)

    try:
        logger.info(f"Deleting rows in '{table}' with shard key value {shard_value}")
        result = multi_delete(DynamoDBClient(connection), table, shard_value)
        logger.info(f"Deleted {result['deleted']} rows")

        if text:
            output_text(f"✅ Deleted {result['deleted']} row(s) from '{table}'")
        else:
            output_json(result)

    except ValueError as e:
        output_error(ctx, str(e), "Pass a value matching the shard key type", 2, text)

    except TableNotFoundError as e:
        output_error(ctx, str(e), TABLE_SOLUTION, 1, text)

    except TableToolError as e:
        output_error(ctx, str(e), SERVICE_SOLUTION, 3, text)


@click.command("query")
@click.argument("table")
@click.option("--shard", "shard_value", help="Only rows with this shard key (or index key) value")
@click.option("--index", "index_name", help="Secondary index to query")
@click.option("--index-key", help="Partition key attribute of the index")
@click.option("--limit", type=click.IntRange(min=1), help="Maximum number of rows")
@connection_options
@output_options
@click.pass_context
def query_command(
    ctx: click.Context,
    table: str,
    shard_value: str | None,
    index_name: str | None,
    index_key: str | None,
    limit: int | None,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Query rows.

    Without options every row is returned. With --shard only rows sharing
    that shard key value are returned. With --index the secondary index is
    queried for rows whose --index-key equals --shard.

    Examples:

    \b
        # All rows
        nosql-table-tool tables query userAddress

    \b
        # Rows for one shard
        nosql-table-tool tables query userAddress --shard 1234567

    \b
        # Rows by secondary index
        nosql-table-tool tables query usersInfo --index idx1 \\
            --index-key firstName --shard myname
    """
    setup_logging(verbose)

    try:
        logger.info(f"Querying '{table}'")
        logger.debug(f"Shard: {shard_value}, Index: {index_name}, Limit: {limit}")
        result = query_rows(
            DynamoDBClient(connection), table, shard_value, index_name, index_key, limit
        )

        if text:
            output_text(f"Number of rows: {result['count']}")
            for found in result["rows"]:
                output_text(f"\t{json.dumps(found)}")
        else:
            output_json(result)

    except ValueError as e:
        output_error(ctx, str(e), "Use --index together with --index-key and --shard", 2, text)

    except TableNotFoundError as e:
        output_error(ctx, str(e), TABLE_SOLUTION, 1, text)

    except TableToolError as e:
        output_error(ctx, str(e), SERVICE_SOLUTION, 3, text)
