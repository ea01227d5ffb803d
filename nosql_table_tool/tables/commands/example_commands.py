"""
Walk-through commands that run a whole table workflow end to end.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import Any, Callable

import click

from ..core.client import DynamoDBClient
from ..core.example_operations import run_delete_example, run_drop_example, run_index_example
from ..exceptions import IncompatibleTableStateError, TableToolError, WaitTimeoutError
from ..logging_config import get_logger, setup_logging
from ..models import ConnectionConfig
from ..options import connection_options, output_options, wait_options
from ..utils import output_error, output_json, output_text

logger = get_logger(__name__)

Runner = Callable[[DynamoDBClient, int, int, Callable[[str], None]], dict[str, Any]]


def _run_example(
    ctx: click.Context,
    name: str,
    runner: Runner,
    timeout: int,
    poll: int,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    setup_logging(verbose)

    def emit(message: str) -> None:
        if text:
            output_text(message)
        else:
            logger.info(message)

    if text:
        output_text(connection.describe())

    try:
        logger.info(f"Running {name}")
        summary = runner(DynamoDBClient(connection), timeout, poll, emit)
        if not text:
            output_json(summary)
        emit(f"{name}: done")

    except (WaitTimeoutError, IncompatibleTableStateError) as e:
        output_error(ctx, str(e), "Retry with a larger --timeout", 1, text)

    except TableToolError as e:
        output_error(ctx, str(e), "Check the endpoint, credentials and permissions", 3, text)


@click.command("delete-example")
@wait_options
@connection_options
@output_options
@click.pass_context
def delete_example_command(
    ctx: click.Context,
    timeout: int,
    poll: int,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Insert addresses and delete all rows of one shard.

    Creates the userAddress table (shard key pin, sort key id), puts four
    rows, deletes every row with pin 1234567 and shows what remains.

    Examples:

    \b
        nosql-table-tool tables delete-example --text
    """
    _run_example(
        ctx, "delete-example", run_delete_example, timeout, poll, connection, text, verbose
    )


@click.command("index-example")
@wait_options
@connection_options
@output_options
@click.pass_context
def index_example_command(
    ctx: click.Context,
    timeout: int,
    poll: int,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Create a secondary index and query through it.

    Creates the usersInfo table with index idx1 on firstName, puts four
    rows and queries the index for firstName = 'myname'.

    Examples:

    \b
        nosql-table-tool tables index-example --text
    """
    _run_example(ctx, "index-example", run_index_example, timeout, poll, connection, text, verbose)


@click.command("drop-example")
@wait_options
@connection_options
@output_options
@click.pass_context
def drop_example_command(
    ctx: click.Context,
    timeout: int,
    poll: int,
    connection: ConnectionConfig,
    text: bool,
    verbose: int,
) -> None:
    """Drop the ittage table if it exists and wait until it is gone.

    Examples:

    \b
        nosql-table-tool tables drop-example --text
    """
    _run_example(ctx, "drop-example", run_drop_example, timeout, poll, connection, text, verbose)
