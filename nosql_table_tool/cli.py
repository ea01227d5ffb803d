"""CLI entry point for nosql-table-tool.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import click

from nosql_table_tool.tables.commands.example_commands import (
    delete_example_command,
    drop_example_command,
    index_example_command,
)
from nosql_table_tool.tables.commands.row_commands import (
    delete_command,
    get_command,
    multi_delete_command,
    put_command,
    query_command,
)
from nosql_table_tool.tables.commands.table_commands import (
    create_table_command,
    describe_table_command,
    drop_table_command,
    list_tables_command,
    wait_table_command,
)


@click.group()
@click.version_option(version="0.1.0")
def main() -> None:
    """Table and row operations against a NoSQL table service (local simulator or cloud)"""
    pass


@main.group("tables")
def tables() -> None:
    """Create, drop and wait for tables; put, query and delete rows"""
    pass


# Register table commands
tables.add_command(create_table_command)
tables.add_command(drop_table_command)
tables.add_command(describe_table_command)
tables.add_command(list_tables_command)
tables.add_command(wait_table_command)

# Register row commands
tables.add_command(put_command)
tables.add_command(get_command)
tables.add_command(delete_command)
tables.add_command(multi_delete_command)
tables.add_command(query_command)

# Register walk-through commands
tables.add_command(delete_example_command)
tables.add_command(index_example_command)
tables.add_command(drop_example_command)

if __name__ == "__main__":
    main()
