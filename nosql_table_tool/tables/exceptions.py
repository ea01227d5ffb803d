"""
Custom exceptions for table operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import TableState


class TableToolError(Exception):
    """Base exception for table operations."""

    pass


class ConfigurationError(TableToolError):
    """Connection options are inconsistent or incomplete."""

    pass


class TableNotFoundError(TableToolError):
    """DynamoDB table does not exist."""

    pass


class TableAlreadyExistsError(TableToolError):
    """DynamoDB table already exists."""

    pass


class RowNotFoundError(TableToolError):
    """No row exists for the given primary key."""

    pass


class ConditionFailedError(TableToolError):
    """Conditional write failed."""

    pass


class AWSThrottlingError(TableToolError):
    """DynamoDB throttling occurred."""

    pass


class AWSPermissionError(TableToolError):
    """AWS permission denied."""

    pass


class WaitTimeoutError(TableToolError):
    """Table did not reach the target state within the timeout."""

    def __init__(
        self,
        table_name: str,
        target_state: "TableState",
        last_state: "TableState",
        timeout_millis: int,
    ):
        self.table_name = table_name
        self.target_state = target_state
        self.last_state = last_state
        self.timeout_millis = timeout_millis
        super().__init__(
            f"Table '{table_name}' did not reach state {target_state.value} "
            f"within {timeout_millis}ms (last observed: {last_state.value})"
        )


class IncompatibleTableStateError(TableToolError):
    """Table is in a state from which the target state can never be reached."""

    def __init__(
        self,
        table_name: str,
        target_state: "TableState",
        observed_state: "TableState",
    ):
        self.table_name = table_name
        self.target_state = target_state
        self.observed_state = observed_state
        super().__init__(
            f"Table '{table_name}' is {observed_state.value} and can never "
            f"become {target_state.value}"
        )
