"""
Wait for a table to reach a target lifecycle state.

Table create, drop and update requests are asynchronous: the service accepts
them and the table moves through intermediate states in the background. The
functions here poll the table state until it matches what the caller expects.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import time
from typing import Callable, Protocol

from ..exceptions import IncompatibleTableStateError, WaitTimeoutError
from ..models import TableState, WaitOutcome, WaitSpec


class TableStateService(Protocol):
    """Anything that can report the current state of a table."""

    def get_table_state(self, table_name: str) -> TableState: ...


def wait_for_state(
    service: TableStateService,
    table_name: str,
    target_state: TableState,
    timeout_millis: int,
    poll_millis: int,
    *,
    fail_fast: bool = True,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> WaitOutcome:
    """
    Block until a table reaches target_state.

    The first state query is issued immediately. After that the table is
    polled every poll_millis until the state matches or timeout_millis has
    elapsed. The last sleep is cut short at the deadline so one final query
    lands there. The deadline is checked before every sleep and before every
    query, so timeout_millis=0 means exactly one query.

    Args:
        service: Object exposing get_table_state(table_name)
        table_name: Table whose state to observe
        target_state: State to wait for
        timeout_millis: Total time budget in milliseconds (>= 0)
        poll_millis: Delay between queries in milliseconds (>= 0)
        fail_fast: Stop early when the observed state can never reach the target
        clock: Monotonic clock in seconds
        sleep: Sleep function taking seconds

    Returns:
        WaitOutcome with the observed state and number of queries issued

    Raises:
        WaitTimeoutError: If the target state was not observed in time
        IncompatibleTableStateError: If fail_fast and the table can never reach target
        Any error raised by service.get_table_state, unchanged
    """
    spec = WaitSpec(target_state, timeout_millis, poll_millis)
    return _poll(service, table_name, spec, fail_fast, clock, sleep)


def _poll(
    service: TableStateService,
    table_name: str,
    spec: WaitSpec,
    fail_fast: bool,
    clock: Callable[[], float],
    sleep: Callable[[float], None],
) -> WaitOutcome:
    start = clock()

    def elapsed_millis() -> int:
        return int(round((clock() - start) * 1000))

    attempts = 0
    while True:
        state = service.get_table_state(table_name)
        attempts += 1

        if state is spec.target_state:
            return WaitOutcome(table_name, state, attempts, elapsed_millis())

        if fail_fast and not state.can_reach(spec.target_state):
            raise IncompatibleTableStateError(table_name, spec.target_state, state)

        elapsed = elapsed_millis()
        if elapsed >= spec.timeout_millis:
            raise WaitTimeoutError(table_name, spec.target_state, state, spec.timeout_millis)

        sleep(min(spec.poll_millis, spec.timeout_millis - elapsed) / 1000)

        # Deadline may have passed while sleeping
        if elapsed_millis() > spec.timeout_millis:
            raise WaitTimeoutError(table_name, spec.target_state, state, spec.timeout_millis)
