"""
Shared click options for table commands.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

import functools
from typing import Any, Callable

import click
from click.core import ParameterSource

from .constants import (
    DEFAULT_HOST,
    DEFAULT_POLL_INTERVAL_MS,
    DEFAULT_PORT,
    DEFAULT_TENANT_ID,
    DEFAULT_WAIT_TIMEOUT_MS,
)
from .exceptions import ConfigurationError
from .models import ConnectionConfig

_CONNECTION_PARAMS = ("host", "port", "cloud", "region", "profile", "tenant")


def connection_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """
    Add connection options and hand the command a ready ConnectionConfig.

    The decorated command receives a `connection` keyword argument instead of
    the individual host/port/cloud/region/profile/tenant values.
    """

    @functools.wraps(f)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        values = {name: kwargs.pop(name) for name in _CONNECTION_PARAMS}
        # A profile exported in AWS_PROFILE only matters for --cloud
        ctx = click.get_current_context()
        if not values["cloud"] and ctx.get_parameter_source("profile") is not (
            ParameterSource.COMMANDLINE
        ):
            values["profile"] = None
        try:
            kwargs["connection"] = ConnectionConfig(
                host=values["host"],
                port=values["port"],
                cloud=values["cloud"],
                region=values["region"],
                profile=values["profile"],
                tenant_id=values["tenant"],
            )
        except ConfigurationError as e:
            raise click.UsageError(str(e))
        return f(*args, **kwargs)

    decorators = [
        click.option(
            "--host",
            envvar="NOSQL_HOST",
            default=DEFAULT_HOST,
            show_default=True,
            help="Local simulator host",
        ),
        click.option(
            "--port",
            envvar="NOSQL_PORT",
            type=int,
            default=DEFAULT_PORT,
            show_default=True,
            help="Local simulator port",
        ),
        click.option("--cloud", is_flag=True, help="Run against the cloud service instead"),
        click.option("--region", envvar="AWS_REGION", help="AWS region (required with --cloud)"),
        click.option("--profile", envvar="AWS_PROFILE", help="AWS profile (with --cloud)"),
        click.option(
            "--tenant",
            envvar="NOSQL_TENANT",
            default=DEFAULT_TENANT_ID,
            show_default=True,
            help="Tenant id used as credentials for the local simulator",
        ),
    ]
    for decorator in reversed(decorators):
        wrapper = decorator(wrapper)
    return wrapper


def output_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Add --text and --verbose options."""
    f = click.option(
        "--verbose",
        "-v",
        count=True,
        help="Increase verbosity (-v INFO, -vv DEBUG, -vvv TRACE)",
    )(f)
    f = click.option("--text", is_flag=True, help="Output as human-readable text")(f)
    return f


def wait_options(f: Callable[..., Any]) -> Callable[..., Any]:
    """Add --timeout and --poll options (milliseconds)."""
    f = click.option(
        "--poll",
        type=click.IntRange(min=0),
        default=DEFAULT_POLL_INTERVAL_MS,
        show_default=True,
        help="Delay between state checks in milliseconds",
    )(f)
    f = click.option(
        "--timeout",
        type=click.IntRange(min=0),
        default=DEFAULT_WAIT_TIMEOUT_MS,
        show_default=True,
        help="Total time to wait in milliseconds",
    )(f)
    return f
