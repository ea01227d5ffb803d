"""
Type models for table operations.

Note: This code was generated with assistance from AI coding tools
and has been reviewed and tested by a human.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .constants import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    DEFAULT_TENANT_ID,
    STATUS_ACTIVE,
    STATUS_CREATING,
    STATUS_DELETING,
    STATUS_UPDATING,
)
from .exceptions import ConfigurationError


class TableState(Enum):
    """Lifecycle states of a table as tracked by the service."""

    CREATING = "CREATING"
    UPDATING = "UPDATING"
    ACTIVE = "ACTIVE"
    DROPPING = "DROPPING"
    DROPPED = "DROPPED"
    FAILED = "FAILED"

    @classmethod
    def from_status(cls, status: str | None) -> "TableState":
        """
        Map a raw DynamoDB TableStatus to a lifecycle state.

        A missing status means the table no longer exists. Statuses with no
        lifecycle counterpart (archived, inaccessible credentials) map to FAILED.
        """
        if status is None:
            return cls.DROPPED
        return _STATUS_MAP.get(status, cls.FAILED)

    def can_reach(self, target: "TableState") -> bool:
        """
        Check whether a table in this state may still transition to target.

        Only states that are known to be one-way return False.
        """
        if self is TableState.DROPPED:
            return target is TableState.DROPPED
        if self is TableState.DROPPING:
            return target in (TableState.DROPPING, TableState.DROPPED)
        return True


_STATUS_MAP = {
    STATUS_CREATING: TableState.CREATING,
    STATUS_UPDATING: TableState.UPDATING,
    STATUS_ACTIVE: TableState.ACTIVE,
    STATUS_DELETING: TableState.DROPPING,
}


@dataclass(frozen=True)
class WaitSpec:
    """What to wait for and for how long."""

    target_state: TableState
    timeout_millis: int
    poll_millis: int

    def __post_init__(self) -> None:
        if self.timeout_millis < 0:
            raise ValueError("timeout_millis must be >= 0")
        if self.poll_millis < 0:
            raise ValueError("poll_millis must be >= 0")


@dataclass(frozen=True)
class WaitOutcome:
    """Result of a successful wait."""

    table_name: str
    state: TableState
    attempts: int
    elapsed_millis: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "table": self.table_name,
            "state": self.state.value,
            "attempts": self.attempts,
            "elapsed_ms": self.elapsed_millis,
        }


@dataclass(frozen=True)
class ConnectionConfig:
    """Where and how to reach the table service.

    Local mode talks to a simulator at http://host:port using static
    credentials derived from the tenant id. Cloud mode uses the regular AWS
    credential chain (optionally a named profile) in the given region.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    cloud: bool = False
    region: str | None = None
    profile: str | None = None
    tenant_id: str = DEFAULT_TENANT_ID

    def __post_init__(self) -> None:
        if self.cloud and not self.region:
            raise ConfigurationError("Missing required argument --region for --cloud")
        if not self.cloud and self.profile:
            raise ConfigurationError("Argument --profile requires --cloud")
        if not 0 < self.port < 65536:
            raise ConfigurationError(f"Invalid port: {self.port}")

    @property
    def endpoint_url(self) -> str | None:
        if self.cloud:
            return None
        return f"http://{self.host}:{self.port}"

    def describe(self) -> str:
        """One-line description of the target, for status output."""
        if self.cloud:
            return f"Running against AWS region {self.region}"
        return f"Using host {self.host}, port {self.port}"


@dataclass(frozen=True)
class KeyAttribute:
    """A key attribute name with its DynamoDB scalar type (S, N or B)."""

    name: str
    type: str = "S"


@dataclass(frozen=True)
class IndexSpec:
    """Global secondary index definition."""

    name: str
    partition_key: KeyAttribute
    sort_key: KeyAttribute | None = None


@dataclass(frozen=True)
class KeySchema:
    """Primary key layout: shard (partition) key plus optional sort key."""

    shard_key: KeyAttribute
    sort_key: KeyAttribute | None = None
    indexes: tuple[IndexSpec, ...] = field(default_factory=tuple)

    def key_names(self) -> list[str]:
        names = [self.shard_key.name]
        if self.sort_key:
            names.append(self.sort_key.name)
        return names
