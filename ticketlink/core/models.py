"""Domain models for the ticketlink change-ticket adapter.

All models in this module use only Python standard library types,
ensuring zero external dependencies in the core domain.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Generic, Literal, NoReturn, TypeAlias, TypeVar

T = TypeVar("T")

RawTicketRecord: TypeAlias = Mapping[str, Any]


@dataclass(frozen=True)
class Credentials:
    """Login credentials for the external ticketing system."""

    username: str
    password: str = field(repr=False)

    def masked(self) -> dict[str, str]:
        """Return a loggable view with the password hidden."""
        return {"username": self.username, "password": "****"}


@dataclass(frozen=True)
class AdapterConfig:
    """Connection properties for one external-system connection.

    Immutable after construction. The adapter owns it and hands it to the
    transport factory; shape checks on the URL and credentials belong to
    the transport, not here.
    """

    url: str
    credentials: Credentials
    table_name: str

    @classmethod
    def from_properties(cls, properties: Mapping[str, Any]) -> "AdapterConfig":
        """Build a config from the host platform's property mapping.

        Accepts ``auth`` or ``credentials`` for the login block and
        ``serviceNowTable``, ``tableName`` or ``table_name`` for the table.

        Raises:
            ValueError: If a required key is missing.
        """
        auth = properties.get("auth", properties.get("credentials"))
        if not isinstance(auth, Mapping):
            raise ValueError("adapter properties must include an 'auth' mapping")

        table_name = None
        for key in ("serviceNowTable", "tableName", "table_name"):
            if key in properties:
                table_name = properties[key]
                break
        if table_name is None:
            raise ValueError("adapter properties must include a table name")

        if "url" not in properties:
            raise ValueError("adapter properties must include a 'url'")
        if "username" not in auth or "password" not in auth:
            raise ValueError("adapter auth must include 'username' and 'password'")

        return cls(
            url=properties["url"],
            credentials=Credentials(
                username=auth["username"],
                password=auth["password"],
            ),
            table_name=table_name,
        )

    def masked(self) -> dict[str, Any]:
        """Return a loggable view of the config."""
        return {
            "url": self.url,
            "auth": self.credentials.masked(),
            "table_name": self.table_name,
        }


@dataclass(frozen=True)
class ChangeTicket:
    """A change-request record in the adapter's fixed shape.

    The canonical format handed to the host, not a ServiceNow row.
    Any field the source record lacked is None.
    """

    change_ticket_key: str | None = None
    change_ticket_number: str | None = None
    active: bool | str | None = None
    priority: str | None = None
    description: str | None = None
    work_start: str | None = None
    work_end: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to the seven-key dictionary the host consumes."""
        return {
            "change_ticket_key": self.change_ticket_key,
            "change_ticket_number": self.change_ticket_number,
            "active": self.active,
            "priority": self.priority,
            "description": self.description,
            "work_start": self.work_start,
            "work_end": self.work_end,
        }


# ============================================================================
# Raw transport responses
# ============================================================================


@dataclass(frozen=True)
class BodyResponse:
    """Successful response carrying a serialized (JSON) body."""

    body: str
    status_code: int | None = None


@dataclass(frozen=True)
class StructuredResponse:
    """Successful response whose body is already decoded."""

    payload: Mapping[str, Any]
    status_code: int | None = None


@dataclass(frozen=True)
class EmptyResponse:
    """Successful response with no body at all."""

    status_code: int | None = None


RawResponse: TypeAlias = BodyResponse | StructuredResponse | EmptyResponse


# ============================================================================
# Operation results
# ============================================================================


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful outcome of an adapter operation."""

    value: T
    ok: Literal[True] = True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed outcome of an adapter operation."""

    error: Exception
    ok: Literal[False] = False

    def unwrap(self) -> NoReturn:
        raise self.error


Result: TypeAlias = Ok[T] | Err


# ============================================================================
# Availability
# ============================================================================


class AdapterStatus(Enum):
    """Availability events an adapter may emit."""

    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


class HealthState(Enum):
    """Health controller state.

    UNKNOWN is the state before the first healthcheck completes. It is
    never emitted as an event.
    """

    UNKNOWN = "UNKNOWN"
    ONLINE = "ONLINE"
    OFFLINE = "OFFLINE"


@dataclass(frozen=True)
class StatusEvent:
    """An availability event for one adapter instance."""

    adapter_id: str
    status: AdapterStatus
    checked_at: datetime = field(
        default_factory=lambda: datetime.now(timezone.utc)
    )

    def to_dict(self) -> dict[str, str]:
        """Host-visible payload."""
        return {"id": self.adapter_id}
