"""Port interfaces for the ticketlink adapter.

These abstract base classes define the boundaries between core
domain logic and external collaborators. Implementations live in the
adapters/ package.

Port Interface Categories:

1. **Driven Ports** (core calls out to adapters)
   - TransportPort: Authenticated GET/POST against one table resource

2. **Driving Ports** (the host platform calls into core)
   - ChangeTicketPort: connect, healthcheck, read and create records,
     and subscribe to availability events
"""

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Mapping
from typing import Any, TypeAlias

from .models import (
    AdapterStatus,
    ChangeTicket,
    HealthState,
    RawResponse,
    Result,
    StatusEvent,
)

Completion: TypeAlias = Callable[[Result[Any]], Awaitable[None] | None]
StatusListener: TypeAlias = Callable[[StatusEvent], None]


# ============================================================================
# DRIVEN PORTS (Core calls out to adapters)
# ============================================================================


class TransportPort(ABC):
    """Port for performing raw requests against the external system.

    Exactly one of data or error is meaningful per call: a successful
    request returns a RawResponse, a failed one raises TransportError.

    Implementations must handle:
    - Authentication on every request
    - Request timeouts
    - Mapping non-2xx responses to TransportError
    """

    @abstractmethod
    async def get(self) -> RawResponse:
        """Issue one GET against the configured table resource.

        Returns:
            The raw response variant.

        Raises:
            TransportError: If the request fails.
        """

    @abstractmethod
    async def post(self, fields: Mapping[str, Any] | None = None) -> RawResponse:
        """Issue one POST against the configured table resource.

        Args:
            fields: Record fields to send. None sends an empty record.

        Returns:
            The raw response variant.

        Raises:
            TransportError: If the request fails.
        """

    async def close(self) -> None:
        """Release any held connections."""


# ============================================================================
# DRIVING PORTS (Host platform calls into core)
# ============================================================================


class ChangeTicketPort(ABC):
    """Port the host platform uses to drive an adapter instance.

    Every operation settles exactly once: the coroutine returns a Result
    and, when a completion callback is supplied, invokes it once with
    that same Result.
    """

    @abstractmethod
    async def connect(self) -> HealthState:
        """Run a single healthcheck and emit the resulting status."""

    @abstractmethod
    async def healthcheck(
        self, callback: Completion | None = None
    ) -> Result[list[ChangeTicket]]:
        """Probe the external system and emit ONLINE or OFFLINE."""

    @abstractmethod
    async def get_record(
        self, callback: Completion | None = None
    ) -> Result[list[ChangeTicket]]:
        """Read change tickets from the external system."""

    @abstractmethod
    async def post_record(
        self,
        fields: Mapping[str, Any] | None = None,
        callback: Completion | None = None,
    ) -> Result[ChangeTicket | None]:
        """Create a change ticket in the external system."""

    @abstractmethod
    def subscribe(
        self, status: AdapterStatus | str, listener: StatusListener
    ) -> None:
        """Register a listener for one availability status."""

    @abstractmethod
    def unsubscribe(
        self, status: AdapterStatus | str, listener: StatusListener
    ) -> None:
        """Remove a previously registered listener."""
