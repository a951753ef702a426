"""Adapter facade constructed by the host platform.

One ChangeTicketAdapter exists per configured connection. It owns the
configuration, exactly one transport, the response pipeline, the health
controller and the status emitter, and exposes them through the
ChangeTicketPort surface.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Any, TypeAlias

from .health import HealthController
from .models import AdapterConfig, AdapterStatus, ChangeTicket, HealthState, Result
from .pipeline import ResponsePipeline
from .ports import ChangeTicketPort, Completion, StatusListener, TransportPort
from .status import StatusEmitter

logger = logging.getLogger(__name__)

TransportFactory: TypeAlias = Callable[[AdapterConfig], TransportPort]


class ChangeTicketAdapter(ChangeTicketPort):
    """Health-checked, event-emitting adapter over one change-request table."""

    def __init__(
        self,
        adapter_id: str,
        config: AdapterConfig,
        transport_factory: TransportFactory,
    ):
        """Initialize the adapter and its transport.

        Args:
            adapter_id: Identity reported in every status event.
            config: Connection properties for the external system.
            transport_factory: Builds the transport bound to config. Any
                error it raises propagates to the caller.
        """
        logger.info(f"Adapter properties for {adapter_id}: {config.masked()}")
        self.id = adapter_id
        self.config = config
        self.transport = transport_factory(config)
        self.emitter = StatusEmitter()
        self.pipeline = ResponsePipeline(self.transport)
        self.health = HealthController(adapter_id, self.pipeline, self.emitter)

    async def __aenter__(self) -> "ChangeTicketAdapter":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self.transport.close()

    @property
    def status(self) -> HealthState:
        """State from the most recent healthcheck."""
        return self.health.state

    async def connect(self) -> HealthState:
        """Complete a single healthcheck and emit ONLINE or OFFLINE.

        The host calls this after construction; all connection details
        were supplied to the constructor.
        """
        await self.healthcheck(lambda _result: None)
        return self.status

    async def healthcheck(
        self, callback: Completion | None = None
    ) -> Result[list[ChangeTicket]]:
        return await self.health.healthcheck(callback)

    async def get_record(
        self, callback: Completion | None = None
    ) -> Result[list[ChangeTicket]]:
        return await self.pipeline.get_record(callback)

    async def post_record(
        self,
        fields: Mapping[str, Any] | None = None,
        callback: Completion | None = None,
    ) -> Result[ChangeTicket | None]:
        return await self.pipeline.post_record(fields, callback)

    def subscribe(
        self, status: AdapterStatus | str, listener: StatusListener
    ) -> None:
        self.emitter.subscribe(status, listener)

    def once(self, status: AdapterStatus | str, listener: StatusListener) -> None:
        self.emitter.once(status, listener)

    def unsubscribe(
        self, status: AdapterStatus | str, listener: StatusListener
    ) -> None:
        self.emitter.unsubscribe(status, listener)
