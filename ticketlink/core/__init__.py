"""Core domain logic for the ticketlink adapter.

This package contains zero external dependencies and represents
the pure business logic of the adapter. The HTTP transport is
handled by the adapters package.
"""

from .errors import (
    MalformedPayloadError,
    ParseError,
    TicketLinkError,
    TransportConfigError,
    TransportError,
)
from .models import (
    AdapterConfig,
    AdapterStatus,
    BodyResponse,
    ChangeTicket,
    Credentials,
    EmptyResponse,
    Err,
    HealthState,
    Ok,
    RawResponse,
    RawTicketRecord,
    Result,
    StatusEvent,
    StructuredResponse,
)

__all__ = [
    "AdapterConfig",
    "AdapterStatus",
    "BodyResponse",
    "ChangeTicket",
    "Credentials",
    "EmptyResponse",
    "Err",
    "HealthState",
    "MalformedPayloadError",
    "Ok",
    "ParseError",
    "RawResponse",
    "RawTicketRecord",
    "Result",
    "StatusEvent",
    "StructuredResponse",
    "TicketLinkError",
    "TransportConfigError",
    "TransportError",
]
