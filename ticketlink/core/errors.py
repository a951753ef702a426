"""Error taxonomy for the ticketlink adapter."""


class TicketLinkError(RuntimeError):
    """Base class for errors surfaced by the adapter."""


class TransportError(TicketLinkError):
    """Raised when a request to the external system fails.

    Covers network failures, non-2xx responses and authentication
    failures. The core forwards it unchanged to the caller.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedPayloadError(TicketLinkError):
    """Raised when a response lacks the expected body or ``result``."""


class ParseError(TicketLinkError):
    """Raised when a response body is not valid JSON."""


class TransportConfigError(TicketLinkError, ValueError):
    """Raised by a transport constructor for unusable configuration."""
