"""Response pipeline for the ticketlink adapter.

Turns raw transport responses into ChangeTicket records. Every call
settles exactly once with a Result: transport failures, empty bodies,
bad JSON and missing ``result`` members all come back as Err values
instead of escaping or leaving the caller waiting.
"""

import inspect
import json
import logging
from collections.abc import Mapping
from typing import Any

from .errors import MalformedPayloadError, ParseError, TransportError
from .models import (
    ChangeTicket,
    EmptyResponse,
    Err,
    Ok,
    RawResponse,
    Result,
    StructuredResponse,
)
from .normalizer import normalize, normalize_many
from .ports import Completion, TransportPort

logger = logging.getLogger(__name__)


async def settle(callback: Completion | None, result: Result[Any]) -> None:
    """Hand a result to an optional completion callback.

    Coroutine callbacks are awaited.
    """
    if callback is None:
        return
    outcome = callback(result)
    if inspect.isawaitable(outcome):
        await outcome


def decode_payload(response: RawResponse) -> Mapping[str, Any] | None:
    """Return the decoded body of a response, or None if it has none.

    Raises:
        ParseError: If a serialized body is not valid JSON.
        MalformedPayloadError: If the decoded body is not a JSON object.
    """
    if isinstance(response, EmptyResponse):
        return None

    if isinstance(response, StructuredResponse):
        payload: Any = response.payload
    else:
        if not response.body or not response.body.strip():
            return None
        try:
            payload = json.loads(response.body)
        except (json.JSONDecodeError, TypeError) as e:
            raise ParseError(f"Response body is not valid JSON: {e}") from e

    if not isinstance(payload, Mapping):
        raise MalformedPayloadError(
            f"Response body must be a JSON object, got {type(payload).__name__}"
        )
    return payload


class ResponsePipeline:
    """Reads and creates change tickets through a TransportPort."""

    def __init__(self, transport: TransportPort):
        self.transport = transport

    async def get_record(
        self, callback: Completion | None = None
    ) -> Result[list[ChangeTicket]]:
        """Fetch records and normalize them in their original order.

        An empty response settles as MalformedPayloadError.
        """
        result = await self._read()
        await settle(callback, result)
        return result

    async def post_record(
        self,
        fields: Mapping[str, Any] | None = None,
        callback: Completion | None = None,
    ) -> Result[ChangeTicket | None]:
        """Create a record and normalize the one the system sends back.

        An empty response settles as Ok(None). Errors settle as Err and
        still reach the callback.
        """
        result = await self._write(fields)
        await settle(callback, result)
        return result

    async def _read(self) -> Result[list[ChangeTicket]]:
        try:
            response = await self.transport.get()
        except Exception as e:
            return Err(self._transport_failure("GET", e))

        try:
            payload = decode_payload(response)
            if payload is None:
                raise MalformedPayloadError("GET response has no body")

            records = payload.get("result")
            if not isinstance(records, list):
                raise MalformedPayloadError(
                    "GET response body has no 'result' list"
                )
            for index, record in enumerate(records):
                if not isinstance(record, Mapping):
                    raise MalformedPayloadError(
                        f"GET result entry {index} is not an object"
                    )
        except (ParseError, MalformedPayloadError) as e:
            logger.error(f"Unusable payload returned from GET request: {e}")
            return Err(e)

        tickets = normalize_many(records)
        logger.debug(f"Returning {len(tickets)} change ticket(s) from GET")
        return Ok(tickets)

    async def _write(
        self, fields: Mapping[str, Any] | None
    ) -> Result[ChangeTicket | None]:
        try:
            response = await self.transport.post(fields)
        except Exception as e:
            return Err(self._transport_failure("POST", e))

        try:
            payload = decode_payload(response)
            if payload is None:
                logger.info("POST response has no body; nothing to normalize")
                return Ok(None)

            record = payload.get("result")
            if not isinstance(record, Mapping):
                raise MalformedPayloadError(
                    "POST response body has no 'result' object"
                )
        except (ParseError, MalformedPayloadError) as e:
            logger.error(f"Unusable payload returned from POST request: {e}")
            return Err(e)

        ticket = normalize(record)
        logger.debug(f"Created change ticket {ticket.change_ticket_number}")
        return Ok(ticket)

    @staticmethod
    def _transport_failure(method: str, error: Exception) -> TransportError:
        """Log a transport failure and return it as a TransportError."""
        if isinstance(error, TransportError):
            logger.error(f"Error returned from {method} request: {error}")
            return error

        logger.error(
            f"Unexpected error during {method} request: {error}", exc_info=True
        )
        wrapped = TransportError(f"{method} request failed: {error}")
        wrapped.__cause__ = error
        return wrapped
