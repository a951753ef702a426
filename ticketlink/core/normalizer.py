"""Normalization of raw ServiceNow rows into ChangeTicket records."""

from collections.abc import Iterable
from types import MappingProxyType

from .models import ChangeTicket, RawTicketRecord

# ServiceNow column -> ChangeTicket field
FIELD_MAP = MappingProxyType(
    {
        "sys_id": "change_ticket_key",
        "number": "change_ticket_number",
        "active": "active",
        "priority": "priority",
        "description": "description",
        "work_start": "work_start",
        "work_end": "work_end",
    }
)


def normalize(record: RawTicketRecord) -> ChangeTicket:
    """Map one raw record onto the fixed ChangeTicket shape.

    Pure and total: columns outside FIELD_MAP are dropped, missing columns
    become None. Values are passed through without type checks.
    """
    return ChangeTicket(
        **{target: record.get(source) for source, target in FIELD_MAP.items()}
    )


def normalize_many(records: Iterable[RawTicketRecord]) -> list[ChangeTicket]:
    """Normalize records, preserving order."""
    return [normalize(record) for record in records]
