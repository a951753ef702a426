"""Tests for the ChangeTicketAdapter facade."""

import pytest

from ticketlink.core.adapter import ChangeTicketAdapter
from ticketlink.core.errors import TransportConfigError, TransportError
from ticketlink.core.models import (
    AdapterConfig,
    AdapterStatus,
    Credentials,
    HealthState,
    Ok,
    StatusEvent,
)
from ticketlink.tests.fakes import FakeTransportPort, body_response


@pytest.fixture
def config() -> AdapterConfig:
    return AdapterConfig(
        url="https://x.example",
        credentials=Credentials(username="u", password="p"),
        table_name="change_request",
    )


@pytest.fixture
def transport() -> FakeTransportPort:
    return FakeTransportPort()


@pytest.fixture
def adapter(config: AdapterConfig, transport: FakeTransportPort) -> ChangeTicketAdapter:
    return ChangeTicketAdapter("sn-1", config, transport_factory=lambda cfg: transport)


def test_construction_builds_one_transport(config: AdapterConfig) -> None:
    built: list[AdapterConfig] = []

    def factory(cfg: AdapterConfig) -> FakeTransportPort:
        built.append(cfg)
        return FakeTransportPort()

    adapter = ChangeTicketAdapter("sn-1", config, transport_factory=factory)

    assert built == [config]
    assert adapter.id == "sn-1"
    assert adapter.config is config
    assert adapter.status is HealthState.UNKNOWN


def test_construction_propagates_transport_errors(config: AdapterConfig) -> None:
    def factory(cfg: AdapterConfig) -> FakeTransportPort:
        raise TransportConfigError("bad url")

    with pytest.raises(TransportConfigError, match="bad url"):
        ChangeTicketAdapter("sn-1", config, transport_factory=factory)


def test_construction_log_masks_password(
    config: AdapterConfig, caplog: pytest.LogCaptureFixture
) -> None:
    with caplog.at_level("INFO", logger="ticketlink.core.adapter"):
        ChangeTicketAdapter("sn-1", config, transport_factory=lambda cfg: FakeTransportPort())

    assert "https://x.example" in caplog.text
    assert "'p'" not in caplog.text
    assert "****" in caplog.text


@pytest.mark.asyncio
async def test_connect_emits_online(
    adapter: ChangeTicketAdapter, transport: FakeTransportPort
) -> None:
    transport.queue_get(body_response({"result": [{"sys_id": "1"}]}))
    events: list[StatusEvent] = []
    adapter.subscribe("ONLINE", events.append)

    state = await adapter.connect()

    assert state is HealthState.ONLINE
    assert adapter.status is HealthState.ONLINE
    assert [e.to_dict() for e in events] == [{"id": "sn-1"}]
    assert transport.get_call_count == 1


@pytest.mark.asyncio
async def test_connect_emits_offline_on_transport_error(
    adapter: ChangeTicketAdapter, transport: FakeTransportPort
) -> None:
    transport.queue_get(TransportError("connection refused"))
    online: list[StatusEvent] = []
    offline: list[StatusEvent] = []
    adapter.subscribe(AdapterStatus.ONLINE, online.append)
    adapter.subscribe(AdapterStatus.OFFLINE, offline.append)

    state = await adapter.connect()

    assert state is HealthState.OFFLINE
    assert online == []
    assert [e.to_dict() for e in offline] == [{"id": "sn-1"}]


@pytest.mark.asyncio
async def test_get_record_concrete_scenario(
    adapter: ChangeTicketAdapter, transport: FakeTransportPort
) -> None:
    transport.queue_get(
        body_response(
            {
                "result": [
                    {
                        "sys_id": "1",
                        "number": "CHG1",
                        "active": True,
                        "priority": "1",
                        "description": "d",
                        "work_start": "t0",
                        "work_end": "t1",
                    }
                ]
            }
        )
    )
    received = []

    await adapter.get_record(received.append)

    assert len(received) == 1
    assert [t.to_dict() for t in received[0].value] == [
        {
            "change_ticket_key": "1",
            "change_ticket_number": "CHG1",
            "active": True,
            "priority": "1",
            "description": "d",
            "work_start": "t0",
            "work_end": "t1",
        }
    ]


@pytest.mark.asyncio
async def test_get_record_does_not_emit_status(
    adapter: ChangeTicketAdapter, transport: FakeTransportPort
) -> None:
    """Only healthchecks change status."""
    transport.queue_get(TransportError("down"))
    events: list[StatusEvent] = []
    adapter.subscribe("OFFLINE", events.append)

    result = await adapter.get_record()

    assert not result.ok
    assert events == []
    assert adapter.status is HealthState.UNKNOWN


@pytest.mark.asyncio
async def test_post_record_delegates(
    adapter: ChangeTicketAdapter, transport: FakeTransportPort
) -> None:
    transport.queue_post(body_response({"result": {"sys_id": "9", "number": "CHG9"}}))

    result = await adapter.post_record({"short_description": "Reboot"})

    assert isinstance(result, Ok)
    assert result.value.change_ticket_number == "CHG9"
    assert transport.posted_fields == [{"short_description": "Reboot"}]


@pytest.mark.asyncio
async def test_once_and_unsubscribe(
    adapter: ChangeTicketAdapter, transport: FakeTransportPort
) -> None:
    once_events: list[StatusEvent] = []
    removed: list[StatusEvent] = []
    adapter.once("ONLINE", once_events.append)
    adapter.subscribe("ONLINE", removed.append)
    adapter.unsubscribe("ONLINE", removed.append)

    await adapter.healthcheck()
    await adapter.healthcheck()

    assert len(once_events) == 1
    assert removed == []


def test_subscribe_rejects_unknown_event(adapter: ChangeTicketAdapter) -> None:
    with pytest.raises(ValueError):
        adapter.subscribe("error", lambda event: None)


@pytest.mark.asyncio
async def test_async_context_manager_closes_transport(
    adapter: ChangeTicketAdapter, transport: FakeTransportPort
) -> None:
    async with adapter as entered:
        assert entered is adapter

    assert transport.closed is True
