"""Tests for core domain models."""

from dataclasses import FrozenInstanceError

import pytest

from ticketlink.core.errors import TransportError
from ticketlink.core.models import (
    AdapterConfig,
    ChangeTicket,
    Credentials,
    Err,
    Ok,
)


def test_adapter_config_from_host_properties() -> None:
    """The host's property shape maps onto AdapterConfig."""
    config = AdapterConfig.from_properties(
        {
            "url": "https://dev12345.service-now.com/",
            "auth": {"username": "admin", "password": "secret"},
            "serviceNowTable": "change_request",
        }
    )

    assert config.url == "https://dev12345.service-now.com/"
    assert config.credentials == Credentials(username="admin", password="secret")
    assert config.table_name == "change_request"


def test_adapter_config_from_credentials_and_table_name() -> None:
    config = AdapterConfig.from_properties(
        {
            "url": "https://x.example",
            "credentials": {"username": "u", "password": "p"},
            "tableName": "change_request",
        }
    )

    assert config.credentials.username == "u"
    assert config.table_name == "change_request"


@pytest.mark.parametrize(
    "properties, message",
    [
        ({"url": "https://x.example", "tableName": "t"}, "auth"),
        ({"url": "https://x.example", "auth": {"username": "u", "password": "p"}}, "table"),
        ({"auth": {"username": "u", "password": "p"}, "tableName": "t"}, "url"),
        ({"url": "https://x.example", "auth": {"username": "u"}, "tableName": "t"}, "password"),
    ],
)
def test_adapter_config_missing_keys(properties: dict, message: str) -> None:
    with pytest.raises(ValueError, match=message):
        AdapterConfig.from_properties(properties)


def test_adapter_config_is_immutable() -> None:
    config = AdapterConfig(
        url="https://x.example",
        credentials=Credentials(username="u", password="p"),
        table_name="change_request",
    )

    with pytest.raises(FrozenInstanceError):
        config.url = "https://y.example"  # type: ignore[misc]


def test_credentials_never_show_password() -> None:
    credentials = Credentials(username="admin", password="hunter2")

    assert "hunter2" not in repr(credentials)
    assert credentials.masked() == {"username": "admin", "password": "****"}


def test_change_ticket_to_dict_has_seven_keys() -> None:
    assert len(ChangeTicket().to_dict()) == 7


def test_result_variants() -> None:
    error = TransportError("down", status_code=503)

    assert Ok([1]).ok is True
    assert Ok([1]).unwrap() == [1]
    assert Err(error).ok is False
    assert error.status_code == 503
    with pytest.raises(TransportError):
        Err(error).unwrap()
