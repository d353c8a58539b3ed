from __future__ import annotations

import pytest

from ejabberd_client import InvalidConfiguration
from ejabberd_client.host import conference_service, resolve_host


@pytest.mark.parametrize(
    ("base_uri", "expected"),
    [
        ("https://chat.example.com", "chat.example.com"),
        ("http://chat.example.com/", "chat.example.com"),
        ("https://Chat.Example.COM:5443", "chat.example.com"),
        ("https://xmpp-1.my_org.net:5280/", "xmpp-1.my_org.net"),
        ("http://127.0.0.1:5280", "127.0.0.1"),
    ],
)
def test_resolve_host_extracts_domain(base_uri: str, expected: str) -> None:
    assert resolve_host(base_uri) == expected


@pytest.mark.parametrize(
    "base_uri",
    [
        "",
        "chat.example.com",
        "ftp://chat.example.com",
        "https://localhost",
        "https://-bad.example.com",
        "https://chat..example.com",
        "https://chat.example.com/api",
        "https://chat.example.com:port",
    ],
)
def test_resolve_host_rejects_invalid_uri(base_uri: str) -> None:
    with pytest.raises(InvalidConfiguration):
        resolve_host(base_uri)


def test_invalid_configuration_is_value_error() -> None:
    with pytest.raises(ValueError):
        resolve_host("not a uri")


def test_conference_service() -> None:
    assert conference_service("example.com") == "conference.example.com"
