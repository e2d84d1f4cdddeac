"""Tests for configuration helpers."""

import pytest

from chat_app.utils.config import parse_auth_clients


def test_parse_auth_clients():
    clients = parse_auth_clients("user1:password1, user2:pw:with:colons")
    assert clients == {"user1": "password1", "user2": "pw:with:colons"}


def test_parse_auth_clients_skips_malformed_entries():
    assert parse_auth_clients("nocolon,:nopass,user1:,user2:ok") == {"user2": "ok"}


@pytest.mark.parametrize("raw", ["", "   ", "broken"])
def test_parse_auth_clients_requires_one_client(raw):
    with pytest.raises(ValueError):
        parse_auth_clients(raw)
