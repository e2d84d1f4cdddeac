"""Tests for basic auth handling."""

import base64

import pytest

from chat_app.utils.auth import decode_basic_credentials
from chat_app.utils.errors import APIError


def encode(raw: str) -> str:
    return base64.b64encode(raw.encode()).decode()


def test_decode_basic_credentials():
    assert decode_basic_credentials(f"Basic {encode('user1:password1')}") == ("user1", "password1")


def test_password_may_contain_colons():
    assert decode_basic_credentials(f"Basic {encode('user1:a:b')}") == ("user1", "a:b")


@pytest.mark.parametrize("header,code", [
    ("Bearer abc", "UNAUTHORIZED_INVALID_AUTH_FORMAT"),
    ("Basic", "UNAUTHORIZED_INVALID_AUTH_FORMAT"),
    ("Basic not*base64", "UNAUTHORIZED_INVALID_BASE64"),
    (f"Basic {encode('nocolon')}", "UNAUTHORIZED_INVALID_CREDENTIALS_FORMAT"),
])
def test_malformed_headers(header, code):
    with pytest.raises(APIError) as excinfo:
        decode_basic_credentials(header)
    assert excinfo.value.code == code
    assert excinfo.value.status_code == 401


def test_missing_header_is_rejected(client):
    r = client.get("/api/v1/users/user1")
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED_AUTH_REQUIRED"


def test_wrong_password_is_rejected(client):
    r = client.get("/api/v1/users/user1", auth=("user1", "wrong"))
    assert r.status_code == 401
    assert r.json()["error"]["code"] == "UNAUTHORIZED_INVALID_CREDENTIALS"


def test_unknown_client_is_rejected(client):
    r = client.get("/api/v1/users/user1", auth=("mallory", "password1"))
    assert r.status_code == 401


def test_health_needs_no_auth(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "healthy"}
