"""Tests for bearer credential parsing"""
from app.auth import SessionCredentials, parse_bearer


def test_parse_bearer():
    assert parse_bearer("Bearer abc") == SessionCredentials(access_token="abc")
    assert parse_bearer("bearer   abc ") == SessionCredentials(access_token="abc")


def test_parse_bearer_rejects_other_schemes():
    assert parse_bearer(None) is None
    assert parse_bearer("") is None
    assert parse_bearer("Basic abc") is None
    assert parse_bearer("Bearer") is None


def test_repr_hides_token():
    credentials = SessionCredentials(access_token="super-secret")
    assert "super-secret" not in repr(credentials)
    assert credentials.fingerprint in repr(credentials)
    assert credentials.authorization_header() == {"Authorization": "Bearer super-secret"}
