from __future__ import annotations

from datetime import timedelta

import pytest

from contractpro.auth.jwt import create_token_pair, decode_jwt, encode_jwt
from contractpro.auth.rbac import has_scopes, require_scopes
from contractpro.core.exceptions import AuthenticationError, AuthorizationError


def test_jwt_roundtrip_contains_required_claims():
    tokens = create_token_pair(user_id="abc123", role="freelancer", secret="test-secret")
    claims = decode_jwt(tokens.access_token, secret="test-secret")
    assert claims["sub"] == "abc123"
    assert claims["role"] == "freelancer"
    assert claims["token_use"] == "access"
    assert "exp" in claims
    assert "iat" in claims
    assert "jti" in claims

    refresh_claims = decode_jwt(tokens.refresh_token, secret="test-secret")
    assert refresh_claims["token_use"] == "refresh"


def test_jwt_rejects_wrong_secret():
    tokens = create_token_pair(user_id="abc123", role="freelancer", secret="test-secret")
    with pytest.raises(AuthenticationError, match="Invalid token"):
        decode_jwt(tokens.access_token, secret="other-secret")


def test_jwt_rejects_expired_token():
    token = encode_jwt({"sub": "abc123"}, secret="test-secret", ttl=timedelta(seconds=-60))
    with pytest.raises(AuthenticationError, match="Token expired"):
        decode_jwt(token, secret="test-secret")


def test_jwt_rejects_malformed_token():
    with pytest.raises(AuthenticationError, match="Invalid token"):
        decode_jwt("not-a-jwt", secret="test-secret")


def test_rbac_blocks_missing_scope():
    require_scopes("client", ["invoices.read"])
    with pytest.raises(AuthorizationError, match="Access denied - insufficient permissions"):
        require_scopes("client", ["invoices.write"])


def test_rbac_admin_wildcard_and_unknown_role():
    assert has_scopes("admin", ["admin.stats", "clients.write"])
    assert not has_scopes("freelancer", ["admin.stats"])
    assert not has_scopes("intruder", ["clients.read"])
