"""HS256 JSON Web Tokens for the access/refresh session pair.

Tokens carry ``sub`` (user id), ``role``, ``permissions_version`` and
``token_use``. Bumping ``JWT_PERMISSIONS_VERSION`` invalidates every token
minted under an older version.
"""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from contractpro.core.exceptions import AuthenticationError

ACCESS = "access"
REFRESH = "refresh"

_HEADER = {"alg": "HS256", "typ": "JWT"}
INVALID_TOKEN = "Invalid token"
EXPIRED_TOKEN = "Token expired"


@dataclass(frozen=True)
class TokenPair:
    access_token: str
    refresh_token: str
    expires_in: int
    token_type: str = "bearer"


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _unb64(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _segment(document: dict[str, Any]) -> str:
    return _b64(json.dumps(document, separators=(",", ":"), sort_keys=True).encode("utf-8"))


def _signature(signing_input: str, secret: str) -> str:
    if not secret:
        raise AuthenticationError("JWT secret must be configured.")
    mac = hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256)
    return _b64(mac.digest())


def encode_jwt(claims: dict[str, Any], secret: str, ttl: timedelta, now: datetime | None = None) -> str:
    issued = now or datetime.now(timezone.utc)
    body = {
        "iat": int(issued.timestamp()),
        "exp": int((issued + ttl).timestamp()),
        "jti": uuid.uuid4().hex,
        **claims,
    }
    signing_input = f"{_segment(_HEADER)}.{_segment(body)}"
    return f"{signing_input}.{_signature(signing_input, secret)}"


def decode_jwt(
    token: str,
    secret: str,
    verify_exp: bool = True,
    expected_use: str | None = None,
) -> dict[str, Any]:
    """Verify signature, expiry and (optionally) ``token_use``; return the claims."""
    parts = token.split(".")
    if len(parts) != 3:
        raise AuthenticationError(INVALID_TOKEN)
    signing_input = f"{parts[0]}.{parts[1]}"
    if not hmac.compare_digest(_signature(signing_input, secret), parts[2]):
        raise AuthenticationError(INVALID_TOKEN)

    try:
        claims = json.loads(_unb64(parts[1]))
    except ValueError as exc:
        raise AuthenticationError(INVALID_TOKEN) from exc
    if not isinstance(claims, dict):
        raise AuthenticationError(INVALID_TOKEN)

    if verify_exp:
        exp = claims.get("exp")
        if not isinstance(exp, int):
            raise AuthenticationError(INVALID_TOKEN)
        if exp < int(datetime.now(timezone.utc).timestamp()):
            raise AuthenticationError(EXPIRED_TOKEN)
    if expected_use is not None and claims.get("token_use") != expected_use:
        raise AuthenticationError(INVALID_TOKEN)
    return claims


def create_token_pair(
    user_id: str,
    role: str,
    secret: str,
    permissions_version: int = 1,
    access_ttl_minutes: int = 60,
    refresh_ttl_days: int = 7,
) -> TokenPair:
    """Mint an access token and a longer-lived refresh token for one user."""
    claims = {"sub": user_id, "role": role, "permissions_version": permissions_version}
    access_ttl = timedelta(minutes=access_ttl_minutes)
    return TokenPair(
        access_token=encode_jwt({**claims, "token_use": ACCESS}, secret, access_ttl),
        refresh_token=encode_jwt({**claims, "token_use": REFRESH}, secret, timedelta(days=refresh_ttl_days)),
        expires_in=int(access_ttl.total_seconds()),
    )
