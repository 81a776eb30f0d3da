"""Request-scoped providers: configuration and the calling user."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from contractpro.auth.jwt import ACCESS, decode_jwt
from contractpro.core.config import Config, get_config
from contractpro.core.exceptions import AuthenticationError
from contractpro.models.enums import UserRole


@dataclass(frozen=True)
class CurrentUser:
    user_id: str
    role: str
    claims: dict[str, Any] = field(default_factory=dict)


def get_settings() -> Config:
    return get_config()


def get_current_user(token: str, settings: Config | None = None) -> CurrentUser:
    """Resolve the caller from an access token minted under the current permissions version."""
    cfg = settings or get_settings()
    claims = decode_jwt(token=token, secret=cfg.JWT_SECRET, expected_use=ACCESS)

    subject = claims.get("sub")
    role = str(claims.get("role", "")).lower()
    if not subject or role not in {member.value for member in UserRole}:
        raise AuthenticationError("Invalid token")
    try:
        version = int(claims.get("permissions_version", 1))
    except (TypeError, ValueError) as exc:
        raise AuthenticationError("Invalid token") from exc
    if version < cfg.JWT_PERMISSIONS_VERSION:
        raise AuthenticationError("Token permissions are outdated; please sign in again.")
    return CurrentUser(user_id=str(subject), role=role, claims=claims)
