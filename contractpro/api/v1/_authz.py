"""Bearer-token authorization shared by the v1 route modules."""

from __future__ import annotations

from fastapi import HTTPException, status

from contractpro.auth.rbac import require_scopes
from contractpro.core.config import get_config
from contractpro.core.dependencies import CurrentUser, get_current_user
from contractpro.core.exceptions import AuthenticationError, AuthorizationError

NO_TOKEN = "Not authorized, no token"


def _bearer_token(authorization: str | None) -> str:
    if not isinstance(authorization, str):
        raise AuthenticationError(NO_TOKEN)
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthenticationError(NO_TOKEN)
    return token.strip()


def authorize(authorization: str | None, scopes: list[str]) -> CurrentUser:
    """Decode the bearer token and check the caller's role grants every scope."""
    user = get_current_user(token=_bearer_token(authorization), settings=get_config())
    require_scopes(user.role, scopes)
    return user


def map_auth_error(exc: Exception) -> tuple[int, str]:
    if isinstance(exc, AuthorizationError):
        return status.HTTP_403_FORBIDDEN, str(exc)
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED, str(exc)
    return status.HTTP_401_UNAUTHORIZED, "Not authorized"


def require_user(authorization: str | None, scopes: list[str]) -> CurrentUser:
    """`authorize`, with auth failures raised as HTTP 401/403."""
    try:
        return authorize(authorization=authorization, scopes=scopes)
    except (AuthenticationError, AuthorizationError) as exc:
        code, detail = map_auth_error(exc)
        raise HTTPException(status_code=code, detail=detail) from exc
