"""Auth endpoints for API v1."""

from __future__ import annotations

from fastapi import APIRouter, Header, HTTPException, status

from contractpro.api.v1._authz import require_user as _authorize
from contractpro.api.v1._responses import domain_errors, dump, ok
from contractpro.auth.jwt import REFRESH, create_token_pair, decode_jwt
from contractpro.core.config import get_config
from contractpro.core.exceptions import AuthenticationError, NotFoundError
from contractpro.database.db import get_db_session
from contractpro.models import User
from contractpro.schemas.auth import (
    LoginRequest,
    ProfileUpdateRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from contractpro.services.user_service import UserService

router = APIRouter(prefix="/auth", tags=["auth"])


def _issue_tokens(user: User) -> dict:
    cfg = get_config()
    tokens = create_token_pair(
        user_id=user.id,
        role=user.role,
        secret=cfg.JWT_SECRET,
        permissions_version=cfg.JWT_PERMISSIONS_VERSION,
        access_ttl_minutes=cfg.JWT_ACCESS_TTL_MINUTES,
        refresh_ttl_days=cfg.JWT_REFRESH_TTL_DAYS,
    )
    return TokenResponse(
        access_token=tokens.access_token,
        refresh_token=tokens.refresh_token,
        token_type=tokens.token_type,
        expires_in=tokens.expires_in,
        user=UserResponse.model_validate(user),
    ).model_dump(mode="json")


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest) -> dict:
    with get_db_session() as session, domain_errors():
        user = UserService(db=session).register(
            name=payload.name, email=payload.email, password=payload.password, role=payload.role
        )
        return ok(_issue_tokens(user), message="User registered successfully")


@router.post("/login")
def login(payload: LoginRequest) -> dict:
    with get_db_session() as session, domain_errors():
        user = UserService(db=session).authenticate(email=payload.email, password=payload.password)
        return ok(_issue_tokens(user), message="Login successful")


@router.post("/refresh")
def refresh(payload: RefreshRequest) -> dict:
    cfg = get_config()
    try:
        claims = decode_jwt(payload.refresh_token, secret=cfg.JWT_SECRET, expected_use=REFRESH)
    except AuthenticationError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(exc)) from exc

    with get_db_session() as session, domain_errors():
        try:
            user = UserService(db=session).get_user(str(claims.get("sub")))
        except NotFoundError as exc:
            raise AuthenticationError("Invalid token") from exc
        return ok(_issue_tokens(user))


@router.get("/me")
def me(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    current = _authorize(authorization, scopes=[])
    with get_db_session() as session, domain_errors():
        return ok(dump(UserResponse, UserService(db=session).get_user(current.user_id)))


@router.put("/profile")
def update_profile(
    payload: ProfileUpdateRequest,
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    current = _authorize(authorization, scopes=["profile.write"])
    with get_db_session() as session, domain_errors():
        user = UserService(db=session).update_profile(current.user_id, name=payload.name)
        return ok(dump(UserResponse, user), message="Profile updated successfully")
