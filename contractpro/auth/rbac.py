"""Role-based authorization helpers.

Scopes are ``<resource>.<action>`` strings declared by each endpoint. Admins
hold the wildcard; freelancers own and edit their business records; clients
get read-only views.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from contractpro.core.exceptions import AuthorizationError
from contractpro.models.enums import UserRole

logger = logging.getLogger(__name__)

WILDCARD = "*"
ACCESS_DENIED = "Access denied - insufficient permissions"

_RECORD_SCOPES = frozenset(
    f"{resource}.{action}" for resource in ("clients", "contracts", "invoices") for action in ("read", "write")
)
_ACCOUNT_SCOPES = frozenset({"dashboard.read", "profile.write"})

ROLE_SCOPES: dict[str, frozenset[str]] = {
    UserRole.ADMIN.value: frozenset({WILDCARD}),
    UserRole.FREELANCER.value: _RECORD_SCOPES | _ACCOUNT_SCOPES,
    UserRole.CLIENT.value: frozenset({"contracts.read", "invoices.read"}) | _ACCOUNT_SCOPES,
}


def get_scopes_for_role(role: str) -> frozenset[str]:
    return ROLE_SCOPES.get(role.lower(), frozenset())


def has_scopes(role: str, required_scopes: Iterable[str]) -> bool:
    granted = get_scopes_for_role(role)
    return WILDCARD in granted or granted.issuperset(required_scopes)


def require_scopes(role: str, required_scopes: Iterable[str]) -> None:
    """Raise `AuthorizationError` unless ``role`` grants every scope."""
    required = frozenset(required_scopes)
    if has_scopes(role, required):
        return
    logger.warning(
        "auth.scope_denied",
        extra={"event": "auth.scope_denied", "role": role, "missing": sorted(required - get_scopes_for_role(role))},
    )
    raise AuthorizationError(ACCESS_DENIED)
