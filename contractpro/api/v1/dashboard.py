"""Dashboard endpoints for API v1."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Header, Query

from contractpro.api.v1._authz import require_user as _authorize
from contractpro.api.v1._responses import domain_errors, ok
from contractpro.database.db import get_db_session
from contractpro.schemas.dashboard import Activity, AdminStats, DashboardStats, Deadline, RevenuePoint
from contractpro.services.dashboard_service import DashboardService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/stats")
def stats(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["dashboard.read"])
    with get_db_session() as session, domain_errors():
        data = DashboardStats(**DashboardService(db=session).stats(user.user_id))
    return ok(data.model_dump(mode="json"))


@router.get("/revenue")
def revenue(
    period: Literal["6months", "1year"] = Query(default="6months"),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["dashboard.read"])
    with get_db_session() as session, domain_errors():
        points = DashboardService(db=session).revenue(user.user_id, period=period)
    return ok([RevenuePoint(**point).model_dump(mode="json") for point in points])


@router.get("/activity")
def recent_activity(
    limit: int = Query(default=10, ge=1, le=50),
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> dict:
    user = _authorize(authorization, scopes=["dashboard.read"])
    with get_db_session() as session, domain_errors():
        entries = DashboardService(db=session).recent_activity(user.user_id, limit=limit)
    return ok([Activity(**entry).model_dump(mode="json") for entry in entries])


@router.get("/upcoming-deadlines")
def upcoming_deadlines(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    user = _authorize(authorization, scopes=["dashboard.read"])
    with get_db_session() as session, domain_errors():
        entries = DashboardService(db=session).upcoming_deadlines(user.user_id)
    return ok([Deadline(**entry).model_dump(mode="json") for entry in entries])


@router.get("/admin-stats")
def admin_stats(authorization: str | None = Header(default=None, alias="Authorization")) -> dict:
    _authorize(authorization, scopes=["admin.stats"])
    with get_db_session() as session, domain_errors():
        data = AdminStats(**DashboardService(db=session).admin_stats())
    return ok(data.model_dump(mode="json"))
