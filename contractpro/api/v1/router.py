"""Root API router for v1 endpoints."""

from __future__ import annotations

from fastapi import APIRouter

from contractpro.api.v1 import auth, clients, contracts, dashboard, health, invoices
from contractpro.core.config import get_config

api_router = APIRouter(prefix=get_config().API_PREFIX)
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(clients.router)
api_router.include_router(contracts.router)
api_router.include_router(invoices.router)
api_router.include_router(dashboard.router)


def get_api_router() -> APIRouter:
    return api_router
