from __future__ import annotations

from contractpro.main import create_app


def test_required_endpoint_paths_are_mounted():
    paths = {route.path for route in create_app().routes}
    required = [
        "/api/v1/health",
        "/api/v1/auth/register",
        "/api/v1/auth/login",
        "/api/v1/auth/refresh",
        "/api/v1/auth/me",
        "/api/v1/auth/profile",
        "/api/v1/clients",
        "/api/v1/clients/{client_id}",
        "/api/v1/clients/{client_id}/contracts",
        "/api/v1/clients/{client_id}/invoices",
        "/api/v1/contracts",
        "/api/v1/contracts/{contract_id}",
        "/api/v1/contracts/{contract_id}/send-signature",
        "/api/v1/contracts/{contract_id}/sign",
        "/api/v1/contracts/{contract_id}/export-pdf",
        "/api/v1/invoices",
        "/api/v1/invoices/{invoice_id}",
        "/api/v1/invoices/{invoice_id}/send",
        "/api/v1/invoices/{invoice_id}/remind",
        "/api/v1/invoices/{invoice_id}/mark-paid",
        "/api/v1/invoices/{invoice_id}/export-pdf",
        "/api/v1/dashboard/stats",
        "/api/v1/dashboard/revenue",
        "/api/v1/dashboard/activity",
        "/api/v1/dashboard/upcoming-deadlines",
        "/api/v1/dashboard/admin-stats",
    ]
    for path in required:
        assert path in paths
