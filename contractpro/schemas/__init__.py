"""Pydantic schema package for API contracts."""

from contractpro.schemas.auth import (
    LoginRequest,
    ProfileUpdateRequest,
    RefreshRequest,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from contractpro.schemas.clients import ClientCreateRequest, ClientResponse, ClientSummary, ClientUpdateRequest
from contractpro.schemas.common import APIEnvelope, ErrorEnvelope, PaginationMeta
from contractpro.schemas.contracts import ContractCreateRequest, ContractResponse, ContractUpdateRequest
from contractpro.schemas.dashboard import Activity, AdminStats, DashboardStats, Deadline, RevenuePoint
from contractpro.schemas.invoices import (
    InvoiceCreateRequest,
    InvoiceItemRequest,
    InvoiceItemResponse,
    InvoiceResponse,
    InvoiceUpdateRequest,
    ReminderResponse,
)

__all__ = [
    "APIEnvelope",
    "Activity",
    "AdminStats",
    "ClientCreateRequest",
    "ClientResponse",
    "ClientSummary",
    "ClientUpdateRequest",
    "ContractCreateRequest",
    "ContractResponse",
    "ContractUpdateRequest",
    "DashboardStats",
    "Deadline",
    "ErrorEnvelope",
    "InvoiceCreateRequest",
    "InvoiceItemRequest",
    "InvoiceItemResponse",
    "InvoiceResponse",
    "InvoiceUpdateRequest",
    "LoginRequest",
    "PaginationMeta",
    "ProfileUpdateRequest",
    "RefreshRequest",
    "RegisterRequest",
    "ReminderResponse",
    "RevenuePoint",
    "TokenResponse",
    "UserResponse",
]
