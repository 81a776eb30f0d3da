"""Dashboard response schemas."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    total_clients: int
    active_contracts: int
    pending_invoices: int
    overdue_invoices: int
    total_revenue: Decimal
    monthly_revenue: Decimal


class RevenuePoint(BaseModel):
    year: int
    month: str
    revenue: Decimal
    invoices: int


class Deadline(BaseModel):
    id: str
    type: Literal["contract", "invoice"]
    title: str
    client: str | None = None
    date: datetime
    days_until: int
    urgent: bool


class Activity(BaseModel):
    id: str
    type: str
    title: str
    description: str
    timestamp: datetime


class AdminStats(BaseModel):
    total_users: int
    total_freelancers: int
    total_clients: int
    active_projects: int
    total_revenue: Decimal
    monthly_revenue: Decimal
    pending_approvals: int
