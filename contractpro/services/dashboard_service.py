"""Dashboard aggregations over a user's clients, contracts and invoices."""

from __future__ import annotations

import calendar
import math
from collections import defaultdict
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from sqlalchemy import and_, func, or_, select

from contractpro.core.config import get_config
from contractpro.models import Client, Contract, ContractStatus, Invoice, InvoiceStatus, User, UserRole
from contractpro.services.base_service import BaseService

REVENUE_PERIODS = {"6months": 6, "1year": 12}
URGENT_DAYS = 3


def _month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def _shift_months(moment: datetime, months: int) -> datetime:
    index = moment.year * 12 + (moment.month - 1) + months
    year, month = divmod(index, 12)
    day = min(moment.day, calendar.monthrange(year, month + 1)[1])
    return moment.replace(year=year, month=month + 1, day=day)


def _as_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal("0")
    return value if isinstance(value, Decimal) else Decimal(str(value))


def _days_until(deadline: datetime, now: datetime) -> int:
    return math.ceil((deadline - now) / timedelta(days=1))


class DashboardService(BaseService):
    """Read-only aggregations; stale statuses are derived from the clock, not trusted."""

    def _count(self, *criteria) -> int:
        return self.db.scalar(select(func.count()).where(*criteria)) or 0

    def _paid_total(self, *criteria) -> Decimal:
        """Exact sum of paid invoice totals."""
        stmt = select(Invoice.total).where(
            Invoice.status == InvoiceStatus.PAID.value, Invoice.is_active.is_(True), *criteria
        )
        return sum((_as_decimal(total) for total in self.db.scalars(stmt)), Decimal("0"))

    def _active_contract_clause(self, now: datetime):
        return or_(
            Contract.status == ContractStatus.SIGNED.value,
            and_(Contract.status == ContractStatus.SENT.value, Contract.expires_at >= now),
        )

    def stats(self, user_id: str) -> dict[str, Any]:
        now = self.clock()
        month_start = _month_start(now)
        overdue_clause = or_(
            Invoice.status == InvoiceStatus.OVERDUE.value,
            and_(Invoice.status == InvoiceStatus.SENT.value, Invoice.due_date < now),
        )
        owned_invoice = (Invoice.user_id == user_id, Invoice.is_active.is_(True))
        return {
            "total_clients": self._count(Client.user_id == user_id, Client.is_active.is_(True)),
            "active_contracts": self._count(
                Contract.user_id == user_id, Contract.is_active.is_(True), self._active_contract_clause(now)
            ),
            "pending_invoices": self._count(
                *owned_invoice,
                Invoice.status.in_([InvoiceStatus.SENT.value, InvoiceStatus.OVERDUE.value]),
            ),
            "overdue_invoices": self._count(*owned_invoice, overdue_clause),
            "total_revenue": self._paid_total(Invoice.user_id == user_id),
            "monthly_revenue": self._paid_total(
                Invoice.user_id == user_id,
                Invoice.paid_at >= month_start,
                Invoice.paid_at < _shift_months(month_start, 1),
            ),
        }

    def revenue(self, user_id: str, period: str = "6months") -> list[dict[str, Any]]:
        """Paid totals per calendar month, oldest first."""
        now = self.clock()
        start = _shift_months(now, -REVENUE_PERIODS.get(period, 6))
        rows = self.db.execute(
            select(Invoice.paid_at, Invoice.total).where(
                Invoice.user_id == user_id,
                Invoice.is_active.is_(True),
                Invoice.status == InvoiceStatus.PAID.value,
                Invoice.paid_at >= start,
                Invoice.paid_at <= now,
            )
        ).all()

        buckets: dict[tuple[int, int], dict[str, Any]] = defaultdict(lambda: {"revenue": Decimal("0"), "invoices": 0})
        for paid_at, total in rows:
            bucket = buckets[(paid_at.year, paid_at.month)]
            bucket["revenue"] += _as_decimal(total)
            bucket["invoices"] += 1

        return [
            {
                "year": year,
                "month": calendar.month_abbr[month],
                "revenue": bucket["revenue"],
                "invoices": bucket["invoices"],
            }
            for (year, month), bucket in sorted(buckets.items())
        ]

    def upcoming_deadlines(self, user_id: str) -> list[dict[str, Any]]:
        now = self.clock()
        horizon = now + timedelta(days=get_config().DEADLINE_WINDOW_DAYS)
        deadlines: list[dict[str, Any]] = []

        contracts = self.db.scalars(
            select(Contract)
            .where(
                Contract.user_id == user_id,
                Contract.is_active.is_(True),
                Contract.status == ContractStatus.SENT.value,
                Contract.expires_at >= now,
                Contract.expires_at <= horizon,
            )
            .order_by(Contract.expires_at)
        ).unique()
        for contract in contracts:
            days = _days_until(contract.expires_at, now)
            deadlines.append(
                {
                    "id": contract.id,
                    "type": "contract",
                    "title": "Contract expires",
                    "client": contract.client.name if contract.client else None,
                    "date": contract.expires_at,
                    "days_until": days,
                    "urgent": days <= URGENT_DAYS,
                }
            )

        invoices = self.db.scalars(
            select(Invoice)
            .where(
                Invoice.user_id == user_id,
                Invoice.is_active.is_(True),
                Invoice.status.in_([InvoiceStatus.SENT.value, InvoiceStatus.OVERDUE.value]),
                Invoice.due_date >= now,
                Invoice.due_date <= horizon,
            )
            .order_by(Invoice.due_date)
        ).unique()
        for invoice in invoices:
            days = _days_until(invoice.due_date, now)
            deadlines.append(
                {
                    "id": invoice.id,
                    "type": "invoice",
                    "title": "Invoice due",
                    "client": invoice.client.name if invoice.client else None,
                    "date": invoice.due_date,
                    "days_until": days,
                    "urgent": days <= 0 or invoice.status == InvoiceStatus.OVERDUE.value,
                }
            )

        deadlines.sort(key=lambda entry: entry["date"])
        return deadlines

    def recent_activity(self, user_id: str, limit: int = 10) -> list[dict[str, Any]]:
        activities: list[dict[str, Any]] = []

        contracts = self.db.scalars(
            select(Contract)
            .where(Contract.user_id == user_id, Contract.is_active.is_(True))
            .order_by(Contract.updated_at.desc())
            .limit(5)
        ).unique()
        for contract in contracts:
            client_name = contract.client.name if contract.client else None
            if contract.signed_at:
                kind, title, timestamp = "contract_signed", "Contract signed", contract.signed_at
            elif contract.sent_at:
                kind, title, timestamp = "contract_sent", "Contract sent", contract.sent_at
            else:
                continue
            activities.append(
                {
                    "id": contract.id,
                    "type": kind,
                    "title": title,
                    "description": f"{client_name} - {contract.title}",
                    "timestamp": timestamp,
                }
            )

        invoices = self.db.scalars(
            select(Invoice)
            .where(Invoice.user_id == user_id, Invoice.is_active.is_(True))
            .order_by(Invoice.updated_at.desc())
            .limit(5)
        ).unique()
        for invoice in invoices:
            client_name = invoice.client.name if invoice.client else None
            if invoice.paid_at:
                activities.append(
                    {
                        "id": invoice.id,
                        "type": "invoice_paid",
                        "title": "Invoice paid",
                        "description": f"{client_name} - {invoice.currency} {invoice.total:.2f}",
                        "timestamp": invoice.paid_at,
                    }
                )
            elif invoice.status == InvoiceStatus.SENT.value:
                activities.append(
                    {
                        "id": invoice.id,
                        "type": "invoice_sent",
                        "title": "Invoice sent",
                        "description": f"{client_name} - {invoice.invoice_number}",
                        "timestamp": invoice.updated_at,
                    }
                )

        clients = self.db.scalars(
            select(Client)
            .where(Client.user_id == user_id, Client.is_active.is_(True))
            .order_by(Client.created_at.desc())
            .limit(3)
        )
        for client in clients:
            activities.append(
                {
                    "id": client.id,
                    "type": "client_added",
                    "title": "New client added",
                    "description": f"{client.name} - {client.company}",
                    "timestamp": client.created_at,
                }
            )

        activities.sort(key=lambda entry: entry["timestamp"], reverse=True)
        return activities[:limit]

    def admin_stats(self) -> dict[str, Any]:
        now = self.clock()
        month_start = _month_start(now)
        return {
            "total_users": self._count(User.is_active.is_(True)),
            "total_freelancers": self._count(User.is_active.is_(True), User.role == UserRole.FREELANCER.value),
            "total_clients": self._count(User.is_active.is_(True), User.role == UserRole.CLIENT.value),
            "active_projects": self._count(Contract.is_active.is_(True), self._active_contract_clause(now)),
            "total_revenue": self._paid_total(),
            "monthly_revenue": self._paid_total(
                Invoice.paid_at >= month_start, Invoice.paid_at < _shift_months(month_start, 1)
            ),
            "pending_approvals": self._count(
                Contract.is_active.is_(True), Contract.status == ContractStatus.DRAFT.value
            ),
        }
