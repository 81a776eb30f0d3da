"""Shared service base with robust session lifecycle behavior."""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass
from typing import Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError
from sqlalchemy.sql import Select

from contractpro.core.clock import Clock, utcnow_naive
from contractpro.core.exceptions import ConcurrentUpdateError, DuplicateKeyError
from contractpro.database import db as database

logger = logging.getLogger(__name__)

T = TypeVar("T")

# "UNIQUE constraint failed: clients.user_id, clients.email" (sqlite) or
# 'Key (user_id, email)=(...) already exists.' (postgres); the last column names the field.
_UNIQUE_FIELD_PATTERNS = (
    re.compile(r"UNIQUE constraint failed: ([\w., ]+)"),
    re.compile(r"Key \(([\w, ]+)\)="),
)


def _duplicate_field(exc: IntegrityError) -> str | None:
    message = str(exc.orig)
    for pattern in _UNIQUE_FIELD_PATTERNS:
        match = pattern.search(message)
        if match:
            return match.group(1).split(",")[-1].strip().split(".")[-1]
    if "unique" in message.lower() or "duplicate" in message.lower():
        return "record"
    return None


@dataclass(frozen=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0


class BaseService:
    """Base class for services that operate on a SQLAlchemy session."""

    def __init__(self, db: Session | None = None, clock: Clock | None = None) -> None:
        self.db = db or database.SessionLocal()
        self.clock = clock or utcnow_naive

    def commit(self) -> None:
        """Commit current transaction, translating constraint failures."""
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            field = _duplicate_field(exc)
            if field is None:
                raise
            logger.warning("db.duplicate_key", extra={"event": "db.duplicate_key", "field": field})
            raise DuplicateKeyError(field) from exc
        except StaleDataError as exc:
            self.db.rollback()
            logger.warning("db.concurrent_update", extra={"event": "db.concurrent_update"})
            raise ConcurrentUpdateError("Record was modified by another request; reload and retry.") from exc
        except Exception:
            self.db.rollback()
            raise

    def save(self, record: T) -> T:
        """Stamp, persist and refresh a record."""
        if hasattr(record, "updated_at"):
            record.updated_at = self.clock()
        self.db.add(record)
        self.commit()
        self.db.refresh(record)
        return record

    def paginate(self, stmt: Select, page: int, limit: int) -> Page:
        total = self.db.scalar(select(func.count()).select_from(stmt.order_by(None).subquery())) or 0
        items = list(self.db.scalars(stmt.offset((page - 1) * limit).limit(limit)).unique())
        return Page(items=items, page=page, limit=limit, total=total)

    def rollback(self) -> None:
        self.db.rollback()

    def close(self) -> None:
        self.db.close()

    def __enter__(self) -> "BaseService":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type:
            self.rollback()
        self.close()
