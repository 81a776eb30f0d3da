"""Response envelope and domain error mapping for API v1 route modules."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from fastapi import HTTPException, status
from pydantic import BaseModel

from contractpro.core.config import get_config
from contractpro.core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    ConcurrentUpdateError,
    ContractProException,
    DuplicateKeyError,
    InvalidTransitionError,
    NotFoundError,
    ValidationError,
)
from contractpro.schemas.common import APIEnvelope, PaginationMeta
from contractpro.services.base_service import Page

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[ContractProException], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InvalidTransitionError, status.HTTP_400_BAD_REQUEST),
    (DuplicateKeyError, status.HTTP_400_BAD_REQUEST),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ConcurrentUpdateError, status.HTTP_409_CONFLICT),
    (AuthenticationError, status.HTTP_401_UNAUTHORIZED),
    (AuthorizationError, status.HTTP_403_FORBIDDEN),
)


def status_for(exc: ContractProException) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


@contextmanager
def domain_errors() -> Iterator[None]:
    """Re-raise domain exceptions as HTTP errors carrying their reason."""
    try:
        yield
    except ContractProException as exc:
        code = status_for(exc)
        if code >= 500:
            logger.exception("api.unhandled_domain_error", extra={"event": "api.unhandled_domain_error"})
            raise HTTPException(status_code=code, detail="Server Error") from exc
        raise HTTPException(status_code=code, detail=str(exc)) from exc


def dump(schema: type[BaseModel], record: Any) -> dict[str, Any]:
    return schema.model_validate(record).model_dump(mode="json")


def ok(data: Any = None, message: str | None = None) -> dict[str, Any]:
    return APIEnvelope(data=data, message=message).model_dump(mode="json", exclude_none=True)


def paged(schema: type[BaseModel], page: Page) -> dict[str, Any]:
    envelope = APIEnvelope(
        data=[dump(schema, item) for item in page.items],
        pagination=PaginationMeta(page=page.page, limit=page.limit, total=page.total, pages=page.pages),
    )
    return envelope.model_dump(mode="json", exclude_none=True)


def resolve_limit(limit: int | None) -> int:
    """Fall back to the configured page size and cap at the configured maximum."""
    cfg = get_config()
    if limit is None:
        return cfg.DEFAULT_PAGE_SIZE
    return min(limit, cfg.MAX_PAGE_SIZE)
