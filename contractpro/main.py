"""Application entrypoint for the ContractPro API."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from contractpro.api.v1._responses import status_for
from contractpro.api.v1.router import get_api_router
from contractpro.core.config import get_config
from contractpro.core.exceptions import ContractProException
from contractpro.core.startup import bootstrap
from contractpro.schemas.common import ErrorEnvelope

logger = logging.getLogger(__name__)


def _error(status_code: int, error: str, details: list[str] | None = None) -> JSONResponse:
    body = ErrorEnvelope(error=error, details=details).model_dump(exclude_none=True)
    return JSONResponse(status_code=status_code, content=body)


async def _http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return _error(exc.status_code, str(exc.detail))


async def _validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = [
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    ]
    return _error(422, "Validation failed", details)


async def _domain_error(request: Request, exc: ContractProException) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error(
            "api.unhandled_domain_error",
            extra={"event": "api.unhandled_domain_error", "path": request.url.path, "error": str(exc)},
        )
        return _error(code, "Server Error")
    return _error(code, str(exc))


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    bootstrap()
    yield


def create_app() -> FastAPI:
    """Create the FastAPI application with the v1 router mounted."""
    cfg = get_config()
    app = FastAPI(title=cfg.APP_NAME, version=cfg.APP_VERSION, debug=cfg.DEBUG, lifespan=_lifespan)
    app.include_router(get_api_router())
    app.add_exception_handler(StarletteHTTPException, _http_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(ContractProException, _domain_error)

    @app.get("/")
    def root() -> dict:
        return {"service": cfg.APP_NAME, "version": cfg.APP_VERSION, "api_prefix": cfg.API_PREFIX}

    return app


# Expose ASGI app for `uvicorn contractpro.main:app`.
app = create_app()


if __name__ == "__main__":
    cfg = get_config()
    uvicorn.run(app, host=cfg.HOST, port=cfg.PORT, log_config=None)
