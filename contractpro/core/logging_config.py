"""Structured JSON-lines logging.

Every record carries the dotted event name passed through ``extra`` along
with any other extra keys (ids, counts), so log lines can be filtered on
``event == "invoice.reminder.sent"`` without parsing the message.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any

from contractpro.core.config import get_config

_RECORD_ATTRS = frozenset(logging.makeLogRecord({}).__dict__) | {"message", "asctime"}

# Third-party loggers that only speak up at WARNING outside development.
_QUIET_IN_PRODUCTION = ("sqlalchemy.engine", "uvicorn.access")


class JsonFormatter(logging.Formatter):
    """Render a record as one JSON object per line."""

    def __init__(self, static_fields: dict[str, Any] | None = None) -> None:
        super().__init__()
        self.static_fields = dict(static_fields or {})

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self.static_fields,
        }
        payload.update({key: value for key, value in vars(record).items() if key not in _RECORD_ATTRS})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def configure_logging(force: bool = False) -> None:
    """Install the JSON handlers on the root logger (once, unless forced)."""
    config = get_config()
    root = logging.getLogger()
    if root.handlers and not force:
        return
    for handler in list(root.handlers):
        root.removeHandler(handler)

    formatter = JsonFormatter({"service": config.APP_NAME, "env": config.ENV})
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if config.LOG_FILE:
        handlers.append(logging.FileHandler(config.LOG_FILE))
    for handler in handlers:
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(config.LOG_LEVEL)

    if config.is_production:
        for name in _QUIET_IN_PRODUCTION:
            logging.getLogger(name).setLevel(logging.WARNING)
