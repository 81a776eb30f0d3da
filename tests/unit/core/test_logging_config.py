from __future__ import annotations

import json
import logging

from contractpro.core.logging_config import JsonFormatter


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord("contractpro.test", logging.INFO, __file__, 1, "invoice.paid", None, None)
    record.event = "invoice.paid"
    record.invoice_id = "abc"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "invoice.paid"
    assert payload["level"] == "INFO"
    assert payload["event"] == "invoice.paid"
    assert payload["invoice_id"] == "abc"
    assert "args" not in payload
