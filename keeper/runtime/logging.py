from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from keeper.common import sanitize_text, sanitize_value

# Attributes every LogRecord carries on this interpreter; anything else came in via extra=.
STANDARD_LOG_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "event": sanitize_value(getattr(record, "event", None)),
            "logger": record.name,
            "message": sanitize_text(record.getMessage()),
        }

        for key, value in record.__dict__.items():
            if key in STANDARD_LOG_FIELDS or key in payload or key.startswith("_"):
                continue
            # Unset optional fields (e.g. a missing reason) are left out of the line.
            if value is None:
                continue
            payload[key] = sanitize_value(value)

        if payload["event"] is None:
            del payload["event"]
        if record.exc_info:
            payload["exception"] = sanitize_text(self.formatException(record.exc_info))

        return json.dumps(payload, ensure_ascii=False, default=str)


def setup_logger(level: str = "INFO") -> logging.Logger:
    logger = logging.getLogger("keeper")
    logger.setLevel(getattr(logging, level.strip().upper(), logging.INFO))

    # stderr only: stdout carries the JSON result for the scheduler.
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    logger.handlers.clear()
    logger.addHandler(handler)
    logger.propagate = False

    return logger
