"""Structured logging for the API and CLI processes."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict

# Extra attributes promoted into the JSON payload when a record carries them.
CONTEXT_FIELDS = (
    "request_path",
    "method",
    "status_code",
    "latency_ms",
    "client",
    "store",
    "collection",
    "route_id",
)

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        payload: Dict[str, Any] = {
            "time": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for attr in CONTEXT_FIELDS:
            value = getattr(record, attr, None)
            if value is not None:
                payload[attr] = value
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True, default=str)


def setup_logging(level: str | int = logging.INFO, fmt: str = "json") -> None:
    """Configure the root logger once; later calls only refresh level and formatter."""
    formatter = JsonFormatter() if fmt == "json" else logging.Formatter(TEXT_FORMAT)
    root = logging.getLogger()
    root.setLevel(level)

    stream_handlers = [h for h in root.handlers if isinstance(h, logging.StreamHandler)]
    if stream_handlers:
        for handler in stream_handlers:
            handler.setFormatter(formatter)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    root.addHandler(handler)
