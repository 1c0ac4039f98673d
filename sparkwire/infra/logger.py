"""Structured logger utilities.

Records may carry a ``path`` attribute naming the payload field they concern
(``metrics[0]<temp>.value``); :class:`JsonFormatter` emits it as its own key
and :class:`FieldPathAdapter` stamps it onto every record it passes on.
"""

from __future__ import annotations

import json
import logging
from collections.abc import MutableMapping
from datetime import datetime, timezone
from typing import Any

from sparkwire.defaults.config import DEFAULT_ENCODER_CONFIG


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        path = getattr(record, "path", None)
        if path:
            payload["path"] = path
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"))


class FieldPathAdapter(logging.LoggerAdapter):
    """Logger adapter that tags records with a payload field path."""

    def __init__(self, logger: logging.Logger, path: str | None) -> None:
        super().__init__(logger, {"path": path})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        kwargs["extra"] = {**(self.extra or {}), **kwargs.get("extra", {})}
        return msg, kwargs


def get_logger(name: str = "sparkwire", level: int | str | None = None) -> logging.Logger:
    """Return ``name``'s logger with a single JSON stream handler attached."""
    logger = logging.getLogger(name)
    logger.setLevel(level if level is not None else DEFAULT_ENCODER_CONFIG["log_level"])
    if not any(isinstance(h.formatter, JsonFormatter) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
    return logger
