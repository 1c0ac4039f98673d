"""Helpers for stamping outgoing payloads."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Iterable

from sparkwire.core.entities import Metric, Payload
from sparkwire.defaults.config import SEQ_MODULUS


class SequenceCounter:
    """Thread-safe payload sequence numbers: 0, 1, ..., 255, 0, ..."""

    def __init__(self, start: int = 0) -> None:
        if not 0 <= start < SEQ_MODULUS:
            raise ValueError(f"start must be within 0..{SEQ_MODULUS - 1}")
        self._next = start
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            value = self._next
            self._next = (value + 1) % SEQ_MODULUS
            return value

    def reset(self) -> None:
        with self._lock:
            self._next = 0


def current_timestamp() -> datetime:
    now = datetime.now(tz=timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


def next_payload(counter: SequenceCounter, metrics: Iterable[Metric] = (), **fields: Any) -> Payload:
    """Build a payload stamped with the counter's next number and the current time."""
    fields.setdefault("timestamp", current_timestamp())
    return Payload(seq=counter.next(), metrics=tuple(metrics), **fields)
