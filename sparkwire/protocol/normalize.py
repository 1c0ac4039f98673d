"""Scalar normalization from declared kind plus runtime value to wire slot value."""

from __future__ import annotations

import struct
import uuid
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any, Callable

from sparkwire.core.entities import File
from sparkwire.core.errors import RangeOverflowError, TypeMismatchError, UnsupportedKindError
from sparkwire.core.types import WireSlot, slot_for
from sparkwire.defaults.config import OVERFLOW_FAIL, OVERFLOW_WRAP

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)

# name -> (bit width, signed)
INT_WIDTHS: dict[str, tuple[int, bool]] = {
    "INT8": (8, True),
    "INT16": (16, True),
    "INT32": (32, True),
    "INT64": (64, True),
    "UINT8": (8, False),
    "UINT16": (16, False),
    "UINT32": (32, False),
    "UINT64": (64, False),
}


def _describe(value: Any) -> str:
    return type(value).__name__


def to_boolean(value: Any, path: str = "") -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered == "true":
            return True
        if lowered == "false":
            return False
        raise TypeMismatchError(f"cannot read {value!r} as BOOLEAN", path)
    raise TypeMismatchError(f"expected bool for BOOLEAN, got {_describe(value)}", path)


def int_range(name: str) -> tuple[int, int]:
    bits, signed = INT_WIDTHS[name]
    if signed:
        return -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    return 0, (1 << bits) - 1


def to_wire_int(name: str, value: Any, overflow_policy: str = OVERFLOW_FAIL, path: str = "") -> int:
    """Return the integer to store for an integer kind.

    Kinds narrower than 32 bits come back as their unsigned bit pattern, so an
    INT8 of -1 becomes 255. Wider kinds are returned unchanged and masked by
    the wire writer.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeMismatchError(f"expected int for {name}, got {_describe(value)}", path)
    bits, _ = INT_WIDTHS[name]
    low, high = int_range(name)
    if not low <= value <= high:
        if overflow_policy != OVERFLOW_WRAP:
            raise RangeOverflowError(f"{value} does not fit {name} range {low}..{high}", path)
        value &= (1 << bits) - 1
    if bits < 32:
        return value & ((1 << bits) - 1)
    return value


def to_float(name: str, value: Any, path: str = "") -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeMismatchError(f"expected float for {name}, got {_describe(value)}", path)
    try:
        value = float(value)
    except OverflowError:
        raise RangeOverflowError(f"{value} does not fit a 64-bit float", path) from None
    if name == "FLOAT":
        try:
            struct.pack("<f", value)
        except OverflowError:
            raise RangeOverflowError(f"{value!r} does not fit a 32-bit float", path) from None
    return value


def datetime_to_millis(value: Any, path: str = "") -> int:
    if not isinstance(value, datetime):
        raise TypeMismatchError(f"expected datetime for DATETIME, got {_describe(value)}", path)
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return (value - EPOCH) // _ONE_MS


def millis_to_datetime(value: int) -> datetime:
    return EPOCH + timedelta(milliseconds=value)


def _string(name: str, value: Any, path: str) -> str:
    if name == "UUID" and isinstance(value, uuid.UUID):
        return str(value)
    if not isinstance(value, str):
        raise TypeMismatchError(f"expected str for {name}, got {_describe(value)}", path)
    return value


def _blob(name: str, value: Any, path: str) -> bytes:
    if name == "FILE":
        if not isinstance(value, File):
            raise TypeMismatchError(f"expected File for FILE, got {_describe(value)}", path)
        value = value.data
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeMismatchError(f"expected bytes for {name}, got {_describe(value)}", path)
    return bytes(value)


_Rule = Callable[[str, Any, str, str], Any]

_RULES: dict[str, _Rule] = {
    **{name: to_wire_int for name in INT_WIDTHS},
    "FLOAT": lambda name, value, policy, path: to_float(name, value, path),
    "DOUBLE": lambda name, value, policy, path: to_float(name, value, path),
    "BOOLEAN": lambda name, value, policy, path: to_boolean(value, path),
    "DATETIME": lambda name, value, policy, path: datetime_to_millis(value, path),
    "STRING": lambda name, value, policy, path: _string(name, value, path),
    "TEXT": lambda name, value, policy, path: _string(name, value, path),
    "UUID": lambda name, value, policy, path: _string(name, value, path),
    "BYTES": lambda name, value, policy, path: _blob(name, value, path),
    "FILE": lambda name, value, policy, path: _blob(name, value, path),
}

SCALAR_KIND_NAMES = frozenset(_RULES)


def normalize_scalar(
    kind: IntEnum,
    value: Any,
    *,
    overflow_policy: str = OVERFLOW_FAIL,
    path: str = "",
) -> tuple[WireSlot, Any]:
    """Resolve ``value`` declared as ``kind`` into ``(slot, wire value)``."""
    rule = _RULES.get(kind.name)
    if rule is None:
        raise UnsupportedKindError(f"{type(kind).__name__}.{kind.name} is not a scalar kind", path)
    return slot_for(kind), rule(kind.name, value, overflow_policy, path)
