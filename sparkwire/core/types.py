"""Closed value-kind enumerations and their wire slots.

Four independent enumerations cover the four places a typed value can
appear: metric values, property values, template parameters and dataset
cells. Members share names across enumerations, and every member maps to
exactly one wire slot.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, TypeVar

from sparkwire.core.errors import UnsupportedKindError


class MetricDataType(IntEnum):
    UNKNOWN = 0
    INT8 = 1
    INT16 = 2
    INT32 = 3
    INT64 = 4
    UINT8 = 5
    UINT16 = 6
    UINT32 = 7
    UINT64 = 8
    FLOAT = 9
    DOUBLE = 10
    BOOLEAN = 11
    STRING = 12
    DATETIME = 13
    TEXT = 14
    UUID = 15
    DATASET = 16
    BYTES = 17
    FILE = 18
    TEMPLATE = 19


class PropertyDataType(IntEnum):
    UNKNOWN = 0
    INT8 = 1
    INT16 = 2
    INT32 = 3
    INT64 = 4
    UINT8 = 5
    UINT16 = 6
    UINT32 = 7
    UINT64 = 8
    FLOAT = 9
    DOUBLE = 10
    BOOLEAN = 11
    STRING = 12
    DATETIME = 13
    TEXT = 14
    PROPERTYSET = 20
    PROPERTYSET_LIST = 21


class ParameterDataType(IntEnum):
    UNKNOWN = 0
    INT8 = 1
    INT16 = 2
    INT32 = 3
    INT64 = 4
    UINT8 = 5
    UINT16 = 6
    UINT32 = 7
    UINT64 = 8
    FLOAT = 9
    DOUBLE = 10
    BOOLEAN = 11
    STRING = 12
    DATETIME = 13
    TEXT = 14


class DataSetDataType(IntEnum):
    UNKNOWN = 0
    INT8 = 1
    INT16 = 2
    INT32 = 3
    INT64 = 4
    UINT8 = 5
    UINT16 = 6
    UINT32 = 7
    UINT64 = 8
    FLOAT = 9
    DOUBLE = 10
    BOOLEAN = 11
    STRING = 12
    DATETIME = 13
    TEXT = 14


class WireSlot(Enum):
    """Primitive storage representations exposed by the wire messages."""

    INT = "int_value"
    LONG = "long_value"
    FLOAT = "float_value"
    DOUBLE = "double_value"
    BOOLEAN = "boolean_value"
    STRING = "string_value"
    BYTES = "bytes_value"
    DATASET = "dataset_value"
    TEMPLATE = "template_value"
    PROPERTYSET = "propertyset_value"
    PROPERTYSET_LIST = "propertysets_value"


# Keyed by member name so one table serves all four enumerations.
_SLOTS: dict[str, WireSlot] = {
    "INT8": WireSlot.INT,
    "INT16": WireSlot.INT,
    "INT32": WireSlot.INT,
    "UINT8": WireSlot.INT,
    "UINT16": WireSlot.INT,
    "INT64": WireSlot.LONG,
    "UINT32": WireSlot.LONG,
    "UINT64": WireSlot.LONG,
    "DATETIME": WireSlot.LONG,
    "FLOAT": WireSlot.FLOAT,
    "DOUBLE": WireSlot.DOUBLE,
    "BOOLEAN": WireSlot.BOOLEAN,
    "STRING": WireSlot.STRING,
    "TEXT": WireSlot.STRING,
    "UUID": WireSlot.STRING,
    "BYTES": WireSlot.BYTES,
    "FILE": WireSlot.BYTES,
    "DATASET": WireSlot.DATASET,
    "TEMPLATE": WireSlot.TEMPLATE,
    "PROPERTYSET": WireSlot.PROPERTYSET,
    "PROPERTYSET_LIST": WireSlot.PROPERTYSET_LIST,
}

KindT = TypeVar("KindT", MetricDataType, PropertyDataType, ParameterDataType, DataSetDataType)


def slot_for(kind: IntEnum) -> WireSlot:
    try:
        return _SLOTS[kind.name]
    except KeyError:
        raise UnsupportedKindError(f"no wire slot for {type(kind).__name__}.{kind.name}") from None


def resolve_kind(enum_cls: type[KindT], raw: Any, path: str = "") -> KindT:
    """Map a raw kind tag onto ``enum_cls``, rejecting anything unencodable.

    Members of a different enumeration are rejected even when their integer
    code happens to exist in ``enum_cls``.
    """
    if isinstance(raw, enum_cls):
        kind = raw
    elif isinstance(raw, Enum) or isinstance(raw, bool) or not isinstance(raw, int):
        raise UnsupportedKindError(f"{raw!r} is not a {enum_cls.__name__}", path)
    else:
        try:
            kind = enum_cls(raw)
        except ValueError:
            raise UnsupportedKindError(f"unknown {enum_cls.__name__} code {raw}", path) from None
    if kind.name == "UNKNOWN":
        raise UnsupportedKindError(f"{enum_cls.__name__}.UNKNOWN cannot be encoded", path)
    return kind
