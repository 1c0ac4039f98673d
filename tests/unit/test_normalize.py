import uuid
from datetime import datetime, timedelta, timezone

import pytest

from sparkwire.core.entities import File
from sparkwire.core.errors import RangeOverflowError, TypeMismatchError, UnsupportedKindError
from sparkwire.core.types import DataSetDataType, MetricDataType, ParameterDataType, PropertyDataType, WireSlot
from sparkwire.protocol.normalize import (
    datetime_to_millis,
    millis_to_datetime,
    normalize_scalar,
    to_boolean,
    to_wire_int,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        (False, False),
        (1, True),
        (0, False),
        (-3, True),
        (0.0, False),
        (2.5, True),
        ("true", True),
        ("TRUE", True),
        ("False", False),
    ],
)
def test_to_boolean_coercions(value, expected) -> None:
    assert to_boolean(value) is expected


@pytest.mark.parametrize("value", ["yes", "", b"true", None, [1]])
def test_to_boolean_rejects_other_shapes(value) -> None:
    with pytest.raises(TypeMismatchError):
        to_boolean(value)


@pytest.mark.parametrize(
    "name, value, expected",
    [
        ("INT8", -1, 255),
        ("INT8", -128, 128),
        ("INT8", 127, 127),
        ("INT16", -1, 65535),
        ("UINT8", 255, 255),
        ("UINT16", 65535, 65535),
        ("INT32", -1, -1),
        ("INT32", 2**31 - 1, 2**31 - 1),
        ("UINT32", 2**32 - 1, 2**32 - 1),
        ("INT64", -(2**63), -(2**63)),
        ("UINT64", 2**64 - 1, 2**64 - 1),
    ],
)
def test_integer_widths(name, value, expected) -> None:
    assert to_wire_int(name, value) == expected


@pytest.mark.parametrize(
    "name, value",
    [("INT8", 128), ("INT8", -129), ("UINT8", -1), ("UINT8", 256), ("INT32", 2**31), ("UINT64", 2**64)],
)
def test_integer_overflow_fails_by_default(name, value) -> None:
    with pytest.raises(RangeOverflowError, match=name):
        to_wire_int(name, value, path="metrics[0].value")


def test_integer_overflow_wraps_when_asked() -> None:
    assert to_wire_int("INT8", 300, "wrap") == 44
    assert to_wire_int("UINT8", -1, "wrap") == 255
    assert to_wire_int("UINT64", 2**64 + 5, "wrap") == 5


@pytest.mark.parametrize("value", [True, 1.0, "1", None])
def test_integer_kinds_require_int(value) -> None:
    with pytest.raises(TypeMismatchError):
        to_wire_int("INT32", value)


def test_float_and_double_slots() -> None:
    assert normalize_scalar(MetricDataType.FLOAT, 1.5) == (WireSlot.FLOAT, 1.5)
    assert normalize_scalar(MetricDataType.DOUBLE, 3) == (WireSlot.DOUBLE, 3.0)
    with pytest.raises(RangeOverflowError):
        normalize_scalar(MetricDataType.FLOAT, 1e39)
    assert normalize_scalar(MetricDataType.DOUBLE, 1e39) == (WireSlot.DOUBLE, 1e39)
    with pytest.raises(TypeMismatchError, match="expected float for DOUBLE, got str"):
        normalize_scalar(MetricDataType.DOUBLE, "1.0")


@pytest.mark.parametrize("kind", [MetricDataType.FLOAT, MetricDataType.DOUBLE])
def test_huge_integers_overflow_floats(kind) -> None:
    with pytest.raises(RangeOverflowError, match="does not fit") as info:
        normalize_scalar(kind, 10**400, path="metrics[0]<d>.value")
    assert info.value.path == "metrics[0]<d>.value"


def test_datetime_to_millis() -> None:
    aware = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert datetime_to_millis(aware) == 1704067200000
    assert datetime_to_millis(datetime(2024, 1, 1)) == 1704067200000
    shifted = datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2)))
    assert datetime_to_millis(shifted) == 1704067200000
    assert millis_to_datetime(1704067200123) == datetime(2024, 1, 1, 0, 0, 0, 123000, tzinfo=timezone.utc)
    with pytest.raises(TypeMismatchError):
        datetime_to_millis(1704067200000)


def test_strings_and_blobs() -> None:
    assert normalize_scalar(MetricDataType.TEXT, "hello") == (WireSlot.STRING, "hello")
    ident = uuid.UUID("12345678-1234-5678-1234-567812345678")
    assert normalize_scalar(MetricDataType.UUID, ident) == (WireSlot.STRING, str(ident))
    assert normalize_scalar(MetricDataType.BYTES, bytearray(b"\x00\x01")) == (WireSlot.BYTES, b"\x00\x01")
    assert normalize_scalar(MetricDataType.FILE, File("a.bin", b"abc")) == (WireSlot.BYTES, b"abc")
    with pytest.raises(TypeMismatchError):
        normalize_scalar(MetricDataType.STRING, ident)
    with pytest.raises(TypeMismatchError):
        normalize_scalar(MetricDataType.FILE, b"abc")


def test_same_rules_apply_in_every_context() -> None:
    for kind in (PropertyDataType.INT8, ParameterDataType.INT8, DataSetDataType.INT8):
        assert normalize_scalar(kind, -1) == (WireSlot.INT, 255)


@pytest.mark.parametrize("kind", [MetricDataType.DATASET, MetricDataType.TEMPLATE, PropertyDataType.PROPERTYSET])
def test_structured_kinds_are_not_scalars(kind) -> None:
    with pytest.raises(UnsupportedKindError):
        normalize_scalar(kind, object())
