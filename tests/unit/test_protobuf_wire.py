import pytest

from sparkwire.protocol.protobuf.sparkplug_b_pb2 import DataSet, Metric, MetaData, Payload, PropertySet, PropertyValue
from sparkwire.protocol.protobuf.wire import (
    _decode_varint,
    _encode_bool,
    _encode_float,
    _encode_string,
    _encode_uint32,
    _encode_uint64,
    _encode_varint,
    _iter_fields,
)


def test_varint_roundtrip() -> None:
    for value in (0, 1, 127, 128, 300, 2**32 - 1, 2**64 - 1):
        encoded = _encode_varint(value)
        assert _decode_varint(encoded, 0) == (value, len(encoded))


def test_varint_rejects_negative_values() -> None:
    with pytest.raises(ValueError, match="negative"):
        _encode_varint(-1)


def test_set_fields_are_written_even_when_empty() -> None:
    assert _encode_uint64(3, 0) == b"\x18\x00"
    assert _encode_bool(7, False) == b"\x38\x00"
    assert _encode_string(1, "") == b"\x0a\x00"
    assert _encode_uint64(3, None) == b""


def test_integer_slots_keep_low_bits() -> None:
    assert _encode_uint32(10, -1) == b"\x50\xff\xff\xff\xff\x0f"
    assert len(_encode_uint64(11, -1)) == 11


def test_float_field_layout() -> None:
    assert _encode_float(12, 1.0) == b"\x65\x00\x00\x80\x3f"


def test_iter_fields_reports_wire_types() -> None:
    data = _encode_uint64(1, 5) + _encode_string(2, "ab") + _encode_float(3, 0.0)
    assert list(_iter_fields(data)) == [(1, 0, 5), (2, 2, b"ab"), (3, 5, b"\x00\x00\x00\x00")]


def test_truncated_input_raises() -> None:
    with pytest.raises(ValueError, match="unexpected EOF"):
        list(_iter_fields(b"\x0a\x05ab"))


def test_payload_message_roundtrip() -> None:
    payload = Payload(
        timestamp=1704067200000,
        seq=0,
        metrics=[
            Metric(
                name="a",
                datatype=12,
                string_value="x",
                metadata=MetaData(file_name="f"),
                properties=PropertySet(keys=["k"], values=[PropertyValue(type=3, int_value=1)]),
            )
        ],
    )
    assert Payload.ParseFromString(payload.SerializeToString()) == payload


def test_dataset_types_accept_packed_encoding() -> None:
    packed = b"\x1a\x02\x03\x0c"
    assert DataSet.ParseFromString(packed).types == [3, 12]
    unpacked = DataSet(types=[3, 12]).SerializeToString()
    assert unpacked == b"\x18\x03\x18\x0c"
    assert DataSet.ParseFromString(unpacked).types == [3, 12]


def test_unknown_fields_are_skipped() -> None:
    data = _encode_uint64(99, 1) + _encode_string(1, "m")
    assert Metric.ParseFromString(data).name == "m"
