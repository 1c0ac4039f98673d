import uuid
from datetime import datetime, timezone

import pytest

from sparkwire.core.entities import (
    DataSet,
    File,
    MetaData,
    Metric,
    Parameter,
    Payload,
    PropertySet,
    PropertyValue,
    Template,
)
from sparkwire.core.errors import DecodeError
from sparkwire.core.types import DataSetDataType, MetricDataType, ParameterDataType, PropertyDataType
from sparkwire.protocol.decoder import PayloadDecoder, decode_payload
from sparkwire.protocol.encoder import encode_payload
from sparkwire.protocol.protobuf import sparkplug_b_pb2 as pb

WHEN = datetime(2024, 3, 9, 12, 30, 15, 250000, tzinfo=timezone.utc)


def _roundtrip(*metrics: Metric) -> Payload:
    return decode_payload(encode_payload(Payload(seq=0, metrics=metrics)))


@pytest.mark.parametrize(
    "kind, value",
    [
        (MetricDataType.INT8, -1),
        (MetricDataType.INT16, -32768),
        (MetricDataType.INT32, -123456),
        (MetricDataType.INT64, -(2**40)),
        (MetricDataType.UINT8, 255),
        (MetricDataType.UINT16, 65535),
        (MetricDataType.UINT32, 2**32 - 1),
        (MetricDataType.UINT64, 2**64 - 1),
        (MetricDataType.FLOAT, 1.5),
        (MetricDataType.DOUBLE, 3.141592653589793),
        (MetricDataType.BOOLEAN, True),
        (MetricDataType.STRING, "hello"),
        (MetricDataType.TEXT, "multi\nline"),
        (MetricDataType.UUID, "2b0c1c5e-0f7c-4f5e-9a8e-0c3b7a1d2e4f"),
        (MetricDataType.DATETIME, WHEN),
        (MetricDataType.BYTES, b"\x00\xff"),
    ],
)
def test_scalar_roundtrip(kind, value) -> None:
    metric = Metric("m", kind, value)
    assert _roundtrip(metric).metrics[0] == metric


def test_uuid_objects_come_back_as_strings() -> None:
    ident = uuid.uuid4()
    assert _roundtrip(Metric("id", MetricDataType.UUID, ident)).metrics[0].value == str(ident)


def test_null_roundtrip_keeps_kind() -> None:
    decoded = _roundtrip(Metric("temp", MetricDataType.FLOAT)).metrics[0]
    assert decoded.value is None
    assert decoded.data_type is MetricDataType.FLOAT


def test_payload_roundtrip() -> None:
    payload = Payload(
        seq=42,
        timestamp=WHEN,
        uuid="session-1",
        body=b"raw",
        metrics=(Metric(None, MetricDataType.INT32, 7, alias=3, timestamp=WHEN, is_transient=True),),
    )
    assert decode_payload(encode_payload(payload)) == payload


def test_file_roundtrip_uses_metadata_name() -> None:
    decoded = _roundtrip(Metric("cfg", MetricDataType.FILE, File("config.json", b"{}"))).metrics[0]
    assert decoded.value == File("config.json", b"{}")
    assert decoded.metadata == MetaData(file_name="config.json")


def test_property_set_roundtrip_preserves_order() -> None:
    properties = PropertySet.from_items(
        [
            ("a", PropertyValue(PropertyDataType.STRING, "x")),
            ("b", PropertyValue(PropertyDataType.INT8, -2)),
            ("c", PropertyValue(PropertyDataType.DATETIME)),
            ("d", PropertyValue(PropertyDataType.PROPERTYSET, PropertySet.of(e=PropertyValue(PropertyDataType.BOOLEAN, False)))),
            ("f", PropertyValue(PropertyDataType.PROPERTYSET_LIST, (PropertySet(), PropertySet()))),
        ]
    )
    decoded = _roundtrip(Metric("m", MetricDataType.INT32, 1, properties=properties)).metrics[0].properties
    assert list(decoded) == ["a", "b", "c", "d", "f"]
    assert decoded == properties


def test_dataset_roundtrip() -> None:
    dataset = DataSet.build(
        [("id", DataSetDataType.INT16), ("ok", DataSetDataType.BOOLEAN), ("at", DataSetDataType.DATETIME)],
        [[-7, True, WHEN], [8, None, WHEN]],
    )
    assert _roundtrip(Metric("table", MetricDataType.DATASET, dataset)).metrics[0].value == dataset


def test_template_roundtrip() -> None:
    template = Template(
        name="Motor",
        metrics=(Metric("status", MetricDataType.STRING, "OK"),),
        parameters=(Parameter("enabled", ParameterDataType.BOOLEAN, True),),
    )
    decoded = _roundtrip(Metric("motor1", MetricDataType.TEMPLATE, template)).metrics[0].value
    assert decoded == template
    assert decoded.metrics[0].data_type is MetricDataType.STRING
    assert decoded.parameters[0].type is ParameterDataType.BOOLEAN


def test_unknown_datatype_code_fails() -> None:
    data = pb.Payload(seq=0, metrics=[pb.Metric(name="x", datatype=99, int_value=1)]).SerializeToString()
    with pytest.raises(DecodeError, match="unknown MetricDataType code 99"):
        decode_payload(data)


def test_non_null_metric_without_value_fails() -> None:
    data = pb.Payload(seq=0, metrics=[pb.Metric(name="x", datatype=MetricDataType.INT32)]).SerializeToString()
    with pytest.raises(DecodeError, match="carries no INT32 value"):
        PayloadDecoder().decode(data)


def test_malformed_bytes_fail() -> None:
    with pytest.raises(DecodeError, match="malformed payload"):
        decode_payload(b"\x12\x05\x0a")


def test_mismatched_property_keys_fail() -> None:
    broken = pb.PropertySet(keys=["a", "b"], values=[pb.PropertyValue(type=PropertyDataType.INT32, int_value=1)])
    data = pb.Payload(
        seq=0, metrics=[pb.Metric(name="x", datatype=MetricDataType.INT32, int_value=1, properties=broken)]
    ).SerializeToString()
    with pytest.raises(DecodeError, match="2 keys but 1 values"):
        decode_payload(data)
