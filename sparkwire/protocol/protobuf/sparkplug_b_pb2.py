# ruff: noqa: N802
"""Sparkplug B payload messages with real protobuf wire encoding.

Each message is a plain dataclass; ``SerializeToString`` writes the set
fields in field-number order and ``ParseFromString`` builds a new instance,
ignoring unknown fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .wire import (
    WIRE_FIXED32,
    WIRE_FIXED64,
    WIRE_LEN,
    WIRE_VARINT,
    _decode_double,
    _decode_float,
    _decode_packed_varints,
    _decode_string,
    _encode_bool,
    _encode_bytes,
    _encode_double,
    _encode_float,
    _encode_message,
    _encode_string,
    _encode_uint32,
    _encode_uint64,
    _iter_fields,
)


@dataclass
class MetaData:
    is_multi_part: bool | None = None
    content_type: str | None = None
    size: int | None = None
    seq: int | None = None
    file_name: str | None = None
    file_type: str | None = None
    md5: str | None = None
    description: str | None = None

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_bool(1, self.is_multi_part),
                _encode_string(2, self.content_type),
                _encode_uint64(3, self.size),
                _encode_uint64(4, self.seq),
                _encode_string(5, self.file_name),
                _encode_string(6, self.file_type),
                _encode_string(7, self.md5),
                _encode_string(8, self.description),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "MetaData":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_VARINT and field_no == 1:
                out.is_multi_part = bool(value)
            elif wire == WIRE_LEN and field_no == 2:
                out.content_type = _decode_string(value)
            elif wire == WIRE_VARINT and field_no == 3:
                out.size = int(value)
            elif wire == WIRE_VARINT and field_no == 4:
                out.seq = int(value)
            elif wire == WIRE_LEN and field_no == 5:
                out.file_name = _decode_string(value)
            elif wire == WIRE_LEN and field_no == 6:
                out.file_type = _decode_string(value)
            elif wire == WIRE_LEN and field_no == 7:
                out.md5 = _decode_string(value)
            elif wire == WIRE_LEN and field_no == 8:
                out.description = _decode_string(value)
        return out


@dataclass
class PropertyValue:
    type: int | None = None
    is_null: bool | None = None
    int_value: int | None = None
    long_value: int | None = None
    float_value: float | None = None
    double_value: float | None = None
    boolean_value: bool | None = None
    string_value: str | None = None
    propertyset_value: PropertySet | None = None
    propertysets_value: PropertySetList | None = None

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_uint32(1, self.type),
                _encode_bool(2, self.is_null),
                _encode_uint32(3, self.int_value),
                _encode_uint64(4, self.long_value),
                _encode_float(5, self.float_value),
                _encode_double(6, self.double_value),
                _encode_bool(7, self.boolean_value),
                _encode_string(8, self.string_value),
                _encode_message(9, self.propertyset_value),
                _encode_message(10, self.propertysets_value),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "PropertyValue":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_VARINT and field_no == 1:
                out.type = int(value)
            elif wire == WIRE_VARINT and field_no == 2:
                out.is_null = bool(value)
            elif wire == WIRE_VARINT and field_no == 3:
                out.int_value = int(value)
            elif wire == WIRE_VARINT and field_no == 4:
                out.long_value = int(value)
            elif wire == WIRE_FIXED32 and field_no == 5:
                out.float_value = _decode_float(value)
            elif wire == WIRE_FIXED64 and field_no == 6:
                out.double_value = _decode_double(value)
            elif wire == WIRE_VARINT and field_no == 7:
                out.boolean_value = bool(value)
            elif wire == WIRE_LEN and field_no == 8:
                out.string_value = _decode_string(value)
            elif wire == WIRE_LEN and field_no == 9:
                out.propertyset_value = PropertySet.ParseFromString(value)  # type: ignore[arg-type]
            elif wire == WIRE_LEN and field_no == 10:
                out.propertysets_value = PropertySetList.ParseFromString(value)  # type: ignore[arg-type]
        return out


@dataclass
class PropertySet:
    keys: list[str] = field(default_factory=list)
    values: list[PropertyValue] = field(default_factory=list)

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                *(_encode_string(1, key) for key in self.keys),
                *(_encode_message(2, value) for value in self.values),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "PropertySet":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire != WIRE_LEN:
                continue
            if field_no == 1:
                out.keys.append(_decode_string(value))
            elif field_no == 2:
                out.values.append(PropertyValue.ParseFromString(value))  # type: ignore[arg-type]
        return out


@dataclass
class PropertySetList:
    propertyset: list[PropertySet] = field(default_factory=list)

    def SerializeToString(self) -> bytes:
        return b"".join(_encode_message(1, item) for item in self.propertyset)

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "PropertySetList":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_LEN and field_no == 1:
                out.propertyset.append(PropertySet.ParseFromString(value))  # type: ignore[arg-type]
        return out


@dataclass
class DataSetValue:
    int_value: int | None = None
    long_value: int | None = None
    float_value: float | None = None
    double_value: float | None = None
    boolean_value: bool | None = None
    string_value: str | None = None

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_uint32(1, self.int_value),
                _encode_uint64(2, self.long_value),
                _encode_float(3, self.float_value),
                _encode_double(4, self.double_value),
                _encode_bool(5, self.boolean_value),
                _encode_string(6, self.string_value),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "DataSetValue":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_VARINT and field_no == 1:
                out.int_value = int(value)
            elif wire == WIRE_VARINT and field_no == 2:
                out.long_value = int(value)
            elif wire == WIRE_FIXED32 and field_no == 3:
                out.float_value = _decode_float(value)
            elif wire == WIRE_FIXED64 and field_no == 4:
                out.double_value = _decode_double(value)
            elif wire == WIRE_VARINT and field_no == 5:
                out.boolean_value = bool(value)
            elif wire == WIRE_LEN and field_no == 6:
                out.string_value = _decode_string(value)
        return out


@dataclass
class Row:
    elements: list[DataSetValue] = field(default_factory=list)

    def SerializeToString(self) -> bytes:
        return b"".join(_encode_message(1, element) for element in self.elements)

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "Row":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_LEN and field_no == 1:
                out.elements.append(DataSetValue.ParseFromString(value))  # type: ignore[arg-type]
        return out


@dataclass
class DataSet:
    num_of_columns: int | None = None
    columns: list[str] = field(default_factory=list)
    types: list[int] = field(default_factory=list)
    rows: list[Row] = field(default_factory=list)

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_uint64(1, self.num_of_columns),
                *(_encode_string(2, column) for column in self.columns),
                *(_encode_uint32(3, kind) for kind in self.types),
                *(_encode_message(4, row) for row in self.rows),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "DataSet":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_VARINT and field_no == 1:
                out.num_of_columns = int(value)
            elif wire == WIRE_LEN and field_no == 2:
                out.columns.append(_decode_string(value))
            elif wire == WIRE_VARINT and field_no == 3:
                out.types.append(int(value))
            elif wire == WIRE_LEN and field_no == 3:
                out.types.extend(_decode_packed_varints(value))  # type: ignore[arg-type]
            elif wire == WIRE_LEN and field_no == 4:
                out.rows.append(Row.ParseFromString(value))  # type: ignore[arg-type]
        return out


@dataclass
class Parameter:
    name: str | None = None
    type: int | None = None
    int_value: int | None = None
    long_value: int | None = None
    float_value: float | None = None
    double_value: float | None = None
    boolean_value: bool | None = None
    string_value: str | None = None

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_string(1, self.name),
                _encode_uint32(2, self.type),
                _encode_uint32(3, self.int_value),
                _encode_uint64(4, self.long_value),
                _encode_float(5, self.float_value),
                _encode_double(6, self.double_value),
                _encode_bool(7, self.boolean_value),
                _encode_string(8, self.string_value),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "Parameter":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_LEN and field_no == 1:
                out.name = _decode_string(value)
            elif wire == WIRE_VARINT and field_no == 2:
                out.type = int(value)
            elif wire == WIRE_VARINT and field_no == 3:
                out.int_value = int(value)
            elif wire == WIRE_VARINT and field_no == 4:
                out.long_value = int(value)
            elif wire == WIRE_FIXED32 and field_no == 5:
                out.float_value = _decode_float(value)
            elif wire == WIRE_FIXED64 and field_no == 6:
                out.double_value = _decode_double(value)
            elif wire == WIRE_VARINT and field_no == 7:
                out.boolean_value = bool(value)
            elif wire == WIRE_LEN and field_no == 8:
                out.string_value = _decode_string(value)
        return out


@dataclass
class Template:
    version: str | None = None
    metrics: list[Metric] = field(default_factory=list)
    parameters: list[Parameter] = field(default_factory=list)
    template_ref: str | None = None
    is_definition: bool | None = None
    name: str | None = None

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_string(1, self.version),
                *(_encode_message(2, metric) for metric in self.metrics),
                *(_encode_message(3, parameter) for parameter in self.parameters),
                _encode_string(4, self.template_ref),
                _encode_bool(5, self.is_definition),
                _encode_string(6, self.name),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "Template":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_LEN and field_no == 1:
                out.version = _decode_string(value)
            elif wire == WIRE_LEN and field_no == 2:
                out.metrics.append(Metric.ParseFromString(value))  # type: ignore[arg-type]
            elif wire == WIRE_LEN and field_no == 3:
                out.parameters.append(Parameter.ParseFromString(value))  # type: ignore[arg-type]
            elif wire == WIRE_LEN and field_no == 4:
                out.template_ref = _decode_string(value)
            elif wire == WIRE_VARINT and field_no == 5:
                out.is_definition = bool(value)
            elif wire == WIRE_LEN and field_no == 6:
                out.name = _decode_string(value)
        return out


@dataclass
class Metric:
    name: str | None = None
    alias: int | None = None
    timestamp: int | None = None
    datatype: int | None = None
    is_historical: bool | None = None
    is_transient: bool | None = None
    is_null: bool | None = None
    metadata: MetaData | None = None
    properties: PropertySet | None = None
    int_value: int | None = None
    long_value: int | None = None
    float_value: float | None = None
    double_value: float | None = None
    boolean_value: bool | None = None
    string_value: str | None = None
    bytes_value: bytes | None = None
    dataset_value: DataSet | None = None
    template_value: Template | None = None

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_string(1, self.name),
                _encode_uint64(2, self.alias),
                _encode_uint64(3, self.timestamp),
                _encode_uint32(4, self.datatype),
                _encode_bool(5, self.is_historical),
                _encode_bool(6, self.is_transient),
                _encode_bool(7, self.is_null),
                _encode_message(8, self.metadata),
                _encode_message(9, self.properties),
                _encode_uint32(10, self.int_value),
                _encode_uint64(11, self.long_value),
                _encode_float(12, self.float_value),
                _encode_double(13, self.double_value),
                _encode_bool(14, self.boolean_value),
                _encode_string(15, self.string_value),
                _encode_bytes(16, self.bytes_value),
                _encode_message(17, self.dataset_value),
                _encode_message(18, self.template_value),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "Metric":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_LEN and field_no == 1:
                out.name = _decode_string(value)
            elif wire == WIRE_VARINT and field_no == 2:
                out.alias = int(value)
            elif wire == WIRE_VARINT and field_no == 3:
                out.timestamp = int(value)
            elif wire == WIRE_VARINT and field_no == 4:
                out.datatype = int(value)
            elif wire == WIRE_VARINT and field_no == 5:
                out.is_historical = bool(value)
            elif wire == WIRE_VARINT and field_no == 6:
                out.is_transient = bool(value)
            elif wire == WIRE_VARINT and field_no == 7:
                out.is_null = bool(value)
            elif wire == WIRE_LEN and field_no == 8:
                out.metadata = MetaData.ParseFromString(value)  # type: ignore[arg-type]
            elif wire == WIRE_LEN and field_no == 9:
                out.properties = PropertySet.ParseFromString(value)  # type: ignore[arg-type]
            elif wire == WIRE_VARINT and field_no == 10:
                out.int_value = int(value)
            elif wire == WIRE_VARINT and field_no == 11:
                out.long_value = int(value)
            elif wire == WIRE_FIXED32 and field_no == 12:
                out.float_value = _decode_float(value)
            elif wire == WIRE_FIXED64 and field_no == 13:
                out.double_value = _decode_double(value)
            elif wire == WIRE_VARINT and field_no == 14:
                out.boolean_value = bool(value)
            elif wire == WIRE_LEN and field_no == 15:
                out.string_value = _decode_string(value)
            elif wire == WIRE_LEN and field_no == 16:
                out.bytes_value = bytes(value)  # type: ignore[arg-type]
            elif wire == WIRE_LEN and field_no == 17:
                out.dataset_value = DataSet.ParseFromString(value)  # type: ignore[arg-type]
            elif wire == WIRE_LEN and field_no == 18:
                out.template_value = Template.ParseFromString(value)  # type: ignore[arg-type]
        return out


@dataclass
class Payload:
    timestamp: int | None = None
    metrics: list[Metric] = field(default_factory=list)
    seq: int | None = None
    uuid: str | None = None
    body: bytes | None = None

    def SerializeToString(self) -> bytes:
        return b"".join(
            (
                _encode_uint64(1, self.timestamp),
                *(_encode_message(2, metric) for metric in self.metrics),
                _encode_uint64(3, self.seq),
                _encode_string(4, self.uuid),
                _encode_bytes(5, self.body),
            )
        )

    @classmethod
    def ParseFromString(cls, payload: bytes) -> "Payload":
        out = cls()
        for field_no, wire, value in _iter_fields(payload):
            if wire == WIRE_VARINT and field_no == 1:
                out.timestamp = int(value)
            elif wire == WIRE_LEN and field_no == 2:
                out.metrics.append(Metric.ParseFromString(value))  # type: ignore[arg-type]
            elif wire == WIRE_VARINT and field_no == 3:
                out.seq = int(value)
            elif wire == WIRE_LEN and field_no == 4:
                out.uuid = _decode_string(value)
            elif wire == WIRE_LEN and field_no == 5:
                out.body = bytes(value)  # type: ignore[arg-type]
        return out
