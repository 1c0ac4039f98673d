"""Decoder from Sparkplug B wire bytes back to the value model."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Any, TypeVar

from sparkwire.core.entities import (
    DataSet,
    DataSetValue,
    File,
    MetaData,
    Metric,
    Parameter,
    Payload,
    PropertySet,
    PropertyValue,
    Row,
    Template,
)
from sparkwire.core.errors import DecodeError
from sparkwire.core.types import (
    DataSetDataType,
    MetricDataType,
    ParameterDataType,
    PropertyDataType,
    slot_for,
)
from sparkwire.protocol.normalize import INT_WIDTHS, millis_to_datetime
from sparkwire.protocol.protobuf import sparkplug_b_pb2 as pb

logger = logging.getLogger(__name__)

KindT = TypeVar("KindT", bound=IntEnum)

_MISSING = object()


def _signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >= 1 << (bits - 1):
        value -= 1 << bits
    return value


def _kind(enum_cls: type[KindT], code: int | None, path: str) -> KindT:
    if code is None:
        raise DecodeError(f"{path}: missing {enum_cls.__name__}")
    try:
        kind = enum_cls(code)
    except ValueError:
        raise DecodeError(f"{path}: unknown {enum_cls.__name__} code {code}") from None
    if kind.name == "UNKNOWN":
        raise DecodeError(f"{path}: {enum_cls.__name__}.UNKNOWN carries no value")
    return kind


class PayloadDecoder:
    """Rebuilds :class:`~sparkwire.core.entities.Payload` trees from wire bytes."""

    def decode(self, data: bytes) -> Payload:
        try:
            message = pb.Payload.ParseFromString(bytes(data))
        except ValueError as exc:
            raise DecodeError(f"malformed payload: {exc}") from exc
        payload = self.decode_message(message)
        logger.debug("decoded payload seq=%s with %d metrics", payload.seq, len(payload.metrics))
        return payload

    def decode_message(self, message: pb.Payload) -> Payload:
        metrics = tuple(
            self.decode_metric(metric, f"metrics[{index}]") for index, metric in enumerate(message.metrics)
        )
        return Payload(
            seq=message.seq,
            metrics=metrics,
            timestamp=millis_to_datetime(_signed(message.timestamp, 64)) if message.timestamp is not None else None,
            uuid=message.uuid,
            body=message.body,
        )

    def _scalar(self, kind: IntEnum, message: Any, path: str, file_name: str | None = None) -> Any:
        """Read the slot ``kind`` maps to; returns ``_MISSING`` when it is unset."""
        raw = getattr(message, slot_for(kind).value, None)
        if raw is None:
            return _MISSING
        name = kind.name
        if name in INT_WIDTHS:
            bits, signed = INT_WIDTHS[name]
            return _signed(raw, bits) if signed else raw & ((1 << bits) - 1)
        if name == "DATETIME":
            return millis_to_datetime(_signed(raw, 64))
        if name == "FILE":
            return File(file_name=file_name or "", data=raw)
        return raw

    def decode_metric(self, message: pb.Metric, path: str = "metric") -> Metric:
        kind = _kind(MetricDataType, message.datatype, path)
        metadata = self.decode_metadata(message.metadata) if message.metadata is not None else None

        value: Any = None
        if not message.is_null:
            if kind is MetricDataType.DATASET and message.dataset_value is not None:
                value = self.decode_dataset(message.dataset_value, f"{path}.value")
            elif kind is MetricDataType.TEMPLATE and message.template_value is not None:
                value = self.decode_template(message.template_value, f"{path}.value")
            else:
                file_name = metadata.file_name if metadata is not None else None
                value = self._scalar(kind, message, path, file_name=file_name)
            if value is _MISSING or value is None:
                raise DecodeError(f"{path}: metric is not null but carries no {kind.name} value")

        return Metric(
            name=message.name,
            data_type=kind,
            value=value,
            alias=message.alias,
            timestamp=millis_to_datetime(_signed(message.timestamp, 64)) if message.timestamp is not None else None,
            metadata=metadata,
            properties=self.decode_property_set(message.properties, f"{path}.properties")
            if message.properties is not None
            else None,
            is_historical=bool(message.is_historical),
            is_transient=bool(message.is_transient),
        )

    @staticmethod
    def decode_metadata(message: pb.MetaData) -> MetaData:
        return MetaData(
            is_multi_part=message.is_multi_part,
            content_type=message.content_type,
            size=message.size,
            seq=message.seq,
            file_name=message.file_name,
            file_type=message.file_type,
            md5=message.md5,
            description=message.description,
        )

    def decode_property_set(self, message: pb.PropertySet, path: str = "properties") -> PropertySet:
        if len(message.keys) != len(message.values):
            raise DecodeError(f"{path}: {len(message.keys)} keys but {len(message.values)} values")
        return PropertySet.from_items(
            (key, self.decode_property_value(value, f"{path}.{key}"))
            for key, value in zip(message.keys, message.values)
        )

    def decode_property_value(self, message: pb.PropertyValue, path: str = "property") -> PropertyValue:
        kind = _kind(PropertyDataType, message.type, path)
        if message.is_null:
            return PropertyValue(kind)
        if kind is PropertyDataType.PROPERTYSET:
            if message.propertyset_value is None:
                raise DecodeError(f"{path}: missing property set value")
            return PropertyValue(kind, self.decode_property_set(message.propertyset_value, path))
        if kind is PropertyDataType.PROPERTYSET_LIST:
            if message.propertysets_value is None:
                raise DecodeError(f"{path}: missing property set list value")
            sets = tuple(
                self.decode_property_set(item, f"{path}[{index}]")
                for index, item in enumerate(message.propertysets_value.propertyset)
            )
            return PropertyValue(kind, sets)
        value = self._scalar(kind, message, path)
        if value is _MISSING:
            raise DecodeError(f"{path}: property is not null but carries no {kind.name} value")
        return PropertyValue(kind, value)

    def decode_dataset(self, message: pb.DataSet, path: str = "dataset") -> DataSet:
        types = [_kind(DataSetDataType, code, f"{path}.types[{index}]") for index, code in enumerate(message.types)]
        rows = []
        for row_index, row in enumerate(message.rows):
            if len(row.elements) > len(types):
                raise DecodeError(f"{path}.rows[{row_index}]: more cells than declared column types")
            cells = []
            for kind, element in zip(types, row.elements):
                value = self._scalar(kind, element, path)
                cells.append(DataSetValue(kind, None if value is _MISSING else value))
            rows.append(Row(tuple(cells)))
        return DataSet(
            num_of_columns=message.num_of_columns if message.num_of_columns is not None else len(types),
            column_names=tuple(message.columns),
            types=tuple(types),
            rows=tuple(rows),
        )

    def decode_template(self, message: pb.Template, path: str = "template") -> Template:
        return Template(
            name=message.name,
            metrics=tuple(
                self.decode_metric(metric, f"{path}.metrics[{index}]") for index, metric in enumerate(message.metrics)
            ),
            parameters=tuple(
                self.decode_parameter(parameter, f"{path}.parameters[{index}]")
                for index, parameter in enumerate(message.parameters)
            ),
            version=message.version,
            template_ref=message.template_ref,
            is_definition=bool(message.is_definition),
        )

    def decode_parameter(self, message: pb.Parameter, path: str = "parameter") -> Parameter:
        kind = _kind(ParameterDataType, message.type, path)
        value = self._scalar(kind, message, path)
        return Parameter(name=message.name or "", type=kind, value=None if value is _MISSING else value)


def decode_payload(data: bytes) -> Payload:
    return PayloadDecoder().decode(data)


__all__ = ["PayloadDecoder", "decode_payload"]
