"""Recursive encoder from the value model to Sparkplug B wire bytes.

The encoder walks an immutable value graph (metrics, templates, datasets and
property sets) and builds the matching wire messages. Each wire sub-message
is constructed once, from fields gathered beforehand. Any failure aborts the
whole payload; no partial output is produced.

Field paths in error messages look like
``metrics[1]<Motor>.template.metrics[0]<rpm>.value``.
"""

from __future__ import annotations

import logging
from typing import Any

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
from sparkwire.core.errors import (
    EncodeError,
    RangeOverflowError,
    StructuralViolationError,
    TypeMismatchError,
)
from sparkwire.core.types import (
    DataSetDataType,
    MetricDataType,
    ParameterDataType,
    PropertyDataType,
    resolve_kind,
)
from sparkwire.defaults.config import (
    DEFAULT_ENCODER_CONFIG,
    OVERFLOW_POLICIES,
    OVERFLOW_WRAP,
    SEQ_MODULUS,
)
from sparkwire.infra.logger import FieldPathAdapter
from sparkwire.protocol.normalize import datetime_to_millis, normalize_scalar
from sparkwire.protocol.protobuf import sparkplug_b_pb2 as pb

logger = logging.getLogger(__name__)


def _label(base: str, name: str | None) -> str:
    return f"{base}<{name}>" if name else base


def _join(path: str, segment: str) -> str:
    return f"{path}.{segment}" if path else segment


class PayloadEncoder:
    """Turns a :class:`~sparkwire.core.entities.Payload` into wire bytes.

    The encoder keeps no per-call state, so one instance may serve
    concurrent callers as long as their input graphs are not mutated.
    """

    def __init__(self, **config_overrides: Any) -> None:
        self.config: dict[str, Any] = {**DEFAULT_ENCODER_CONFIG, **config_overrides}
        if self.config["overflow_policy"] not in OVERFLOW_POLICIES:
            raise ValueError(
                f"overflow_policy must be one of {OVERFLOW_POLICIES}, got {self.config['overflow_policy']!r}"
            )
        self.overflow_policy: str = self.config["overflow_policy"]
        self.check_cell_types = bool(self.config["check_dataset_cell_types"])
        self.max_depth = int(self.config["max_depth"])

    def encode(self, payload: Payload) -> bytes:
        return self.encode_message(payload).SerializeToString()

    def encode_message(self, payload: Payload) -> pb.Payload:
        timestamp = self._timestamp(payload.timestamp, "timestamp")
        seq = self._seq(payload.seq)
        metrics: list[pb.Metric] = []
        for index, metric in enumerate(payload.metrics):
            name = getattr(metric, "name", None)
            try:
                metrics.append(self.encode_metric(metric, path=_label(f"metrics[{index}]", name)))
            except EncodeError as exc:
                FieldPathAdapter(logger, exc.path).error("failed to encode metric %s: %s", name, exc.reason)
                raise

        return pb.Payload(
            timestamp=timestamp,
            metrics=metrics,
            seq=seq,
            uuid=payload.uuid,
            body=bytes(payload.body) if payload.body is not None else None,
        )

    def _seq(self, seq: Any) -> int:
        if seq is None:
            raise StructuralViolationError("payload sequence number is required", "seq")
        if isinstance(seq, bool) or not isinstance(seq, int):
            raise TypeMismatchError(f"expected int sequence number, got {type(seq).__name__}", "seq")
        if not 0 <= seq < SEQ_MODULUS:
            if self.overflow_policy != OVERFLOW_WRAP:
                raise RangeOverflowError(f"{seq} is outside 0..{SEQ_MODULUS - 1}", "seq")
            seq %= SEQ_MODULUS
        return seq

    @staticmethod
    def _timestamp(value: Any, path: str) -> int | None:
        if value is None:
            return None
        return datetime_to_millis(value, path)

    @staticmethod
    def _unsigned(value: Any, path: str) -> int | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeMismatchError(f"expected int, got {type(value).__name__}", path)
        if value < 0:
            raise RangeOverflowError(f"{value} is negative", path)
        return value

    def _check_depth(self, depth: int, path: str) -> None:
        if depth > self.max_depth:
            raise StructuralViolationError(f"nesting deeper than {self.max_depth} levels", path)

    def encode_metric(self, metric: Metric, path: str = "metric", depth: int = 0) -> pb.Metric:
        if not isinstance(metric, Metric):
            raise TypeMismatchError(f"expected Metric, got {type(metric).__name__}", path)
        if metric.name is None and metric.alias is None:
            raise StructuralViolationError("metric needs a name or an alias", path)
        kind = resolve_kind(MetricDataType, metric.data_type, _join(path, "datatype"))
        logger.debug("encoding metric %s as %s", metric.name, kind.name)

        fields: dict[str, Any] = {
            "name": metric.name,
            "alias": self._unsigned(metric.alias, _join(path, "alias")),
            "datatype": int(kind),
            "timestamp": self._timestamp(metric.timestamp, _join(path, "timestamp")),
            "is_historical": True if metric.is_historical else None,
            "is_transient": True if metric.is_transient else None,
        }

        value_path = _join(path, "value")
        if metric.value is None:
            fields["is_null"] = True
        elif kind is MetricDataType.DATASET:
            fields["dataset_value"] = self.encode_dataset(metric.value, value_path)
        elif kind is MetricDataType.TEMPLATE:
            fields["template_value"] = self.encode_template(metric.value, value_path, depth + 1)
        else:
            slot, wire_value = normalize_scalar(
                kind, metric.value, overflow_policy=self.overflow_policy, path=value_path
            )
            fields[slot.value] = wire_value

        synthesized_name = metric.value.file_name if isinstance(metric.value, File) else None
        if metric.metadata is not None or synthesized_name is not None:
            fields["metadata"] = self.encode_metadata(
                metric.metadata, _join(path, "metadata"), file_name=synthesized_name
            )

        if metric.properties is not None:
            fields["properties"] = self.encode_property_set(
                metric.properties, _join(path, "properties"), depth + 1
            )
        return pb.Metric(**fields)

    def encode_metadata(
        self,
        metadata: MetaData | None,
        path: str = "metadata",
        file_name: str | None = None,
    ) -> pb.MetaData:
        """Build the metadata sub-message.

        ``file_name`` is the name carried by a FILE value; an explicit
        ``metadata.file_name`` takes precedence over it.
        """
        if metadata is None:
            return pb.MetaData(file_name=file_name)
        if not isinstance(metadata, MetaData):
            raise TypeMismatchError(f"expected MetaData, got {type(metadata).__name__}", path)
        return pb.MetaData(
            is_multi_part=metadata.is_multi_part,
            content_type=metadata.content_type,
            size=self._unsigned(metadata.size, _join(path, "size")),
            seq=self._unsigned(metadata.seq, _join(path, "seq")),
            file_name=metadata.file_name if metadata.file_name is not None else file_name,
            file_type=metadata.file_type,
            md5=metadata.md5,
            description=metadata.description,
        )

    def encode_property_set(
        self, property_set: PropertySet, path: str = "properties", depth: int = 0
    ) -> pb.PropertySet:
        if not isinstance(property_set, PropertySet):
            raise TypeMismatchError(f"expected PropertySet, got {type(property_set).__name__}", path)
        self._check_depth(depth, path)
        keys: list[str] = []
        values: list[pb.PropertyValue] = []
        for key, value in property_set.items():
            keys.append(key)
            values.append(self.encode_property_value(value, _join(path, key), depth))
        return pb.PropertySet(keys=keys, values=values)

    def encode_property_value(
        self, value: PropertyValue, path: str = "property", depth: int = 0
    ) -> pb.PropertyValue:
        if not isinstance(value, PropertyValue):
            raise TypeMismatchError(f"expected PropertyValue, got {type(value).__name__}", path)
        kind = resolve_kind(PropertyDataType, value.type, _join(path, "type"))
        if value.value is None:
            return pb.PropertyValue(type=int(kind), is_null=True)

        if kind is PropertyDataType.PROPERTYSET:
            nested = self.encode_property_set(value.value, path, depth + 1)
            return pb.PropertyValue(type=int(kind), propertyset_value=nested)
        if kind is PropertyDataType.PROPERTYSET_LIST:
            if isinstance(value.value, (PropertySet, str, bytes)):
                raise TypeMismatchError("expected a sequence of PropertySet", path)
            try:
                items = list(value.value)
            except TypeError:
                raise TypeMismatchError(
                    f"expected a sequence of PropertySet, got {type(value.value).__name__}", path
                ) from None
            sets = [
                self.encode_property_set(item, f"{path}[{index}]", depth + 1)
                for index, item in enumerate(items)
            ]
            return pb.PropertyValue(type=int(kind), propertysets_value=pb.PropertySetList(propertyset=sets))

        slot, wire_value = normalize_scalar(kind, value.value, overflow_policy=self.overflow_policy, path=path)
        return pb.PropertyValue(type=int(kind), **{slot.value: wire_value})

    def encode_dataset(self, dataset: DataSet, path: str = "dataset") -> pb.DataSet:
        if not isinstance(dataset, DataSet):
            raise TypeMismatchError(f"expected DataSet, got {type(dataset).__name__}", path)
        if not dataset.column_names:
            raise StructuralViolationError("dataset declares no column names", _join(path, "columns"))
        if not dataset.types:
            raise StructuralViolationError("dataset declares no column types", _join(path, "types"))
        num_of_columns = self._unsigned(dataset.num_of_columns, _join(path, "num_of_columns"))
        if not num_of_columns:
            raise StructuralViolationError("dataset declares zero columns", _join(path, "num_of_columns"))
        types = [
            resolve_kind(DataSetDataType, raw, f"{path}.types[{index}]")
            for index, raw in enumerate(dataset.types)
        ]

        rows: list[pb.Row] = []
        for row_index, row in enumerate(dataset.rows):
            if not isinstance(row, Row):
                raise TypeMismatchError(f"expected Row, got {type(row).__name__}", f"{path}.rows[{row_index}]")
            elements: list[pb.DataSetValue] = []
            for column, cell in enumerate(row.values):
                cell_path = f"{path}.rows[{row_index}][{column}]"
                if not isinstance(cell, DataSetValue):
                    raise TypeMismatchError(f"expected DataSetValue, got {type(cell).__name__}", cell_path)
                if self.check_cell_types:
                    self._check_cell(cell, column, types, cell_path)
                elements.append(self.encode_dataset_value(cell, cell_path))
            rows.append(pb.Row(elements=elements))
        logger.debug("encoded dataset with %d columns and %d rows", num_of_columns, len(rows))

        return pb.DataSet(
            num_of_columns=num_of_columns,
            columns=list(dataset.column_names),
            types=[int(kind) for kind in types],
            rows=rows,
        )

    @staticmethod
    def _check_cell(cell: DataSetValue, column: int, types: list[DataSetDataType], path: str) -> None:
        if column >= len(types):
            raise StructuralViolationError(f"cell beyond the {len(types)} declared columns", path)
        kind = resolve_kind(DataSetDataType, cell.type, path)
        if kind is not types[column]:
            raise TypeMismatchError(f"cell kind {kind.name} does not match column type {types[column].name}", path)

    def encode_dataset_value(self, cell: DataSetValue, path: str = "cell") -> pb.DataSetValue:
        if not isinstance(cell, DataSetValue):
            raise TypeMismatchError(f"expected DataSetValue, got {type(cell).__name__}", path)
        kind = resolve_kind(DataSetDataType, cell.type, path)
        if cell.value is None:
            return pb.DataSetValue()
        slot, wire_value = normalize_scalar(kind, cell.value, overflow_policy=self.overflow_policy, path=path)
        return pb.DataSetValue(**{slot.value: wire_value})

    def encode_template(self, template: Template, path: str = "template", depth: int = 0) -> pb.Template:
        if not isinstance(template, Template):
            raise TypeMismatchError(f"expected Template, got {type(template).__name__}", path)
        self._check_depth(depth, path)
        logger.debug("encoding template %s (definition=%s)", template.name, template.is_definition)
        metrics = [
            self.encode_metric(member, _label(f"{path}.metrics[{index}]", getattr(member, "name", None)), depth)
            for index, member in enumerate(template.metrics)
        ]
        parameters = [
            self.encode_parameter(parameter, _label(f"{path}.parameters[{index}]", getattr(parameter, "name", None)))
            for index, parameter in enumerate(template.parameters)
        ]
        return pb.Template(
            version=template.version,
            metrics=metrics,
            parameters=parameters,
            template_ref=template.template_ref,
            is_definition=bool(template.is_definition),
            name=template.name,
        )

    def encode_parameter(self, parameter: Parameter, path: str = "parameter") -> pb.Parameter:
        if not isinstance(parameter, Parameter):
            raise TypeMismatchError(f"expected Parameter, got {type(parameter).__name__}", path)
        kind = resolve_kind(ParameterDataType, parameter.type, _join(path, "type"))
        if parameter.value is None:
            return pb.Parameter(name=parameter.name, type=int(kind))
        slot, wire_value = normalize_scalar(
            kind, parameter.value, overflow_policy=self.overflow_policy, path=_join(path, "value")
        )
        return pb.Parameter(name=parameter.name, type=int(kind), **{slot.value: wire_value})


def encode_payload(payload: Payload, **config_overrides: Any) -> bytes:
    """Encode ``payload`` with a one-off :class:`PayloadEncoder`."""
    return PayloadEncoder(**config_overrides).encode(payload)


__all__ = ["PayloadEncoder", "encode_payload"]
