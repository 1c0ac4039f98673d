from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterable, Iterator, Mapping, Optional, Sequence, Union

from .types import DataSetDataType, MetricDataType, ParameterDataType, PropertyDataType


def _freeze(instance: object, name: str) -> None:
    value = getattr(instance, name)
    if not isinstance(value, tuple):
        object.__setattr__(instance, name, tuple(value))


@dataclass(frozen=True)
class File:
    file_name: str
    data: bytes


@dataclass(frozen=True)
class MetaData:
    is_multi_part: Optional[bool] = None
    content_type: Optional[str] = None
    size: Optional[int] = None
    seq: Optional[int] = None
    file_name: Optional[str] = None
    file_type: Optional[str] = None
    md5: Optional[str] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class PropertyValue:
    type: Union[PropertyDataType, int]
    value: Any = None


@dataclass(frozen=True)
class PropertySet:
    """Ordered string-keyed mapping of property values."""

    properties: Mapping[str, PropertyValue] = field(default_factory=dict)

    @classmethod
    def from_items(cls, items: Iterable[tuple[str, PropertyValue]]) -> "PropertySet":
        return cls(dict(items))

    @classmethod
    def of(cls, **values: PropertyValue) -> "PropertySet":
        return cls(dict(values))

    def __iter__(self) -> Iterator[str]:
        return iter(self.properties)

    def __len__(self) -> int:
        return len(self.properties)

    def __getitem__(self, key: str) -> PropertyValue:
        return self.properties[key]

    def items(self) -> Iterable[tuple[str, PropertyValue]]:
        return self.properties.items()


@dataclass(frozen=True)
class DataSetValue:
    type: Union[DataSetDataType, int]
    value: Any = None


@dataclass(frozen=True)
class Row:
    values: Sequence[DataSetValue] = ()

    def __post_init__(self) -> None:
        _freeze(self, "values")


@dataclass(frozen=True)
class DataSet:
    num_of_columns: int
    column_names: Sequence[str] = ()
    types: Sequence[Union[DataSetDataType, int]] = ()
    rows: Sequence[Row] = ()

    def __post_init__(self) -> None:
        _freeze(self, "column_names")
        _freeze(self, "types")
        _freeze(self, "rows")

    @classmethod
    def build(
        cls,
        columns: Sequence[tuple[str, DataSetDataType]],
        rows: Iterable[Sequence[Any]] = (),
    ) -> "DataSet":
        """Build a dataset from ``(name, type)`` columns and rows of raw values.

        Each raw cell is tagged with the type of the column at its position.
        Raises ``ValueError`` when a row's length differs from the column count.
        """
        names = tuple(name for name, _ in columns)
        types = tuple(kind for _, kind in columns)
        built_rows = []
        for index, raw in enumerate(rows):
            raw = tuple(raw)
            if len(raw) != len(types):
                raise ValueError(f"row {index} has {len(raw)} cells for {len(types)} columns")
            built_rows.append(Row(tuple(DataSetValue(kind, value) for kind, value in zip(types, raw))))
        return cls(num_of_columns=len(columns), column_names=names, types=types, rows=built_rows)


@dataclass(frozen=True)
class Parameter:
    name: str
    type: Union[ParameterDataType, int]
    value: Any = None


@dataclass(frozen=True)
class Template:
    name: Optional[str] = None
    metrics: Sequence["Metric"] = ()
    parameters: Sequence[Parameter] = ()
    version: Optional[str] = None
    template_ref: Optional[str] = None
    is_definition: bool = False

    def __post_init__(self) -> None:
        _freeze(self, "metrics")
        _freeze(self, "parameters")


@dataclass(frozen=True)
class Metric:
    name: Optional[str]
    data_type: Union[MetricDataType, int]
    value: Any = None
    alias: Optional[int] = None
    timestamp: Optional[datetime] = None
    metadata: Optional[MetaData] = None
    properties: Optional[PropertySet] = None
    is_historical: bool = False
    is_transient: bool = False


@dataclass(frozen=True)
class Payload:
    seq: Optional[int]
    metrics: Sequence[Metric] = ()
    timestamp: Optional[datetime] = None
    uuid: Optional[str] = None
    body: Optional[bytes] = None

    def __post_init__(self) -> None:
        _freeze(self, "metrics")
