"""Sparkplug B telemetry payload encoder."""

__version__ = "0.1.0"

__all__ = [
    "PayloadEncoder",
    "PayloadDecoder",
    "encode_payload",
    "decode_payload",
    "Payload",
    "Metric",
    "MetaData",
    "File",
    "PropertySet",
    "PropertyValue",
    "DataSet",
    "DataSetValue",
    "Row",
    "Template",
    "Parameter",
    "MetricDataType",
    "PropertyDataType",
    "ParameterDataType",
    "DataSetDataType",
    "SparkwireError",
    "EncodeError",
    "DecodeError",
    "UnsupportedKindError",
    "TypeMismatchError",
    "StructuralViolationError",
    "RangeOverflowError",
    "SequenceCounter",
    "next_payload",
]

_ENTITIES = {
    "Payload",
    "Metric",
    "MetaData",
    "File",
    "PropertySet",
    "PropertyValue",
    "DataSet",
    "DataSetValue",
    "Row",
    "Template",
    "Parameter",
}
_TYPES = {"MetricDataType", "PropertyDataType", "ParameterDataType", "DataSetDataType"}
_ERRORS = {
    "SparkwireError",
    "EncodeError",
    "DecodeError",
    "UnsupportedKindError",
    "TypeMismatchError",
    "StructuralViolationError",
    "RangeOverflowError",
}


def __getattr__(name: str) -> object:
    """Lazy exports so importing the package stays cheap."""
    if name in {"PayloadEncoder", "encode_payload"}:
        from .protocol import encoder

        return getattr(encoder, name)

    if name in {"PayloadDecoder", "decode_payload"}:
        from .protocol import decoder

        return getattr(decoder, name)

    if name in _ENTITIES:
        from .core import entities

        return getattr(entities, name)

    if name in _TYPES:
        from .core import types

        return getattr(types, name)

    if name in _ERRORS:
        from .core import errors

        return getattr(errors, name)

    if name in {"SequenceCounter", "next_payload"}:
        from .utils import sequence

        return getattr(sequence, name)

    raise AttributeError(f"module 'sparkwire' has no attribute {name!r}")
