"""Encode a node birth style payload and print its size and hex dump."""

from sparkwire import (
    DataSet,
    MetricDataType,
    DataSetDataType,
    Metric,
    Parameter,
    ParameterDataType,
    PropertyDataType,
    PropertySet,
    PropertyValue,
    SequenceCounter,
    Template,
    encode_payload,
    next_payload,
)
from sparkwire.infra.logger import get_logger

logger = get_logger("sparkwire.examples", level="DEBUG")

counter = SequenceCounter()

motor = Template(
    name="Motor",
    template_ref="MotorDef",
    metrics=(
        Metric("rpm", MetricDataType.UINT16, 1450),
        Metric("status", MetricDataType.STRING, "OK"),
    ),
    parameters=(Parameter("rated_kw", ParameterDataType.FLOAT, 7.5),),
)

history = DataSet.build(
    [("minute", DataSetDataType.INT32), ("temp", DataSetDataType.DOUBLE)],
    [[0, 21.5], [1, 21.7], [2, 22.0]],
)

payload = next_payload(
    counter,
    [
        Metric("Node Control/Rebirth", MetricDataType.BOOLEAN, False),
        Metric(
            "Inputs/Temperature",
            MetricDataType.DOUBLE,
            21.5,
            alias=1,
            properties=PropertySet.of(engUnit=PropertyValue(PropertyDataType.STRING, "C")),
        ),
        Metric("Motors/M1", MetricDataType.TEMPLATE, motor, alias=2),
        Metric("History/Temperature", MetricDataType.DATASET, history, alias=3),
    ],
)

if __name__ == "__main__":
    data = encode_payload(payload)
    logger.info("encoded seq=%d into %d bytes", payload.seq, len(data))
    logger.info(data.hex())
