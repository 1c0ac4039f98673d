import json
import logging

from sparkwire.infra.logger import FieldPathAdapter, JsonFormatter, get_logger


def _record(**extra) -> logging.LogRecord:
    record = logging.LogRecord("sparkwire.test", logging.ERROR, __file__, 1, "failed to encode metric %s", ("m",), None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_json_formatter_fields() -> None:
    line = json.loads(JsonFormatter().format(_record()))
    assert line["level"] == "ERROR"
    assert line["logger"] == "sparkwire.test"
    assert line["message"] == "failed to encode metric m"
    assert "path" not in line


def test_json_formatter_includes_field_path() -> None:
    line = json.loads(JsonFormatter().format(_record(path="metrics[0]<m>.value")))
    assert line["path"] == "metrics[0]<m>.value"


def test_get_logger_attaches_one_handler() -> None:
    logger = get_logger("sparkwire.test.handlers")
    get_logger("sparkwire.test.handlers", level=logging.DEBUG)
    handlers = [h for h in logger.handlers if isinstance(h.formatter, JsonFormatter)]
    assert len(handlers) == 1
    assert logger.level == logging.DEBUG


def test_get_logger_uses_configured_default_level() -> None:
    assert get_logger("sparkwire.test.default").level == logging.INFO


def test_field_path_adapter_tags_records(caplog) -> None:
    adapter = FieldPathAdapter(logging.getLogger("sparkwire.test.adapter"), "metrics[1]<rpm>.value")
    with caplog.at_level(logging.WARNING, logger="sparkwire.test.adapter"):
        adapter.warning("bad value")
        adapter.warning("overridden", extra={"path": "seq"})
    assert [record.path for record in caplog.records] == ["metrics[1]<rpm>.value", "seq"]
    line = json.loads(JsonFormatter().format(caplog.records[0]))
    assert line["path"] == "metrics[1]<rpm>.value"
