import logging

from asset_pipeline.logging.logger import Log, _FieldsFormatter


def _record(message: str, **fields: object) -> logging.LogRecord:
    record = logging.LogRecord("asset_pipeline", logging.INFO, __file__, 1, message, None, None)
    record.fields = fields
    return record


class TestFieldsFormatter:
    def test_appends_fields(self) -> None:
        formatter = _FieldsFormatter("%(message)s")
        line = formatter.format(_record("Uploaded item image", item_id="7", position=0))
        assert line == "Uploaded item image item_id=7 position=0"

    def test_plain_message_without_fields(self) -> None:
        assert _FieldsFormatter("%(message)s").format(_record("hello")) == "hello"


class TestLog:
    def test_configure_quiets_http_loggers(self) -> None:
        Log.configure("debug")
        assert Log._logger.level == logging.DEBUG
        assert logging.getLogger("httpx").level == logging.WARNING
        assert len(Log._logger.handlers) == 1
        Log.configure("info")
        assert len(Log._logger.handlers) == 1
