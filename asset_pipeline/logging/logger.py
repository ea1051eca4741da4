import logging
import sys

_NOISY_LOGGERS = ("httpx", "httpcore", "psycopg.pool")


class _FieldsFormatter(logging.Formatter):
    """Appends ``key=value`` pairs passed to Log methods after the message."""

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = getattr(record, "fields", None)
        if fields:
            line += " " + " ".join(f"{key}={value}" for key, value in fields.items())
        return line


class Log:
    """Pipeline-wide logger. Keyword arguments become trailing key=value fields."""

    _logger: logging.Logger = logging.getLogger("asset_pipeline")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level, attach the stdout handler once and quiet HTTP/pool chatter."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(_FieldsFormatter("%(asctime)s [%(levelname)s] %(message)s"))
            cls._logger.addHandler(handler)
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(message, extra={"fields": fields})

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(message, extra={"fields": fields})

    @classmethod
    def exception(cls, message: str, **fields: object) -> None:
        """Log an error together with the active traceback."""
        cls._logger.exception(message, extra={"fields": fields})

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(message, extra={"fields": fields})

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(message, extra={"fields": fields})
