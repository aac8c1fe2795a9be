import json
import logging
import os
import sys
from datetime import datetime, timezone


# Attributes every LogRecord carries; anything else on a record is context.
_STANDARD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

_PASSTHROUGH = ("exc_info", "stack_info", "stacklevel")


def _level_from_env() -> int:
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


class JsonFormatter(logging.Formatter):
    """One JSON object per line: level, logger, event name and context."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _STANDARD_FIELDS and not key.startswith("_")
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False, default=str)


class ContextLogger(logging.LoggerAdapter):
    """Logger adapter that records keyword arguments as structured fields.

    ``logger.info("aggregation_completed", total_points=12)`` ends up as
    ``{"message": "aggregation_completed", "total_points": 12, ...}``.
    Fields bound with :meth:`bind` are added to every line and call-site
    keywords override them.
    """

    def bind(self, **context) -> "ContextLogger":
        return ContextLogger(self.logger, {**self.extra, **context})

    def process(self, msg, kwargs):
        fields = {**self.extra, **(kwargs.pop("extra", None) or {})}
        options = {key: kwargs.pop(key) for key in _PASSTHROUGH if key in kwargs}
        fields.update(kwargs)
        options["extra"] = fields
        return msg, options


def get_logger(name: str) -> ContextLogger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JsonFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_from_env())
        logger.propagate = False
    return ContextLogger(logger, {})
