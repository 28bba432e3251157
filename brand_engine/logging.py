"""key=value log lines for the brand engine."""

import logging
import sys
from typing import Any

from .config import get_settings


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        fields = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "function": record.funcName,
            "message": record.getMessage(),
        }
        fields.update(getattr(record, "context", {}))
        return " ".join(f"{k}={v}" for k, v in fields.items())


def get_logger(name: str) -> logging.Logger:
    """Logger with a stdout handler; DEBUG in the dev environment, INFO otherwise."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        dev = get_settings().BRAND_ENGINE_ENV == "dev"
        logger.setLevel(logging.DEBUG if dev else logging.INFO)
    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **context: Any) -> None:
    """Log `msg` with `context` appended as key=value fields (url, domain, ...)."""
    logger.log(level, msg, extra={"context": context})
