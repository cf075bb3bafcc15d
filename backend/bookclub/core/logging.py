"""
Structured logging configuration.

Production emits one JSON object per line; everything else gets a
coloured single-line format. Both carry the request id set by
RequestLoggingMiddleware and, once the session is verified, the caller's
profile id.
"""

import json
import logging
import sys
from contextvars import ContextVar
from datetime import datetime
from typing import Any

from bookclub.core.config import get_settings

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)
profile_id_var: ContextVar[int | None] = ContextVar("profile_id", default=None)


def _context() -> dict[str, Any]:
    context: dict[str, Any] = {}
    request_id = request_id_var.get()
    if request_id:
        context["request_id"] = request_id
    profile_id = profile_id_var.get()
    if profile_id is not None:
        context["profile_id"] = profile_id
    return context


class JSONFormatter(logging.Formatter):
    """One JSON document per record, for the log shipper."""

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": datetime.utcnow().isoformat() + "Z",
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_context(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        fields = getattr(record, "extra_fields", None)
        if fields:
            log_data["fields"] = fields

        return json.dumps(log_data, default=str)


class DevelopmentFormatter(logging.Formatter):
    """Human-readable formatter for local runs and tests."""

    COLORS = {
        "DEBUG": "\033[36m",
        "INFO": "\033[32m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[35m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        context = _context()
        prefix = ""
        if "request_id" in context:
            prefix += f"[{context['request_id'][:8]}] "
        if "profile_id" in context:
            prefix += f"(profile {context['profile_id']}) "

        fields = getattr(record, "extra_fields", None)
        line = f"{color}{record.levelname:8}{self.RESET} {prefix}{record.name}: {record.getMessage()}"
        if fields:
            line += " " + " ".join(f"{k}={v}" for k, v in fields.items())
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def setup_logging() -> None:
    """Configure the root logger for the current environment."""
    settings = get_settings()

    handler = logging.StreamHandler(sys.stdout)
    if settings.ENVIRONMENT == "production":
        handler.setFormatter(JSONFormatter(service=settings.APP_NAME))
    else:
        handler.setFormatter(DevelopmentFormatter())

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
    root_logger.handlers = [handler]

    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    # SQL echo only when debugging
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
