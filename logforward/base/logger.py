"""
Structured logging for Logforward.

Provides a pre-configured logger that emits JSON-structured log records
with reconciliation context (log group, resource, operation) so deploy
logs can be filtered per log group.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in ("request_id", "log_group", "resource", "operation"):
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class ForwarderLogger:
    """Convenience wrapper around :mod:`logging` for reconciliation runs."""

    def __init__(self, name: str = "logforward") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        log_group: str | None = None,
        resource: str | None = None,
        operation: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with reconciliation context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            log_group: Live log group name (e.g. ``/aws/lambda/fn``).
            resource: Template resource name.
            operation: Step name (e.g. ``validate_forwarder``).
            request_id: Correlation ID for the run; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        extra = {
            "log_group": log_group,
            "resource": resource,
            "operation": operation,
            "request_id": request_id or new_request_id(),
        }
        self.logger.log(level, message, extra=extra, exc_info=exc_info)

    def info(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.ERROR, message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self.log_operation(logging.DEBUG, message, **kwargs)


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]


# Module-level singleton
lf_logger = ForwarderLogger()
