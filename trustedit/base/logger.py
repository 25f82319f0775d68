"""
Structured logging for trustedit.

Provides a pre-configured logger that emits JSON-structured log records
with edit context (provider, role, stage) for easy filtering in log
aggregation tools.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

_CONTEXT_KEYS = ("request_id", "provider", "role_name", "principal_arn", "stage")


class StructuredFormatter(logging.Formatter):
    """Emit log records as single-line JSON objects."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        # Attach any extras injected via TrustEditLogger.log_operation
        for key in _CONTEXT_KEYS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = val
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


class TrustEditLogger:
    """Convenience wrapper around :mod:`logging` for trust policy edits."""

    def __init__(self, name: str = "trustedit") -> None:
        self.logger = logging.getLogger(name)
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(StructuredFormatter())
            self.logger.addHandler(handler)
            self.logger.setLevel(logging.INFO)

    def set_level(self, level: int | str) -> None:
        self.logger.setLevel(level.upper() if isinstance(level, str) else level)

    def log_operation(
        self,
        level: int,
        message: str,
        *,
        provider: str | None = None,
        role_name: str | None = None,
        principal_arn: str | None = None,
        stage: str | None = None,
        request_id: str | None = None,
        exc_info: bool = False,
    ) -> None:
        """Emit a structured log record with edit context.

        Args:
            level: Logging level (e.g. logging.INFO).
            message: Human-readable message.
            provider: Cloud provider name.
            role_name: Role being edited.
            principal_arn: Principal being added.
            stage: Pipeline stage (``fetch``, ``mutate``, ``persist``).
            request_id: Optional correlation ID; auto-generated if omitted.
            exc_info: Whether to include exception info.
        """
        extra = {
            "provider": provider,
            "role_name": role_name,
            "principal_arn": principal_arn,
            "stage": stage,
            "request_id": request_id or uuid.uuid4().hex[:12],
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


# Module-level singleton
te_logger = TrustEditLogger()
