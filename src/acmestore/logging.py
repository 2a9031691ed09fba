"""Structured logging with audit trail support."""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class AuditAction(str, Enum):
    """Audit log action types."""

    # Account key
    ACCOUNT_KEY_CREATE = "account_key.create"

    # Certificates
    CERT_STORE = "certificate.store"
    CERT_CURRENT_UPDATE = "certificate.current_update"


class JSONFormatter(logging.Formatter):
    """Format log records as JSON."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "extra"):
            log_data.update(record.extra)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.levelno <= logging.DEBUG:
            log_data["location"] = {
                "file": record.filename,
                "line": record.lineno,
                "function": record.funcName,
            }

        return json.dumps(log_data, default=str)


class TextFormatter(logging.Formatter):
    """Format log records as human-readable text."""

    def format(self, record: logging.LogRecord) -> str:
        """Format the log record as text."""
        timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
        level = record.levelname.ljust(8)
        base = f"{timestamp} {level} [{record.name}] {record.getMessage()}"

        if hasattr(record, "extra") and record.extra:
            extras = " ".join(f"{k}={v}" for k, v in record.extra.items())
            base = f"{base} | {extras}"

        if record.exc_info:
            base = f"{base}\n{self.formatException(record.exc_info)}"

        return base


class StructuredLogger(logging.LoggerAdapter):
    """Logger adapter that attaches structured context to every record."""

    def process(self, msg: str, kwargs: dict) -> tuple[str, dict]:
        """Merge adapter context with per-call fields under record.extra."""
        fields = dict(self.extra)
        fields.update(kwargs.pop("fields", {}))
        kwargs["extra"] = {"extra": fields}
        return msg, kwargs

    def with_context(self, **context) -> "StructuredLogger":
        """Create a new logger with additional context."""
        return StructuredLogger(self.logger, {**self.extra, **context})


class AuditLogger:
    """
    Audit logger for writes to the certificate store.

    All audit logs are written at INFO level with structured data.
    """

    def __init__(self, logger: logging.Logger | None = None):
        self.logger = logger or logging.getLogger("acmestore.audit")

    def log(
        self,
        action: AuditAction,
        bucket: str,
        key: str | None = None,
        common_name: str | None = None,
        version: str | None = None,
        details: dict[str, Any] | None = None,
        success: bool = True,
        error: str | None = None,
    ) -> None:
        """
        Log an audit event.

        Args:
            action: The action being performed
            bucket: Bucket the action touched
            key: Object key, when a single object is concerned
            common_name: Certificate common name if applicable
            version: Certificate version if applicable
            details: Additional details about the action
            success: Whether the action succeeded
            error: Error message if action failed
        """
        audit_data = {
            "audit": True,
            "action": action.value,
            "bucket": bucket,
            "success": success,
        }

        if key:
            audit_data["key"] = key
        if common_name:
            audit_data["common_name"] = common_name
        if version:
            audit_data["version"] = version
        if details:
            audit_data["details"] = details
        if error:
            audit_data["error"] = error

        level = logging.INFO if success else logging.WARNING
        self.logger.log(
            level,
            f"{action.value}: {'succeeded' if success else 'failed'}",
            extra={"extra": audit_data},
        )

    def account_key_created(self, bucket: str, key: str) -> None:
        """Log account key creation."""
        self.log(action=AuditAction.ACCOUNT_KEY_CREATE, bucket=bucket, key=key)

    def certificate_stored(
        self,
        bucket: str,
        common_name: str,
        version: str,
        update_current: bool,
        error: str | None = None,
    ) -> None:
        """Log a certificate bundle write, successful or partial."""
        self.log(
            action=AuditAction.CERT_STORE,
            bucket=bucket,
            common_name=common_name,
            version=version,
            details={"update_current": update_current},
            success=error is None,
            error=error,
        )

    def current_updated(self, bucket: str, common_name: str, version: str) -> None:
        """Log a current version pointer update."""
        self.log(
            action=AuditAction.CERT_CURRENT_UPDATE,
            bucket=bucket,
            common_name=common_name,
            version=version,
        )


def setup_logging(
    level: str = "INFO",
    format: str = "text",
    logger_name: str = "acmestore",
) -> logging.Logger:
    """
    Set up logging configuration.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format: Output format ("text" or "json")
        logger_name: Name of the root logger

    Returns:
        Configured logger
    """
    logger = logging.getLogger(logger_name)
    logger.setLevel(getattr(logging, level.upper()))
    logger.handlers.clear()

    # stdout is reserved for command output
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(getattr(logging, level.upper()))

    if format.lower() == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(TextFormatter())

    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str = "acmestore") -> StructuredLogger:
    """
    Get a structured logger.

    Args:
        name: Logger name (will be prefixed with "acmestore.")

    Returns:
        StructuredLogger instance
    """
    if not name.startswith("acmestore"):
        name = f"acmestore.{name}"

    return StructuredLogger(logging.getLogger(name), {})


def get_audit_logger() -> AuditLogger:
    """Get the audit logger."""
    return AuditLogger()


_initialized = False


def init_logging() -> None:
    """Initialize logging from settings."""
    global _initialized
    if _initialized:
        return

    from acmestore.config import get_settings

    settings = get_settings()
    setup_logging(
        level=settings.log_level,
        format=settings.log_format,
    )
    _initialized = True
