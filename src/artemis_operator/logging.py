"""Structured logging configuration for the ActiveMQ Artemis Operator."""

import json
import logging
import sys
from typing import Any

from .constants import CONTROLLER_NAME, KIND_ACTIVEMQ_ARTEMIS


def setup_structured_logging() -> None:
    """Configure structured JSON logging."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )


def log_resource_event(
    logger: logging.Logger,
    controller: str,
    resource_kind: str,
    resource_name: str,
    namespace: str,
    uid: str,
    event: str,
    reason: str,
    message: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """Log a structured resource event."""
    log_data = {
        "controller": controller,
        "resource": resource_kind,
        "name": resource_name,
        "namespace": namespace,
        "uid": uid,
        "event": event,
        "reason": reason,
        "message": message,
    }
    log_data.update(sanitize_secrets(kwargs))
    logger.log(level, json.dumps(log_data, default=str))


def sanitize_secrets(log_data: dict[str, Any]) -> dict[str, Any]:
    """Remove secret fields from log data."""
    secret_fields = {"password", "cluster_password", "user", "cluster_user", "admin_password"}
    sanitized = log_data.copy()
    for field in secret_fields:
        if field in sanitized:
            sanitized[field] = "***REDACTED***"
    return sanitized


class StateLogger:
    """Structured logger bound to one ActiveMQArtemis custom resource."""

    def __init__(self, logger: logging.Logger, custom_resource: dict[str, Any]):
        self.logger = logger
        self.custom_resource = custom_resource

    def _emit(self, level: int, message: str, event: str, reason: str, **kwargs: Any) -> None:
        meta = self.custom_resource.get("metadata", {})
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=KIND_ACTIVEMQ_ARTEMIS,
            resource_name=meta.get("name", "unknown"),
            namespace=meta.get("namespace", "default"),
            uid=meta.get("uid", "unknown"),
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def info(self, message: str, reason: str = "Info", **kwargs: Any) -> None:
        self._emit(logging.INFO, message, "info", reason, **kwargs)

    def warning(self, message: str, reason: str = "Warning", **kwargs: Any) -> None:
        self._emit(logging.WARNING, message, "warning", reason, **kwargs)

    def error(
        self,
        message: str,
        error: Exception | None = None,
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error, attaching the sanitized exception text when given."""
        from .utils.errors import sanitize_exception

        if error is not None:
            kwargs["error"] = sanitize_exception(error)
            kwargs["error_type"] = type(error).__name__
        self._emit(logging.ERROR, message, "error", reason, **kwargs)
