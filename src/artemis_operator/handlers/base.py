"""Base handler class with common functionality for CRD handlers."""

from __future__ import annotations

import logging
from typing import Any, Callable

import kopf

from ..constants import CONTROLLER_NAME
from ..logging import log_resource_event
from ..utils.errors import sanitize_exception
from ..utils.events import emit_reconcile_failed


class BaseHandler:
    """Base class for CRD handlers with common functionality."""

    def __init__(self, kind: str):
        """Initialize base handler.

        Args:
            kind: The Kubernetes resource kind (e.g., "ActiveMQArtemis")
        """
        self.kind = kind
        self.logger = logging.getLogger(__name__)

    def _get_resource_context(self, meta: dict[str, Any]) -> dict[str, Any]:
        return {
            "name": meta.get("name", "unknown"),
            "namespace": meta.get("namespace", "default"),
            "uid": meta.get("uid", "unknown"),
        }

    def _log(
        self,
        level: int,
        meta: dict[str, Any],
        message: str,
        event: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        ctx = self._get_resource_context(meta)
        log_resource_event(
            self.logger,
            controller=CONTROLLER_NAME,
            resource_kind=self.kind,
            resource_name=ctx["name"],
            namespace=ctx["namespace"],
            uid=ctx["uid"],
            event=event,
            reason=reason,
            message=message,
            level=level,
            **kwargs,
        )

    def log_info(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "info",
        reason: str = "Info",
        **kwargs: Any,
    ) -> None:
        """Log an info-level structured log message."""
        self._log(logging.INFO, meta, message, event, reason, **kwargs)

    def log_warning(
        self,
        meta: dict[str, Any],
        message: str,
        event: str = "warning",
        reason: str = "Warning",
        **kwargs: Any,
    ) -> None:
        """Log a warning-level structured log message."""
        self._log(logging.WARNING, meta, message, event, reason, **kwargs)

    def log_error(
        self,
        meta: dict[str, Any],
        message: str,
        error: Exception | None = None,
        event: str = "error",
        reason: str = "Error",
        **kwargs: Any,
    ) -> None:
        """Log an error-level structured log message.

        Args:
            meta: Kubernetes resource metadata
            message: Log message
            error: Optional exception to include sanitized error details
            event: Event type (default: "error")
            reason: Reason for the event (default: "Error")
            **kwargs: Additional fields to include in the log
        """
        log_data = kwargs.copy()

        if error is not None:
            log_data["error"] = sanitize_exception(error)
            log_data["error_type"] = type(error).__name__

        self._log(logging.ERROR, meta, message, event, reason, **log_data)

    def handle_validation_error(self, body: dict[str, Any], error_msg: str) -> None:
        """Handle validation error consistently.

        Raises:
            kopf.PermanentError: Always, retrying cannot fix an invalid spec
        """
        from ..utils.events import emit_event

        self.log_error(body.get("metadata", {}), error_msg, reason="ValidationFailed")
        emit_event(body, "ValidateFailed", error_msg, type_="Warning")
        raise kopf.PermanentError(error_msg)

    def handle_reconciliation_error(
        self,
        body: dict[str, Any],
        patch: kopf.Patch,
        error: Exception,
        condition_fn: Callable[[list[dict[str, Any]], str], list[dict[str, Any]]] | None = None,
    ) -> str:
        """Log, emit and record a failed reconciliation.

        Args:
            body: Custom resource body
            patch: Kopf patch object
            error: Exception that occurred
            condition_fn: Optional function to set a condition from the message

        Returns:
            The sanitized failure message
        """
        meta = body.get("metadata", {})
        message = f"Reconciliation failed: {sanitize_exception(error)}"

        self.log_error(meta, message, error=error, reason="ReconciliationFailed")
        emit_reconcile_failed(body, message)

        status_update: dict[str, Any] = {"observedGeneration": meta.get("generation", 0)}
        if condition_fn is not None:
            conditions = (body.get("status") or {}).get("conditions", [])
            status_update["conditions"] = condition_fn(list(conditions), message)
        patch.status.update(status_update)
        return message

    def update_resource_status(
        self,
        patch: kopf.Patch,
        meta: dict[str, Any],
        status_data: dict[str, Any] | None = None,
    ) -> None:
        """Update resource status with common fields."""
        patch.status.update({
            "observedGeneration": meta.get("generation", 0),
            **(status_data or {}),
        })
