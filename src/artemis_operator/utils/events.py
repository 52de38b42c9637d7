"""Utilities for emitting Kubernetes events."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import (
    EVENT_REASON_DRIFT_CORRECTED,
    EVENT_REASON_RECONCILE_FAILED,
    EVENT_REASON_RECONCILE_STARTED,
    EVENT_REASON_RESOURCE_CREATED,
    EVENT_REASON_STATE_CHANGED,
)


def emit_event(
    body: dict[str, Any],
    reason: str,
    message: str,
    type_: str = "Normal",
) -> None:
    """Emit a Kubernetes event.

    Args:
        body: Custom resource body the event refers to
        reason: Event reason
        message: Event message
        type_: Event type (Normal or Warning)
    """
    kopf.event(
        body,
        reason=reason,
        message=message,
        type=type_,
    )


def emit_reconcile_started(body: dict[str, Any]) -> None:
    """Emit reconcile started event."""
    emit_event(body, EVENT_REASON_RECONCILE_STARTED, "Reconciliation started")


def emit_reconcile_failed(body: dict[str, Any], message: str) -> None:
    """Emit reconcile failed event."""
    emit_event(body, EVENT_REASON_RECONCILE_FAILED, message, type_="Warning")


def emit_resource_created(body: dict[str, Any], kind: str, name: str) -> None:
    """Emit dependent resource created event."""
    emit_event(body, EVENT_REASON_RESOURCE_CREATED, f"{kind} {name} created")


def emit_drift_corrected(body: dict[str, Any], name: str, updates: int) -> None:
    """Emit drift corrected event."""
    emit_event(
        body,
        EVENT_REASON_DRIFT_CORRECTED,
        f"Applied {updates} correction(s) to StatefulSet {name}",
    )


def emit_state_changed(body: dict[str, Any], previous: str, current: str) -> None:
    """Emit lifecycle state change event."""
    emit_event(body, EVENT_REASON_STATE_CHANGED, f"State changed from {previous} to {current}")
