"""Main entry point for the ActiveMQ Artemis Operator."""

from __future__ import annotations

import os
from typing import Any

import kopf

from . import health
from . import logging as structured_logging
from .constants import (
    API_GROUP_VERSION,
    DRIFT_CHECK_INTERVAL_SECONDS,
    KIND_ACTIVEMQ_ARTEMIS,
)
from .handlers.broker import BrokerHandler

broker_handler = BrokerHandler()


@kopf.on.startup()
def configure(settings: kopf.OperatorSettings, **_: Any) -> None:
    """Configure the operator."""
    # Set up structured JSON logging
    structured_logging.setup_structured_logging()

    # Use AnnotationsProgressStorage to avoid conflicts with status updates
    settings.persistence.progress_storage = kopf.AnnotationsProgressStorage()
    settings.persistence.diffbase_storage = kopf.AnnotationsDiffBaseStorage()

    settings.posting.level = 0
    settings.networking.request_timeout = 30.0
    settings.execution.max_workers = 4

    health_port = int(os.getenv("HEALTH_PORT", "8080"))
    health.start_health_server(health_port)


@kopf.on.create(API_GROUP_VERSION, KIND_ACTIVEMQ_ARTEMIS)
@kopf.on.update(API_GROUP_VERSION, KIND_ACTIVEMQ_ARTEMIS)
@kopf.on.resume(API_GROUP_VERSION, KIND_ACTIVEMQ_ARTEMIS)
@kopf.timer(API_GROUP_VERSION, KIND_ACTIVEMQ_ARTEMIS, interval=DRIFT_CHECK_INTERVAL_SECONDS)
def handle_broker(
    body: dict[str, Any],
    spec: dict[str, Any],
    meta: dict[str, Any],
    status: dict[str, Any],
    patch: kopf.Patch,
    **kwargs: Any,
) -> None:
    """Reconcile an ActiveMQArtemis resource."""
    broker_handler.reconcile(body, spec, meta, status, patch)


@kopf.on.delete(API_GROUP_VERSION, KIND_ACTIVEMQ_ARTEMIS, optional=True)
def handle_broker_delete(meta: dict[str, Any], **kwargs: Any) -> None:
    """Forget a deleted ActiveMQArtemis.

    Owned resources are garbage collected by Kubernetes through their owner
    references.
    """
    broker_handler.forget(meta)


def run() -> None:
    """Run the operator, watching WATCH_NAMESPACE or the whole cluster."""
    namespace = os.getenv("WATCH_NAMESPACE", "")
    if namespace:
        kopf.run(namespaces=[namespace])
    else:
        kopf.run(clusterwide=True)
