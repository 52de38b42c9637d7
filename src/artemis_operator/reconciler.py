"""Drift detection and correction for an existing broker StatefulSet."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes import client

from .builders import names
from .builders.broker import create_broker_config_from_spec
from .constants import BROKER_CONTAINER_NAME


class StatefulSetReconciler:
    """Brings a live StatefulSet in line with its ActiveMQArtemis spec.

    ``process`` mutates the live object in place and returns how many
    corrections it applied; the caller persists the object when the count is
    nonzero.
    """

    def __init__(self) -> None:
        self.logger = logging.getLogger(__name__)
        self.statefulset_updates = 0

    def process(self, custom_resource: dict[str, Any], statefulset: client.V1StatefulSet) -> int:
        self.statefulset_updates = 0
        config = create_broker_config_from_spec(custom_resource.get("spec") or {})
        cr_name = custom_resource["metadata"]["name"]

        self._reconcile_size(statefulset, config["size"])
        self._reconcile_image(statefulset, config["image"])
        self._reconcile_labels(statefulset, names.labels(cr_name))

        return self.statefulset_updates

    def _reconcile_size(self, statefulset: client.V1StatefulSet, size: int) -> None:
        if statefulset.spec.replicas != size:
            self.logger.info(
                f"Drift detected: StatefulSet {statefulset.metadata.name} replicas "
                f"{statefulset.spec.replicas} -> {size}"
            )
            statefulset.spec.replicas = size
            self.statefulset_updates += 1

    def _reconcile_image(self, statefulset: client.V1StatefulSet, image: str) -> None:
        for container in statefulset.spec.template.spec.containers or []:
            if container.name == BROKER_CONTAINER_NAME and container.image != image:
                self.logger.info(
                    f"Drift detected: StatefulSet {statefulset.metadata.name} image "
                    f"{container.image} -> {image}"
                )
                container.image = image
                self.statefulset_updates += 1

    def _reconcile_labels(self, statefulset: client.V1StatefulSet, labels: dict[str, str]) -> None:
        template_meta = statefulset.spec.template.metadata
        current = template_meta.labels or {}
        missing = {k: v for k, v in labels.items() if current.get(k) != v}
        if missing:
            self.logger.info(f"Drift detected: StatefulSet {statefulset.metadata.name} pod labels")
            template_meta.labels = {**current, **missing}
            self.statefulset_updates += 1
