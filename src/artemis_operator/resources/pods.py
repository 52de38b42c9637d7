"""Projection of broker pod state onto the ActiveMQArtemis status."""

from __future__ import annotations

import logging
from typing import Any

from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ..builders import names
from ..constants import API_GROUP, API_VERSION, PLURAL_ACTIVEMQ_ARTEMIS
from ..context import NamespacedName
from ..utils.errors import sanitize_exception
from ..utils.rate_limit import rate_limit_k8s
from .base import ClusterClient

logger = logging.getLogger(__name__)


def _pod_is_ready(pod: Any) -> bool:
    if not pod.status:
        return False
    for condition in pod.status.conditions or []:
        if condition.type == "Ready":
            return condition.status == "True"
    return False


def classify_pods(pods: list[Any]) -> dict[str, list[str]]:
    """Split broker pods into ready, starting and stopped name lists."""
    pod_status: dict[str, list[str]] = {"ready": [], "starting": [], "stopped": []}
    for pod in pods:
        name = pod.metadata.name
        phase = pod.status.phase if pod.status else None
        if pod.metadata.deletion_timestamp or phase in ("Succeeded", "Failed"):
            pod_status["stopped"].append(name)
        elif phase == "Running" and _pod_is_ready(pod):
            pod_status["ready"].append(name)
        else:
            pod_status["starting"].append(name)
    for names_list in pod_status.values():
        names_list.sort()
    return pod_status


def update_pod_status(
    custom_resource: dict[str, Any],
    cluster: ClusterClient,
    namespaced_name: NamespacedName,
) -> dict[str, list[str]] | None:
    """Refresh ``status.podStatus`` of the custom resource from its live pods.

    Failures are logged and swallowed; the next reconcile retries.

    Returns:
        The projected pod status, or None if it could not be refreshed
    """
    cr_name = custom_resource["metadata"]["name"]
    try:
        pod_list = rate_limit_k8s(cluster.core.list_namespaced_pod)(
            namespace=namespaced_name.namespace,
            label_selector=names.label_selector(cr_name),
        )
        pod_status = classify_pods(pod_list.items)
        if pod_status == (custom_resource.get("status") or {}).get("podStatus"):
            return pod_status
        rate_limit_k8s(cluster.custom_objects.patch_namespaced_custom_object_status)(
            group=API_GROUP,
            version=API_VERSION,
            namespace=namespaced_name.namespace,
            plural=PLURAL_ACTIVEMQ_ARTEMIS,
            name=namespaced_name.name,
            body={"status": {"podStatus": pod_status}},
        )
        return pod_status
    except (ApiException, HTTPError) as e:
        logger.warning(f"Failed to update pod status for {namespaced_name}: {sanitize_exception(e)}")
        return None
