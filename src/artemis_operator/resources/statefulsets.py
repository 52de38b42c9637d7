"""Manager for the broker StatefulSet."""

from __future__ import annotations

from typing import Any

from kubernetes import client
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ..builders import names
from ..builders.statefulset import new_statefulset_for_cr
from ..constants import FIELD_MANAGER
from ..utils.errors import WorkloadUpdateError
from ..utils.rate_limit import rate_limit_k8s
from .base import ResourceManager


class StatefulSetManager(ResourceManager):
    """Workload manager."""

    kind = "StatefulSet"

    def name_for(self, cr_name: str) -> str:
        return names.statefulset_name(cr_name)

    def definition_for(self, custom_resource: dict[str, Any]) -> client.V1StatefulSet:
        return new_statefulset_for_cr(custom_resource)

    def _read(self, namespace: str, name: str) -> client.V1StatefulSet:
        return self.cluster.apps.read_namespaced_stateful_set(name=name, namespace=namespace)

    def _create(self, namespace: str, body: client.V1StatefulSet) -> client.V1StatefulSet:
        return self.cluster.apps.create_namespaced_stateful_set(
            namespace=namespace,
            body=body,
            field_manager=FIELD_MANAGER,
        )

    def update(self, statefulset: client.V1StatefulSet) -> client.V1StatefulSet:
        """Persist an in-place corrected StatefulSet.

        Raises:
            WorkloadUpdateError: If the API rejects the update or the call fails in transit
        """
        name = statefulset.metadata.name
        try:
            return rate_limit_k8s(self.cluster.apps.replace_namespaced_stateful_set)(
                name=name,
                namespace=statefulset.metadata.namespace,
                body=statefulset,
                field_manager=FIELD_MANAGER,
            )
        except (ApiException, HTTPError) as e:
            raise WorkloadUpdateError(name, e) from e
