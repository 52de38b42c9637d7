"""Base retrieve/create protocol shared by every dependent resource manager."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from kubernetes import client, config
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import HTTPError

from ..builders.owner import set_owner
from ..utils.errors import ResourceCreationError, ResourceRetrievalError
from ..utils.rate_limit import rate_limit_k8s

logger = logging.getLogger(__name__)


@dataclass
class ClusterClient:
    """The Kubernetes API groups used by the operator."""

    apps: client.AppsV1Api = field(default_factory=client.AppsV1Api)
    core: client.CoreV1Api = field(default_factory=client.CoreV1Api)
    custom_objects: client.CustomObjectsApi = field(default_factory=client.CustomObjectsApi)


def get_cluster_client() -> ClusterClient:
    """Load in-cluster configuration, falling back to kubeconfig."""
    try:
        config.load_incluster_config()
    except config.ConfigException:
        config.load_kube_config()

    return ClusterClient()


class ResourceManager:
    """Retrieves and creates one kind of dependent resource by canonical name.

    Subclasses provide the canonical name, the desired definition and the two
    API calls; this class turns API failures into operator error types.
    """

    kind: str = "Resource"

    def __init__(self, cluster: ClusterClient):
        self.cluster = cluster

    def name_for(self, cr_name: str) -> str:
        raise NotImplementedError

    def definition_for(self, custom_resource: dict[str, Any]) -> Any:
        raise NotImplementedError

    def _read(self, namespace: str, name: str) -> Any:
        raise NotImplementedError

    def _create(self, namespace: str, body: Any) -> Any:
        raise NotImplementedError

    def retrieve(self, namespace: str, name: str) -> Any:
        """Read the live object.

        Raises:
            ResourceRetrievalError: For any API or transport failure, including 404
        """
        try:
            return rate_limit_k8s(self._read)(namespace, name)
        except (ApiException, HTTPError) as e:
            raise ResourceRetrievalError(self.kind, name, e) from e

    def create(self, custom_resource: dict[str, Any], definition: Any) -> Any:
        """Create the object owned by the custom resource.

        Raises:
            ResourceCreationError: For any API or transport failure, including 409 conflicts
        """
        namespace = custom_resource["metadata"].get("namespace", "default")
        set_owner(definition, custom_resource)
        try:
            created = rate_limit_k8s(self._create)(namespace, definition)
        except (ApiException, HTTPError) as e:
            raise ResourceCreationError(self.kind, definition.metadata.name, e) from e
        logger.info(f"Created {self.kind} {namespace}/{definition.metadata.name}")
        return created
