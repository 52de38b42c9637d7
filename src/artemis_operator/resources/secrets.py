"""Managers for the broker credential secrets."""

from __future__ import annotations

from typing import Any

from kubernetes import client

from ..builders import names
from ..builders.secret import new_cluster_secret_for_cr, new_user_secret_for_cr
from ..constants import FIELD_MANAGER
from .base import ResourceManager


class _SecretManager(ResourceManager):
    def _read(self, namespace: str, name: str) -> client.V1Secret:
        return self.cluster.core.read_namespaced_secret(name=name, namespace=namespace)

    def _create(self, namespace: str, body: client.V1Secret) -> client.V1Secret:
        return self.cluster.core.create_namespaced_secret(
            namespace=namespace,
            body=body,
            field_manager=FIELD_MANAGER,
        )


class UserSecretManager(_SecretManager):
    """User credential secret manager."""

    kind = "UserSecret"

    def name_for(self, cr_name: str) -> str:
        return names.user_secret_name(cr_name)

    def definition_for(self, custom_resource: dict[str, Any]) -> client.V1Secret:
        return new_user_secret_for_cr(custom_resource)


class ClusterSecretManager(_SecretManager):
    """Cluster-internal credential secret manager."""

    kind = "ClusterSecret"

    def name_for(self, cr_name: str) -> str:
        return names.cluster_secret_name(cr_name)

    def definition_for(self, custom_resource: dict[str, Any]) -> client.V1Secret:
        return new_cluster_secret_for_cr(custom_resource)
