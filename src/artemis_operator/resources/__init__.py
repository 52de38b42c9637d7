"""Retrieve and create the cluster objects owned by an ActiveMQArtemis."""

from .base import ClusterClient, ResourceManager, get_cluster_client
from .pods import classify_pods, update_pod_status
from .secrets import ClusterSecretManager, UserSecretManager
from .services import HeadlessServiceManager, PingServiceManager
from .statefulsets import StatefulSetManager

__all__ = [
    "ClusterClient",
    "ResourceManager",
    "get_cluster_client",
    "classify_pods",
    "update_pod_status",
    "StatefulSetManager",
    "HeadlessServiceManager",
    "PingServiceManager",
    "UserSecretManager",
    "ClusterSecretManager",
]
