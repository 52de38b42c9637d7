"""Managers for the broker headless and discovery services."""

from __future__ import annotations

from typing import Any

from kubernetes import client

from ..builders import names
from ..builders.service import default_ports, new_headless_service_for_cr, new_ping_service_for_cr
from ..constants import FIELD_MANAGER
from .base import ResourceManager


class _ServiceManager(ResourceManager):
    def _read(self, namespace: str, name: str) -> client.V1Service:
        return self.cluster.core.read_namespaced_service(name=name, namespace=namespace)

    def _create(self, namespace: str, body: client.V1Service) -> client.V1Service:
        return self.cluster.core.create_namespaced_service(
            namespace=namespace,
            body=body,
            field_manager=FIELD_MANAGER,
        )


class HeadlessServiceManager(_ServiceManager):
    """Headless service manager."""

    kind = "HeadlessService"

    def name_for(self, cr_name: str) -> str:
        return names.headless_service_name(cr_name)

    def definition_for(self, custom_resource: dict[str, Any]) -> client.V1Service:
        return new_headless_service_for_cr(custom_resource, default_ports(custom_resource))


class PingServiceManager(_ServiceManager):
    """Discovery (ping) service manager."""

    kind = "PingService"

    def name_for(self, cr_name: str) -> str:
        return names.ping_service_name(cr_name)

    def definition_for(self, custom_resource: dict[str, Any]) -> client.V1Service:
        return new_ping_service_for_cr(custom_resource)
