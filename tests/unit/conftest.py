"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any
from unittest.mock import MagicMock, Mock

import kopf
import pytest
from kubernetes import client
from kubernetes.client.exceptions import ApiException

from artemis_operator.builders import names
from artemis_operator.builders.secret import new_cluster_secret_for_cr, new_user_secret_for_cr
from artemis_operator.builders.service import (
    default_ports,
    new_headless_service_for_cr,
    new_ping_service_for_cr,
)
from artemis_operator.builders.statefulset import new_statefulset_for_cr
from artemis_operator.context import ReconcileContext
from artemis_operator.machine import BrokerMachine
from artemis_operator.resources.base import ClusterClient
from artemis_operator.states import ResourceKind
from artemis_operator.utils.errors import ResourceCreationError, ResourceRetrievalError

_NAMES = {
    ResourceKind.WORKLOAD: names.statefulset_name,
    ResourceKind.HEADLESS_SERVICE: names.headless_service_name,
    ResourceKind.DISCOVERY_SERVICE: names.ping_service_name,
    ResourceKind.USER_SECRET: names.user_secret_name,
    ResourceKind.CLUSTER_SECRET: names.cluster_secret_name,
}

_DEFINITIONS = {
    ResourceKind.WORKLOAD: new_statefulset_for_cr,
    ResourceKind.HEADLESS_SERVICE: lambda cr: new_headless_service_for_cr(cr, default_ports(cr)),
    ResourceKind.DISCOVERY_SERVICE: new_ping_service_for_cr,
    ResourceKind.USER_SECRET: new_user_secret_for_cr,
    ResourceKind.CLUSTER_SECRET: new_cluster_secret_for_cr,
}


class FakeManager:
    """In-memory stand-in for one resource manager.

    Objects live in ``objects`` keyed by name. ``retrieve_status`` and
    ``create_status`` force API failures with the given HTTP status.
    """

    def __init__(self, kind: ResourceKind):
        self.kind = kind
        self.objects: dict[str, Any] = {}
        self.retrieve_status: int | None = None
        self.create_status: int | None = None
        self.create_calls: list[str] = []
        self.update = Mock(side_effect=lambda obj: obj)

    def name_for(self, cr_name: str) -> str:
        return _NAMES[self.kind](cr_name)

    def definition_for(self, custom_resource: dict[str, Any]) -> Any:
        return _DEFINITIONS[self.kind](custom_resource)

    def retrieve(self, namespace: str, name: str) -> Any:
        if self.retrieve_status is not None:
            raise ResourceRetrievalError(self.kind.value, name, ApiException(status=self.retrieve_status))
        if name not in self.objects:
            raise ResourceRetrievalError(self.kind.value, name, ApiException(status=404, reason="Not Found"))
        return self.objects[name]

    def create(self, custom_resource: dict[str, Any], definition: Any) -> Any:
        name = definition.metadata.name
        self.create_calls.append(name)
        status = self.create_status
        if status is None and name in self.objects:
            status = 409
        if status is not None:
            raise ResourceCreationError(self.kind.value, name, ApiException(status=status))
        self.objects[name] = definition
        return definition


def make_custom_resource(
    name: str = "ex-aao",
    namespace: str = "test",
    size: int | None = 1,
    uid: str = "uid-1",
    generation: int = 1,
    **deployment_plan: Any,
) -> dict[str, Any]:
    """Build an ActiveMQArtemis body as kopf hands it to handlers."""
    plan = dict(deployment_plan)
    if size is not None:
        plan["size"] = size
    return {
        "apiVersion": "broker.amq.io/v1alpha1",
        "kind": "ActiveMQArtemis",
        "metadata": {"name": name, "namespace": namespace, "uid": uid, "generation": generation},
        "spec": {"deploymentPlan": plan},
        "status": {},
    }


def mark_ready(managers: dict[ResourceKind, FakeManager], custom_resource: dict[str, Any], ready: int) -> None:
    """Set the ready replica count of the stored StatefulSet."""
    workload = managers[ResourceKind.WORKLOAD]
    statefulset = workload.objects[workload.name_for(custom_resource["metadata"]["name"])]
    statefulset.status = client.V1StatefulSetStatus(replicas=ready, ready_replicas=ready)


@pytest.fixture(autouse=True)
def kopf_event(monkeypatch: pytest.MonkeyPatch) -> Mock:
    """Capture events instead of posting them to a cluster."""
    event = Mock()
    monkeypatch.setattr(kopf, "event", event)
    return event


@pytest.fixture(autouse=True)
def no_rate_limit(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("artemis_operator.utils.rate_limit._K8S_RATE_LIMIT_PER_SECOND", 1e9)


@pytest.fixture
def custom_resource() -> dict[str, Any]:
    return make_custom_resource()


@pytest.fixture
def cluster() -> ClusterClient:
    return ClusterClient(apps=MagicMock(), core=MagicMock(), custom_objects=MagicMock())


@pytest.fixture
def managers() -> dict[ResourceKind, FakeManager]:
    return {kind: FakeManager(kind) for kind in ResourceKind}


@pytest.fixture
def status_updater() -> Mock:
    return Mock(return_value={"ready": [], "starting": [], "stopped": []})


@pytest.fixture
def machine(
    custom_resource: dict[str, Any],
    cluster: ClusterClient,
    managers: dict[ResourceKind, FakeManager],
    status_updater: Mock,
) -> BrokerMachine:
    return BrokerMachine(
        ReconcileContext(custom_resource, cluster),
        managers=managers,
        status_updater=status_updater,
    )
