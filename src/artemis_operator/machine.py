"""State machine driving the lifecycle of one ActiveMQArtemis resource."""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Any, Callable, Iterator

from .context import NamespacedName, ReconcileContext
from .fsm.machine import Machine
from .reconciler import StatefulSetReconciler
from .resources.base import ClusterClient, ResourceManager
from .resources.pods import update_pod_status
from .resources.secrets import ClusterSecretManager, UserSecretManager
from .resources.services import HeadlessServiceManager, PingServiceManager
from .resources.statefulsets import StatefulSetManager
from .states import (
    ContainersRunningState,
    CreatingResourcesState,
    NotCreatedState,
    ResourceKind,
    ScalingState,
    StateID,
)

StatusUpdater = Callable[[dict[str, Any], ClusterClient, NamespacedName], Any]


def default_managers(cluster: ClusterClient) -> dict[ResourceKind, ResourceManager]:
    return {
        ResourceKind.WORKLOAD: StatefulSetManager(cluster),
        ResourceKind.HEADLESS_SERVICE: HeadlessServiceManager(cluster),
        ResourceKind.DISCOVERY_SERVICE: PingServiceManager(cluster),
        ResourceKind.USER_SECRET: UserSecretManager(cluster),
        ResourceKind.CLUSTER_SECRET: ClusterSecretManager(cluster),
    }


class BrokerMachine(Machine):
    """Machine for one ActiveMQArtemis, starting in NOT_CREATED."""

    initial_state_id = StateID.NOT_CREATED

    def __init__(
        self,
        context: ReconcileContext,
        managers: dict[ResourceKind, ResourceManager] | None = None,
        reconciler: StatefulSetReconciler | None = None,
        status_updater: StatusUpdater = update_pod_status,
    ):
        self.context = context
        self.managers = managers if managers is not None else default_managers(context.cluster)
        self.reconciler = reconciler or StatefulSetReconciler()
        self.status_updater = status_updater
        super().__init__(
            {
                StateID.NOT_CREATED: lambda: NotCreatedState(self),
                StateID.CREATING_RESOURCES: lambda: CreatingResourcesState(self),
                StateID.SCALING: lambda: ScalingState(self),
                StateID.CONTAINERS_RUNNING: lambda: ContainersRunningState(self),
            }
        )
        missing = set(StateID) - set(self.factories)
        if missing:
            raise ValueError(f"no state registered for {sorted(s.name for s in missing)}")

    def refresh(self, custom_resource: dict[str, Any]) -> None:
        """Pick up the latest generation of the custom resource."""
        self.context.custom_resource = custom_resource

    def update_status(self) -> None:
        self.status_updater(self.context.custom_resource, self.context.cluster, self.context.namespaced_name)

    def tick(self) -> StateID:
        """Run one reconcile tick, starting the machine on the first one."""
        if self.current is None:
            self.start(self.initial_state_id)
        return StateID(self.update())


class MachineRegistry:
    """One machine per ActiveMQArtemis, kept across reconcile triggers.

    Ticks for the same resource are serialised with a per-resource lock;
    different resources share nothing and may reconcile concurrently.
    """

    def __init__(self, machine_factory: Callable[[ReconcileContext], BrokerMachine] = BrokerMachine):
        self.machine_factory = machine_factory
        self._machines: dict[NamespacedName, BrokerMachine] = {}
        self._locks: dict[NamespacedName, threading.Lock] = {}
        self._lock = threading.Lock()

    def __contains__(self, namespaced_name: NamespacedName) -> bool:
        return namespaced_name in self._machines

    @contextmanager
    def locked(self, namespaced_name: NamespacedName) -> Iterator[None]:
        with self._lock:
            lock = self._locks.setdefault(namespaced_name, threading.Lock())
        with lock:
            yield

    def machine_for(self, custom_resource: dict[str, Any], cluster: ClusterClient) -> BrokerMachine:
        """Return the machine for a custom resource, creating it on first sight.

        A custom resource recreated under the same name (new uid) gets a fresh
        machine.
        """
        namespaced_name = NamespacedName.from_body(custom_resource)
        uid = custom_resource.get("metadata", {}).get("uid")
        with self._lock:
            machine = self._machines.get(namespaced_name)
            if machine is not None and machine.context.custom_resource.get("metadata", {}).get("uid") != uid:
                machine = None
            if machine is None:
                machine = self.machine_factory(ReconcileContext(custom_resource, cluster))
                self._machines[namespaced_name] = machine
            else:
                machine.refresh(custom_resource)
        return machine

    def forget(self, namespaced_name: NamespacedName) -> None:
        with self._lock:
            self._machines.pop(namespaced_name, None)
            self._locks.pop(namespaced_name, None)
