"""Shared behaviour of the ActiveMQArtemis lifecycle states."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from kubernetes import client

from ..fsm.state import State
from ..logging import StateLogger
from ..utils.errors import ResourceRetrievalError, WorkloadUpdateError
from ..utils.events import emit_drift_corrected
from .steps import ResourceKind

if TYPE_CHECKING:
    from ..context import ReconcileContext
    from ..machine import BrokerMachine


class BrokerState(State):
    """A lifecycle state bound to one ActiveMQArtemis machine."""

    def __init__(self, machine: BrokerMachine):
        self.machine = machine
        self.namespaced_name = machine.context.namespaced_name
        self.logger = logging.getLogger(type(self).__module__)

    @property
    def context(self) -> ReconcileContext:
        return self.machine.context

    @property
    def custom_resource(self) -> dict[str, Any]:
        return self.machine.context.custom_resource

    @property
    def log(self) -> StateLogger:
        return StateLogger(self.logger, self.custom_resource)

    def enter(self, previous_state_id: Any) -> None:
        self.log.info(f"Entering {self.name} from {previous_state_id.name}", reason="StateEnter")

    def exit(self) -> None:
        self.log.info(f"Exiting {self.name}", reason="StateExit")

    def fetch_workload(self) -> client.V1StatefulSet | None:
        """Live StatefulSet, or None when it cannot be read for any reason."""
        manager = self.machine.managers[ResourceKind.WORKLOAD]
        name = manager.name_for(self.context.name)
        try:
            return manager.retrieve(self.context.namespace, name)
        except ResourceRetrievalError as e:
            self.log.error("Failed to get StatefulSet", error=e, reason="WorkloadNotFound", statefulset=name)
            return None

    def correct_drift(self, workload: client.V1StatefulSet) -> int:
        """Apply drift corrections to the live workload and persist them.

        Raises:
            WorkloadUpdateError: If persisting the corrected object fails
        """
        updates = self.machine.reconciler.process(self.custom_resource, workload)
        if updates > 0:
            try:
                self.machine.managers[ResourceKind.WORKLOAD].update(workload)
            except WorkloadUpdateError as e:
                self.log.error(
                    "Failed to update StatefulSet",
                    error=e,
                    reason="UpdateFailed",
                    statefulset=workload.metadata.name,
                )
                raise
            emit_drift_corrected(self.custom_resource, workload.metadata.name, updates)
        return updates

    def refresh_status(self) -> None:
        self.machine.update_status()
