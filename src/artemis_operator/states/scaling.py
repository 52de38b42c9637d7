"""Scaling and steady-state lifecycle states."""

from __future__ import annotations

from kubernetes import client

from ..builders.broker import deployment_size
from ..constants import REQUEUE_DELAY_SECONDS
from .base import BrokerState
from .ids import StateID


def ready_replicas(workload: client.V1StatefulSet) -> int:
    return (workload.status.ready_replicas or 0) if workload.status else 0


class ScalingState(BrokerState):
    """Waits until the number of ready brokers matches the requested size."""

    state_id = StateID.SCALING

    def update(self) -> StateID:
        self.log.info("Updating ScalingState", reason="StateUpdate")

        next_state_id = self.id
        try:
            workload = self.fetch_workload()
            if workload is None:
                return StateID.CREATING_RESOURCES

            updates = self.correct_drift(workload)
            desired = deployment_size(self.custom_resource)
            ready = ready_replicas(workload)
            if updates == 0 and ready == desired:
                next_state_id = StateID.CONTAINERS_RUNNING
            else:
                self.context.result.request_requeue(REQUEUE_DELAY_SECONDS)
                self.log.info(
                    f"Waiting for {desired} ready broker(s), {ready} ready",
                    reason="Requeue",
                )
        finally:
            self.refresh_status()

        return next_state_id


class ContainersRunningState(BrokerState):
    """All brokers are running; drift sends the deployment back to scaling."""

    state_id = StateID.CONTAINERS_RUNNING

    def update(self) -> StateID:
        self.log.info("Updating ContainersRunningState", reason="StateUpdate")

        next_state_id = self.id
        try:
            workload = self.fetch_workload()
            if workload is None:
                return StateID.CREATING_RESOURCES

            updates = self.correct_drift(workload)
            if updates > 0 or ready_replicas(workload) != deployment_size(self.custom_resource):
                next_state_id = StateID.SCALING
        finally:
            self.refresh_status()

        return next_state_id
