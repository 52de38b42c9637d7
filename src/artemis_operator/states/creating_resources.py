"""The creating-resources lifecycle state.

Entered whenever the Kubernetes resources of a broker deployment have to be
created. Each dependent resource is retrieved by its canonical name and
created when absent; a StepFlags bit records every resource confirmed present
during this activation. The state advances to scaling only once the
StatefulSet and both services are confirmed, and otherwise asks for a fixed
delay requeue and retries whatever is still missing.
"""

from __future__ import annotations

from typing import NamedTuple

from ..builders import names
from ..builders.broker import deployment_size
from ..constants import REQUEUE_DELAY_SECONDS
from ..utils.errors import (
    ResourceCreationError,
    ResourceRetrievalError,
    StepErrors,
    StepResult,
)
from ..utils.events import emit_resource_created
from .base import BrokerState
from .ids import StateID
from .steps import ResourceKind, StepFlags


class GeneratedNames(NamedTuple):
    """Canonical names and labels derived from the custom resource name."""

    resources: dict[ResourceKind, str]
    pod_template: str
    labels: dict[str, str]


class CreatingResourcesState(BrokerState):
    """Creates the StatefulSet, services and secrets of a broker deployment."""

    state_id = StateID.CREATING_RESOURCES

    def __init__(self, machine):
        super().__init__(machine)
        self.steps_complete = StepFlags.NONE

    def enter(self, previous_state_id: StateID) -> None:
        """Create all missing resources when coming from NOT_CREATED.

        Other predecessors do nothing yet; the first ``update`` finds and
        creates what is missing.

        Raises:
            StepErrors: If any resource could not be created; every step is
                attempted before raising
        """
        super().enter(previous_state_id)

        if previous_state_id == StateID.NOT_CREATED:
            self.steps_complete = StepFlags.NONE
            results = self.create_missing()
            if any(result.failed for result in results):
                raise StepErrors(results)

    def generate_names(self) -> GeneratedNames:
        """Canonical names of every dependent resource, the pod template and the labels."""
        cr_name = self.context.name
        return GeneratedNames(
            resources={kind: self.machine.managers[kind].name_for(cr_name) for kind in ResourceKind},
            pod_template=names.pod_name(cr_name),
            labels=names.labels(cr_name),
        )

    def create_missing(self) -> list[StepResult]:
        """Retrieve each dependent resource and create the absent ones.

        Steps are independent: a failure on one resource does not stop the
        others from being attempted.
        """
        # Definitions embed these names, so they are computed up front
        resource_names = self.generate_names().resources
        return [self._ensure(kind, resource_names[kind]) for kind in ResourceKind]

    def _ensure(self, kind: ResourceKind, name: str) -> StepResult:
        manager = self.machine.managers[kind]
        try:
            manager.retrieve(self.context.namespace, name)
        except ResourceRetrievalError as retrieval_error:
            # Any retrieval failure, not only a 404, is treated as absent
            if not retrieval_error.not_found:
                self.log.warning(
                    f"Retrieving {kind.value} failed, attempting creation",
                    reason="RetrieveFailed",
                    resource=name,
                    error=str(retrieval_error.cause),
                )
            try:
                manager.create(self.custom_resource, manager.definition_for(self.custom_resource))
            except ResourceCreationError as creation_error:
                self.log.error(
                    f"Failed to create {kind.value}",
                    error=creation_error,
                    reason="CreationFailed",
                    resource=name,
                )
                return StepResult(kind, error=creation_error, retrieval_error=retrieval_error)

            self.steps_complete |= kind.flag
            emit_resource_created(self.custom_resource, kind.value, name)
            return StepResult(kind, created=True, retrieval_error=retrieval_error)

        self.steps_complete |= kind.flag
        return StepResult(kind)

    @property
    def ready(self) -> bool:
        """True once the StatefulSet and both services are confirmed."""
        return self.steps_complete.has(StepFlags.GATING)

    def update(self) -> StateID:
        """Advance to SCALING once the gating resources exist, else retry creation.

        Raises:
            WorkloadUpdateError: If persisting a drift correction fails; the
                state does not change on that tick
        """
        self.log.info("Updating CreatingResourcesState", reason="StateUpdate")

        next_state_id = self.id
        try:
            workload = self.fetch_workload()
            if workload is not None and self.ready:
                self.correct_drift(workload)
                if deployment_size(self.custom_resource) > 0:
                    next_state_id = StateID.SCALING
            else:
                self.context.result.request_requeue(REQUEUE_DELAY_SECONDS)
                self.create_missing()
                self.log.info(
                    f"CreatingResourcesState requesting reconcile requeue for "
                    f"{REQUEUE_DELAY_SECONDS:g} seconds due to k8s resources not created",
                    reason="Requeue",
                    steps_complete=int(self.steps_complete),
                )
        finally:
            self.refresh_status()

        return next_state_id
