"""Handler for ActiveMQArtemis CRD."""

from __future__ import annotations

from typing import Any

import kopf

from ..constants import KIND_ACTIVEMQ_ARTEMIS, REQUEUE_DELAY_SECONDS
from ..context import NamespacedName
from ..machine import MachineRegistry
from ..resources.base import ClusterClient, get_cluster_client
from ..states import StateID
from ..utils.conditions import (
    set_ready_condition,
    set_resources_created_condition,
    set_scaling_condition,
)
from ..utils.errors import (
    InvalidNameError,
    StepErrors,
    WorkloadUpdateError,
    sanitize_dict,
    sanitize_exception,
)
from ..utils.events import emit_reconcile_started, emit_state_changed
from .base import BaseHandler


def conditions_for_state(
    conditions: list[dict[str, Any]],
    state_id: StateID,
    observed_generation: int | None = None,
) -> list[dict[str, Any]]:
    """Derive the status conditions of a lifecycle state."""
    created = state_id in (StateID.SCALING, StateID.CONTAINERS_RUNNING)
    running = state_id == StateID.CONTAINERS_RUNNING
    conditions = set_resources_created_condition(
        conditions,
        created,
        "All broker resources exist" if created else "Creating broker resources",
        observed_generation,
    )
    conditions = set_scaling_condition(
        conditions,
        state_id == StateID.SCALING,
        "Waiting for brokers to become ready" if state_id == StateID.SCALING else "No scaling in progress",
        observed_generation,
    )
    return set_ready_condition(
        conditions,
        running,
        "All brokers are running" if running else "Brokers are not ready",
        observed_generation,
    )


class BrokerHandler(BaseHandler):
    """Handler for ActiveMQArtemis resources.

    Every trigger runs exactly one tick of the resource's state machine and
    maps the requeue directive onto a kopf temporary error.
    """

    def __init__(
        self,
        registry: MachineRegistry | None = None,
        cluster: ClusterClient | None = None,
    ):
        super().__init__(KIND_ACTIVEMQ_ARTEMIS)
        self.registry = registry or MachineRegistry()
        self._cluster = cluster

    @property
    def cluster(self) -> ClusterClient:
        if self._cluster is None:
            self._cluster = get_cluster_client()
        return self._cluster

    def validate(self, body: dict[str, Any], spec: dict[str, Any]) -> None:
        deployment_plan = spec.get("deploymentPlan") or {}
        size = deployment_plan.get("size", 1)
        if not isinstance(size, int) or isinstance(size, bool) or size < 0:
            self.handle_validation_error(body, "deploymentPlan.size must be a non-negative integer")

    def reconcile(
        self,
        body: dict[str, Any],
        spec: dict[str, Any],
        meta: dict[str, Any],
        status: dict[str, Any],
        patch: kopf.Patch,
    ) -> StateID:
        """Run one reconcile tick for an ActiveMQArtemis.

        Raises:
            kopf.TemporaryError: When the tick requested a requeue or failed
            kopf.PermanentError: When the spec is invalid
        """
        self.validate(body, spec)

        custom_resource = dict(body)
        namespaced_name = NamespacedName.from_body(custom_resource)

        with self.registry.locked(namespaced_name):
            machine = self.registry.machine_for(custom_resource, self.cluster)
            machine.context.reset_result()
            previous_state_id = machine.current_id
            if previous_state_id is None:
                emit_reconcile_started(body)
                self.log_info(meta, "Reconcile started", reason="ReconcileStarted", spec=sanitize_dict(dict(spec)))
            try:
                state_id = machine.tick()
            except StepErrors as e:
                # Entering creation left some resources missing, the next
                # update retries them
                self.log_warning(
                    meta,
                    str(e),
                    reason="ResourcesPending",
                    failed=[r.kind.value for r in e.results if r.failed],
                    retrieval_errors=[sanitize_exception(err) for err in e.retrieval_errors],
                )
                machine.context.result.request_requeue(REQUEUE_DELAY_SECONDS)
                state_id = StateID(machine.current_id)
            except WorkloadUpdateError as e:
                message = self.handle_reconciliation_error(
                    body,
                    patch,
                    e,
                    condition_fn=lambda conditions, msg: set_ready_condition(conditions, False, msg),
                )
                raise kopf.TemporaryError(message, delay=REQUEUE_DELAY_SECONDS) from e
            except InvalidNameError as e:
                # Generated names that cannot be valid Kubernetes names
                self.handle_validation_error(body, str(e))
            result = machine.context.result

        # Owned objects are not watched, so a state change schedules the next
        # tick itself until the brokers are running
        if previous_state_id != state_id and state_id != StateID.CONTAINERS_RUNNING and not result.requeue:
            result.request_requeue(REQUEUE_DELAY_SECONDS)

        if previous_state_id is not None and previous_state_id != state_id:
            emit_state_changed(body, StateID(previous_state_id).display_name, state_id.display_name)
            self.log_info(
                meta,
                f"State changed to {state_id.display_name}",
                reason="StateChanged",
                previous=StateID(previous_state_id).display_name,
            )

        conditions = conditions_for_state(list(status.get("conditions", [])), state_id, meta.get("generation"))
        self.update_resource_status(
            patch,
            meta,
            {"stateId": int(state_id), "stateName": state_id.display_name, "conditions": conditions},
        )

        if result.requeue:
            raise kopf.TemporaryError(
                f"{KIND_ACTIVEMQ_ARTEMIS} {namespaced_name} is {state_id.display_name}, requeueing",
                delay=result.requeue_after,
            )
        return state_id

    def forget(self, meta: dict[str, Any]) -> None:
        """Drop the state machine of a deleted resource."""
        namespaced_name = NamespacedName(meta.get("namespace", "default"), meta["name"])
        self.registry.forget(namespaced_name)
        self.log_info(meta, f"{KIND_ACTIVEMQ_ARTEMIS} {namespaced_name} deleted", reason="Deleted")
