"""Tests for the creating-resources lifecycle state."""

from __future__ import annotations

import pytest
from kubernetes.client.exceptions import ApiException
from urllib3.exceptions import ReadTimeoutError

from artemis_operator.context import ReconcileContext
from artemis_operator.machine import BrokerMachine
from artemis_operator.states import CreatingResourcesState, ResourceKind, StateID, StepFlags
from artemis_operator.utils.errors import StepErrors, WorkloadUpdateError

from conftest import make_custom_resource

GATING_KINDS = [ResourceKind.WORKLOAD, ResourceKind.HEADLESS_SERVICE, ResourceKind.DISCOVERY_SERVICE]


def event_reasons(kopf_event):
    return [call.kwargs["reason"] for call in kopf_event.call_args_list]


class TestEnter:
    """Test entering the state from each predecessor."""

    def test_enter_from_not_created_creates_everything(self, machine, managers, kopf_event):
        """Test that the first tick creates all five resources."""
        assert machine.tick() == StateID.CREATING_RESOURCES

        state = machine.current
        assert isinstance(state, CreatingResourcesState)
        assert state.steps_complete == StepFlags.ALL
        for kind, manager in managers.items():
            assert manager.create_calls == [manager.name_for("ex-aao")], kind
        assert event_reasons(kopf_event).count("ResourceCreated") == 5

    def test_enter_twice_creates_no_duplicates(self, machine, managers):
        """Test that retrieval precedes every creation attempt."""
        machine.tick()
        machine.current.enter(StateID.NOT_CREATED)

        for manager in managers.values():
            assert len(manager.create_calls) == 1
        assert machine.current.steps_complete == StepFlags.ALL

    def test_enter_with_existing_resources_sets_flags(self, machine, managers, custom_resource):
        """Test that resources found on entry count as confirmed present."""
        for manager in managers.values():
            definition = manager.definition_for(custom_resource)
            manager.objects[definition.metadata.name] = definition

        machine.tick()

        assert machine.current.steps_complete == StepFlags.ALL
        for manager in managers.values():
            assert manager.create_calls == []

    def test_enter_from_other_state_is_noop(self, machine, managers):
        """Test that only the NOT_CREATED predecessor performs work."""
        machine.start(StateID.CREATING_RESOURCES, StateID.SCALING)

        assert machine.current.steps_complete == StepFlags.NONE
        for manager in managers.values():
            assert manager.create_calls == []

    def test_enter_attempts_every_step_despite_failures(self, machine, managers):
        """Test that a failed creation does not stop the other steps."""
        managers[ResourceKind.WORKLOAD].create_status = 500

        with pytest.raises(StepErrors) as exc_info:
            machine.tick()

        errors = exc_info.value
        assert [e.kind for e in errors.errors] == ["StatefulSet"]
        assert [r.kind for r in errors.results] == list(ResourceKind)
        assert [r.created for r in errors.results] == [False, True, True, True, True]
        assert errors.retrieval_errors[0].not_found is True
        assert machine.current_id == StateID.CREATING_RESOURCES
        assert machine.current.steps_complete == StepFlags.ALL & ~StepFlags.CREATED_WORKLOAD

    def test_retrieval_error_is_treated_as_absent(self, machine, managers):
        """Test that a non-404 retrieval failure still leads to creation."""
        managers[ResourceKind.HEADLESS_SERVICE].retrieve_status = 500

        machine.tick()

        assert managers[ResourceKind.HEADLESS_SERVICE].create_calls == ["ex-aao-hdls-svc"]
        assert machine.current.steps_complete.has(StepFlags.CREATED_HEADLESS_SERVICE)

    def test_retrieval_error_on_existing_resource_reports_conflict(self, machine, managers, custom_resource):
        """Test that an unreadable existing resource surfaces as a failed step."""
        headless = managers[ResourceKind.HEADLESS_SERVICE]
        headless.objects["ex-aao-hdls-svc"] = headless.definition_for(custom_resource)
        headless.retrieve_status = 403

        with pytest.raises(StepErrors) as exc_info:
            machine.tick()

        error = exc_info.value.errors[0]
        assert error.conflict is True
        assert exc_info.value.retrieval_errors[0].not_found is False
        assert not machine.current.steps_complete.has(StepFlags.CREATED_HEADLESS_SERVICE)

    def test_generate_names(self, machine):
        """Test canonical names of every dependent resource, the pod template and labels."""
        machine.tick()

        generated = machine.current.generate_names()

        assert generated.resources == {
            ResourceKind.WORKLOAD: "ex-aao-ss",
            ResourceKind.HEADLESS_SERVICE: "ex-aao-hdls-svc",
            ResourceKind.DISCOVERY_SERVICE: "ex-aao-ping-svc",
            ResourceKind.USER_SECRET: "ex-aao-credentials-secret",
            ResourceKind.CLUSTER_SECRET: "ex-aao-netty-secret",
        }
        assert generated.pod_template == "ex-aao-container"
        assert generated.labels == {"application": "ex-aao-app", "ActiveMQArtemis": "ex-aao"}


class TestUpdate:
    """Test update ticks of the creating-resources state."""

    def test_empty_cluster_reaches_scaling_in_two_ticks(self, custom_resource, machine, managers, status_updater):
        """Test that an empty cluster converges within two ticks."""
        custom_resource["spec"]["deploymentPlan"]["size"] = 3

        assert machine.tick() == StateID.CREATING_RESOURCES
        assert machine.tick() == StateID.SCALING

        managers[ResourceKind.WORKLOAD].update.assert_not_called()
        status_updater.assert_called_once()
        assert machine.context.result.requeue is False

    def test_missing_workload_is_retried(self, machine, managers, status_updater):
        """Test that a transiently failed workload creation is retried on update."""
        workload = managers[ResourceKind.WORKLOAD]
        workload.create_status = 500
        with pytest.raises(StepErrors):
            machine.tick()

        workload.create_status = None
        machine.context.reset_result()
        assert machine.tick() == StateID.CREATING_RESOURCES

        assert machine.context.result.requeue is True
        assert machine.context.result.requeue_after == 5.0
        assert workload.create_calls == ["ex-aao-ss", "ex-aao-ss"]
        for kind in ResourceKind:
            if kind != ResourceKind.WORKLOAD:
                assert len(managers[kind].create_calls) == 1, kind
        assert machine.current.steps_complete == StepFlags.ALL
        status_updater.assert_called_once()

        machine.context.reset_result()
        assert machine.tick() == StateID.SCALING

    def test_replica_drift_is_persisted(self, machine, managers, kopf_event):
        """Test that a changed replica count is corrected before scaling."""
        machine.refresh(make_custom_resource(size=3))
        machine.tick()

        machine.refresh(make_custom_resource(size=5))
        assert machine.tick() == StateID.SCALING

        update = managers[ResourceKind.WORKLOAD].update
        update.assert_called_once()
        assert update.call_args.args[0].spec.replicas == 5
        assert "DriftCorrected" in event_reasons(kopf_event)

    def test_zero_replicas_does_not_scale(self, custom_resource, machine, status_updater):
        """Test that a size of zero never transitions to scaling."""
        custom_resource["spec"]["deploymentPlan"]["size"] = 0

        machine.tick()
        assert machine.tick() == StateID.CREATING_RESOURCES
        assert machine.tick() == StateID.CREATING_RESOURCES

        assert machine.current.steps_complete.has(StepFlags.GATING)
        assert machine.context.result.requeue is False
        assert status_updater.call_count == 2

    def test_missing_secrets_do_not_gate(self, machine, managers):
        """Test that secret bits are tracked but never gate the transition."""
        managers[ResourceKind.USER_SECRET].create_status = 500
        managers[ResourceKind.CLUSTER_SECRET].create_status = 500

        with pytest.raises(StepErrors) as exc_info:
            machine.tick()
        assert len(exc_info.value.errors) == 2

        assert machine.tick() == StateID.SCALING

    @pytest.mark.parametrize("kind", GATING_KINDS)
    def test_unset_gating_bit_requests_requeue(self, machine, managers, kind):
        """Test the requeue contract for every gating resource."""
        managers[kind].create_status = 500
        with pytest.raises(StepErrors):
            machine.tick()

        machine.context.reset_result()
        assert machine.tick() == StateID.CREATING_RESOURCES

        assert machine.context.result.requeue is True
        assert machine.context.result.requeue_after == 5.0
        assert not machine.current.steps_complete.has(kind.flag)
        assert len(managers[kind].create_calls) == 2

    def test_flags_are_never_cleared_during_activation(self, machine, managers):
        """Test that update ticks only ever add bits."""
        machine.refresh(make_custom_resource(size=0))
        machine.tick()
        before = machine.current.steps_complete

        # Everything disappears from the cluster
        for manager in managers.values():
            manager.objects.clear()
        managers[ResourceKind.USER_SECRET].create_status = 500
        machine.tick()

        assert machine.current.steps_complete & before == before

    def test_update_without_flags_rebuilds_them(self, machine, managers):
        """Test that flags lost on restart are rebuilt from the cluster."""
        machine.tick()
        machine.start(StateID.CREATING_RESOURCES, StateID.SCALING)
        create_calls = {kind: list(m.create_calls) for kind, m in managers.items()}

        assert machine.tick() == StateID.CREATING_RESOURCES
        assert machine.current.steps_complete == StepFlags.ALL
        assert {kind: m.create_calls for kind, m in managers.items()} == create_calls

        assert machine.tick() == StateID.SCALING

    def test_update_failure_aborts_tick(self, machine, managers, status_updater):
        """Test that a failed drift update keeps the state and still refreshes status."""
        machine.refresh(make_custom_resource(size=3))
        machine.tick()
        managers[ResourceKind.WORKLOAD].update.side_effect = WorkloadUpdateError(
            "ex-aao-ss", ApiException(status=500)
        )

        machine.refresh(make_custom_resource(size=5))
        with pytest.raises(WorkloadUpdateError):
            machine.tick()

        assert machine.current_id == StateID.CREATING_RESOURCES
        status_updater.assert_called_once()


class TestTransportFailures:
    """Test client transport failures against the real resource managers."""

    @pytest.fixture
    def live_machine(self, custom_resource, cluster, status_updater):
        cluster.core.read_namespaced_service.side_effect = ApiException(status=404)
        cluster.core.read_namespaced_secret.side_effect = ApiException(status=404)
        return BrokerMachine(ReconcileContext(custom_resource, cluster), status_updater=status_updater)

    def test_workload_read_timeout_does_not_stop_other_steps(self, live_machine, cluster):
        """Test that a timed out read counts as absent and every step still runs."""
        cluster.apps.read_namespaced_stateful_set.side_effect = ReadTimeoutError(None, "/apis/apps/v1", "Read timed out.")

        assert live_machine.tick() == StateID.CREATING_RESOURCES

        cluster.apps.create_namespaced_stateful_set.assert_called_once()
        assert cluster.core.create_namespaced_service.call_count == 2
        assert cluster.core.create_namespaced_secret.call_count == 2
        assert live_machine.current.steps_complete == StepFlags.ALL

    def test_workload_read_timeout_on_update_requeues(self, live_machine, cluster):
        """Test that a timed out workload read takes the not-ready path."""
        live_machine.tick()
        live_machine.context.reset_result()
        cluster.core.read_namespaced_service.side_effect = None
        cluster.core.read_namespaced_secret.side_effect = None
        cluster.apps.read_namespaced_stateful_set.side_effect = ReadTimeoutError(None, "/apis/apps/v1", "Read timed out.")
        cluster.apps.create_namespaced_stateful_set.side_effect = ApiException(status=409)

        assert live_machine.tick() == StateID.CREATING_RESOURCES

        assert live_machine.context.result.requeue is True
        assert live_machine.context.result.requeue_after == 5.0
        assert cluster.apps.create_namespaced_stateful_set.call_count == 2
