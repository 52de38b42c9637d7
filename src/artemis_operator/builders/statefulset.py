"""Builder for the broker StatefulSet."""

from __future__ import annotations

from typing import Any

from kubernetes import client

from ..constants import (
    BROKER_CONTAINER_NAME,
    BROKER_DATA_DIR,
    BROKER_DATA_VOLUME,
    PORT_ALL_PROTOCOLS,
    PORT_CONSOLE_JOLOKIA,
    PORT_PING,
    SECRET_KEY_CLUSTER_PASSWORD,
    SECRET_KEY_CLUSTER_USER,
    SECRET_KEY_PASSWORD,
    SECRET_KEY_USER,
)
from . import names
from .broker import create_broker_config_from_spec


def _secret_env(env_name: str, secret_name: str, key: str) -> client.V1EnvVar:
    return client.V1EnvVar(
        name=env_name,
        value_from=client.V1EnvVarSource(
            secret_key_ref=client.V1SecretKeySelector(name=secret_name, key=key),
        ),
    )


def broker_env(custom_resource: dict[str, Any], config: dict[str, Any]) -> list[client.V1EnvVar]:
    """Environment of the broker container."""
    cr_name = custom_resource["metadata"]["name"]
    user_secret = names.user_secret_name(cr_name)
    cluster_secret = names.cluster_secret_name(cr_name)
    env = [
        _secret_env(SECRET_KEY_USER, user_secret, SECRET_KEY_USER),
        _secret_env(SECRET_KEY_PASSWORD, user_secret, SECRET_KEY_PASSWORD),
        _secret_env(SECRET_KEY_CLUSTER_USER, cluster_secret, SECRET_KEY_CLUSTER_USER),
        _secret_env(SECRET_KEY_CLUSTER_PASSWORD, cluster_secret, SECRET_KEY_CLUSTER_PASSWORD),
        client.V1EnvVar(name="AMQ_ROLE", value="admin"),
        client.V1EnvVar(name="AMQ_NAME", value="amq-broker"),
        client.V1EnvVar(name="AMQ_CLUSTERED", value="true"),
        client.V1EnvVar(name="AMQ_REQUIRE_LOGIN", value=str(config["require_login"]).lower()),
        client.V1EnvVar(name="AMQ_DATA_DIR", value=BROKER_DATA_DIR),
        client.V1EnvVar(name="AMQ_DATA_DIR_LOGGING", value=str(config["persistence_enabled"]).lower()),
        client.V1EnvVar(name="PING_SVC_NAME", value=names.ping_service_name(cr_name)),
        client.V1EnvVar(
            name="POD_NAMESPACE",
            value_from=client.V1EnvVarSource(
                field_ref=client.V1ObjectFieldSelector(field_path="metadata.namespace"),
            ),
        ),
    ]
    return env


def new_pod_template_for_cr(custom_resource: dict[str, Any], config: dict[str, Any]) -> client.V1PodTemplateSpec:
    """Build the pod template of the broker StatefulSet."""
    cr_name = custom_resource["metadata"]["name"]
    volume_mounts = []
    if config["persistence_enabled"]:
        volume_mounts.append(client.V1VolumeMount(name=BROKER_DATA_VOLUME, mount_path=BROKER_DATA_DIR))

    container = client.V1Container(
        name=BROKER_CONTAINER_NAME,
        image=config["image"],
        image_pull_policy="Always",
        env=broker_env(custom_resource, config),
        ports=[
            client.V1ContainerPort(name="jolokia", container_port=PORT_CONSOLE_JOLOKIA, protocol="TCP"),
            client.V1ContainerPort(name="all", container_port=PORT_ALL_PROTOCOLS, protocol="TCP"),
            client.V1ContainerPort(name="ping", container_port=PORT_PING, protocol="TCP"),
        ],
        readiness_probe=client.V1Probe(
            tcp_socket=client.V1TCPSocketAction(port=PORT_ALL_PROTOCOLS),
            initial_delay_seconds=5,
            period_seconds=10,
        ),
        volume_mounts=volume_mounts or None,
        resources=client.V1ResourceRequirements(**config["resources"]) if config["resources"] else None,
    )

    return client.V1PodTemplateSpec(
        metadata=client.V1ObjectMeta(name=names.pod_name(cr_name), labels=names.labels(cr_name)),
        spec=client.V1PodSpec(containers=[container], termination_grace_period_seconds=60),
    )


def new_statefulset_for_cr(custom_resource: dict[str, Any]) -> client.V1StatefulSet:
    """Build the broker StatefulSet for a custom resource."""
    meta = custom_resource["metadata"]
    cr_name = meta["name"]
    config = create_broker_config_from_spec(custom_resource.get("spec") or {})

    volume_claim_templates = None
    if config["persistence_enabled"]:
        volume_claim_templates = [
            client.V1PersistentVolumeClaim(
                metadata=client.V1ObjectMeta(name=BROKER_DATA_VOLUME, labels=names.labels(cr_name)),
                spec=client.V1PersistentVolumeClaimSpec(
                    access_modes=["ReadWriteOnce"],
                    resources=client.V1VolumeResourceRequirements(
                        requests={"storage": config["storage_size"]},
                    ),
                ),
            )
        ]

    return client.V1StatefulSet(
        api_version="apps/v1",
        kind="StatefulSet",
        metadata=client.V1ObjectMeta(
            name=names.statefulset_name(cr_name),
            namespace=meta.get("namespace"),
            labels=names.labels(cr_name),
        ),
        spec=client.V1StatefulSetSpec(
            replicas=config["size"],
            service_name=names.headless_service_name(cr_name),
            selector=client.V1LabelSelector(match_labels=names.labels(cr_name)),
            pod_management_policy="OrderedReady",
            update_strategy=client.V1StatefulSetUpdateStrategy(type="RollingUpdate"),
            template=new_pod_template_for_cr(custom_resource, config),
            volume_claim_templates=volume_claim_templates,
        ),
    )
