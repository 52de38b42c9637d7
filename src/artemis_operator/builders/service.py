"""Builders for the broker headless and discovery services."""

from __future__ import annotations

from typing import Any

from kubernetes import client

from ..constants import PORT_ALL_PROTOCOLS, PORT_CONSOLE_JOLOKIA, PORT_PING
from . import names


def default_ports(custom_resource: dict[str, Any]) -> list[client.V1ServicePort]:
    """Ports every broker exposes on its headless service."""
    return [
        client.V1ServicePort(
            name="console-jolokia",
            protocol="TCP",
            port=PORT_CONSOLE_JOLOKIA,
            target_port=PORT_CONSOLE_JOLOKIA,
        ),
        client.V1ServicePort(
            name="all",
            protocol="TCP",
            port=PORT_ALL_PROTOCOLS,
            target_port=PORT_ALL_PROTOCOLS,
        ),
    ]


def new_headless_service_for_cr(
    custom_resource: dict[str, Any],
    ports: list[client.V1ServicePort],
) -> client.V1Service:
    """Build the headless service giving each broker a stable network identity."""
    meta = custom_resource["metadata"]
    cr_name = meta["name"]
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(
            name=names.headless_service_name(cr_name),
            namespace=meta.get("namespace"),
            labels=names.labels(cr_name),
        ),
        spec=client.V1ServiceSpec(
            selector=names.labels(cr_name),
            cluster_ip="None",
            publish_not_ready_addresses=True,
            ports=ports,
        ),
    )


def new_ping_service_for_cr(custom_resource: dict[str, Any]) -> client.V1Service:
    """Build the service brokers use to discover cluster peers."""
    meta = custom_resource["metadata"]
    cr_name = meta["name"]
    return client.V1Service(
        api_version="v1",
        kind="Service",
        metadata=client.V1ObjectMeta(
            name=names.ping_service_name(cr_name),
            namespace=meta.get("namespace"),
            labels=names.labels(cr_name),
        ),
        spec=client.V1ServiceSpec(
            selector=names.labels(cr_name),
            cluster_ip="None",
            publish_not_ready_addresses=True,
            ports=[
                client.V1ServicePort(
                    name="ping",
                    protocol="TCP",
                    port=PORT_PING,
                    target_port=PORT_PING,
                )
            ],
        ),
    )
