"""Builders for the broker credential secrets."""

from __future__ import annotations

from typing import Any

from kubernetes import client

from ..constants import (
    SECRET_KEY_CLUSTER_PASSWORD,
    SECRET_KEY_CLUSTER_USER,
    SECRET_KEY_PASSWORD,
    SECRET_KEY_USER,
)
from ..utils.secrets import encode_secret_data, generate_password, generate_user
from . import names


def _new_secret(custom_resource: dict[str, Any], name: str, data: dict[str, str]) -> client.V1Secret:
    meta = custom_resource["metadata"]
    return client.V1Secret(
        api_version="v1",
        kind="Secret",
        metadata=client.V1ObjectMeta(
            name=name,
            namespace=meta.get("namespace"),
            labels=names.labels(meta["name"]),
        ),
        type="Opaque",
        data=encode_secret_data(data),
    )


def new_user_secret_for_cr(custom_resource: dict[str, Any]) -> client.V1Secret:
    """Build the secret holding the broker admin credentials.

    Credentials come from ``adminUser``/``adminPassword`` when set in the spec,
    otherwise they are generated once, when the secret is first created.
    """
    spec = custom_resource.get("spec") or {}
    data = {
        SECRET_KEY_USER: spec.get("adminUser") or generate_user(),
        SECRET_KEY_PASSWORD: spec.get("adminPassword") or generate_password(),
    }
    return _new_secret(custom_resource, names.user_secret_name(custom_resource["metadata"]["name"]), data)


def new_cluster_secret_for_cr(custom_resource: dict[str, Any]) -> client.V1Secret:
    """Build the secret holding the broker-to-broker cluster credentials."""
    data = {
        SECRET_KEY_CLUSTER_USER: generate_user(),
        SECRET_KEY_CLUSTER_PASSWORD: generate_password(),
    }
    return _new_secret(custom_resource, names.cluster_secret_name(custom_resource["metadata"]["name"]), data)
