"""Builder for broker configurations."""

from __future__ import annotations

from typing import Any

from ..constants import DEFAULT_BROKER_IMAGE, DEFAULT_STORAGE_SIZE


def create_broker_config_from_spec(spec: dict[str, Any]) -> dict[str, Any]:
    """Create a broker configuration dict from CRD spec.

    Args:
        spec: ActiveMQArtemis CRD spec

    Returns:
        Configuration dict for resource definitions
    """
    deployment_plan = spec.get("deploymentPlan") or {}

    # A missing size means a single broker, an explicit 0 is honoured
    size = deployment_plan.get("size")
    if size is None:
        size = 1

    storage = deployment_plan.get("storage") or {}

    config_dict = {
        "size": int(size),
        "image": deployment_plan.get("image") or DEFAULT_BROKER_IMAGE,
        "persistence_enabled": bool(deployment_plan.get("persistenceEnabled", False)),
        "storage_size": storage.get("size", DEFAULT_STORAGE_SIZE),
        "require_login": bool(deployment_plan.get("requireLogin", False)),
        "admin_user": spec.get("adminUser"),
        "admin_password": spec.get("adminPassword"),
        "resources": deployment_plan.get("resources") or {},
    }

    return config_dict


def deployment_size(custom_resource: dict[str, Any]) -> int:
    """Requested broker replica count of a custom resource."""
    return create_broker_config_from_spec(custom_resource.get("spec") or {})["size"]
