"""Owner references tying dependent objects to their ActiveMQArtemis."""

from __future__ import annotations

from typing import Any

from kubernetes import client

from ..constants import API_GROUP_VERSION, KIND_ACTIVEMQ_ARTEMIS


def owner_reference_for_cr(custom_resource: dict[str, Any]) -> client.V1OwnerReference:
    """Controller owner reference so dependents are garbage collected with the CR."""
    meta = custom_resource.get("metadata", {})
    return client.V1OwnerReference(
        api_version=custom_resource.get("apiVersion", API_GROUP_VERSION),
        kind=custom_resource.get("kind", KIND_ACTIVEMQ_ARTEMIS),
        name=meta.get("name"),
        uid=meta.get("uid"),
        controller=True,
        block_owner_deletion=True,
    )


def set_owner(obj: Any, custom_resource: dict[str, Any]) -> Any:
    """Attach the controller owner reference to a kubernetes model object."""
    reference = owner_reference_for_cr(custom_resource)
    references = [
        ref for ref in (obj.metadata.owner_references or []) if ref.uid != reference.uid
    ]
    references.append(reference)
    obj.metadata.owner_references = references
    return obj
