"""Per-resource reconcile context shared by the lifecycle states."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

if TYPE_CHECKING:
    from .resources.base import ClusterClient


class NamespacedName(NamedTuple):
    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"

    @classmethod
    def from_body(cls, body: dict[str, Any]) -> NamespacedName:
        meta = body.get("metadata", {})
        return cls(meta.get("namespace", "default"), meta["name"])


@dataclass
class ReconcileResult:
    """Requeue directive handed back to the controller runtime."""

    requeue: bool = False
    requeue_after: float = 0.0

    def request_requeue(self, delay: float) -> None:
        self.requeue = True
        self.requeue_after = delay


@dataclass
class ReconcileContext:
    """Desired custom resource, cluster client and requeue signal for one resource.

    Supplied by the handler on every trigger; states hold a reference to it and
    never own it.
    """

    custom_resource: dict[str, Any]
    cluster: ClusterClient
    result: ReconcileResult = field(default_factory=ReconcileResult)

    @property
    def namespaced_name(self) -> NamespacedName:
        return NamespacedName.from_body(self.custom_resource)

    @property
    def name(self) -> str:
        return self.custom_resource["metadata"]["name"]

    @property
    def namespace(self) -> str:
        return self.custom_resource["metadata"].get("namespace", "default")

    def reset_result(self) -> None:
        self.result = ReconcileResult()
