"""Partial-completion tracking for the creating-resources state."""

from __future__ import annotations

from enum import Enum, IntFlag


class StepFlags(IntFlag):
    """Bitmask of dependent resources confirmed present during one activation."""

    NONE = 0
    CREATED_WORKLOAD = 1 << 0
    CREATED_HEADLESS_SERVICE = 1 << 1
    CREATED_DISCOVERY_SERVICE = 1 << 2
    CREATED_USER_SECRET = 1 << 3
    CREATED_CLUSTER_SECRET = 1 << 4

    # Bits required before leaving the creating-resources state. Secrets are
    # tracked but never gate the transition.
    GATING = CREATED_WORKLOAD | CREATED_HEADLESS_SERVICE | CREATED_DISCOVERY_SERVICE
    ALL = GATING | CREATED_USER_SECRET | CREATED_CLUSTER_SECRET

    def has(self, flags: StepFlags) -> bool:
        return (self & flags) == flags


class ResourceKind(Enum):
    """Dependent resources created for every ActiveMQArtemis, in creation order."""

    WORKLOAD = "StatefulSet"
    HEADLESS_SERVICE = "HeadlessService"
    DISCOVERY_SERVICE = "PingService"
    USER_SECRET = "UserSecret"
    CLUSTER_SECRET = "ClusterSecret"

    @property
    def flag(self) -> StepFlags:
        return _KIND_FLAGS[self]


_KIND_FLAGS = {
    ResourceKind.WORKLOAD: StepFlags.CREATED_WORKLOAD,
    ResourceKind.HEADLESS_SERVICE: StepFlags.CREATED_HEADLESS_SERVICE,
    ResourceKind.DISCOVERY_SERVICE: StepFlags.CREATED_DISCOVERY_SERVICE,
    ResourceKind.USER_SECRET: StepFlags.CREATED_USER_SECRET,
    ResourceKind.CLUSTER_SECRET: StepFlags.CREATED_CLUSTER_SECRET,
}
