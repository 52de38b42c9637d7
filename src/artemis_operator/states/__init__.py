"""Lifecycle states of an ActiveMQArtemis broker deployment."""

from .base import BrokerState
from .creating_resources import CreatingResourcesState
from .ids import StateID
from .not_created import NotCreatedState
from .scaling import ContainersRunningState, ScalingState
from .steps import ResourceKind, StepFlags

__all__ = [
    "BrokerState",
    "ContainersRunningState",
    "CreatingResourcesState",
    "NotCreatedState",
    "ResourceKind",
    "ScalingState",
    "StateID",
    "StepFlags",
]
