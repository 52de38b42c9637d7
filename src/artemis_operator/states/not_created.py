"""Initial lifecycle state of a newly observed ActiveMQArtemis."""

from __future__ import annotations

from .base import BrokerState
from .ids import StateID


class NotCreatedState(BrokerState):
    """No resources are known yet; the first tick moves to resource creation."""

    state_id = StateID.NOT_CREATED

    def update(self) -> StateID:
        return StateID.CREATING_RESOURCES
