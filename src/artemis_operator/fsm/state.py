"""Base class for lifecycle states driven by a Machine."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum


class State(ABC):
    """One lifecycle stage.

    The machine calls ``enter`` once when the state becomes active, ``update``
    once per external trigger while it stays active, and ``exit`` when it is
    replaced. Failures are raised; ``update`` returns the id of the state that
    should be active next, which is its own id to stay put.
    """

    state_id: IntEnum

    @property
    def id(self) -> IntEnum:
        return self.state_id

    @property
    def name(self) -> str:
        return type(self).__name__

    def enter(self, previous_state_id: IntEnum) -> None:
        """Called when the machine transitions into this state."""

    @abstractmethod
    def update(self) -> IntEnum:
        """Run one reconcile tick and return the next state id."""

    def exit(self) -> None:
        """Called when the machine transitions out of this state."""
