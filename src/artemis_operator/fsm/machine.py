"""Finite state machine driver."""

from __future__ import annotations

import logging
from enum import IntEnum
from typing import Callable, Mapping

from .state import State

StateFactory = Callable[[], State]


class UnknownStateError(KeyError):
    """A state id has no entry in the machine's factory."""


class Machine:
    """Holds exactly one active state and performs transitions between them.

    States are constructed on demand from ``factories``, keyed by state id, so
    a transition always yields a fresh instance of the incoming state.
    """

    def __init__(self, factories: Mapping[IntEnum, StateFactory]):
        self.factories = dict(factories)
        self.current: State | None = None
        self.logger = logging.getLogger(__name__)

    @property
    def current_id(self) -> IntEnum | None:
        return self.current.id if self.current is not None else None

    def build(self, state_id: IntEnum) -> State:
        try:
            factory = self.factories[state_id]
        except KeyError:
            raise UnknownStateError(state_id) from None
        return factory()

    def start(self, state_id: IntEnum, previous_state_id: IntEnum | None = None) -> State:
        """Make ``state_id`` the active state without an outgoing state.

        ``previous_state_id`` defaults to ``state_id`` itself.
        """
        state = self.build(state_id)
        self.current = state
        state.enter(state_id if previous_state_id is None else previous_state_id)
        return state

    def update(self) -> IntEnum:
        """Run one tick on the active state, transitioning if it asks to.

        Returns:
            The id of the state active after the tick
        """
        if self.current is None:
            raise RuntimeError("machine has not been started")

        next_state_id = self.current.update()
        if next_state_id != self.current.id:
            self.transition(next_state_id)
        return self.current.id

    def transition(self, next_state_id: IntEnum) -> State:
        """Exit the active state and enter a new instance of ``next_state_id``.

        The incoming state becomes active before its ``enter`` runs, so an
        error raised from ``enter`` leaves it in place for the next tick.
        """
        if self.current is None:
            return self.start(next_state_id)

        previous = self.current
        incoming = self.build(next_state_id)
        self.logger.info(f"Transitioning from {previous.name} to {incoming.name}")
        previous.exit()
        self.current = incoming
        incoming.enter(previous.id)
        return incoming
