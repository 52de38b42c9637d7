"""Generic finite state machine driver."""

from .machine import Machine, UnknownStateError
from .state import State

__all__ = ["Machine", "State", "UnknownStateError"]
