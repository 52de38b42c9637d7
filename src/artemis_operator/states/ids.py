"""Lifecycle state identifiers for ActiveMQArtemis resources."""

from enum import IntEnum


class StateID(IntEnum):
    """Discrete lifecycle stage of a managed broker deployment."""

    NOT_CREATED = 0
    CREATING_RESOURCES = 1
    SCALING = 2
    CONTAINERS_RUNNING = 3

    @property
    def display_name(self) -> str:
        return "".join(part.capitalize() for part in self.name.split("_"))
