from abc import ABC, abstractmethod
from enum import Enum


class Status(Enum):
    """Result of Module.work(), read by the integration driver."""
    OK = 0
    NEXT = 1   # discard this phase-space point
    ABORT = 2  # stop the integration


class Module(ABC):
    """
    Base class for all MEM modules.

    A module reads inputs from the pool, writes its declared outputs
    back into the pool and reports a Status. Modules hold no state
    between calls to work().
    """

    def __init__(self, pool, name: str):
        self.pool = pool
        self.name = name

    def produce(self, slot: str, initial=None) -> str:
        """Declare an output slot owned by this module and return its name."""
        self.pool.produce(self.name, slot, initial)
        return slot

    def set_output(self, slot: str, value) -> None:
        self.pool.put(self.name, slot, value)

    @abstractmethod
    def work(self) -> Status:
        """Evaluate the module for the current phase-space point."""

    def dimensions(self) -> int:
        """Number of phase-space coordinates this module consumes."""
        return 0
