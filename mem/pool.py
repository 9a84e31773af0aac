"""
Shared storage for module inputs and outputs.

Slots are keyed by (module name, slot name). The host owns the pool;
modules declare the slots they write with produce() and replace
their values on each call to work().
"""
import logging
from typing import Any, Dict, List, Tuple


logger = logging.getLogger(__name__)


class Pool:

    def __init__(self):
        self._slots: Dict[Tuple[str, str], Any] = {}

    def produce(self, module: str, name: str, initial=None) -> None:
        """Declare an output slot. Each slot has a single producer."""
        key = (module, name)
        if key in self._slots:
            raise ValueError(f"Slot {module}::{name} is already produced by another module")
        self._slots[key] = initial
        logger.debug(f"Declared slot {module}::{name}")

    def put(self, module: str, name: str, value) -> None:
        self._slots[(module, name)] = value

    def get(self, module: str, name: str):
        try:
            return self._slots[(module, name)]
        except KeyError:
            raise KeyError(f"No slot {module}::{name} in pool") from None

    def exists(self, module: str, name: str) -> bool:
        return (module, name) in self._slots

    def slots(self) -> List[str]:
        return [f"{m}::{n}" for m, n in self._slots]
