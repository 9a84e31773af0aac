"""
Module configuration: input tags, parameter sets and YAML loading.

Input tag format: "module::parameter" or "module::parameter/index"
Example: "cuba::ps_points/0" for the first phase-space coordinate.
"""
from __future__ import annotations
import logging
import re
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, Optional

import yaml


logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"^(?P<module>[^:/\s]+)::(?P<parameter>[^:/\s]+)(?:/(?P<index>\d+))?$")

_MISSING = object()


@dataclass
class InputTag:
    """
    Reference to a value produced by another module (or the sampler).

    The tag is only a name until resolve() binds it to a Pool.
    """
    module: str
    parameter: str
    index: Optional[int] = None
    _pool: Any = field(default=None, init=False, repr=False, compare=False)

    @staticmethod
    def is_input_tag(text) -> bool:
        return isinstance(text, str) and _TAG_RE.match(text) is not None

    @classmethod
    def from_string(cls, text: str) -> "InputTag":
        match = _TAG_RE.match(text) if isinstance(text, str) else None
        if match is None:
            raise ValueError(f"Invalid input tag: {text!r} (expected 'module::parameter[/index]')")
        index = match.group("index")
        return cls(match.group("module"), match.group("parameter"), int(index) if index is not None else None)

    @property
    def resolved(self) -> bool:
        return self._pool is not None

    def resolve(self, pool) -> None:
        """
        Bind this tag to a pool.

        The slot may be declared later, by a module built after the one
        holding this tag; it only has to exist when get() is called.
        """
        self._pool = pool
        logger.debug(f"Resolved input tag {self}")

    def get(self):
        """Current value of the referenced slot."""
        if self._pool is None:
            raise RuntimeError(f"Input tag {self} read before being resolved")
        value = self._pool.get(self.module, self.parameter)
        if self.index is not None:
            return value[self.index]
        return value

    def __str__(self) -> str:
        base = f"{self.module}::{self.parameter}"
        return base if self.index is None else f"{base}/{self.index}"


class ParameterSet:
    """
    Parameters of one module instance, as read from the configuration.

    String values written as input tags are returned as InputTag objects.
    """

    def __init__(self, module_type: str, module_name: str, parameters: Optional[Dict[str, Any]] = None):
        self.module_type = module_type
        self.module_name = module_name
        self._parameters = dict(parameters or {})

    def exists(self, name: str) -> bool:
        return name in self._parameters

    def get(self, name: str, default=_MISSING):
        if name not in self._parameters:
            if default is _MISSING:
                raise KeyError(f"Parameter '{name}' not found for module '{self.module_name}'")
            return default
        value = self._parameters[name]
        if InputTag.is_input_tag(value):
            return InputTag.from_string(value)
        return value

    def __repr__(self) -> str:
        return f"ParameterSet(type={self.module_type}, name={self.module_name}, parameters={self._parameters})"


def load_config(path):
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parameter_sets(config: Dict[str, Any]) -> Iterator[ParameterSet]:
    """Yield a ParameterSet for every entry of config['modules'], in order."""
    for i, entry in enumerate(config.get("modules", [])):
        if "type" not in entry or "name" not in entry:
            raise ValueError(f"Module entry {i} needs both 'type' and 'name': {entry}")
        yield ParameterSet(entry["type"], entry["name"], entry.get("parameters", {}))
