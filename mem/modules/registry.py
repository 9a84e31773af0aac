"""
Module registry: maps configured module types to module classes.

Key format: the class name used as 'type' in the configuration.
Example: "FlatTransferFunctionOnTheta"

Registration happens explicitly below, when this module is imported.
"""
import logging

from ..parameters import parameter_sets
from .flat_theta import FlatTransferFunctionOnTheta


logger = logging.getLogger(__name__)

# Global registry: module type -> Module subclass
_REGISTRY: dict = {}


def register(module_type: str, cls):
    """
    Register a module class under a configuration type name.

    Example:
        >>> register("FlatTransferFunctionOnTheta", FlatTransferFunctionOnTheta)
    """
    _REGISTRY[module_type] = cls


def get_module_class(module_type: str):
    """Resolve the class registered for module_type."""
    try:
        return _REGISTRY[module_type]
    except KeyError:
        raise KeyError(
            f"Unknown module type '{module_type}' (registered: {sorted(_REGISTRY)})"
        ) from None


def create_module(parameters, pool):
    """Instantiate the module described by a ParameterSet."""
    cls = get_module_class(parameters.module_type)
    logger.debug(f"Creating module '{parameters.module_name}' of type {parameters.module_type}")
    return cls(pool, parameters)


def build_modules(config: dict, pool) -> list:
    """
    Create every module listed in a loaded configuration, in order.

    A module may consume outputs of a module listed after it: input tags
    are only looked up in the pool when work() reads them.
    """
    return [create_module(ps, pool) for ps in parameter_sets(config)]


def list_registered_modules():
    """List all registered module types."""
    return {k: v.__name__ for k, v in _REGISTRY.items()}


# ========== REGISTER KNOWN MODULES ==========
register("FlatTransferFunctionOnTheta", FlatTransferFunctionOnTheta)
