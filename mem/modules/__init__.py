"""
MEM module library.

Usage:
    from mem.modules import create_module

    module = create_module(parameters, pool)
    status = module.work()
"""
from .base import Module, Status
from .flat_theta import FlatTransferFunctionOnTheta, ThetaTransfer, flat_transfer_function_on_theta
from .registry import register, get_module_class, create_module, build_modules, list_registered_modules

__all__ = [
    "Module",
    "Status",
    "FlatTransferFunctionOnTheta",
    "ThetaTransfer",
    "flat_transfer_function_on_theta",
    "register",
    "get_module_class",
    "create_module",
    "build_modules",
    "list_registered_modules",
]
