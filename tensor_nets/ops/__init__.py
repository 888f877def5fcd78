from .operator import Operator, KernelOperator, blob_signature
from .registry import OperatorRegistry, create_operator
from .cost import Cost, register_cost_function, get_cost_function, has_cost_function

# Import operators so they register themselves
from . import cpu_numpy
from . import gpu_torch

__all__ = [
    "Operator",
    "KernelOperator",
    "blob_signature",
    "OperatorRegistry",
    "create_operator",
    "Cost",
    "register_cost_function",
    "get_cost_function",
    "has_cost_function",
]
