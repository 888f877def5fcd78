"""
File: tensor_nets/ops/cost.py

Registry of per-operator-type cost functions, plus shape helpers shared by the
built-in cost functions.
"""

from dataclasses import dataclass
from typing import Dict, Callable, List, Optional, Tuple

import numpy as np

from ..ir.dtypes import TensorSignature
from ..ir.op_def import OperatorDef


@dataclass
class Cost:
    flops: int = 0
    bytes_moved: int = 0
    params_bytes: int = 0


CostFunction = Callable[[OperatorDef, List[TensorSignature]], Cost]

_COST_REGISTRY: Dict[str, CostFunction] = {}


def register_cost_function(*op_types: str):
    """Decorator registering `fn(op_def, input_shapes) -> Cost` for op types."""

    def decorator(fn):
        for op_type in op_types:
            _COST_REGISTRY[op_type] = fn
        return fn

    return decorator


def get_cost_function(op_type: str) -> Optional[CostFunction]:
    return _COST_REGISTRY.get(op_type, None)


def has_cost_function(op_type: str) -> bool:
    return op_type in _COST_REGISTRY


def unregister_cost_function(op_type: str):
    _COST_REGISTRY.pop(op_type, None)


def is_static(shapes: List[TensorSignature]) -> bool:
    """Concrete shape and known element type for every signature."""
    return all(
        s.dtype is not None
        and s.shape is not None
        and all(d is not None for d in s.shape)
        for s in shapes
    )


def broadcast_shape(shapes: List[TensorSignature]) -> Tuple[int, ...]:
    return tuple(np.broadcast_shapes(*(s.shape for s in shapes)))


def numel(shape: Tuple[int, ...]) -> int:
    n = 1
    for d in shape:
        n *= d
    return n
