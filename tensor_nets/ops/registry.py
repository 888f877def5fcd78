# tensor_nets/ops/registry.py
import functools
from typing import Dict, Callable, Optional

from ..errors import OperatorCreationError
from ..ir.dtypes import Backend
from ..ir.op_def import OperatorDef
from .operator import Operator, KernelOperator

# (op_def, ws, net_position) -> Operator
OperatorFactory = Callable[..., Operator]


class OperatorRegistry:
    # OpType -> Backend -> factory
    _operators: Dict[str, Dict[Backend, OperatorFactory]] = {}

    @classmethod
    def get_all_operators(cls):
        """Returns the entire operator registry."""
        return cls._operators

    @classmethod
    def has_operator(cls, op_type: str, backend: Backend = Backend.CPU_NUMPY) -> bool:
        return backend in cls._operators.get(op_type, {})

    @classmethod
    def _add(cls, op_type: str, backend: Backend, factory: OperatorFactory):
        backends = cls._operators.setdefault(op_type, {})
        if backend in backends:
            raise ValueError(
                f"Operator '{op_type}' is already registered for backend '{backend.value}'"
            )
        backends[backend] = factory

    @classmethod
    def register(cls, op_type: str, backend: Backend = Backend.CPU_NUMPY):
        """Decorator registering an Operator subclass."""

        def decorator(op_cls):
            if not issubclass(op_cls, Operator):
                raise ValueError("Must inherit from Operator")
            cls._add(op_type, backend, op_cls)
            return op_cls

        return decorator

    @classmethod
    def register_kernel(cls, op_type: str, backend: Backend = Backend.CPU_NUMPY):
        """
        Decorator registering a kernel function `kernel(inputs, attrs)`.
        Stack several decorators to share one kernel between backends.
        """

        def decorator(func):
            cls._add(op_type, backend, functools.partial(KernelOperator, kernel=func))
            return func

        return decorator

    @classmethod
    def unregister(cls, op_type: str, backend: Optional[Backend] = None):
        if backend is None:
            cls._operators.pop(op_type, None)
            return
        backends = cls._operators.get(op_type, {})
        backends.pop(backend, None)
        if not backends:
            cls._operators.pop(op_type, None)


def create_operator(op_def: OperatorDef, ws, net_position: int = 0) -> Operator:
    """
    Instantiates the operator registered for the def's type and placement.
    Any failure is reported as OperatorCreationError.
    """
    backend = (
        op_def.device_option.backend if op_def.device_option else Backend.CPU_NUMPY
    )
    factory = OperatorRegistry.get_all_operators().get(op_def.type, {}).get(backend)
    if factory is None:
        registered = sorted(
            b.value for b in OperatorRegistry.get_all_operators().get(op_def.type, {})
        )
        raise OperatorCreationError(
            f"Cannot create operator {op_def.display_name}: no '{op_def.type}' "
            f"operator for backend '{backend.value}' (registered: {registered})"
        )

    try:
        return factory(op_def, ws, net_position)
    except Exception as e:
        raise OperatorCreationError(
            f"Cannot create operator {op_def.display_name} ({op_def.type}): {e}"
        ) from e
