# tensor_nets/ops/cpu_numpy/unary.py
import numpy as np
from ..registry import OperatorRegistry
from ..cost import Cost, register_cost_function, is_static
from ...ir.dtypes import Backend


@OperatorRegistry.register_kernel("Relu", backend=Backend.CPU_NUMPY)
def relu_kernel(inputs, attrs):
    x = inputs[0]
    return np.maximum(x, np.zeros((), dtype=x.dtype))


@OperatorRegistry.register_kernel("Copy", backend=Backend.CPU_NUMPY)
def copy_kernel(inputs, attrs):
    return np.array(inputs[0], copy=True)


@OperatorRegistry.register_kernel("Sum", backend=Backend.CPU_NUMPY)
def sum_kernel(inputs, attrs):
    # Elementwise sum of all inputs
    result = inputs[0]
    for x in inputs[1:]:
        result = np.add(result, x)
    return np.array(result, copy=True)


@register_cost_function("Relu")
def relu_cost(op_def, input_shapes):
    if not input_shapes or not is_static(input_shapes[:1]):
        return Cost()
    x = input_shapes[0]
    return Cost(flops=x.numel, bytes_moved=2 * x.size_bytes, params_bytes=0)


@register_cost_function("Copy")
def copy_cost(op_def, input_shapes):
    if not input_shapes or not is_static(input_shapes[:1]):
        return Cost()
    return Cost(flops=0, bytes_moved=2 * input_shapes[0].size_bytes, params_bytes=0)


@register_cost_function("Sum")
def sum_cost(op_def, input_shapes):
    if not input_shapes or not is_static(input_shapes):
        return Cost()
    x = input_shapes[0]
    return Cost(
        flops=(len(input_shapes) - 1) * x.numel,
        bytes_moved=(len(input_shapes) + 1) * x.size_bytes,
        params_bytes=0,
    )
