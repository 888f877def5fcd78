# tensor_nets/ops/cpu_numpy/elementwise.py
import numpy as np
from ..registry import OperatorRegistry
from ..cost import Cost, register_cost_function, is_static, broadcast_shape, numel
from ...ir.dtypes import Backend


@OperatorRegistry.register_kernel("Add", backend=Backend.CPU_NUMPY)
def add_kernel(inputs, attrs):
    return np.add(inputs[0], inputs[1])


@OperatorRegistry.register_kernel("Sub", backend=Backend.CPU_NUMPY)
def sub_kernel(inputs, attrs):
    return np.subtract(inputs[0], inputs[1])


@OperatorRegistry.register_kernel("Mul", backend=Backend.CPU_NUMPY)
def mul_kernel(inputs, attrs):
    return np.multiply(inputs[0], inputs[1])


@register_cost_function("Add", "Sub", "Mul")
def binary_elementwise_cost(op_def, input_shapes):
    # One flop per output element; both operands read, output written.
    if len(input_shapes) < 2 or not is_static(input_shapes):
        return Cost()
    out_elements = numel(broadcast_shape(input_shapes[:2]))
    itemsize = input_shapes[0].dtype.itemsize
    bytes_moved = sum(s.size_bytes for s in input_shapes[:2]) + out_elements * itemsize
    return Cost(flops=out_elements, bytes_moved=bytes_moved, params_bytes=0)
