# tensor_nets/ops/cpu_numpy/fill.py
import numpy as np
from ..operator import Operator
from ..registry import OperatorRegistry
from ..cost import Cost, register_cost_function, is_static, numel
from ...ir.dtypes import Backend, DType


@OperatorRegistry.register_kernel("ConstantFill", backend=Backend.CPU_NUMPY)
def constant_fill_kernel(inputs, attrs):
    """
    Fills a tensor with `value`. With an input the output takes the input's
    shape, otherwise the `shape` argument is used.
    """
    dtype = attrs.get("dtype", DType.FP32.value)
    value = attrs.get("value", 0.0)
    if inputs:
        shape = np.shape(inputs[0])
    else:
        shape = tuple(attrs.get("shape", ()))
    return np.full(shape, value, dtype=dtype)


@OperatorRegistry.register("CheckFinite", backend=Backend.CPU_NUMPY)
class CheckFiniteOp(Operator):
    """Reports failure when any input holds NaN or Inf. Writes no outputs."""

    def run_on_device(self) -> bool:
        for idx in range(self.input_size):
            if not np.all(np.isfinite(self.input(idx))):
                return False
        return True


@register_cost_function("ConstantFill")
def constant_fill_cost(op_def, input_shapes):
    # Same dtype parsing as the kernel, so any dtype it accepts can be sized
    itemsize = np.dtype(op_def.get_arg("dtype", DType.FP32.value)).itemsize
    if input_shapes:
        if not is_static(input_shapes[:1]):
            return Cost()
        elements = input_shapes[0].numel
    else:
        elements = numel(tuple(op_def.get_arg("shape", ())))
    return Cost(flops=0, bytes_moved=elements * itemsize, params_bytes=0)


@register_cost_function("CheckFinite")
def check_finite_cost(op_def, input_shapes):
    if not is_static(input_shapes):
        return Cost()
    return Cost(
        flops=sum(s.numel for s in input_shapes),
        bytes_moved=sum(s.size_bytes for s in input_shapes),
        params_bytes=0,
    )
