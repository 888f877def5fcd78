# tensor_nets/ops/cpu_numpy/matmul.py
import numpy as np
from ..registry import OperatorRegistry
from ..cost import Cost, register_cost_function, is_static, numel
from ...ir.dtypes import Backend


def _maybe_transpose(x, flag):
    return np.swapaxes(x, -1, -2) if flag else x


@OperatorRegistry.register_kernel("MatMul", backend=Backend.CPU_NUMPY)
def matmul_kernel(inputs, attrs):
    a = _maybe_transpose(inputs[0], attrs.get("trans_a", False))
    b = _maybe_transpose(inputs[1], attrs.get("trans_b", False))
    return np.matmul(a, b)


@OperatorRegistry.register_kernel("FC", backend=Backend.CPU_NUMPY)
def fc_kernel(inputs, attrs):
    # Y = X * W^T + b, X flattened to (M, K), W is (N, K)
    x, w = inputs[0], inputs[1]
    x2d = x.reshape(x.shape[0], -1)
    y = x2d @ w.T
    if len(inputs) > 2:
        y = y + inputs[2]
    return y


@register_cost_function("MatMul")
def matmul_cost(op_def, input_shapes):
    # A: (..., M, K), B: (..., K, N) -> (..., M, N); FLOPS = 2 * M * N * K
    if len(input_shapes) < 2 or not is_static(input_shapes[:2]):
        return Cost()
    a_shape, b_shape = input_shapes[0].shape, input_shapes[1].shape
    if len(a_shape) < 2 or len(b_shape) < 2:
        return Cost()
    if op_def.get_arg("trans_a", False):
        a_shape = a_shape[:-2] + (a_shape[-1], a_shape[-2])
    if op_def.get_arg("trans_b", False):
        b_shape = b_shape[:-2] + (b_shape[-1], b_shape[-2])

    M, K = a_shape[-2], a_shape[-1]
    N = b_shape[-1]
    batch = numel(np.broadcast_shapes(a_shape[:-2], b_shape[:-2]))
    itemsize = input_shapes[0].dtype.itemsize
    out_bytes = batch * M * N * itemsize
    return Cost(
        flops=2 * batch * M * N * K,
        bytes_moved=input_shapes[0].size_bytes + input_shapes[1].size_bytes + out_bytes,
        params_bytes=0,
    )


@register_cost_function("FC")
def fc_cost(op_def, input_shapes):
    # Output is (M, N): each element takes K multiply-adds plus the bias add.
    # X is read and Y written; W and b are counted as parameters.
    if len(input_shapes) < 2 or not is_static(input_shapes):
        return Cost()
    x_shape, w_shape = input_shapes[0].shape, input_shapes[1].shape
    if len(x_shape) < 1 or len(w_shape) != 2:
        return Cost()
    M = x_shape[0]
    N, K = w_shape
    itemsize = input_shapes[0].dtype.itemsize
    params = N * K + (N if len(input_shapes) > 2 else 0)
    return Cost(
        flops=M * N * (2 * K + 1),
        bytes_moved=input_shapes[0].size_bytes + M * N * itemsize,
        params_bytes=params * itemsize,
    )
