# tensor_nets/ops/gpu_torch/kernels.py
# Torch kernels shared by the cpu_torch and gpu_torch backends. Inputs arrive
# already on the operator's device (see KernelOperator).
import torch
from ..registry import OperatorRegistry
from ...ir.dtypes import Backend


@OperatorRegistry.register_kernel("Add", backend=Backend.CPU_TORCH)
@OperatorRegistry.register_kernel("Add", backend=Backend.GPU_TORCH)
def add_torch(inputs, attrs):
    return torch.add(inputs[0], inputs[1])


@OperatorRegistry.register_kernel("Sub", backend=Backend.CPU_TORCH)
@OperatorRegistry.register_kernel("Sub", backend=Backend.GPU_TORCH)
def sub_torch(inputs, attrs):
    return torch.sub(inputs[0], inputs[1])


@OperatorRegistry.register_kernel("Mul", backend=Backend.CPU_TORCH)
@OperatorRegistry.register_kernel("Mul", backend=Backend.GPU_TORCH)
def mul_torch(inputs, attrs):
    return torch.mul(inputs[0], inputs[1])


@OperatorRegistry.register_kernel("MatMul", backend=Backend.CPU_TORCH)
@OperatorRegistry.register_kernel("MatMul", backend=Backend.GPU_TORCH)
def matmul_torch(inputs, attrs):
    a, b = inputs[0], inputs[1]
    if attrs.get("trans_a", False):
        a = a.transpose(-1, -2)
    if attrs.get("trans_b", False):
        b = b.transpose(-1, -2)
    return torch.matmul(a, b)


@OperatorRegistry.register_kernel("FC", backend=Backend.CPU_TORCH)
@OperatorRegistry.register_kernel("FC", backend=Backend.GPU_TORCH)
def fc_torch(inputs, attrs):
    x = inputs[0].reshape(inputs[0].shape[0], -1)
    bias = inputs[2] if len(inputs) > 2 else None
    return torch.nn.functional.linear(x, inputs[1], bias)


@OperatorRegistry.register_kernel("Relu", backend=Backend.CPU_TORCH)
@OperatorRegistry.register_kernel("Relu", backend=Backend.GPU_TORCH)
def relu_torch(inputs, attrs):
    return torch.relu(inputs[0])


@OperatorRegistry.register_kernel("Copy", backend=Backend.CPU_TORCH)
@OperatorRegistry.register_kernel("Copy", backend=Backend.GPU_TORCH)
def copy_torch(inputs, attrs):
    return inputs[0].clone()
