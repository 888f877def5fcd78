from abc import ABC, abstractmethod
from typing import List, Any, Callable, Optional

import numpy as np
import torch

from ..ir.dtypes import DType, Backend, DeviceOption, TensorSignature
from ..ir.op_def import OperatorDef


def blob_signature(blob: Any) -> TensorSignature:
    """
    Type, shape and backend of a workspace blob. Element types with no DType
    member (strings, objects, long double) come back as dtype None.
    """
    if isinstance(blob, torch.Tensor):
        backend = Backend.GPU_TORCH if blob.is_cuda else Backend.CPU_TORCH
        return TensorSignature(
            DType.lookup(blob.dtype), tuple(blob.shape), backend
        )
    arr = np.asarray(blob)
    return TensorSignature(DType.lookup(arr.dtype), arr.shape, Backend.CPU_NUMPY)


class Operator(ABC):
    """
    A runnable unit bound to one OperatorDef.

    Subclasses implement `run_on_device`, reading inputs from and writing
    outputs to the workspace, and return True on success.
    """

    def __init__(self, op_def: OperatorDef, ws, net_position: int = 0):
        self._debug_def = op_def
        self.ws = ws
        self.net_position = net_position
        self.device_option = op_def.device_option or DeviceOption()
        self.has_run = False

    @property
    def debug_def(self) -> OperatorDef:
        return self._debug_def

    def set_debug_def(self, op_def: OperatorDef):
        self._debug_def = op_def

    @property
    def type(self) -> str:
        return self._debug_def.type

    @property
    def input_size(self) -> int:
        return len(self._debug_def.inputs)

    @property
    def output_size(self) -> int:
        return len(self._debug_def.outputs)

    def get_arg(self, key: str, default: Any = None) -> Any:
        return self._debug_def.get_arg(key, default)

    def input(self, idx: int) -> Any:
        return self.ws.fetch_blob(self._debug_def.inputs[idx])

    def output(self, idx: int, value: Any):
        self.ws.feed_blob(self._debug_def.outputs[idx], value)

    def input_tensor_shapes(self) -> List[TensorSignature]:
        shapes = []
        for name in self._debug_def.inputs:
            if self.ws.has_blob(name):
                shapes.append(blob_signature(self.ws.fetch_blob(name)))
            else:
                shapes.append(TensorSignature(None, None, None))
        return shapes

    def run(self) -> bool:
        success = bool(self.run_on_device())
        self.has_run = success
        return success

    def reset_event(self):
        self.has_run = False

    @abstractmethod
    def run_on_device(self) -> bool:
        pass

    def __repr__(self):
        return f"{type(self).__name__}({self._debug_def!r})"


class KernelOperator(Operator):
    """
    Runs a kernel function `kernel(inputs, attrs)`.

    The kernel returns the output value, a tuple with one value per output, or
    False to report failure. On torch backends inputs are moved to the
    operator's device before the kernel sees them.
    """

    def __init__(
        self,
        op_def: OperatorDef,
        ws,
        net_position: int = 0,
        kernel: Optional[Callable] = None,
    ):
        super().__init__(op_def, ws, net_position)
        if kernel is None:
            raise ValueError(f"No kernel bound for operator type '{op_def.type}'")
        if self.device_option.backend == Backend.GPU_TORCH:
            if not torch.cuda.is_available():
                raise RuntimeError("CUDA is not available for gpu_torch placement")
        self.kernel = kernel

    def _prepare(self, value: Any) -> Any:
        if self.device_option.backend.is_torch:
            return torch.as_tensor(value, device=self.device_option.torch_device)
        return value

    def run_on_device(self) -> bool:
        inputs = [self._prepare(self.input(i)) for i in range(self.input_size)]
        result = self.kernel(inputs, self._debug_def.args)
        if result is False:
            return False

        outputs = result if isinstance(result, tuple) else (result,)
        if len(outputs) != self.output_size:
            raise ValueError(
                f"Kernel for '{self.type}' produced {len(outputs)} outputs, "
                f"def declares {self.output_size}"
            )
        for idx, value in enumerate(outputs):
            self.output(idx, value)
        return True
