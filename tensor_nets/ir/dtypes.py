import math
from enum import Enum
from dataclasses import dataclass
from typing import Tuple, Optional, Any

import numpy as np


class DType(Enum):
    FP16 = "float16"
    BF16 = "bfloat16"
    FP32 = "float32"
    FP64 = "float64"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    BOOL = "bool"
    COMPLEX64 = "complex64"
    COMPLEX128 = "complex128"

    @property
    def itemsize(self) -> int:
        """Returns the number of bytes per element."""
        if self == DType.BF16:
            return 2  # numpy has no bfloat16
        return np.dtype(self.value).itemsize

    @classmethod
    def lookup(cls, dtype: Any) -> Optional["DType"]:
        """
        Maps a numpy or torch dtype onto a DType, or None when there is none.
        Torch dtypes are matched on their string name (torch.float32 -> float32).
        """
        name = str(dtype)
        if name.startswith("torch."):
            name = name[len("torch.") :]
        else:
            name = np.dtype(dtype).name
        for member in cls:
            if member.value == name:
                return member
        return None

    @classmethod
    def from_numpy(cls, dtype: Any) -> "DType":
        member = cls.lookup(dtype)
        if member is None:
            raise ValueError(f"Unsupported dtype: {dtype}")
        return member


def get_size_bytes(
    shape: Optional[Tuple[Optional[int], ...]], dtype: Optional[DType]
) -> int:
    """
    Centralized logic for calculating total byte size.
    Raises ValueError for dynamic shapes (containing None) or an unknown dtype.
    """
    if dtype is None:
        raise ValueError("Cannot calculate byte size for an unknown dtype")
    if shape is None or any(d is None for d in shape):
        raise ValueError(f"Cannot calculate byte size for dynamic shape: {shape}")

    # Handle scalar shapes ()
    if len(shape) == 0:
        return dtype.itemsize

    return math.prod(shape) * dtype.itemsize


class Backend(Enum):
    CPU_NUMPY = "cpu_numpy"
    CPU_TORCH = "cpu_torch"
    GPU_TORCH = "gpu_torch"

    @property
    def is_torch(self) -> bool:
        return self in (Backend.CPU_TORCH, Backend.GPU_TORCH)


@dataclass(frozen=True)
class DeviceOption:
    """Placement of an operator: which backend runs it, and on which device."""

    backend: Backend = Backend.CPU_NUMPY
    device_id: int = 0

    @property
    def torch_device(self) -> str:
        if self.backend == Backend.GPU_TORCH:
            return f"cuda:{self.device_id}"
        return "cpu"

    def __repr__(self):
        return f"<{self.backend.value}:{self.device_id}>"


@dataclass(frozen=True)
class TensorSignature:
    """
    Represents the Type, Shape, and Backend state of a tensor.

    - dtype=None: Wildcard (unknown or unsupported element type)
    - shape=None: Wildcard (unknown shape)
    - backend=None: Wildcard (unknown backend)
    """

    dtype: Optional[DType]
    shape: Optional[Tuple[Optional[int], ...]] = None
    backend: Optional[Backend] = None

    def __repr__(self):
        shape_str = "*"
        if self.shape is not None:
            shape_str = ",".join(str(d) if d is not None else "*" for d in self.shape)

        backend_str = self.backend.value if self.backend else "*"
        dtype_str = self.dtype.value if self.dtype else "*"
        return f"<{dtype_str} [{shape_str}] @ {backend_str}>"

    @property
    def numel(self) -> int:
        if self.shape is None or any(d is None for d in self.shape):
            raise ValueError(f"Cannot count elements of dynamic shape: {self.shape}")
        return math.prod(self.shape)

    @property
    def size_bytes(self) -> int:
        return get_size_bytes(self.shape, self.dtype)

    def is_scalar(self):
        if self.shape is None:
            return False
        return len(self.shape) == 0 or (len(self.shape) == 1 and self.shape[0] == 1)
