# tensor_nets/weights/safetensors_source.py
import os
import torch
from safetensors import safe_open
from typing import Any, Tuple, List, Dict

from .interface import WeightSource


class SafetensorsSource(WeightSource):
    """
    Tensors from a .safetensors file or a directory of shards.

    By default tensors come back as numpy arrays for the cpu_numpy backend;
    `as_torch=True` keeps them as torch tensors.
    """

    def __init__(self, path: str, as_torch: bool = False):
        self.path = path
        self.as_torch = as_torch
        self._handles: Dict[str, Any] = {}  # filepath -> handle
        self._key_to_handle: Dict[str, Any] = {}  # tensor_name -> handle

        if os.path.isdir(path):
            safetensors_files = sorted(
                [f for f in os.listdir(path) if f.endswith(".safetensors")]
            )
            if not safetensors_files:
                raise FileNotFoundError(f"No safetensors files found in {path}")
            filepaths = [os.path.join(path, f) for f in safetensors_files]
        else:
            if not os.path.exists(path):
                raise FileNotFoundError(f"Safetensors file not found: {path}")
            filepaths = [path]

        for fp in filepaths:
            handle = safe_open(fp, framework="pt", device="cpu")
            self._handles[fp] = handle

            for key in handle.keys():
                if key in self._key_to_handle:
                    raise ValueError(
                        f"Duplicate tensor name '{key}' found in multiple shards "
                        f"({path})"
                    )
                self._key_to_handle[key] = handle

    def keys(self) -> List[str]:
        return list(self._key_to_handle.keys())

    def _handle(self, name: str) -> Any:
        if name not in self._key_to_handle:
            raise KeyError(f"Tensor '{name}' not found in safetensors source")
        return self._key_to_handle[name]

    def get_tensor_metadata(self, name: str) -> Tuple[Tuple[int, ...], str]:
        tensor_slice = self._handle(name).get_slice(name)
        return tuple(tensor_slice.get_shape()), tensor_slice.get_dtype()

    def get_tensor(self, name: str) -> Any:
        tensor = self._handle(name).get_tensor(name)

        # Half precision is widened; the built-in kernels compute in FP32.
        if tensor.dtype in (torch.bfloat16, torch.float16):
            tensor = tensor.to(torch.float32)

        if tensor.dtype not in (torch.float32, torch.int32, torch.int64, torch.bool):
            raise TypeError(f"tensor.dtype {tensor.dtype} not supported")

        if self.as_torch:
            return tensor
        return tensor.numpy()

    def close(self):
        self._handles.clear()
        self._key_to_handle.clear()
