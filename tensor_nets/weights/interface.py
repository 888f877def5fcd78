from abc import ABC, abstractmethod
from typing import Any, Tuple, List


class WeightSource(ABC):
    """Abstract base class for sources of named tensors fed into a workspace."""

    @abstractmethod
    def keys(self) -> List[str]:
        """Returns list of available tensor names."""
        pass

    @abstractmethod
    def get_tensor_metadata(self, name: str) -> Tuple[Tuple[int, ...], str]:
        """Returns (shape, dtype_str) without loading full data."""
        pass

    @abstractmethod
    def get_tensor(self, name: str) -> Any:
        """Returns the tensor data (np.ndarray or torch tensor)."""
        pass

    def close(self):
        """Release any held resources."""
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
