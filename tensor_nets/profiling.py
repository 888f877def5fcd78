from abc import ABC, abstractmethod
from typing import Any, Optional

from .ir.op_def import OperatorDef

# ARGB colors for tracing ranges
RUN_COLOR = 0x0000CCFF  # blue
RECORD_COLOR = 0x00FF3300  # red
WAIT_COLOR = 0x0066FF33  # green


class RangeTracer(ABC):
    """Backend that opens and closes named ranges in an external tracing tool."""

    @abstractmethod
    def start(self, message: str, color: int) -> Any:
        """Opens a range and returns a handle for `end`."""
        pass

    @abstractmethod
    def end(self, handle: Any) -> None:
        pass


class TorchProfilerTracer(RangeTracer):
    """Ranges show up as user annotations in torch.profiler traces."""

    def start(self, message: str, color: int) -> Any:
        from torch.profiler import record_function

        handle = record_function(message)
        handle.__enter__()
        return handle

    def end(self, handle: Any) -> None:
        handle.__exit__(None, None, None)


class NvtxTracer(RangeTracer):
    """NVTX ranges for Nsight Systems. torch's nvtx bindings carry no color."""

    def start(self, message: str, color: int) -> Any:
        import torch

        range_id = torch.cuda.nvtx.range_start(message)
        if range_id is None:
            raise RuntimeError("Start range is invalid.")
        return range_id

    def end(self, handle: Any) -> None:
        import torch

        torch.cuda.nvtx.range_end(handle)


_TRACERS = {
    "torch": TorchProfilerTracer,
    "nvtx": NvtxTracer,
}


def make_tracer(name: str) -> RangeTracer:
    if name not in _TRACERS:
        raise ValueError(
            f"Unknown profiler backend '{name}'. Expected one of {sorted(_TRACERS)}"
        )
    return _TRACERS[name]()


class ProfiledRange:
    """
    Brackets one operator run with a tracing range named after the op type.

    Use as a context manager. The range is closed on every exit path,
    including exceptions. When `enabled` is False nothing is opened and the
    tracer is never touched. A ProfiledRange maps to exactly one run: it
    cannot be copied or entered a second time.
    """

    __slots__ = ("_message", "_color", "_enabled", "_tracer", "_handle", "_used")

    def __init__(
        self,
        op_def: OperatorDef,
        color: int,
        enabled: bool = False,
        tracer: Optional[RangeTracer] = None,
    ):
        self._message = op_def.type
        self._color = color
        self._enabled = enabled and tracer is not None
        self._tracer = tracer
        self._handle = None
        self._used = False

    def __enter__(self):
        if self._used:
            raise RuntimeError("ProfiledRange cannot be entered more than once")
        self._used = True
        if self._enabled:
            self._handle = self._tracer.start(self._message, self._color)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._enabled and self._handle is not None:
            handle, self._handle = self._handle, None
            self._tracer.end(handle)
        return False

    @property
    def is_open(self) -> bool:
        return self._handle is not None

    def __copy__(self):
        raise TypeError("ProfiledRange is not copyable")

    def __deepcopy__(self, memo):
        raise TypeError("ProfiledRange is not copyable")

    def __reduce__(self):
        raise TypeError("ProfiledRange is not copyable")
