import time
import pytest
from tensor_nets.config import ExecutorConfig
from tensor_nets.ir.dtypes import Backend
from tensor_nets.ops.cost import Cost, register_cost_function
from tensor_nets.ops.operator import Operator
from tensor_nets.ops.registry import OperatorRegistry
from tensor_nets.profiling import RangeTracer
from tensor_nets.workspace import Workspace

CALL_LOG = "call_log"


def _log_call(op):
    op.ws.fetch_blob(CALL_LOG).append(op.debug_def.name)


@OperatorRegistry.register("RecordCall", backend=Backend.CPU_NUMPY)
@OperatorRegistry.register("RecordCall", backend=Backend.CPU_TORCH)
class RecordCallOp(Operator):
    def run_on_device(self) -> bool:
        _log_call(self)
        return True


@OperatorRegistry.register("FailCall", backend=Backend.CPU_NUMPY)
class FailCallOp(Operator):
    def run_on_device(self) -> bool:
        _log_call(self)
        return False


@OperatorRegistry.register("FailAfter", backend=Backend.CPU_NUMPY)
class FailAfterOp(Operator):
    """Succeeds for the first `calls` runs, fails afterwards."""

    def __init__(self, op_def, ws, net_position=0):
        super().__init__(op_def, ws, net_position)
        self.calls = 0

    def run_on_device(self) -> bool:
        self.calls += 1
        return self.calls <= self.get_arg("calls", 1)


@OperatorRegistry.register("SleepCall", backend=Backend.CPU_NUMPY)
class SleepCallOp(Operator):
    def run_on_device(self) -> bool:
        time.sleep(self.get_arg("ms", 1.0) / 1000.0)
        return True


@OperatorRegistry.register("BrokenInit", backend=Backend.CPU_NUMPY)
class BrokenInitOp(Operator):
    def __init__(self, op_def, ws, net_position=0):
        raise ValueError("bad arguments")

    def run_on_device(self) -> bool:
        return True


@register_cost_function("SleepCall")
def sleep_call_cost(op_def, input_shapes):
    return Cost(
        flops=op_def.get_arg("flops", 0),
        bytes_moved=op_def.get_arg("bytes", 0),
        params_bytes=op_def.get_arg("params", 0),
    )


class RecordingTracer(RangeTracer):
    def __init__(self):
        self.events = []
        self._next = 0

    def start(self, message, color):
        self._next += 1
        self.events.append(("start", message, color, self._next))
        return self._next

    def end(self, handle):
        self.events.append(("end", handle))

    @property
    def open_ranges(self):
        started = {e[3] for e in self.events if e[0] == "start"}
        ended = {e[1] for e in self.events if e[0] == "end"}
        return started - ended


@pytest.fixture
def config():
    return ExecutorConfig(
        debug_execution=False,
        use_profiled_ranges=False,
        show_progress=False,
        print_benchmark_report=True,
    )


@pytest.fixture
def ws(config):
    workspace = Workspace(config)
    workspace.feed_blob(CALL_LOG, [])
    return workspace


@pytest.fixture
def tracer():
    return RecordingTracer()
