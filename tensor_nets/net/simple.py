# tensor_nets/net/simple.py
from typing import List, Optional, Tuple

from tqdm import tqdm

from ..benchmark.env import EnvironmentSniffer
from ..benchmark.report import BenchmarkReport
from ..benchmark.timer import Timer
from ..config import ExecutorConfig
from ..errors import enforce
from ..ir.net_def import NetDef
from ..ops.cost import Cost, get_cost_function
from ..ops.operator import Operator
from ..ops.registry import create_operator
from ..profiling import ProfiledRange, RUN_COLOR
from .base import NetBase, register_net


@register_net("simple")
class SimpleNet(NetBase):
    """
    Runs the operators of a net one after another, in the order of the NetDef.

    `run_async` blocks exactly like `run`. When an operator fails, `run`
    returns False without firing the stop notification: observers see a
    start with no matching stop for that run.
    """

    def __init__(self, net_def: NetDef, ws, config: Optional[ExecutorConfig] = None):
        super().__init__(net_def, ws, config)
        debug = self.config.debug_execution
        if debug:
            print(f"[SimpleNet] Constructing SimpleNet {net_def.name}")

        operators = []
        for idx, op_def in enumerate(net_def.ops):
            if debug:
                print(f"[SimpleNet] Creating operator {op_def.name}: {op_def.type}")
            if not op_def.has_device_option() and net_def.has_device_option():
                # The operator owns the placed copy; net_def is left untouched.
                op = create_operator(
                    op_def.with_device_option(net_def.device_option), ws, idx
                )
            else:
                op = create_operator(op_def, ws, idx)
                op.set_debug_def(net_def.ops[idx])
            operators.append(op)

        self.operators: Tuple[Operator, ...] = tuple(operators)
        self.last_benchmark_report: Optional[BenchmarkReport] = None
        self._tracer = (
            self.config.get_tracer() if self.config.use_profiled_ranges else None
        )

    def __len__(self):
        return len(self.operators)

    def _run_operator(self, op: Operator) -> bool:
        with ProfiledRange(
            op.debug_def,
            RUN_COLOR,
            enabled=self.config.use_profiled_ranges,
            tracer=self._tracer,
        ):
            return op.run()

    def run(self) -> bool:
        self.start_all_observers()
        debug = self.config.debug_execution
        detailed = debug and self.config.debug_detailed
        if debug:
            print(f"[SimpleNet.run] Running net {self.name}")
        for op in self.operators:
            if debug:
                print(
                    f"[SimpleNet.run] Running operator "
                    f"{op.debug_def.name}({op.debug_def.type})."
                )
            if detailed:
                print(f"[SimpleNet.run] Inputs: {op.input_tensor_shapes()}")
            self.operator_start_all_observers(op)
            success = self._run_operator(op)
            self.operator_done_all_observers(op)
            if not success:
                print(f"[SimpleNet.run] Operator failed:\n{op.debug_def.get_details()}")
                return False
        self.stop_all_observers()
        return True

    def run_async(self) -> bool:
        return self.run()

    def _report(self, message: str):
        if self.config.print_benchmark_report:
            print(message)

    def _infer_cost(self, op: Operator) -> Optional[Cost]:
        cost_fn = get_cost_function(op.type)
        if cost_fn is None:
            return None
        return cost_fn(op.debug_def, op.input_tensor_shapes())

    def benchmark(
        self, warmup_runs: int = 0, main_runs: int = 1, run_individual: bool = False
    ) -> List[float]:
        """
        Times the net and, with `run_individual`, every operator.

        Returns the mean milliseconds per iteration followed, in detail mode,
        by the mean milliseconds of each operator. Any failing run raises
        EnforceError.
        """
        enforce(
            warmup_runs >= 0,
            "Number of warm up runs should be non negative, provided ",
            warmup_runs,
            ".",
        )
        enforce(
            main_runs >= 0,
            "Number of main runs should be non negative, provided ",
            main_runs,
            ".",
        )
        hide_progress = not self.config.show_progress

        self._report(f"Starting benchmark of net {self.name}.")
        if self.config.print_benchmark_report:
            for line in EnvironmentSniffer.describe():
                print(line)

        self._report("Running warmup runs.")
        for i in tqdm(range(warmup_runs), desc="Warmup", disable=hide_progress):
            enforce(self.run(), "Warmup run ", i, " has failed.")

        self._report("Main runs.")
        report = BenchmarkReport(self.name, main_runs)
        timer = Timer()
        for i in tqdm(range(main_runs), desc="Main runs", disable=hide_progress):
            enforce(self.run(), "Main run ", i, " has failed.")
        report.total_ms = timer.milliseconds()
        self._report(
            f"Main run finished. Milliseconds per iter: {report.ms_per_iter}. "
            f"Iters per second: {report.iters_per_second}"
        )

        if run_individual:
            for idx, op in enumerate(self.operators):
                report.add_operator(idx, op.debug_def.display_name, op.type)

            for i in tqdm(range(main_runs), desc="Per-operator", disable=hide_progress):
                for op in self.operators:
                    op.reset_event()
                for idx, op in enumerate(self.operators):
                    # Costs depend on input shapes only; gather them once.
                    if i == 0:
                        cost = self._infer_cost(op)
                        if cost is not None:
                            report.record_cost(idx, cost)
                    timer.start()
                    enforce(
                        self._run_operator(op),
                        "Operator ",
                        op.debug_def.name,
                        "(",
                        op.type,
                        ") has failed.",
                    )
                    report.record_time(idx, timer.milliseconds())

            for line in report.format():
                self._report(line)

        self.last_benchmark_report = report
        return [report.ms_per_iter] + [
            report.average_ms(idx) for idx in range(len(report.operators))
        ]
