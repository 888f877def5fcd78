from dataclasses import dataclass, field
from typing import Any, Optional

DEBUG_EXECUTION = False
DEBUG_DETAILED = False

# Open a tracing range around every operator run ("torch" or "nvtx").
USE_PROFILED_RANGES = False
PROFILER_BACKEND = "torch"

# tqdm progress bars for benchmark warmup / main loops
SHOW_PROGRESS = False

PRINT_BENCHMARK_REPORT = True


@dataclass
class ExecutorConfig:
    """
    Per-net configuration. Defaults are read from the module flags when the
    config is created; nets only ever look at the config they were given.
    """

    debug_execution: bool = field(default_factory=lambda: DEBUG_EXECUTION)
    debug_detailed: bool = field(default_factory=lambda: DEBUG_DETAILED)
    use_profiled_ranges: bool = field(default_factory=lambda: USE_PROFILED_RANGES)
    profiler_backend: str = field(default_factory=lambda: PROFILER_BACKEND)
    show_progress: bool = field(default_factory=lambda: SHOW_PROGRESS)
    print_benchmark_report: bool = field(
        default_factory=lambda: PRINT_BENCHMARK_REPORT
    )
    # RangeTracer instance; built from profiler_backend when left as None
    tracer: Optional[Any] = None

    def get_tracer(self):
        if self.tracer is None:
            from .profiling import make_tracer

            self.tracer = make_tracer(self.profiler_backend)
        return self.tracer
