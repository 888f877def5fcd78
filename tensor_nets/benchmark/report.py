from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..ops.cost import Cost

# (metric name, unit, normalizer). A normalizer of None means 1 / main_runs.
METRICS: List[Tuple[str, str, Optional[float]]] = [
    ("Time", "ms", None),
    ("FLOP", "GFLOP", 1.0e-9),
    ("Feature Memory", "MB", 1.0e-6),
    ("Parameter Memory", "MB", 1.0e-6),
]


@dataclass
class OperatorStats:
    index: int
    name: str
    op_type: str
    total_ms: float = 0.0
    cost: Optional[Cost] = None


@dataclass
class MetricTable:
    metric: str
    unit: str
    # (op_type, normalized value), largest first
    rows: List[Tuple[str, float]] = field(default_factory=list)
    total: float = 0.0

    def percentages(self) -> List[Tuple[str, float]]:
        if self.total <= 0.0:
            return [(op_type, 0.0) for op_type, _ in self.rows]
        return [(op_type, 100.0 * value / self.total) for op_type, value in self.rows]


class BenchmarkReport:
    """
    Statistics gathered by a net benchmark.

    Per-type dicts keep insertion order, which is the order op types were first
    met while walking the net; that order breaks ties when sorting.
    """

    def __init__(self, net_name: str, main_runs: int):
        self.net_name = net_name
        self.main_runs = main_runs
        self.total_ms = 0.0
        self.operators: List[OperatorStats] = []
        self.per_op_type: Dict[str, Dict[str, float]] = {m[0]: {} for m in METRICS}

    @property
    def ms_per_iter(self) -> float:
        if self.main_runs == 0:
            return float("nan")
        return self.total_ms / self.main_runs

    @property
    def iters_per_second(self) -> float:
        if self.main_runs == 0 or self.total_ms <= 0.0:
            return float("nan")
        return 1000.0 * self.main_runs / self.total_ms

    def add_operator(self, index: int, name: str, op_type: str) -> OperatorStats:
        stats = OperatorStats(index, name, op_type)
        self.operators.append(stats)
        return stats

    def record_time(self, index: int, ms: float):
        stats = self.operators[index]
        stats.total_ms += ms
        times = self.per_op_type["Time"]
        times[stats.op_type] = times.get(stats.op_type, 0.0) + ms

    def record_cost(self, index: int, cost: Cost):
        stats = self.operators[index]
        stats.cost = cost
        for metric, value in (
            ("FLOP", cost.flops),
            ("Feature Memory", cost.bytes_moved),
            ("Parameter Memory", cost.params_bytes),
        ):
            per_type = self.per_op_type[metric]
            per_type[stats.op_type] = per_type.get(stats.op_type, 0.0) + value

    def average_ms(self, index: int) -> float:
        if self.main_runs == 0:
            return float("nan")
        return self.operators[index].total_ms / self.main_runs

    def metric_table(self, metric: str) -> MetricTable:
        for name, unit, normalizer in METRICS:
            if name == metric:
                break
        else:
            raise KeyError(f"Unknown metric '{metric}'")

        if normalizer is None:
            normalizer = 1.0 / self.main_runs if self.main_runs else 0.0

        items = list(self.per_op_type[metric].items())
        # sorted() is stable, so equal values keep traversal order
        items = sorted(items, key=lambda item: item[1], reverse=True)
        rows = [(op_type, value * normalizer) for op_type, value in items]
        return MetricTable(metric, unit, rows, sum(v for _, v in rows))

    def metric_percentages(self, metric: str) -> Dict[str, float]:
        return dict(self.metric_table(metric).percentages())

    def format_operator(self, stats: OperatorStats) -> str:
        avg_ms = self.average_ms(stats.index)
        line = (
            f"Operator #{stats.index} ({stats.name}, {stats.op_type}) "
            f"{avg_ms:.6f} ms/iter"
        )
        cost = stats.cost
        if cost is None:
            return line
        if cost.flops:
            line += f" ({1.0e-9 * cost.flops:.6f} GFLOP"
            if avg_ms > 0.0:
                line += f", {1.0e-6 * cost.flops / avg_ms:.6f} GFLOPS"
            line += ")"
        if cost.bytes_moved:
            line += f" ({1.0e-6 * cost.bytes_moved:.6f} MB)"
        if cost.params_bytes:
            line += f" ({1.0e-6 * cost.params_bytes:.6f} MB params)"
        return line

    def format_table(self, table: MetricTable) -> List[str]:
        lines = [f"{table.metric} per operator type:"]
        for (op_type, value), (_, percent) in zip(table.rows, table.percentages()):
            lines.append(f"{value:>15.6g} {table.unit}. {percent:>10.4g}%. {op_type}")
        lines.append(f"{table.total:>15.6g} {table.unit} in Total")
        return lines

    def format(self) -> List[str]:
        lines = [self.format_operator(stats) for stats in self.operators]
        for metric, _, _ in METRICS:
            lines.extend(self.format_table(self.metric_table(metric)))
        return lines

    def __str__(self):
        return "\n".join(self.format())
