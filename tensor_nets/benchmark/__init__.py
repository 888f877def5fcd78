from .timer import Timer
from .report import BenchmarkReport, MetricTable, OperatorStats, METRICS
from .env import EnvironmentSniffer

__all__ = [
    "Timer",
    "BenchmarkReport",
    "MetricTable",
    "OperatorStats",
    "METRICS",
    "EnvironmentSniffer",
]
