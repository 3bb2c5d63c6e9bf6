"""
可观测性模块 — 时间预算的指标收集。

- metrics.py: MetricsCollector、MetricsSummary、MetricPoint
"""

from timeman.observability.metrics import MetricPoint, MetricsCollector, MetricsSummary

__all__ = [
    "MetricPoint",
    "MetricsCollector",
    "MetricsSummary",
]
