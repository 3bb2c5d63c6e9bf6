"""
MetricsCollector — 时间预算的指标收集与统计。

记录每步分配的 optimum / maximum / time_left 以及实际用时，
用于对比"分配了多少"和"用了多少"，评估参数表调整的效果。

指标数据保存在内存中的循环缓冲区（deque with maxlen），
一整盘甚至多盘棋都不会无限增长。
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from timeman.budget.formulas import Regime

if TYPE_CHECKING:
    from timeman.budget.manager import BudgetResult
    from timeman.models.limits import Color


@dataclass
class MetricPoint:
    """
    单个指标数据点。

    属性:
        name: 指标名称
        value: 指标值
        timestamp: 时间戳
        tags: 标签（用于分组和过滤）
    """

    name: str
    value: float
    timestamp: float = field(default_factory=time.time)
    tags: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class MetricsSummary:
    """指标汇总统计。"""

    metric_name: str
    count: int
    min: float
    max: float
    mean: float
    p50: float
    p95: float
    p99: float


class MetricsCollector:
    """
    指标收集器。

    基本用法::

        collector = MetricsCollector(max_points=10000)

        result = tm.initialize(limits, Color.WHITE, ply)
        collector.collect_from_result(result, Color.WHITE)
        collector.record("elapsed_ms", 812.0, tags={"side": "white"})

        summary = collector.summary("optimum_ms")
        print(f"P95 optimum: {summary.p95:.0f}ms")
    """

    def __init__(self, max_points: int = 10000) -> None:
        """
        参数:
            max_points: 每个指标保留的最大数据点数量（循环缓冲区大小）
        """
        self.max_points = max_points
        self.metrics: dict[str, deque[MetricPoint]] = {}

    def record(
        self,
        name: str,
        value: float,
        tags: dict[str, str] | None = None,
    ) -> None:
        """记录一个指标数据点。"""
        if name not in self.metrics:
            self.metrics[name] = deque(maxlen=self.max_points)

        self.metrics[name].append(MetricPoint(name=name, value=value, tags=tags or {}))

    def collect_from_result(self, result: BudgetResult, side: Color) -> None:
        """
        从 BudgetResult 提取并记录指标。

        提取的指标包括:
        - optimum_ms: 目标用时
        - maximum_ms: 硬上限
        - time_left_ms: 扣除延迟预留后的可用时间

        节点计时模式下这些值的单位是节点，标签 unit 会标为 "nodes"。
        NO_CLOCK 的步不产生新预算，不记录。

        参数:
            result: TimeManager.initialize() 的返回值
            side: 执棋方
        """
        if result.regime is Regime.NO_CLOCK:
            return

        tags = {
            "side": side.value,
            "regime": result.regime.value,
            "unit": "nodes" if result.limits.npmsec else "ms",
        }
        self.record("optimum_ms", float(result.optimum), tags=tags)
        self.record("maximum_ms", float(result.maximum), tags=tags)
        self.record("time_left_ms", float(result.time_left), tags=tags)

        if result.warnings:
            self.record("warning_count", float(len(result.warnings)), tags=tags)

    def summary(
        self,
        name: str,
        tags: dict[str, str] | None = None,
    ) -> MetricsSummary | None:
        """
        获取指标的汇总统计。

        参数:
            name: 指标名称
            tags: 标签过滤条件（只统计匹配的数据点）

        返回:
            MetricsSummary 实例，如果指标不存在则返回 None
        """
        if name not in self.metrics:
            return None

        points = self.metrics[name]
        if tags:
            points = deque(p for p in points if self._match_tags(p.tags, tags))

        if not points:
            return None

        values = sorted(p.value for p in points)
        count = len(values)

        return MetricsSummary(
            metric_name=name,
            count=count,
            min=values[0],
            max=values[-1],
            mean=sum(values) / count,
            p50=self._percentile(values, 0.50),
            p95=self._percentile(values, 0.95),
            p99=self._percentile(values, 0.99),
        )

    def export(self) -> dict[str, list[dict[str, Any]]]:
        """导出所有指标数据（指标名 -> 数据点列表）。"""
        return {
            name: [
                {"value": p.value, "timestamp": p.timestamp, "tags": p.tags}
                for p in points
            ]
            for name, points in self.metrics.items()
        }

    def reset(self) -> None:
        """清空所有指标数据。"""
        self.metrics.clear()

    def get_metric_names(self) -> list[str]:
        return list(self.metrics.keys())

    def get_point_count(self, name: str) -> int:
        if name not in self.metrics:
            return 0
        return len(self.metrics[name])

    # --- 内部方法 ---

    def _percentile(self, values: list[float], p: float) -> float:
        """线性插值的百分位数，values 必须已排序。"""
        if not values:
            return 0.0

        if p <= 0:
            return values[0]
        if p >= 1:
            return values[-1]

        index = p * (len(values) - 1)
        lower_index = int(index)
        upper_index = lower_index + 1

        if upper_index >= len(values):
            return values[lower_index]

        fraction = index - lower_index
        return values[lower_index] * (1 - fraction) + values[upper_index] * fraction

    def _match_tags(self, point_tags: dict[str, str], filter_tags: dict[str, str]) -> bool:
        return all(point_tags.get(k) == v for k, v in filter_tags.items())
