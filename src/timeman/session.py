"""
GameSession — 一盘棋的时间管理会话。

会话持有整盘棋共享的 TimeState，并把它交给 TimeManager。
每一步的生命周期::

    session = GameSession(config=load_config())
    session.new_game()

    result = session.start_step(limits, Color.WHITE, ply)
    ...  # 搜索：读取 result.optimum / result.maximum，查询 session.elapsed(nodes)
    session.finish_step(nodes_searched)

节点计时模式下，finish_step() 会把"本步增量 - 实际搜索节点"记入
整盘棋的节点配额，这是配额在第一步之后唯一的调整途径。
"""

from __future__ import annotations

import logging
from dataclasses import replace

from timeman.budget.formulas import Regime
from timeman.budget.manager import BudgetResult, TimeManager
from timeman.clock import Clock, MonotonicClock
from timeman.config.schema import TimemanConfig
from timeman.errors import SessionStateError
from timeman.models.limits import Color, StepLimits
from timeman.models.state import TimeState
from timeman.observability.metrics import MetricsCollector

logger = logging.getLogger(__name__)


class GameSession:
    """
    对局会话。

    参数:
        config: 完整配置（引擎选项 + 可调系数）；None 时使用默认值
        clock: 时钟源，默认 MonotonicClock
        metrics_collector: 指标收集器；None 且 collect_metrics=True 时自动创建
        collect_metrics: 是否收集指标
    """

    def __init__(
        self,
        config: TimemanConfig | None = None,
        clock: Clock | None = None,
        metrics_collector: MetricsCollector | None = None,
        collect_metrics: bool = True,
    ) -> None:
        self.config = config or TimemanConfig()
        self.clock: Clock = clock or MonotonicClock()
        self.state = TimeState()
        self.manager = TimeManager(state=self.state, tuning=self.config.tuning, clock=self.clock)

        self.metrics: MetricsCollector | None = None
        if collect_metrics:
            self.metrics = metrics_collector or MetricsCollector()

        self._step: BudgetResult | None = None
        self._side: Color | None = None

    @property
    def current(self) -> BudgetResult | None:
        """正在进行的一步的预算，步与步之间为 None。"""
        return self._step

    def new_game(self) -> None:
        """开始新的一盘棋。"""
        self.manager.reset()
        self._step = None
        self._side = None
        logger.info("新对局开始（nodestime=%d）", self.config.options.nodestime)

    def start_step(self, limits: StepLimits, side: Color, ply: int) -> BudgetResult:
        """
        计算本步预算。

        limits.start_time 为 0 时用会话时钟的当前读数作为开始时间。

        参数:
            limits: 本步的时钟限制
            side: 执棋方
            ply: 当前半回合序号

        返回:
            BudgetResult
        """
        if not limits.start_time:
            limits = replace(limits, start_time=self.clock.now())

        result = self.manager.initialize(limits, side, ply, self.config.options)
        self._step = result
        self._side = side

        if self.metrics is not None:
            self.metrics.collect_from_result(result, side)

        for warning in result.warnings:
            logger.warning("[GameSession] ply=%d：%s", ply, warning)

        return result

    def finish_step(self, nodes_searched: int = 0) -> int:
        """
        结束本步。

        参数:
            nodes_searched: 本步实际搜索的节点数

        返回:
            本步用时（毫秒；节点计时模式下为节点数）

        异常:
            SessionStateError: 没有正在进行的一步
        """
        if self._step is None or self._side is None:
            raise SessionStateError(
                what="finish_step() 之前没有调用 start_step()。",
                how="每一步先调用 start_step()，搜索结束后再调用一次 finish_step()。",
            )

        step, side = self._step, self._side
        spent = self.manager.elapsed(nodes_searched)

        if step.limits.npmsec:
            self.manager.advance_effort(step.limits.inc_for(side) - nodes_searched)
            logger.debug(
                "[GameSession] 节点配额结转：+%d - %d → %d",
                step.limits.inc_for(side),
                nodes_searched,
                self.state.available_nodes,
            )

        if self.metrics is not None and step.regime is not Regime.NO_CLOCK:
            self.metrics.record(
                "elapsed_ms",
                float(spent),
                tags={"side": side.value, "regime": step.regime.value},
            )

        self._step = None
        self._side = None
        return spent

    def elapsed(self, nodes: int = 0) -> int:
        return self.manager.elapsed(nodes)

    def optimum(self) -> int:
        return self.manager.optimum()

    def maximum(self) -> int:
        return self.manager.maximum()
