"""
TimeManager — 每步时间预算的计算入口。

每步搜索开始前调用一次 initialize()，得到两个值：

- **optimum**：鼓励搜索在其附近结束的目标用时
- **maximum**：本步搜索绝不能超过的硬上限

核心流程：

1. **记录开始时间**：无论是否有时钟，都记录本步的 start_time
2. **节点计时换算**（nodestime != 0）：整盘棋只从时钟换算一次节点配额，
   之后每步把剩余时间替换为剩余配额，增量按 nodestime 缩放
3. **time_left**：扣除延迟预留后分摊到视野上的可用时间
4. **缩放系数**：sudden death 用可调参数表，movestogo 用固定常数
5. **结果组装**：optimum / maximum（带硬上限和固定安全余量），ponder 加成

状态（TimeState）由会话持有、按引用传入；TimeManager 自身只持有
可调系数表和时钟源。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from timeman.budget.formulas import Regime, compute_time_left, horizon, scale_factors
from timeman.clock import Clock, MonotonicClock
from timeman.config.defaults import FIXED_SAFETY_MS, PONDER_DIVISOR
from timeman.config.schema import EngineOptions, TuningConfig
from timeman.errors import EffortModeError, InvalidStepError
from timeman.models.limits import Color, StepLimits
from timeman.models.state import TimeState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BudgetResult:
    """
    一步的时间预算。

    这是 TimeManager.initialize() 的返回值。节点计时模式下，
    optimum / maximum / time_left 的单位是节点而不是毫秒。

    属性:
        optimum: 目标用时
        maximum: 硬上限（>= 0）
        limits: 本步实际使用的时钟限制；节点计时模式下是换算后的副本
        regime: 使用的时间控制类型
        time_left: 扣除延迟预留后的可用时间（NO_CLOCK 时为 0）
        opt_scale: optimum 的缩放系数
        max_scale: maximum 的缩放系数
        warnings: 警告信息（例如 optimum 超过了 maximum）
    """

    optimum: int
    maximum: int
    limits: StepLimits
    regime: Regime
    time_left: int = 0
    opt_scale: float = 0.0
    max_scale: float = 0.0
    warnings: tuple[str, ...] = ()


class TimeManager:
    """
    时间预算计算器。

    用法::

        state = TimeState()
        tm = TimeManager(state=state)

        result = tm.initialize(limits, Color.WHITE, ply=12, options=EngineOptions())
        tm.optimum(), tm.maximum()

        # 搜索中随时查询已用时间（节点计时模式下传入已搜索节点数）
        tm.elapsed(nodes_searched)
    """

    def __init__(
        self,
        state: TimeState | None = None,
        tuning: TuningConfig | None = None,
        clock: Clock | None = None,
    ) -> None:
        """
        初始化 TimeManager。

        参数:
            state: 会话级状态；None 时创建新的 TimeState
            tuning: sudden death 公式的可调系数表
            clock: 时钟源，默认 MonotonicClock
        """
        self.state = state if state is not None else TimeState()
        self.tuning = tuning or TuningConfig()
        self.clock: Clock = clock or MonotonicClock()

    def optimum(self) -> int:
        return self.state.optimum_time

    def maximum(self) -> int:
        return self.state.maximum_time

    def elapsed(self, nodes: int = 0) -> int:
        """
        本步已用的时间。

        节点计时模式下直接返回调用方传入的节点数，否则返回
        当前时钟读数与 start_time 之差（毫秒）。不修改任何状态。
        """
        if self.state.use_nodes_time:
            return nodes
        return self.clock.now() - self.state.start_time

    def reset(self) -> None:
        """新对局开始时调用：下一次进入节点计时模式时重新从时钟换算配额。"""
        self.state.available_nodes = 0

    def advance_effort(self, nodes: int) -> None:
        """
        调整整盘棋的节点配额。

        参数:
            nodes: 增加的节点数（可以为负）

        异常:
            EffortModeError: 未处于节点计时模式
        """
        if not self.state.use_nodes_time:
            raise EffortModeError(
                what="advance_effort() 只能在 nodes-as-time 模式下调用。",
                why="本会话还没有以非 0 的 nodestime 调用过 initialize()。",
                how="在配置中设置 options.nodestime > 0，或不要调用 advance_effort()。",
                details={"nodes": nodes},
            )
        self.state.available_nodes += nodes

    def initialize(
        self,
        limits: StepLimits,
        side: Color,
        ply: int,
        options: EngineOptions | None = None,
    ) -> BudgetResult:
        """
        计算本步的 optimum 和 maximum。

        参数:
            limits: 本步的时钟限制（不会被修改）
            side: 执棋方
            ply: 当前半回合序号（>= 0）
            options: 引擎选项；None 时使用默认值

        返回:
            BudgetResult；剩余时间为 0 时 regime 为 NO_CLOCK，
            且 optimum / maximum 保持上一次的值

        异常:
            InvalidStepError: ply 为负数
        """
        if ply < 0:
            raise InvalidStepError(
                what=f"ply 必须是非负整数，实际为 {ply}。",
                how="从 0 开始计数当前对局的半回合。",
                ply=ply,
            )

        st = self.state
        options = options or EngineOptions()

        # movetime 等外部模式也需要开始时间
        st.start_time = limits.start_time
        if limits.time_for(side) == 0:
            return BudgetResult(
                optimum=st.optimum_time,
                maximum=st.maximum_time,
                limits=limits,
                regime=Regime.NO_CLOCK,
            )

        move_overhead = options.move_overhead
        npmsec = options.nodestime
        warnings: list[str] = []

        # 节点计时：npmsec 必须远低于引擎的实际速度，否则会超时
        if npmsec:
            st.use_nodes_time = True

            # 配额恰好为 0（新对局或结转后刚好用完）时重新从时钟换算
            if not st.available_nodes:
                st.available_nodes = npmsec * limits.time_for(side)
                logger.debug(
                    "[TimeManager] 节点配额初始化：%d nodes（%d ms × %d nodes/ms）",
                    st.available_nodes,
                    limits.time_for(side),
                    npmsec,
                )

            nodes_left = st.available_nodes
            if nodes_left < 0:
                warnings.append(
                    f"节点配额已耗尽（{nodes_left:,} nodes），本步按 1 个节点的剩余时间计算。"
                )
                nodes_left = 1

            limits = limits.with_side(
                side,
                time=nodes_left,
                inc=limits.inc_for(side) * npmsec,
                npmsec=npmsec,
            )
            st.npmsec = npmsec

        time = limits.time_for(side)
        inc = limits.inc_for(side)
        mtg = horizon(limits.movestogo)
        time_left = compute_time_left(time, inc, mtg, move_overhead)

        scales = scale_factors(time, inc, limits.movestogo, ply, time_left, self.tuning)

        optimum = int(scales.opt_scale * time_left)
        maximum = int(
            min(self.tuning.f1 * time - move_overhead, scales.max_scale * optimum)
        ) - FIXED_SAFETY_MS
        maximum = max(0, maximum)

        if options.ponder:
            optimum += optimum // PONDER_DIVISOR

        if optimum > maximum:
            warnings.append(
                f"optimum（{optimum}）超过了 maximum（{maximum}），"
                f"搜索会在到达 optimum 之前被 maximum 截停。"
            )

        st.optimum_time = optimum
        st.maximum_time = maximum

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                "[TimeManager] %s ply=%d %s：time=%d inc=%d mtg=%d time_left=%d "
                "opt_scale=%.5f max_scale=%.3f → optimum=%d maximum=%d",
                side.value,
                ply,
                scales.regime.value,
                time,
                inc,
                mtg,
                time_left,
                scales.opt_scale,
                scales.max_scale,
                optimum,
                maximum,
            )

        return BudgetResult(
            optimum=optimum,
            maximum=maximum,
            limits=limits,
            regime=scales.regime,
            time_left=time_left,
            opt_scale=scales.opt_scale,
            max_scale=scales.max_scale,
            warnings=tuple(warnings),
        )
