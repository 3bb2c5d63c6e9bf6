"""
TimeManager 单元测试。

覆盖范围:
- budget/manager.py: TimeManager.initialize / optimum / maximum / elapsed /
  reset / advance_effort, BudgetResult
"""

from __future__ import annotations

import math

import pytest

from tests.conftest import make_limits
from timeman.budget.formulas import Regime
from timeman.budget.manager import BudgetResult, TimeManager
from timeman.clock import ManualClock
from timeman.config.schema import EngineOptions, TuningConfig
from timeman.errors import EffortModeError, InvalidStepError
from timeman.models.limits import Color, StepLimits
from timeman.models.state import TimeState


# === 基础行为 ===


class TestInitializeBasics:
    """initialize() 的基本返回值。"""

    def test_returns_budget_result(self, manager: TimeManager, no_overhead: EngineOptions) -> None:
        result = manager.initialize(make_limits(60_000), Color.WHITE, 0, no_overhead)
        assert isinstance(result, BudgetResult)
        assert result.optimum == manager.optimum()
        assert result.maximum == manager.maximum()

    def test_stores_budgets_in_shared_state(
        self, manager: TimeManager, state: TimeState, no_overhead: EngineOptions
    ) -> None:
        manager.initialize(make_limits(60_000), Color.WHITE, 0, no_overhead)
        assert state.optimum_time == manager.optimum() > 0
        assert state.maximum_time == manager.maximum() > 0

    def test_default_options_used_when_none(self, manager: TimeManager) -> None:
        """不传 options 时 move_overhead 取默认值 10。"""
        result = manager.initialize(make_limits(60_000), Color.WHITE, 0)
        assert result.time_left == 60_000 - 10 * 62

    def test_negative_ply_rejected(self, manager: TimeManager) -> None:
        with pytest.raises(InvalidStepError) as exc_info:
            manager.initialize(make_limits(60_000), Color.WHITE, -1)
        assert exc_info.value.ply == -1

    def test_limits_not_mutated(self, manager: TimeManager, nodes_options: EngineOptions) -> None:
        limits = make_limits(10_000, inc=100)
        manager.initialize(limits, Color.WHITE, 0, nodes_options)
        assert limits.time_for(Color.WHITE) == 10_000
        assert limits.inc_for(Color.WHITE) == 100
        assert limits.npmsec == 0

    def test_uses_side_to_move(self, manager: TimeManager, no_overhead: EngineOptions) -> None:
        limits = StepLimits.from_clock(wtime=1_000, btime=100_000, start_time=1)
        black = manager.initialize(limits, Color.BLACK, 1, no_overhead)
        white = manager.initialize(limits, Color.WHITE, 1, no_overhead)
        assert black.time_left == 100_000
        assert white.time_left == 1_000
        assert black.optimum > white.optimum


# === 无时钟（time == 0）===


class TestNoClock:
    """剩余时间为 0 时只更新开始时间。"""

    def test_budgets_untouched(self, manager: TimeManager, no_overhead: EngineOptions) -> None:
        first = manager.initialize(make_limits(60_000), Color.WHITE, 0, no_overhead)

        result = manager.initialize(
            make_limits(0, start_time=99_999), Color.WHITE, 1, no_overhead
        )

        assert result.regime is Regime.NO_CLOCK
        assert manager.optimum() == first.optimum
        assert manager.maximum() == first.maximum
        assert result.optimum == first.optimum

    def test_start_time_still_updated(
        self, manager: TimeManager, state: TimeState, no_overhead: EngineOptions
    ) -> None:
        manager.initialize(make_limits(0, start_time=12_345), Color.WHITE, 0, no_overhead)
        assert state.start_time == 12_345

    def test_default_budgets_are_zero(self, manager: TimeManager) -> None:
        manager.initialize(make_limits(0), Color.WHITE, 0)
        assert manager.optimum() == 0
        assert manager.maximum() == 0

    def test_no_clock_does_not_enter_nodes_mode(
        self, manager: TimeManager, state: TimeState, nodes_options: EngineOptions
    ) -> None:
        manager.initialize(make_limits(0), Color.WHITE, 0, nodes_options)
        assert state.use_nodes_time is False
        assert state.available_nodes == 0


# === 规定场景 ===


class TestScenarios:
    """典型时间控制下的具体数值。"""

    def test_sudden_death_one_minute(self, manager: TimeManager, no_overhead: EngineOptions) -> None:
        """60 秒、无增量、ply 0：optimum < maximum <= 0.81 * 60000 - 10。"""
        result = manager.initialize(make_limits(60_000), Color.WHITE, 0, no_overhead)

        assert result.regime is Regime.SUDDEN_DEATH
        assert result.time_left == 60_000
        assert result.optimum < result.maximum
        assert result.maximum <= 0.81 * 60_000 - 10

    def test_sudden_death_exact_values(
        self, manager: TimeManager, no_overhead: EngineOptions
    ) -> None:
        log_time = math.log10(60.0)
        opt_constant = min(0.00344 + 0.0002 * log_time, 0.0045)
        max_constant = max(3.9 + 3.1 * log_time, 2.5)
        opt_scale = min(0.0155 + 3.0 ** 0.45 * opt_constant, 0.2)
        max_scale = min(6.5, max_constant)

        expected_optimum = int(opt_scale * 60_000)
        expected_maximum = int(min(0.81 * 60_000, max_scale * expected_optimum)) - 10

        result = manager.initialize(make_limits(60_000), Color.WHITE, 0, no_overhead)

        assert result.optimum == expected_optimum
        assert result.maximum == expected_maximum

    def test_moves_to_go(self, manager: TimeManager) -> None:
        """30 步 / 300 秒 + 3 秒增量，延迟预留 50 ms，ply 10。"""
        options = EngineOptions(move_overhead=50)
        result = manager.initialize(
            make_limits(300_000, inc=3_000, movestogo=30), Color.WHITE, 10, options
        )

        time_left = 300_000 + 3_000 * 29 - 50 * 32
        opt_scale = min((0.88 + 10 / 116.4) / 30, 0.88 * 300_000 / time_left)
        max_scale = min(6.3, 1.5 + 0.11 * 30)
        optimum = int(opt_scale * time_left)

        assert result.regime is Regime.MOVES_TO_GO
        assert result.time_left == time_left
        assert result.opt_scale == pytest.approx(opt_scale)
        assert result.max_scale == pytest.approx(max_scale)
        assert result.optimum == optimum
        assert result.optimum <= result.time_left
        assert result.maximum == int(min(0.81 * 300_000 - 50, max_scale * optimum)) - 10

    def test_movestogo_clamped_to_sixty(self, manager: TimeManager, no_overhead: EngineOptions) -> None:
        a = manager.initialize(make_limits(600_000, movestogo=60), Color.WHITE, 0, no_overhead)
        b = manager.initialize(make_limits(600_000, movestogo=90), Color.WHITE, 0, no_overhead)
        assert a.optimum == b.optimum
        assert a.maximum == b.maximum

    def test_ponder_adds_a_quarter(self, tuning: TuningConfig, clock: ManualClock) -> None:
        plain = TimeManager(state=TimeState(), tuning=tuning, clock=clock)
        ponder = TimeManager(state=TimeState(), tuning=tuning, clock=clock)
        limits = make_limits(180_000, inc=2_000)

        base = plain.initialize(limits, Color.WHITE, 20, EngineOptions(ponder=False))
        inflated = ponder.initialize(limits, Color.WHITE, 20, EngineOptions(ponder=True))

        assert inflated.optimum == base.optimum + base.optimum // 4
        assert inflated.optimum == pytest.approx(base.optimum * 1.25, abs=1)
        assert inflated.maximum == base.maximum

    def test_ponder_exactly_five_quarters(self, tuning: TuningConfig, clock: ManualClock) -> None:
        """optimum 能被 4 整除时恰好是 1.25 倍：movestogo=1 时 optimum = 0.88 * 10000 = 8800。"""
        limits = make_limits(10_000, movestogo=1)
        base = TimeManager(state=TimeState(), tuning=tuning, clock=clock).initialize(
            limits, Color.WHITE, 0, EngineOptions(move_overhead=0)
        )
        inflated = TimeManager(state=TimeState(), tuning=tuning, clock=clock).initialize(
            limits, Color.WHITE, 0, EngineOptions(move_overhead=0, ponder=True)
        )
        assert base.optimum == 8_800
        assert inflated.optimum == 11_000
        assert inflated.optimum == base.optimum * 1.25


# === maximum 上限与下限 ===


class TestMaximumBounds:
    """maximum 的硬上限与非负截断。"""

    @pytest.mark.parametrize(
        ("time", "inc", "movestogo", "ply", "overhead"),
        [
            (60_000, 0, 0, 0, 0),
            (60_000, 60_000, 0, 0, 10),
            (5_000, 20_000, 0, 80, 10),
            (300_000, 3_000, 30, 10, 50),
            (10_000, 0, 1, 0, 10),
            (1_000, 0, 2, 40, 30),
            (3_600_000, 30_000, 0, 150, 100),
        ],
    )
    def test_maximum_within_hard_ceiling(
        self,
        manager: TimeManager,
        time: int,
        inc: int,
        movestogo: int,
        ply: int,
        overhead: int,
    ) -> None:
        options = EngineOptions(move_overhead=overhead)
        result = manager.initialize(make_limits(time, inc, movestogo), Color.WHITE, ply, options)

        assert result.maximum >= 0
        assert result.maximum <= 0.81 * time - overhead

    def test_maximum_floored_at_zero(self, manager: TimeManager) -> None:
        """时间极少时公式给出负数，截断为 0。"""
        result = manager.initialize(make_limits(500), Color.WHITE, 0, EngineOptions(move_overhead=10))
        assert result.time_left == 1
        assert result.optimum == 0
        assert result.maximum == 0

    def test_huge_overhead(self, manager: TimeManager) -> None:
        result = manager.initialize(make_limits(1_000), Color.WHITE, 0, EngineOptions(move_overhead=5_000))
        assert result.maximum == 0

    def test_optimum_not_above_maximum_with_defaults(self, manager: TimeManager) -> None:
        """默认系数下 sudden death 的 optimum 不超过 maximum。"""
        for ply in range(0, 200, 7):
            for time in (3_000, 60_000, 600_000):
                result = manager.initialize(make_limits(time, inc=time // 100), Color.WHITE, ply)
                assert result.optimum <= result.maximum, (time, ply)
                assert result.warnings == ()

    def test_warning_when_optimum_exceeds_maximum(self, state: TimeState, clock: ManualClock) -> None:
        """系数被调到 maximum 不足以容纳 optimum 时，结果带警告。"""
        tm = TimeManager(state=state, tuning=TuningConfig(e1=0.5), clock=clock)
        result = tm.initialize(make_limits(60_000), Color.WHITE, 0, EngineOptions(move_overhead=0))
        assert result.optimum > result.maximum
        assert len(result.warnings) == 1
        assert "optimum" in result.warnings[0]


# === nodes-as-time ===


class TestNodesAsTime:
    """节点计时模式。"""

    def test_quota_derived_once(
        self, manager: TimeManager, state: TimeState, nodes_options: EngineOptions
    ) -> None:
        """10000 ms × 1000 nodes/ms = 10,000,000 nodes，之后不再从时钟换算。"""
        manager.initialize(make_limits(10_000), Color.WHITE, 0, nodes_options)
        assert state.use_nodes_time is True
        assert state.available_nodes == 10_000_000

        manager.initialize(make_limits(4_321), Color.WHITE, 2, nodes_options)
        assert state.available_nodes == 10_000_000

    def test_derived_limits_in_nodes(self, manager: TimeManager, nodes_options: EngineOptions) -> None:
        result = manager.initialize(make_limits(10_000, inc=100), Color.WHITE, 0, nodes_options)
        assert result.limits.time_for(Color.WHITE) == 10_000_000
        assert result.limits.inc_for(Color.WHITE) == 100_000
        assert result.limits.npmsec == 1000
        # 对手一方不换算
        assert result.limits.time_for(Color.BLACK) == 10_000
        assert result.limits.inc_for(Color.BLACK) == 100

    def test_budgets_in_nodes(self, manager: TimeManager, nodes_options: EngineOptions) -> None:
        """与把时钟直接写成节点数时得到相同的预算。"""
        nodes = manager.initialize(make_limits(10_000), Color.WHITE, 0, nodes_options)
        reference = TimeManager(state=TimeState()).initialize(
            make_limits(10_000_000), Color.WHITE, 0, EngineOptions(move_overhead=0)
        )
        assert nodes.optimum == reference.optimum
        assert nodes.maximum == reference.maximum

    def test_mode_is_sticky(
        self, manager: TimeManager, state: TimeState, nodes_options: EngineOptions
    ) -> None:
        manager.initialize(make_limits(10_000), Color.WHITE, 0, nodes_options)
        manager.initialize(make_limits(10_000), Color.WHITE, 2, EngineOptions(move_overhead=0))
        assert state.use_nodes_time is True
        assert manager.elapsed(777) == 777

    def test_reset_rederives_quota(
        self, manager: TimeManager, state: TimeState, nodes_options: EngineOptions
    ) -> None:
        manager.initialize(make_limits(10_000), Color.WHITE, 0, nodes_options)
        assert state.available_nodes == 10_000_000

        manager.reset()
        assert state.available_nodes == 0

        manager.initialize(make_limits(20_000), Color.WHITE, 0, nodes_options)
        assert state.available_nodes == 20_000_000

    def test_advance_effort_adjusts_quota(
        self, manager: TimeManager, state: TimeState, nodes_options: EngineOptions
    ) -> None:
        manager.initialize(make_limits(10_000), Color.WHITE, 0, nodes_options)
        manager.advance_effort(-2_500_000)
        assert state.available_nodes == 7_500_000

        result = manager.initialize(make_limits(10_000), Color.WHITE, 2, nodes_options)
        assert result.limits.time_for(Color.WHITE) == 7_500_000

    def test_advance_effort_requires_nodes_mode(self, manager: TimeManager) -> None:
        with pytest.raises(EffortModeError):
            manager.advance_effort(1_000)

    def test_quota_at_exactly_zero_rederived(
        self, manager: TimeManager, state: TimeState, nodes_options: EngineOptions
    ) -> None:
        """结转后配额恰好为 0 时，下一步按当前时钟重新换算。"""
        manager.initialize(make_limits(10_000), Color.WHITE, 0, nodes_options)
        manager.advance_effort(-10_000_000)
        assert state.available_nodes == 0

        result = manager.initialize(make_limits(3_000), Color.WHITE, 2, nodes_options)

        assert state.available_nodes == 3_000_000
        assert result.limits.time_for(Color.WHITE) == 3_000_000
        assert not any("节点配额" in w for w in result.warnings)

    def test_exhausted_quota_warns(
        self, manager: TimeManager, nodes_options: EngineOptions
    ) -> None:
        manager.initialize(make_limits(10_000), Color.WHITE, 0, nodes_options)
        manager.advance_effort(-12_000_000)

        result = manager.initialize(make_limits(10_000), Color.WHITE, 2, nodes_options)

        assert result.limits.time_for(Color.WHITE) == 1
        assert result.maximum == 0
        assert any("节点配额" in w for w in result.warnings)


# === elapsed ===


class TestElapsed:
    """已用时间查询。"""

    def test_wall_clock_delta(
        self, manager: TimeManager, clock: ManualClock, no_overhead: EngineOptions
    ) -> None:
        manager.initialize(make_limits(60_000, start_time=clock.now()), Color.WHITE, 0, no_overhead)
        clock.advance(1_234)
        assert manager.elapsed() == 1_234

    def test_nodes_ignored_in_time_mode(
        self, manager: TimeManager, clock: ManualClock, no_overhead: EngineOptions
    ) -> None:
        manager.initialize(make_limits(60_000, start_time=clock.now()), Color.WHITE, 0, no_overhead)
        clock.advance(50)
        assert manager.elapsed(999_999) == 50

    def test_no_side_effects(
        self, manager: TimeManager, state: TimeState, clock: ManualClock, no_overhead: EngineOptions
    ) -> None:
        manager.initialize(make_limits(60_000, start_time=clock.now()), Color.WHITE, 0, no_overhead)
        before = (state.optimum_time, state.maximum_time, state.start_time)
        for _ in range(100):
            clock.advance(3)
            manager.elapsed()
        assert (state.optimum_time, state.maximum_time, state.start_time) == before
