"""
测试套件共享 Fixtures。

时间相关的测试全部使用 ManualClock，保证 elapsed() 的结果确定。
"""

from __future__ import annotations

import pytest

from timeman.budget.manager import TimeManager
from timeman.clock import ManualClock
from timeman.config.schema import EngineOptions, TimemanConfig, TuningConfig
from timeman.models.limits import Color, StepLimits
from timeman.models.state import TimeState
from timeman.session import GameSession


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock(start=10_000)


@pytest.fixture
def state() -> TimeState:
    return TimeState()


@pytest.fixture
def tuning() -> TuningConfig:
    return TuningConfig()


@pytest.fixture
def manager(state: TimeState, tuning: TuningConfig, clock: ManualClock) -> TimeManager:
    return TimeManager(state=state, tuning=tuning, clock=clock)


@pytest.fixture
def no_overhead() -> EngineOptions:
    """move_overhead = 0，便于手算期望值。"""
    return EngineOptions(move_overhead=0)


@pytest.fixture
def nodes_options() -> EngineOptions:
    """nodestime = 1000 nodes/ms 的 nodes-as-time 选项。"""
    return EngineOptions(move_overhead=0, nodestime=1000)


@pytest.fixture
def session(clock: ManualClock) -> GameSession:
    s = GameSession(config=TimemanConfig(), clock=clock)
    s.new_game()
    return s


def make_limits(
    time: int,
    inc: int = 0,
    movestogo: int = 0,
    start_time: int = 10_000,
    side: Color = Color.WHITE,
) -> StepLimits:
    """构造一方有时钟、另一方也有相同时钟的 StepLimits。"""
    return StepLimits(
        time={side: time, side.opponent: time},
        inc={side: inc, side.opponent: inc},
        movestogo=movestogo,
        start_time=start_time,
    )
