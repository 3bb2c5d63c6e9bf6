"""
timeman — 对局每步时间预算计算器。

每一步搜索开始前，根据剩余时间、增量和到下一次时间控制的步数，
计算两个预算：搜索应当在其附近结束的 optimum，以及绝不能超过的
maximum。支持 nodes-as-time 模式：整盘棋开始时把时钟换算成节点配额，
之后按已搜索节点数而不是墙钟时间计时。

快速上手::

    from timeman import Color, GameSession, StepLimits

    session = GameSession()
    session.new_game()

    result = session.start_step(
        StepLimits.from_clock(wtime=180_000, btime=180_000, winc=2_000, binc=2_000),
        Color.WHITE,
        ply=0,
    )
    print(result.optimum, result.maximum)
    ...
    session.finish_step()
"""

from timeman.budget import BudgetResult, Regime, TimeManager
from timeman.clock import Clock, ManualClock, MonotonicClock
from timeman.config import EngineOptions, TimemanConfig, TuningConfig, load_config
from timeman.models import Color, StepLimits, TimeState
from timeman.observability import MetricsCollector
from timeman.session import GameSession

__version__ = "0.1.0"

__all__ = [
    # 顶层入口
    "GameSession",
    "TimeManager",
    "BudgetResult",
    "Regime",
    # 数据模型
    "Color",
    "StepLimits",
    "TimeState",
    # 配置
    "EngineOptions",
    "TimemanConfig",
    "TuningConfig",
    "load_config",
    # 时钟
    "Clock",
    "ManualClock",
    "MonotonicClock",
    # 可观测性
    "MetricsCollector",
    # 版本
    "__version__",
]
