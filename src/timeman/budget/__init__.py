"""
时间预算模块。

- **manager.py**: TimeManager（对外唯一入口）与 BudgetResult
- **formulas.py**: 两种时间控制下的缩放系数（纯函数）

基本用法::

    from timeman.budget import TimeManager
    from timeman.models import Color, StepLimits

    tm = TimeManager()
    result = tm.initialize(
        StepLimits.from_clock(wtime=60_000, btime=60_000, winc=1_000, binc=1_000),
        Color.WHITE,
        ply=0,
    )
    print(result.optimum, result.maximum)
"""

from timeman.budget.formulas import (
    Regime,
    ScaleFactors,
    compute_time_left,
    horizon,
    moves_to_go_scales,
    scale_factors,
    sudden_death_scales,
)
from timeman.budget.manager import BudgetResult, TimeManager

__all__ = [
    "TimeManager",
    "BudgetResult",
    "Regime",
    "ScaleFactors",
    "compute_time_left",
    "horizon",
    "moves_to_go_scales",
    "scale_factors",
    "sudden_death_scales",
]
