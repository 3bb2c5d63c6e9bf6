"""
时间分配公式 — 两种时间控制下的缩放系数。

支持两种时间控制：

1. **x basetime (+ z increment)**（sudden death，movestogo == 0）：
   系数来自 TuningConfig 的可调参数表，optimum 随增量和 ply 增长，
   同时被限制在剩余时间的一个比例之内。

2. **x moves in y seconds (+ z increment)**（movestogo > 0）：
   固定常数的闭式公式，只依赖 ply、视野和 time / time_left。

两种情况都先计算扣除延迟预留后的 time_left::

    mtg       = min(movestogo, 60) if movestogo else 60
    time_left = max(1, time + inc * (mtg - 1) - move_overhead * (2 + mtg))

本模块只有纯函数，不持有任何状态。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum

from timeman.config.defaults import (
    MAX_HORIZON,
    MTG_MAX_BASE,
    MTG_MAX_CAP,
    MTG_MAX_SLOPE,
    MTG_OPT_BASE,
    MTG_OPT_CAP,
    MTG_OPT_PLY_DIVISOR,
)
from timeman.config.schema import TuningConfig


class Regime(str, Enum):
    """本步使用的时间控制类型。"""

    SUDDEN_DEATH = "sudden_death"
    MOVES_TO_GO = "moves_to_go"
    NO_CLOCK = "no_clock"


@dataclass(frozen=True)
class ScaleFactors:
    """
    一步的缩放系数。

    属性:
        opt_scale: optimum 占 time_left 的比例
        max_scale: maximum 相对 optimum 的倍数上限
        regime: 产生这组系数的时间控制类型
    """

    opt_scale: float
    max_scale: float
    regime: Regime


def horizon(movestogo: int) -> int:
    """规划视野：movestogo 截断到 60；sudden death 时取 60。"""
    return min(movestogo, MAX_HORIZON) if movestogo else MAX_HORIZON


def compute_time_left(time: int, inc: int, mtg: int, move_overhead: int) -> int:
    """
    扣除延迟预留后、分摊到 mtg 步上的可用时间。

    结果至少为 1，后续公式会用它作除数。
    """
    return max(1, time + inc * (mtg - 1) - move_overhead * (2 + mtg))


def _clamp(value: float, low: float, high: float) -> float:
    return min(max(value, low), high)


def sudden_death_scales(
    time: int,
    inc: int,
    ply: int,
    time_left: int,
    tuning: TuningConfig,
) -> ScaleFactors:
    """
    x basetime (+ z increment) 的缩放系数。

    增量足够大时 time_left 可能超过这一步真正能用的时间，
    因此 optimum 还被限制在 d4 * time / time_left 之内。

    参数:
        time: 剩余时间（毫秒或节点），必须 > 0
        inc: 每步增量（与 time 同单位）
        ply: 当前半回合序号
        time_left: compute_time_left() 的结果
        tuning: 可调系数表

    返回:
        ScaleFactors（regime = SUDDEN_DEATH）
    """
    t = tuning
    log_time = math.log10(time / 1000.0)

    opt_extra = _clamp(t.a1 + t.a2 * inc / time, t.a3, t.a3)
    opt_constant = min(t.b1 + t.b2 * log_time, t.b3)
    max_constant = max(t.c1 + t.c2 * log_time, t.c3)

    opt_scale = (
        min(
            t.d1 + math.pow(ply + t.d2, t.d3) * opt_constant,
            t.d4 * time / float(time_left),
        )
        * opt_extra
    )
    max_scale = min(t.e1, max_constant + ply / t.e2)

    return ScaleFactors(opt_scale=opt_scale, max_scale=max_scale, regime=Regime.SUDDEN_DEATH)


def moves_to_go_scales(time: int, ply: int, mtg: int, time_left: int) -> ScaleFactors:
    """x moves in y seconds (+ z increment) 的缩放系数，全部为固定常数。"""
    opt_scale = min(
        (MTG_OPT_BASE + ply / MTG_OPT_PLY_DIVISOR) / mtg,
        MTG_OPT_CAP * time / float(time_left),
    )
    max_scale = min(MTG_MAX_CAP, MTG_MAX_BASE + MTG_MAX_SLOPE * mtg)

    return ScaleFactors(opt_scale=opt_scale, max_scale=max_scale, regime=Regime.MOVES_TO_GO)


def scale_factors(
    time: int,
    inc: int,
    movestogo: int,
    ply: int,
    time_left: int,
    tuning: TuningConfig,
) -> ScaleFactors:
    """按 movestogo 选择时间控制类型：0 走 sudden death，> 0 走固定步数。"""
    if movestogo == 0:
        return sudden_death_scales(time, inc, ply, time_left, tuning)
    return moves_to_go_scales(time, ply, horizon(movestogo), time_left)
