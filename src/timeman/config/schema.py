"""
配置的 Schema 定义与校验。

引擎选项（Move Overhead / nodestime / Ponder）和时间公式的可调系数
都通过 YAML 文件定义，本模块定义了 YAML 文件的 Schema 并负责校验。

YAML 文件示例::

    version: "1.0"
    name: blitz
    options:
      move_overhead: 30
      nodestime: 0
      ponder: false
    tuning:
      f1: 0.78
"""

from __future__ import annotations

from typing import NamedTuple

from pydantic import BaseModel, Field

from timeman.config.defaults import (
    MOVE_OVERHEAD_DEFAULT,
    MOVE_OVERHEAD_MAX,
    NODESTIME_DEFAULT,
    NODESTIME_MAX,
)


class EngineOptions(BaseModel):
    """时间管理读取的三个引擎选项。"""

    move_overhead: int = Field(
        default=MOVE_OVERHEAD_DEFAULT,
        description="每步的通信/处理延迟预留（毫秒）",
        ge=0,
        le=MOVE_OVERHEAD_MAX,
    )
    nodestime: int = Field(
        default=NODESTIME_DEFAULT,
        description="每毫秒折算的节点数；非 0 时进入 nodes-as-time 模式",
        ge=0,
        le=NODESTIME_MAX,
    )
    ponder: bool = Field(
        default=False,
        description="落子后继续思考（只影响 optimum）",
    )


class Tunable(NamedTuple):
    """TuningConfig 中一个系数的描述行。"""

    name: str
    default: float
    value: float
    description: str


class TuningConfig(BaseModel):
    """
    Sudden death（x basetime + z increment）公式的可调系数。

    所有字段都是系数而非常量，外部调参器可以在这些字段上搜索。
    optExtra 的上下界都是 a3，因此增量加成项恒等于 a3，与增量大小无关；
    调整 a3 只会按比例缩放 opt_scale。

    公式::

        opt_extra    = clamp(a1 + a2 * inc / time, a3, a3)
        opt_constant = min(b1 + b2 * log10(time / 1000), b3)
        max_constant = max(c1 + c2 * log10(time / 1000), c3)
        opt_scale    = min(d1 + (ply + d2) ** d3 * opt_constant,
                           d4 * time / time_left) * opt_extra
        max_scale    = min(e1, max_constant + ply / e2)
        maximum      = min(f1 * time - move_overhead, max_scale * optimum) - 10
    """

    a1: float = Field(default=0.90, description="optExtra 增量加成基数")
    a2: float = Field(default=14.2, description="optExtra 增量加成斜率（× inc/time）")
    a3: float = Field(default=1.00, description="optExtra 截断上下界")
    b1: float = Field(default=0.00344, description="optConstant 基数")
    b2: float = Field(default=0.0002, description="optConstant 对 log10(time/1000) 的斜率")
    b3: float = Field(default=0.0045, description="optConstant 上限")
    c1: float = Field(default=3.9, description="maxConstant 基数")
    c2: float = Field(default=3.1, description="maxConstant 对 log10(time/1000) 的斜率")
    c3: float = Field(default=2.5, description="maxConstant 下限")
    d1: float = Field(default=0.0155, description="optScale 基础项")
    d2: float = Field(default=3.0, description="幂次项中的 ply 偏移")
    d3: float = Field(default=0.45, description="(ply + d2) 的指数")
    d4: float = Field(default=0.2, description="optScale 上限：time/time_left 的比例")
    e1: float = Field(default=6.5, description="maxScale 上限")
    e2: float = Field(default=13.6, description="加到 maxConstant 上的 ply 除数", gt=0)
    f1: float = Field(
        default=0.81,
        description="maximum 的硬上限：剩余时间的比例",
        gt=0.0,
        le=1.0,
    )

    def tunables(self) -> list[Tunable]:
        """
        列出全部系数，按字段声明顺序。

        返回:
            Tunable 行列表（名称、默认值、当前值、说明）
        """
        rows: list[Tunable] = []
        for name, field in type(self).model_fields.items():
            rows.append(
                Tunable(
                    name=name,
                    default=field.default,
                    value=getattr(self, name),
                    description=field.description or "",
                )
            )
        return rows


class TimemanConfig(BaseModel):
    """
    完整配置 — 对应 YAML 配置文件的根结构。

    每个字段都有默认值，空文件等价于引擎的默认设置。
    """

    version: str = Field(default="1.0", description="配置版本")
    name: str = Field(default="default", description="配置名称")
    description: str = Field(default="", description="配置描述")

    options: EngineOptions = Field(default_factory=EngineOptions)
    tuning: TuningConfig = Field(default_factory=TuningConfig)
