"""
每步的时钟限制（StepLimits）与执棋方（Color）。

StepLimits 由外部（协议层）每步构造一次，时间单位统一为整数毫秒。
它是不可变的：节点计时模式需要把时间换算成节点数时，
TimeManager 返回换算后的副本，而不是原地修改调用方的对象。
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum


class Color(str, Enum):
    """执棋方。"""

    WHITE = "white"
    BLACK = "black"

    @property
    def opponent(self) -> Color:
        return Color.BLACK if self is Color.WHITE else Color.WHITE


def _per_side(white: int = 0, black: int = 0) -> dict[Color, int]:
    return {Color.WHITE: white, Color.BLACK: black}


@dataclass(frozen=True)
class StepLimits:
    """
    一步棋的时钟状态。

    属性:
        time: 双方剩余时间（毫秒）
        inc: 双方每步增量（毫秒）
        movestogo: 到下一次时间控制还剩的步数，0 表示 sudden death
        npmsec: 当前生效的节点/毫秒换算率，0 表示按真实时间计时
        start_time: 本步开始思考的时钟读数（毫秒）
        movetime: 固定每步用时（毫秒），0 表示不使用；时间管理本身不读取
    """

    time: dict[Color, int] = field(default_factory=_per_side)
    inc: dict[Color, int] = field(default_factory=_per_side)
    movestogo: int = 0
    npmsec: int = 0
    start_time: int = 0
    movetime: int = 0

    @classmethod
    def from_clock(
        cls,
        wtime: int = 0,
        btime: int = 0,
        winc: int = 0,
        binc: int = 0,
        movestogo: int = 0,
        start_time: int = 0,
        movetime: int = 0,
    ) -> StepLimits:
        """按 UCI `go` 命令的字段构造。"""
        return cls(
            time=_per_side(wtime, btime),
            inc=_per_side(winc, binc),
            movestogo=movestogo,
            start_time=start_time,
            movetime=movetime,
        )

    def time_for(self, side: Color) -> int:
        return self.time.get(side, 0)

    def inc_for(self, side: Color) -> int:
        return self.inc.get(side, 0)

    def with_side(
        self,
        side: Color,
        *,
        time: int | None = None,
        inc: int | None = None,
        npmsec: int | None = None,
    ) -> StepLimits:
        """
        返回修改了某一方时间/增量的副本。

        参数:
            side: 要修改的一方
            time: 新的剩余时间，None 表示不变
            inc: 新的增量，None 表示不变
            npmsec: 新的换算率，None 表示不变

        返回:
            新的 StepLimits，原对象不受影响
        """
        new_time = dict(self.time)
        new_inc = dict(self.inc)
        if time is not None:
            new_time[side] = time
        if inc is not None:
            new_inc[side] = inc
        return replace(
            self,
            time=new_time,
            inc=new_inc,
            npmsec=self.npmsec if npmsec is None else npmsec,
        )
