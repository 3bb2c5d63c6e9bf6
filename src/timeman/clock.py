"""
时钟源协议。

时间管理只需要一个能返回"当前毫秒数"的单调时钟：
既用于记录每步的开始时间，也用于计算已用时间。
内置两种实现：
- MonotonicClock：基于 time.monotonic_ns()，生产使用
- ManualClock：手动拨动的时钟，用于测试和 CLI 模拟
"""

from __future__ import annotations

import time
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """
    时钟协议。

    最小实现示例::

        class WallClock:
            def now(self) -> int:
                return int(time.time() * 1000)
    """

    def now(self) -> int:
        """返回当前时刻（毫秒），必须单调不减。"""
        ...


class MonotonicClock:
    """基于 time.monotonic_ns() 的毫秒时钟。"""

    def now(self) -> int:
        return time.monotonic_ns() // 1_000_000


class ManualClock:
    """
    手动推进的时钟。

    用法::

        clock = ManualClock(start=1_000)
        clock.advance(250)
        clock.now()  # 1250
    """

    def __init__(self, start: int = 0) -> None:
        self._now = start

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> None:
        if ms < 0:
            raise ValueError(f"ManualClock 不能倒退（advance({ms})）。")
        self._now += ms
