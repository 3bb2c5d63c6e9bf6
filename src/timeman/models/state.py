"""
会话级时间管理状态。

TimeState 由对局会话（GameSession）创建并持有，整盘棋只有一个，
按引用传给 TimeManager。对局结束时随会话一起丢弃。
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TimeState:
    """
    跨步保留的时间管理状态。

    属性:
        start_time: 最近一次 initialize() 时记录的开始时间（毫秒）
        optimum_time: 最近一次计算出的 optimum
        maximum_time: 最近一次计算出的 maximum，始终 >= 0
        use_nodes_time: 是否处于 nodes-as-time 模式；一旦置位，本会话内不再清除
        available_nodes: 整盘棋剩余的节点配额，只在 use_nodes_time 时有意义
        npmsec: 激活节点计时模式时使用的换算率
    """

    start_time: int = 0
    optimum_time: int = 0
    maximum_time: int = 0
    use_nodes_time: bool = False
    available_nodes: int = 0
    npmsec: int = 0
