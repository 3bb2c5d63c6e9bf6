"""
时间管理的固定常量与引擎选项的取值范围。

sudden death 公式的可调系数不在这里：它们是 TuningConfig 的字段，
可以通过 YAML 覆盖；这里只放不参与调参的常量。
"""

from __future__ import annotations

# 最大规划视野（步数）。movestogo 超过它时按它截断，
# sudden death 模式下也以它作为 time_left 的视野。
MAX_HORIZON = 60

# 从 maximum 中额外扣除的固定毫秒数
FIXED_SAFETY_MS = 10

# ponder 模式下 optimum 的放大比例：optimum += optimum // PONDER_DIVISOR
PONDER_DIVISOR = 4

# --- x moves in y seconds 模式的固定系数 ---
MTG_OPT_BASE = 0.88
MTG_OPT_PLY_DIVISOR = 116.4
MTG_OPT_CAP = 0.88
MTG_MAX_CAP = 6.3
MTG_MAX_BASE = 1.5
MTG_MAX_SLOPE = 0.11

# --- 引擎选项范围（与 UCI 选项声明一致）---
MOVE_OVERHEAD_DEFAULT = 10
MOVE_OVERHEAD_MAX = 5000
NODESTIME_DEFAULT = 0
NODESTIME_MAX = 10000
