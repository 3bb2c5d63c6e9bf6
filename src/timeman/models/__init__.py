"""timeman 数据模型。"""

from timeman.models.limits import Color, StepLimits
from timeman.models.state import TimeState

__all__ = [
    "Color",
    "StepLimits",
    "TimeState",
]
