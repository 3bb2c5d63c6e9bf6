"""
timeman 结构化异常体系。

所有异常遵循"三段式"规范：What / Why / How to fix。
"""

from timeman.errors.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    EffortModeError,
    InvalidStepError,
    SessionStateError,
    TimemanError,
)

__all__ = [
    "ConfigLoadError",
    "ConfigValidationError",
    "EffortModeError",
    "InvalidStepError",
    "SessionStateError",
    "TimemanError",
]
