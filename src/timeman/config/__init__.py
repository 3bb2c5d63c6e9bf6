"""
timeman 配置模块。

提供 YAML 配置加载、引擎选项与可调系数的 Schema。
"""

from timeman.config.loader import load_config, validate_config_file
from timeman.config.schema import EngineOptions, TimemanConfig, Tunable, TuningConfig

__all__ = [
    "EngineOptions",
    "TimemanConfig",
    "Tunable",
    "TuningConfig",
    "load_config",
    "validate_config_file",
]
