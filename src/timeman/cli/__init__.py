"""
timeman CLI — 命令行工具。

- budget: 计算单步预算
- simulate: 模拟一盘棋的时钟消耗
- params: 列出可调系数
- validate: 校验配置文件
"""

from timeman.cli.app import app, main

__all__ = ["app", "main"]
