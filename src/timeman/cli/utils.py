"""
CLI 工具函数 — Rich 美化、配置加载、通用辅助。

提供各子命令共用的实用函数，包括：
- Rich Console 美化输出
- 错误/成功信息统一格式
- 毫秒/节点数格式化
- 配置加载与日志开关
"""

from __future__ import annotations

import logging
import sys
from typing import Any, NoReturn

from rich.console import Console
from rich.table import Table

from timeman.budget.manager import BudgetResult
from timeman.config import TimemanConfig, load_config
from timeman.errors import TimemanError

_console: Console | None = None


def create_console() -> Console:
    """创建或获取全局 Rich Console 实例。"""
    global _console
    if _console is None:
        _console = Console()
    return _console


def print_error(message: str, exit_code: int = 1) -> NoReturn:
    """打印错误信息并以 exit_code 退出。"""
    console = create_console()
    console.print(f"[bold red]X 错误：[/bold red]{message}")
    sys.exit(exit_code)


def print_success(message: str) -> None:
    console = create_console()
    console.print(f"[bold green]OK[/bold green] {message}")


def print_warning(message: str) -> None:
    console = create_console()
    console.print(f"[bold yellow]! 警告：[/bold yellow]{message}")


def require_non_negative(**values: int) -> None:
    """命令行上的时钟参数必须 >= 0；否则打印错误并退出。"""
    for name, value in values.items():
        if value < 0:
            print_error(f"--{name} 不能为负数，实际为 {value}")


def handle_timeman_error(error: TimemanError) -> NoReturn:
    """统一处理 TimemanError：直接显示三段式 full_message。"""
    console = create_console()
    console.print("\n[bold red]X 错误[/bold red]\n")
    console.print(error.full_message)
    sys.exit(1)


def configure_logging(verbose: bool) -> None:
    """--verbose 时打开 DEBUG 日志。"""
    if verbose:
        logging.basicConfig(level=logging.DEBUG)


def format_budget(value: int, unit: str = "ms") -> str:
    """
    格式化预算值。

    毫秒值同时给出秒数，节点数加千分位::

        format_budget(2_345)              # "2,345 ms (2.35 s)"
        format_budget(5_000_000, "nodes") # "5,000,000 nodes"
    """
    if unit == "ms":
        return f"{value:,} ms ({value / 1000:.2f} s)"
    return f"{value:,} {unit}"


def load_config_or_exit(
    path: str | None,
    overrides: dict[str, Any] | None = None,
) -> TimemanConfig:
    """加载配置；失败时打印三段式错误并退出。"""
    try:
        return load_config(path=path, overrides=overrides)
    except TimemanError as e:
        handle_timeman_error(e)


def result_to_dict(result: BudgetResult) -> dict[str, Any]:
    """把 BudgetResult 转成可 JSON 序列化的字典。"""
    return {
        "optimum": result.optimum,
        "maximum": result.maximum,
        "regime": result.regime.value,
        "time_left": result.time_left,
        "opt_scale": result.opt_scale,
        "max_scale": result.max_scale,
        "unit": "nodes" if result.limits.npmsec else "ms",
        "limits": {
            "time": {side.value: t for side, t in result.limits.time.items()},
            "inc": {side.value: i for side, i in result.limits.inc.items()},
            "movestogo": result.limits.movestogo,
            "npmsec": result.limits.npmsec,
        },
        "warnings": list(result.warnings),
    }


def create_budget_table(result: BudgetResult) -> Table:
    """单步预算的 Rich 表格。"""
    unit = "nodes" if result.limits.npmsec else "ms"

    table = Table(title="时间预算", show_header=True, header_style="bold cyan")
    table.add_column("项目", style="white")
    table.add_column("值", justify="right", style="blue")

    table.add_row("时间控制", result.regime.value)
    table.add_row("time_left", format_budget(result.time_left, unit))
    table.add_row("opt_scale", f"{result.opt_scale:.5f}")
    table.add_row("max_scale", f"{result.max_scale:.3f}")
    table.add_row("[bold]optimum[/bold]", f"[bold]{format_budget(result.optimum, unit)}[/bold]")
    table.add_row("[bold]maximum[/bold]", f"[bold]{format_budget(result.maximum, unit)}[/bold]")

    return table
