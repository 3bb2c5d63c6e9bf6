"""
params 命令 — 列出 sudden death 公式的可调系数。

外部调参器可以用 --format json 的输出作为搜索空间的起点。
"""

from __future__ import annotations

import json

from rich.table import Table

from timeman.cli.utils import create_console, load_config_or_exit, print_error

console = create_console()


def params_command(config: str | None = None, format: str = "rich") -> None:
    """输出当前配置下的系数表（名称、默认值、当前值、说明）。"""
    cfg = load_config_or_exit(config)
    rows = cfg.tuning.tunables()

    if format == "json":
        console.print_json(json.dumps([row._asdict() for row in rows]))
        return
    if format != "rich":
        print_error(f"不支持的输出格式：{format}")

    table = Table(title="可调系数", show_header=True, header_style="bold cyan")
    table.add_column("名称", style="cyan")
    table.add_column("默认值", justify="right", style="dim")
    table.add_column("当前值", justify="right", style="blue")
    table.add_column("说明", style="white")

    for row in rows:
        value_style = "bold yellow" if row.value != row.default else "blue"
        table.add_row(
            row.name,
            f"{row.default:g}",
            f"[{value_style}]{row.value:g}[/{value_style}]",
            row.description,
        )
    console.print(table)
