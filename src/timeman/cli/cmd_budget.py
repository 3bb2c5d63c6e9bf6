"""
budget 命令 — 计算单步的 optimum / maximum。

用法::

    timeman budget --time 60000
    timeman budget --time 300000 --inc 3000 --movestogo 30 --ply 10 --overhead 50
    timeman budget --time 10000 --nodestime 1000 --format json
"""

from __future__ import annotations

import json
from typing import Any

from timeman.cli.utils import (
    configure_logging,
    create_budget_table,
    create_console,
    handle_timeman_error,
    load_config_or_exit,
    print_error,
    print_warning,
    result_to_dict,
    require_non_negative,
)
from timeman.errors import TimemanError
from timeman.models import Color, StepLimits
from timeman.session import GameSession

console = create_console()


def build_overrides(
    overhead: int | None,
    nodestime: int | None,
    ponder: bool | None,
) -> dict[str, Any]:
    """把命令行上显式给出的引擎选项转成配置覆盖项。"""
    options: dict[str, Any] = {}
    if overhead is not None:
        options["move_overhead"] = overhead
    if nodestime is not None:
        options["nodestime"] = nodestime
    if ponder is not None:
        options["ponder"] = ponder
    return {"options": options} if options else {}


def budget_command(
    time: int,
    inc: int = 0,
    movestogo: int = 0,
    ply: int = 0,
    side: str = "white",
    overhead: int | None = None,
    nodestime: int | None = None,
    ponder: bool | None = None,
    config: str | None = None,
    format: str = "rich",
    verbose: bool = False,
) -> None:
    """
    计算并输出一步的时间预算。

    双方时钟取相同的 --time / --inc，--side 指定执棋方。
    --overhead / --nodestime / --ponder 覆盖配置文件中的同名选项。
    """
    configure_logging(verbose)
    require_non_negative(time=time, inc=inc, movestogo=movestogo, ply=ply)

    try:
        color = Color(side.lower())
    except ValueError:
        print_error(f"不支持的执棋方：{side}（可选 white / black）")

    cfg = load_config_or_exit(config, build_overrides(overhead, nodestime, ponder))
    session = GameSession(config=cfg, collect_metrics=False)
    session.new_game()

    limits = StepLimits.from_clock(
        wtime=time,
        btime=time,
        winc=inc,
        binc=inc,
        movestogo=movestogo,
    )

    try:
        result = session.start_step(limits, color, ply)
    except TimemanError as e:
        handle_timeman_error(e)

    if format == "json":
        console.print_json(json.dumps(result_to_dict(result)))
    elif format == "text":
        unit = "nodes" if result.limits.npmsec else "ms"
        console.print(
            f"regime={result.regime.value} optimum={result.optimum} "
            f"maximum={result.maximum} unit={unit}"
        )
    elif format == "rich":
        console.print(create_budget_table(result))
        for warning in result.warnings:
            print_warning(warning)
    else:
        print_error(f"不支持的输出格式：{format}")
