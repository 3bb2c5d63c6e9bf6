"""
simulate 命令 — 用时间预算模拟一盘棋的时钟消耗。

每方各持有一个 GameSession（相当于两个引擎对弈），执棋方的会话
计算本步预算，模拟的"搜索"用掉 optimum 的 --usage 倍（不超过 maximum），再加上 --lag 毫秒的通信延迟。
输出每一步的剩余时间和预算，检查在给定参数下是否会超时。

节点计时模式（--nodestime > 0）下，搜索按节点数消耗预算，
时钟按 节点数 / nodestime 折算回毫秒扣除。
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass

from rich.table import Table

from timeman.cli.cmd_budget import build_overrides
from timeman.cli.utils import (
    configure_logging,
    create_console,
    handle_timeman_error,
    load_config_or_exit,
    print_error,
    print_success,
    require_non_negative,
)
from timeman.clock import ManualClock
from timeman.config import TimemanConfig
from timeman.errors import TimemanError
from timeman.models import Color, StepLimits
from timeman.session import GameSession

console = create_console()


@dataclass(frozen=True)
class SimulatedStep:
    """模拟中的一个半回合。"""

    ply: int
    side: str
    clock_before: int
    movestogo: int
    optimum: int
    maximum: int
    spent_ms: int
    clock_after: int


@dataclass(frozen=True)
class SimulationReport:
    steps: tuple[SimulatedStep, ...]
    flagged: str | None


def simulate_game(
    config: TimemanConfig,
    time: int,
    inc: int = 0,
    movestogo: int = 0,
    plies: int = 80,
    usage: float = 0.9,
    lag: int = 0,
) -> SimulationReport:
    """
    模拟一盘棋。

    参数:
        config: 完整配置
        time: 每方初始时间（毫秒）
        inc: 每步增量（毫秒）
        movestogo: 每个时间控制的步数，0 表示 sudden death；
            用完后该方时钟再加上 time
        plies: 模拟的半回合数
        usage: 每步实际用掉 optimum 的比例
        lag: 每步额外的通信延迟（毫秒），计入时钟但不计入思考时间

    返回:
        SimulationReport；flagged 为超时一方，未超时为 None
    """
    clock = ManualClock(start=1)
    sessions = {side: GameSession(config=config, clock=clock) for side in Color}
    for session in sessions.values():
        session.new_game()

    npmsec = config.options.nodestime
    remaining = {Color.WHITE: time, Color.BLACK: time}
    moves_done = {Color.WHITE: 0, Color.BLACK: 0}
    steps: list[SimulatedStep] = []
    flagged: str | None = None

    for ply in range(plies):
        side = Color.WHITE if ply % 2 == 0 else Color.BLACK
        session = sessions[side]
        mtg = movestogo - moves_done[side] % movestogo if movestogo else 0

        limits = StepLimits(
            time=dict(remaining),
            inc={Color.WHITE: inc, Color.BLACK: inc},
            movestogo=mtg,
            start_time=clock.now(),
        )
        result = session.start_step(limits, side, ply)

        budget = min(int(result.optimum * usage), result.maximum)
        if npmsec:
            session.finish_step(nodes_searched=budget)
            think_ms = budget // npmsec
        else:
            clock.advance(budget)
            think_ms = session.finish_step()

        clock_before = remaining[side]
        remaining[side] -= think_ms + lag
        clock.advance(lag)

        if remaining[side] <= 0:
            flagged = side.value
        else:
            remaining[side] += inc
            moves_done[side] += 1
            if movestogo and moves_done[side] % movestogo == 0:
                remaining[side] += time

        steps.append(
            SimulatedStep(
                ply=ply,
                side=side.value,
                clock_before=clock_before,
                movestogo=mtg,
                optimum=result.optimum,
                maximum=result.maximum,
                spent_ms=think_ms + lag,
                clock_after=remaining[side],
            )
        )
        if flagged:
            break

    return SimulationReport(steps=tuple(steps), flagged=flagged)


def simulate_command(
    time: int,
    inc: int = 0,
    movestogo: int = 0,
    plies: int = 80,
    usage: float = 0.9,
    lag: int = 0,
    overhead: int | None = None,
    nodestime: int | None = None,
    config: str | None = None,
    format: str = "rich",
    verbose: bool = False,
) -> None:
    """模拟一盘棋并输出时钟轨迹。"""
    configure_logging(verbose)
    require_non_negative(time=time, inc=inc, movestogo=movestogo, lag=lag)

    if plies <= 0:
        print_error(f"--plies 必须为正数，实际为 {plies}")
    if usage <= 0:
        print_error(f"--usage 必须为正数，实际为 {usage}")

    cfg = load_config_or_exit(config, build_overrides(overhead, nodestime, None))

    try:
        report = simulate_game(cfg, time, inc, movestogo, plies, usage, lag)
    except TimemanError as e:
        handle_timeman_error(e)

    if format == "json":
        console.print_json(json.dumps({
            "flagged": report.flagged,
            "steps": [asdict(step) for step in report.steps],
        }))
        return
    if format != "rich":
        print_error(f"不支持的输出格式：{format}")

    table = Table(title="时钟轨迹", show_header=True, header_style="bold magenta")
    table.add_column("ply", justify="right", style="dim")
    table.add_column("执棋方", style="cyan")
    table.add_column("剩余(ms)", justify="right")
    table.add_column("mtg", justify="right", style="dim")
    table.add_column("optimum", justify="right", style="green")
    table.add_column("maximum", justify="right", style="yellow")
    table.add_column("用时(ms)", justify="right", style="blue")

    for step in report.steps:
        table.add_row(
            str(step.ply),
            step.side,
            f"{step.clock_before:,}",
            str(step.movestogo),
            f"{step.optimum:,}",
            f"{step.maximum:,}",
            f"{step.spent_ms:,}",
        )
    console.print(table)

    if report.flagged:
        print_error(f"{report.flagged} 超时（第 {len(report.steps) - 1} 个半回合）")
    print_success(f"模拟完成：{len(report.steps)} 个半回合，无超时")
