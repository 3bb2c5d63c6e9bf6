"""
timeman CLI — 命令行工具入口。

提供 budget / simulate / params / validate / version 子命令。

用法::

    timeman --help
    timeman budget --time 60000 --inc 1000
    timeman simulate --time 180000 --inc 2000 --plies 120
    timeman params
    timeman validate timeman.yaml
"""

from __future__ import annotations

import typer

from timeman.cli.utils import create_console

app = typer.Typer(
    name="timeman",
    help="timeman — 对局每步时间预算计算器 CLI",
    add_completion=False,
    no_args_is_help=True,
)

console = create_console()


@app.command(name="budget")
def budget(
    time: int = typer.Option(..., "--time", "-t", help="执棋方剩余时间（毫秒）"),
    inc: int = typer.Option(0, "--inc", "-i", help="每步增量（毫秒）"),
    movestogo: int = typer.Option(0, "--movestogo", help="到下一次时间控制的步数，0 为 sudden death"),
    ply: int = typer.Option(0, "--ply", help="当前半回合序号"),
    side: str = typer.Option("white", "--side", "-s", help="执棋方：white / black"),
    overhead: int | None = typer.Option(None, "--overhead", help="覆盖 move_overhead（毫秒）"),
    nodestime: int | None = typer.Option(None, "--nodestime", help="覆盖 nodestime（节点/毫秒）"),
    ponder: bool = typer.Option(False, "--ponder", help="打开 ponder（optimum 增加 1/4）"),
    config: str | None = typer.Option(None, "--config", "-c", help="配置文件路径（默认自动搜索）"),
    format: str = typer.Option("rich", "--format", "-f", help="输出格式：rich / json / text"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="显示调试日志"),
) -> None:
    """计算一步的 optimum / maximum。"""
    from timeman.cli.cmd_budget import budget_command
    budget_command(
        time=time,
        inc=inc,
        movestogo=movestogo,
        ply=ply,
        side=side,
        overhead=overhead,
        nodestime=nodestime,
        ponder=True if ponder else None,
        config=config,
        format=format,
        verbose=verbose,
    )


@app.command(name="simulate")
def simulate(
    time: int = typer.Option(..., "--time", "-t", help="每方初始时间（毫秒）"),
    inc: int = typer.Option(0, "--inc", "-i", help="每步增量（毫秒）"),
    movestogo: int = typer.Option(0, "--movestogo", help="每个时间控制的步数，0 为 sudden death"),
    plies: int = typer.Option(80, "--plies", "-n", help="模拟的半回合数"),
    usage: float = typer.Option(0.9, "--usage", "-u", help="每步实际用掉 optimum 的比例"),
    lag: int = typer.Option(0, "--lag", help="每步的通信延迟（毫秒）"),
    overhead: int | None = typer.Option(None, "--overhead", help="覆盖 move_overhead（毫秒）"),
    nodestime: int | None = typer.Option(None, "--nodestime", help="覆盖 nodestime（节点/毫秒）"),
    config: str | None = typer.Option(None, "--config", "-c", help="配置文件路径（默认自动搜索）"),
    format: str = typer.Option("rich", "--format", "-f", help="输出格式：rich / json"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="显示调试日志"),
) -> None:
    """模拟一盘棋的时钟消耗。"""
    from timeman.cli.cmd_simulate import simulate_command
    simulate_command(
        time=time,
        inc=inc,
        movestogo=movestogo,
        plies=plies,
        usage=usage,
        lag=lag,
        overhead=overhead,
        nodestime=nodestime,
        config=config,
        format=format,
        verbose=verbose,
    )


@app.command(name="params")
def params(
    config: str | None = typer.Option(None, "--config", "-c", help="配置文件路径（默认自动搜索）"),
    format: str = typer.Option("rich", "--format", "-f", help="输出格式：rich / json"),
) -> None:
    """列出 sudden death 公式的可调系数。"""
    from timeman.cli.cmd_params import params_command
    params_command(config=config, format=format)


@app.command(name="validate")
def validate(
    path: str = typer.Argument("timeman.yaml", help="YAML 配置文件路径"),
) -> None:
    """校验 YAML 配置文件。"""
    from timeman.cli.cmd_validate import validate_command
    validate_command(path=path)


@app.command(name="version")
def version() -> None:
    """显示版本信息。"""
    from timeman import __version__
    console.print(f"timeman v{__version__}")


def main() -> None:
    """CLI 入口点。"""
    app()


if __name__ == "__main__":
    main()
