"""
timeman 快速上手示例。

演示三种时间控制下的每步预算：sudden death、movestogo、nodes-as-time。

运行方式：
    python examples/quickstart.py

无需任何配置文件。
"""

from timeman import Color, EngineOptions, GameSession, ManualClock, StepLimits, TimemanConfig


def main() -> None:
    # ===== 场景 1：3 分钟 + 2 秒 =====
    print("=" * 60)
    print("场景 1：sudden death（180s + 2s）")
    print("=" * 60)

    clock = ManualClock(start=1)
    session = GameSession(clock=clock)
    session.new_game()

    remaining = 180_000
    for ply in range(0, 20, 2):
        result = session.start_step(
            StepLimits.from_clock(wtime=remaining, btime=180_000, winc=2_000, binc=2_000),
            Color.WHITE,
            ply,
        )
        clock.advance(result.optimum)
        spent = session.finish_step()
        print(
            f"  ply {ply:>3}  剩余 {remaining:>7,} ms  optimum {result.optimum:>6,}  "
            f"maximum {result.maximum:>6,}  用时 {spent:>6,}"
        )
        remaining += 2_000 - spent

    # ===== 场景 2：40 步 / 5 分钟 =====
    print("\n" + "=" * 60)
    print("场景 2：40 步 / 300s")
    print("=" * 60)

    for mtg in (40, 20, 5, 1):
        result = session.start_step(
            StepLimits.from_clock(wtime=150_000, btime=150_000, movestogo=mtg),
            Color.BLACK,
            81 - mtg * 2,
        )
        session.finish_step()
        print(f"  movestogo {mtg:>2}  optimum {result.optimum:>6,}  maximum {result.maximum:>6,}")

    # ===== 场景 3：nodes-as-time =====
    print("\n" + "=" * 60)
    print("场景 3：nodestime = 600 nodes/ms")
    print("=" * 60)

    nodes_session = GameSession(
        config=TimemanConfig(options=EngineOptions(nodestime=600)),
        clock=clock,
    )
    nodes_session.new_game()
    for ply in range(0, 10, 2):
        result = nodes_session.start_step(
            StepLimits.from_clock(wtime=60_000, btime=60_000, winc=500, binc=500),
            Color.WHITE,
            ply,
        )
        nodes_session.finish_step(nodes_searched=result.optimum)
        print(
            f"  ply {ply:>3}  配额 {result.limits.time_for(Color.WHITE):>11,} nodes  "
            f"optimum {result.optimum:>9,}  maximum {result.maximum:>10,}"
        )

    assert nodes_session.metrics is not None
    summary = nodes_session.metrics.summary("optimum_ms", tags={"unit": "nodes"})
    if summary:
        print(f"\n  optimum 均值：{summary.mean:,.0f} nodes（{summary.count} 步）")


if __name__ == "__main__":
    main()
