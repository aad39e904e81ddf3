"""Entry point: ``python -m wasteland``.

Supports two modes:
  - ``python -m wasteland serve``  → FastAPI server (default)
  - ``python -m wasteland cli``    → Headless demo run: travel, explore, return
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Wasteland shelter simulation core")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--tables", type=str, default=None, help="Directory of JSON tables (default: demo world)")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless demo expedition")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--tables", type=str, default=None)
    cli.add_argument("--point", type=str, default="P_market")
    cli.add_argument("--explorers", type=str, default="ex_engineer,ex_medic,ex_scout")
    cli.add_argument("--max-rounds", type=int, default=200)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from wasteland.api.app import create_app
    from wasteland.config import SimulationConfig

    config = SimulationConfig(world_seed=args.seed, tables_dir=args.tables, log_level=args.log_level)
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from wasteland.config import SimulationConfig
    from wasteland.core.world_state import WorldState
    from wasteland.data import load_tables
    from wasteland.engine.combat import SkirmishCombatResolver
    from wasteland.engine.round_engine import RoundEngine
    from wasteland.utils.logging import setup_logging

    config = SimulationConfig(world_seed=args.seed, tables_dir=args.tables, log_level=args.log_level)
    setup_logging(config.log_level)

    world = WorldState(config, load_tables(config))
    engine = RoundEngine(world, combat=SkirmishCombatResolver())
    home = world.team_position

    point_cell = world.grid.cell_of_point(args.point)
    if point_cell is None:
        logger.error("Exploration point %s not on the map", args.point)
        return
    path = engine.request_path(point_cell.pos)
    if path is None:
        logger.error("No route from the shelter to %s", args.point)
        return
    while engine.travel_step() is not None:
        pass
    logger.info("Arrived at %s on round %d", args.point, world.round)

    if engine.start_expedition(args.point, [e.strip() for e in args.explorers.split(",") if e.strip()]) is None:
        logger.error("Expedition to %s could not start", args.point)
        return

    while world.session is not None and world.round < args.max_rounds:
        report = engine.advance_round()
        for loot in report.loot:
            tier = "advanced" if loot.is_advanced else "base"
            logger.info(
                "Round %d: %s (%s) -> %s", report.round, loot.garbage_id, tier,
                ", ".join(f"{s.item_id} x{s.quantity}" for s in loot.stacks),
            )
        if report.remainder:
            logger.info("Round %d: %d stacks left in the holding area", report.round, len(report.remainder))

    if world.party and engine.request_path(home) is not None:
        while engine.travel_step() is not None:
            pass
        engine.return_to_shelter()

    logger.info("=" * 60)
    logger.info("Finished on round %d (day %d)", world.round, world.day)
    for stack in world.warehouse.stacks():
        logger.info("  warehouse: %-14s %d", stack.item_id, stack.quantity)
    for quest in world.quests.accepted_quests():
        logger.info(
            "  quest %-14s %-14s %d/%d", quest.quest_id, quest.status.name,
            quest.completion.current_value, quest.completion.target_value,
        )
    logger.info("=" * 60)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    if args.command == "cli":
        _run_cli(args)
    else:
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)


if __name__ == "__main__":
    main()
