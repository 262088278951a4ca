"""Entry point: ``python -m umbra``.

Supports two modes:
  - ``python -m umbra``            → Launch the FastAPI server with a live simulation
  - ``python -m umbra cli``        → Headless simulation logged to stdout
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Umbra toroidal Life simulation")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=None)
    srv.add_argument("--tick-interval", type=float, default=0.2, help="Seconds between ticks")
    srv.add_argument("--paused", action="store_true", help="Wait for /control/start before ticking")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless simulation")
    cli.add_argument("--seed", type=int, default=None)
    cli.add_argument("--ticks", type=int, default=200)
    cli.add_argument("--rows", type=int, default=None)
    cli.add_argument("--cols", type=int, default=None)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from umbra.api.app import create_app
    from umbra.config import SimulationConfig

    config = SimulationConfig(
        world_seed=args.seed,
        tick_interval=args.tick_interval,
        log_level=args.log_level,
    )
    app = create_app(config, autostart=not args.paused)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from umbra.config import SimulationConfig
    from umbra.core.world_state import WorldState
    from umbra.engine.world_loop import WorldLoop
    from umbra.systems.rng import DeterministicRNG
    from umbra.utils.logging import setup_logging

    config = SimulationConfig(
        world_seed=args.seed,
        grid_rows=args.rows,
        grid_cols=args.cols,
        max_ticks=args.ticks,
        log_level=args.log_level,
    )

    setup_logging(config.log_level)

    rng = DeterministicRNG.from_optional_seed(config.world_seed)
    world = WorldState.from_config(config, rng)
    loop = WorldLoop(config, world)
    loop.run()
    loop.log_summary()

    logger.info("Done. Re-run with --seed %d to reproduce this world.", rng.seed)


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            # Re-parse with serve defaults
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
