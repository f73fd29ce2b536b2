"""Command-line tools for Grid Snake."""

from __future__ import annotations

import argparse
import logging
import sys

from grid_snake.errors import ConfigError

logger = logging.getLogger(__name__)

_CONFIG_FLAGS = (
    "grid_width", "grid_height", "initial_speed",
    "speed_increment", "min_speed", "food_value",
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake configuration and headless simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- init-config ---
    init_p = sub.add_parser(
        "init-config", help="Write a default config file.",
    )
    init_p.add_argument("path", help="Destination JSON file.")
    for name in _CONFIG_FLAGS:
        init_p.add_argument(f"--{name.replace('_', '-')}", type=int, default=None)

    # --- check-config ---
    check_p = sub.add_parser(
        "check-config", help="Validate a config file.",
    )
    check_p.add_argument("path", help="JSON config file to validate.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Autoplay games headlessly and report results.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file.",
    )
    sim_p.add_argument("--games", type=int, default=10)
    sim_p.add_argument("--seed", type=int, default=42)
    sim_p.add_argument("--max-ticks", type=int, default=5_000)
    sim_p.add_argument(
        "--render", action="store_true",
        help="Print the final board of the last game.",
    )

    return parser


def _run_init_config(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig

    overrides = {
        name: getattr(args, name)
        for name in _CONFIG_FLAGS
        if getattr(args, name) is not None
    }
    config = GameConfig(**overrides)
    config.save(args.path)
    print(f"Wrote config to {args.path}")  # noqa: T201
    return 0


def _run_check_config(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig

    config = GameConfig.load(args.path)
    print(  # noqa: T201
        f"OK: {config.grid_size} grid, speed {config.initial_speed}ms "
        f"(-{config.speed_increment}/level, floor {config.min_speed}ms), "
        f"food worth {config.food_value}",
    )
    return 0


def _run_simulate(args: argparse.Namespace) -> int:
    from grid_snake.config import GameConfig
    from grid_snake.simulate import simulate_games

    config = GameConfig.load(args.config) if args.config else GameConfig()
    result = simulate_games(
        num_games=args.games,
        config=config,
        seed=args.seed,
        max_ticks=args.max_ticks,
    )
    print(result.summary())  # noqa: T201
    if args.render and result.last_board:
        print(result.last_board)  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "init-config": _run_init_config,
        "check-config": _run_check_config,
        "simulate": _run_simulate,
    }
    try:
        return handlers[args.command](args)
    except (ConfigError, FileNotFoundError) as exc:
        logger.error("%s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
