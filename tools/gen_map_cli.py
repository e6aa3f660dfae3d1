"""Command line interface to generate arenas from a map list for development."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from config.config_loader import load_generator_options, load_map_configs
from modules.arena.errors import ArenaError
from modules.arena.snapshot import save_json
from modules.arena.systems.map_generator import MapGenerator


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate an obstacle arena from a map list.")
    parser.add_argument("--config", default="config/maps.yaml", help="YAML or JSON map list.")
    parser.add_argument("--index", type=int, default=0, help="Index of the map to generate.")
    parser.add_argument(
        "--draws",
        type=int,
        default=0,
        help="Number of open tiles to draw and print after generation.",
    )
    parser.add_argument("--out", help="Optional path to write a JSON snapshot of the arena.")
    parser.add_argument(
        "--attempt-budget",
        action="store_true",
        help="Count rejected candidates against the obstacle target.",
    )
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.draws < 0:
        parser.error("--draws must not be negative")

    try:
        configs = load_map_configs(args.config)
        options = load_generator_options(args.config)
        generator = MapGenerator(
            configs,
            tile_size=options["tile_size"],
            attempt_budget_mode=args.attempt_budget or options["attempt_budget_mode"],
        )
        arena = generator.generate_map(args.index)
    except ArenaError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    print(arena.grid.render())
    placement = arena.placement
    print(
        f"obstacles {placement.placed_count}/{placement.target} "
        f"(attempts {placement.attempts}, rejected {len(placement.rejected)}, "
        f"boundary {len(arena.boundary)})"
    )

    for _ in range(args.draws):
        handle = generator.try_get_random_open_tile()
        if handle is None:
            break
        print(f"{handle.coord.x},{handle.coord.y}")

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        save_json(arena, out_path)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
