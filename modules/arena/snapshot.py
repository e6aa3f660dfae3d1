"""JSON export of generated arenas for tooling and debugging."""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from modules.arena.arena import GeneratedMap


def arena_to_dict(arena: GeneratedMap) -> Dict[str, Any]:
    """Return a JSON-compatible description of ``arena``.

    Rows are stored top to bottom (``rows[y][x]``) with ``1`` for obstacles.
    """

    placement = arena.placement
    return {
        "index": arena.index,
        "config": arena.config.to_mapping(),
        "center": list(arena.center),
        "rows": [[int(cell) for cell in row] for row in arena.grid.to_rows()],
        "obstacle_heights": [
            {"x": coord.x, "y": coord.y, "height": height}
            for coord, height in sorted(arena.obstacle_heights.items())
        ],
        "obstacle_colours": [
            {"x": coord.x, "y": coord.y, "colour": list(colour)}
            for coord, colour in sorted(arena.obstacle_colours.items())
        ],
        "boundary": [list(coord) for coord in arena.boundary],
        "placement": {
            "target": placement.target,
            "placed": placement.placed_count,
            "attempts": placement.attempts,
            "rejected": len(placement.rejected),
            "under_density": placement.under_density,
        },
    }


def save_json(arena: GeneratedMap, path: str | Path) -> None:
    """Serialise ``arena`` to JSON on disk."""

    destination = Path(path)
    destination.write_text(json.dumps(arena_to_dict(arena), indent=2), encoding="utf-8")


__all__ = ["arena_to_dict", "save_json"]
