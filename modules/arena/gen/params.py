"""Per-map generation parameters."""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Tuple

from modules.arena.coords import Coord
from modules.arena.errors import ConfigurationError


Colour = Tuple[float, float, float]


def _colour(value: Any, field_name: str) -> Colour:
    try:
        channels = tuple(float(channel) for channel in value)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{field_name} must be an RGB triple") from exc
    if len(channels) != 3 or not all(0.0 <= channel <= 1.0 for channel in channels):
        raise ConfigurationError(f"{field_name} must be an RGB triple with channels in [0, 1]")
    red, green, blue = channels
    return (red, green, blue)


@dataclass(frozen=True, slots=True)
class MapConfig:
    """Configuration bundle describing one arena layout.

    One instance exists per configured level or wave and is selected by its
    position in the generator's map list.  Obstacle heights are not used by
    the generation algorithm itself; they are carried through so that a
    visual layer can size obstacles.  The same goes for the two colours,
    which a visual layer blends per row, from ``foreground_colour`` on the
    first row towards ``background_colour``.
    """

    width: int
    height: int
    obstacle_density: float
    seed: int
    min_obstacle_height: float = 1.0
    max_obstacle_height: float = 1.0
    boundary_obstacles: bool = False
    name: str = ""
    foreground_colour: Colour = (1.0, 1.0, 1.0)
    background_colour: Colour = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        if isinstance(self.width, bool) or not isinstance(self.width, int):
            raise ConfigurationError("width must be an integer")
        if isinstance(self.height, bool) or not isinstance(self.height, int):
            raise ConfigurationError("height must be an integer")
        if self.width <= 0 or self.height <= 0:
            raise ConfigurationError(
                f"map size must be positive, got {self.width}x{self.height}"
            )
        if not isinstance(self.seed, int) or isinstance(self.seed, bool):
            raise ConfigurationError("seed must be an integer")

        density = float(self.obstacle_density)
        if math.isnan(density) or not 0.0 <= density <= 1.0:
            raise ConfigurationError("obstacle_density must lie between 0 and 1")
        object.__setattr__(self, "obstacle_density", density)

        low = float(self.min_obstacle_height)
        high = float(self.max_obstacle_height)
        if low > high:
            raise ConfigurationError(
                "min_obstacle_height must not exceed max_obstacle_height"
            )
        object.__setattr__(self, "min_obstacle_height", low)
        object.__setattr__(self, "max_obstacle_height", high)
        object.__setattr__(self, "foreground_colour", _colour(self.foreground_colour, "foreground_colour"))
        object.__setattr__(self, "background_colour", _colour(self.background_colour, "background_colour"))

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def center(self) -> Coord:
        """Return the flood-fill origin, which is never turned into an obstacle."""

        return Coord(self.width // 2, self.height // 2)

    @property
    def tile_count(self) -> int:
        return self.width * self.height

    @property
    def target_obstacle_count(self) -> int:
        """Number of obstacles the density asks for, rounded down."""

        return int(math.floor(self.tile_count * self.obstacle_density))

    def obstacle_height(self, t: float) -> float:
        """Interpolate between the minimum and maximum obstacle heights."""

        return self.min_obstacle_height + (self.max_obstacle_height - self.min_obstacle_height) * t

    def obstacle_colour(self, y: int) -> Colour:
        """Blend the foreground and background colours for an obstacle on row ``y``."""

        t = y / self.height
        red, green, blue = (
            front + (back - front) * t
            for front, back in zip(self.foreground_colour, self.background_colour)
        )
        return (red, green, blue)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "MapConfig":
        """Build a config from a mapping as found in YAML/JSON map files.

        The size may be given either as ``width``/``height`` keys or as a
        two-item ``size`` sequence.
        """

        if not isinstance(data, Mapping):
            raise ConfigurationError("map entries must be mappings")
        try:
            if "size" in data:
                width, height = data["size"]
            else:
                width, height = data["width"], data["height"]
            density = data["obstacle_density"]
            seed = data["seed"]
        except KeyError as exc:
            raise ConfigurationError(
                f"missing required map field: {exc.args[0]!r}"
            ) from exc
        except (TypeError, ValueError) as exc:
            raise ConfigurationError("size must be a [width, height] pair") from exc

        min_height = data.get("min_obstacle_height", 1.0)
        max_height = data.get("max_obstacle_height", min_height)
        try:
            return cls(
                width=width,
                height=height,
                obstacle_density=float(density),
                seed=seed,
                min_obstacle_height=float(min_height),
                max_obstacle_height=float(max_height),
                boundary_obstacles=bool(data.get("boundary_obstacles", False)),
                name=str(data.get("name", "")),
                foreground_colour=data.get("foreground_colour", (1.0, 1.0, 1.0)),
                background_colour=data.get("background_colour", (0.0, 0.0, 0.0)),
            )
        except (TypeError, ValueError) as exc:
            if isinstance(exc, ConfigurationError):
                raise
            raise ConfigurationError(f"invalid map entry: {exc}") from exc

    def to_mapping(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "obstacle_density": self.obstacle_density,
            "seed": self.seed,
            "min_obstacle_height": self.min_obstacle_height,
            "max_obstacle_height": self.max_obstacle_height,
            "boundary_obstacles": self.boundary_obstacles,
            "foreground_colour": list(self.foreground_colour),
            "background_colour": list(self.background_colour),
        }


__all__ = ["Colour", "MapConfig"]
