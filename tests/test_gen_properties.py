"""Property-based checks for arena generation invariants."""
from __future__ import annotations

import random
import time
from pathlib import Path

import pytest

from config.config_loader import load_map_configs
from modules.arena.coords import Coord
from modules.arena.gen.params import MapConfig
from modules.arena.gen.validate import ConnectivityValidator
from modules.arena.systems.map_generator import MapGenerator, generate_arena


_RUNS = 60
# Generous upper bound for all runs together; the largest maps are 24x24.
_TOTAL_RUN_BUDGET = 60.0


def _random_config(rng: random.Random) -> MapConfig:
    low = rng.uniform(0.0, 2.0)
    return MapConfig(
        width=rng.randint(1, 24),
        height=rng.randint(1, 24),
        obstacle_density=rng.choice((0.0, 1.0, rng.uniform(0.0, 1.0))),
        seed=rng.randint(0, 2**31 - 1),
        min_obstacle_height=low,
        max_obstacle_height=low + rng.uniform(0.0, 3.0),
    )


def test_generated_maps_preserve_invariants_and_budget() -> None:
    rng = random.Random(0xA4E7A)
    validator = ConnectivityValidator()
    start = time.perf_counter()

    for _ in range(_RUNS):
        config = _random_config(rng)
        arena = generate_arena(config)
        grid = arena.grid

        # The center always stays open and every open cell is reachable from it.
        assert not grid.is_occupied(config.center)
        assert validator.validate(grid, config.center).valid, grid.render()

        # Placement never exceeds the density target.
        assert arena.placement.placed_count <= config.target_obstacle_count
        assert grid.obstacle_count == arena.placement.placed_count
        assert arena.boundary == []

        # Heights stay within the configured range and exist for every obstacle.
        assert set(arena.obstacle_heights) == set(grid.obstacle_coords())
        for height in arena.obstacle_heights.values():
            assert config.min_obstacle_height <= height <= config.max_obstacle_height

    assert time.perf_counter() - start <= _TOTAL_RUN_BUDGET


@pytest.mark.parametrize("seed", [0, 42, 2024])
def test_generation_is_deterministic(seed: int) -> None:
    configs = [
        MapConfig(width=13, height=9, obstacle_density=0.4, seed=seed, max_obstacle_height=2.0),
        MapConfig(width=8, height=8, obstacle_density=0.3, seed=seed + 1, boundary_obstacles=True),
    ]
    first = MapGenerator(configs)
    second = MapGenerator(configs)

    for index in range(len(configs)):
        arena_a = first.generate_map(index)
        arena_b = second.generate_map(index)
        assert arena_a.grid == arena_b.grid
        assert arena_a.grid.to_rows() == arena_b.grid.to_rows()
        assert arena_a.obstacle_heights == arena_b.obstacle_heights
        assert arena_a.placement.rejected == arena_b.placement.rejected

        draws = 2 * len(first.allocator) + 3
        assert [first.get_random_open_tile().coord for _ in range(draws)] == [
            second.get_random_open_tile().coord for _ in range(draws)
        ]
        assert [first.get_random_coord() for _ in range(5)] == [
            second.get_random_coord() for _ in range(5)
        ]


def test_regenerating_same_index_reproduces_the_map() -> None:
    generator = MapGenerator([MapConfig(width=11, height=11, obstacle_density=0.45, seed=99)])
    first = generator.generate_map(0)
    first_order = generator.allocator.snapshot()
    generator.get_random_open_tile()

    second = generator.generate_map(0)
    assert second.grid == first.grid
    assert generator.allocator.snapshot() == first_order
    assert second.generation == first.generation + 1


def test_ten_by_ten_scenario() -> None:
    config = MapConfig(width=10, height=10, obstacle_density=0.2, seed=42)
    generator = MapGenerator([config], attempt_budget_mode=True)
    arena = generator.generate_map(0)

    assert arena.placement.attempts <= 20
    assert arena.placement.placed_count <= 20
    assert config.center == Coord(5, 5)
    assert not arena.grid.is_occupied(Coord(5, 5))
    assert ConnectivityValidator().reachable_count(arena.grid, Coord(5, 5)) == arena.grid.open_count


def test_three_by_three_full_density_scenario() -> None:
    for seed in range(25):
        config = MapConfig(width=3, height=3, obstacle_density=1.0, seed=seed)
        arena = generate_arena(config)

        assert not arena.grid.is_occupied(Coord(1, 1))
        assert arena.placement.attempts == 9
        assert arena.placement.under_density
        assert ConnectivityValidator().validate(arena.grid, Coord(1, 1)).valid


def test_boundary_ring_is_fully_occupied() -> None:
    config = MapConfig(width=9, height=7, obstacle_density=0.25, seed=5, boundary_obstacles=True, max_obstacle_height=2.0)
    arena = generate_arena(config)
    grid = arena.grid

    assert all(grid.is_occupied(coord) for coord in grid.boundary_coords())
    assert arena.placement.placed_count <= config.target_obstacle_count
    assert grid.obstacle_count == arena.placement.placed_count + len(arena.boundary)
    assert all(arena.obstacle_heights[coord] == 2.0 for coord in arena.boundary)
    assert not grid.is_occupied(config.center)
    assert ConnectivityValidator().find_unreachable(grid, config.center) == []


def test_allocator_cycle_covers_open_tiles_exactly_once() -> None:
    config = MapConfig(width=12, height=12, obstacle_density=0.35, seed=8, boundary_obstacles=True)
    generator = MapGenerator([config])
    arena = generator.generate_map(0)

    open_coords = arena.open_coords
    cycle = [generator.get_random_open_tile().coord for _ in range(len(open_coords))]
    assert sorted(cycle) == sorted(open_coords)
    assert len(set(cycle)) == len(cycle)
    assert not any(arena.grid.is_occupied(coord) for coord in cycle)

    # Draws keep going well past one cycle.
    for _ in range(5 * len(open_coords)):
        generator.get_random_open_tile()


@pytest.mark.parametrize("size", [(12, 12), (15, 11), (21, 21)])
def test_ring_enabled_maps_keep_every_open_tile_reachable(size: tuple[int, int]) -> None:
    validator = ConnectivityValidator()
    width, height = size

    for seed in range(20):
        config = MapConfig(width=width, height=height, obstacle_density=0.45, seed=seed, boundary_obstacles=True)
        generator = MapGenerator([config])
        arena = generator.generate_map(0)

        assert validator.find_unreachable(arena.grid, config.center) == [], (seed, arena.grid.render())
        assert set(generator.allocator.snapshot()) == set(arena.open_coords)


def test_rejected_candidates_are_never_offered_again() -> None:
    rng = random.Random(0x5EED)

    for _ in range(_RUNS):
        config = _random_config(rng)
        for budget_mode in (False, True):
            placement = generate_arena(config, attempt_budget_mode=budget_mode).placement

            assert len(set(placement.rejected)) == len(placement.rejected)
            assert not set(placement.rejected) & set(placement.placed)
            assert placement.attempts == len(placement.placed) + len(placement.rejected)


def test_bundled_maps_serve_only_reachable_tiles() -> None:
    configs = load_map_configs(Path(__file__).resolve().parents[1] / "config" / "maps.yaml")
    generator = MapGenerator(configs)
    validator = ConnectivityValidator()

    for index, config in enumerate(configs):
        arena = generator.generate_map(index)
        assert validator.find_unreachable(arena.grid, config.center) == [], config.name
        served = {generator.get_random_open_tile().coord for _ in range(len(generator.allocator))}
        assert served == set(arena.open_coords)
