"""Food placement."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import utils

if TYPE_CHECKING:  # pragma: no cover
    from .world import World


def generate_food(world: "World") -> utils.Position:
    """Pick a cell for the next food item.

    Candidates covered by a living snake are rejected. After
    ``food_placement_attempts`` misses the last candidate is returned anyway,
    so a nearly full board never blocks the tick.
    """

    occupied = {
        segment
        for player in world.players.values()
        if player.alive
        for segment in player.body
    }
    grid_size = world.config.grid_size
    candidate = utils.random_position(grid_size, world.rng)
    for _ in range(world.config.food_placement_attempts - 1):
        if candidate not in occupied:
            break
        candidate = utils.random_position(grid_size, world.rng)
    return candidate
