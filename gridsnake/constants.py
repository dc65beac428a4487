"""Gameplay constants shared across the server modules."""

from __future__ import annotations

from dataclasses import dataclass, field

GRID_SIZE: int = 25
TICK_INTERVAL: float = 0.1
FOOD_REWARD: int = 10
MAX_NAME_LENGTH: int = 15
FOOD_REFRESH_CHANCE: float = 0.01
FOOD_PLACEMENT_ATTEMPTS: int = 100
PLAYER_ID_LENGTH: int = 9
PLAYER_COLORS: tuple[str, ...] = (
    "#FF6B6B",
    "#4ECDC4",
    "#45B7D1",
    "#FFBE0B",
    "#FB5607",
    "#8338EC",
    "#3A86FF",
    "#FF006E",
)
DEFAULT_HOST: str = "0.0.0.0"
DEFAULT_PORT: int = 10000


@dataclass
class GameConfig:
    """Process-wide game settings, fixed once the server starts."""

    grid_size: int = GRID_SIZE
    tick_interval: float = TICK_INTERVAL
    food_reward: int = FOOD_REWARD
    max_name_length: int = MAX_NAME_LENGTH
    food_refresh_chance: float = FOOD_REFRESH_CHANCE
    food_placement_attempts: int = FOOD_PLACEMENT_ATTEMPTS
    colors: tuple[str, ...] = field(default=PLAYER_COLORS)

    def __post_init__(self) -> None:
        if self.grid_size < 1:
            raise ValueError("grid_size must be positive")
        if self.tick_interval <= 0:
            raise ValueError("tick_interval must be positive")
        if self.food_reward < 0:
            raise ValueError("food_reward must not be negative")
        if self.max_name_length < 1:
            raise ValueError("max_name_length must be positive")
        if not 0.0 <= self.food_refresh_chance <= 1.0:
            raise ValueError("food_refresh_chance must be between 0 and 1")
        if self.food_placement_attempts < 1:
            raise ValueError("food_placement_attempts must be positive")
        if not self.colors:
            raise ValueError("colors must not be empty")
