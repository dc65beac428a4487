"""Grid primitives used by the authoritative game server."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import random


class Heading(str, Enum):
    """Direction a snake travels in.

    ``y`` grows downwards, matching the client's canvas coordinates, so ``UP``
    decreases ``y``.
    """

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def offset(self) -> tuple[int, int]:
        """Return the ``(dx, dy)`` step for one cell of movement."""

        return _OFFSETS[self]

    @property
    def reverse(self) -> "Heading":
        """Return the heading pointing the opposite way."""

        return _REVERSES[self]

    @classmethod
    def parse(cls, value: object) -> "Heading":
        """Return the heading named by ``value``.

        Raises ``ValueError`` for anything that is not one of the four names.
        """

        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid heading {value!r}")
        return cls(value)


_OFFSETS = {
    Heading.UP: (0, -1),
    Heading.DOWN: (0, 1),
    Heading.LEFT: (-1, 0),
    Heading.RIGHT: (1, 0),
}

_REVERSES = {
    Heading.UP: Heading.DOWN,
    Heading.DOWN: Heading.UP,
    Heading.LEFT: Heading.RIGHT,
    Heading.RIGHT: Heading.LEFT,
}


@dataclass(frozen=True)
class Position:
    """A single grid cell."""

    x: int
    y: int

    def moved(self, heading: Heading, grid_size: int) -> "Position":
        """Return the neighbouring cell in ``heading``, wrapping at the edges."""

        dx, dy = heading.offset
        return Position(wrap(self.x + dx, grid_size), wrap(self.y + dy, grid_size))

    def to_dict(self) -> dict[str, int]:
        return {"x": self.x, "y": self.y}


def wrap(value: int, grid_size: int) -> int:
    """Fold ``value`` back onto ``[0, grid_size)``."""

    return value % grid_size


def random_position(grid_size: int, rng: random.Random) -> Position:
    """Return a uniformly random cell of the grid."""

    return Position(rng.randrange(grid_size), rng.randrange(grid_size))


def random_heading(rng: random.Random) -> Heading:
    return rng.choice(list(Heading))
