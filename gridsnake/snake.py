"""Player entity implementation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .utils import Heading, Position


class InvalidPlayerState(ValueError):
    """Raised when a player's state cannot be simulated."""


@dataclass
class Player:
    """Authoritative representation of a connected player and their snake."""

    id: str
    name: str
    color: str
    heading: Heading
    body: List[Position] = field(default_factory=list)
    pending_heading: Optional[Heading] = None
    score: int = 0
    alive: bool = True
    number: int = 0

    @property
    def head(self) -> Position:
        """Return the first body segment."""

        if not self.body:
            raise InvalidPlayerState(f"Player {self.id} has no body")
        return self.body[0]

    def queue_heading(self, heading: Heading) -> None:
        """Buffer ``heading`` until the next tick commits it."""

        self.pending_heading = heading

    def commit_heading(self) -> bool:
        """Adopt the buffered heading unless it would reverse the snake.

        The buffer is cleared either way so a rejected input is not retried on
        later ticks. Returns ``True`` when the heading changed.
        """

        pending, self.pending_heading = self.pending_heading, None
        if pending is None:
            return False
        if not isinstance(self.heading, Heading) or not isinstance(pending, Heading):
            raise InvalidPlayerState(f"Player {self.id} has a corrupt heading")
        if pending is self.heading.reverse or pending is self.heading:
            return False
        self.heading = pending
        return True

    def advance(self, grid_size: int) -> Position:
        """Prepend a new head one cell ahead and return it."""

        if not isinstance(self.heading, Heading):
            raise InvalidPlayerState(f"Player {self.id} has a corrupt heading")
        new_head = self.head.moved(self.heading, grid_size)
        self.body.insert(0, new_head)
        return new_head

    def drop_tail(self) -> None:
        if len(self.body) > 1:
            self.body.pop()

    def kill(self) -> None:
        """Mark the player as dead. The body stays where it is."""

        self.alive = False

    def rename(self, name: str, max_length: int) -> None:
        self.name = name[:max_length]

    def occupies(self, position: Position) -> bool:
        return position in self.body

    def to_view(self) -> dict:
        """Return the public per-tick representation of the snake."""

        return {
            "snake": [segment.to_dict() for segment in self.body],
            "color": self.color,
            "alive": self.alive,
        }

    def to_roster_entry(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "score": self.score,
            "color": self.color,
            "alive": self.alive,
        }
