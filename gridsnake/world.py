"""Authoritative game world simulation."""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
import random
import uuid
from typing import Dict, List, Optional

from . import collision, constants, utils
from .constants import GameConfig
from .food import generate_food
from .snake import Player


@dataclass
class TickResult:
    """Per-player events produced by one call to :meth:`World.update`."""

    scored: List[Player] = field(default_factory=list)
    died: List[Player] = field(default_factory=list)

    @property
    def roster_changed(self) -> bool:
        return bool(self.scored or self.died)


class World:
    """Holds every player plus the food and advances the simulation per tick."""

    def __init__(self, config: Optional[GameConfig] = None, rng: Optional[random.Random] = None) -> None:
        self.config = config or GameConfig()
        self.rng = rng or random.Random()
        self.tick: int = 0
        self.players: Dict[str, Player] = {}
        self.food: Optional[utils.Position] = None
        self.next_number: int = 1

    def _new_player_id(self) -> str:
        while True:
            player_id = uuid.UUID(int=self.rng.getrandbits(128)).hex[: constants.PLAYER_ID_LENGTH]
            if player_id not in self.players:
                return player_id

    def add_player(self) -> Player:
        number = self.next_number
        self.next_number += 1
        player = Player(
            id=self._new_player_id(),
            name=f"Player {number}",
            color=self.rng.choice(self.config.colors),
            heading=utils.random_heading(self.rng),
            body=[utils.random_position(self.config.grid_size, self.rng)],
            number=number,
        )
        self.players[player.id] = player
        self.ensure_food()
        return player

    def remove_player(self, player_id: str) -> Optional[Player]:
        return self.players.pop(player_id, None)

    def set_pending_heading(self, player_id: str, heading: utils.Heading) -> None:
        player = self.players.get(player_id)
        if player:
            player.queue_heading(heading)

    def rename_player(self, player_id: str, name: str) -> bool:
        player = self.players.get(player_id)
        if not player:
            return False
        player.rename(name, self.config.max_name_length)
        return True

    def ensure_food(self) -> None:
        if self.food is None:
            self.food = generate_food(self)

    def reset_food(self) -> None:
        self.food = None

    def _commit_headings(self, skipped: set[str]) -> None:
        for player in list(self.players.values()):
            if not player.alive or player.id in skipped:
                continue
            try:
                player.commit_heading()
            except Exception:
                logging.exception("Skipping player %s for tick %s", player.id, self.tick)
                skipped.add(player.id)

    def _move_players(self, skipped: set[str], result: TickResult) -> None:
        for player in list(self.players.values()):
            if not player.alive or player.id in skipped:
                continue
            try:
                new_head = player.advance(self.config.grid_size)
            except Exception:
                logging.exception("Skipping player %s for tick %s", player.id, self.tick)
                skipped.add(player.id)
                continue
            if self.food is not None and new_head == self.food:
                player.score += self.config.food_reward
                self.food = generate_food(self)
                result.scored.append(player)
            else:
                player.drop_tail()

    def _resolve_collisions(self, skipped: set[str], result: TickResult) -> None:
        for player in collision.detect_head_collisions(self.players.values()):
            if player.id in skipped:
                continue
            player.kill()
            result.died.append(player)

    def update(self) -> TickResult:
        """Advance the world by one tick and report who scored and who died."""

        result = TickResult()
        skipped: set[str] = set()
        self.ensure_food()
        self._commit_headings(skipped)
        self._move_players(skipped, result)
        self._resolve_collisions(skipped, result)
        if self.config.food_refresh_chance and self.rng.random() < self.config.food_refresh_chance:
            self.food = generate_food(self)
        self.tick += 1
        return result

    def roster(self) -> List[dict]:
        entries = sorted(self.players.values(), key=lambda player: player.number)
        return [player.to_roster_entry() for player in entries]

    def snapshot(self, exclude: Optional[str] = None) -> dict:
        """Return the client-facing view of the world.

        ``exclude`` leaves one player out, which is how a new player receives
        the board before their own snake matters to them.
        """

        return {
            "food": self.food.to_dict() if self.food is not None else None,
            "players": {
                player_id: player.to_view()
                for player_id, player in self.players.items()
                if player_id != exclude
            },
        }
