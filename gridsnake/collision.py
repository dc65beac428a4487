"""Collision helpers for the game server."""

from __future__ import annotations

import logging
from typing import Iterable, List, NamedTuple

from .snake import Player
from .utils import Position


class Segment(NamedTuple):
    owner: str
    position: Position
    is_head: bool


def occupied_segments(players: Iterable[Player]) -> List[Segment]:
    """Return every body segment of every living snake."""

    segments: List[Segment] = []
    for player in players:
        if not player.alive:
            continue
        for index, position in enumerate(player.body):
            segments.append(Segment(player.id, position, index == 0))
    return segments


def detect_head_collisions(players: Iterable[Player]) -> List[Player]:
    """Return the living players whose head shares a cell with another segment.

    A head never collides with itself, but any other segment counts, including
    the player's own body behind the head and other players' heads. The
    obstacle set is built once, so two heads meeting kill both snakes.
    """

    players = [player for player in players if player.alive]
    segments_by_cell: dict[Position, List[Segment]] = {}
    for segment in occupied_segments(players):
        segments_by_cell.setdefault(segment.position, []).append(segment)

    collided: List[Player] = []
    for player in players:
        try:
            head = player.head
        except ValueError:
            logging.exception("Skipping collision check for player %s", player.id)
            continue
        for segment in segments_by_cell.get(head, ()):
            if segment.owner != player.id or not segment.is_head:
                collided.append(player)
                break
    return collided
