"""Shared fixtures for the game server tests."""

import json
import random

import pytest

from gridsnake.constants import GameConfig
from gridsnake.snake import Player
from gridsnake.utils import Position
from gridsnake.world import World


class FakeChannel:
    """Records every frame the server sends to one client."""

    def __init__(self, fail=False):
        self.sent = []
        self.fail = fail

    async def send(self, message):
        if self.fail:
            raise ConnectionError("channel is gone")
        self.sent.append(json.loads(message))

    def of_type(self, kind):
        return [message for message in self.sent if message["type"] == kind]


def place_player(world, player_id, body, heading, number=None):
    """Put a player with a hand-built body straight into ``world``."""
    if number is None:
        number = world.next_number
        world.next_number += 1
    player = Player(
        id=player_id,
        name=f"Player {number}",
        color="#FF6B6B",
        heading=heading,
        body=[Position(x, y) for x, y in body],
        number=number,
    )
    world.players[player_id] = player
    return player


@pytest.fixture
def config():
    return GameConfig(grid_size=25, food_reward=10, food_refresh_chance=0.0)


@pytest.fixture
def world(config):
    return World(config, rng=random.Random(1234))
