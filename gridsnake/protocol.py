"""JSON protocol helpers for the websocket transport."""

from __future__ import annotations

from dataclasses import dataclass
import json
from typing import Iterable, Union

from .utils import Heading


@dataclass(frozen=True)
class DirectionChange:
    direction: Heading


@dataclass(frozen=True)
class SetName:
    name: str


ClientMessage = Union[DirectionChange, SetName]


def parse_client_message(message: Union[str, bytes]) -> ClientMessage:
    """Parse a raw client ``message`` into a typed command.

    Raises ``ValueError`` for anything the server does not understand, so the
    caller can drop it without touching the world.
    """

    try:
        payload = json.loads(message)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as exc:
        raise ValueError("Invalid client message") from exc
    if not isinstance(payload, dict):
        raise ValueError("Client message must be a JSON object")

    kind = payload.get("type")
    if kind == "directionChange":
        return DirectionChange(Heading.parse(payload.get("direction")))
    if kind == "setName":
        name = payload.get("name")
        if not isinstance(name, str):
            raise ValueError("setName requires a string name")
        return SetName(name)
    raise ValueError(f"Unknown message type {kind!r}")


def encode_init(player_id: str, game_state: dict) -> str:
    """Encode the payload sent to a player right after they connect."""

    return json.dumps({"type": "init", "playerId": player_id, "gameState": game_state})


def encode_game_update(game_state: dict) -> str:
    return json.dumps({"type": "gameUpdate", "gameState": game_state})


def encode_players_update(players: Iterable[dict]) -> str:
    return json.dumps({"type": "playersUpdate", "players": list(players)})


def encode_score_update(score: int) -> str:
    return json.dumps({"type": "scoreUpdate", "score": score})


def encode_game_over(score: int) -> str:
    return json.dumps({"type": "gameOver", "score": score})
