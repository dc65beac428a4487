"""Entry point for the asyncio based game server."""

from __future__ import annotations

import argparse
import asyncio
import logging
import os

import websockets
from websockets.asyncio.server import ServerConnection, serve

from . import constants
from .constants import GameConfig
from .session import SessionManager
from .world import World


class GameServer:
    """Accepts websocket connections and hands them to the session manager."""

    def __init__(self, host: str, port: int, config: GameConfig | None = None) -> None:
        self.host = host
        self.port = port
        self.world = World(config)
        self.sessions = SessionManager(self.world)

    async def start(self) -> None:
        """Serve until the process is interrupted."""

        async with serve(self._handle_client, self.host, self.port):
            logging.info("Server listening on %s:%s", self.host, self.port)
            await asyncio.Future()

    async def _handle_client(self, websocket: ServerConnection) -> None:
        player_id = await self.sessions.connect(websocket)
        try:
            async for message in websocket:
                await self.sessions.handle_message(player_id, message)
        except websockets.ConnectionClosed:
            logging.info("Connection to player %s closed unexpectedly", player_id)
        finally:
            await self.sessions.disconnect(player_id)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the multiplayer snake server")
    parser.add_argument("--host", default=constants.DEFAULT_HOST, help="Host interface to bind to")
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("PORT", constants.DEFAULT_PORT)),
        help="Port to listen on (defaults to $PORT)",
    )
    parser.add_argument("--grid-size", type=int, default=constants.GRID_SIZE, help="Cells per side of the board")
    parser.add_argument(
        "--tick-interval", type=float, default=constants.TICK_INTERVAL, help="Seconds between simulation ticks"
    )
    parser.add_argument("--food-reward", type=int, default=constants.FOOD_REWARD, help="Points per food item")
    parser.add_argument(
        "--max-name-length", type=int, default=constants.MAX_NAME_LENGTH, help="Longest accepted player name"
    )
    parser.add_argument(
        "--food-refresh-chance",
        type=float,
        default=constants.FOOD_REFRESH_CHANCE,
        help="Chance per tick of moving uneaten food (0 disables)",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def config_from_args(args: argparse.Namespace) -> GameConfig:
    return GameConfig(
        grid_size=args.grid_size,
        tick_interval=args.tick_interval,
        food_reward=args.food_reward,
        max_name_length=args.max_name_length,
        food_refresh_chance=args.food_refresh_chance,
    )


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level.upper(), format="[%(levelname)s] %(message)s")
    server = GameServer(args.host, args.port, config_from_args(args))
    try:
        asyncio.run(server.start())
    except KeyboardInterrupt:
        logging.info("Server stopped")


if __name__ == "__main__":
    main()
