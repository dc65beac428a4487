"""Connection bookkeeping, the tick timer and broadcast fan-out."""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Optional, Protocol

from . import protocol
from .world import TickResult, World


class Channel(Protocol):
    """Anything that can deliver a text frame to one client."""

    async def send(self, message: str) -> None: ...


class SessionManager:
    """Owns the channel for each player and drives ``World.update`` on a timer.

    Every mutation of the world happens in a synchronous section of a single
    event loop, so ticks and inbound messages never interleave. Outbound
    payloads are encoded before the first ``await`` and are never rebuilt from
    the live world during fan-out.
    """

    def __init__(self, world: World, tick_interval: Optional[float] = None) -> None:
        self.world = world
        self.tick_interval = tick_interval if tick_interval is not None else world.config.tick_interval
        self.channels: Dict[str, Channel] = {}
        self._tick_task: Optional[asyncio.Task[None]] = None

    @property
    def running(self) -> bool:
        return self._tick_task is not None and not self._tick_task.done()

    async def connect(self, channel: Channel) -> str:
        """Create a player for ``channel`` and send them the current board."""

        player = self.world.add_player()
        logging.info("%s connected as player %s", player.name, player.id)
        if not self.running:
            self.start()
        init = protocol.encode_init(player.id, self.world.snapshot(exclude=player.id))
        roster = protocol.encode_players_update(self.world.roster())
        try:
            await self._send(player.id, channel, init)
            self.channels[player.id] = channel
            await self.broadcast(roster)
        except asyncio.CancelledError:
            await self.disconnect(player.id)
            raise
        return player.id

    async def disconnect(self, player_id: str) -> None:
        """Forget ``player_id`` and stop the timer once nobody is left."""

        self.channels.pop(player_id, None)
        if self.world.remove_player(player_id) is None:
            return
        logging.info("Player %s disconnected", player_id)
        if not self.world.players:
            self.world.reset_food()
            await self.stop()
        await self.broadcast(protocol.encode_players_update(self.world.roster()))

    async def handle_message(self, player_id: str, message: str | bytes) -> None:
        """Apply one inbound frame from ``player_id``."""

        try:
            command = protocol.parse_client_message(message)
        except ValueError as exc:
            logging.debug("Discarding message from player %s: %s", player_id, exc)
            return
        if isinstance(command, protocol.DirectionChange):
            self.world.set_pending_heading(player_id, command.direction)
        elif isinstance(command, protocol.SetName):
            if self.world.rename_player(player_id, command.name):
                await self.broadcast(protocol.encode_players_update(self.world.roster()))

    async def run_tick(self) -> None:
        """Advance the world once and push the results to every client."""

        try:
            result = self.world.update()
            outgoing = self._encode_tick(result)
        except Exception:
            logging.exception("Tick %s failed", self.world.tick)
            return
        await self.broadcast(outgoing["gameUpdate"])
        unicasts = [
            self._send(player_id, self.channels[player_id], message)
            for player_id, message in outgoing["unicast"]
            if player_id in self.channels
        ]
        await asyncio.gather(*unicasts)
        if outgoing["roster"] is not None:
            await self.broadcast(outgoing["roster"])

    def _encode_tick(self, result: TickResult) -> dict:
        unicast = [(player.id, protocol.encode_score_update(player.score)) for player in result.scored]
        unicast += [(player.id, protocol.encode_game_over(player.score)) for player in result.died]
        roster = None
        if result.roster_changed:
            roster = protocol.encode_players_update(self.world.roster())
        return {
            "gameUpdate": protocol.encode_game_update(self.world.snapshot()),
            "unicast": unicast,
            "roster": roster,
        }

    async def broadcast(self, message: str) -> None:
        """Send the already encoded ``message`` to every connected player."""

        targets = list(self.channels.items())
        await asyncio.gather(*(self._send(player_id, channel, message) for player_id, channel in targets))

    async def _send(self, player_id: str, channel: Channel, message: str) -> None:
        try:
            await channel.send(message)
        except Exception:
            logging.exception("Failed to send to player %s", player_id)

    def start(self) -> None:
        if self.running:
            return
        self._tick_task = asyncio.create_task(self._run_game_loop())
        logging.info("Game loop started")

    async def stop(self) -> None:
        task, self._tick_task = self._tick_task, None
        if task is None:
            return
        task.cancel()
        if task is not asyncio.current_task():
            try:
                await task
            except asyncio.CancelledError:
                pass
        logging.info("Game loop stopped")

    async def _run_game_loop(self) -> None:
        while True:
            await asyncio.sleep(self.tick_interval)
            await self.run_tick()
