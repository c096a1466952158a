"""The menu and the in-game layer, sharing one scene state."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from typing import Iterable, Optional, Protocol

from .application import Layer
from .enemy import Enemy
from .input import Input
from .inventory import PICKAXE, Item, item_for_path
from .network import GOODBYE_POSITION, GamePacket, ReceiveCallback, UDPClient
from .player import Player
from .world import World

SERVER_IP = "34.141.136.27"
SERVER_PORT = 12345


class GameClient(Protocol):
    def start(self) -> None: ...

    def stop(self) -> None: ...

    def send_player_position(self, packet: GamePacket) -> None: ...

    def set_receive_callback(self, callback: Optional[ReceiveCallback]) -> None: ...


@dataclass
class Scene:
    """Which screen is active and the name the player entered."""

    menu: bool = True
    playing: bool = False
    player_name: str = ""

    @property
    def in_menu(self) -> bool:
        return self.menu and not self.playing

    @property
    def in_game(self) -> bool:
        return self.playing and not self.menu


class GameOver(Exception):
    """Raised when the local player's health runs out."""

    def __init__(self, hp: int) -> None:
        super().__init__(f"player died with {hp} hp")
        self.hp = hp


@dataclass
class RemotePlayer:
    """Another player as last reported by the server."""

    name: str
    x: float
    y: float
    item: Item


class MenuLayer(Layer):
    """Start screen: asks for a name and starts the game."""

    def __init__(self, scene: Optional[Scene] = None) -> None:
        self.scene = scene if scene is not None else Scene()
        self.start_pressed = False

    def start_game(self) -> bool:
        """Switch to the game if a name has been entered; return whether it started."""
        if not self.scene.player_name:
            return False
        self.scene.playing = True
        self.scene.menu = False
        return True

    def on_ui_render(self) -> None:
        """Handle a pending press of the start button while the menu is shown."""
        pressed, self.start_pressed = self.start_pressed, False
        if self.scene.in_menu and pressed:
            self.start_game()


class PlayLayer(Layer):
    """The running game: enemies, networking, remote players and local input."""

    def __init__(
        self,
        scene: Optional[Scene] = None,
        client: Optional[GameClient] = None,
        world: Optional[World] = None,
        player: Optional[Player] = None,
        input_state: Optional[Input] = None,
    ) -> None:
        self.scene = scene if scene is not None else Scene()
        self.client: GameClient = client if client is not None else UDPClient(SERVER_IP, SERVER_PORT)
        self.world = world if world is not None else World()
        self.player = player if player is not None else Player()
        self.input = input_state if input_state is not None else Input()
        self.enemies: list[Enemy] = []
        self.remote_players: list[RemotePlayer] = []
        self.chat: list[str] = []
        self._server_players: list[GamePacket] = []
        self._lock = threading.Lock()
        self._timestep = 0.0
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def on_attach(self) -> None:
        try:
            self.client.start()
            self._connected = True
        except OSError as exc:
            print(f"Failed to start client: {exc}", file=sys.stderr)
        self.client.set_receive_callback(self.receive)
        self.enemies.clear()
        self.player.inventory.add_item(PICKAXE)

    def on_detach(self) -> None:
        self.client.set_receive_callback(None)
        if not self._connected:
            return
        try:
            self.client.send_player_position(GamePacket("", GOODBYE_POSITION, GOODBYE_POSITION))
        except OSError:
            pass
        finally:
            self.client.stop()
            self._connected = False

    def receive(self, players: Iterable[GamePacket]) -> None:
        """Replace the known server players; called from the network thread."""
        with self._lock:
            self._server_players = list(players)

    def _snapshot(self) -> list[GamePacket]:
        with self._lock:
            return list(self._server_players)

    def apply_server_players(self) -> list[RemotePlayer]:
        """Apply remote block changes to the world and return the remote players."""
        remote: list[RemotePlayer] = []
        for packet in self._snapshot():
            for block in packet.changed_blocks:
                try:
                    self.world.fill_tile(block.x, block.y, block.color)
                except IndexError:
                    continue
            remote.append(
                RemotePlayer(packet.name, packet.x, packet.y, item_for_path(packet.current_block_name))
            )
        return remote

    def chat_lines(self) -> list[str]:
        """Chat messages of remote players, in the order the server sent them."""
        return [
            f"Player {packet.name}: {packet.chat_message}"
            for packet in self._snapshot()
            if packet.chat_message
        ]

    def on_update(self, timestep: float) -> None:
        self._timestep = timestep
        if not self.scene.in_game:
            return

        for enemy in self.enemies:
            enemy.attack(timestep, self.player)

        if not self.player.is_sleeping:
            if self._connected:
                try:
                    self.player.update_network(self.client, self.scene.player_name)
                except OSError:
                    pass
            self.remote_players = self.apply_server_players()
            self.chat = self.chat_lines()

        if self.player.hp < 1:
            raise GameOver(self.player.hp)

    def on_ui_render(self) -> None:
        if self.scene.in_game:
            self.player.handle_input(self.input, self.world, self._timestep)