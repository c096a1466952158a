"""The local player: movement, collision, block breaking and chat."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Protocol

from .input import Input
from .inventory import DIAMOND, GRASS, LEAVE, TREE, Inventory, Item
from .keycodes import KeyCode
from .network import BlockPacket, GamePacket
from .world import Block, World, is_solid

WALK_SPEED = 350.0
SPRINT_BONUS = 2000.0
MAX_POSITION = 5120.0
CHAT_LINGER_SECONDS = 5.0
PICKAXE_MARKER = "pickaxe.png"
BACKSPACE = "\b"

_BREAKABLE = {
    int(Block.TREE): TREE,
    int(Block.LEAVES): LEAVE,
    int(Block.DIAMOND): DIAMOND,
}


class Direction(Enum):
    """A movement direction as a unit step (dx, dy)."""

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)


_MOVE_KEYS = (
    (Direction.UP, (KeyCode.W, KeyCode.UP)),
    (Direction.DOWN, (KeyCode.S, KeyCode.DOWN)),
    (Direction.LEFT, (KeyCode.A, KeyCode.LEFT)),
    (Direction.RIGHT, (KeyCode.D, KeyCode.RIGHT)),
)

_SLOT_KEYS = (KeyCode.D1, KeyCode.D2, KeyCode.D3)


class PositionSender(Protocol):
    def send_player_position(self, packet: GamePacket) -> None: ...


def _is_pickaxe(item: Item) -> bool:
    return PICKAXE_MARKER in item.path


@dataclass
class Player:
    """Position, health, inventory and chat state of the local player."""

    x: float = 0.0
    y: float = 0.0
    hp: int = 100
    sprite_path: str = "Resource/play.png"
    sprite_width: int = 16
    sprite_height: int = 16
    inventory: Inventory = field(default_factory=Inventory)
    changed_blocks: list[BlockPacket] = field(default_factory=list)
    is_sleeping: bool = False
    bed_sleeping: float = 0.0
    writing_chat_enabled: bool = False
    writing_chat_time: bool = False
    chat_message: str = ""
    chat_elapsed: float = field(default=0.0, init=False, repr=False)

    def to_packet(self, name: str) -> GamePacket:
        """This player's state as sent to the server."""
        return GamePacket(
            name,
            self.x,
            self.y,
            self.inventory.current().path,
            self.chat_message,
            list(self.changed_blocks),
        )

    def update_network(self, client: PositionSender, name: str) -> None:
        client.send_player_position(self.to_packet(name))

    def _holding_pickaxe(self) -> bool:
        return _is_pickaxe(self.inventory.current())

    def collides(self, world: World, direction: Direction, x: float, y: float) -> bool:
        """Whether the leading corners at (x, y) hit something solid.

        Holding a pickaxe breaks trees, leaves and diamonds under those corners,
        collecting them and leaving grass behind.
        """
        left, top = int(x), int(y)
        right = left + self.sprite_width - 1
        bottom = top + self.sprite_height - 1
        corners = {
            Direction.UP: ((left, top), (right, top)),
            Direction.DOWN: ((left, bottom), (right, bottom)),
            Direction.LEFT: ((left, top), (left, bottom)),
            Direction.RIGHT: ((right, top), (right, bottom)),
        }[direction]
        size = world.tile_size

        for corner_x, corner_y in corners:
            if not (0 <= corner_x < world.width and 0 <= corner_y < world.height):
                continue
            tile_x = corner_x // size * size
            tile_y = corner_y // size * size
            if self._holding_pickaxe():
                reward = _BREAKABLE.get(world.pixel(tile_x, tile_y))
                if reward is not None:
                    self.inventory.add_item(reward)
                    self.place_block(tile_x, tile_y, GRASS, world)
            if is_solid(world.pixel(tile_x, tile_y)):
                return True
        return False

    def place_block(self, tile_x: int, tile_y: int, item: Item, world: World) -> None:
        """Paint a tile with the item's colour, record the change and use up one item."""
        if item.color is None:
            raise ValueError(f"{item.path or 'empty item'} cannot be placed")
        world.fill_tile(tile_x, tile_y, item.color)
        self.changed_blocks.append(BlockPacket(tile_x, tile_y, item.color))
        self.inventory.destroy_item(item)

    def type_characters(self, characters: Iterable[str]) -> None:
        """Append typed characters to the chat message; a backspace is discarded."""
        for character in characters:
            self.chat_message += character
            if character == BACKSPACE and self.chat_message:
                self.chat_message = self.chat_message[:-1]

    def tick_chat(self, timestep: float) -> None:
        """Clear a sent chat message once it has been shown long enough."""
        if not self.writing_chat_time:
            return
        self.chat_elapsed += timestep
        if self.chat_elapsed > CHAT_LINGER_SECONDS:
            self.chat_message = ""
            self.writing_chat_time = False
            self.chat_elapsed = 0.0

    @staticmethod
    def _step(timestep: float, sprint: bool) -> float:
        speed = WALK_SPEED + (SPRINT_BONUS if sprint else 0.0)
        return speed * timestep

    def _attempt(
        self,
        world: World,
        direction: Direction,
        distance: float,
        origin: tuple[float, float],
    ) -> bool:
        dx, dy = direction.value
        test_x = origin[0] + dx * distance
        test_y = origin[1] + dy * distance
        if self.collides(world, direction, test_x, test_y):
            return False
        self.x += dx * distance
        self.y += dy * distance
        return True

    def move(self, world: World, direction: Direction, timestep: float, sprint: bool = False) -> bool:
        """Step in a direction unless blocked; return whether the player moved."""
        return self._attempt(world, direction, self._step(timestep, sprint), (self.x, self.y))

    def update_bounds(self) -> None:
        self.x = min(max(self.x, 0.0), MAX_POSITION)
        self.y = min(max(self.y, 0.0), MAX_POSITION)

    def _tile_fits(self, world: World, x: int, y: int) -> bool:
        size = world.tile_size
        return 0 <= x and 0 <= y and x + size <= world.width and y + size <= world.height

    def handle_input(self, input_state: Input, world: World, timestep: float) -> None:
        """Apply one frame of keyboard input: chat, movement, slot choice and placing."""
        self.tick_chat(timestep)

        if input_state.is_key_down(KeyCode.T):
            self.writing_chat_enabled = True
            return

        if input_state.is_key_down(KeyCode.ENTER) and self.writing_chat_enabled:
            self.writing_chat_enabled = False
            self.writing_chat_time = True
            return

        if self.writing_chat_enabled:
            self.type_characters(input_state.drain_characters())
            return

        distance = self._step(timestep, input_state.is_key_down(KeyCode.LEFT_SHIFT))
        origin = (self.x, self.y)
        for direction, keys in _MOVE_KEYS:
            if any(input_state.is_key_down(key) for key in keys):
                self._attempt(world, direction, distance, origin)

        self.update_bounds()

        for index, key in enumerate(_SLOT_KEYS):
            if input_state.is_key_down(key):
                self.inventory.select(index)

        current = self.inventory.current()
        if input_state.is_key_down(KeyCode.SPACE) and not _is_pickaxe(current) and current.color is not None:
            x, y = int(self.x), int(self.y)
            if self._tile_fits(world, x, y):
                self.place_block(x, y, current, world)