"""Items and the three-slot inventory."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional

from .world import Block

MAX_ITEMS = 3


@dataclass
class Item:
    """An item kind identified by its sprite path, with a count."""

    path: str = ""
    amount: int = 0
    color: Optional[int] = None


GRASS = Item("Resource/grass.png", 1, int(Block.GROUND))
DIAMOND = Item("Resource/diamond.png", 1, int(Block.DIAMOND))
LEAVE = Item("Resource/leave.png", 1, int(Block.LEAVES))
TREE = Item("Resource/tree.png", 1, int(Block.TREE))
PICKAXE = Item("Resource/pickaxe.png", 1)

KNOWN_ITEMS = (DIAMOND, GRASS, LEAVE, PICKAXE, TREE)


def item_for_path(file_path: str) -> Item:
    """A copy of the known item with this sprite path, or an empty item."""
    for known in KNOWN_ITEMS:
        if known.path == file_path:
            return replace(known)
    return Item()


@dataclass
class Inventory:
    """Fixed slots filled in order; same-path items stack."""

    items: list[Item] = field(default_factory=lambda: [Item() for _ in range(MAX_ITEMS)])
    current_index: int = 0
    slots_used: int = 0

    def _find(self, item: Item) -> Optional[Item]:
        return next((slot for slot in self.items if slot.path == item.path), None)

    def add_item(self, item: Item) -> None:
        """Stack onto a matching slot or take the next free one; ignored when full."""
        slot = self._find(item)
        if slot is not None:
            slot.amount += 1
            return
        if self.slots_used >= MAX_ITEMS:
            return
        self.items[self.slots_used] = replace(item)
        self.slots_used += 1

    def destroy_item(self, item: Item) -> None:
        """Take one from a matching slot; otherwise put the item in the next slot."""
        slot = self._find(item)
        if slot is not None:
            slot.amount -= 1
            return
        if self.slots_used >= MAX_ITEMS:
            return
        self.items[self.slots_used] = replace(item)
        self.slots_used = max(self.slots_used - 1, 0)

    def select(self, index: int) -> None:
        if not 0 <= index < MAX_ITEMS:
            raise IndexError(f"slot {index} out of range")
        self.current_index = index

    def current(self) -> Item:
        return self.items[self.current_index]