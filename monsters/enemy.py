"""Enemies that chase and hurt the player."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Protocol


class Target(Protocol):
    x: float
    y: float
    hp: int


@dataclass
class Enemy:
    """Moves straight toward its target and strikes when in range."""

    x: float = 0.0
    y: float = 0.0
    hp: int = 100
    speed: float = 100.0
    attack_range: float = 1.0
    attack_damage: float = 6.0
    attack_cooldown: float = 0.0
    sprite_path: str = "Resource/tall.png"
    time_since_last_attack: float = 0.0

    def attack(self, timestep: float, player: Target) -> None:
        """Strike the player if close enough, otherwise step toward them."""
        dx = player.x - self.x
        dy = player.y - self.y
        distance = math.hypot(dx, dy)

        if distance <= self.attack_range:
            self.time_since_last_attack += timestep
            if self.time_since_last_attack >= self.attack_cooldown:
                player.hp = int(player.hp - self.attack_damage)
                self.time_since_last_attack = 0.0
            return

        if distance > 0.0:
            dx /= distance
            dy /= distance
        self.x += dx * self.speed * timestep
        self.y += dy * self.speed * timestep