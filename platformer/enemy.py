"""Enemies walking back and forth between walls."""

from __future__ import annotations

from dataclasses import dataclass

from .config import ENEMY_MOVEMENT_SPEED, Tile
from .geometry import Vec2
from .level import Level


@dataclass
class Enemy:
    """An enemy that walks until it hits a wall, then turns around."""

    position: Vec2
    looking_right: bool = True

    MOVEMENT_SPEED = ENEMY_MOVEMENT_SPEED

    def update(self, level: Level) -> None:
        """Take one step, or turn around if a wall is in the way."""
        step = self.MOVEMENT_SPEED if self.looking_right else -self.MOVEMENT_SPEED
        next_x = self.position.x + step
        if level.is_colliding(Vec2(next_x, self.position.y), Tile.WALL):
            self.looking_right = not self.looking_right
        else:
            self.position = Vec2(next_x, self.position.y)