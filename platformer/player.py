"""The player: movement, gravity, pickups and encounters with enemies."""

from __future__ import annotations

import math
from collections.abc import Callable, MutableSequence
from dataclasses import dataclass, field

from .config import (
    BOUNCE_OFF_ENEMY,
    CEILING_BOUNCE_OFF,
    GRAVITY_FORCE,
    JUMP_STRENGTH,
    LEVEL_COUNT,
    MAX_LEVEL_TIME,
    MAX_PLAYER_LIVES,
    Tile,
)
from .enemy import Enemy
from .geometry import Rect, Vec2
from .level import Level

COIN_SOUND = "coin"
EXIT_SOUND = "exit"
KILL_ENEMY_SOUND = "kill_enemy"
PLAYER_DEATH_SOUND = "player_death"

EXIT_TIMER_DRAIN = 28
_HALF_HITBOX = 0.3
_HITBOX_SIZE = 0.6


def _no_sound(name: str) -> None:
    """Sound callback that plays nothing."""


@dataclass
class Player:
    """The player character and its per-game statistics."""

    position: Vec2 = field(default_factory=Vec2)
    y_velocity: float = 0.0
    on_ground: bool = False
    looking_forward: bool = True
    moving: bool = False
    dead: bool = False
    lives: int = MAX_PLAYER_LIVES
    timer: int = MAX_LEVEL_TIME
    level_index: int = 0
    level_scores: list[int] = field(default_factory=lambda: [0] * LEVEL_COUNT)

    @property
    def total_score(self) -> int:
        """Sum of the coins collected over all levels."""
        return sum(self.level_scores)

    def reset_stats(self) -> None:
        """Restore lives, timer and scores for a new game."""
        self.lives = MAX_PLAYER_LIVES
        self.dead = False
        self.timer = MAX_LEVEL_TIME
        self.level_scores = [0] * LEVEL_COUNT

    def increment_score(self) -> None:
        """Count one more coin for the current level."""
        self.level_scores[self.level_index] += 1

    def spawn(self, level: Level) -> None:
        """Place the player on the level's start tile, replacing it with air."""
        start = next(
            (
                (row, column)
                for row in range(level.rows)
                for column in range(level.columns)
                if level.get_cell(row, column) == Tile.PLAYER.value
            ),
            None,
        )
        if start is not None:
            row, column = start
            self.position = Vec2(float(column), float(row))
            level.set_cell(row, column, Tile.AIR)
        else:
            self.position = Vec2(1.0, float(level.rows - 2))
        self.y_velocity = 0.0
        self.on_ground = False
        self.dead = False

    def kill(self) -> None:
        """Kill the player, costing a life and making it hop up."""
        if self.dead:
            return
        self.dead = True
        self.y_velocity = -JUMP_STRENGTH * 0.5
        self.lives -= 1

    def move_horizontally(self, delta: float, level: Level) -> None:
        """Move sideways by delta unless a wall is in the way."""
        if self.dead:
            return
        self.moving = delta != 0
        if self.moving:
            self.looking_forward = delta > 0
        new_x = self.position.x + delta
        if not level.is_colliding(Vec2(new_x, self.position.y), Tile.WALL):
            self.position = Vec2(new_x, self.position.y)

    def jump(self) -> None:
        """Start a jump when standing on the ground."""
        if self.on_ground and not self.dead:
            self.y_velocity = -JUMP_STRENGTH
            self.on_ground = False

    def update(
        self,
        level: Level,
        enemies: MutableSequence[Enemy],
        play_sound: Callable[[str], None] = _no_sound,
    ) -> None:
        """Advance the player by one frame.

        Stomped enemies are removed from ``enemies``; ``play_sound`` is
        called with the name of each sound effect to play.
        """
        if self.dead:
            return

        if self.timer > 0:
            if level.is_colliding(self.position, Tile.EXIT):
                self.timer = max(0, self.timer - EXIT_TIMER_DRAIN)
            else:
                self.timer -= 1

        if level.is_colliding(self.position, Tile.COIN):
            row, column = level.find_collider(self.position, Tile.COIN)
            level.set_cell(row, column, Tile.AIR)
            self.increment_score()
            play_sound(COIN_SOUND)

        if level.is_colliding(self.position, Tile.EXIT):
            play_sound(EXIT_SOUND)

        self._handle_enemies(enemies, play_sound)

        if level.is_colliding(self.position, Tile.SPIKE):
            self.kill()
            play_sound(PLAYER_DEATH_SOUND)

        self.update_gravity(level)

    def _handle_enemies(
        self, enemies: MutableSequence[Enemy], play_sound: Callable[[str], None]
    ) -> None:
        player_box = Rect(
            self.position.x - _HALF_HITBOX,
            self.position.y - _HALF_HITBOX,
            _HITBOX_SIZE,
            _HITBOX_SIZE,
        )
        index = 0
        while index < len(enemies):
            enemy_pos = enemies[index].position
            enemy_box = Rect(
                enemy_pos.x - _HALF_HITBOX,
                enemy_pos.y - _HALF_HITBOX,
                _HITBOX_SIZE,
                _HITBOX_SIZE,
            )
            if not player_box.overlaps(enemy_box):
                index += 1
                continue
            above = (self.position.y + 0.2) < (enemy_pos.y - 0.1)
            if above and self.y_velocity > 0:
                self.y_velocity = -BOUNCE_OFF_ENEMY
                play_sound(KILL_ENEMY_SOUND)
                del enemies[index]
            else:
                self.kill()
                play_sound(PLAYER_DEATH_SOUND)
                break

    def update_gravity(self, level: Level) -> None:
        """Apply gravity, landing on floors and bouncing off ceilings."""
        self.y_velocity += GRAVITY_FORCE
        new_y = self.position.y + self.y_velocity
        blocked = level.is_colliding(Vec2(self.position.x, new_y), Tile.WALL)

        if self.y_velocity > 0:
            if blocked:
                self.position = Vec2(self.position.x, float(math.floor(new_y)))
                self.y_velocity = 0.0
                self.on_ground = True
            else:
                self.position = Vec2(self.position.x, new_y)
                self.on_ground = False
        elif blocked:
            self.position = Vec2(self.position.x, float(math.ceil(new_y)))
            self.y_velocity = CEILING_BOUNCE_OFF
        else:
            self.position = Vec2(self.position.x, new_y)

        if self.position.y > level.rows:
            self.kill()

    def update_timer(self, delta: int) -> None:
        """Change the level timer by delta, never going below zero."""
        self.timer = max(0, self.timer + delta)