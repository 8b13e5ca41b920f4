"""The game loop: state machine, input handling and level progression."""

from __future__ import annotations

import argparse
import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Any

import pygame

from .config import LEVEL_COUNT, MAX_LEVEL_TIME, PLAYER_MOVEMENT_SPEED, Tile
from .enemy import Enemy
from .geometry import Vec2
from .graphics import DATA_DIR, Graphics
from .level import Level
from .player import (
    COIN_SOUND,
    EXIT_SOUND,
    KILL_ENEMY_SOUND,
    PLAYER_DEATH_SOUND,
    Player,
)

GAME_OVER_SOUND = "game_over"
SOUND_NAMES = (COIN_SOUND, EXIT_SOUND, KILL_ENEMY_SOUND, PLAYER_DEATH_SOUND, GAME_OVER_SOUND)

WINDOW_SIZE = (1024, 480)
WINDOW_TITLE = "Platformer"
TARGET_FPS = 60

log = logging.getLogger(__name__)


class GameState(Enum):
    """Screens the game can be on."""

    MENU = auto()
    GAME = auto()
    PAUSED = auto()
    DEATH = auto()
    GAME_OVER = auto()
    LEVEL_TRANSITION = auto()


@dataclass(frozen=True)
class Controls:
    """Input for one frame: keys held down and keys just pressed."""

    right: bool = False
    left: bool = False
    jump: bool = False
    enter: bool = False
    escape: bool = False

    @property
    def horizontal(self) -> float:
        """Sideways movement requested by the held direction keys."""
        delta = 0.0
        if self.right:
            delta += PLAYER_MOVEMENT_SPEED
        if self.left:
            delta -= PLAYER_MOVEMENT_SPEED
        return delta


class SoundBoard:
    """Named sound effects; names without a loaded sound are ignored."""

    def __init__(self, sounds: Mapping[str, Any] | None = None) -> None:
        self._sounds = dict(sounds or {})

    @classmethod
    def load(cls, data_dir: str | Path = DATA_DIR) -> SoundBoard:
        """Load the game's sounds, or return a silent board without audio."""
        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
        except pygame.error:
            log.warning("Audio device initialization failed. Proceeding without sound.")
            return cls()
        sounds: dict[str, Any] = {}
        for name in SOUND_NAMES:
            path = Path(data_dir) / "sounds" / f"{name}.wav"
            try:
                sounds[name] = pygame.mixer.Sound(str(path))
            except (pygame.error, OSError, FileNotFoundError):
                log.warning("Could not load sound %s", path)
        return cls(sounds)

    def play(self, name: str) -> None:
        """Play the named sound, if there is one."""
        sound = self._sounds.get(name)
        if sound is not None:
            sound.play()

    def stop(self, name: str) -> None:
        """Stop the named sound, if there is one."""
        sound = self._sounds.get(name)
        if sound is not None:
            sound.stop()


class Game:
    """Ties the level, player, enemies, sounds and drawing together."""

    def __init__(
        self,
        surface: pygame.Surface | None = None,
        sounds: SoundBoard | None = None,
        data_dir: str | Path = DATA_DIR,
    ) -> None:
        self.state = GameState.MENU
        self.game_frame = 0
        self.level_index = 0
        self.running = True
        self.level = Level()
        self.player = Player()
        self.enemies: list[Enemy] = []
        self.sounds = sounds if sounds is not None else SoundBoard()
        self.surface = surface
        self.graphics = Graphics(self.player, surface, data_dir) if surface is not None else None

        self.level.load(self.level_index)
        self.player.spawn(self.level)

    def _start_level(self) -> None:
        self.level.unload()
        self.level.load(self.level_index)
        self.player.level_index = self.level_index
        self.player.spawn(self.level)
        self.enemies = [
            Enemy(Vec2(float(column), float(row))) for row, column in self.level.pop_tiles(Tile.ENEMY)
        ]

    def _play_frame(self, controls: Controls) -> None:
        delta = controls.horizontal
        if delta != 0.0:
            self.player.move_horizontally(delta, self.level)
        if controls.jump and self.player.on_ground:
            self.player.jump()
        self.player.update(self.level, self.enemies, self.sounds.play)
        for enemy in self.enemies:
            enemy.update(self.level)

    def _on_exit(self) -> bool:
        return self.level.is_colliding(self.player.position, Tile.EXIT)

    def update(self, controls: Controls) -> None:
        """Advance the game by one frame with the given input."""
        self.game_frame += 1
        handler = {
            GameState.MENU: self._update_menu,
            GameState.GAME: self._update_game,
            GameState.PAUSED: self._update_paused,
            GameState.DEATH: self._update_death,
            GameState.GAME_OVER: self._update_game_over,
            GameState.LEVEL_TRANSITION: self._update_transition,
        }[self.state]
        handler(controls)

    def _update_menu(self, controls: Controls) -> None:
        self.sounds.stop(PLAYER_DEATH_SOUND)
        if controls.enter:
            log.info("Transitioning to GAME_STATE")
            self.state = GameState.GAME
            self._start_level()
        if controls.escape:
            log.info("Exiting game from MENU_STATE")
            self.running = False

    def _update_game(self, controls: Controls) -> None:
        self._play_frame(controls)
        if controls.escape:
            log.info("Transitioning to PAUSED_STATE")
            self.state = GameState.PAUSED
        if self._on_exit():
            log.info("Level completed, transitioning to next level")
            self.sounds.play(EXIT_SOUND)
            self.state = GameState.LEVEL_TRANSITION
        if self.player.dead:
            log.info("Transitioning to DEATH_STATE")
            self.state = GameState.DEATH

    def _update_paused(self, controls: Controls) -> None:
        if controls.escape:
            log.info("Returning to GAME_STATE")
            self.state = GameState.GAME

    def _update_death(self, controls: Controls) -> None:
        self.player.update_gravity(self.level)
        if controls.enter:
            if self.player.lives > 0:
                log.info("Restarting level in GAME_STATE")
                self._start_level()
                self.state = GameState.GAME
            else:
                log.info("Transitioning to GAME_OVER_STATE")
                self.level.unload()
                self.state = GameState.GAME_OVER
                self.sounds.play(GAME_OVER_SOUND)
            self.sounds.stop(PLAYER_DEATH_SOUND)
        if controls.escape:
            log.info("Returning to MENU_STATE from DEATH_STATE")
            self.level.unload()
            self.state = GameState.MENU
            self.sounds.stop(PLAYER_DEATH_SOUND)

    def _update_game_over(self, controls: Controls) -> None:
        if controls.enter:
            log.info("Restarting game from GAME_OVER_STATE")
            self.level_index = 0
            self.player.reset_stats()
            self._start_level()
            self.state = GameState.GAME
        if controls.escape:
            log.info("Returning to MENU_STATE from GAME_OVER_STATE")
            self.level.unload()
            self.state = GameState.MENU

    def _update_transition(self, controls: Controls) -> None:
        self._play_frame(controls)
        if not self._on_exit():
            self.state = GameState.GAME
            return
        if self.player.timer > 0:
            return
        self.level_index += 1
        if self.level_index >= LEVEL_COUNT:
            self.level_index = 0
            self.player.reset_stats()
            self.player.level_index = 0
            self.level.unload()
            self.state = GameState.MENU
            log.info("All levels completed! Returning to MENU_STATE")
        else:
            log.info("Loading next level: %d", self.level_index)
            self._start_level()
            self.player.update_timer(MAX_LEVEL_TIME - self.player.timer)
            self.state = GameState.GAME

    def draw(self) -> None:
        """Draw the current screen onto the game's surface."""
        if self.graphics is None:
            raise RuntimeError("the game has no surface to draw on")
        if self.state is GameState.MENU:
            self.graphics.draw_menu()
        elif self.state in (GameState.GAME, GameState.LEVEL_TRANSITION):
            self.graphics.draw_game(self.level, self.enemies, self.game_frame)
        elif self.state is GameState.DEATH:
            self.graphics.draw_death_screen(self.level, self.enemies, self.game_frame)
        elif self.state is GameState.GAME_OVER:
            self.graphics.draw_game_over_menu()
        elif self.state is GameState.PAUSED:
            self.graphics.draw_pause_menu()

    def run(self) -> None:
        """Run the main loop until the window is closed or the game quits."""
        if self.graphics is None:
            raise RuntimeError("the game has no surface to draw on")
        clock = pygame.time.Clock()
        while self.running:
            controls = _poll_controls()
            if controls is None:
                break
            self.update(controls)
            self.draw()
            pygame.display.flip()
            clock.tick(TARGET_FPS)


def _poll_controls() -> Controls | None:
    """Read the keyboard; None when the window was asked to close."""
    enter = escape = False
    for event in pygame.event.get():
        if event.type == pygame.QUIT:
            return None
        if event.type == pygame.KEYDOWN:
            if event.key in (pygame.K_RETURN, pygame.K_KP_ENTER):
                enter = True
            elif event.key == pygame.K_ESCAPE:
                escape = True
    held = pygame.key.get_pressed()
    return Controls(
        right=held[pygame.K_RIGHT] or held[pygame.K_d],
        left=held[pygame.K_LEFT] or held[pygame.K_a],
        jump=held[pygame.K_UP] or held[pygame.K_w] or held[pygame.K_SPACE],
        enter=enter,
        escape=escape,
    )


def main(argv: Sequence[str] | None = None) -> int:
    """Open the game window and play until it is closed."""
    parser = argparse.ArgumentParser(prog="platformer", description="A side-scrolling platformer.")
    parser.add_argument("--data-dir", default=str(DATA_DIR), help="directory holding the game assets")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    pygame.init()
    try:
        surface = pygame.display.set_mode(WINDOW_SIZE, vsync=1)
        pygame.display.set_caption(WINDOW_TITLE)
        pygame.mouse.set_visible(False)
        sounds = SoundBoard.load(args.data_dir)
        Game(surface, sounds, args.data_dir).run()
    finally:
        pygame.quit()
    return 0