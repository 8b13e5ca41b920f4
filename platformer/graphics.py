"""Rendering of menus, levels, the player and the victory screen."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import pygame

from .config import (
    BLACK,
    DEATH_SUBTITLE,
    DEATH_TITLE,
    GAME_OVER_SUBTITLE,
    GAME_OVER_TITLE,
    GAME_PAUSED,
    GAME_SUBTITLE,
    GAME_TITLE,
    PARALLAX_IDLE_SCROLLING_SPEED,
    PARALLAX_LAYERED_SPEED_DIFFERENCE,
    PARALLAX_PLAYER_SCROLLING_SPEED,
    SCREEN_SCALE_DIVISOR,
    VICTORY_BALL_COLOR,
    VICTORY_BALL_COUNT,
    VICTORY_BALL_MAX_RADIUS,
    VICTORY_BALL_MAX_SPEED,
    VICTORY_BALL_MIN_RADIUS,
    VICTORY_BALL_TRAIL_TRANSPARENCY,
    VICTORY_SUBTITLE,
    VICTORY_TITLE,
    WHITE,
    Color,
    Text,
    Tile,
)
from .enemy import Enemy
from .geometry import rand_from_to
from .level import Level

DATA_DIR = Path("data")
FONT_FILE = Path("fonts") / "ARCADE_N.TTF"

MAX_SPRITE_FRAMES = 100
DEATH_OVERLAY_ALPHA = 100
HUD_ICON_SIZE = 48.0
HUD_TEXT_SPACING = 2.0

_MISSING_IMAGE_COLOR = (255, 0, 255, 255)


@dataclass
class Sprite:
    """An animation made of frames that advances once per game frame."""

    frames: list[Any]
    frames_to_skip: int = 3
    loop: bool = True
    frames_skipped: int = 0
    frame_index: int = 0
    prev_game_frame: int = 0

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def advance(self, game_frame: int) -> Any:
        """Step the animation for a new game frame and return the frame to show."""
        if game_frame != self.prev_game_frame:
            self.frames_skipped += 1
            if self.frames_skipped >= self.frames_to_skip:
                self.frames_skipped = 0
                self.frame_index += 1
                if self.frame_index >= self.frame_count:
                    self.frame_index = 0 if self.loop else self.frame_count - 1
            self.prev_game_frame = game_frame
        return self.frames[self.frame_index]


@dataclass
class VictoryBall:
    """A ball bouncing around the victory screen."""

    x: float
    y: float
    dx: float
    dy: float
    radius: float

    def step(self, width: float, height: float) -> None:
        """Move by one frame, reversing direction at the screen edges."""
        self.x += self.dx
        if self.x - self.radius < 0 or self.x + self.radius >= width:
            self.dx = -self.dx
        self.y += self.dy
        if self.y - self.radius < 0 or self.y + self.radius >= height:
            self.dy = -self.dy


@dataclass(frozen=True)
class Metrics:
    """Sizes derived from the screen and the loaded level."""

    screen_width: float
    screen_height: float
    screen_scale: float
    cell_size: float
    background_width: float
    background_height: float
    background_y_offset: float


def compute_metrics(screen_width: float, screen_height: float, rows: int | None) -> Metrics:
    """Derive cell size, scale and background placement for a screen.

    With no level rows the cell size is zero.
    """
    if screen_width <= 0 or screen_height <= 0:
        raise ValueError("screen dimensions must be positive")
    cell_size = screen_height / rows if rows else 0.0
    screen_scale = min(screen_width, screen_height) / SCREEN_SCALE_DIVISOR
    larger = max(screen_width, screen_height)
    if screen_width > screen_height:
        background = (larger, larger / 16 * 10)
    else:
        background = (larger / 10 * 16, larger)
    return Metrics(
        screen_width=float(screen_width),
        screen_height=float(screen_height),
        screen_scale=screen_scale,
        cell_size=cell_size,
        background_width=background[0],
        background_height=background[1],
        background_y_offset=(screen_height - background[1]) * 0.5,
    )


def parallax_offsets(
    player_x: float, game_frame: int, background_width: float
) -> tuple[float, float, float]:
    """Return the horizontal pixel offsets of the back, middle and front layers."""
    background = -(
        player_x * PARALLAX_PLAYER_SCROLLING_SPEED + game_frame * PARALLAX_IDLE_SCROLLING_SPEED
    )
    middleground = background * PARALLAX_LAYERED_SPEED_DIFFERENCE
    foreground = middleground * PARALLAX_LAYERED_SPEED_DIFFERENCE
    return (
        math.fmod(background, 1.0) * background_width,
        math.fmod(middleground, 1.0) * background_width,
        math.fmod(foreground, 1.0) * background_width,
    )


def sprite_frame_paths(prefix: str, suffix: str, frame_count: int) -> list[str]:
    """Return the file names of a sprite's frames, zero-padded past nine frames."""
    if not 0 <= frame_count < MAX_SPRITE_FRAMES:
        raise ValueError(f"a sprite holds fewer than {MAX_SPRITE_FRAMES} frames")
    width = 1 if frame_count < 10 else 2
    return [f"{prefix}{index:0{width}d}{suffix}" for index in range(frame_count)]


@dataclass
class _Assets:
    wall: pygame.Surface
    wall_dark: pygame.Surface
    spike: pygame.Surface
    exit: pygame.Surface
    heart: pygame.Surface
    player_stand_forward: pygame.Surface
    player_stand_backwards: pygame.Surface
    player_jump_forward: pygame.Surface
    player_jump_backwards: pygame.Surface
    player_dead: pygame.Surface
    background: pygame.Surface
    middleground: pygame.Surface
    foreground: pygame.Surface
    coin: Sprite
    player_walk_forward: Sprite
    player_walk_backwards: Sprite
    enemy_walk: Sprite
    extra: dict[str, Any] = field(default_factory=dict)


class Graphics:
    """Draws every screen of the game onto a pygame surface."""

    def __init__(self, player: Any, surface: pygame.Surface, data_dir: str | Path = DATA_DIR):
        if not pygame.font.get_init():
            pygame.font.init()
        self.player = player
        self.surface = surface
        self._data_dir = Path(data_dir)
        font_path = self._data_dir / FONT_FILE
        self._font_path: str | None = str(font_path) if font_path.is_file() else None
        self._fonts: dict[int, pygame.font.Font] = {}
        self._scaled: dict[tuple[int, int, int], pygame.Surface] = {}
        self.metrics = compute_metrics(*surface.get_size(), None)
        self.horizontal_shift = 0.0
        self.victory_balls: list[VictoryBall] = []
        self._assets = self._load_assets()

    # Asset loading

    def _load_image(self, relative: str) -> pygame.Surface:
        try:
            return pygame.image.load(str(self._data_dir / "images" / relative))
        except (pygame.error, OSError):
            placeholder = pygame.Surface((1, 1), pygame.SRCALPHA)
            placeholder.fill(_MISSING_IMAGE_COLOR)
            return placeholder

    def _load_sprite(self, prefix: str, frame_count: int, frames_to_skip: int) -> Sprite:
        frames = [
            self._load_image(path) for path in sprite_frame_paths(prefix, ".png", frame_count)
        ]
        return Sprite(frames, frames_to_skip, loop=True)

    def _load_assets(self) -> _Assets:
        return _Assets(
            wall=self._load_image("wall.png"),
            wall_dark=self._load_image("wall_dark.png"),
            spike=self._load_image("spikes.png"),
            exit=self._load_image("exit.png"),
            heart=self._load_image("heart.png"),
            player_stand_forward=self._load_image("player_stand_forward.png"),
            player_stand_backwards=self._load_image("player_stand_backwards.png"),
            player_jump_forward=self._load_image("player_jump_forward.png"),
            player_jump_backwards=self._load_image("player_jump_backwards.png"),
            player_dead=self._load_image("player_dead.png"),
            background=self._load_image("background/background.png"),
            middleground=self._load_image("background/middleground.png"),
            foreground=self._load_image("background/foreground.png"),
            coin=self._load_sprite("coin/coin", 3, 18),
            player_walk_forward=self._load_sprite("player_walk_forward/player", 3, 15),
            player_walk_backwards=self._load_sprite("player_walk_backwards/player", 3, 15),
            enemy_walk=self._load_sprite("enemy_walk/enemy", 2, 15),
        )

    # Primitives

    def _font(self, size: float) -> pygame.font.Font:
        pixels = max(1, round(size))
        font = self._fonts.get(pixels)
        if font is None:
            try:
                font = pygame.font.Font(self._font_path, pixels)
            except (pygame.error, OSError):
                font = pygame.font.Font(None, pixels)
            self._fonts[pixels] = font
        return font

    def _render_text(self, text: str, size: float, color: Color, spacing: float) -> pygame.Surface:
        font = self._font(size)
        glyphs = [font.render(char, True, color[:3]) for char in text]
        if not glyphs:
            return pygame.Surface((1, 1), pygame.SRCALPHA)
        width = sum(glyph.get_width() for glyph in glyphs) + spacing * (len(glyphs) - 1)
        height = max(glyph.get_height() for glyph in glyphs)
        rendered = pygame.Surface((max(1, math.ceil(width)), max(1, height)), pygame.SRCALPHA)
        x = 0.0
        for glyph in glyphs:
            rendered.blit(glyph, (round(x), 0))
            x += glyph.get_width() + spacing
        if color[3] < 255:
            rendered.set_alpha(color[3])
        return rendered

    def _draw_text(self, text: Text) -> None:
        rendered = self._render_text(
            text.text, text.size * self.metrics.screen_scale, text.color, text.spacing
        )
        width, height = self.surface.get_size()
        x = width * text.position[0] - 0.5 * rendered.get_width()
        y = height * text.position[1] - 0.5 * rendered.get_height()
        self.surface.blit(rendered, (round(x), round(y)))

    def _draw_image(
        self, image: pygame.Surface, x: float, y: float, width: float, height: float | None = None
    ) -> None:
        w = round(width)
        h = round(width if height is None else height)
        if w <= 0 or h <= 0:
            return
        key = (id(image), w, h)
        scaled = self._scaled.get(key)
        if scaled is None:
            scaled = pygame.transform.scale(image, (w, h))
            self._scaled[key] = scaled
        self.surface.blit(scaled, (round(x), round(y)))

    def _draw_sprite(self, sprite: Sprite, x: float, y: float, size: float, game_frame: int) -> None:
        self._draw_image(sprite.advance(game_frame), x, y, size)

    def _overlay(self, alpha: int) -> None:
        shade = pygame.Surface(self.surface.get_size(), pygame.SRCALPHA)
        shade.fill((0, 0, 0, alpha))
        self.surface.blit(shade, (0, 0))

    def _clear(self) -> None:
        self.surface.fill(BLACK)

    # Screens

    def draw_menu(self) -> None:
        """Draw the title screen."""
        self._clear()
        self._draw_text(GAME_TITLE)
        self._draw_text(GAME_SUBTITLE)

    def _draw_parallax_background(self, game_frame: int) -> None:
        m = self.metrics
        offsets = parallax_offsets(self.player.position.x, game_frame, m.background_width)
        layers = (self._assets.background, self._assets.middleground, self._assets.foreground)
        for image, offset in zip(layers, offsets):
            for x in (offset + m.background_width, offset):
                self._draw_image(
                    image, x, m.background_y_offset, m.background_width, m.background_height
                )

    def _tile_image(self, cell: str) -> pygame.Surface | None:
        return {
            Tile.WALL.value: self._assets.wall,
            Tile.WALL_DARK.value: self._assets.wall_dark,
            Tile.SPIKE.value: self._assets.spike,
            Tile.EXIT.value: self._assets.exit,
        }.get(cell)

    def _draw_level(self, level: Level, game_frame: int) -> None:
        cell_size = self.metrics.cell_size
        player_x = self.player.position.x
        for row in range(level.rows):
            for column in range(level.columns):
                x = (column - player_x) * cell_size + self.horizontal_shift
                y = row * cell_size
                cell = level.get_cell(row, column)
                if cell == Tile.COIN.value:
                    self._draw_sprite(self._assets.coin, x, y, cell_size, game_frame)
                    continue
                image = self._tile_image(cell)
                if image is not None:
                    self._draw_image(image, x, y, cell_size)

    def _draw_player(self, game_frame: int) -> None:
        player = self.player
        assets = self._assets
        x = self.horizontal_shift
        y = player.position.y * self.metrics.cell_size
        size = self.metrics.cell_size
        if player.dead:
            self._draw_image(assets.player_dead, x, y, size)
        elif not player.on_ground:
            image = assets.player_jump_forward if player.looking_forward else assets.player_jump_backwards
            self._draw_image(image, x, y, size)
        elif player.moving:
            sprite = assets.player_walk_forward if player.looking_forward else assets.player_walk_backwards
            self._draw_sprite(sprite, x, y, size, game_frame)
        else:
            image = assets.player_stand_forward if player.looking_forward else assets.player_stand_backwards
            self._draw_image(image, x, y, size)

    def _draw_hud(self, game_frame: int) -> None:
        scale = self.metrics.screen_scale
        icon_size = HUD_ICON_SIZE * scale
        top = 8.0 * scale
        width = self.surface.get_width()

        for index in range(self.player.lives):
            self._draw_image(self._assets.heart, icon_size * index + 4.0 * scale, top, icon_size)

        timer = self._render_text(str(self.player.timer // 60), icon_size, WHITE, HUD_TEXT_SPACING)
        self.surface.blit(timer, (round((width - timer.get_width()) * 0.5), round(top)))

        score = self._render_text(str(self.player.total_score), icon_size, WHITE, HUD_TEXT_SPACING)
        self.surface.blit(score, (round(width - score.get_width() - icon_size), round(top)))
        self._draw_sprite(self._assets.coin, width - icon_size, top, icon_size, game_frame)

    def draw_game(self, level: Level, enemies: Sequence[Enemy], game_frame: int) -> None:
        """Draw the level, enemies, player and the heads-up display."""
        self._clear()
        self.metrics = compute_metrics(*self.surface.get_size(), level.rows)
        self._draw_parallax_background(game_frame)

        cell_size = self.metrics.cell_size
        self.horizontal_shift = (self.metrics.screen_width - cell_size) / 2
        self._draw_level(level, game_frame)

        player_x = self.player.position.x
        for enemy in enemies:
            x = (enemy.position.x - player_x) * cell_size + self.horizontal_shift
            y = enemy.position.y * cell_size
            self._draw_sprite(self._assets.enemy_walk, x, y, cell_size, game_frame)

        self._draw_player(game_frame)
        self._draw_hud(game_frame)

    def draw_death_screen(self, level: Level, enemies: Sequence[Enemy], game_frame: int) -> None:
        """Draw the game darkened, with the death message on top."""
        self.draw_game(level, enemies, game_frame)
        self._overlay(DEATH_OVERLAY_ALPHA)
        self._draw_text(DEATH_TITLE)
        self._draw_text(DEATH_SUBTITLE)

    def draw_game_over_menu(self) -> None:
        """Draw the game over screen."""
        self._clear()
        self._draw_text(GAME_OVER_TITLE)
        self._draw_text(GAME_OVER_SUBTITLE)

    def draw_pause_menu(self) -> None:
        """Draw the pause screen."""
        self._clear()
        self._draw_text(GAME_PAUSED)

    def draw_victory_menu(self, game_frame: int) -> None:
        """Draw the victory screen with its trail of bouncing balls."""
        self._overlay(VICTORY_BALL_TRAIL_TRANSPARENCY)
        width = self.metrics.screen_width
        height = self.metrics.screen_height
        for ball in self.victory_balls:
            ball.step(width, height)
            pygame.draw.circle(
                self.surface, VICTORY_BALL_COLOR, (round(ball.x), round(ball.y)), max(1, round(ball.radius))
            )
        self._draw_text(VICTORY_TITLE)
        self._draw_text(VICTORY_SUBTITLE)

    def initialize_victory_balls(self) -> None:
        """Scatter the victory balls over the screen with random speeds and sizes."""
        self.metrics = compute_metrics(*self.surface.get_size(), None)
        width = self.metrics.screen_width
        height = self.metrics.screen_height
        scale = self.metrics.screen_scale
        max_speed = VICTORY_BALL_MAX_SPEED * scale

        def velocity() -> float:
            value = rand_from_to(-1.0, 1.0) * max_speed
            return 1.0 if abs(value) < 0.1 else value

        self.victory_balls = [
            VictoryBall(
                x=rand_from_to(0.0, width),
                y=rand_from_to(0.0, height),
                dx=velocity(),
                dy=velocity(),
                radius=rand_from_to(VICTORY_BALL_MIN_RADIUS, VICTORY_BALL_MAX_RADIUS) * scale,
            )
            for _ in range(VICTORY_BALL_COUNT)
        ]