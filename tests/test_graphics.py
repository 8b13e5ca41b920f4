import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pygame
import pytest

from platformer.config import (
    SCREEN_SCALE_DIVISOR,
    VICTORY_BALL_COUNT,
    VICTORY_BALL_MAX_RADIUS,
    VICTORY_BALL_MIN_RADIUS,
)
from platformer.enemy import Enemy
from platformer.geometry import Vec2
from platformer.graphics import (
    Graphics,
    Sprite,
    VictoryBall,
    compute_metrics,
    parallax_offsets,
    sprite_frame_paths,
)
from platformer.level import Level
from platformer.player import Player


def test_sprite_advances_after_skipping_frames():
    sprite = Sprite(["a", "b", "c"], frames_to_skip=2)
    assert sprite.advance(1) == "a"
    assert sprite.advance(2) == "b"
    assert sprite.frames_skipped == 0


def test_sprite_does_not_advance_twice_in_one_frame():
    sprite = Sprite(["a", "b"], frames_to_skip=1)
    assert sprite.advance(5) == "b"
    assert sprite.advance(5) == "b"
    assert sprite.frame_index == 1


def test_sprite_loops_back_to_start():
    sprite = Sprite(["a", "b"], frames_to_skip=1)
    shown = [sprite.advance(frame) for frame in range(1, 5)]
    assert shown == ["b", "a", "b", "a"]


def test_sprite_without_loop_stays_on_last_frame():
    sprite = Sprite(["a", "b"], frames_to_skip=1, loop=False)
    shown = [sprite.advance(frame) for frame in range(1, 5)]
    assert shown == ["b", "b", "b", "b"]


def test_victory_ball_bounces_off_left_edge():
    ball = VictoryBall(x=1.0, y=50.0, dx=-2.0, dy=0.0, radius=3.0)
    ball.step(100.0, 100.0)
    assert ball.x == -1.0
    assert ball.dx == 2.0


def test_victory_ball_moves_freely_in_middle():
    ball = VictoryBall(x=50.0, y=50.0, dx=1.5, dy=-2.5, radius=3.0)
    ball.step(100.0, 100.0)
    assert (ball.x, ball.y) == (51.5, 47.5)
    assert (ball.dx, ball.dy) == (1.5, -2.5)


def test_victory_ball_stays_near_screen():
    ball = VictoryBall(x=10.0, y=10.0, dx=3.0, dy=2.0, radius=2.0)
    for _ in range(1000):
        ball.step(60.0, 40.0)
        assert -5.0 <= ball.x <= 65.0
        assert -5.0 <= ball.y <= 45.0


@pytest.mark.parametrize("width,height,rows", [(1024, 480, 12), (640, 480, 16), (300, 900, 10)])
def test_metrics_invariants(width, height, rows):
    metrics = compute_metrics(width, height, rows)
    assert metrics.cell_size * rows == pytest.approx(height)
    assert metrics.screen_scale * SCREEN_SCALE_DIVISOR == pytest.approx(min(width, height))
    assert metrics.background_width / metrics.background_height == pytest.approx(1.6)
    assert metrics.background_y_offset * 2 + metrics.background_height == pytest.approx(height)


def test_metrics_landscape_background_spans_width():
    metrics = compute_metrics(1024, 480, 12)
    assert metrics.background_width == 1024


def test_metrics_portrait_background_spans_height():
    metrics = compute_metrics(300, 900, 12)
    assert metrics.background_height == 900


def test_metrics_without_rows_has_no_cell_size():
    assert compute_metrics(800, 600, None).cell_size == 0.0


def test_metrics_reject_empty_screen():
    with pytest.raises(ValueError):
        compute_metrics(0, 600, 12)


def test_parallax_at_origin_is_zero():
    assert parallax_offsets(0.0, 0, 1000.0) == (0.0, 0.0, 0.0)


def test_parallax_layers_scroll_faster_in_front():
    back, middle, front = parallax_offsets(2.0, 10, 1000.0)
    assert middle == pytest.approx(back * 3)
    assert front == pytest.approx(middle * 3)
    assert back <= 0.0


def test_parallax_offsets_wrap_within_background():
    offsets = parallax_offsets(5000.0, 123456, 800.0)
    assert all(-800.0 < offset <= 0.0 for offset in offsets)


def test_sprite_frame_paths_short():
    assert sprite_frame_paths("coin", ".png", 3) == ["coin0.png", "coin1.png", "coin2.png"]


def test_sprite_frame_paths_padded():
    paths = sprite_frame_paths("p", ".png", 12)
    assert len(paths) == 12
    assert paths[0] == "p00.png"
    assert paths[-1] == "p11.png"


def test_sprite_frame_paths_limit():
    with pytest.raises(ValueError):
        sprite_frame_paths("p", ".png", 100)


@pytest.fixture
def scene(tmp_path):
    surface = pygame.Surface((320, 200))
    level = Level()
    level.load_rows(["------", "-@--&-", "######"])
    player = Player()
    player.spawn(level)
    enemies = [Enemy(Vec2(float(column), float(row))) for row, column in level.pop_tiles("&")]
    graphics = Graphics(player, surface, data_dir=tmp_path)
    return graphics, surface, level, enemies


def test_pause_menu_clears_screen(scene):
    graphics, surface, _, _ = scene
    surface.fill((255, 255, 255))
    graphics.draw_pause_menu()
    assert tuple(surface.get_at((0, 0)))[:3] == (0, 0, 0)


def test_menu_clears_corner(scene):
    graphics, surface, _, _ = scene
    surface.fill((255, 255, 255))
    graphics.draw_menu()
    assert tuple(surface.get_at((319, 199)))[:3] == (0, 0, 0)


def test_draw_game_derives_metrics_from_level(scene):
    graphics, surface, level, enemies = scene
    graphics.draw_game(level, enemies, 1)
    assert graphics.metrics.cell_size * level.rows == pytest.approx(surface.get_height())
    assert graphics.horizontal_shift * 2 + graphics.metrics.cell_size == pytest.approx(320)


def test_death_screen_draws_game(scene):
    graphics, surface, level, enemies = scene
    graphics.player.kill()
    graphics.draw_death_screen(level, enemies, 2)
    assert graphics.metrics.cell_size * level.rows == pytest.approx(surface.get_height())


def test_victory_balls_are_placed_on_screen(scene):
    graphics, surface, _, _ = scene
    graphics.initialize_victory_balls()
    scale = graphics.metrics.screen_scale
    assert len(graphics.victory_balls) == VICTORY_BALL_COUNT
    for ball in graphics.victory_balls:
        assert 0.0 <= ball.x <= surface.get_width()
        assert 0.0 <= ball.y <= surface.get_height()
        assert VICTORY_BALL_MIN_RADIUS * scale <= ball.radius <= VICTORY_BALL_MAX_RADIUS * scale
        assert abs(ball.dx) >= 0.1
        assert abs(ball.dy) >= 0.1


def test_victory_menu_moves_balls(scene):
    graphics, _, _, _ = scene
    graphics.initialize_victory_balls()
    before = [(ball.x, ball.y) for ball in graphics.victory_balls]
    graphics.draw_victory_menu(1)
    after = [(ball.x, ball.y) for ball in graphics.victory_balls]
    assert len(after) == VICTORY_BALL_COUNT
    assert all(b != a for b, a in zip(before, after))