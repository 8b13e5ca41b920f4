"""Game constants, tile kinds, on-screen texts and the built-in levels."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

Color = tuple[int, int, int, int]

WHITE: Color = (255, 255, 255, 255)
BLACK: Color = (0, 0, 0, 255)
RED: Color = (230, 41, 55, 255)


class Tile(str, Enum):
    """Characters a level grid is made of."""

    WALL = "#"
    WALL_DARK = "="
    AIR = "-"
    SPIKE = "^"
    PLAYER = "@"
    ENEMY = "&"
    COIN = "*"
    EXIT = "E"


LEVEL_COUNT = 3

MAX_LEVEL_TIME = 50 * 60

PLAYER_MOVEMENT_SPEED = 0.1
JUMP_STRENGTH = 0.3
CEILING_BOUNCE_OFF = 0.05
ENEMY_MOVEMENT_SPEED = 0.07
BOUNCE_OFF_ENEMY = 0.115
GRAVITY_FORCE = 0.01

MAX_PLAYER_LIVES = 3

SCREEN_SCALE_DIVISOR = 700.0
PARALLAX_PLAYER_SCROLLING_SPEED = 0.003
PARALLAX_IDLE_SCROLLING_SPEED = 0.00005
PARALLAX_LAYERED_SPEED_DIFFERENCE = 3.0

VICTORY_BALL_COUNT = 2000
VICTORY_BALL_MAX_SPEED = 2.0
VICTORY_BALL_MIN_RADIUS = 2.0
VICTORY_BALL_MAX_RADIUS = 3.0
VICTORY_BALL_COLOR: Color = (180, 180, 180, 255)
VICTORY_BALL_TRAIL_TRANSPARENCY = 10


@dataclass
class Text:
    """A line of text placed relative to the screen size."""

    text: str
    position: tuple[float, float] = (0.50, 0.50)
    size: float = 32.0
    color: Color = WHITE
    spacing: float = 4.0


GAME_TITLE = Text("Platformer", (0.50, 0.50), 100.0, RED)
GAME_SUBTITLE = Text("Press Enter to Start", (0.50, 0.65))
GAME_PAUSED = Text("Press Escape to Resume")
DEATH_TITLE = Text("You Died!", (0.50, 0.50), 80.0, RED)
DEATH_SUBTITLE = Text("Press Enter to Try Again", (0.50, 0.65))
GAME_OVER_TITLE = Text("Game Over", (0.50, 0.50), 120.0, RED)
GAME_OVER_SUBTITLE = Text("Press Enter to Restart", (0.50, 0.675))
VICTORY_TITLE = Text("You Won!", (0.50, 0.50), 100.0, RED)
VICTORY_SUBTITLE = Text("Press Enter to go back to menu", (0.50, 0.65))


_RUN = re.compile(r"(\d*)(\D)")


def _expand(spec: str) -> str:
    """Expand a compact row description such as ``"3-2#"`` into ``"---##"``."""
    return "".join(char * (int(count) if count else 1) for count, char in _RUN.findall(spec))


_LEVEL_SPECS: tuple[tuple[str, ...], ...] = (
    (
        "72-",
        "10-*-*5-*53-",
        "26-*11-*2-*30-",
        "9-*3-*3-3#15-*14-*21-",
        "17-3=6-*3-*4-*36-",
        "17-3=27-*3-*20-",
        "#-#-#-#10-3=16-2#27-#-#-#-#",
        "7#7-6#3-2#12-2#26-7#",
        "3#=3#7-6=3-2#7-2#4-2#8-#5-#10-3#=3#",
        "2#3=2#7-6=3-2#7-2#4=2#7-2#5=2#9-2#3=2#",
        "2#3=2#-@5-6=3-2#3-&3-2#4=2#2^4-3#5=3#6-E-2#3=2#",
        "33#4=10#5=20#",
    ),
    (
        "34-2^42-",
        "8-*25-2#42-",
        "22-*-*10-#=11-^29-",
        "8-*3-2#16-2#2-#=5-*4-2#-*5-^22-",
        "12-2=9-^7-2#2-#=-*8-2#7-#2-*18-",
        "8-*3-2=9-#7-2#2-#=10-2=-*5-#21-",
        "#-#-#-#5-2=2-2^5-#7-2#2-#=8-^-2=3-2#2-#14-#-#-#-#",
        "7#5-=7#3-#3-2#2-2#2-#=2-2#3-2#-2=-*-2#2-#2-*11-7#",
        "3#=3#5-6=#=3-#3-=#2=2#4=2-#=3-=#-2=3-2=2-#14-3#=3#",
        "2#3=2#5-6=#=3-#3-=#2=2#4=2-2=3-2=-2=-*-2=2-#5-^3-^4-2#3=2#",
        "2#3=2#-@3-6=#=&-&=&-&=#2=2#2=2#2-2=-^-2=-2=3-2=2-#2^3-#3-#2-E-2#3=2#",
        "33#4=10#5=26#",
    ),
    (
        "21-2#3-*2#2-2^4-2*4-2#11-2#7-2#19-",
        "15-*5-2#4-2=2-2#4-2*4-2#5-*5-2#7-2#19-",
        "17-2^2-2#4-2=2-2#6-2^2-2#5-^5-2#3-*3-2#19-",
        "13-2#2-2#2-2#4-2#2-2#2-2#2-2#2-2#5-#5-2#2-*-*2-2#19-",
        "13-2=2-2#2-2=4-2#2-2#2-#=2-=#2-#=5-#5-2#7-2#19-",
        "13-2=2-2#2-2=4-2#2-2#2-#=2-=#2-2=2-#2-#2-#2-2#-*3-*-2#19-",
        "#-#-#-#6-2=2-2=2-2=4-2#2-2#2-#=2-=#2-=#2-#*-#-*#2-2=7-2=2-^9-#-#-#-#",
        "7#6-2#2-2=*-2#4-2#2-2=2-#=2-=#2-2#2-#2-#2-#2-2=7-2=2-#2-^6-7#",
        "3#=3#6-2#2-2=2-2#4-2#2-2=2-2#2-2#2-2#2-#2-#2-#2-2#7-2#2-#2-#2-^3-3#=3#",
        "2#3=2#6-2#2-2=2-2#4-2#2-2#10-2#2-#2-#2-#2-2#7=5#2-#2-#3-2#3=2#",
        "2#3=2#-@4-2#2^2=2^2#4^2#2^2#&2-&2-&2-&2#2-=2&=2&=2-2#2=3#2=8#2-#-E-2#3=2#",
        "33#4=10#5=34#",
    ),
)

_LEVELS: tuple[tuple[str, ...], ...] = tuple(
    tuple(_expand(spec) for spec in level) for level in _LEVEL_SPECS
)


def builtin_level(index: int) -> tuple[str, ...]:
    """Return the rows of the built-in level with the given index."""
    if not 0 <= index < len(_LEVELS):
        raise IndexError(f"no built-in level with index {index}")
    return _LEVELS[index]