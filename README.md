# platformer

A small side-scrolling platformer. Run through three tile levels, collect
coins, jump on walking enemies, avoid spikes and reach the exit. You start
with three lives.

## Installing

```
pip install .
```

This installs `pygame`, which the game uses for the window, drawing, input
and sound.

## Playing

```
platformer
platformer --data-dir path/to/data
```

The game opens at the menu.

| Key | Action |
| --- | --- |
| Enter | start the game, try again after a death, restart after game over |
| Left / A, Right / D | walk |
| Up / W / Space | jump |
| Escape | pause or resume; from a death or game-over screen, go back to the menu; from the menu, quit |

Each level has a timer of 50 seconds, counted in frames at 60 frames per
second. While the player stands on the exit, the timer drains quickly. When
it reaches zero there, the next level loads with a full timer. If the player
steps off the exit first, play goes on as normal. After the last level, the
game resets lives and scores and goes back to the menu.

When the lives run out, pressing Enter on the death screen leads to the game
over screen.

## Assets and levels

Images, the font and sounds are read from the directory given by
`--data-dir`, which defaults to `data` in the working directory:

- `images/...` for tiles, player, enemy, coin and background layers. A
  missing image is drawn as a magenta placeholder.
- `fonts/ARCADE_N.TTF`. If it is missing, pygame's default font is used.
- `sounds/coin.wav`, `exit.wav`, `kill_enemy.wav`, `player_death.wav` and
  `game_over.wav`. Missing sounds are skipped. If the audio device cannot be
  opened, the game runs without sound.

Levels are always read from `data/levels.rll` in the working directory, not
from `--data-dir`. If that file is missing, cannot be read or has no level
for the index asked for, the built-in levels are used instead (see
`platformer.config.builtin_level`).

An `.rll` file holds one or more run-length encoded levels:

- Levels are separated by blank lines or by lines that start with `;`.
- The lines of one level are joined together.
- Inside a level, a number before a character repeats that character. For
  example, `5#` gives `#####`.
- `|` ends a row.
- Rows shorter than the widest row are padded with air.

The tile characters (`platformer.config.Tile`) are:

| Character | Tile |
| --- | --- |
| `#` | wall |
| `=` | dark wall (scenery; only `#` blocks movement) |
| `-` | air |
| `^` | spikes |
| `@` | player start |
| `&` | enemy |
| `*` | coin |
| `E` | exit |

## Using the pieces

The game logic does not need a window, so it can be used on its own:

```python
from platformer.enemy import Enemy
from platformer.geometry import Vec2
from platformer.level import Level, decode_rle
from platformer.player import Player

level = Level()
level.load_rows(decode_rle("5-|-@-&-|5#").splitlines())
player = Player()
player.spawn(level)
enemies = [Enemy(Vec2(float(column), float(row))) for row, column in level.pop_tiles("&")]
player.update(level, enemies, play_sound=lambda name: None)
```

- `platformer.level` holds `Level`, `decode_rle`, `parse_rll`,
  `read_rll_file` and `LevelLoadError`.
- `platformer.player.Player` handles movement, jumping, gravity, coins,
  spikes, the timer and stomping enemies.
- `platformer.enemy.Enemy` walks until it meets a wall, then turns around.
- `platformer.game.Game` runs the state machine. Call `Game.update` with a
  `Controls` value for each frame. A `Game` made without a surface can be
  updated but not drawn.
- `platformer.graphics.Graphics` draws each screen onto a pygame surface.

## What it does not do

`Graphics` can draw a victory screen with bouncing balls
(`initialize_victory_balls`, `draw_victory_menu`). The game never shows it.
Finishing the last level returns straight to the menu.

## Development

```
pip install -e ".[test]"
pytest
```