# minicleste

A small precision platformer. You climb through six screens of rock by
jumping, dashing in eight directions and clinging to walls, while spikes,
springs, moving blocks and crumbling ledges get in the way.

## Installing

```
pip install .
```

The game window is drawn with pygame.

## Running

```
minicleste [--assets DIR] [--saves DIR]
```

- `--assets` is the directory holding the `pic`, `Music` and `word` folders
  (default: the current directory).
- `--saves` is the directory the save files are written to (default: the
  current directory). It must already exist.

## Controls

On the title screen, press C to open the menu. In the menus, Up and Down
move the selection, C confirms and X goes back.

During play:

| Key         | Action                                                   |
|-------------|----------------------------------------------------------|
| Left/Right  | Run; the key pressed last wins                           |
| Down        | Duck                                                     |
| C           | Jump (hold for a higher jump)                            |
| X           | Dash towards the held arrow keys, or ahead if none held  |
| Z           | Grab a wall; climb with Up, slide down with Down         |
| Escape      | Pause                                                    |

Pressing C next to a wall in mid-air makes a wall jump. Grabbing and
climbing use stamina, shown as the green bar in the top-left corner; it
refills whenever you stand on solid ground. Landing also restores your
single dash.

The pause menu offers *Continue*, *Retry* (back to the start of the screen)
and *Save and Exit*. Passing the middle of the last screen ends the game;
Escape then closes the window.

## Level objects

- **Spikes** send you back to the start of the screen.
- **Springs** throw you upwards and restore your dash.
- **Moving blocks** start travelling once you stand on or grab them, carry
  you along, and then drift slowly back.
- **Crumbling blocks** vanish half a second after you step on them and come
  back a second later.

Falling off the bottom of the screen also restarts it.

## Saving

Three save slots are offered when starting a game. *Save and Exit* writes
the current screen number to `save0.txt`, `save1.txt` or `save2.txt` in the
save directory; loading a slot with no file starts from the first screen and
creates the file. A save file that is empty or names an unknown screen
raises `ValueError`.

## What is not included

The package holds no pictures, music or font. The rock of each screen is
shown only through the background pictures `pic/Background1.jpg` and so on,
so without the asset folders the level geometry is invisible: the player
and the moving and crumbling blocks are then drawn as plain rectangles,
text uses pygame's default font, and the game plays without sound. Missing
files are reported on standard error.

## Using the pieces

The simulation works without a window, so it can be driven directly:

```python
from minicleste.game import Game, Key

game = Game(save_dir=".")
game.load_game(0)
game.apply_input({Key.RIGHT}, pressed=[Key.RIGHT])
game.update(1 / 60, held={Key.RIGHT})
print(game.player.position, game.sprite_name())
```

- `minicleste.game` — `Game` (menus via `handle_key`, play input via
  `apply_input`, simulation via `update`, `save_game`/`load_game`),
  `GameState`, `Key` and `dash_direction`.
- `minicleste.level` — `Level`, the platforms, spikes, springs, moving and
  crumbling blocks of a screen.
- `minicleste.player` — `Player` physics.
- `minicleste.mover` — `Mover` and `MoverState`.
- `minicleste.crushblock` — `CrushBlock`.
- `minicleste.basemap` — `Rect`, `Platform`, `TransferDirection`, `BaseMap`.
- `minicleste.clock` — `Clock`, frame timing with pause support.
- `minicleste.app` — `App`, the pygame window, and `main`.

## Tests

```
pip install .[test]
pytest
```