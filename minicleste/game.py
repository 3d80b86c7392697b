"""Game state machine: menus, player input, level progression and save slots."""

from __future__ import annotations

import math
from enum import Enum, auto
from pathlib import Path
from typing import Callable, Iterable, Optional, Union

from minicleste.basemap import TransferDirection, Vector
from minicleste.clock import Clock
from minicleste.level import Level
from minicleste.player import Player

LEVEL_COUNT = 6
SCREEN_WIDTH = 320
"""Width of the playing field in game pixels."""
FALL_LIMIT = 200
"""Falling below this height in game pixels kills the player."""
FINAL_LEVEL_INDEX = 5
FINISH_X = 160
"""Reaching beyond this x in the final level ends the game."""

MENU_OPTIONS = ("Start Game", "Help", "Exit Game")
LOAD_OPTIONS = ("Save 1", "Save 2", "Save 3")
PAUSE_OPTIONS = ("Continue", "Retry", "Save and Exit")


class GameState(Enum):
    START = auto()
    MENU = auto()
    HELP = auto()
    LOAD_GAME = auto()
    PLAYING = auto()
    PAUSING = auto()
    END = auto()


class Key(Enum):
    """The keys the game reacts to."""

    LEFT = auto()
    RIGHT = auto()
    UP = auto()
    DOWN = auto()
    C = auto()
    X = auto()
    Z = auto()
    ESCAPE = auto()


def dash_direction(right: bool, left: bool, up: bool, down: bool, facing: int) -> Vector:
    """Unit dash direction from the held arrow keys; none held dashes along `facing`."""
    x = y = 0.0
    if right:
        x = 1.0
    if left:
        x = -1.0
    if up:
        y = -1.0
    if down:
        y = 1.0
    if not (right or left or up or down):
        x = float(facing)
    length = math.hypot(x, y)
    if length > 0:
        return (x / length, y / length)
    return (1.0, 0.0)


class Game:
    """All game state apart from drawing, sound and the window."""

    def __init__(
        self,
        save_dir: Union[str, Path] = ".",
        on_death: Optional[Callable[[], None]] = None,
        clock: Optional[Clock] = None,
    ) -> None:
        self.save_dir = Path(save_dir)
        self.clock = clock if clock is not None else Clock()
        self.player = Player(on_death=on_death)
        self.levels: list[Level] = []
        for map_id in range(1, LEVEL_COUNT + 1):
            level = Level()
            level.load(map_id)
            self.levels.append(level)

        self.current_map_index = 0
        self.current_save_index = 0
        self.state = GameState.START
        self.running = True
        self.is_paused = False

        self.selected_menu_index = 0
        self.selected_load_index = 0
        self.selected_pause_index = 0

        self._direction_keys: list[Key] = []
        self._jump_pressed = False
        self._dash_pressed = False
        self._sprite = "RRight"

    # -- queries ------------------------------------------------------------

    @property
    def level(self) -> Level:
        return self.levels[self.current_map_index]

    @property
    def selected_option(self) -> str:
        return MENU_OPTIONS[self.selected_menu_index]

    @property
    def music_track(self) -> Optional[str]:
        """Track that should play in the current state; None keeps whatever plays."""
        if self.state in (
            GameState.START,
            GameState.MENU,
            GameState.HELP,
            GameState.LOAD_GAME,
        ):
            return "prologue"
        if self.state is GameState.PLAYING:
            return "first_steps"
        return None

    def sprite_name(self) -> str:
        """Name of the player image to show, such as 'RRight' or 'GrabBLeft'."""
        return self._sprite

    # -- menus --------------------------------------------------------------

    def _pause(self) -> None:
        self.is_paused = True
        self.clock.pause()
        self.state = GameState.PAUSING

    def _resume(self, state: GameState) -> None:
        self.is_paused = False
        self.clock.resume()
        self.state = state

    def handle_key(self, key: Key) -> None:
        """React to a single key press outside of play."""
        state = self.state
        if state is GameState.START:
            if key is Key.C:
                self.state = GameState.MENU
        elif state is GameState.MENU:
            count = len(MENU_OPTIONS)
            if key is Key.UP:
                self.selected_menu_index = (self.selected_menu_index - 1) % count
            elif key is Key.DOWN:
                self.selected_menu_index = (self.selected_menu_index + 1) % count
            elif key is Key.C:
                option = self.selected_option
                if option == "Start Game":
                    self.state = GameState.LOAD_GAME
                elif option == "Help":
                    self.state = GameState.HELP
                else:
                    self.running = False
            elif key is Key.X:
                self.state = GameState.START
        elif state is GameState.LOAD_GAME:
            count = len(LOAD_OPTIONS)
            if key is Key.UP:
                self.selected_load_index = (self.selected_load_index - 1) % count
            elif key is Key.DOWN:
                self.selected_load_index = (self.selected_load_index + 1) % count
            elif key is Key.C:
                self.load_game(self.selected_load_index)
                self.state = GameState.PLAYING
            elif key is Key.X:
                self.state = GameState.MENU
        elif state is GameState.HELP:
            if key is Key.X:
                self.state = GameState.MENU
        elif state is GameState.PAUSING:
            count = len(PAUSE_OPTIONS)
            if key is Key.UP:
                self.selected_pause_index = (self.selected_pause_index - 1) % count
            elif key is Key.DOWN:
                self.selected_pause_index = (self.selected_pause_index + 1) % count
            elif key is Key.X:
                self._resume(GameState.PLAYING)
            elif key is Key.C:
                if self.selected_pause_index == 0:
                    self._resume(GameState.PLAYING)
                elif self.selected_pause_index == 1:
                    self.player.die(self.level.spawn_point)
                    self._resume(GameState.PLAYING)
                else:
                    self.save_game(self.selected_load_index)
                    self._resume(GameState.MENU)
        elif state is GameState.END:
            if key is Key.ESCAPE:
                self.running = False

    # -- play input ---------------------------------------------------------

    def apply_input(
        self,
        held: Iterable[Key],
        pressed: Iterable[Key] = (),
        released: Iterable[Key] = (),
    ) -> None:
        """Apply one frame of keyboard input to the player during play."""
        held = set(held)
        player = self.player

        if Key.Z in held:
            if player.can_grab and player.grab_allowed:
                player.is_grabbing = True
        else:
            player.is_grabbing = False

        if Key.C in held:
            if not self._jump_pressed:
                if player.is_grabbing:
                    if player.facing == 0 or player.wall_grab_dir == player.facing:
                        player.grab_wall_jump()
                    else:
                        player.wall_jump()
                elif player.wall_grab_dir != 0 and not player.on_ground:
                    player.wall_jump()
                else:
                    player.jump()
            self._jump_pressed = True
            player.jump_held = True
        else:
            self._jump_pressed = False
            player.jump_held = False

        if Key.X in held:
            direction = dash_direction(
                Key.RIGHT in held,
                Key.LEFT in held,
                Key.UP in held,
                Key.DOWN in held,
                player.last_facing,
            )
            if not self._dash_pressed:
                player.dash(direction)
            self._dash_pressed = True
        else:
            self._dash_pressed = False

        for key in pressed:
            if key in (Key.LEFT, Key.RIGHT) and key not in self._direction_keys:
                self._direction_keys.append(key)
            if key is Key.DOWN and not player.is_grabbing:
                player.ducking = True
        for key in released:
            if key in self._direction_keys:
                self._direction_keys.remove(key)
            if key is Key.DOWN:
                player.ducking = False

        self._update_facing()

        if Key.ESCAPE in held:
            self._pause()

    def _update_facing(self) -> None:
        player = self.player
        if player.is_dashing:
            player.facing = 0
            return
        charge = "R" if player.dash_charge == 1 else "B"
        duck = "Duck" if player.ducking else ""
        if self._direction_keys:
            side = 1 if self._direction_keys[-1] is Key.RIGHT else -1
            player.facing = side
            player.last_facing = side
            self._sprite = duck + charge + ("Right" if side == 1 else "Left")
            return
        if player.wall_grab_dir:
            player.last_facing = player.wall_grab_dir
            side_name = "Right" if player.wall_grab_dir == 1 else "Left"
            self._sprite = "Grab" + charge + side_name
        else:
            side_name = "Right" if player.last_facing == 1 else "Left"
            self._sprite = duck + charge + side_name
        player.facing = 0

    # -- simulation ---------------------------------------------------------

    def update(self, dt: float, held: Iterable[Key] = ()) -> None:
        """Advance the current level and the player by `dt` seconds."""
        self._simulate(dt, set(held))
        if (
            self.current_map_index == FINAL_LEVEL_INDEX
            and self.player.position[0] > FINISH_X
        ):
            self.state = GameState.END

    def _simulate(self, dt: float, held: set) -> None:
        level = self.level
        player = self.player
        level.update(dt)
        player.update(dt, level, Key.UP in held, Key.DOWN in held)

        if player.position[1] > FALL_LIMIT:
            player.die(level.spawn_point)
            level.reset()
            return

        body = player.rect
        if any(body.intersects(spike) for spike in level.spikes):
            player.die(level.spawn_point)
            level.reset()

        target = level.target_map_index
        if not 0 <= target < len(self.levels):
            return

        x, y = player.position
        direction = level.transfer_direction
        if direction is TransferDirection.UP:
            leaving = y < 0
        elif direction is TransferDirection.LEFT:
            leaving = x < 0
        elif direction is TransferDirection.RIGHT:
            leaving = x > SCREEN_WIDTH
        else:
            leaving = False

        if leaving:
            self.current_map_index = target
            player.position = self.levels[target].spawn_point

    # -- save slots ---------------------------------------------------------

    def _save_path(self, save_index: int) -> Path:
        return self.save_dir / f"save{save_index}.txt"

    def save_game(self, save_index: int) -> None:
        """Write the current level index to save slot `save_index`."""
        self._save_path(save_index).write_text(f"{self.current_map_index}\n")

    def load_game(self, save_index: int) -> None:
        """Resume from save slot `save_index`, starting a new save if it is empty."""
        path = self._save_path(save_index)
        if path.exists():
            words = path.read_text().split()
            if not words:
                raise ValueError(f"empty save file {path}")
            index = int(words[0])
            if not 0 <= index < len(self.levels):
                raise ValueError(f"save file {path} names unknown level {index}")
            self.current_map_index = index
            self.player.die(self.level.spawn_point)
            self.current_save_index = save_index
        else:
            self.current_map_index = 0
            self.player.die(self.level.spawn_point)
            self.current_save_index = save_index
            self.save_game(save_index)