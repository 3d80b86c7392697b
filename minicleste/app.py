"""Window, drawing, sound and keyboard handling around the game state machine."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence, Union

import pygame

from minicleste.basemap import SCALE
from minicleste.game import (
    LOAD_OPTIONS,
    MENU_OPTIONS,
    PAUSE_OPTIONS,
    SCREEN_WIDTH,
    Game,
    GameState,
    Key,
)

_KEYMAP: dict[int, Key] = {
    pygame.K_LEFT: Key.LEFT,
    pygame.K_RIGHT: Key.RIGHT,
    pygame.K_UP: Key.UP,
    pygame.K_DOWN: Key.DOWN,
    pygame.K_c: Key.C,
    pygame.K_x: Key.X,
    pygame.K_z: Key.Z,
    pygame.K_ESCAPE: Key.ESCAPE,
}

WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
GREEN = (0, 255, 0)
MENU_BACKDROP = (32, 32, 32)
PLAY_BACKDROP = (64, 64, 64)

_BACKGROUNDS = (
    "pic/Background1.jpg",
    "pic/Background2.jpg",
    "pic/Background3.jpg",
    "pic/Background4.jpg",
    "pic/Background5.jpg",
    "pic/Background_end.jpg",
)


def translate_key(code: int) -> Optional[Key]:
    """The game key for a pygame key code, or None if the game ignores it."""
    return _KEYMAP.get(code)


class App:
    """Runs the game in a window with pictures, text and music."""

    WINDOW_SIZE = (SCREEN_WIDTH * SCALE, 180 * SCALE)
    TITLE = "Mini Celeste"
    FPS = 60
    MUSIC_VOLUME = 0.5
    MUSIC_FILES = {
        "prologue": "Music/Lena Raine - Prologue.wav",
        "first_steps": "Music/Lena Raine - First Steps~1.wav",
    }
    DEATH_SOUND = "Music/Death.wav"
    FONT_FILE = "word/word.ttf"

    def __init__(
        self,
        asset_dir: Union[str, Path] = ".",
        save_dir: Union[str, Path] = ".",
        max_frames: Optional[int] = None,
    ) -> None:
        self.asset_dir = Path(asset_dir)
        self.max_frames = max_frames
        self.frames = 0
        self.game = Game(save_dir=save_dir, on_death=self._play_death_sound)
        self._screen: Optional[pygame.Surface] = None
        self._images: dict[str, Optional[pygame.Surface]] = {}
        self._fonts: dict[int, pygame.font.Font] = {}
        self._audio = False
        self._death_sound: Optional[pygame.mixer.Sound] = None
        self._current_music: Optional[str] = None

    # -- main loop ------------------------------------------------------------

    def run(self) -> None:
        """Open the window and play until the window is closed or the game exits."""
        pygame.init()
        try:
            self._screen = pygame.display.set_mode(self.WINDOW_SIZE)
            pygame.display.set_caption(self.TITLE)
            self._init_audio()
            ticker = pygame.time.Clock()
            while self.game.running and (
                self.max_frames is None or self.frames < self.max_frames
            ):
                self._sync_music()
                if self.game.state is GameState.PLAYING:
                    self._play_frame()
                else:
                    self._menu_frame()
                pygame.display.flip()
                self.frames += 1
                ticker.tick(self.FPS)
        finally:
            self._stop_music()
            self._images.clear()
            self._fonts.clear()
            self._death_sound = None
            self._screen = None
            pygame.quit()

    def _menu_frame(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.game.running = False
            elif event.type == pygame.KEYDOWN:
                key = translate_key(event.key)
                if key is not None:
                    self.game.handle_key(key)
        self._draw_screen()

    def _play_frame(self) -> None:
        pressed: list[Key] = []
        released: list[Key] = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.game.running = False
            elif event.type == pygame.KEYDOWN:
                key = translate_key(event.key)
                if key is not None:
                    pressed.append(key)
            elif event.type == pygame.KEYUP:
                key = translate_key(event.key)
                if key is not None:
                    released.append(key)
        keyboard = pygame.key.get_pressed()
        held = {key for code, key in _KEYMAP.items() if keyboard[code]}

        self.game.clock.update()
        dt = self.game.clock.delta_time
        self.game.apply_input(held, pressed, released)
        self.game.update(dt, held)
        self._draw_level()

    # -- assets ---------------------------------------------------------------

    def _path(self, relative: str) -> Path:
        return self.asset_dir / relative

    def _image(self, relative: str) -> Optional[pygame.Surface]:
        if relative not in self._images:
            try:
                self._images[relative] = pygame.image.load(str(self._path(relative)))
            except (pygame.error, FileNotFoundError, OSError):
                print(f"Failed to load {relative}", file=sys.stderr)
                self._images[relative] = None
        return self._images[relative]

    def _font(self, size: int) -> pygame.font.Font:
        if size not in self._fonts:
            path = self._path(self.FONT_FILE)
            try:
                self._fonts[size] = pygame.font.Font(str(path), size)
            except (pygame.error, FileNotFoundError, OSError):
                self._fonts[size] = pygame.font.Font(None, size)
        return self._fonts[size]

    # -- sound ----------------------------------------------------------------

    def _init_audio(self) -> None:
        try:
            pygame.mixer.init()
        except pygame.error as exc:
            print(f"Audio unavailable: {exc}", file=sys.stderr)
            self._audio = False
            return
        self._audio = True
        try:
            self._death_sound = pygame.mixer.Sound(str(self._path(self.DEATH_SOUND)))
        except (pygame.error, FileNotFoundError, OSError):
            print("Failed to load death sound", file=sys.stderr)
            self._death_sound = None

    def _play_death_sound(self) -> None:
        if self._death_sound is not None:
            self._death_sound.play()

    def _sync_music(self) -> None:
        track = self.game.music_track
        if track is None or track == self._current_music:
            return
        self._stop_music()
        self._current_music = track
        if not self._audio:
            return
        try:
            pygame.mixer.music.load(str(self._path(self.MUSIC_FILES[track])))
            pygame.mixer.music.set_volume(self.MUSIC_VOLUME)
            pygame.mixer.music.play(loops=-1)
        except (pygame.error, FileNotFoundError, OSError):
            print(f"Failed to load {track} music!", file=sys.stderr)

    def _stop_music(self) -> None:
        if self._audio and self._current_music is not None:
            try:
                pygame.mixer.music.stop()
            except pygame.error:
                pass
        self._current_music = None

    # -- drawing --------------------------------------------------------------

    def _blit(self, relative: str, position: tuple[float, float] = (0.0, 0.0)) -> bool:
        image = self._image(relative)
        if image is None or self._screen is None:
            return False
        self._screen.blit(image, position)
        return True

    def _text(
        self,
        text: str,
        size: int,
        color: tuple[int, int, int],
        position: tuple[float, float],
        *,
        centered: bool = False,
        bold: bool = False,
    ) -> None:
        font = self._font(size)
        font.set_bold(bold)
        x, y = position
        for line in text.split("\n"):
            surface = font.render(line, True, color)
            left = x - surface.get_width() / 2 if centered else x
            self._screen.blit(surface, (left, y))
            y += font.get_linesize()
        font.set_bold(False)

    def _highlight(self, selected: bool) -> tuple[int, int, int]:
        return GREEN if selected else WHITE

    def _draw_screen(self) -> None:
        state = self.game.state
        if state is GameState.START:
            self._screen.fill(MENU_BACKDROP)
            self._blit("pic/Start.png")
        elif state is GameState.MENU:
            self._screen.fill(MENU_BACKDROP)
            self._blit("pic/Background.png")
            positions = ((200, 225), (300, 375), (400, 525))
            for option, position in zip(MENU_OPTIONS, positions):
                color = self._highlight(option == self.game.selected_option)
                self._text(option, 60, color, position)
        elif state is GameState.HELP:
            self._screen.fill(MENU_BACKDROP)
            self._blit("pic/Background.png")
            self._text("Help", 100, BLACK, (720, 100))
            self._text(
                "Use arrow keys to move.\nPress C to jump.\nPress X to dash.",
                60,
                BLACK,
                (440, 300),
            )
        elif state is GameState.LOAD_GAME:
            self._screen.fill(MENU_BACKDROP)
            self._blit("pic/Background.png")
            self._text("Load Game", 100, BLACK, (620, 100))
            positions = ((200, 275), (300, 425), (400, 575))
            for index, (option, position) in enumerate(zip(LOAD_OPTIONS, positions)):
                color = self._highlight(index == self.game.selected_load_index)
                self._text(option, 60, color, position)
        elif state is GameState.PAUSING:
            self._screen.fill(MENU_BACKDROP)
            middle = self.WINDOW_SIZE[0] / 2
            self._text("Paused", 80, WHITE, (middle, 100), centered=True)
            heights = (200, 250, 350)
            for index, (option, height) in enumerate(zip(PAUSE_OPTIONS, heights)):
                color = self._highlight(index == self.game.selected_pause_index)
                self._text(option, 40, color, (middle, height), centered=True)
        elif state is GameState.END:
            self._screen.fill(BLACK)
            self._blit("pic/Background_end.jpg")
            self._text("Thanks For Playing", 80, WHITE, (620, 100), bold=True)

    def _draw_level(self) -> None:
        game = self.game
        self._screen.fill(PLAY_BACKDROP)
        if game.current_map_index < len(_BACKGROUNDS):
            self._blit(_BACKGROUNDS[game.current_map_index])

        level = game.level
        for mover in level.movers:
            rect = mover.rect
            if not self._blit("pic/Mover.png", (rect.x, rect.y)):
                pygame.draw.rect(
                    self._screen, (0, 0, 255), (rect.x, rect.y, rect.width, rect.height)
                )
        for crush in level.crushes:
            if not crush.visible:
                continue
            rect = crush.rect
            if not self._blit("pic/CrushBlock.png", (rect.x, rect.y)):
                pygame.draw.rect(
                    self._screen, WHITE, (rect.x, rect.y, rect.width, rect.height)
                )

        self._draw_player()

        background, fill = game.player.stamina_bar
        pygame.draw.rect(
            self._screen, WHITE, (background.x, background.y, background.width, background.height)
        )
        if fill.width > 0:
            pygame.draw.rect(self._screen, GREEN, (fill.x, fill.y, fill.width, fill.height))

    def _draw_player(self) -> None:
        player = self.game.player
        x, y = player.position
        image = self._image(f"pic/{self.game.sprite_name()}.png")
        if image is not None:
            left = x * SCALE - image.get_width() / 2
            top = y * SCALE - image.get_height()
            self._screen.blit(image, (left, top))
        else:
            body = player.rect
            pygame.draw.rect(
                self._screen, (200, 60, 60), (body.x, body.y, body.width, body.height)
            )


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Start the game window."""
    parser = argparse.ArgumentParser(prog="minicleste", description="A small platformer.")
    parser.add_argument(
        "--assets", default=".", help="directory holding the pic, Music and word folders"
    )
    parser.add_argument("--saves", default=".", help="directory for the save files")
    args = parser.parse_args(argv)
    App(asset_dir=args.assets, save_dir=args.saves).run()
    return 0