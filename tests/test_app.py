import pygame
import pytest

from minicleste.app import App, main, translate_key
from minicleste.game import GameState, Key


@pytest.mark.parametrize(
    "code, key",
    [
        (pygame.K_LEFT, Key.LEFT),
        (pygame.K_RIGHT, Key.RIGHT),
        (pygame.K_UP, Key.UP),
        (pygame.K_DOWN, Key.DOWN),
        (pygame.K_c, Key.C),
        (pygame.K_x, Key.X),
        (pygame.K_z, Key.Z),
        (pygame.K_ESCAPE, Key.ESCAPE),
    ],
)
def test_translate_known_keys(code, key):
    assert translate_key(code) is key


@pytest.mark.parametrize("code", [pygame.K_a, pygame.K_SPACE, pygame.K_RETURN])
def test_translate_unknown_keys(code):
    assert translate_key(code) is None


def test_app_starts_at_title_screen(tmp_path):
    app = App(asset_dir=tmp_path, save_dir=tmp_path)
    assert app.game.state is GameState.START
    assert app.game.save_dir == tmp_path
    assert app.frames == 0
    assert app.WINDOW_SIZE == (1600, 900)
    assert app.TITLE == "Mini Celeste"


def test_main_help_exits_cleanly():
    with pytest.raises(SystemExit) as info:
        main(["--help"])
    assert info.value.code == 0


def test_main_rejects_unknown_option():
    with pytest.raises(SystemExit) as info:
        main(["--no-such-option"])
    assert info.value.code == 2


def test_run_limited_frames_without_assets(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    app = App(asset_dir=tmp_path, save_dir=tmp_path, max_frames=3)
    app.run()
    assert app.frames == 3
    assert app.game.state is GameState.START
    assert app.game.running is True


def test_run_does_nothing_when_game_already_stopped(tmp_path, monkeypatch):
    monkeypatch.setenv("SDL_VIDEODRIVER", "dummy")
    monkeypatch.setenv("SDL_AUDIODRIVER", "dummy")
    app = App(asset_dir=tmp_path, save_dir=tmp_path, max_frames=5)
    app.game.running = False
    app.run()
    assert app.frames == 0