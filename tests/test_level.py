import pytest

from minicleste.basemap import SCALE, Rect, TransferDirection
from minicleste.level import Level
from minicleste.mover import MoverState


@pytest.fixture
def level():
    return Level()


def test_load_level_one(level):
    level.load(1)
    assert level.spawn_point == (23, 144)
    assert level.transfer_direction is TransferDirection.UP
    assert level.target_map_index == 1
    assert len(level.spikes) == 5
    assert level.spikes[0] == Rect(40 * SCALE, 166 * SCALE, 40 * SCALE, 2 * SCALE)
    assert level.springs == []
    assert level.movers == []
    assert level.crushes == []
    assert len(level.platforms) == 24


def test_load_level_two_has_spring(level):
    level.load(2)
    assert level.spawn_point == (40, 150)
    assert level.target_map_index == 2
    assert len(level.spikes) == 3
    assert level.springs == [Rect(112 * SCALE, 142 * SCALE, 16 * SCALE, 4 * SCALE)]


@pytest.mark.parametrize("map_id", [1, 2, 3, 4, 5])
def test_levels_lead_up_to_next(level, map_id):
    level.load(map_id)
    assert level.transfer_direction is TransferDirection.UP
    assert level.target_map_index == map_id


def test_load_level_four_has_mover(level):
    level.load(4)
    assert len(level.movers) == 1
    mover = level.movers[0]
    assert mover.start == (112, 80)
    assert mover.end == (184, 72)
    assert mover.speed == 200.0
    assert mover.size == (24 * SCALE, 16 * SCALE)
    assert mover.state is MoverState.IDLE


def test_load_level_five_has_crush_blocks(level):
    level.load(5)
    assert len(level.crushes) == 4
    assert [c.position for c in level.crushes] == [
        (232, 152), (272, 128), (224, 104), (240, 64),
    ]
    assert all(c.visible for c in level.crushes)
    assert level.crushes[0].rect == Rect(232 * SCALE, 152 * SCALE, 24 * SCALE, 8 * SCALE)


def test_last_level_has_no_exit(level):
    level.load(6)
    assert level.spawn_point == (50, 150)
    assert level.transfer_direction is TransferDirection.NONE
    assert level.target_map_index == -1
    assert level.spikes == []


def test_reload_replaces_entities(level):
    level.load(1)
    level.load(5)
    assert level.spikes == []
    assert len(level.crushes) == 4


def test_unknown_level_is_empty(level):
    level.load(99)
    assert level.platforms == []
    assert level.spikes == []
    assert level.movers == []


def test_update_starts_crush_timer(level):
    level.load(5)
    crush = level.crushes[0]
    crush.is_riding = True
    level.update(0.1)
    assert crush.crush_timing is True
    assert crush.crush_timer == crush.CRUSH_DURATION


def test_update_moves_activated_mover(level):
    level.load(4)
    mover = level.movers[0]
    mover.activate()
    level.update(0.05)
    assert mover.state is MoverState.MOVING


def test_reset_restores_entities(level):
    level.load(4)
    mover = level.movers[0]
    mover.activate()
    for _ in range(20):
        level.update(0.05)
    assert mover.position != mover.start
    level.reset()
    assert mover.position == mover.start
    assert mover.state is MoverState.IDLE


def test_reset_makes_crush_visible(level):
    level.load(5)
    crush = level.crushes[1]
    crush.visible = False
    level.reset()
    assert crush.visible is True


def test_clear_removes_everything(level):
    level.load(4)
    level.clear()
    assert level.platforms == []
    assert level.spikes == []
    assert level.springs == []
    assert level.movers == []
    assert level.crushes == []


def test_add_methods(level):
    level.add_spike((10, 20), (30, 40))
    level.add_spring((5, 6), (7, 8))
    level.add_mover((10, 10), (1, 2), (3, 4), 50)
    level.add_crush_block((10, 10), (9, 9))
    assert level.spikes == [Rect(30, 40, 10, 20)]
    assert level.springs == [Rect(7, 8, 5, 6)]
    assert level.movers[0].start == (1, 2)
    assert level.crushes[0].position == (9, 9)