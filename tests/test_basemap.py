import pytest

from minicleste.basemap import (
    EARTH_COLOR,
    SCALE,
    BaseMap,
    Platform,
    Rect,
    TransferDirection,
)


def test_rect_overlap_is_detected_both_ways():
    a = Rect(0, 0, 10, 10)
    b = Rect(5, 5, 10, 10)
    assert a.intersects(b)
    assert b.intersects(a)


def test_touching_rects_do_not_intersect():
    a = Rect(0, 0, 10, 10)
    assert not a.intersects(Rect(10, 0, 10, 10))
    assert not a.intersects(Rect(0, 10, 10, 10))


def test_disjoint_rects_do_not_intersect():
    assert not Rect(0, 0, 5, 5).intersects(Rect(20, 20, 5, 5))


def test_contained_rect_intersects():
    assert Rect(0, 0, 100, 100).intersects(Rect(40, 40, 1, 1))


def test_rect_edges_follow_position_and_size():
    rect = Rect(3, 4, 10, 20)
    assert (rect.left, rect.top, rect.right, rect.bottom) == (3, 4, 13, 24)


def test_add_platform_stores_screen_rect_and_color():
    level = BaseMap()
    level.add_platform((40, 20), (10, 30), (1, 2, 3))
    assert level.platforms == [Platform(Rect(10.0, 30.0, 40.0, 20.0), (1, 2, 3))]


def test_load_first_map_first_platform():
    level = BaseMap()
    level.load(1)
    assert level.platforms[0].rect == Rect(0.0, 0.0, 248 * SCALE, 8 * SCALE)
    assert level.platforms[0].color == EARTH_COLOR


def test_load_first_map_has_differently_tinted_platform():
    level = BaseMap()
    level.load(1)
    assert level.platforms[8].color == (188, 122, 87)


def test_load_fourth_map_uses_single_pixel_offset():
    level = BaseMap()
    level.load(4)
    first = level.platforms[0].rect
    assert (first.x, first.y) == pytest.approx((1.0, 1.0))


def test_load_last_map_platform_count():
    level = BaseMap()
    level.load(6)
    assert len(level.platforms) == 6


@pytest.mark.parametrize("map_id", [1, 2, 3, 4, 5, 6])
def test_every_map_has_positive_sized_platforms(map_id):
    level = BaseMap()
    level.load(map_id)
    assert level.platforms
    assert all(p.rect.width > 0 and p.rect.height > 0 for p in level.platforms)


def test_reload_replaces_rather_than_appends():
    level = BaseMap()
    level.load(2)
    once = list(level.platforms)
    level.load(2)
    assert level.platforms == once


def test_unknown_map_clears_platforms():
    level = BaseMap()
    level.load(3)
    level.load(99)
    assert level.platforms == []


def test_reset_keeps_geometry():
    level = BaseMap()
    level.load(5)
    before = list(level.platforms)
    level.reset()
    assert level.platforms == before


def test_set_transfer_records_direction_and_target():
    level = BaseMap()
    level.set_transfer(1, 2)
    assert level.transfer_direction is TransferDirection.UP
    assert level.target_map_index == 2


def test_default_transfer_is_none():
    level = BaseMap()
    assert level.transfer_direction is TransferDirection.NONE
    assert level.target_map_index == -1


def test_set_transfer_rejects_unknown_direction():
    with pytest.raises(ValueError):
        BaseMap().set_transfer(9, 1)