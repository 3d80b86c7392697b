import pytest

from minicleste.basemap import SCALE, Rect
from minicleste.mover import Mover, MoverState

START = (0.0, 0.0)
END = (30.0, 0.0)
SPEED = 60.0
DT = 0.1


@pytest.fixture
def mover():
    return Mover((120.0, 80.0), START, END, SPEED)


def run_until(mover, predicate, limit=500):
    for frame in range(1, limit + 1):
        mover.update(DT)
        if predicate(mover):
            return frame
    raise AssertionError("condition never reached")


def test_idle_mover_does_not_move(mover):
    for _ in range(20):
        mover.update(DT)
    assert mover.position == START
    assert mover.velocity == (0.0, 0.0)
    assert mover.state is MoverState.IDLE


def test_activation_waits_for_move_delay(mover):
    mover.activate()
    mover.update(DT / 2)
    assert mover.state is MoverState.MOVING
    assert mover.position == START
    assert mover.velocity == (0.0, 0.0)


def test_mover_reaches_end(mover):
    mover.activate()
    run_until(mover, lambda m: m.position == END)
    assert mover.state is MoverState.MOVING
    assert not mover.activated
    assert mover.velocity == (0.0, 0.0)


def test_velocity_while_moving_is_full_speed(mover):
    mover.activate()
    run_until(mover, lambda m: m.position != START)
    assert mover.velocity == pytest.approx((SPEED, 0.0))


def test_mover_returns_to_start_and_goes_idle(mover):
    mover.activate()
    run_until(mover, lambda m: m.position == END)
    run_until(mover, lambda m: m.state is MoverState.RETURN)
    assert mover.activated
    run_until(mover, lambda m: m.state is MoverState.IDLE)
    assert mover.position == START
    assert not mover.activated


def test_return_is_slower_than_outbound(mover):
    mover.activate()
    outbound = run_until(mover, lambda m: m.position == END)
    run_until(mover, lambda m: m.state is MoverState.RETURN)
    inbound = run_until(mover, lambda m: m.state is MoverState.IDLE)
    assert inbound > outbound


def test_position_stays_on_track_for_whole_cycle(mover):
    mover.activate()
    positions = []
    for _ in range(500):
        mover.update(DT)
        positions.append(mover.position)
        if mover.state is MoverState.IDLE and len(positions) > 5:
            break
    assert mover.state is MoverState.IDLE
    assert mover.position == START
    assert END in positions
    xs = [x for x, _ in positions]
    ys = [y for _, y in positions]
    assert min(xs) >= START[0]
    assert max(xs) == END[0]
    assert set(ys) == {0.0}


def test_delta_matches_last_step(mover):
    mover.activate()
    run_until(mover, lambda m: m.position != START)
    dx, dy = mover.delta
    assert (mover.last_position[0] + dx, mover.last_position[1] + dy) == mover.position
    assert dx > 0


def test_activate_ignored_when_not_idle(mover):
    mover.activate()
    run_until(mover, lambda m: m.position == END)
    mover.activate()
    assert not mover.activated


def test_deactivate_clears_flag(mover):
    mover.activate()
    mover.deactivate()
    mover.update(DT)
    assert not mover.activated
    assert mover.state is MoverState.IDLE


def test_reset_returns_to_start(mover):
    mover.activate()
    run_until(mover, lambda m: m.position == END)
    mover.reset()
    assert mover.position == START
    assert mover.state is MoverState.IDLE
    assert not mover.activated
    assert mover.velocity == (0.0, 0.0)


def test_rect_follows_position(mover):
    mover.activate()
    run_until(mover, lambda m: m.position == END)
    assert mover.rect == Rect(END[0] * SCALE, END[1] * SCALE, 120.0, 80.0)