import pytest

from minicleste.clock import Clock


class FakeTime:
    def __init__(self, start=100.0):
        self.value = start

    def __call__(self):
        return self.value

    def advance(self, seconds):
        self.value += seconds


@pytest.fixture
def fake():
    return FakeTime()


def test_update_measures_interval(fake):
    clock = Clock(now=fake)
    fake.advance(0.25)
    clock.update()
    assert clock.delta_time == pytest.approx(0.25)
    fake.advance(0.5)
    clock.update()
    assert clock.delta_time == pytest.approx(0.5)


def test_delta_is_zero_while_paused(fake):
    clock = Clock(now=fake)
    clock.pause()
    fake.advance(1.0)
    clock.update()
    assert clock.delta_time == 0.0
    assert clock.is_paused


def test_resume_does_not_count_paused_time_in_delta(fake):
    clock = Clock(now=fake)
    fake.advance(0.1)
    clock.update()
    clock.pause()
    fake.advance(5.0)
    clock.resume()
    fake.advance(0.2)
    clock.update()
    assert clock.delta_time == pytest.approx(0.2)
    assert not clock.is_paused


def test_total_time_excludes_pauses(fake):
    clock = Clock(now=fake)
    fake.advance(2.0)
    clock.pause()
    fake.advance(3.0)
    assert clock.total_time() == pytest.approx(2.0)
    clock.resume()
    fake.advance(1.0)
    assert clock.total_time() == pytest.approx(3.0)


def test_double_pause_keeps_first_pause_point(fake):
    clock = Clock(now=fake)
    fake.advance(1.0)
    clock.pause()
    fake.advance(1.0)
    clock.pause()
    fake.advance(1.0)
    clock.resume()
    assert clock.total_time() == pytest.approx(1.0)


def test_resume_when_running_changes_nothing(fake):
    clock = Clock(now=fake)
    fake.advance(1.5)
    clock.resume()
    assert clock.total_time() == pytest.approx(1.5)


def test_reset_restarts_total_time(fake):
    clock = Clock(now=fake)
    fake.advance(4.0)
    clock.pause()
    clock.reset()
    assert not clock.is_paused
    assert clock.total_time() == 0.0


def test_default_clock_is_monotonic():
    clock = Clock()
    clock.update()
    assert clock.delta_time >= 0.0
    assert clock.total_time() >= 0.0