import pytest

from pidcore.mock_timing import MockTimingService
from pidcore.timing_service import TimingService, micros_to_seconds


class FakeClock:
    def __init__(self, start_ns=0):
        self.now = start_ns

    def advance_us(self, us):
        self.now += us * 1000

    def __call__(self):
        return self.now


def test_micros_to_seconds():
    assert micros_to_seconds(1_000_000) == 1.0
    assert micros_to_seconds(250_000) == 0.25
    assert micros_to_seconds(0) == 0.0


def test_delta_measured_from_previous_query():
    clock = FakeClock(start_ns=5_000_000)
    ts = TimingService(clock=clock)
    clock.advance_us(1500)
    assert ts.get_delta_time() == 1500
    clock.advance_us(20)
    assert ts.get_delta_time() == 20
    assert ts.get_delta_time() == 0
    assert ts.get_loop_count() == 3


def test_delta_seconds_and_reset():
    clock = FakeClock()
    ts = TimingService(clock=clock)
    clock.advance_us(500_000)
    assert ts.get_delta_time_seconds() == pytest.approx(0.5)
    clock.advance_us(700)
    ts.reset()
    assert ts.get_loop_count() == 0
    clock.advance_us(3)
    assert ts.get_delta_time() == 3


def test_default_clock_is_monotonic():
    ts = TimingService()
    assert ts.get_delta_time() >= 0
    assert ts.get_delta_time() >= 0


def test_mock_replays_script_then_default():
    ts = MockTimingService(deltas=[10, 20], default_delta=5)
    assert [ts.get_delta_time() for _ in range(4)] == [10, 20, 5, 5]
    ts.push(7)
    ts.set_default(1)
    assert ts.get_delta_time() == 7
    assert ts.get_delta_time_seconds() == pytest.approx(1e-6)
    assert ts.get_loop_count() == 6
    ts.reset()
    assert ts.get_loop_count() == 0


def test_mock_reset_drops_script_and_default():
    ts = MockTimingService(deltas=[10, 20], default_delta=5)
    ts.get_delta_time()
    ts.set_default(99)
    ts.reset()
    assert ts.get_delta_time() == 5
    assert ts.get_loop_count() == 1
