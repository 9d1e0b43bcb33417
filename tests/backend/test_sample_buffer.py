"""Tests for the bounded recent-window buffer."""

import pytest

from app.services.readings import Reading
from app.services.sample_buffer import SampleBuffer


def _reading(i: int) -> Reading:
    return Reading(time=i * 2000, temperature=20.0 + i, humidity=50.0, pressure=100000.0)


class TestSampleBuffer:
    def test_starts_empty(self):
        buf = SampleBuffer()
        assert len(buf) == 0
        assert buf.snapshot() == []
        assert buf.capacity == 900

    @pytest.mark.parametrize("n", [1, 899, 900, 901, 2000])
    def test_bounded_to_most_recent(self, n):
        buf = SampleBuffer()
        readings = [_reading(i) for i in range(n)]
        for r in readings:
            buf.append(r)
        snap = buf.snapshot()
        assert len(snap) == min(n, 900)
        assert snap == readings[-min(n, 900):]

    def test_evicts_oldest_first(self):
        buf = SampleBuffer(capacity=3)
        for i in range(5):
            buf.append(_reading(i))
        assert [r.time for r in buf.snapshot()] == [4000, 6000, 8000]

    def test_snapshot_is_a_copy(self):
        buf = SampleBuffer(capacity=2)
        buf.append(_reading(0))
        snap = buf.snapshot()
        buf.append(_reading(1))
        buf.append(_reading(2))
        assert snap == [_reading(0)]

    def test_rejects_zero_capacity(self):
        with pytest.raises(ValueError):
            SampleBuffer(capacity=0)
