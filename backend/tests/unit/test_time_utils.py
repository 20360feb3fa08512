"""Tests for time helpers."""

import time

from huddle.utils.time_utils import get_timestamp_ms, next_sequence


def test_timestamp_ms():
    assert abs(get_timestamp_ms() - int(time.time() * 1000)) < 1000


def test_sequence_strictly_increasing():
    values = [next_sequence() for _ in range(1000)]
    assert values == sorted(values)
    assert len(set(values)) == len(values)


def test_sequence_increases_when_clock_stalls_or_goes_back(monkeypatch):
    start = next_sequence()
    monkeypatch.setattr(time, "time_ns", lambda: 1)

    assert next_sequence() == start + 1
    assert next_sequence() == start + 2
