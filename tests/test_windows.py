"""Unit tests for window tiling around a coordinate."""

from collections.abc import Iterator

import pytest

from profile_pattern_density import WindowSpec, generate_windows


def test_symmetric_tiling():
    windows = list(generate_windows(1000, 100_000, 300, 100))
    assert [w.start for w in windows] == [700, 800, 900, 1000, 1100, 1200]
    assert [w.distance for w in windows] == [-300, -200, -100, 0, 100, 200]
    assert windows[-1] == WindowSpec(1200, 1299, 200)


def test_interval_start_clamps_to_one():
    windows = list(generate_windows(50, 10_000, 100, 30))
    assert [w.start for w in windows] == [1, 31, 61, 91, 121]
    assert [w.distance for w in windows] == [-49, -19, 11, 41, 71]
    # The next window (151-180) would leave [1, 150] and is dropped
    assert max(w.end for w in windows) == 150


def test_window_past_chromosome_end_is_dropped():
    windows = list(generate_windows(990, 1000, 100, 30))
    assert [(w.start, w.end) for w in windows] == [(890, 919), (920, 949), (950, 979)]


def test_interval_shorter_than_window_yields_nothing():
    assert list(generate_windows(1, 10, 100, 30)) == []
    assert list(generate_windows(5, 5, 100, 30)) == []


def test_lazy_and_restartable():
    gen = generate_windows(1000, 100_000, 300, 100)
    assert isinstance(gen, Iterator)
    assert list(generate_windows(1000, 100_000, 300, 100)) == list(gen)


@pytest.mark.parametrize(
    "coordinate, chromosome_length, interval_size, window_size",
    [
        (500, 1000, 200, 100),
        (1, 1000, 250, 7),
        (999, 1000, 600, 33),
        (12_345, 20_000, 10_000, 100),
        (10, 15, 20, 3),
    ],
)
def test_windows_are_contiguous_full_length_and_bounded(
    coordinate, chromosome_length, interval_size, window_size
):
    windows = list(generate_windows(coordinate, chromosome_length, interval_size, window_size))
    lo = max(1, coordinate - interval_size)
    hi = min(chromosome_length, coordinate + interval_size)

    assert windows, "expected at least one window"
    assert windows[0].start == lo
    for w in windows:
        assert w.end - w.start + 1 == window_size
        assert lo <= w.start and w.end <= hi
        assert w.distance == w.start - coordinate
    for prev, nxt in zip(windows, windows[1:]):
        assert nxt.start == prev.end + 1
    # No further full window would fit
    assert windows[-1].end + window_size > hi
