import math
from datetime import date

import numpy as np
import pytest

from trading_sim.core.exceptions import InvalidParameter
from trading_sim.data.price_series import generate_price_series, generate_sample_bars


@pytest.mark.parametrize("mean, std_dev", [(0.0, 1.0), (5.0, 0.1), (-3.0, 20.0)])
def test_length_one_is_origin(mean, std_dev):
    assert generate_price_series(1, mean, std_dev) == [0.0]


@pytest.mark.parametrize("std_dev", [0.0, -1.0, float("nan"), float("inf")])
def test_invalid_std_dev(std_dev):
    with pytest.raises(InvalidParameter):
        generate_price_series(10, 0.0, std_dev)


def test_invalid_length():
    with pytest.raises(InvalidParameter):
        generate_price_series(0, 0.0, 1.0)


@pytest.mark.parametrize("mean", [float("nan"), float("inf"), float("-inf")])
def test_invalid_mean(mean):
    with pytest.raises(InvalidParameter):
        generate_price_series(10, mean, 1.0)


def test_starts_at_zero_with_requested_length():
    path = generate_price_series(10, 0.0, 1.0, seed=3)
    assert len(path) == 10
    assert path[0] == 0.0
    assert all(isinstance(v, float) for v in path)


def test_seeded_paths_repeat():
    assert generate_price_series(50, 0.1, 2.0, seed=42) == generate_price_series(50, 0.1, 2.0, seed=42)


def test_path_is_cumulative_sum_of_normal_draws():
    expected_increments = np.random.default_rng(9).normal(0.5, 1.5, 4)
    path = generate_price_series(5, 0.5, 1.5, rng=np.random.default_rng(9))
    assert np.diff(path) == pytest.approx(expected_increments)


def test_tiny_spread_tracks_mean():
    path = generate_price_series(6, 2.0, 1e-12, seed=0)
    assert path == pytest.approx([0.0, 2.0, 4.0, 6.0, 8.0, 10.0])


def test_sample_bars_chain_open_to_close():
    bars = generate_sample_bars(30, start_price=100.0, seed=11)
    assert len(bars) == 30
    assert bars[0].open == 100.0
    for prev, cur in zip(bars, bars[1:]):
        assert prev.close == cur.open
        assert prev.date < cur.date
        assert cur.date.weekday() < 5
    for bar in bars:
        assert bar.low <= min(bar.open, bar.close)
        assert bar.high >= max(bar.open, bar.close)
        assert bar.volume >= 0
        assert math.isfinite(bar.close)


def test_sample_bars_start_date():
    bars = generate_sample_bars(3, start_date=date(2024, 3, 1), seed=1)
    assert bars[0].date == date(2024, 3, 1)
    # 금요일 다음은 월요일
    assert bars[1].date == date(2024, 3, 4)
