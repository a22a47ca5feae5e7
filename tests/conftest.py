from datetime import date, timedelta

import pytest

from trading_sim.core.data_provider import Bar


def make_bars(candles, start=date(2024, 1, 2)):
    """(open, close) 목록으로 Bar 생성."""
    bars = []
    for i, (open_, close) in enumerate(candles):
        bars.append(Bar(
            date=start + timedelta(days=i),
            open=float(open_),
            high=float(max(open_, close)),
            low=float(min(open_, close)),
            close=float(close),
            adj_close=float(close),
            volume=1000,
        ))
    return bars


@pytest.fixture
def bar_factory():
    return make_bars


@pytest.fixture
def example_bars():
    return make_bars([(10, 12), (11, 9), (13, 13)])
