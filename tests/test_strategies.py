import numpy as np
import pytest

from trading_sim.backtest.engine import BacktestEngine
from trading_sim.core.trading_strategy import Action, DecisionRule
from trading_sim.strategies import (
    STRATEGY_REGISTRY,
    create_strategy,
    describe_strategies,
    list_strategies,
    register,
)
from trading_sim.strategies.candle_signal import CandleSignalRule
from trading_sim.strategies.coin_flip import CoinFlipRule


def test_registry_discovers_rules():
    assert list_strategies() == ["candle_signal", "coin_flip"]
    assert STRATEGY_REGISTRY["candle_signal"] is CandleSignalRule
    assert STRATEGY_REGISTRY["coin_flip"] is CoinFlipRule


def test_unknown_strategy():
    with pytest.raises(ValueError, match="candle_signal, coin_flip"):
        create_strategy("ma_cross")


@pytest.mark.parametrize("candle, is_flat, expected", [
    ((10, 12), True, Action.OPEN),
    ((10, 12), False, Action.HOLD),
    ((12, 10), False, Action.CLOSE),
    ((12, 10), True, Action.HOLD),
    ((10, 10), True, Action.HOLD),
    ((10, 10), False, Action.HOLD),
])
def test_candle_signal(bar_factory, candle, is_flat, expected):
    bar = bar_factory([candle])[0]
    assert CandleSignalRule().decide(bar, is_flat) == expected


def test_coin_flip_draws_once_per_decision(bar_factory):
    bar = bar_factory([(10, 10)])[0]
    reference = np.random.default_rng(3)
    rule = create_strategy("coin_flip", params={"seed": 3})

    for is_flat in [True, False, True, True, False, False, True, False]:
        heads = bool(reference.integers(0, 2))
        expected = (Action.OPEN if is_flat else Action.CLOSE) if heads else Action.HOLD
        assert rule.decide(bar, is_flat) == expected


def test_engine_accepts_registered_rule(example_bars):
    engine = BacktestEngine(create_strategy("candle_signal"))
    profits, _ = engine.run(example_bars, 1000.0)
    assert profits[-1] == pytest.approx(181.8181818)


def test_duplicate_name_rejected():
    class AlwaysHold(DecisionRule):
        def decide(self, previous_bar, is_flat):
            return Action.HOLD

    with pytest.raises(ValueError, match="candle_signal"):
        register("candle_signal")(AlwaysHold)
    assert STRATEGY_REGISTRY["candle_signal"] is CandleSignalRule


def test_same_class_can_register_again():
    assert register("coin_flip")(CoinFlipRule) is CoinFlipRule
    assert list_strategies() == ["candle_signal", "coin_flip"]


def test_non_rule_class_rejected():
    with pytest.raises(TypeError):
        register("plain")(dict)
    assert "plain" not in STRATEGY_REGISTRY


def test_describe_strategies():
    assert describe_strategies() == {
        "candle_signal": "전일 캔들 방향 규칙.",
        "coin_flip": "동전 던지기 규칙.",
    }
