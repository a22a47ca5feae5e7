"""
전일 캔들 방향 규칙 구현.

[ 역할 ]
    core/trading_strategy.py::DecisionRule의 구현체.
    "전일 양봉(종가 > 시가)이면 매수, 전일 음봉(종가 < 시가)이면 전량 매도"

[ 판단 흐름 ]
    매 봉마다 decide() 호출됨 (← backtest/engine.py에서)
        ├── 무포지션 + 전일 종가 > 시가 → OPEN
        ├── 보유 중 + 전일 종가 < 시가 → CLOSE
        └── 그 외 (도지 포함) → HOLD
"""

from typing import Any

from trading_sim.core.data_provider import Bar
from trading_sim.core.trading_strategy import Action, DecisionRule
from trading_sim.strategies import register


@register("candle_signal")
class CandleSignalRule(DecisionRule):
    """전일 캔들 방향 규칙."""

    def __init__(self, params: dict[str, Any] | None = None):
        super().__init__(name="candle_signal", params=params)

    def decide(self, previous_bar: Bar, is_flat: bool) -> Action:
        if is_flat and previous_bar.close > previous_bar.open:
            return Action.OPEN
        if not is_flat and previous_bar.close < previous_bar.open:
            return Action.CLOSE
        return Action.HOLD
