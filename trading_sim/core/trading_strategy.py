"""
매매 판단 규칙 추상 클래스 정의.

[ 역할 ]
    전일 봉과 현재 포지션 상태(무포지션 여부)를 받아
    OPEN(진입) / CLOSE(청산) / HOLD(유지) 중 하나를 결정.

[ 구현체 ]
    - strategies/candle_signal.py::CandleSignalRule (전일 양봉 매수 / 음봉 매도)
    - strategies/coin_flip.py::CoinFlipRule         (동전 던지기 기준선)

[ 호출하는 곳 ]
    - backtest/engine.py::BacktestEngine.run()에서
      i = 1..N-1 마다 decide(bars[i-1], position.is_flat) 호출

[ 데이터 흐름 ]
    bars[i-1] + is_flat → decide() → Action
    엔진은 상태와 맞지 않는 Action(무포지션에서 CLOSE 등)을 무시한다.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any

from trading_sim.core.data_provider import Bar


class Action(Enum):
    """판단 규칙이 반환하는 행동."""
    OPEN = "open"
    CLOSE = "close"
    HOLD = "hold"


class DecisionRule(ABC):
    """매매 판단 규칙 추상 클래스.

    새 규칙을 만들려면 이 클래스를 상속받아 decide()만 구현하면 된다.
    """

    def __init__(self, name: str, params: dict[str, Any] | None = None):
        self.name = name
        self.params = params or {}  # config.yaml 또는 CLI에서 전달된 파라미터

    @abstractmethod
    def decide(self, previous_bar: Bar, is_flat: bool) -> Action:
        """다음 봉 시가에 실행할 행동 결정.

        Args:
            previous_bar: 직전 거래일 봉
            is_flat: 현재 무포지션 여부

        Returns:
            Action
        """
        ...
