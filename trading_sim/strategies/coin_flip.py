"""
동전 던지기 규칙 구현.

[ 역할 ]
    core/trading_strategy.py::DecisionRule의 구현체.
    전략 성과 비교를 위한 무작위 기준선(null model).

[ 판단 흐름 ]
    매 봉마다 공정한 동전을 한 번 던진다 (상태와 무관하게 항상 1회 추출).
        ├── 앞면 + 무포지션 → OPEN
        ├── 앞면 + 보유 중  → CLOSE
        └── 뒷면           → HOLD

[ 파라미터 ]
    rng:  numpy.random.Generator (주입 시 우선)
    seed: rng가 없을 때 생성기 시드
"""

from typing import Any

import numpy as np

from trading_sim.core.data_provider import Bar
from trading_sim.core.trading_strategy import Action, DecisionRule
from trading_sim.strategies import register


@register("coin_flip")
class CoinFlipRule(DecisionRule):
    """동전 던지기 규칙."""

    def __init__(self, params: dict[str, Any] | None = None):
        super().__init__(name="coin_flip", params=params)
        rng = self.params.get("rng")
        self.rng: np.random.Generator = rng if rng is not None else np.random.default_rng(self.params.get("seed"))

    def flip(self) -> bool:
        return bool(self.rng.integers(0, 2))

    def decide(self, previous_bar: Bar, is_flat: bool) -> Action:
        if not self.flip():
            return Action.HOLD
        return Action.OPEN if is_flat else Action.CLOSE
