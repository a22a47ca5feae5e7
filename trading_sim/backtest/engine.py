"""
백테스팅 엔진 모듈.

[ 역할 ]
    일봉 목록에 판단 규칙을 적용하여 전액 진입 / 전량 청산을 재생하고
    누적 실현손익 시계열과 분산 시계열을 만든다.

[ 실행 흐름 ]
    run(bars, investment) 호출 시:
        1. investment 검증 (음수, NaN, inf면 InvalidParameter, 상태 변경 전)
        2. i = 1..N-1 마다 rule.decide(bars[i-1], position.is_flat)
           → OPEN: bars[i].open에 investment 전액 진입
           → CLOSE: bars[i].open에 전량 청산, 손익/손익 제곱 누적
        3. 분산 = 손익 제곱 누적합 / (i - 1) 기록
        4. (profit_series, dispersion_series) 반환, 거래 기록/지표는 엔진에 보관

[ 분산 통계 ]
    경과 봉 수로 정규화한 실현손익 분산. 표본분산이 아니다.
    i = 1 에서는 분모가 0이므로 누적합이 0.0이면 0.0, 아니면 inf.

[ 의존성 ]
    - core/trading_strategy.py::DecisionRule (판단 규칙 인터페이스)
    - data/position.py::Position, TradeRecord
    - backtest/metrics.py::calculate_metrics() (성과 계산)

[ 호출하는 곳 ]
    - run_backtest.py (진입점)에서 생성 및 실행
"""

import logging
import math
from typing import Any, Sequence

import numpy as np

from trading_sim.backtest.metrics import BacktestMetrics, calculate_metrics
from trading_sim.core.data_provider import Bar
from trading_sim.core.exceptions import InvalidParameter
from trading_sim.core.trading_strategy import Action, DecisionRule
from trading_sim.data.position import Position, TradeRecord
from trading_sim.strategies.candle_signal import CandleSignalRule
from trading_sim.strategies.coin_flip import CoinFlipRule

logger = logging.getLogger("trading_sim.backtest")


def elapsed_bar_dispersion(sum_of_squares: float, index: int) -> float:
    """경과 봉 수로 정규화한 실현손익 분산. index는 1 이상."""
    elapsed = index - 1
    if elapsed == 0:
        return 0.0 if sum_of_squares == 0.0 else math.inf
    return sum_of_squares / elapsed


class BacktestEngine:
    """포지션 재생 엔진. run()으로 시뮬레이션 실행."""

    def __init__(self, rule: DecisionRule):
        self.rule = rule

        # 백테스트 실행 후 채워지는 결과
        self.profit_series: tuple[float, ...] = ()
        self.dispersion_series: tuple[float, ...] = ()
        self.trades: list[TradeRecord] = []
        self.metrics: BacktestMetrics | None = None

    def run(
        self,
        bars: Sequence[Bar],
        investment: float,
    ) -> tuple[tuple[float, ...], tuple[float, ...]]:
        """백테스트 실행.

        Args:
            bars: 날짜순 일봉 목록
            investment: 진입 시마다 사용하는 투자금 (수익은 별도 적립)

        Returns:
            (누적 실현손익 시계열, 분산 시계열). 각각 len(bars)개.

        Raises:
            InvalidParameter: investment가 음수, NaN 또는 inf
        """
        if not (investment >= 0 and math.isfinite(investment)):
            raise InvalidParameter(f"investment는 0 이상의 유한값이어야 합니다: {investment}")

        position = Position()
        trades: list[TradeRecord] = []
        profits: list[float] = [0.0] if bars else []
        dispersions: list[float] = [0.0] if bars else []
        profit = 0.0
        sum_of_squares = 0.0

        for i in range(1, len(bars)):
            bar = bars[i]
            action = self.rule.decide(bars[i - 1], position.is_flat)

            if action == Action.OPEN and position.is_flat:
                if bar.open == 0.0:
                    logger.warning(f"[{bar.date}] 시가 0으로 진입 불가, 건너뜀")
                else:
                    position.open(investment, bar.open)
                    if not position.is_flat:
                        trades.append(TradeRecord(
                            index=i,
                            date=bar.date,
                            side="open",
                            shares=position.shares,
                            price=bar.open,
                        ))
                        logger.debug(f"[{bar.date}] 진입: {position.shares:.4f}주 @ {bar.open:,.2f}")
            elif action == Action.CLOSE and not position.is_flat:
                shares = position.shares
                pnl = position.close(bar.open)
                profit += pnl
                sum_of_squares += pnl ** 2
                trades.append(TradeRecord(
                    index=i,
                    date=bar.date,
                    side="close",
                    shares=shares,
                    price=bar.open,
                    pnl=pnl,
                ))
                logger.debug(f"[{bar.date}] 청산: {shares:.4f}주 @ {bar.open:,.2f} 손익 {pnl:+,.2f}")

            profits.append(profit)
            dispersions.append(elapsed_bar_dispersion(sum_of_squares, i))

        self.profit_series = tuple(profits)
        self.dispersion_series = tuple(dispersions)
        self.trades = trades
        self.metrics = calculate_metrics(self.profit_series, self.dispersion_series, trades)

        logger.info(
            f"[{self.rule.name}] 백테스트 완료: {len(bars)}봉, 청산 {self.metrics.total_trades}회, "
            f"누적 손익 {self.metrics.final_profit:,.2f}"
        )
        return self.profit_series, self.dispersion_series

    def generate_report(self) -> dict[str, Any]:
        """백테스트 리포트 생성."""
        if self.metrics is None:
            return {"error": "백테스트를 먼저 실행하세요."}

        return {
            "strategy": self.rule.name,
            "metrics": self.metrics.to_dict(),
            "trade_count": len(self.trades),
            "trades": [
                {
                    "index": t.index,
                    "date": str(t.date),
                    "side": t.side,
                    "shares": t.shares,
                    "price": t.price,
                    "pnl": t.pnl,
                }
                for t in self.trades
            ],
        }


class SignalBacktester(BacktestEngine):
    """전일 캔들 방향 규칙으로 재생."""

    def __init__(self):
        super().__init__(CandleSignalRule())


class RandomBacktester(BacktestEngine):
    """동전 던지기 규칙으로 재생. 비교 기준선."""

    def __init__(self, rng: np.random.Generator | None = None, seed: int | None = None):
        super().__init__(CoinFlipRule(params={"rng": rng, "seed": seed}))
