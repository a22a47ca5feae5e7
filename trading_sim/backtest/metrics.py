"""
백테스트 성과 지표 계산 모듈.

[ 역할 ]
    백테스트 결과(누적 손익 / 분산 시계열 + 거래기록)를 받아 성과 지표를 계산.
    calculate_metrics() 함수가 핵심.

[ 계산하는 지표 ]
    - 최종 누적 손익 / 최종 분산
    - 손익 대 분산 비율 (전략과 동전 던지기 기준선 비교용)
    - 누적 손익 기준 최대 낙폭 (금액)
    - 승률, 평균 수익/손실, 수익 팩터
    - 연속 승/패

[ 호출하는 곳 ]
    - backtest/engine.py::BacktestEngine.run() 완료 시 호출
"""

import math
from dataclasses import dataclass
from itertools import groupby
from typing import Any, Sequence

import numpy as np

from trading_sim.data.position import TradeRecord


@dataclass
class BacktestMetrics:
    """백테스트 성과 지표. summary()로 포맷된 리포트 출력 가능."""
    final_profit: float = 0.0           # 최종 누적 실현손익
    final_dispersion: float = 0.0       # 최종 분산 값
    profit_to_dispersion: float = 0.0   # 최종 손익 / 최종 분산
    max_drawdown: float = 0.0           # 누적 손익 고점 대비 최대 하락 (금액)
    win_rate: float = 0.0               # 승률 (%)
    avg_profit: float = 0.0             # 수익 거래 평균 이익
    avg_loss: float = 0.0               # 손실 거래 평균 손실
    profit_factor: float = 0.0          # 총이익 / 총손실 (1 이상이면 수익)
    total_trades: int = 0               # 청산 거래 횟수
    winning_trades: int = 0             # 수익 거래 수
    losing_trades: int = 0              # 손실 거래 수
    max_consecutive_wins: int = 0       # 최대 연속 수익
    max_consecutive_losses: int = 0     # 최대 연속 손실

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리 변환."""
        from dataclasses import asdict
        return asdict(self)

    def summary(self) -> str:
        """성과 요약 문자열."""
        lines = [
            "=" * 50,
            "백테스트 성과 리포트",
            "=" * 50,
            f"최종 누적 손익:  {self.final_profit:>12,.2f}",
            f"최종 분산:       {self.final_dispersion:>12,.2f}",
            f"손익/분산 비율:  {self.profit_to_dispersion:>12.6f}",
            f"최대 낙폭:       {self.max_drawdown:>12,.2f}",
            "-" * 50,
            f"총 청산 횟수:    {self.total_trades:>12d}",
            f"승률:            {self.win_rate:>11.2f}%",
            f"수익 거래:       {self.winning_trades:>12d}",
            f"손실 거래:       {self.losing_trades:>12d}",
            f"평균 수익:       {self.avg_profit:>12,.2f}",
            f"평균 손실:       {self.avg_loss:>12,.2f}",
            f"수익 팩터:       {self.profit_factor:>12.2f}",
            "-" * 50,
            f"최대 연속 수익:  {self.max_consecutive_wins:>12d}",
            f"최대 연속 손실:  {self.max_consecutive_losses:>12d}",
            "=" * 50,
        ]
        return "\n".join(lines)


def calculate_metrics(
    profit_series: Sequence[float],
    dispersion_series: Sequence[float],
    trades: list[TradeRecord],
) -> BacktestMetrics:
    """성과 지표 계산. engine.py에서 백테스트 완료 후 호출됨.

    Args:
        profit_series: 누적 실현손익 시계열
        dispersion_series: 분산 시계열
        trades: 진입+청산 전체 거래 기록
    """
    metrics = BacktestMetrics()

    if not profit_series:
        return metrics

    metrics.final_profit = profit_series[-1]
    metrics.final_dispersion = dispersion_series[-1]

    # 분산이 0 또는 inf면 비율은 0으로 둔다
    if metrics.final_dispersion > 0 and math.isfinite(metrics.final_dispersion):
        metrics.profit_to_dispersion = metrics.final_profit / metrics.final_dispersion

    # ─── 최대 낙폭 (누적 손익은 0에서 시작하므로 금액 기준) ────────────────
    curve = np.asarray(profit_series, dtype=float)
    drawdowns = np.maximum.accumulate(curve) - curve
    metrics.max_drawdown = float(drawdowns.max())

    # ─── 거래 기반 지표 (청산 거래만 분석) ─────────────────────────────────
    pnls = np.array([t.pnl for t in trades if t.side == "close"], dtype=float)
    metrics.total_trades = len(pnls)

    if metrics.total_trades:
        wins = pnls > 0
        gains = pnls[wins]
        losses = pnls[~wins]  # 손익 0 청산은 손실로 분류

        metrics.winning_trades = int(wins.sum())
        metrics.losing_trades = metrics.total_trades - metrics.winning_trades
        metrics.win_rate = metrics.winning_trades / metrics.total_trades * 100
        metrics.avg_profit = float(gains.mean()) if gains.size else 0.0
        metrics.avg_loss = float(losses.mean()) if losses.size else 0.0

        total_loss = abs(float(losses.sum()))
        metrics.profit_factor = float(gains.sum()) / total_loss if total_loss > 0 else float("inf")

        # 연속 승패: 같은 결과가 이어지는 구간 길이의 최댓값
        streaks = [(won, len(list(run))) for won, run in groupby(wins.tolist())]
        metrics.max_consecutive_wins = max((n for won, n in streaks if won), default=0)
        metrics.max_consecutive_losses = max((n for won, n in streaks if not won), default=0)

    return metrics
