"""
포지션 관리 모듈.

[ 역할 ]
    단일 백테스트 실행 동안의 보유 상태(무포지션 / 보유)와 거래 기록을 관리.
    포지션은 항상 전량 진입, 전량 청산만 한다 (분할 매매 없음).

[ 주요 클래스 ]
    Position    - 보유 수량(소수 허용)과 진입 가격
    TradeRecord - 개별 거래 내역 (진입/청산, 청산 시 실현 손익)

[ 호출하는 곳 ]
    - backtest/engine.py::BacktestEngine.run()이 실행마다 새 Position 생성
    - backtest/metrics.py에서 TradeRecord 목록으로 거래 통계 계산
"""

from dataclasses import dataclass
from datetime import date


@dataclass
class Position:
    """포지션 상태. shares == 0.0 이면 무포지션이며 entry_price는 의미 없음."""
    shares: float = 0.0       # 보유 수량 (소수 허용)
    entry_price: float = 0.0  # 진입 가격

    @property
    def is_flat(self) -> bool:
        return self.shares == 0.0

    def open(self, investment: float, price: float) -> None:
        """투자금 전액으로 진입. price는 0이 아니어야 한다."""
        self.shares = investment / price
        self.entry_price = price

    def close(self, price: float) -> float:
        """전량 청산. 실현 손익 반환."""
        pnl = self.shares * (price - self.entry_price)
        self.reset()
        return pnl

    def reset(self) -> None:
        """포지션 초기화."""
        self.shares = 0.0
        self.entry_price = 0.0


@dataclass(frozen=True)
class TradeRecord:
    """개별 거래 기록. metrics.py에서 승률/수익 계산에 사용됨."""
    index: int          # 체결된 봉 인덱스
    date: date
    side: str           # "open" or "close"
    shares: float
    price: float        # 체결 가격 (해당 봉 시가)
    pnl: float = 0.0    # 실현 손익 (청산 시에만)
