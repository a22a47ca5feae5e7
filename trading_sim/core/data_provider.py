"""
일봉 데이터 제공 추상 클래스 정의.

[ 역할 ]
    OHLCV(시가/고가/저가/종가/수정종가/거래량) 일봉 목록을 제공하는 인터페이스.
    데이터 소스(파일, 합성 데이터 등)에 독립적으로 백테스트에 데이터 공급.

[ 구현체 ]
    - data/csv_provider.py::CsvDataProvider  (CSV 파일 기반)

[ 호출하는 곳 ]
    - run_backtest.py에서 load()로 Bar 목록을 받아 엔진에 전달
    - data/price_series.py::generate_sample_bars()도 같은 Bar를 생성
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from pathlib import Path


@dataclass(frozen=True)
class Bar:
    """단일 일봉 데이터. 백테스트 동안 읽기 전용."""
    date: date
    open: float       # 시가 (매매 체결 가격)
    high: float       # 고가
    low: float        # 저가
    close: float      # 종가
    adj_close: float  # 수정 종가
    volume: int       # 거래량 (0 이상)


class DataProvider(ABC):
    """일봉 데이터 제공 추상 클래스."""

    @abstractmethod
    def load(self, path: str | Path) -> list[Bar]:
        """일봉 목록 로드.

        Args:
            path: 데이터 위치

        Returns:
            날짜순 Bar 리스트. 파싱 실패 행은 포함되지 않는다.
        """
        ...
