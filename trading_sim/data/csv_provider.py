"""
CSV 기반 DataProvider 구현.

[ 역할 ]
    date, open, high, low, close, adj_close, volume 컬럼의 CSV 파일을 읽어
    Bar 목록으로 변환. 파싱에 실패한 행은 보고 없이 버린다.

[ 컬럼명 ]
    소문자 변환 + 공백 → '_' 로 표준화하므로 Yahoo Finance 내보내기
    (Date, Open, ..., Adj Close, Volume)도 그대로 읽힌다.

[ 의존성 ]
    - core/data_provider.py::DataProvider (추상 클래스)

[ 호출하는 곳 ]
    - run_backtest.py (--data 옵션 사용 시)
"""

import logging
from datetime import datetime
from pathlib import Path

import pandas as pd

from trading_sim.core.data_provider import Bar, DataProvider
from trading_sim.core.exceptions import MalformedInput

logger = logging.getLogger("trading_sim.data")

REQUIRED_COLUMNS = ["date", "open", "high", "low", "close", "adj_close", "volume"]
PRICE_COLUMNS = ["open", "high", "low", "close", "adj_close"]


def parse_row(row: dict[str, str]) -> Bar:
    """CSV 한 행을 Bar로 변환.

    Raises:
        MalformedInput: 날짜 형식 오류, 숫자 변환 실패, 음수/소수 거래량
    """
    try:
        bar_date = datetime.strptime(row["date"].strip(), "%Y-%m-%d").date()
        prices = {col: float(row[col]) for col in PRICE_COLUMNS}
        volume = int(row["volume"])
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        raise MalformedInput(f"행 파싱 실패: {row} ({e})") from e

    if volume < 0:
        raise MalformedInput(f"음수 거래량: {volume}")

    return Bar(date=bar_date, volume=volume, **prices)


class CsvDataProvider(DataProvider):
    """CSV 파일 데이터 제공자.

    사용 예:
        provider = CsvDataProvider()
        bars = provider.load("AAPL.csv")
    """

    def load(self, path: str | Path) -> list[Bar]:
        """CSV 파일에서 Bar 목록 로드.

        Raises:
            FileNotFoundError: 파일이 없는 경우
        """
        path = Path(path)
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            on_bad_lines="skip",  # 필드 수가 맞지 않는 행
        )
        df.columns = [str(c).strip().lower().replace(" ", "_") for c in df.columns]

        missing = set(REQUIRED_COLUMNS) - set(df.columns)
        if missing:
            logger.warning(f"{path}: 필수 컬럼 없음 {sorted(missing)}, 모든 행을 버립니다")
            return []

        bars = []
        dropped = 0
        for row in df[REQUIRED_COLUMNS].to_dict(orient="records"):
            try:
                bars.append(parse_row(row))
            except MalformedInput:
                dropped += 1

        logger.debug(f"{path}: {len(bars)}행 로드, {dropped}행 제외")
        return bars
