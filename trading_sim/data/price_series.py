"""
합성 가격 경로 생성 모듈.

[ 역할 ]
    독립 정규분포 증분의 누적합(이산 랜덤워크)으로 가격 경로를 만든다.
    실데이터 대신 실험/테스트용 Bar 목록도 생성.

[ 난수 ]
    numpy.random.Generator를 호출자가 주입한다. 없으면 seed로 새로 만들고,
    seed도 없으면 매 호출마다 다른 결과가 나온다.

[ 호출하는 곳 ]
    - run_backtest.py 기본 실행 (10개 경로 출력)
    - run_backtest.py --sample (generate_sample_bars)
"""

import math
from datetime import date

import numpy as np
import pandas as pd

from trading_sim.core.data_provider import Bar
from trading_sim.core.exceptions import InvalidParameter


def _resolve_rng(rng: np.random.Generator | None, seed: int | None) -> np.random.Generator:
    if rng is not None:
        return rng
    return np.random.default_rng(seed)


def generate_price_series(
    length: int,
    mean: float,
    std_dev: float,
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> list[float]:
    """가우시안 랜덤워크 생성.

    Args:
        length: 경로 길이 (1 이상)
        mean: 증분 평균
        std_dev: 증분 표준편차 (0 초과)
        rng: 난수 생성기
        seed: rng가 없을 때 사용할 시드

    Returns:
        첫 값이 0.0인 length개 float 리스트

    Raises:
        InvalidParameter: length < 1, mean이 NaN/inf, std_dev <= 0
    """
    if length < 1:
        raise InvalidParameter(f"length는 1 이상이어야 합니다: {length}")
    if not math.isfinite(mean):
        raise InvalidParameter(f"mean은 유한값이어야 합니다: {mean}")
    if not std_dev > 0 or math.isinf(std_dev):
        raise InvalidParameter(f"std_dev는 0보다 커야 합니다: {std_dev}")

    generator = _resolve_rng(rng, seed)
    increments = generator.normal(mean, std_dev, length - 1)
    path = np.concatenate(([0.0], np.cumsum(increments)))
    return [float(v) for v in path]


def generate_sample_bars(
    length: int,
    start_price: float = 100.0,
    mean: float = 0.0,
    std_dev: float = 1.0,
    start_date: date = date(2024, 1, 2),
    rng: np.random.Generator | None = None,
    seed: int | None = None,
) -> list[Bar]:
    """백테스트용 합성 일봉 생성.

    시가는 start_price + 랜덤워크, 종가는 다음 봉 시가(마지막 봉은 한 번 더 추출).
    날짜는 영업일 기준.
    """
    generator = _resolve_rng(rng, seed)
    # 마지막 봉 종가까지 length + 1개 점이 필요
    path = generate_price_series(length + 1, mean, std_dev, rng=generator)
    prices = [start_price + p for p in path]
    dates = pd.bdate_range(start=start_date, periods=length)

    bars = []
    for i, d in enumerate(dates):
        open_price = prices[i]
        close = prices[i + 1]
        bars.append(Bar(
            date=d.date(),
            open=open_price,
            high=max(open_price, close),
            low=min(open_price, close),
            close=close,
            adj_close=close,
            volume=int(generator.lognormal(12, 1)),
        ))
    return bars
