"""
누적 수익 곡선 차트 모듈.

[ 역할 ]
    백테스트 결과의 누적 손익을 봉 인덱스 대비 파란 선 하나로 그려 PNG로 저장.
    축 범위는 고정 (x: 0 ~ 봉 수, y: y_min ~ y_max).

[ 실패 처리 ]
    파일 쓰기/인코딩 실패는 RenderingFailure로 보고한다.
    이미 계산된 백테스트 결과에는 영향 없음.

[ 호출하는 곳 ]
    - run_backtest.py (--plot 옵션 사용 시)
"""

import logging
from pathlib import Path
from typing import Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from trading_sim.core.exceptions import InvalidParameter, RenderingFailure  # noqa: E402

logger = logging.getLogger("trading_sim.report")

DPI = 100


def render_profit_chart(
    title: str,
    x_values: Sequence[float],
    y_values: Sequence[float],
    output_path: str | Path,
    width: int = 600,
    height: int = 400,
    y_min: float = -200.0,
    y_max: float = 200.0,
) -> Path:
    """누적 수익 곡선 렌더링.

    Args:
        title: 차트 제목
        x_values: 봉 인덱스
        y_values: 누적 손익 (x_values와 같은 길이)
        output_path: 저장할 이미지 경로
        width, height: 픽셀 크기
        y_min, y_max: y축 고정 범위

    Returns:
        저장된 파일 경로

    Raises:
        InvalidParameter: 시계열 길이 불일치
        RenderingFailure: 파일 저장 실패
    """
    if len(x_values) != len(y_values):
        raise InvalidParameter(f"x/y 길이 불일치: {len(x_values)} != {len(y_values)}")

    output_path = Path(output_path)
    fig, ax = plt.subplots(figsize=(width / DPI, height / DPI), dpi=DPI)
    try:
        ax.plot(x_values, y_values, color="blue")
        ax.set_xlim(0, max(len(x_values), 1))
        ax.set_ylim(y_min, y_max)
        ax.set_title(title)
        ax.grid(True)
        fig.tight_layout()
        fig.savefig(output_path, dpi=DPI)
    except (OSError, ValueError) as e:
        raise RenderingFailure(f"차트 저장 실패: {output_path} ({e})") from e
    finally:
        plt.close(fig)

    logger.info(f"차트 저장: {output_path}")
    return output_path
