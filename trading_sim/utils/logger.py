"""
로깅 모듈.

[ 역할 ]
    파일 + 콘솔 로거를 설정. 진입/청산 내역, 차트 저장, 경고 등을 기록.

[ 로그 파일 위치 ]
    {log_dir}/{name}_{YYYYMMDD}.log (예: logs/trading_sim_20240601.log)
    log_dir=None이면 파일을 만들지 않는다.

[ 호출하는 곳 ]
    - run_backtest.py에서 setup_logger() 호출
    - 각 모듈은 logging.getLogger("trading_sim.<영역>") 사용
      (backtest / data / report)
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logger(
    name: str = "trading_sim",
    level: str = "INFO",
    log_dir: str | None = "logs",
    console: bool = True,
) -> logging.Logger:
    """로거 설정. 파일 핸들러(일별) + 콘솔 핸들러 등록.

    이미 핸들러가 있으면 레벨만 갱신하고 그대로 반환.
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # 차트 렌더링 시 matplotlib 폰트 탐색 로그 억제
    logging.getLogger("matplotlib").setLevel(logging.WARNING)

    if logger.handlers:
        return logger

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    if log_dir is not None:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        today = datetime.now().strftime("%Y%m%d")
        file_handler = logging.FileHandler(
            log_path / f"{name}_{today}.log",
            encoding="utf-8",
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger
