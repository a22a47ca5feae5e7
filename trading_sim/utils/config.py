"""
설정 관리 모듈.

[ 역할 ]
    config.yaml (또는 .json) 파일을 파싱하여 Config 객체로 변환.
    백테스트 파라미터, 합성 데이터 생성 파라미터, 차트 설정, 로깅 설정을 통합 관리.

[ 설정 파일 구조 (config.yaml) ]
    backtest:         → BacktestConfig (투자금, 규칙 이름, 데이터 경로, 시드)
    generator:        → GeneratorConfig (랜덤워크 파라미터)
    chart:            → ChartConfig (이미지 경로 / 크기 / y축 범위)
    log_level:        → "INFO" / "DEBUG"
    log_dir:          → 로그 디렉토리 경로

[ 호출하는 곳 ]
    - run_backtest.py에서 Config.from_yaml()로 로드
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml


@dataclass
class BacktestConfig:
    """백테스트 설정. config.yaml의 backtest 섹션에 대응."""
    investment: float = 1000.0
    strategy: str = "candle_signal"
    data_path: str = "AAPL.csv"
    seed: int | None = None


@dataclass
class GeneratorConfig:
    """합성 가격 생성 설정. config.yaml의 generator 섹션에 대응."""
    length: int = 10
    mean: float = 0.0
    std_dev: float = 1.0
    start_price: float = 100.0


@dataclass
class ChartConfig:
    """차트 설정. config.yaml의 chart 섹션에 대응."""
    output_path: str = "random.png"
    width: int = 600
    height: int = 400
    y_min: float = -200.0
    y_max: float = 200.0


@dataclass
class Config:
    """전체 설정. from_yaml() 또는 from_json()으로 파일에서 로드."""
    backtest: BacktestConfig = field(default_factory=BacktestConfig)
    generator: GeneratorConfig = field(default_factory=GeneratorConfig)
    chart: ChartConfig = field(default_factory=ChartConfig)
    log_level: str = "INFO"
    log_dir: str = "logs"

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """YAML 파일에서 설정 로드."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls._from_dict(data or {})

    @classmethod
    def from_json(cls, path: str | Path) -> "Config":
        """JSON 파일에서 설정 로드."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict[str, Any]) -> "Config":
        """딕셔너리에서 Config 생성. 알 수 없는 키는 무시."""
        backtest_data = data.get("backtest") or {}
        generator_data = data.get("generator") or {}
        chart_data = data.get("chart") or {}

        backtest = BacktestConfig(**{
            k: v for k, v in backtest_data.items()
            if k in BacktestConfig.__dataclass_fields__
        })
        generator = GeneratorConfig(**{
            k: v for k, v in generator_data.items()
            if k in GeneratorConfig.__dataclass_fields__
        })
        chart = ChartConfig(**{
            k: v for k, v in chart_data.items()
            if k in ChartConfig.__dataclass_fields__
        })

        return cls(
            backtest=backtest,
            generator=generator,
            chart=chart,
            log_level=data.get("log_level", "INFO"),
            log_dir=data.get("log_dir", "logs"),
        )

    def to_dict(self) -> dict[str, Any]:
        """딕셔너리로 변환."""
        from dataclasses import asdict
        return asdict(self)

    def save_yaml(self, path: str | Path) -> None:
        """YAML 파일로 저장."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(self.to_dict(), f, allow_unicode=True, default_flow_style=False)
