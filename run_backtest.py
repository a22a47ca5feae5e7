"""
백테스트 실행 스크립트 (시스템 진입점).

[ 사용법 ]
    # 기본 실행: 합성 가격 경로 10개 출력 (평균 0, 표준편차 1)
    python run_backtest.py

    # CSV 데이터로 전략 실행
    python run_backtest.py --data AAPL.csv
    python run_backtest.py --data AAPL.csv --strategy coin_flip --seed 42

    # 합성 데이터로 실행
    python run_backtest.py --sample --length 500

    # 전략 vs 동전 던지기 비교
    python run_backtest.py --data AAPL.csv --compare

    # 누적 손익 차트 저장
    python run_backtest.py --data AAPL.csv --plot profit.png

    # 거래 내역 JSON 저장 / 현재 설정 저장
    python run_backtest.py --sample --report report.json --save-config my_config.yaml

    # 등록된 규칙 목록 확인
    python run_backtest.py --list
"""

import argparse
import json
import sys
from pathlib import Path

from trading_sim.backtest.engine import BacktestEngine, RandomBacktester, SignalBacktester
from trading_sim.backtest.metrics import BacktestMetrics
from trading_sim.core.data_provider import Bar
from trading_sim.core.exceptions import RenderingFailure
from trading_sim.data.csv_provider import CsvDataProvider
from trading_sim.data.price_series import generate_price_series, generate_sample_bars
from trading_sim.report.profit_chart import render_profit_chart
from trading_sim.strategies import create_strategy, describe_strategies
from trading_sim.utils.config import Config
from trading_sim.utils.logger import setup_logger


def load_bars(config: Config, args: argparse.Namespace) -> list[Bar]:
    """데이터 소스에서 일봉 로드."""
    if args.sample:
        gen = config.generator
        print(f"샘플 데이터 생성 중... ({args.length or gen.length}봉)")
        return generate_sample_bars(
            length=args.length or gen.length,
            start_price=gen.start_price,
            mean=gen.mean,
            std_dev=gen.std_dev,
            seed=config.backtest.seed,
        )

    path = Path(args.data or config.backtest.data_path)
    print(f"{path} 로드 중...")
    bars = CsvDataProvider().load(path)
    print(f"  {len(bars)}봉 로드")
    return bars


def build_engine(name: str, seed: int | None) -> BacktestEngine:
    """규칙 이름으로 엔진 생성."""
    if name == "candle_signal":
        return SignalBacktester()
    if name == "coin_flip":
        return RandomBacktester(seed=seed)
    return BacktestEngine(create_strategy(name))


def print_comparison(results: dict[str, BacktestMetrics]) -> None:
    """여러 규칙 비교 결과 출력."""
    names = list(results.keys())
    col_width = max(16, max(len(n) for n in names) + 2)

    print(f"\n{'=' * (20 + col_width * len(names))}")
    print("전략 비교 결과")
    print(f"{'=' * (20 + col_width * len(names))}")

    header = f"{'':>20}" + "".join(f"{n:>{col_width}}" for n in names)
    print(header)
    print("-" * len(header))

    rows = [
        ("최종 누적 손익", lambda m: f"{m.final_profit:,.2f}"),
        ("최종 분산", lambda m: f"{m.final_dispersion:,.2f}"),
        ("손익/분산 비율", lambda m: f"{m.profit_to_dispersion:.6f}"),
        ("최대 낙폭", lambda m: f"{m.max_drawdown:,.2f}"),
        ("총 청산 횟수", lambda m: f"{m.total_trades}"),
        ("승률", lambda m: f"{m.win_rate:.1f}%"),
        ("수익 팩터", lambda m: f"{m.profit_factor:.2f}"),
    ]

    for label, fmt in rows:
        row = f"{label:>20}" + "".join(f"{fmt(results[n]):>{col_width}}" for n in names)
        print(row)

    print(f"{'=' * (20 + col_width * len(names))}")


def plot(engine: BacktestEngine, config: Config, output_path: str) -> bool:
    """누적 손익 차트 저장. 실패해도 백테스트 결과는 유지."""
    profits = engine.profit_series
    chart = config.chart
    try:
        render_profit_chart(
            title=engine.rule.name,
            x_values=list(range(len(profits))),
            y_values=profits,
            output_path=output_path,
            width=chart.width,
            height=chart.height,
            y_min=chart.y_min,
            y_max=chart.y_max,
        )
    except RenderingFailure as e:
        print(f"오류: {e}")
        return False
    print(f"차트 저장: {output_path}")
    return True


def save_report(engines: list[BacktestEngine], output_path: str) -> None:
    """규칙별 리포트(지표 + 거래 내역)를 JSON으로 저장."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    reports = {engine.rule.name: engine.generate_report() for engine in engines}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(reports, f, ensure_ascii=False, indent=2)
    print(f"리포트 저장: {path}")


def main() -> int:
    parser = argparse.ArgumentParser(description="일봉 백테스트 시뮬레이터")
    parser.add_argument("--config", type=str, default="config.yaml", help="설정 파일 경로")
    parser.add_argument("--data", type=str, default=None, help="일봉 CSV 파일 경로")
    parser.add_argument("--sample", action="store_true", help="합성 데이터로 실행")
    parser.add_argument("--length", type=int, default=None, help="합성 데이터 봉 수")
    parser.add_argument("--strategy", type=str, default=None, help="규칙 이름 (config.yaml 대신 지정)")
    parser.add_argument("--investment", type=float, default=None, help="진입 시 투자금")
    parser.add_argument("--seed", type=int, default=None, help="난수 시드")
    parser.add_argument("--compare", action="store_true", help="candle_signal vs coin_flip 비교")
    parser.add_argument("--plot", type=str, nargs="?", const="", default=None, metavar="PATH",
                        help="누적 손익 차트 저장 (경로 생략 시 config의 chart.output_path)")
    parser.add_argument("--report", type=str, default=None, metavar="PATH", help="리포트 JSON 저장 경로")
    parser.add_argument("--save-config", type=str, default=None, metavar="PATH",
                        help="CLI 오버라이드가 반영된 설정을 YAML로 저장")
    parser.add_argument("--list", action="store_true", help="등록된 규칙 목록 출력")
    args = parser.parse_args()

    if args.list:
        print("등록된 전략:")
        for name, description in describe_strategies().items():
            print(f"  - {name}: {description}")
        return 0

    config_path = Path(args.config)
    if config_path.exists():
        config = Config.from_yaml(config_path)
    else:
        config = Config()

    if args.seed is not None:
        config.backtest.seed = args.seed
    if args.investment is not None:
        config.backtest.investment = args.investment
    if args.strategy is not None:
        config.backtest.strategy = args.strategy
    if args.data is not None:
        config.backtest.data_path = args.data

    if args.save_config:
        config.save_yaml(args.save_config)
        print(f"설정 저장: {args.save_config}")

    setup_logger(level=config.log_level, log_dir=config.log_dir)

    # ─── 기본 실행: 합성 가격 경로 출력 ─────────────────────────────────
    if not (args.data or args.sample or args.compare or args.strategy):
        gen = config.generator
        print(generate_price_series(gen.length, gen.mean, gen.std_dev, seed=config.backtest.seed))
        return 0

    investment = config.backtest.investment

    try:
        bars = load_bars(config, args)

        # ─── 비교 모드 ───────────────────────────────────────────────────
        if args.compare:
            engines = [SignalBacktester(), RandomBacktester(seed=config.backtest.seed)]
            for engine in engines:
                engine.run(bars, investment)
            print_comparison({engine.rule.name: engine.metrics for engine in engines})
        # ─── 단일 실행 모드 ─────────────────────────────────────────────
        else:
            engine = build_engine(config.backtest.strategy, config.backtest.seed)
            engine.run(bars, investment)
            engines = [engine]
            print(f"\n[전략: {engine.rule.name}]")
            print(engine.metrics.summary())
    except FileNotFoundError as e:
        print(f"오류: 데이터 파일을 열 수 없습니다 ({e})")
        return 2
    except ValueError as e:  # InvalidParameter, 알 수 없는 규칙 이름, 빈 CSV
        print(f"오류: {e}")
        return 2

    if args.report:
        save_report(engines, args.report)

    ok = True
    if args.plot is not None:
        path = Path(args.plot or config.chart.output_path)
        for engine in engines:
            if len(engines) > 1:
                target = path.with_name(f"{path.stem}_{engine.rule.name}{path.suffix}")
            else:
                target = path
            ok = plot(engine, config, str(target)) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
