import ast
import json
import logging
import sys

import pytest

import run_backtest
from trading_sim.utils.config import Config


@pytest.fixture
def cli(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)

    def invoke(*args):
        monkeypatch.setattr(sys, "argv", ["run_backtest.py", "--config", "missing.yaml", *args])
        return run_backtest.main()
    yield invoke

    # 콘솔 핸들러가 다음 테스트의 캡처 스트림을 쓰도록 초기화
    logger = logging.getLogger("trading_sim")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def test_default_prints_generated_series(cli, capsys):
    assert cli("--seed", "1") == 0
    series = ast.literal_eval(capsys.readouterr().out.strip().splitlines()[-1])
    assert len(series) == 10
    assert series[0] == 0.0


def test_list(cli, capsys):
    assert cli("--list") == 0
    out = capsys.readouterr().out
    assert "candle_signal" in out
    assert "coin_flip" in out


def test_csv_run_with_plot(cli, capsys, tmp_path):
    (tmp_path / "prices.csv").write_text(
        "date,open,high,low,close,adj_close,volume\n"
        "2020-01-02,10,12,9,12,12,100\n"
        "2020-01-03,11,11,9,9,9,100\n"
        "2020-01-06,13,13,13,13,13,100\n"
    )
    assert cli("--data", "prices.csv", "--plot", "profit.png") == 0
    out = capsys.readouterr().out
    assert "181.82" in out
    assert (tmp_path / "profit.png").exists()


def test_compare_on_sample(cli, capsys):
    assert cli("--sample", "--length", "60", "--compare", "--seed", "4") == 0
    out = capsys.readouterr().out
    assert "전략 비교 결과" in out
    assert "candle_signal" in out
    assert "coin_flip" in out


def test_negative_investment(cli, capsys):
    assert cli("--sample", "--investment", "-1") == 2
    assert "investment" in capsys.readouterr().out


def test_plot_failure_keeps_results(cli, capsys):
    assert cli("--sample", "--plot", "missing/dir/profit.png") == 1
    out = capsys.readouterr().out
    assert "백테스트 성과 리포트" in out
    assert "차트 저장 실패" in out


@pytest.mark.parametrize("args", [("--compare",), ("--data", "nope.csv")])
def test_missing_data_file(cli, capsys, args):
    # --compare 단독 실행은 config의 data_path(AAPL.csv)로 떨어진다
    assert cli(*args) == 2
    assert "오류" in capsys.readouterr().out


def test_list_shows_descriptions(cli, capsys):
    assert cli("--list") == 0
    out = capsys.readouterr().out
    assert "candle_signal: 전일 캔들 방향 규칙." in out
    assert "coin_flip: 동전 던지기 규칙." in out


def test_report_written(cli, tmp_path):
    assert cli("--sample", "--length", "40", "--compare", "--seed", "2", "--report", "out/report.json") == 0
    report = json.loads((tmp_path / "out" / "report.json").read_text(encoding="utf-8"))
    assert set(report) == {"candle_signal", "coin_flip"}
    for name, entry in report.items():
        assert entry["strategy"] == name
        assert entry["trade_count"] == len(entry["trades"])


def test_save_config_applies_overrides(cli, tmp_path):
    assert cli("--investment", "250", "--seed", "9", "--save-config", "saved.yaml") == 0
    saved = Config.from_yaml(tmp_path / "saved.yaml")
    assert saved.backtest.investment == 250.0
    assert saved.backtest.seed == 9
