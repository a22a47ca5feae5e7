"""
=============================================================================
일봉 백테스트 시뮬레이터 (Trading Simulator)
=============================================================================

[ 시스템 전체 구조 ]

    run_backtest.py (진입점)
         │
         ├── utils/config.py          ← config.yaml 설정 로드
         ├── utils/logger.py          ← 로깅
         │
         ├── data/csv_provider.py     ← CSV → Bar 목록 (파싱 실패 행은 버림)
         ├── data/price_series.py     ← 가우시안 랜덤워크 가격 생성
         │
         ├── strategies/              ← 매매 판단 규칙 (OPEN/CLOSE/HOLD)
         │     ├── candle_signal.py   ← 전일 양봉 매수 / 음봉 매도
         │     └── coin_flip.py       ← 동전 던지기 (비교 기준선)
         │
         ├── backtest/engine.py       ← 포지션 재생 엔진
         │     ├── data/position.py   ← 포지션 상태 / 거래 기록
         │     └── backtest/metrics.py ← 성과 지표 계산
         │
         └── report/profit_chart.py   ← 누적 수익 곡선 PNG 출력


[ 핵심 추상 클래스 (core/) ]

    core/data_provider.py    → data/csv_provider.py::CsvDataProvider
    core/trading_strategy.py → strategies/*.py (DecisionRule 구현체)
    core/exceptions.py       → InvalidParameter / MalformedInput / RenderingFailure


[ 데이터 흐름 ]

    1. DataProvider가 Bar 목록 제공 (또는 price_series로 합성)
    2. BacktestEngine이 i = 1..N-1 마다 DecisionRule(bar[i-1], 무포지션 여부) 호출
    3. OPEN이면 bar[i].open에 전액 매수, CLOSE면 전량 매도 후 손익 실현
    4. 누적 실현손익 / 분산 시계열 반환
    5. metrics.py가 최종 손익 / 분산 비율 등 성과 지표 계산
    6. profit_chart.py가 누적 수익 곡선 렌더링
"""
