"""
시뮬레이터 예외 정의.

[ 분류 ]
    InvalidParameter  - 음수 투자금, 0 이하 표준편차 등 도메인 밖 입력.
                        상태 변경 전에 즉시 발생.
    MalformedInput    - CSV 개별 행 파싱 실패. 로더 내부에서 잡아서 행을 버림.
    RenderingFailure  - 차트 파일 쓰기/인코딩 실패. 이미 계산된 결과는 유효.
"""


class InvalidParameter(ValueError):
    """입력 파라미터가 허용 범위를 벗어남."""


class MalformedInput(ValueError):
    """파싱할 수 없는 입력 행."""


class RenderingFailure(RuntimeError):
    """차트 렌더링 실패."""
