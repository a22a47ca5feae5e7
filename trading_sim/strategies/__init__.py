"""
매매 판단 규칙 모듈.

[ 규칙 등록 방식 ]
    @register("규칙이름") 데코레이터를 붙이면 STRATEGY_REGISTRY에 자동 등록.
    run_backtest.py에서 이름만으로 규칙 클래스를 찾아 생성할 수 있다.
    같은 이름을 두 번 등록하거나 DecisionRule이 아닌 클래스를 등록하면 실패.

[ 새 규칙 추가 방법 ]
    1. 이 디렉토리에 새 .py 파일 생성
    2. DecisionRule을 상속받는 클래스 작성 (클래스 docstring 첫 줄이 --list 설명)
    3. @register("이름") 데코레이터 추가
    4. config.yaml의 backtest.strategy 또는 --strategy로 지정
"""

import pkgutil
from importlib import import_module
from typing import Any

from trading_sim.core.trading_strategy import DecisionRule

# 규칙 이름 → 규칙 클래스 매핑
STRATEGY_REGISTRY: dict[str, type[DecisionRule]] = {}


def register(name: str):
    """규칙 클래스를 STRATEGY_REGISTRY에 등록하는 데코레이터.

    Raises:
        TypeError: DecisionRule 하위 클래스가 아님
        ValueError: 이미 다른 클래스가 같은 이름으로 등록됨
    """
    def decorator(cls: type[DecisionRule]):
        if not (isinstance(cls, type) and issubclass(cls, DecisionRule)):
            raise TypeError(f"DecisionRule 하위 클래스만 등록할 수 있습니다: {cls!r}")
        existing = STRATEGY_REGISTRY.get(name)
        if existing is not None and existing is not cls:
            raise ValueError(f"이미 등록된 전략 이름: '{name}' ({existing.__name__})")
        STRATEGY_REGISTRY[name] = cls
        return cls
    return decorator


def create_strategy(name: str, params: dict[str, Any] | None = None) -> DecisionRule:
    """이름으로 규칙 인스턴스를 생성.

    Raises:
        ValueError: 등록되지 않은 규칙 이름
    """
    try:
        rule_cls = STRATEGY_REGISTRY[name]
    except KeyError:
        available = ", ".join(list_strategies())
        raise ValueError(f"알 수 없는 전략: '{name}'. 사용 가능: {available}") from None
    return rule_cls(params=params)


def list_strategies() -> list[str]:
    """등록된 규칙 이름 목록 반환."""
    return sorted(STRATEGY_REGISTRY)


def describe_strategies() -> dict[str, str]:
    """규칙 이름 → 클래스 docstring 첫 줄."""
    descriptions = {}
    for name in list_strategies():
        doc = (STRATEGY_REGISTRY[name].__doc__ or "").strip()
        descriptions[name] = doc.splitlines()[0] if doc else ""
    return descriptions


def _auto_discover() -> None:
    """패키지 내 모든 규칙 모듈을 임포트하여 @register가 실행되게 한다."""
    for module in pkgutil.iter_modules(__path__):
        if not module.name.startswith("_"):
            import_module(f"{__name__}.{module.name}")


# 모듈 로드 시 자동 탐색
_auto_discover()
