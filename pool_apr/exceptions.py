"""
Pool APR 계산 오류

모든 오류는 순수 입력에서 결정적으로 발생하므로 재시도 대상이 아닙니다.
랭킹 파이프라인은 오류가 난 풀만 제외하고 나머지 풀을 계속 처리합니다.
"""


class PoolMathError(ValueError):
    """수학 계층 오류의 기본 클래스"""
    pass


class DomainError(PoolMathError):
    """정의역 밖 입력 (음수 제곱근, 양수가 아닌 가격, 음수 decimals)"""
    pass


class RangeError(PoolMathError):
    """폭이 0이거나 뒤집힌 가격 범위 (0으로 나누기)"""
    pass


class ConvergenceError(PoolMathError):
    """Newton-Raphson 제곱근이 최대 반복 횟수 안에 수렴하지 않음"""
    pass
