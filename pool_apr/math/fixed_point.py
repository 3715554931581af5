"""
Fixed-Point Decimal Engine - 임의 정밀도 Decimal 연산

Q96 왕복이 필요한 모든 수량(sqrtPriceX96, 토큰 최소 단위, 유동성)은
이 모듈의 Decimal 연산을 거칩니다. 가격/APR 같은 표시용 값은 float를 사용하며
두 영역은 to_decimal() / float() 경계에서만 변환됩니다.

제곱근은 라이브러리 내장 sqrt 대신 Newton-Raphson 반복으로 계산하여
구현 간 동일한 결과를 보장합니다.

    y₀ = x
    yₙ₊₁ = (x / yₙ + yₙ) / 2
    |yₙ₊₁ - yₙ| 가 SQRT_PRECISION 자리에서 0이 되면 종료

결과는 소수점 SQRT_PRECISION(18)자리로 ROUND_HALF_UP 반올림합니다.
"""

import decimal
from decimal import Decimal, ROUND_HALF_EVEN, ROUND_HALF_UP, localcontext
from typing import Union

from ..constants import DECIMAL_CONTEXT_PRECISION, MAX_SQRT_ITERATIONS, SQRT_PRECISION
from ..exceptions import ConvergenceError, DomainError, RangeError


Number = Union[int, float, str, Decimal]

# 호출자의 전역 decimal context를 건드리지 않도록 전용 context 사용
ENGINE_CONTEXT = decimal.Context(
    prec=DECIMAL_CONTEXT_PRECISION,
    rounding=ROUND_HALF_EVEN,
    traps=[decimal.InvalidOperation, decimal.DivisionByZero, decimal.Overflow],
)

# 제곱근 context 여유 자릿수
SQRT_GUARD_DIGITS = 10


def to_decimal(value: Number) -> Decimal:
    """숫자를 Decimal로 변환

    float는 repr()을 거쳐 변환하므로 0.1은 이진 전개가 아닌 0.1로 유지됩니다.

    Raises:
        DomainError: NaN, 무한대, 숫자가 아닌 문자열
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(value)
        except decimal.InvalidOperation:
            raise DomainError(f"숫자로 변환할 수 없습니다: {value!r}")

    if not result.is_finite():
        raise DomainError(f"유한한 숫자가 아닙니다: {value!r}")
    return result


def add(a: Number, b: Number) -> Decimal:
    with localcontext(ENGINE_CONTEXT):
        return to_decimal(a) + to_decimal(b)


def sub(a: Number, b: Number) -> Decimal:
    with localcontext(ENGINE_CONTEXT):
        return to_decimal(a) - to_decimal(b)


def mul(a: Number, b: Number) -> Decimal:
    with localcontext(ENGINE_CONTEXT):
        return to_decimal(a) * to_decimal(b)


def div(a: Number, b: Number) -> Decimal:
    """a / b

    Raises:
        RangeError: b == 0
    """
    divisor = to_decimal(b)
    if divisor == 0:
        raise RangeError(f"0으로 나눌 수 없습니다: {a} / 0")

    with localcontext(ENGINE_CONTEXT):
        return to_decimal(a) / divisor


def power(base: Number, exponent: Number) -> Decimal:
    """base ** exponent

    Raises:
        DomainError: 음수 밑에 정수가 아닌 지수, 0의 음수 거듭제곱
    """
    with localcontext(ENGINE_CONTEXT):
        try:
            return to_decimal(base) ** to_decimal(exponent)
        except (decimal.InvalidOperation, decimal.DivisionByZero):
            raise DomainError(f"거듭제곱을 정의할 수 없습니다: {base} ** {exponent}")


def pow10(exponent: int) -> int:
    """10^exponent (토큰 decimals 스케일)

    Raises:
        DomainError: 음수 지수 (음수 decimals)
    """
    if exponent < 0:
        raise DomainError(f"decimals는 음수일 수 없습니다: {exponent}")
    return 10 ** exponent


def sqrt(
    value: Number,
    precision: int = SQRT_PRECISION,
    max_iterations: int = MAX_SQRT_ITERATIONS
) -> Decimal:
    """Newton-Raphson 제곱근

    Args:
        value: 피제곱근 (0 이상)
        precision: 결과 소수점 자릿수 (기본 18)
        max_iterations: 최대 반복 횟수

    Returns:
        소수점 precision 자리로 반올림된 제곱근

    Raises:
        DomainError: 음수 입력
        ConvergenceError: max_iterations 안에 수렴하지 않은 경우

    Example:
        >>> sqrt(2)
        Decimal('1.414213562373095049')
    """
    x = to_decimal(value)
    if x < 0:
        raise DomainError(f"음수의 제곱근은 정의되지 않습니다: {value}")

    quantum = Decimal(1).scaleb(-precision)

    # 결과의 정수부 + precision 자리가 모두 유효숫자에 들어가야 quantize 가능
    context = ENGINE_CONTEXT.copy()
    context.prec = max(
        DECIMAL_CONTEXT_PRECISION,
        max(x.adjusted(), 0) // 2 + 1 + precision + SQRT_GUARD_DIGITS
    )

    with localcontext(context):
        if x == 0:
            return Decimal(0).quantize(quantum)

        # |z - y| < quantum / 2  <=>  precision 자리에서 ROUND_HALF_UP 하면 0
        half_quantum = quantum / 2

        y = x
        for _ in range(max_iterations):
            z = (x / y + y) / 2
            if abs(z - y) < half_quantum:
                return z.quantize(quantum, rounding=ROUND_HALF_UP)
            y = z

    raise ConvergenceError(
        f"제곱근이 {max_iterations}회 반복 안에 수렴하지 않았습니다: {value}"
    )


def ln(value: Number) -> Decimal:
    """자연로그 (Decimal, float 범위를 넘는 값도 처리)

    Raises:
        DomainError: 0 이하의 입력
    """
    x = to_decimal(value)
    if x <= 0:
        raise DomainError(f"로그는 양수에서만 정의됩니다: {value}")

    with localcontext(ENGINE_CONTEXT):
        return x.ln()


def round_to_int(value: Number, rounding: str = ROUND_HALF_UP) -> int:
    """Decimal을 정수로 반올림"""
    with localcontext(ENGINE_CONTEXT):
        return int(to_decimal(value).to_integral_value(rounding=rounding))
