"""
Sqrt Price Math - sqrtPriceX96 인코딩/디코딩

Uniswap V3의 가격은 sqrtPriceX96 형식으로 저장됩니다.
sqrtPriceX96 = round(sqrt(price) * 2^96)

제곱근은 fixed_point.sqrt (Newton-Raphson, 소수점 18자리)를 사용하므로
float math.sqrt와 달리 어떤 구현에서도 같은 정수가 나옵니다.

References:
- Uniswap V3 Core: contracts/libraries/SqrtPriceMath.sol
"""

from decimal import Decimal

from ..constants import Q96
from ..exceptions import DomainError
from . import fixed_point
from .fixed_point import Number


def encode_sqrt_price_x96(price: Number) -> int:
    """가격을 sqrtPriceX96 (Q64.96)으로 인코딩

    sqrtPriceX96 = round(sqrt(price) * 2^96)

    Args:
        price: 가격 (0 이상, 토큰 최소 단위 기준 비율)

    Returns:
        sqrtPriceX96 정수

    Raises:
        DomainError: 음수 가격
    """
    return fixed_point.round_to_int(fixed_point.mul(fixed_point.sqrt(price), Q96))


def decode_sqrt_price_x96(sqrt_price_x96: int) -> Decimal:
    """sqrtPriceX96을 가격으로 디코딩

    price = (sqrtPriceX96 / 2^96)^2
    """
    if sqrt_price_x96 < 0:
        raise DomainError(f"sqrtPriceX96은 음수일 수 없습니다: {sqrt_price_x96}")

    ratio = fixed_point.div(sqrt_price_x96, Q96)
    return fixed_point.mul(ratio, ratio)


def price_to_sqrt_price_x96(
    price: Number,
    decimal0: int = 18,
    decimal1: int = 18
) -> int:
    """Human-readable 가격을 sqrtPriceX96으로 변환

    sqrtPriceX96 = sqrt(price * 10^decimal0 / 10^decimal1) * 2^96

    Args:
        price: 가격 (양수)
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        sqrtPriceX96 값

    Raises:
        DomainError: 양수가 아닌 가격, 음수 decimals
    """
    if fixed_point.to_decimal(price) <= 0:
        raise DomainError(f"가격은 양수여야 합니다: {price}")

    token0 = fixed_point.mul(price, fixed_point.pow10(decimal0))
    token1 = fixed_point.pow10(decimal1)

    return encode_sqrt_price_x96(fixed_point.div(token0, token1))


def sqrt_price_x96_to_price(
    sqrt_price_x96: int,
    decimal0: int = 18,
    decimal1: int = 18
) -> float:
    """sqrtPriceX96을 human-readable 가격으로 변환

    price_to_sqrt_price_x96의 역변환:
        price = (sqrtPriceX96 / 2^96)^2 * 10^decimal1 / 10^decimal0

    Args:
        sqrt_price_x96: sqrtPriceX96 값
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        가격 (float, 표시용)
    """
    raw = decode_sqrt_price_x96(sqrt_price_x96)
    scaled = fixed_point.div(
        fixed_point.mul(raw, fixed_point.pow10(decimal1)),
        fixed_point.pow10(decimal0)
    )
    return float(scaled)
