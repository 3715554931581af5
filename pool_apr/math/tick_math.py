"""
Tick Math - Tick ↔ Price 변환

틱 인덱스와 human-readable 가격 간 변환. 틱 → 가격 변환은 토큰 단위 수량을
Q96으로 인코딩한 뒤 다시 조합하여 온체인 표현과 같은 지점에서 반올림합니다.

References:
- Uniswap V3 Core: contracts/libraries/TickMath.sol
- 백서 Section 6.1: Ticks and Tick Spacing

핵심 공식:
    price = 1.0001^tick
    tick = log(sqrtPrice) / log(sqrt(1.0001))

price_from_tick과 tick_from_price는 float log/pow를 사용하므로 정확한 역함수가
아닙니다. 왕복 오차는 1틱 이내입니다.
"""

import math

from ..constants import Q96, MIN_TICK, MAX_TICK, TICK_BASE, TICK_SPACINGS
from ..exceptions import DomainError
from . import fixed_point
from .sqrt_price_math import encode_sqrt_price_x96


def price_from_tick(tick: int, decimal0: int = 18, decimal1: int = 18) -> float:
    """틱을 human-readable 가격으로 변환

    sqrtPrice = sqrt(1.0001)^tick * 2^96
    L2 = enc(10^decimal0) * enc(10^decimal1) / 2^96
    price = (L2 * 2^96 / sqrtPrice / 2^96 / 10^decimal0)^2

    Args:
        tick: 틱 인덱스 (-887272 ~ 887272)
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        가격 (float, 표시용)

    Raises:
        DomainError: 음수 decimals, 유효 범위를 벗어난 틱

    Example:
        >>> price_from_tick(0, 18, 18)
        1.0
    """
    if tick < MIN_TICK or tick > MAX_TICK:
        raise DomainError(f"틱이 유효 범위를 벗어났습니다: {tick} (범위: {MIN_TICK} ~ {MAX_TICK})")

    scale0 = fixed_point.pow10(decimal0)
    scale1 = fixed_point.pow10(decimal1)

    # 틱 → sqrtPrice 는 float (표시 정밀도)
    sqrt_price = fixed_point.mul(math.pow(math.sqrt(TICK_BASE), tick), Q96)

    l2 = fixed_point.div(encode_sqrt_price_x96(scale0) * encode_sqrt_price_x96(scale1), Q96)
    price = fixed_point.div(
        fixed_point.div(fixed_point.div(fixed_point.mul(l2, Q96), sqrt_price), Q96),
        scale0
    )
    return float(fixed_point.mul(price, price))


def tick_from_price(price: float, decimal0: int = 18, decimal1: int = 18) -> float:
    """Human-readable 가격을 (소수) 틱으로 변환

    tick = log(sqrt(10^decimal1 / (price * 10^decimal0))) / log(sqrt(1.0001))
         = ln(10^decimal1 / (price * 10^decimal0)) / ln(1.0001)

    비율을 Q96으로 인코딩하지 않고 Decimal 그대로 로그를 취하므로
    MIN_TICK/MAX_TICK 근처의 아주 작은 비율도 정밀도를 잃지 않습니다.

    Args:
        price: 가격 (양수)
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        틱 (반올림하지 않은 float)

    Raises:
        DomainError: 양수가 아닌 가격, 음수 decimals
    """
    if price <= 0:
        raise DomainError(f"가격은 양수여야 합니다: {price}")

    token0 = fixed_point.mul(price, fixed_point.pow10(decimal0))
    token1 = fixed_point.pow10(decimal1)

    ratio = fixed_point.div(token1, token0)
    return float(fixed_point.ln(ratio)) / math.log(TICK_BASE)


def round_tick_to_spacing(tick: int, tick_spacing: int) -> int:
    """틱을 가장 가까운 유효 틱(tick_spacing 배수)으로 반올림

    정확히 중간이면 위쪽 틱을 선택합니다.
    """
    lower = (tick // tick_spacing) * tick_spacing
    upper = lower + tick_spacing

    if tick - lower < upper - tick:
        return lower
    return upper


def get_tick_spacing_for_fee(fee_tier: int) -> int:
    """수수료 티어에 해당하는 틱 간격 반환

    Raises:
        ValueError: 지원하지 않는 수수료 티어
    """
    if fee_tier not in TICK_SPACINGS:
        raise ValueError(f"지원하지 않는 수수료 티어: {fee_tier}")
    return TICK_SPACINGS[fee_tier]
