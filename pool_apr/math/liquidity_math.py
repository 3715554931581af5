"""
Liquidity Math - 유동성 계산

Uniswap V3의 집중화된 유동성(Concentrated Liquidity) 계산.
특정 가격 범위에서의 토큰 수량과 유동성 간의 변환, 그리고 틱 배열에서
임의 틱의 활성 유동성 계산.

References:
- Uniswap V3 Periphery: contracts/libraries/LiquidityAmounts.sol
- 백서 Section 6.2.1: Concentrated Liquidity

핵심 공식:
    L = Δx * √P_a * √P_b / (√P_b - √P_a)  # token0 기준
    L = Δy / (√P_b - √P_a)                # token1 기준

모든 sqrt 가격은 Q96 정수이며 유동성은 정수(내림)입니다.
"""

from decimal import ROUND_FLOOR
from typing import Sequence, Tuple

from ..constants import Q96
from ..data.types import TickBoundary
from ..exceptions import DomainError, RangeError
from . import fixed_point
from .sqrt_price_math import price_to_sqrt_price_x96


def get_amount0_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount0 변화량 계산

    공식: Δx = L * (√P_b - √P_a) / (√P_a * √P_b)

    Args:
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        liquidity: 유동성
        round_up: True면 올림, False면 내림

    Returns:
        amount0 (token0 수량, 최소 단위)
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    if sqrt_ratio_a_x96 == 0:
        raise DomainError("sqrtPriceX96 하한은 0보다 커야 합니다")

    numerator1 = liquidity << 96
    numerator2 = sqrt_ratio_b_x96 - sqrt_ratio_a_x96

    if round_up:
        return _div_rounding_up(
            _mul_div_rounding_up(numerator1, numerator2, sqrt_ratio_b_x96),
            sqrt_ratio_a_x96
        )
    else:
        return (numerator1 * numerator2 // sqrt_ratio_b_x96) // sqrt_ratio_a_x96


def get_amount1_delta(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int,
    round_up: bool = True
) -> int:
    """유동성에서 amount1 변화량 계산

    공식: Δy = L * (√P_b - √P_a)
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if round_up:
        return _div_rounding_up(liquidity * (sqrt_ratio_b_x96 - sqrt_ratio_a_x96), Q96)
    else:
        return liquidity * (sqrt_ratio_b_x96 - sqrt_ratio_a_x96) // Q96


def get_liquidity_for_amount0(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int
) -> int:
    """amount0에서 유동성 계산

    공식: L = Δx * (√P_a * √P_b / Q96) / (√P_b - √P_a)

    Raises:
        RangeError: 두 sqrt 가격이 같은 경우 (폭 0 범위)
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    _check_width(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    intermediate = sqrt_ratio_a_x96 * sqrt_ratio_b_x96 // Q96
    return amount0 * intermediate // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amount1(
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount1: int
) -> int:
    """amount1에서 유동성 계산

    공식: L = Δy * Q96 / (√P_b - √P_a)

    Raises:
        RangeError: 두 sqrt 가격이 같은 경우 (폭 0 범위)
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    _check_width(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    return amount1 * Q96 // (sqrt_ratio_b_x96 - sqrt_ratio_a_x96)


def get_liquidity_for_amounts(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    amount0: int,
    amount1: int
) -> int:
    """토큰 수량에서 유동성 계산

    현재 가격이 범위 밖이면 한쪽 토큰만으로, 범위 안이면 두 토큰 중
    부족한 쪽이 허용하는 유동성(최소값)으로 결정됩니다.

    Args:
        sqrt_ratio_x96: 현재 sqrtPriceX96
        sqrt_ratio_a_x96: 하한 sqrtPriceX96
        sqrt_ratio_b_x96: 상한 sqrtPriceX96
        amount0: token0 수량 (최소 단위)
        amount1: token1 수량 (최소 단위)

    Returns:
        유동성
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    _check_width(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        # 가격이 범위 아래: token0만 사용
        return get_liquidity_for_amount0(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount0)

    elif sqrt_ratio_x96 < sqrt_ratio_b_x96:
        # 가격이 범위 내: 양쪽 토큰 사용, 작은 값 반환
        liquidity0 = get_liquidity_for_amount0(sqrt_ratio_x96, sqrt_ratio_b_x96, amount0)
        liquidity1 = get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_x96, amount1)
        return min(liquidity0, liquidity1)

    else:
        # 가격이 범위 위: token1만 사용
        return get_liquidity_for_amount1(sqrt_ratio_a_x96, sqrt_ratio_b_x96, amount1)


def get_amounts_for_liquidity(
    sqrt_ratio_x96: int,
    sqrt_ratio_a_x96: int,
    sqrt_ratio_b_x96: int,
    liquidity: int
) -> Tuple[int, int]:
    """유동성에서 토큰 수량 계산 (get_liquidity_for_amounts의 역방향)

    Returns:
        (amount0, amount1) 튜플 (최소 단위, 내림)
    """
    sqrt_ratio_a_x96, sqrt_ratio_b_x96 = _ordered(sqrt_ratio_a_x96, sqrt_ratio_b_x96)
    _check_width(sqrt_ratio_a_x96, sqrt_ratio_b_x96)

    if sqrt_ratio_x96 <= sqrt_ratio_a_x96:
        amount0 = get_amount0_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, False)
        amount1 = 0

    elif sqrt_ratio_x96 < sqrt_ratio_b_x96:
        amount0 = get_amount0_delta(sqrt_ratio_x96, sqrt_ratio_b_x96, liquidity, False)
        amount1 = get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_x96, liquidity, False)

    else:
        amount0 = 0
        amount1 = get_amount1_delta(sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity, False)

    return amount0, amount1


def liquidity_delta(
    price: float,
    price_lower: float,
    price_upper: float,
    amount0: float,
    amount1: float,
    decimal0: int = 18,
    decimal1: int = 18
) -> int:
    """Human-readable 토큰 수량이 범위 [price_lower, price_upper]에 기여하는 유동성

    토큰 수량은 최소 단위로 변환됩니다. price_from_tick이 token1/token0의
    역수 방향 가격을 반환하므로 amount0은 10^decimal1, amount1은 10^decimal0으로
    스케일합니다.

    Args:
        price: 현재 가격 (P)
        price_lower: 하한 가격 (Pl)
        price_upper: 상한 가격 (Pu)
        amount0: token0 수량
        amount1: token1 수량
        decimal0: token0 소수점 자릿수
        decimal1: token1 소수점 자릿수

    Returns:
        유동성 (정수)

    Raises:
        RangeError: price_lower >= price_upper
        DomainError: 양수가 아닌 가격, 음수 수량, 음수 decimals
    """
    _check_price_range(price_lower, price_upper)
    if amount0 < 0 or amount1 < 0:
        raise DomainError(f"토큰 수량은 음수일 수 없습니다: amount0={amount0}, amount1={amount1}")

    amt0 = _to_base_units(amount0, decimal1)
    amt1 = _to_base_units(amount1, decimal0)

    sqrt_ratio_x96 = price_to_sqrt_price_x96(price, decimal0, decimal1)
    sqrt_ratio_a_x96 = price_to_sqrt_price_x96(price_lower, decimal0, decimal1)
    sqrt_ratio_b_x96 = price_to_sqrt_price_x96(price_upper, decimal0, decimal1)

    return get_liquidity_for_amounts(
        sqrt_ratio_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, amt0, amt1
    )


def amounts_for_liquidity_delta(
    liquidity: int,
    price: float,
    price_lower: float,
    price_upper: float,
    decimal0: int = 18,
    decimal1: int = 18
) -> Tuple[float, float]:
    """liquidity_delta의 역방향: 유동성이 요구하는 human-readable 토큰 수량

    Returns:
        (amount0, amount1) 튜플
    """
    _check_price_range(price_lower, price_upper)
    if liquidity < 0:
        raise DomainError(f"유동성은 음수일 수 없습니다: {liquidity}")

    sqrt_ratio_x96 = price_to_sqrt_price_x96(price, decimal0, decimal1)
    sqrt_ratio_a_x96 = price_to_sqrt_price_x96(price_lower, decimal0, decimal1)
    sqrt_ratio_b_x96 = price_to_sqrt_price_x96(price_upper, decimal0, decimal1)

    amt0, amt1 = get_amounts_for_liquidity(
        sqrt_ratio_x96, sqrt_ratio_a_x96, sqrt_ratio_b_x96, liquidity
    )

    amount0 = fixed_point.div(amt0, fixed_point.pow10(decimal1))
    amount1 = fixed_point.div(amt1, fixed_point.pow10(decimal0))
    return float(amount0), float(amount1)


def liquidity_at_tick(boundaries: Sequence[TickBoundary], tick: int) -> int:
    """틱 배열에서 임의 틱의 활성 유동성

    tickIdx 오름차순 경계를 따라 liquidityNet을 누적하다가
    boundaries[i].tick_idx <= tick <= boundaries[i+1].tick_idx 가 되면 멈춥니다.

    Args:
        boundaries: tick_idx 오름차순, 중복 없는 TickBoundary 시퀀스
        tick: 조회할 틱

    Returns:
        누적 유동성 (첫 경계 아래이거나 배열이 비어 있으면 0)
    """
    if not boundaries or tick < boundaries[0].tick_idx:
        return 0

    liquidity = 0
    for lower, upper in zip(boundaries, boundaries[1:]):
        liquidity += lower.liquidity_net
        if lower.tick_idx <= tick <= upper.tick_idx:
            break

    return liquidity


def _to_base_units(amount: float, decimals: int) -> int:
    """human-readable 수량 → 최소 단위 정수 (내림)"""
    return fixed_point.round_to_int(
        fixed_point.mul(amount, fixed_point.pow10(decimals)), ROUND_FLOOR
    )


def _check_price_range(price_lower: float, price_upper: float) -> None:
    if price_lower == price_upper:
        raise RangeError(f"가격 범위의 폭이 0입니다: {price_lower} == {price_upper}")
    if price_lower > price_upper:
        raise RangeError(f"가격 범위가 뒤집혔습니다: {price_lower} > {price_upper}")


def _check_width(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> None:
    if sqrt_ratio_a_x96 == sqrt_ratio_b_x96:
        raise RangeError(f"sqrtPriceX96 범위의 폭이 0입니다: {sqrt_ratio_a_x96}")


def _ordered(sqrt_ratio_a_x96: int, sqrt_ratio_b_x96: int) -> Tuple[int, int]:
    if sqrt_ratio_a_x96 > sqrt_ratio_b_x96:
        return sqrt_ratio_b_x96, sqrt_ratio_a_x96
    return sqrt_ratio_a_x96, sqrt_ratio_b_x96


def _mul_div_rounding_up(a: int, b: int, denominator: int) -> int:
    """(a * b) / denominator 올림"""
    result = (a * b) // denominator
    if (a * b) % denominator > 0:
        result += 1
    return result


def _div_rounding_up(numerator: int, denominator: int) -> int:
    """numerator / denominator 올림"""
    result = numerator // denominator
    if numerator % denominator > 0:
        result += 1
    return result
