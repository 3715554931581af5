"""
Deposit Math - USD 예치금 → 토큰 수량 분할

벤치마크 USD 예치금을 가격 범위 [Pl, Pu]에 맞게 token0(X)/token1(Y)로 나눕니다.
표시 정밀도(float) 계산이며 결과는 liquidity_delta()의 입력이 됩니다.

핵심 공식:
    ΔL = deposit / ((√P - √Pl)·priceY + (1/√P - 1/√Pu)·priceX)
    Δy = ΔL · (√P - √Pl)
    Δx = ΔL · (1/√P - 1/√Pu)
"""

import math

from ..data.types import DepositSplit
from ..exceptions import DomainError, RangeError


def simulate_deposit(
    price: float,
    price_lower: float,
    price_upper: float,
    price_usd_x: float,
    price_usd_y: float,
    deposit_usd: float
) -> DepositSplit:
    """USD 예치금을 토큰 수량으로 분할

    각 토큰에 대해 순서대로:
    - USD 가치가 음수면 0
    - USD 가치가 예치금을 넘으면 deposit_usd / 토큰 가격으로 제한

    Args:
        price: 현재 가격 (P)
        price_lower: 하한 가격 (Pl)
        price_upper: 상한 가격 (Pu)
        price_usd_x: token X(amount0) USD 가격
        price_usd_y: token Y(amount1) USD 가격
        deposit_usd: 예치금 (USD)

    Returns:
        DepositSplit(amount0, amount1)

    Raises:
        DomainError: 양수가 아닌 가격
        RangeError: price_lower >= price_upper
    """
    if price <= 0 or price_lower <= 0 or price_upper <= 0:
        raise DomainError(
            f"가격은 양수여야 합니다: P={price}, Pl={price_lower}, Pu={price_upper}"
        )
    if price_lower >= price_upper:
        raise RangeError(f"가격 범위가 유효하지 않습니다: {price_lower} >= {price_upper}")

    sqrt_p = math.sqrt(price)
    sqrt_pl = math.sqrt(price_lower)
    sqrt_pu = math.sqrt(price_upper)

    y_per_l = sqrt_p - sqrt_pl
    x_per_l = 1 / sqrt_p - 1 / sqrt_pu

    denominator = y_per_l * price_usd_y + x_per_l * price_usd_x
    if denominator == 0:
        # 토큰 USD 가격이 없으면 분할할 수 없음
        return DepositSplit(amount0=0.0, amount1=0.0)

    delta_l = deposit_usd / denominator

    delta_y = _clamp(delta_l * y_per_l, price_usd_y, deposit_usd)
    delta_x = _clamp(delta_l * x_per_l, price_usd_x, deposit_usd)

    return DepositSplit(amount0=delta_x, amount1=delta_y)


def _clamp(amount: float, price_usd: float, deposit_usd: float) -> float:
    """토큰 수량의 USD 가치를 [0, deposit_usd]로 제한"""
    # 가격이 0인 토큰도 수량은 음수가 될 수 없음
    if amount < 0 or amount * price_usd < 0:
        amount = 0.0
    if amount * price_usd > deposit_usd:
        amount = deposit_usd / price_usd
    return amount
