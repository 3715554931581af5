"""
Fee Math - 예상 수수료 및 APR 계산

시뮬레이션 포지션이 풀 전체 유동성에서 차지하는 비율만큼
실현 거래량의 수수료를 가져간다고 가정합니다.

핵심 공식:
    fee = feeTier / 1e6 × volume24h × ΔL / (L + ΔL)
    volatility = mean(100 × (high - low) / high)   # 최근 14일 캔들
    Pl, Pu = P × (1 ∓ volatility / 100)
    APR = fee24h × 365 × 100 / deposit
"""

from typing import Sequence

import numpy as np

from ..constants import DAYS_PER_YEAR, FEE_DENOMINATOR, VOLATILITY_WINDOW_DAYS
from ..data.types import PoolDayData, PriceRange
from ..exceptions import DomainError, RangeError


def estimate_fee(
    liquidity_delta: int,
    liquidity: int,
    volume_24h: float,
    fee_tier: int
) -> float:
    """포지션의 24시간 예상 수수료 (USD)

    Args:
        liquidity_delta: 시뮬레이션 포지션 유동성 (ΔL)
        liquidity: 풀의 현재 활성 유동성 (L)
        volume_24h: 24시간 거래량 (USD)
        fee_tier: 수수료 티어 (ppm, 예: 3000 = 0.3%)

    Returns:
        예상 수수료 (L + ΔL == 0 이면 0)
    """
    total_liquidity = liquidity + liquidity_delta
    if total_liquidity == 0:
        return 0.0

    fee_tier_percentage = fee_tier / FEE_DENOMINATOR
    # int / int 나눗셈은 큰 정수에서도 올바르게 반올림된 float을 반환
    liquidity_percentage = liquidity_delta / total_liquidity

    return fee_tier_percentage * volume_24h * liquidity_percentage


def fees_usd(volume_usd: float, fee_tier: int) -> float:
    """실현 수수료 수익 = 거래량 × 수수료율"""
    return volume_usd * (fee_tier / FEE_DENOMINATOR)


def price_volatility(
    pool_day_data: Sequence[PoolDayData],
    window: int = VOLATILITY_WINDOW_DAYS
) -> float:
    """최근 window일 캔들의 평균 일간 변동폭 (%)

    캔들은 최신순으로 정렬되어 있다고 가정합니다.

    Raises:
        DomainError: high가 0 이하인 캔들
    """
    candles = list(pool_day_data[:window])
    if not candles:
        return 0.0

    high = np.array([float(d.high) for d in candles])
    low = np.array([float(d.low) for d in candles])

    if np.any(high <= 0):
        raise DomainError("일간 캔들의 high는 양수여야 합니다")

    return float(np.mean(100 * (high - low) / high))


def price_range_from_volatility(price: float, volatility: float) -> PriceRange:
    """변동성으로 벤치마크 가격 범위 계산

    Pl = P × (1 - volatility / 100)
    Pu = P × (1 + volatility / 100)

    Raises:
        RangeError: 변동성이 0이라 범위 폭이 0인 경우
        DomainError: 하한 가격이 0 이하가 되는 경우 (변동성 >= 100%)
    """
    lower = price - (price * volatility) / 100
    upper = price + (price * volatility) / 100

    if lower == upper:
        raise RangeError(f"변동성이 0이라 가격 범위의 폭이 0입니다: P={price}")
    if lower <= 0:
        raise DomainError(f"하한 가격이 양수가 아닙니다: Pl={lower} (변동성 {volatility}%)")
    if lower > upper:
        raise RangeError(f"가격 범위가 뒤집혔습니다: {lower} > {upper}")

    return PriceRange(lower=lower, upper=upper)


def calculate_apr(fees_estimate_24h: float, deposit_usd: float) -> float:
    """24시간 예상 수수료를 365일로 연환산한 APR (%)

    Raises:
        DomainError: 예치금이 0 이하
    """
    if deposit_usd <= 0:
        raise DomainError(f"예치금은 양수여야 합니다: {deposit_usd}")
    return fees_estimate_24h * DAYS_PER_YEAR * 100 / deposit_usd
