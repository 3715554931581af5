"""
Pool Ranking - 벤치마크 예치금 기준 풀 랭킹

풀 레코드 하나에 대한 계산 흐름:
    일간 캔들 → 변동성 → 가격 범위 [Pl, Pu]
    → 예치금 분할 → 유동성 ΔL → 예상 수수료 / APR

계산 오류(PoolMathError)가 난 풀은 경고 로그를 남기고 제외하며
나머지 풀은 계속 처리합니다.

사용법:
    ranked = rank_pools(pools, network="ethereum", denylist={"ethereum": ["0x..."]})
    for pool in ranked[:10]:
        print(pool.address, pool.apr)
"""

import logging
from operator import attrgetter
from typing import Collection, Iterable, List, Mapping, Optional

from .constants import DEFAULT_DEPOSIT_USD, DEFAULT_MIN_VOLUME_USD, VOLATILITY_WINDOW_DAYS
from .data.types import FeeEstimate, PoolSnapshot, ProcessedPool
from .exceptions import PoolMathError
from .math.deposit_math import simulate_deposit
from .math.fee_math import (
    calculate_apr,
    estimate_fee,
    fees_usd,
    price_range_from_volatility,
    price_volatility,
)
from .math.liquidity_math import liquidity_delta
from .math.tick_math import price_from_tick

logger = logging.getLogger(__name__)

SORT_FIELDS = (
    "apr",
    "fee_tier",
    "fees_usd",
    "fees_estimate_24h",
    "volume_usd",
    "tvl_usd",
    "volume_usd_week",
)


def estimate_pool_fees(
    pool: PoolSnapshot,
    deposit_usd: float = DEFAULT_DEPOSIT_USD,
    volatility_window: int = VOLATILITY_WINDOW_DAYS
) -> FeeEstimate:
    """풀 하나의 24시간 예상 수수료와 APR

    token X(amount0)의 USD 가격은 token1, token Y(amount1)는 token0 가격을 사용합니다.
    price_from_tick이 token0/token1의 역방향 가격을 반환하기 때문입니다.

    Args:
        pool: 풀 레코드
        deposit_usd: 벤치마크 예치금 (USD)
        volatility_window: 변동성 평균에 사용할 일수

    Returns:
        FeeEstimate(fees_estimate_24h, apr)

    Raises:
        RangeError: 변동성이 0인 경우 (캔들 없음, high == low)
        DomainError: 잘못된 캔들, decimals, 가격
    """
    decimal0 = pool.token0.decimals
    decimal1 = pool.token1.decimals

    volatility = price_volatility(pool.pool_day_data, volatility_window)
    price = price_from_tick(pool.tick, decimal0, decimal1)
    price_lower, price_upper = price_range_from_volatility(price, volatility)

    split = simulate_deposit(
        price,
        price_lower,
        price_upper,
        pool.token1.price_usd,
        pool.token0.price_usd,
        deposit_usd,
    )
    delta = liquidity_delta(
        price, price_lower, price_upper,
        split.amount0, split.amount1,
        decimal0, decimal1,
    )

    # 거래량은 가장 최근 일간 캔들 하나 (평균 아님)
    volume_24h = pool.pool_day_data[0].volume_usd

    if price_lower <= price <= price_upper:
        fees_estimate_24h = estimate_fee(delta, pool.liquidity, volume_24h, pool.fee_tier)
    else:
        # 자기 범위 밖의 포지션은 수수료를 받지 않음
        fees_estimate_24h = 0.0

    return FeeEstimate(
        fees_estimate_24h=fees_estimate_24h,
        apr=calculate_apr(fees_estimate_24h, deposit_usd),
    )


def is_rankable(
    pool: PoolSnapshot,
    hidden_addresses: Collection[str],
    min_volume_usd: float = DEFAULT_MIN_VOLUME_USD
) -> bool:
    """denylist에 없고 최소 거래량 이상인 풀만 랭킹 대상"""
    if pool.address.lower() in hidden_addresses:
        return False
    return pool.volume_usd >= min_volume_usd


def process_pools(
    pools: Iterable[PoolSnapshot],
    network: str,
    denylist: Optional[Mapping[str, Iterable[str]]] = None,
    min_volume_usd: float = DEFAULT_MIN_VOLUME_USD,
    deposit_usd: float = DEFAULT_DEPOSIT_USD,
    volatility_window: int = VOLATILITY_WINDOW_DAYS
) -> List[ProcessedPool]:
    """풀 목록 필터링 후 수수료/APR 계산

    Args:
        pools: 풀 레코드
        network: 네트워크 이름 (denylist 키)
        denylist: network -> 숨길 풀 주소
        min_volume_usd: 최소 거래량 (USD)
        deposit_usd: 벤치마크 예치금 (USD)
        volatility_window: 변동성 평균에 사용할 일수

    Returns:
        ProcessedPool 리스트 (입력 순서 유지, 계산 불가 풀 제외)
    """
    # 네트워크 키는 대소문자 구분 없음
    by_network = {key.lower(): addresses for key, addresses in (denylist or {}).items()}
    hidden = {address.lower() for address in by_network.get(network.lower(), [])}

    processed: List[ProcessedPool] = []
    skipped = 0
    for pool in pools:
        if not is_rankable(pool, hidden, min_volume_usd):
            skipped += 1
            continue

        try:
            estimate = estimate_pool_fees(pool, deposit_usd, volatility_window)
        except PoolMathError as e:
            logger.warning("풀 제외 %s: %s", pool.address, e)
            continue

        processed.append(
            ProcessedPool.from_snapshot(pool, estimate, fees_usd(pool.volume_usd, pool.fee_tier))
        )

    logger.debug(
        "%s: %d개 풀 계산 완료 (필터 제외 %d개)", network, len(processed), skipped
    )
    return processed


def sort_pools(
    pools: Iterable[ProcessedPool],
    field: str = "apr",
    descending: bool = True
) -> List[ProcessedPool]:
    """지정한 필드로 정렬

    Raises:
        ValueError: 지원하지 않는 정렬 필드
    """
    if field not in SORT_FIELDS:
        raise ValueError(f"지원하지 않는 정렬 필드: {field} (지원: {', '.join(SORT_FIELDS)})")
    return sorted(pools, key=attrgetter(field), reverse=descending)


def rank_pools(
    pools: Iterable[PoolSnapshot],
    network: str,
    denylist: Optional[Mapping[str, Iterable[str]]] = None,
    min_volume_usd: float = DEFAULT_MIN_VOLUME_USD,
    deposit_usd: float = DEFAULT_DEPOSIT_USD,
    volatility_window: int = VOLATILITY_WINDOW_DAYS,
    sort_field: str = "apr",
    descending: bool = True
) -> List[ProcessedPool]:
    """process_pools + sort_pools"""
    processed = process_pools(
        pools,
        network,
        denylist=denylist,
        min_volume_usd=min_volume_usd,
        deposit_usd=deposit_usd,
        volatility_window=volatility_window,
    )
    return sort_pools(processed, sort_field, descending)
