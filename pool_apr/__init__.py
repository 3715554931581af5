"""
Pool APR - Concentrated Liquidity Pool Ranking

벤치마크 예치금(기본 $50,000)이 각 풀에서 벌어들일 예상 수수료와 APR을
온체인 수준 정밀도로 계산하여 풀을 랭킹하는 라이브러리.
"""

__version__ = "0.1.0"
__author__ = "Zekiya"

from .constants import Q96, FEE_TIERS, TICK_SPACINGS, DEFAULT_DEPOSIT_USD
from .exceptions import PoolMathError, DomainError, RangeError, ConvergenceError
from .ranking import estimate_pool_fees, process_pools, sort_pools, rank_pools
