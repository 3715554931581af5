"""
Data layer for Pool APR

인덱서가 전달하는 풀/틱/캔들 레코드 타입 정의
"""

from .types import (
    Token,
    PoolDayData,
    TickBoundary,
    PoolSnapshot,
    ProcessedPool,
    PriceRange,
    DepositSplit,
    FeeEstimate,
    validate_tick_boundaries,
    parse_tick_boundaries,
)
