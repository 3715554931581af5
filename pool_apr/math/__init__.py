"""
Math layer for Pool APR

온체인 수준 정밀도의 수학 함수들:
- fixed_point: Decimal 엔진, Newton-Raphson 제곱근
- sqrt_price_math: sqrtPriceX96 인코딩/디코딩
- tick_math: Tick ↔ Price 변환
- liquidity_math: 유동성 계산, 틱 배열 활성 유동성
- deposit_math: USD 예치금 → 토큰 수량 분할
- fee_math: 예상 수수료, 변동성 범위, APR
"""

from .fixed_point import sqrt, to_decimal
from .sqrt_price_math import (
    encode_sqrt_price_x96,
    decode_sqrt_price_x96,
    price_to_sqrt_price_x96,
    sqrt_price_x96_to_price,
)
from .tick_math import (
    price_from_tick,
    tick_from_price,
    round_tick_to_spacing,
    get_tick_spacing_for_fee,
)
from .liquidity_math import (
    get_liquidity_for_amounts,
    get_amounts_for_liquidity,
    liquidity_delta,
    amounts_for_liquidity_delta,
    liquidity_at_tick,
)
from .deposit_math import simulate_deposit
from .fee_math import (
    estimate_fee,
    fees_usd,
    price_volatility,
    price_range_from_volatility,
    calculate_apr,
)
