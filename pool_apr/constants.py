"""
Pool APR 상수 정의

온체인 수준 정밀도와 벤치마크 계산을 위한 상수들:
- Q96: sqrt price 인코딩에 사용 (2^96)
- FEE_TIERS: 지원되는 수수료 티어 (ppm)
- TICK_SPACINGS: 각 수수료 티어별 틱 간격
- 벤치마크 예치금, 최소 거래량, 변동성 윈도우
"""

from typing import Dict

# Fixed-point 인코딩 상수
Q96: int = 2 ** 96
Q192: int = 2 ** 192

# 수수료 티어 (parts-per-million)
# 500 = 0.05%, 3000 = 0.30%, 10000 = 1.00%
FEE_TIERS: Dict[int, str] = {
    100: "0.01%",    # 1 bps
    500: "0.05%",    # 5 bps
    3000: "0.30%",   # 30 bps
    10000: "1.00%",  # 100 bps
}

# 수수료 티어 분모 (feeTier / 1_000_000 = 수수료율)
FEE_DENOMINATOR: int = 1_000_000

# 각 수수료 티어별 틱 간격
TICK_SPACINGS: Dict[int, int] = {
    100: 1,
    500: 10,
    3000: 60,
    10000: 200,
}

# 지원되는 네트워크 (denylist 키)
NETWORKS = (
    "ethereum",
    "arbitrum",
    "optimism",
    "polygon",
    "celo",
    "bnb",
)

# 틱 범위 상수
MIN_TICK: int = -887272
MAX_TICK: int = 887272

# 1.0001 (틱 간 가격 비율)
TICK_BASE: float = 1.0001

# Decimal 엔진 설정
# SQRT_PRECISION: 제곱근 결과의 소수점 자릿수
# DECIMAL_CONTEXT_PRECISION: 내부 연산 유효숫자
SQRT_PRECISION: int = 18
DECIMAL_CONTEXT_PRECISION: int = 100
MAX_SQRT_ITERATIONS: int = 1000

# 벤치마크 설정
DEFAULT_DEPOSIT_USD: float = 50_000
DEFAULT_MIN_VOLUME_USD: float = 50_000
VOLATILITY_WINDOW_DAYS: int = 14
DAYS_PER_YEAR: int = 365
