"""
Pool APR 데이터 타입 정의

인덱서(The Graph)에서 받은 풀 레코드를 Python dataclass로 정의.
유동성과 liquidityNet은 정밀도를 위해 int, 가격/거래량은 표시용 float.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, NamedTuple, Sequence

from ..exceptions import DomainError


class PriceRange(NamedTuple):
    """가격 범위 [lower, upper] (lower < upper)"""
    lower: float
    upper: float


class DepositSplit(NamedTuple):
    """USD 예치금을 분할한 토큰 수량 (USD가 아닌 토큰 단위)"""
    amount0: float  # token X
    amount1: float  # token Y


class FeeEstimate(NamedTuple):
    """벤치마크 예치금의 예상 수수료 및 APR"""
    fees_estimate_24h: float
    apr: float


@dataclass
class Token:
    """ERC20 토큰 정보

    price_usd는 tokenDayData[0].priceUSD (없으면 0)
    """
    address: str
    symbol: str
    name: str = ""
    decimals: int = 18
    price_usd: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        token_day_data = data.get("tokenDayData") or []
        price_usd = float(token_day_data[0]["priceUSD"]) if token_day_data else 0.0
        decimals = data.get("decimals")
        return cls(
            address=data.get("address") or data.get("id", ""),
            symbol=data.get("symbol", ""),
            name=data.get("name", ""),
            decimals=int(decimals) if decimals not in (None, "") else 18,
            price_usd=price_usd,
        )


@dataclass
class PoolDayData:
    """일간 캔들 (최신순으로 정렬되어 전달됨)"""
    volume_usd: float
    high: float
    low: float

    @classmethod
    def from_dict(cls, data: dict) -> "PoolDayData":
        return cls(
            volume_usd=float(data.get("volumeUSD", 0)),
            high=float(data.get("high", 0)),
            low=float(data.get("low", 0)),
        )


@dataclass
class TickBoundary:
    """Tick-Indexed State 중 활성 유동성 계산에 필요한 부분

    - tickIdx: 틱 인덱스
    - liquidityNet: 가격이 위로 틱을 통과할 때의 활성 유동성 변화량 (부호 있음)
    """
    tick_idx: int
    liquidity_net: int

    @classmethod
    def from_dict(cls, data: dict) -> "TickBoundary":
        return cls(
            tick_idx=int(data["tickIdx"]),
            liquidity_net=int(data.get("liquidityNet", 0)),
        )


@dataclass
class PoolSnapshot:
    """풀 레코드 (호출자 소유)

    - tick: 현재 틱 인덱스
    - liquidity: 현재 활성 유동성 (L)
    - fee_tier: 수수료 티어 (ppm)
    - pool_day_data: 최근 일간 캔들 (최신순)
    """
    address: str
    fee_tier: int
    tick: int
    liquidity: int
    token0: Token
    token1: Token
    volume_usd: float = 0.0
    volume_usd_week: float = 0.0
    tvl_usd: float = 0.0
    pool_day_data: List[PoolDayData] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "PoolSnapshot":
        return cls(
            address=(data.get("address") or data.get("id", "")).lower(),
            fee_tier=int(data["feeTier"]),
            tick=int(data["tick"]),
            liquidity=int(data["liquidity"]),
            token0=Token.from_dict(data["token0"]),
            token1=Token.from_dict(data["token1"]),
            volume_usd=float(data.get("volumeUSD", 0)),
            volume_usd_week=float(data.get("volumeUSDWeek", 0)),
            tvl_usd=float(data.get("tvlUSD", 0)),
            pool_day_data=[PoolDayData.from_dict(d) for d in data.get("poolDayData", [])],
        )


@dataclass
class ProcessedPool(PoolSnapshot):
    """수수료/APR이 계산된 풀 레코드 (랭킹/표시 계층에 전달)"""
    fees_usd: float = 0.0
    fees_estimate_24h: float = 0.0
    apr: float = 0.0

    @classmethod
    def from_snapshot(
        cls,
        pool: PoolSnapshot,
        estimate: FeeEstimate,
        fees_usd: float
    ) -> "ProcessedPool":
        return cls(
            **vars(pool),
            fees_usd=fees_usd,
            fees_estimate_24h=estimate.fees_estimate_24h,
            apr=estimate.apr,
        )

    def to_row(self) -> Dict[str, Any]:
        """표 출력용 평탄화된 dict"""
        return {
            "address": self.address,
            "pair": f"{self.token0.symbol}/{self.token1.symbol}",
            "fee_tier": self.fee_tier,
            "apr": self.apr,
            "fees_estimate_24h": self.fees_estimate_24h,
            "fees_usd": self.fees_usd,
            "tvl_usd": self.tvl_usd,
            "volume_usd": self.volume_usd,
            "volume_usd_week": self.volume_usd_week,
        }


def validate_tick_boundaries(boundaries: Sequence[TickBoundary]) -> None:
    """tick_idx 오름차순, 중복 없음 검증

    Raises:
        DomainError: 정렬되지 않았거나 중복된 tick_idx
    """
    for lower, upper in zip(boundaries, boundaries[1:]):
        if lower.tick_idx >= upper.tick_idx:
            raise DomainError(
                f"틱 경계는 tickIdx 오름차순이어야 합니다: {lower.tick_idx} >= {upper.tick_idx}"
            )


def parse_tick_boundaries(rows: Iterable[dict]) -> List[TickBoundary]:
    """인덱서 틱 레코드 → 검증된 TickBoundary 리스트"""
    boundaries = [TickBoundary.from_dict(row) for row in rows]
    validate_tick_boundaries(boundaries)
    return boundaries
