"""
Fee Math 테스트

예상 수수료, 변동성 범위, APR 계산을 테스트합니다.
"""

import pytest

from ..math.fee_math import (
    estimate_fee,
    fees_usd,
    price_volatility,
    price_range_from_volatility,
    calculate_apr,
)
from ..data.types import PoolDayData
from ..exceptions import DomainError, RangeError


class TestEstimateFee:
    """estimate_fee 테스트"""

    def test_equal_share(self):
        """ΔL = L: 0.3% × 1,000,000 × 0.5 = 1500"""
        liquidity = 10**24
        result = estimate_fee(liquidity, liquidity, 1_000_000, 3000)
        assert result == pytest.approx(1500.0)

    def test_sole_provider(self):
        """L = 0: 수수료 전체"""
        result = estimate_fee(10**18, 0, 1_000_000, 500)
        assert result == pytest.approx(500.0)

    def test_zero_total_liquidity(self):
        """L + ΔL = 0 이면 0"""
        assert estimate_fee(0, 0, 1_000_000, 3000) == 0.0

    def test_zero_delta(self):
        """ΔL = 0 이면 0"""
        assert estimate_fee(0, 10**20, 1_000_000, 3000) == 0.0

    def test_big_integers(self):
        """float 범위를 넘는 유동성도 비율은 정확"""
        liquidity = 10**400
        result = estimate_fee(liquidity, 3 * liquidity, 1_000_000, 10000)
        assert result == pytest.approx(10_000 * 0.25)

    def test_monotonic_in_volume(self):
        """거래량에 대해 단조 비감소"""
        fees = [estimate_fee(10**18, 10**20, volume, 3000) for volume in (0, 1, 1_000, 1e6, 1e9)]
        assert fees == sorted(fees)

    def test_monotonic_in_liquidity_delta(self):
        """ΔL에 대해 단조 비감소"""
        fees = [estimate_fee(delta, 10**20, 1e6, 3000) for delta in (0, 1, 10**15, 10**18, 10**21)]
        assert fees == sorted(fees)


class TestFeesUsd:
    """fees_usd 테스트 (실현 수수료)"""

    def test_fees_usd(self):
        assert fees_usd(1_000_000, 500) == pytest.approx(500.0)
        assert fees_usd(0, 3000) == 0.0


class TestPriceVolatility:
    """price_volatility 테스트"""

    def test_single_candle(self):
        """100 × (110 - 90) / 110"""
        result = price_volatility([PoolDayData(volume_usd=0, high=110, low=90)])
        assert result == pytest.approx(100 * 20 / 110)

    def test_mean(self):
        """캔들별 변동폭의 평균"""
        candles = [
            PoolDayData(volume_usd=0, high=100, low=90),
            PoolDayData(volume_usd=0, high=100, low=80),
        ]
        assert price_volatility(candles) == pytest.approx(15.0)

    def test_window(self):
        """최근 14일만 사용"""
        candles = [PoolDayData(volume_usd=0, high=100, low=90)] * 14
        candles += [PoolDayData(volume_usd=0, high=100, low=10)] * 6
        assert price_volatility(candles) == pytest.approx(10.0)
        assert price_volatility(candles, window=20) > 10.0

    def test_fewer_candles_than_window(self):
        """캔들이 window보다 적으면 있는 캔들 수로 평균 (14로 나누지 않음)"""
        candles = [PoolDayData(volume_usd=0, high=100, low=90)] * 7
        assert price_volatility(candles) == pytest.approx(10.0)
        assert price_volatility(candles[:1]) == pytest.approx(10.0)

    def test_no_candles(self):
        """캔들이 없으면 0"""
        assert price_volatility([]) == 0.0

    def test_zero_high_raises(self):
        """high가 0인 캔들은 DomainError"""
        with pytest.raises(DomainError):
            price_volatility([PoolDayData(volume_usd=0, high=0, low=0)])


class TestPriceRange:
    """price_range_from_volatility 테스트"""

    def test_range(self):
        lower, upper = price_range_from_volatility(100, 10)
        assert lower == pytest.approx(90)
        assert upper == pytest.approx(110)

    def test_zero_volatility_raises(self):
        """변동성 0: 폭 0 범위"""
        with pytest.raises(RangeError):
            price_range_from_volatility(100, 0)

    def test_full_volatility_raises(self):
        """변동성 100%: 하한 가격 0"""
        with pytest.raises(DomainError):
            price_range_from_volatility(100, 100)


class TestCalculateApr:
    """calculate_apr 테스트"""

    def test_apr(self):
        """10 USD/일, 예치금 50,000 -> 7.3%"""
        assert calculate_apr(10, 50_000) == pytest.approx(7.3)

    def test_zero_fees(self):
        assert calculate_apr(0, 50_000) == 0.0

    def test_non_positive_deposit_raises(self):
        with pytest.raises(DomainError):
            calculate_apr(10, 0)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
