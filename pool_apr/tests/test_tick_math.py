"""
Tick Math 테스트

price_from_tick / tick_from_price 변환과 틱 간격 함수들을 테스트합니다.
"""

import pytest

from ..math.tick_math import (
    price_from_tick,
    tick_from_price,
    round_tick_to_spacing,
    get_tick_spacing_for_fee,
)
from ..constants import MIN_TICK, MAX_TICK
from ..exceptions import DomainError


class TestPriceFromTick:
    """price_from_tick 테스트"""

    def test_tick_0_same_decimals(self):
        """틱 0, 동일 소수점 (가격 = 1)"""
        result = price_from_tick(0, 18, 18)
        assert abs(result - 1.0) < 1e-9

    def test_tick_0_different_decimals(self):
        """틱 0, 다른 소수점: 10^(decimal1 - decimal0)"""
        result = price_from_tick(0, 6, 18)
        assert abs(result - 1e12) / 1e12 < 1e-9

        result = price_from_tick(0, 18, 6)
        assert abs(result - 1e-12) / 1e-12 < 1e-9

    def test_positive_tick(self):
        """양수 틱: 1 / 1.0001^tick"""
        result = price_from_tick(1000, 18, 18)
        expected = 1.0001 ** (-1000)
        assert abs(result - expected) / expected < 1e-9

    def test_negative_tick(self):
        """음수 틱"""
        result = price_from_tick(-1000, 18, 18)
        expected = 1.0001 ** 1000
        assert abs(result - expected) / expected < 1e-9

    def test_monotonic(self):
        """틱이 커지면 가격은 작아짐"""
        prices = [price_from_tick(t, 18, 18) for t in (-200, -100, 0, 100, 200)]
        assert prices == sorted(prices, reverse=True)

    def test_negative_decimals_raises(self):
        """음수 decimals는 DomainError"""
        with pytest.raises(DomainError):
            price_from_tick(0, -1, 18)
        with pytest.raises(DomainError):
            price_from_tick(0, 18, -1)

    def test_tick_out_of_range_raises(self):
        """유효 범위를 벗어난 틱"""
        with pytest.raises(DomainError):
            price_from_tick(MAX_TICK + 1, 18, 18)
        with pytest.raises(DomainError):
            price_from_tick(MIN_TICK - 1, 18, 18)

    def test_large_decimals(self):
        """uint8 범위의 큰 decimals: 10^(decimal1 - decimal0)"""
        result = price_from_tick(0, 200, 18)
        assert abs(result - 1e-182) / 1e-182 < 1e-9

        result = price_from_tick(0, 18, 255)
        assert abs(result - 1e237) / 1e237 < 1e-9


class TestTickFromPrice:
    """tick_from_price 테스트"""

    def test_price_1_same_decimals(self):
        """가격 1, 동일 소수점"""
        assert abs(tick_from_price(1.0, 18, 18)) < 1e-9

    @pytest.mark.parametrize(
        "decimal0,decimal1",
        [(18, 18), (6, 18), (18, 6), (8, 18), (18, 0), (0, 18)]
    )
    def test_roundtrip(self, decimal0, decimal1):
        """틱 -> 가격 -> 틱 왕복 (유효 틱 전체 범위에서 1틱 이내)"""
        ticks = [MIN_TICK, -800000, -100000, -5000, -1, 0, 1, 5000, 100000, 800000, MAX_TICK]
        for tick in ticks:
            price = price_from_tick(tick, decimal0, decimal1)
            result = tick_from_price(price, decimal0, decimal1)
            assert abs(result - tick) <= 1

    def test_returns_fractional_tick(self):
        """반올림하지 않은 틱"""
        price = (price_from_tick(10, 18, 18) + price_from_tick(11, 18, 18)) / 2
        result = tick_from_price(price, 18, 18)
        assert 10 < result < 11

    def test_invalid_price_zero(self):
        """가격 0은 유효하지 않음"""
        with pytest.raises(DomainError):
            tick_from_price(0, 18, 18)

    def test_invalid_price_negative(self):
        """음수 가격은 유효하지 않음"""
        with pytest.raises(DomainError):
            tick_from_price(-1.0, 18, 18)

    def test_negative_decimals_raises(self):
        with pytest.raises(DomainError):
            tick_from_price(1.0, -6, 18)


class TestRoundTickToSpacing:
    """round_tick_to_spacing 테스트

    가장 가까운 유효 틱으로 반올림합니다.
    """

    def test_already_aligned(self):
        """이미 정렬된 틱"""
        assert round_tick_to_spacing(60, 60) == 60
        assert round_tick_to_spacing(-60, 60) == -60
        assert round_tick_to_spacing(0, 60) == 0

    def test_round_nearest(self):
        """가장 가까운 틱, 정확히 중간이면 위쪽"""
        assert round_tick_to_spacing(65, 60) == 60
        assert round_tick_to_spacing(91, 60) == 120
        assert round_tick_to_spacing(90, 60) == 120
        assert round_tick_to_spacing(-1, 60) == 0
        assert round_tick_to_spacing(-31, 60) == -60
        assert round_tick_to_spacing(-15, 10) == -10

    def test_tick_spacing_for_fee(self):
        """수수료 티어별 틱 간격"""
        assert get_tick_spacing_for_fee(500) == 10
        assert get_tick_spacing_for_fee(3000) == 60
        with pytest.raises(ValueError):
            get_tick_spacing_for_fee(1234)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
