"""Tests for xm_clearing.domain.fee: tiered settlement fee on seller volume."""

import pytest

from src.xm_clearing.domain.fee import (
    DEFAULT_FEE_TIERS,
    build_fee_tiers,
    calc_settlement_fee,
    fee_rate_bps,
    validate_fee_tiers,
)
from src.xm_common.errors import InvalidParamsError
from src.xm_params.domain.models import FeeTier


class TestFeeRate:
    @pytest.mark.parametrize(
        ("volume", "expected"),
        [
            (0, 500),
            (9_999, 500),
            (10_000, 360),
            (49_999, 360),
            (50_000, 270),
            (100_000, 200),
            (5_000_000, 200),
        ],
    )
    def test_default_tiers(self, volume: int, expected: int) -> None:
        assert fee_rate_bps(volume, DEFAULT_FEE_TIERS) == expected


class TestCalcSettlementFee:
    def test_first_tier(self) -> None:
        # 200 * 500 / 10000 = 10
        assert calc_settlement_fee(0, 200) == 10

    def test_floor_division(self) -> None:
        # 199 * 500 / 10000 = 9.95
        assert calc_settlement_fee(0, 199) == 9

    def test_small_amount_rounds_to_zero(self) -> None:
        assert calc_settlement_fee(0, 19) == 0

    def test_second_tier(self) -> None:
        # 1000 * 360 / 10000 = 36
        assert calc_settlement_fee(10_000, 1000) == 36

    def test_volume_is_measured_before_the_trade(self) -> None:
        # a trade that would push the seller over 10_000 still pays the lower tier rate
        assert calc_settlement_fee(9_000, 2_000) == 100

    def test_custom_table(self) -> None:
        tiers = build_fee_tiers([(0, 100), (500, 0)])
        assert calc_settlement_fee(0, 1000, tiers) == 10
        assert calc_settlement_fee(500, 1000, tiers) == 0


class TestValidateFeeTiers:
    def test_default_is_valid(self) -> None:
        validate_fee_tiers(DEFAULT_FEE_TIERS)

    def test_empty(self) -> None:
        with pytest.raises(InvalidParamsError):
            validate_fee_tiers(())

    def test_first_tier_must_start_at_zero(self) -> None:
        with pytest.raises(InvalidParamsError):
            validate_fee_tiers((FeeTier(100, 500),))

    def test_thresholds_must_increase(self) -> None:
        with pytest.raises(InvalidParamsError):
            validate_fee_tiers((FeeTier(0, 500), FeeTier(100, 400), FeeTier(100, 300)))

    def test_rate_out_of_range(self) -> None:
        with pytest.raises(InvalidParamsError):
            validate_fee_tiers((FeeTier(0, 10_001),))
