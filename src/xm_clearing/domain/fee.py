"""Settlement fee, tiered on the seller's lifetime completed volume.

The schedule is configuration: a table of (min_volume, rate_bps) tiers,
ascending by min_volume, first tier starting at 0. The applicable rate is the
one of the highest tier the seller's volume has reached.
"""
from collections.abc import Iterable, Sequence

from src.xm_common.errors import InvalidParamsError
from src.xm_params.domain.models import FeeTier

BPS_DENOMINATOR = 10_000

DEFAULT_FEE_TIERS: tuple[FeeTier, ...] = (
    FeeTier(min_volume=0, rate_bps=500),
    FeeTier(min_volume=10_000, rate_bps=360),
    FeeTier(min_volume=50_000, rate_bps=270),
    FeeTier(min_volume=100_000, rate_bps=200),
)


def build_fee_tiers(pairs: Iterable[tuple[int, int]]) -> tuple[FeeTier, ...]:
    """Build and validate a tier table from (min_volume, rate_bps) pairs."""
    tiers = tuple(FeeTier(min_volume=v, rate_bps=r) for v, r in pairs)
    validate_fee_tiers(tiers)
    return tiers


def validate_fee_tiers(tiers: Sequence[FeeTier]) -> None:
    if not tiers:
        raise InvalidParamsError("fee tier table is empty")
    if tiers[0].min_volume != 0:
        raise InvalidParamsError("first fee tier must start at volume 0")
    for prev, tier in zip(tiers, tiers[1:]):
        if tier.min_volume <= prev.min_volume:
            raise InvalidParamsError(
                f"fee tier thresholds must increase: {prev.min_volume} -> {tier.min_volume}"
            )
    for tier in tiers:
        if not (0 <= tier.rate_bps <= BPS_DENOMINATOR):
            raise InvalidParamsError(f"fee rate {tier.rate_bps} bps out of range")


def fee_rate_bps(seller_volume: int, tiers: Sequence[FeeTier]) -> int:
    rate = tiers[0].rate_bps
    for tier in tiers:
        if seller_volume >= tier.min_volume:
            rate = tier.rate_bps
        else:
            break
    return rate


def calc_settlement_fee(
    seller_volume: int, trade_amount: int, tiers: Sequence[FeeTier] = DEFAULT_FEE_TIERS
) -> int:
    """Floor division fee: trade_amount x rate_bps // 10000.

    >>> calc_settlement_fee(0, 200)
    10
    """
    return trade_amount * fee_rate_bps(seller_volume, tiers) // BPS_DENOMINATOR
