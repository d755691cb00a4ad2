"""Settlement plans: every leg of a trade's payout, computed before any executes."""

from src.xm_common.enums import LegPurpose
from src.xm_common.errors import DistributionMismatchError
from src.xm_escrow.domain.ledger import TransferLeg
from src.xm_trade.domain.models import ReleaseDistribution, Trade


def plan_completion(trade: Trade, fee: int, fee_receiver: str) -> list[TransferLeg]:
    """Buyer confirmed delivery: seller is paid net of fee, both deposits go home."""
    return [
        TransferLeg(trade.seller, trade.usdt_amount - fee, LegPurpose.SELLER_PAYOUT),
        TransferLeg(fee_receiver, fee, LegPurpose.SETTLEMENT_FEE),
        TransferLeg(trade.buyer, trade.buyer_deposit, LegPurpose.DEPOSIT_REFUND),
        TransferLeg(trade.seller, trade.seller_deposit, LegPurpose.DEPOSIT_REFUND),
    ]


def validate_distribution(trade: Trade, dist: ReleaseDistribution) -> None:
    """Raise DistributionMismatchError unless the split conserves the trade's escrow."""
    amounts = (
        dist.usdt_to_seller,
        dist.usdt_to_buyer,
        dist.seller_deposit_penalty,
        dist.buyer_deposit_penalty,
    )
    if any(a < 0 for a in amounts):
        raise DistributionMismatchError(f"negative amount in {amounts}")
    if dist.usdt_to_seller + dist.usdt_to_buyer != trade.usdt_amount:
        raise DistributionMismatchError(
            f"usdt_to_seller({dist.usdt_to_seller}) + usdt_to_buyer({dist.usdt_to_buyer})"
            f" != usdt_amount({trade.usdt_amount})"
        )
    if dist.seller_deposit_penalty > trade.seller_deposit:
        raise DistributionMismatchError(
            f"seller penalty {dist.seller_deposit_penalty} > deposit {trade.seller_deposit}"
        )
    if dist.buyer_deposit_penalty > trade.buyer_deposit:
        raise DistributionMismatchError(
            f"buyer penalty {dist.buyer_deposit_penalty} > deposit {trade.buyer_deposit}"
        )


def plan_release(
    trade: Trade, dist: ReleaseDistribution, fee_receiver: str
) -> list[TransferLeg]:
    """Arbitrated split. Call validate_distribution first."""
    return [
        TransferLeg(trade.seller, dist.usdt_to_seller, LegPurpose.SELLER_PAYOUT),
        TransferLeg(trade.buyer, dist.usdt_to_buyer, LegPurpose.BUYER_PAYOUT),
        TransferLeg(
            trade.seller,
            trade.seller_deposit - dist.seller_deposit_penalty,
            LegPurpose.DEPOSIT_REFUND,
        ),
        TransferLeg(
            trade.buyer,
            trade.buyer_deposit - dist.buyer_deposit_penalty,
            LegPurpose.DEPOSIT_REFUND,
        ),
        TransferLeg(
            fee_receiver,
            dist.seller_deposit_penalty + dist.buyer_deposit_penalty,
            LegPurpose.DEPOSIT_PENALTY,
        ),
    ]
