"""Fund-conservation checks for settlement plans and escrow custody."""
import logging
from collections.abc import Sequence

from src.xm_escrow.domain.ledger import TransferLeg
from src.xm_trade.domain.models import Trade

logger = logging.getLogger(__name__)


def verify_settlement_conserves(trade: Trade, legs: Sequence[TransferLeg]) -> None:
    """Raise AssertionError unless the plan pays out exactly what the trade holds.

    sum(legs) == usdt_amount + buyer_deposit + seller_deposit, every leg >= 0
    """
    paid = sum(leg.amount for leg in legs)
    held = trade.usdt_amount + trade.buyer_deposit + trade.seller_deposit
    assert paid == held, (
        f"Settlement not conserved: trade {trade.id} pays out {paid} but holds {held}"
    )
    assert all(leg.amount >= 0 for leg in legs), (
        f"Settlement not conserved: trade {trade.id} has a negative leg"
    )


def verify_escrow_invariants(orders_escrowed: int, trades_escrowed: int, held: int) -> list[str]:
    """Check custody == funds attributed to active orders + active trades.

    Returns list of violation strings (empty when custody balances).
    """
    violations: list[str] = []
    attributed = orders_escrowed + trades_escrowed
    if attributed != held:
        msg = (
            f"Escrow custody mismatch: orders({orders_escrowed}) + trades({trades_escrowed})"
            f" = {attributed} != escrow_balance={held}"
        )
        violations.append(msg)
        logger.error(msg)
    else:
        logger.debug("Escrow invariant OK: held=%d", held)
    return violations
