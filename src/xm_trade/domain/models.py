"""Trade domain models."""
from dataclasses import dataclass
from datetime import datetime

from src.xm_common.enums import TradeStatus


@dataclass
class Trade:
    id: int
    buy_order_id: int | None  # set when a seller filled a buy order
    sell_order_id: int | None  # set when a buyer filled a sell order
    buyer: str
    seller: str
    xnm_amount: int
    usdt_amount: int
    buyer_deposit: int
    seller_deposit: int
    delivery_address: str  # buyer's XNM address, copied from the order or the taker
    status: TradeStatus = TradeStatus.ACTIVE
    fee: int = 0  # settlement fee, known once COMPLETED
    created_at: datetime | None = None
    closed_at: datetime | None = None
    deliver_by: datetime | None = None  # advisory, never enforced

    @property
    def is_active(self) -> bool:
        return self.status == TradeStatus.ACTIVE

    @property
    def escrowed(self) -> int:
        """Custody held for this trade; zero once terminal."""
        if not self.is_active:
            return 0
        return self.usdt_amount + self.buyer_deposit + self.seller_deposit


@dataclass
class SellerStats:
    seller: str
    lifetime_volume: int = 0  # sum of usdt_amount over COMPLETED trades
    active_trades: int = 0
    completed_trades: int = 0
    released_trades: int = 0


@dataclass(frozen=True)
class ReleaseDistribution:
    """Arbitrator's split of an ACTIVE trade's escrow."""

    usdt_to_seller: int
    usdt_to_buyer: int
    seller_deposit_penalty: int
    buyer_deposit_penalty: int
