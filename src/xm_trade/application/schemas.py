# src/xm_trade/application/schemas.py
from datetime import datetime

from pydantic import BaseModel

from src.xm_trade.domain.models import SellerStats, Trade


class MatchSellOrderRequest(BaseModel):
    xnm_amount: int
    delivery_address: str


class ReleaseTradeRequest(BaseModel):
    usdt_to_seller: int
    usdt_to_buyer: int
    seller_deposit_penalty: int = 0
    buyer_deposit_penalty: int = 0


class TradeResponse(BaseModel):
    id: int
    buy_order_id: int | None
    sell_order_id: int | None
    buyer: str
    seller: str
    xnm_amount: int
    usdt_amount: int
    buyer_deposit: int
    seller_deposit: int
    delivery_address: str
    status: str
    fee: int
    created_at: datetime | None = None
    closed_at: datetime | None = None
    deliver_by: datetime | None = None

    @classmethod
    def from_domain(cls, trade: Trade) -> "TradeResponse":
        return cls(
            id=trade.id,
            buy_order_id=trade.buy_order_id,
            sell_order_id=trade.sell_order_id,
            buyer=trade.buyer,
            seller=trade.seller,
            xnm_amount=trade.xnm_amount,
            usdt_amount=trade.usdt_amount,
            buyer_deposit=trade.buyer_deposit,
            seller_deposit=trade.seller_deposit,
            delivery_address=trade.delivery_address,
            status=trade.status.value,
            fee=trade.fee,
            created_at=trade.created_at,
            closed_at=trade.closed_at,
            deliver_by=trade.deliver_by,
        )


class TradeListResponse(BaseModel):
    items: list[TradeResponse]


class SellerStatsResponse(BaseModel):
    seller: str
    lifetime_volume: int
    active_trades: int
    completed_trades: int
    released_trades: int

    @classmethod
    def from_domain(cls, stats: SellerStats) -> "SellerStatsResponse":
        return cls(
            seller=stats.seller,
            lifetime_volume=stats.lifetime_volume,
            active_trades=stats.active_trades,
            completed_trades=stats.completed_trades,
            released_trades=stats.released_trades,
        )
