# src/xm_order/application/schemas.py
from datetime import datetime

from pydantic import BaseModel

from src.xm_order.domain.models import BuyOrder, SellOrder


class CreateBuyOrderRequest(BaseModel):
    xnm_amount: int
    price: int
    max_delivery_days: int
    delivery_address: str


class CreateSellOrderRequest(BaseModel):
    price: int
    min_xnm: int
    max_xnm: int
    max_delivery_days: int


class BuyOrderResponse(BaseModel):
    id: int
    buyer: str
    xnm_amount: int
    price: int
    usdt_total: int
    buyer_deposit: int
    max_delivery_days: int
    delivery_address: str
    active: bool
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, order: BuyOrder) -> "BuyOrderResponse":
        return cls(
            id=order.id,
            buyer=order.buyer,
            xnm_amount=order.xnm_amount,
            price=order.price,
            usdt_total=order.usdt_total,
            buyer_deposit=order.buyer_deposit,
            max_delivery_days=order.max_delivery_days,
            delivery_address=order.delivery_address,
            active=order.active,
            created_at=order.created_at,
        )


class SellOrderResponse(BaseModel):
    id: int
    seller: str
    price: int
    min_xnm: int
    max_xnm: int
    seller_deposit: int
    max_delivery_days: int
    active: bool
    created_at: datetime | None = None

    @classmethod
    def from_domain(cls, order: SellOrder) -> "SellOrderResponse":
        return cls(
            id=order.id,
            seller=order.seller,
            price=order.price,
            min_xnm=order.min_xnm,
            max_xnm=order.max_xnm,
            seller_deposit=order.seller_deposit,
            max_delivery_days=order.max_delivery_days,
            active=order.active,
            created_at=order.created_at,
        )


class BuyOrderListResponse(BaseModel):
    items: list[BuyOrderResponse]


class SellOrderListResponse(BaseModel):
    items: list[SellOrderResponse]
