"""Order domain models — pure dataclasses, no persistence dependency."""
from dataclasses import dataclass
from datetime import datetime


@dataclass
class BuyOrder:
    id: int
    buyer: str
    xnm_amount: int
    price: int  # settlement units per XNM
    usdt_total: int  # xnm_amount * price
    buyer_deposit: int  # locked at creation, never recomputed
    max_delivery_days: int
    delivery_address: str  # where the seller delivers XNM
    active: bool = True
    created_at: datetime | None = None

    @property
    def escrowed(self) -> int:
        """Custody held for this order while it is active."""
        return self.usdt_total + self.buyer_deposit if self.active else 0


@dataclass
class SellOrder:
    id: int
    seller: str
    price: int
    min_xnm: int
    max_xnm: int
    seller_deposit: int  # against max_xnm * price, locked in full
    max_delivery_days: int
    active: bool = True
    created_at: datetime | None = None

    @property
    def escrowed(self) -> int:
        return self.seller_deposit if self.active else 0
