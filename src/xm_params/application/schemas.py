# src/xm_params/application/schemas.py
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from src.xm_common.events import MarketEvent
from src.xm_params.domain.models import FeeTier, MarketParams


class SetParamsRequest(BaseModel):
    seller_deposit_rate: int
    buyer_deposit_rate: int
    min_trade_amount: int


class PauseRequest(BaseModel):
    paused: bool


class FeeReceiverRequest(BaseModel):
    fee_receiver: str


class FeeTierItem(BaseModel):
    min_volume: int
    rate_bps: int


class FeeTiersRequest(BaseModel):
    tiers: list[FeeTierItem] = Field(min_length=1)

    def to_domain(self) -> list[FeeTier]:
        return [FeeTier(min_volume=t.min_volume, rate_bps=t.rate_bps) for t in self.tiers]


class ParamsResponse(BaseModel):
    usdt_token_address: str
    fee_receiver: str
    min_trade_amount: int
    seller_deposit_rate: int
    buyer_deposit_rate: int
    paused: bool
    owner: str
    max_delivery_days: int
    fee_tiers: list[FeeTierItem]

    @classmethod
    def from_domain(cls, params: MarketParams) -> "ParamsResponse":
        return cls(
            usdt_token_address=params.usdt_token_address,
            fee_receiver=params.fee_receiver,
            min_trade_amount=params.min_trade_amount,
            seller_deposit_rate=params.seller_deposit_rate,
            buyer_deposit_rate=params.buyer_deposit_rate,
            paused=params.paused,
            owner=params.owner,
            max_delivery_days=params.max_delivery_days,
            fee_tiers=[
                FeeTierItem(min_volume=t.min_volume, rate_bps=t.rate_bps)
                for t in params.fee_tiers
            ],
        )


class EventItem(BaseModel):
    seq: int
    event_type: str
    ref_id: int
    actor: str
    payload: dict[str, Any]
    created_at: datetime

    @classmethod
    def from_domain(cls, event: MarketEvent) -> "EventItem":
        return cls(
            seq=event.seq,
            event_type=event.event_type.value,
            ref_id=event.ref_id,
            actor=event.actor,
            payload=event.payload,
            created_at=event.created_at,
        )


class EventListResponse(BaseModel):
    items: list[EventItem]
