"""Market parameter records."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class FeeTier:
    """Rate applied once a seller's lifetime volume reaches ``min_volume``."""

    min_volume: int
    rate_bps: int


@dataclass
class MarketParams:
    usdt_token_address: str
    fee_receiver: str
    min_trade_amount: int
    seller_deposit_rate: int  # percent
    buyer_deposit_rate: int  # percent
    owner: str
    paused: bool = False
    max_delivery_days: int = 180
    fee_tiers: tuple[FeeTier, ...] = field(default_factory=tuple)
