"""Global enums shared by the order book, trade engine and API schemas."""

from enum import Enum


class TradeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    COMPLETED = "COMPLETED"
    RELEASED = "RELEASED"


class PartialFillPolicy(str, Enum):
    """Where the unused share of a sell-order deposit goes on a partial fill."""
    LOCK_FULL = "LOCK_FULL"
    PRO_RATA = "PRO_RATA"


class EventType(str, Enum):
    BUY_ORDER_CREATED = "BUY_ORDER_CREATED"
    BUY_ORDER_CANCELLED = "BUY_ORDER_CANCELLED"
    SELL_ORDER_CREATED = "SELL_ORDER_CREATED"
    SELL_ORDER_CANCELLED = "SELL_ORDER_CANCELLED"
    TRADE_MATCHED = "TRADE_MATCHED"
    TRADE_COMPLETED = "TRADE_COMPLETED"
    TRADE_RELEASED = "TRADE_RELEASED"
    PARAMS_UPDATED = "PARAMS_UPDATED"
    MARKET_PAUSED = "MARKET_PAUSED"


class LegPurpose(str, Enum):
    """Why a unit of value leaves (or enters) escrow."""
    # Pulls
    ORDER_ESCROW = "ORDER_ESCROW"
    MATCH_DEPOSIT = "MATCH_DEPOSIT"
    MATCH_PAYMENT = "MATCH_PAYMENT"
    # Pushes
    ORDER_REFUND = "ORDER_REFUND"
    DEPOSIT_REFUND = "DEPOSIT_REFUND"
    SELLER_PAYOUT = "SELLER_PAYOUT"
    BUYER_PAYOUT = "BUYER_PAYOUT"
    SETTLEMENT_FEE = "SETTLEMENT_FEE"
    DEPOSIT_PENALTY = "DEPOSIT_PENALTY"
