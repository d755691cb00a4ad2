"""TradeEngine — matching orders into trades and settling them.

State machine: ACTIVE -> COMPLETED (buyer confirms) | RELEASED (arbitrator).
Both targets are terminal. Settlement legs are planned and checked against the
trade's escrow before the first transfer executes; the ledger transaction
undoes any executed legs if a later one is rejected.
"""
import logging
from datetime import timedelta

from src.xm_clearing.domain.fee import calc_settlement_fee
from src.xm_clearing.domain.invariants import verify_settlement_conserves
from src.xm_clearing.domain.settlement import (
    plan_completion,
    plan_release,
    validate_distribution,
)
from src.xm_common.amounts import calc_deposit, order_value, pro_rata
from src.xm_common.datetime_utils import utc_now
from src.xm_common.enums import EventType, LegPurpose, PartialFillPolicy, TradeStatus
from src.xm_common.errors import (
    NotBuyerError,
    OrderInactiveError,
    TradeNotActiveError,
    TradeNotFoundError,
)
from src.xm_common.events import EventJournal
from src.xm_common.id_generator import SequentialIdGenerator
from src.xm_escrow.application.adapter import EscrowLedgerAdapter
from src.xm_escrow.domain.ledger import TransferLeg
from src.xm_order.application.service import OrderBook
from src.xm_order.domain.rules import (
    check_delivery_address,
    check_min_trade_amount,
    check_within_range,
)
from src.xm_params.application.service import ParameterStore
from src.xm_trade.domain.models import ReleaseDistribution, SellerStats, Trade

logger = logging.getLogger(__name__)


class TradeEngine:
    def __init__(
        self,
        params: ParameterStore,
        order_book: OrderBook,
        escrow: EscrowLedgerAdapter,
        journal: EventJournal,
        partial_fill_policy: PartialFillPolicy = PartialFillPolicy.LOCK_FULL,
    ) -> None:
        self._params = params
        self._order_book = order_book
        self._escrow = escrow
        self._journal = journal
        self._partial_fill_policy = partial_fill_policy
        self._trades: dict[int, Trade] = {}
        self._seller_stats: dict[str, SellerStats] = {}
        self._trade_ids = SequentialIdGenerator()

    # --- matching ---

    def sell_order_match_buy(self, caller: str, buy_order_id: int) -> Trade:
        """Seller fills an active buy order in full by locking a deposit."""
        order = self._order_book.get_buy_order(buy_order_id)
        if not order.active:
            raise OrderInactiveError(buy_order_id)
        seller_deposit = calc_deposit(order.usdt_total, self._params.current.seller_deposit_rate)

        with self._escrow.transaction():
            self._escrow.pull(caller, seller_deposit, LegPurpose.MATCH_DEPOSIT)
            trade = self._open_trade(
                order.max_delivery_days,
                buy_order_id=order.id,
                sell_order_id=None,
                buyer=order.buyer,
                seller=caller,
                xnm_amount=order.xnm_amount,
                usdt_amount=order.usdt_total,
                buyer_deposit=order.buyer_deposit,
                seller_deposit=seller_deposit,
                delivery_address=order.delivery_address,
            )
            order.active = False

        self._emit_matched(trade, caller)
        return trade

    def buy_order_match_sell(
        self, caller: str, sell_order_id: int, xnm_amount: int, delivery_address: str
    ) -> Trade:
        """Buyer takes ``xnm_amount`` within an active sell order's range.

        The sell order closes either way. With LOCK_FULL the whole locked
        deposit backs the trade; with PRO_RATA the trade keeps the share for
        ``xnm_amount`` and the rest goes back to the seller.
        """
        params = self._params.current
        order = self._order_book.get_sell_order(sell_order_id)
        if not order.active:
            raise OrderInactiveError(sell_order_id)
        check_within_range(xnm_amount, order.min_xnm, order.max_xnm)
        check_delivery_address(delivery_address)
        usdt_total = order_value(xnm_amount, order.price)
        check_min_trade_amount(usdt_total, params.min_trade_amount)
        buyer_deposit = calc_deposit(usdt_total, params.buyer_deposit_rate)

        if self._partial_fill_policy == PartialFillPolicy.PRO_RATA:
            seller_deposit = pro_rata(order.seller_deposit, xnm_amount, order.max_xnm)
        else:
            seller_deposit = order.seller_deposit
        unused_deposit = order.seller_deposit - seller_deposit

        with self._escrow.transaction():
            self._escrow.pull(caller, usdt_total + buyer_deposit, LegPurpose.MATCH_PAYMENT)
            self._escrow.push(
                TransferLeg(order.seller, unused_deposit, LegPurpose.DEPOSIT_REFUND)
            )
            trade = self._open_trade(
                order.max_delivery_days,
                buy_order_id=None,
                sell_order_id=order.id,
                buyer=caller,
                seller=order.seller,
                xnm_amount=xnm_amount,
                usdt_amount=usdt_total,
                buyer_deposit=buyer_deposit,
                seller_deposit=seller_deposit,
                delivery_address=delivery_address,
            )
            order.active = False

        if unused_deposit:
            logger.info(
                "Sell order %d partially filled: %d/%d XNM, %d deposit returned",
                order.id,
                xnm_amount,
                order.max_xnm,
                unused_deposit,
            )
        self._emit_matched(trade, caller)
        return trade

    # --- settlement ---

    def complete_trade(self, caller: str, trade_id: int) -> Trade:
        trade = self.get_trade(trade_id)
        if caller != trade.buyer:
            raise NotBuyerError(caller, trade_id)
        if not trade.is_active:
            raise TradeNotActiveError(trade_id, trade.status.value)

        params = self._params.current
        stats = self._stats_for(trade.seller)
        fee = calc_settlement_fee(stats.lifetime_volume, trade.usdt_amount, params.fee_tiers)
        legs = plan_completion(trade, fee, params.fee_receiver)
        verify_settlement_conserves(trade, legs)

        with self._escrow.transaction():
            self._escrow.settle(legs)
            trade.status = TradeStatus.COMPLETED
            trade.fee = fee
            trade.closed_at = utc_now()
            stats.lifetime_volume += trade.usdt_amount
            stats.active_trades -= 1
            stats.completed_trades += 1

        self._journal.emit(
            EventType.TRADE_COMPLETED,
            trade.id,
            caller,
            usdt_amount=trade.usdt_amount,
            fee=fee,
            seller_payout=trade.usdt_amount - fee,
        )
        return trade

    def release_trade(
        self,
        caller: str,
        trade_id: int,
        usdt_to_seller: int,
        usdt_to_buyer: int,
        seller_deposit_penalty: int,
        buyer_deposit_penalty: int,
    ) -> Trade:
        """Arbitrator force-resolves an ACTIVE trade with a custom split."""
        self._params.require_arbitrator(caller)
        trade = self.get_trade(trade_id)
        if not trade.is_active:
            raise TradeNotActiveError(trade_id, trade.status.value)
        dist = ReleaseDistribution(
            usdt_to_seller=usdt_to_seller,
            usdt_to_buyer=usdt_to_buyer,
            seller_deposit_penalty=seller_deposit_penalty,
            buyer_deposit_penalty=buyer_deposit_penalty,
        )
        validate_distribution(trade, dist)
        legs = plan_release(trade, dist, self._params.current.fee_receiver)
        verify_settlement_conserves(trade, legs)
        stats = self._stats_for(trade.seller)

        with self._escrow.transaction():
            self._escrow.settle(legs)
            trade.status = TradeStatus.RELEASED
            trade.closed_at = utc_now()
            stats.active_trades -= 1
            stats.released_trades += 1

        self._journal.emit(
            EventType.TRADE_RELEASED,
            trade.id,
            caller,
            usdt_to_seller=usdt_to_seller,
            usdt_to_buyer=usdt_to_buyer,
            seller_deposit_penalty=seller_deposit_penalty,
            buyer_deposit_penalty=buyer_deposit_penalty,
        )
        return trade

    # --- lookups ---

    def get_trade(self, trade_id: int) -> Trade:
        trade = self._trades.get(trade_id)
        if trade is None:
            raise TradeNotFoundError(trade_id)
        return trade

    def list_trades(
        self, party: str | None = None, status: TradeStatus | None = None
    ) -> list[Trade]:
        return [
            t
            for t in self._trades.values()
            if (party is None or party in (t.buyer, t.seller))
            and (status is None or t.status == status)
        ]

    def seller_stats(self, seller: str) -> SellerStats:
        return self._seller_stats.get(seller) or SellerStats(seller=seller)

    def total_escrowed(self) -> int:
        return sum(t.escrowed for t in self._trades.values())

    # --- internals ---

    def _stats_for(self, seller: str) -> SellerStats:
        if seller not in self._seller_stats:
            self._seller_stats[seller] = SellerStats(seller=seller)
        return self._seller_stats[seller]

    def _open_trade(self, max_delivery_days: int, **fields: object) -> Trade:
        created_at = utc_now()
        trade = Trade(
            id=self._trade_ids.peek(),
            created_at=created_at,
            deliver_by=created_at + timedelta(days=max_delivery_days),
            **fields,  # type: ignore[arg-type]
        )
        self._trades[trade.id] = trade
        self._trade_ids.commit(trade.id)
        self._stats_for(trade.seller).active_trades += 1
        return trade

    def _emit_matched(self, trade: Trade, caller: str) -> None:
        self._journal.emit(
            EventType.TRADE_MATCHED,
            trade.id,
            caller,
            buy_order_id=trade.buy_order_id,
            sell_order_id=trade.sell_order_id,
            xnm_amount=trade.xnm_amount,
            usdt_amount=trade.usdt_amount,
            buyer_deposit=trade.buyer_deposit,
            seller_deposit=trade.seller_deposit,
            delivery_address=trade.delivery_address,
            deliver_by=trade.deliver_by.isoformat() if trade.deliver_by else None,
        )
