"""Marketplace — the single serialized entry point to the escrow engine.

Every public operation runs under one re-entrant lock spanning validation,
fund movement and state mutation, so no caller ever observes a half-applied
create/cancel/match/complete/release/params update.
"""
import logging
import threading
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from config.settings import Settings
from src.xm_clearing.domain.fee import build_fee_tiers
from src.xm_clearing.domain.invariants import verify_escrow_invariants
from src.xm_common.enums import PartialFillPolicy, TradeStatus
from src.xm_common.errors import AppError
from src.xm_common.events import EventJournal, MarketEvent
from src.xm_escrow.application.adapter import EscrowLedgerAdapter
from src.xm_escrow.domain.ledger import SettlementLedgerProtocol
from src.xm_escrow.infrastructure.memory_ledger import InMemorySettlementLedger
from src.xm_order.application.service import OrderBook
from src.xm_order.domain.models import BuyOrder, SellOrder
from src.xm_params.application.service import ParameterStore
from src.xm_params.domain.models import FeeTier, MarketParams
from src.xm_trade.application.service import TradeEngine
from src.xm_trade.domain.models import SellerStats, Trade

logger = logging.getLogger(__name__)


class Marketplace:
    def __init__(
        self,
        params: MarketParams,
        ledger: SettlementLedgerProtocol,
        escrow_account: str,
        partial_fill_policy: PartialFillPolicy = PartialFillPolicy.LOCK_FULL,
    ) -> None:
        self._lock = threading.RLock()
        self.journal = EventJournal()
        self.escrow = EscrowLedgerAdapter(ledger, escrow_account)
        self.params = ParameterStore(params, self.journal)
        self.order_book = OrderBook(self.params, self.escrow, self.journal)
        self.trades = TradeEngine(
            self.params, self.order_book, self.escrow, self.journal, partial_fill_policy
        )

    @property
    def ledger(self) -> SettlementLedgerProtocol:
        return self.escrow.ledger

    @contextmanager
    def _critical_section(self, operation: str, caller: str) -> Iterator[None]:
        with self._lock:
            mark = len(self.journal)
            try:
                yield
            except AppError as exc:
                self.journal.truncate(mark)
                logger.warning(
                    "%s rejected for %s: %s (%s)", operation, caller, exc.kind, exc.message
                )
                raise
            except Exception:
                self.journal.truncate(mark)
                logger.exception("%s failed for %s", operation, caller)
                raise

    # --- order book ---

    def create_buy_order(
        self,
        caller: str,
        xnm_amount: int,
        price: int,
        max_delivery_days: int,
        delivery_address: str,
    ) -> BuyOrder:
        with self._critical_section("create_buy_order", caller):
            return self.order_book.create_buy_order(
                caller, xnm_amount, price, max_delivery_days, delivery_address
            )

    def cancel_buy_order(self, caller: str, order_id: int) -> BuyOrder:
        with self._critical_section("cancel_buy_order", caller):
            return self.order_book.cancel_buy_order(caller, order_id)

    def create_sell_order(
        self, caller: str, price: int, min_xnm: int, max_xnm: int, max_delivery_days: int
    ) -> SellOrder:
        with self._critical_section("create_sell_order", caller):
            return self.order_book.create_sell_order(
                caller, price, min_xnm, max_xnm, max_delivery_days
            )

    def cancel_sell_order(self, caller: str, order_id: int) -> SellOrder:
        with self._critical_section("cancel_sell_order", caller):
            return self.order_book.cancel_sell_order(caller, order_id)

    # --- trade engine ---

    def sell_order_match_buy(self, caller: str, buy_order_id: int) -> Trade:
        with self._critical_section("sell_order_match_buy", caller):
            return self.trades.sell_order_match_buy(caller, buy_order_id)

    def buy_order_match_sell(
        self, caller: str, sell_order_id: int, xnm_amount: int, delivery_address: str
    ) -> Trade:
        with self._critical_section("buy_order_match_sell", caller):
            return self.trades.buy_order_match_sell(
                caller, sell_order_id, xnm_amount, delivery_address
            )

    def complete_trade(self, caller: str, trade_id: int) -> Trade:
        with self._critical_section("complete_trade", caller):
            return self.trades.complete_trade(caller, trade_id)

    def release_trade(
        self,
        caller: str,
        trade_id: int,
        usdt_to_seller: int,
        usdt_to_buyer: int,
        seller_deposit_penalty: int,
        buyer_deposit_penalty: int,
    ) -> Trade:
        with self._critical_section("release_trade", caller):
            return self.trades.release_trade(
                caller,
                trade_id,
                usdt_to_seller,
                usdt_to_buyer,
                seller_deposit_penalty,
                buyer_deposit_penalty,
            )

    # --- parameter store ---

    def set_params(
        self, caller: str, seller_deposit_rate: int, buyer_deposit_rate: int, min_trade_amount: int
    ) -> MarketParams:
        with self._critical_section("set_params", caller):
            return self.params.set_params(
                caller, seller_deposit_rate, buyer_deposit_rate, min_trade_amount
            )

    def pause_new_orders(self, caller: str, paused: bool) -> MarketParams:
        with self._critical_section("pause_new_orders", caller):
            return self.params.pause_new_orders(caller, paused)

    def set_fee_receiver(self, caller: str, fee_receiver: str) -> MarketParams:
        with self._critical_section("set_fee_receiver", caller):
            return self.params.set_fee_receiver(caller, fee_receiver)

    def set_fee_tiers(self, caller: str, tiers: Sequence[FeeTier]) -> MarketParams:
        with self._critical_section("set_fee_tiers", caller):
            return self.params.set_fee_tiers(caller, tiers)

    # --- reads ---

    def get_params(self) -> MarketParams:
        with self._lock:
            return self.params.snapshot()

    def get_buy_order(self, order_id: int) -> BuyOrder:
        with self._lock:
            return self.order_book.get_buy_order(order_id)

    def get_sell_order(self, order_id: int) -> SellOrder:
        with self._lock:
            return self.order_book.get_sell_order(order_id)

    def list_buy_orders(self, active_only: bool = False) -> list[BuyOrder]:
        with self._lock:
            return self.order_book.list_buy_orders(active_only)

    def list_sell_orders(self, active_only: bool = False) -> list[SellOrder]:
        with self._lock:
            return self.order_book.list_sell_orders(active_only)

    def get_trade(self, trade_id: int) -> Trade:
        with self._lock:
            return self.trades.get_trade(trade_id)

    def list_trades(
        self, party: str | None = None, status: TradeStatus | None = None
    ) -> list[Trade]:
        with self._lock:
            return self.trades.list_trades(party, status)

    def events_since(self, seq: int = 0) -> list[MarketEvent]:
        with self._lock:
            return self.journal.since(seq)

    def seller_stats(self, seller: str) -> SellerStats:
        with self._lock:
            return self.trades.seller_stats(seller)

    def total_escrowed(self) -> int:
        with self._lock:
            return self.order_book.total_escrowed() + self.trades.total_escrowed()

    def verify_invariants(self) -> list[str]:
        """Escrow custody check over the whole book; empty list when it balances."""
        with self._lock:
            return verify_escrow_invariants(
                self.order_book.total_escrowed(),
                self.trades.total_escrowed(),
                self.escrow.held(),
            )


def build_marketplace(
    settings: Settings, ledger: SettlementLedgerProtocol | None = None
) -> Marketplace:
    """Wire a Marketplace from settings; defaults to an in-process ledger."""
    params = MarketParams(
        usdt_token_address=settings.USDT_TOKEN_ADDRESS,
        fee_receiver=settings.FEE_RECEIVER,
        min_trade_amount=settings.MIN_TRADE_AMOUNT,
        seller_deposit_rate=settings.SELLER_DEPOSIT_RATE,
        buyer_deposit_rate=settings.BUYER_DEPOSIT_RATE,
        owner=settings.OWNER_ADDRESS,
        max_delivery_days=settings.MAX_DELIVERY_DAYS,
        fee_tiers=build_fee_tiers(settings.FEE_TIERS),
    )
    return Marketplace(
        params=params,
        ledger=ledger if ledger is not None else InMemorySettlementLedger(),
        escrow_account=settings.ESCROW_ADDRESS,
        partial_fill_policy=PartialFillPolicy(settings.PARTIAL_FILL_DEPOSIT_POLICY),
    )
