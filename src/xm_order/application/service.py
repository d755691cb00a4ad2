"""OrderBook — creation, cancellation and lookup of buy and sell orders.

Orders are append-only: never deleted, only tombstoned via ``active=False``
on cancel or match. Every mutating call moves funds inside one ledger
transaction and applies its in-memory changes only after the ledger legs have
succeeded, so a rejected pull or push leaves the tables untouched.
"""
import logging

from src.xm_common.amounts import calc_deposit, order_value
from src.xm_common.datetime_utils import utc_now
from src.xm_common.enums import EventType, LegPurpose
from src.xm_common.errors import (
    NotOwnerError,
    NotSellerError,
    OrderInactiveError,
    OrderNotFoundError,
)
from src.xm_common.events import EventJournal
from src.xm_common.id_generator import SequentialIdGenerator
from src.xm_escrow.application.adapter import EscrowLedgerAdapter
from src.xm_escrow.domain.ledger import TransferLeg
from src.xm_order.domain.models import BuyOrder, SellOrder
from src.xm_order.domain.rules import (
    check_amount,
    check_delivery_address,
    check_delivery_days,
    check_min_trade_amount,
    check_price,
    check_range,
)
from src.xm_params.application.service import ParameterStore

logger = logging.getLogger(__name__)


class OrderBook:
    def __init__(
        self,
        params: ParameterStore,
        escrow: EscrowLedgerAdapter,
        journal: EventJournal,
    ) -> None:
        self._params = params
        self._escrow = escrow
        self._journal = journal
        self._buy_orders: dict[int, BuyOrder] = {}
        self._sell_orders: dict[int, SellOrder] = {}
        self._buy_ids = SequentialIdGenerator()
        self._sell_ids = SequentialIdGenerator()

    # --- buy side ---

    def create_buy_order(
        self,
        caller: str,
        xnm_amount: int,
        price: int,
        max_delivery_days: int,
        delivery_address: str,
    ) -> BuyOrder:
        params = self._params.current
        self._params.ensure_accepting_orders()
        check_amount(xnm_amount)
        check_price(price)
        check_delivery_days(max_delivery_days, params.max_delivery_days)
        check_delivery_address(delivery_address)
        usdt_total = order_value(xnm_amount, price)
        check_min_trade_amount(usdt_total, params.min_trade_amount)
        buyer_deposit = calc_deposit(usdt_total, params.buyer_deposit_rate)

        with self._escrow.transaction():
            self._escrow.pull(caller, usdt_total + buyer_deposit, LegPurpose.ORDER_ESCROW)
            order = BuyOrder(
                id=self._buy_ids.peek(),
                buyer=caller,
                xnm_amount=xnm_amount,
                price=price,
                usdt_total=usdt_total,
                buyer_deposit=buyer_deposit,
                max_delivery_days=max_delivery_days,
                delivery_address=delivery_address,
                created_at=utc_now(),
            )
            self._buy_orders[order.id] = order
            self._buy_ids.commit(order.id)

        self._journal.emit(
            EventType.BUY_ORDER_CREATED,
            order.id,
            caller,
            xnm_amount=xnm_amount,
            price=price,
            usdt_total=usdt_total,
            buyer_deposit=buyer_deposit,
        )
        return order

    def cancel_buy_order(self, caller: str, order_id: int) -> BuyOrder:
        order = self.get_buy_order(order_id)
        if order.buyer != caller:
            raise NotOwnerError(caller)
        if not order.active:
            raise OrderInactiveError(order_id)
        refund = order.usdt_total + order.buyer_deposit

        with self._escrow.transaction():
            self._escrow.push(TransferLeg(caller, refund, LegPurpose.ORDER_REFUND))
            order.active = False

        self._journal.emit(EventType.BUY_ORDER_CANCELLED, order_id, caller, refund=refund)
        return order

    # --- sell side ---

    def create_sell_order(
        self, caller: str, price: int, min_xnm: int, max_xnm: int, max_delivery_days: int
    ) -> SellOrder:
        params = self._params.current
        self._params.ensure_accepting_orders()
        check_price(price)
        check_amount(min_xnm)
        check_range(min_xnm, max_xnm)
        check_delivery_days(max_delivery_days, params.max_delivery_days)
        max_value = order_value(max_xnm, price)
        check_min_trade_amount(max_value, params.min_trade_amount)
        seller_deposit = calc_deposit(max_value, params.seller_deposit_rate)

        with self._escrow.transaction():
            self._escrow.pull(caller, seller_deposit, LegPurpose.ORDER_ESCROW)
            order = SellOrder(
                id=self._sell_ids.peek(),
                seller=caller,
                price=price,
                min_xnm=min_xnm,
                max_xnm=max_xnm,
                seller_deposit=seller_deposit,
                max_delivery_days=max_delivery_days,
                created_at=utc_now(),
            )
            self._sell_orders[order.id] = order
            self._sell_ids.commit(order.id)

        self._journal.emit(
            EventType.SELL_ORDER_CREATED,
            order.id,
            caller,
            price=price,
            min_xnm=min_xnm,
            max_xnm=max_xnm,
            seller_deposit=seller_deposit,
        )
        return order

    def cancel_sell_order(self, caller: str, order_id: int) -> SellOrder:
        order = self.get_sell_order(order_id)
        if order.seller != caller:
            raise NotSellerError(caller, order_id)
        if not order.active:
            raise OrderInactiveError(order_id)

        with self._escrow.transaction():
            self._escrow.push(
                TransferLeg(caller, order.seller_deposit, LegPurpose.DEPOSIT_REFUND)
            )
            order.active = False

        self._journal.emit(
            EventType.SELL_ORDER_CANCELLED, order_id, caller, refund=order.seller_deposit
        )
        return order

    # --- lookups ---

    def get_buy_order(self, order_id: int) -> BuyOrder:
        order = self._buy_orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def get_sell_order(self, order_id: int) -> SellOrder:
        order = self._sell_orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    def list_buy_orders(self, active_only: bool = False) -> list[BuyOrder]:
        return [o for o in self._buy_orders.values() if o.active or not active_only]

    def list_sell_orders(self, active_only: bool = False) -> list[SellOrder]:
        return [o for o in self._sell_orders.values() if o.active or not active_only]

    def total_escrowed(self) -> int:
        """Custody attributable to active orders."""
        return sum(o.escrowed for o in self._buy_orders.values()) + sum(
            o.escrowed for o in self._sell_orders.values()
        )
