"""Order book: escrow on create, refund on cancel, validation and id allocation."""

import pytest

from src.xm_common.enums import EventType
from src.xm_common.errors import (
    BelowMinTradeAmountError,
    InsufficientAllowanceError,
    InvalidAmountError,
    InvalidDeliveryDaysError,
    InvalidPriceError,
    MarketPausedError,
    InvalidDeliveryAddressError,
    NotOwnerError,
    NotSellerError,
    OrderInactiveError,
    OrderNotFoundError,
    RangeInvalidError,
)
from src.xm_escrow.infrastructure.memory_ledger import InMemorySettlementLedger
from src.xm_market.engine import Marketplace
from tests.support import ALICE, ALICE_XNM, BOB, CAROL, ESCROW, OWNER, fund


class TestCreateBuyOrder:
    def test_escrows_total_plus_deposit(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, ALICE, 105)
        order = market.create_buy_order(
            ALICE, xnm_amount=100, price=1, max_delivery_days=7, delivery_address=ALICE_XNM
        )
        assert order.id == 1
        assert order.usdt_total == 100
        assert order.buyer_deposit == 5
        assert order.active
        assert ledger.balance_of(ALICE) == 0
        assert ledger.balance_of(ESCROW) == 105
        assert market.verify_invariants() == []

    def test_emits_event(self, market: Marketplace, ledger: InMemorySettlementLedger) -> None:
        fund(ledger, ALICE, 105)
        market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        events = market.journal.of_type(EventType.BUY_ORDER_CREATED)
        assert len(events) == 1
        assert events[0].payload["buyer_deposit"] == 5

    def test_records_delivery_address(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, ALICE, 105)
        order = market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        assert market.get_buy_order(order.id).delivery_address == ALICE_XNM

    @pytest.mark.parametrize(
        "address",
        ["", "a1" * 21, "0x" + "a1" * 19, "0x" + "a1" * 21, "0X" + "a1" * 20],
    )
    def test_invalid_delivery_address(
        self, market: Marketplace, ledger: InMemorySettlementLedger, address: str
    ) -> None:
        fund(ledger, ALICE, 105)
        with pytest.raises(InvalidDeliveryAddressError):
            market.create_buy_order(ALICE, 100, 1, 7, address)
        assert ledger.balance_of(ESCROW) == 0
        assert market.list_buy_orders() == []

    def test_below_min_trade_amount(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, ALICE, 100)
        with pytest.raises(BelowMinTradeAmountError):
            market.create_buy_order(ALICE, 49, 1, 7, ALICE_XNM)
        assert ledger.balance_of(ESCROW) == 0

    def test_at_min_trade_amount(self, market: Marketplace, ledger: InMemorySettlementLedger) -> None:
        fund(ledger, ALICE, 100)
        order = market.create_buy_order(ALICE, 50, 1, 7, ALICE_XNM)
        assert order.buyer_deposit == 2

    @pytest.mark.parametrize(
        ("xnm_amount", "price", "days", "error"),
        [
            (0, 1, 7, InvalidAmountError),
            (100, 0, 7, InvalidPriceError),
            (100, 1, 0, InvalidDeliveryDaysError),
            (100, 1, 181, InvalidDeliveryDaysError),
        ],
    )
    def test_validation(
        self,
        market: Marketplace,
        ledger: InMemorySettlementLedger,
        xnm_amount: int,
        price: int,
        days: int,
        error: type[Exception],
    ) -> None:
        fund(ledger, ALICE, 1000)
        with pytest.raises(error):
            market.create_buy_order(ALICE, xnm_amount, price, days, ALICE_XNM)

    def test_insufficient_allowance_leaves_no_trace(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        ledger.issue(ALICE, 105)
        with pytest.raises(InsufficientAllowanceError):
            market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        assert market.list_buy_orders() == []
        assert ledger.balance_of(ALICE) == 105
        assert len(market.journal) == 0

        # the failed attempt did not consume id 1
        ledger.approve(ALICE, ESCROW, 105)
        assert market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM).id == 1

    def test_paused(self, market: Marketplace, ledger: InMemorySettlementLedger) -> None:
        fund(ledger, ALICE, 105)
        market.pause_new_orders(OWNER, True)
        with pytest.raises(MarketPausedError):
            market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        market.pause_new_orders(OWNER, False)
        assert market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM).id == 1

    def test_ids_are_sequential(self, market: Marketplace, ledger: InMemorySettlementLedger) -> None:
        fund(ledger, ALICE, 1000)
        ids = [market.create_buy_order(ALICE, 50, 1, 7, ALICE_XNM).id for _ in range(3)]
        assert ids == [1, 2, 3]


class TestCancelBuyOrder:
    def test_refunds_everything(self, market: Marketplace, ledger: InMemorySettlementLedger) -> None:
        fund(ledger, ALICE, 105)
        market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        order = market.cancel_buy_order(ALICE, 1)
        assert not order.active
        assert ledger.balance_of(ALICE) == 105
        assert ledger.balance_of(ESCROW) == 0
        assert market.verify_invariants() == []

    def test_second_cancel_fails_without_moving_funds(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, ALICE, 105)
        market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        market.cancel_buy_order(ALICE, 1)
        with pytest.raises(OrderInactiveError):
            market.cancel_buy_order(ALICE, 1)
        assert ledger.balance_of(ALICE) == 105

    def test_only_buyer_can_cancel(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, ALICE, 105)
        market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        with pytest.raises(NotOwnerError):
            market.cancel_buy_order(CAROL, 1)
        assert market.get_buy_order(1).active

    def test_unknown_order(self, market: Marketplace) -> None:
        with pytest.raises(OrderNotFoundError):
            market.cancel_buy_order(ALICE, 99)

    def test_cancel_allowed_while_paused(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, ALICE, 105)
        market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM)
        market.pause_new_orders(OWNER, True)
        market.cancel_buy_order(ALICE, 1)
        assert ledger.balance_of(ALICE) == 105


class TestSellOrders:
    def test_create_locks_deposit_on_max_value(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, BOB, 21)
        order = market.create_sell_order(BOB, price=1, min_xnm=50, max_xnm=100, max_delivery_days=7)
        assert order.id == 1
        assert order.seller_deposit == 21
        assert ledger.balance_of(BOB) == 0
        assert ledger.balance_of(ESCROW) == 21

    def test_cancel_refunds_deposit(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, BOB, 21)
        market.create_sell_order(BOB, 1, 50, 100, 7)
        market.cancel_sell_order(BOB, 1)
        assert ledger.balance_of(BOB) == 21
        assert market.verify_invariants() == []
        with pytest.raises(OrderInactiveError):
            market.cancel_sell_order(BOB, 1)

    def test_only_seller_can_cancel(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, BOB, 21)
        market.create_sell_order(BOB, 1, 50, 100, 7)
        with pytest.raises(NotSellerError) as exc_info:
            market.cancel_sell_order(ALICE, 1)
        assert exc_info.value.kind == "NotSeller"
        assert exc_info.value.code == 1003
        assert market.get_sell_order(1).active
        assert ledger.balance_of(ESCROW) == 21

    def test_range_invalid(self, market: Marketplace, ledger: InMemorySettlementLedger) -> None:
        fund(ledger, BOB, 100)
        with pytest.raises(RangeInvalidError):
            market.create_sell_order(BOB, 1, 100, 50, 7)

    def test_max_value_below_minimum(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, BOB, 100)
        with pytest.raises(BelowMinTradeAmountError):
            market.create_sell_order(BOB, 1, 10, 40, 7)

    def test_buy_and_sell_ids_are_independent(
        self, market: Marketplace, ledger: InMemorySettlementLedger
    ) -> None:
        fund(ledger, ALICE, 105)
        fund(ledger, BOB, 21)
        assert market.create_buy_order(ALICE, 100, 1, 7, ALICE_XNM).id == 1
        assert market.create_sell_order(BOB, 1, 50, 100, 7).id == 1

    def test_list_active_only(self, market: Marketplace, ledger: InMemorySettlementLedger) -> None:
        fund(ledger, BOB, 42)
        market.create_sell_order(BOB, 1, 50, 100, 7)
        market.create_sell_order(BOB, 1, 50, 100, 7)
        market.cancel_sell_order(BOB, 1)
        assert [o.id for o in market.list_sell_orders(active_only=True)] == [2]
        assert len(market.list_sell_orders()) == 2
