"""Tests for the in-process settlement ledger."""

import pytest

from src.xm_common.errors import InsufficientAllowanceError, LedgerTransferError
from src.xm_escrow.infrastructure.memory_ledger import InMemorySettlementLedger


@pytest.fixture
def ledger() -> InMemorySettlementLedger:
    ledger = InMemorySettlementLedger()
    ledger.issue("alice", 100)
    return ledger


class TestTransfer:
    def test_moves_balance(self, ledger: InMemorySettlementLedger) -> None:
        ledger.transfer("alice", "bob", 40)
        assert ledger.balance_of("alice") == 60
        assert ledger.balance_of("bob") == 40
        assert ledger.total_supply == 100

    def test_insufficient_balance(self, ledger: InMemorySettlementLedger) -> None:
        with pytest.raises(LedgerTransferError):
            ledger.transfer("alice", "bob", 101)
        assert ledger.balance_of("alice") == 100

    def test_negative_amount(self, ledger: InMemorySettlementLedger) -> None:
        with pytest.raises(LedgerTransferError):
            ledger.transfer("alice", "bob", -1)

    def test_unknown_account_has_zero_balance(self, ledger: InMemorySettlementLedger) -> None:
        assert ledger.balance_of("nobody") == 0


class TestTransferFrom:
    def test_consumes_allowance(self, ledger: InMemorySettlementLedger) -> None:
        ledger.approve("alice", "escrow", 70)
        ledger.transfer_from("alice", "escrow", "escrow", 50)
        assert ledger.balance_of("escrow") == 50
        assert ledger.allowance("alice", "escrow") == 20

    def test_without_allowance(self, ledger: InMemorySettlementLedger) -> None:
        with pytest.raises(InsufficientAllowanceError):
            ledger.transfer_from("alice", "escrow", "escrow", 1)

    def test_allowance_above_balance(self, ledger: InMemorySettlementLedger) -> None:
        ledger.approve("alice", "escrow", 500)
        with pytest.raises(InsufficientAllowanceError):
            ledger.transfer_from("alice", "escrow", "escrow", 200)
        assert ledger.allowance("alice", "escrow") == 500


class TestAtomic:
    def test_commit(self, ledger: InMemorySettlementLedger) -> None:
        with ledger.atomic():
            ledger.transfer("alice", "bob", 10)
        assert ledger.balance_of("bob") == 10

    def test_rollback_restores_balances_and_allowances(
        self, ledger: InMemorySettlementLedger
    ) -> None:
        ledger.approve("alice", "escrow", 30)
        with pytest.raises(LedgerTransferError):
            with ledger.atomic():
                ledger.transfer_from("alice", "escrow", "escrow", 30)
                ledger.transfer("escrow", "bob", 31)
        assert ledger.balance_of("alice") == 100
        assert ledger.balance_of("escrow") == 0
        assert ledger.allowance("alice", "escrow") == 30

    def test_nested_rollback_is_owned_by_outermost(
        self, ledger: InMemorySettlementLedger
    ) -> None:
        with pytest.raises(RuntimeError):
            with ledger.atomic():
                ledger.transfer("alice", "bob", 10)
                with ledger.atomic():
                    ledger.transfer("alice", "carol", 10)
                raise RuntimeError("abort")
        assert ledger.balance_of("alice") == 100
        assert ledger.balance_of("bob") == 0
        assert ledger.balance_of("carol") == 0
