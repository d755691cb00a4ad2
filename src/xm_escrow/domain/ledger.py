# src/xm_escrow/domain/ledger.py
"""SettlementLedgerProtocol — interface contract for the settlement-asset ledger.

The ledger is owned by the host runtime. The engine only moves custody; it
never mints or burns. ``atomic()`` is the host's transactional boundary: every
transfer made inside the block is undone if the block raises.
"""
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Protocol

from src.xm_common.enums import LegPurpose


class SettlementLedgerProtocol(Protocol):
    def balance_of(self, account: str) -> int: ...

    def allowance(self, owner: str, spender: str) -> int: ...

    def approve(self, owner: str, spender: str, amount: int) -> None: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None: ...

    def transfer_from(self, owner: str, spender: str, recipient: str, amount: int) -> None: ...

    def atomic(self) -> AbstractContextManager[None]: ...


@dataclass(frozen=True)
class TransferLeg:
    """One planned movement out of escrow, computed before anything executes."""

    recipient: str
    amount: int
    purpose: LegPurpose
