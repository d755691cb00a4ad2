"""Custody moves between parties and the escrow account.

Pulls use ``transfer_from`` with the escrow account as spender, so the caller
must have approved the escrow account beforehand. Pushes use ``transfer`` from
the escrow account. Ledger failures propagate as ``LedgerError`` subclasses;
the adapter never retries.
"""
import logging
from collections.abc import Sequence
from contextlib import AbstractContextManager

from src.xm_common.enums import LegPurpose
from src.xm_common.errors import EscrowShortfallError, LedgerTransferError
from src.xm_escrow.domain.ledger import SettlementLedgerProtocol, TransferLeg

logger = logging.getLogger(__name__)


class EscrowLedgerAdapter:
    def __init__(self, ledger: SettlementLedgerProtocol, escrow_account: str) -> None:
        self._ledger = ledger
        self.escrow_account = escrow_account

    @property
    def ledger(self) -> SettlementLedgerProtocol:
        return self._ledger

    def transaction(self) -> AbstractContextManager[None]:
        """Atomic unit on the ledger; all pulls/pushes inside commit or none do."""
        return self._ledger.atomic()

    def held(self) -> int:
        return self._ledger.balance_of(self.escrow_account)

    def pull(self, owner: str, amount: int, purpose: LegPurpose) -> None:
        """Move ``amount`` from ``owner`` into escrow. Raises InsufficientAllowanceError."""
        if amount < 0:
            raise LedgerTransferError(f"negative pull {amount} from {owner}")
        self._ledger.transfer_from(owner, self.escrow_account, self.escrow_account, amount)
        logger.debug("Pulled %d from %s (%s)", amount, owner, purpose.value)

    def push(self, leg: TransferLeg) -> None:
        if leg.amount == 0:
            return
        self._ledger.transfer(self.escrow_account, leg.recipient, leg.amount)
        logger.debug("Pushed %d to %s (%s)", leg.amount, leg.recipient, leg.purpose.value)

    def settle(self, legs: Sequence[TransferLeg]) -> None:
        """Execute a full settlement plan after checking custody covers every leg.

        Must run inside ``transaction()`` so a ledger rejection on any leg
        undoes the legs already executed.
        """
        for leg in legs:
            if leg.amount < 0:
                raise LedgerTransferError(f"negative leg {leg.amount} to {leg.recipient}")
        required = sum(leg.amount for leg in legs)
        held = self.held()
        if required > held:
            raise EscrowShortfallError(required, held)
        for leg in legs:
            self.push(leg)
