"""In-process fungible-token ledger implementing SettlementLedgerProtocol.

Used by the dev server and the test suite in place of the host's settlement
ledger. Balances and allowances are plain dicts; ``atomic()`` snapshots both on
the outermost entry and restores them if the block raises.
"""
import logging
import threading
from collections import defaultdict
from collections.abc import Iterator
from contextlib import contextmanager

from src.xm_common.errors import InsufficientAllowanceError, LedgerTransferError

logger = logging.getLogger(__name__)


class InMemorySettlementLedger:
    def __init__(self, symbol: str = "USDT") -> None:
        self.symbol = symbol
        self._balances: defaultdict[str, int] = defaultdict(int)
        self._allowances: defaultdict[tuple[str, str], int] = defaultdict(int)
        self._total_supply = 0
        self._lock = threading.RLock()
        self._depth = 0

    # --- reads ---

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get((owner, spender), 0)

    @property
    def total_supply(self) -> int:
        return self._total_supply

    # --- writes ---

    def issue(self, account: str, amount: int) -> None:
        """Create ``amount`` new units for ``account`` (test/dev funding only)."""
        self._check_amount(amount)
        with self._lock:
            self._balances[account] += amount
            self._total_supply += amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        self._check_amount(amount)
        with self._lock:
            self._allowances[(owner, spender)] = amount

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self._check_amount(amount)
        with self._lock:
            available = self._balances.get(sender, 0)
            if available < amount:
                raise LedgerTransferError(
                    f"{sender} balance {available} < {amount} {self.symbol}"
                )
            self._move(sender, recipient, amount)

    def transfer_from(self, owner: str, spender: str, recipient: str, amount: int) -> None:
        self._check_amount(amount)
        with self._lock:
            allowed = self._allowances.get((owner, spender), 0)
            available = self._balances.get(owner, 0)
            if allowed < amount or available < amount:
                raise InsufficientAllowanceError(owner, amount, allowed, available)
            self._allowances[(owner, spender)] = allowed - amount
            self._move(owner, recipient, amount)

    @contextmanager
    def atomic(self) -> Iterator[None]:
        with self._lock:
            outermost = self._depth == 0
            if outermost:
                balances = dict(self._balances)
                allowances = dict(self._allowances)
                supply = self._total_supply
            self._depth += 1
            try:
                yield
            except BaseException:
                if outermost:
                    self._balances = defaultdict(int, balances)
                    self._allowances = defaultdict(int, allowances)
                    self._total_supply = supply
                    logger.debug("Ledger rolled back to pre-transaction snapshot")
                raise
            finally:
                self._depth -= 1

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        self._balances[sender] -= amount
        self._balances[recipient] += amount

    @staticmethod
    def _check_amount(amount: int) -> None:
        if amount < 0:
            raise LedgerTransferError(f"negative amount {amount}")
