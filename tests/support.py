"""Test constants and helpers shared across unit and integration tests."""

from src.xm_clearing.domain.fee import DEFAULT_FEE_TIERS
from src.xm_common.errors import LedgerTransferError
from src.xm_escrow.infrastructure.memory_ledger import InMemorySettlementLedger
from src.xm_params.domain.models import MarketParams

OWNER = "owner"
ALICE = "alice"  # buyer
BOB = "bob"  # seller
CAROL = "carol"
ALICE_XNM = "0x" + "a1" * 20  # alice's XNM delivery address
FEE_RECEIVER = "fee-receiver"
ESCROW = "escrow"

MIN_TRADE_AMOUNT = 50
SELLER_DEPOSIT_RATE = 21
BUYER_DEPOSIT_RATE = 5


def make_params(**overrides: object) -> MarketParams:
    fields: dict[str, object] = {
        "usdt_token_address": "usdt",
        "fee_receiver": FEE_RECEIVER,
        "min_trade_amount": MIN_TRADE_AMOUNT,
        "seller_deposit_rate": SELLER_DEPOSIT_RATE,
        "buyer_deposit_rate": BUYER_DEPOSIT_RATE,
        "owner": OWNER,
        "fee_tiers": DEFAULT_FEE_TIERS,
    }
    fields.update(overrides)
    return MarketParams(**fields)  # type: ignore[arg-type]


def fund(ledger: InMemorySettlementLedger, account: str, amount: int) -> None:
    """Give ``account`` ``amount`` units and raise its escrow allowance by the same."""
    ledger.issue(account, amount)
    ledger.approve(account, ESCROW, ledger.allowance(account, ESCROW) + amount)


class BlockingLedger(InMemorySettlementLedger):
    """Ledger that rejects every push to ``blocked`` (None = accept everything)."""

    def __init__(self, blocked: str | None = None) -> None:
        super().__init__()
        self.blocked = blocked

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        if recipient == self.blocked:
            raise LedgerTransferError(f"recipient {recipient} is blocked")
        super().transfer(sender, recipient, amount)
