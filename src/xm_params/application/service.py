"""ParameterStore — the single MarketParams record and its owner-only updates.

Updates only affect orders and trades created afterwards: deposits, totals and
fees of existing records are computed at creation or settlement from values
frozen into those records.
"""
import dataclasses
import logging
from collections.abc import Sequence

from src.xm_clearing.domain.fee import validate_fee_tiers
from src.xm_common.enums import EventType
from src.xm_common.errors import (
    InvalidParamsError,
    MarketPausedError,
    NotArbitratorError,
    NotOwnerError,
)
from src.xm_common.events import EventJournal
from src.xm_params.domain.models import FeeTier, MarketParams

logger = logging.getLogger(__name__)


def _check_rate(name: str, rate: int) -> None:
    if not (0 <= rate <= 100):
        raise InvalidParamsError(f"{name} must be in [0, 100], got {rate}")


class ParameterStore:
    def __init__(self, params: MarketParams, journal: EventJournal) -> None:
        _check_rate("seller_deposit_rate", params.seller_deposit_rate)
        _check_rate("buyer_deposit_rate", params.buyer_deposit_rate)
        validate_fee_tiers(params.fee_tiers)
        self._params = params
        self._journal = journal

    @property
    def current(self) -> MarketParams:
        return self._params

    def snapshot(self) -> MarketParams:
        return dataclasses.replace(self._params)

    # --- guards ---

    def require_owner(self, caller: str) -> None:
        if caller != self._params.owner:
            raise NotOwnerError(caller)

    def require_arbitrator(self, caller: str) -> None:
        if caller != self._params.owner:
            raise NotArbitratorError(caller)

    def ensure_accepting_orders(self) -> None:
        if self._params.paused:
            raise MarketPausedError()

    # --- owner updates ---

    def set_params(
        self,
        caller: str,
        seller_deposit_rate: int,
        buyer_deposit_rate: int,
        min_trade_amount: int,
    ) -> MarketParams:
        self.require_owner(caller)
        _check_rate("seller_deposit_rate", seller_deposit_rate)
        _check_rate("buyer_deposit_rate", buyer_deposit_rate)
        if min_trade_amount < 0:
            raise InvalidParamsError(f"min_trade_amount must be >= 0, got {min_trade_amount}")
        self._params.seller_deposit_rate = seller_deposit_rate
        self._params.buyer_deposit_rate = buyer_deposit_rate
        self._params.min_trade_amount = min_trade_amount
        self._journal.emit(
            EventType.PARAMS_UPDATED,
            0,
            caller,
            seller_deposit_rate=seller_deposit_rate,
            buyer_deposit_rate=buyer_deposit_rate,
            min_trade_amount=min_trade_amount,
        )
        return self.snapshot()

    def pause_new_orders(self, caller: str, paused: bool) -> MarketParams:
        self.require_owner(caller)
        self._params.paused = paused
        self._journal.emit(EventType.MARKET_PAUSED, 0, caller, paused=paused)
        return self.snapshot()

    def set_fee_receiver(self, caller: str, fee_receiver: str) -> MarketParams:
        self.require_owner(caller)
        if not fee_receiver:
            raise InvalidParamsError("fee_receiver must not be empty")
        self._params.fee_receiver = fee_receiver
        self._journal.emit(EventType.PARAMS_UPDATED, 0, caller, fee_receiver=fee_receiver)
        return self.snapshot()

    def set_fee_tiers(self, caller: str, tiers: Sequence[FeeTier]) -> MarketParams:
        self.require_owner(caller)
        new_tiers = tuple(tiers)
        validate_fee_tiers(new_tiers)
        self._params.fee_tiers = new_tiers
        self._journal.emit(
            EventType.PARAMS_UPDATED,
            0,
            caller,
            fee_tiers=[(t.min_volume, t.rate_bps) for t in new_tiers],
        )
        logger.info("Fee schedule replaced: %d tiers", len(new_tiers))
        return self.snapshot()
