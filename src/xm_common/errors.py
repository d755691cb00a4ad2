"""Unified error codes and custom exceptions.

Every error carries a stable ``kind`` so callers can discriminate failures
without parsing messages. Ledger failures derive from ``LedgerError`` so they
are distinguishable from business-rule rejections.

Error code ranges:
  1xxx: Caller authorization
  2xxx: Escrow / settlement ledger
  3xxx: Market parameters
  4xxx: Order
  5xxx: Trade
"""


class AppError(Exception):
    """Base application error."""

    kind: str = "AppError"

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Caller authorization ---

class NotOwnerError(AppError):
    kind = "NotOwner"

    def __init__(self, caller: str) -> None:
        super().__init__(1001, f"Caller {caller} is not the owner", 403)


class NotBuyerError(AppError):
    kind = "NotBuyer"

    def __init__(self, caller: str, trade_id: int) -> None:
        super().__init__(1002, f"Only buyer can confirm trade {trade_id} (caller {caller})", 403)


class NotSellerError(AppError):
    kind = "NotSeller"

    def __init__(self, caller: str, order_id: int) -> None:
        super().__init__(1003, f"Caller {caller} is not the seller of order {order_id}", 403)


class NotArbitratorError(AppError):
    kind = "NotArbitrator"

    def __init__(self, caller: str) -> None:
        super().__init__(1004, f"Caller {caller} is not the arbitrator", 403)


class MissingCallerError(AppError):
    kind = "MissingCaller"

    def __init__(self) -> None:
        super().__init__(1005, "Caller identity is required", 401)


# --- 2xxx: Escrow / settlement ledger ---

class LedgerError(AppError):
    """Raised when the settlement ledger rejects a movement of funds."""

    kind = "LedgerError"


class InsufficientAllowanceError(LedgerError):
    kind = "InsufficientAllowance"

    def __init__(self, owner: str, required: int, allowance: int, balance: int) -> None:
        super().__init__(
            2001,
            f"Not enough allowance for {owner}: required {required}, "
            f"allowance {allowance}, balance {balance}",
            422,
        )
        self.owner = owner
        self.required = required


class LedgerTransferError(LedgerError):
    kind = "LedgerTransferFailed"

    def __init__(self, detail: str) -> None:
        super().__init__(2002, f"Ledger transfer failed: {detail}", 502)


class EscrowShortfallError(LedgerError):
    kind = "EscrowShortfall"

    def __init__(self, required: int, held: int) -> None:
        super().__init__(
            2003, f"Escrow shortfall: settlement requires {required}, custody holds {held}", 500
        )


# --- 3xxx: Market parameters ---

class MarketPausedError(AppError):
    kind = "MarketPaused"

    def __init__(self) -> None:
        super().__init__(3001, "New orders are paused", 422)


class InvalidParamsError(AppError):
    kind = "InvalidParams"

    def __init__(self, detail: str) -> None:
        super().__init__(3002, f"Invalid market params: {detail}", 422)


# --- 4xxx: Order ---

class BelowMinTradeAmountError(AppError):
    kind = "BelowMinTradeAmount"

    def __init__(self, value: int, minimum: int) -> None:
        super().__init__(4001, f"Below minTradeAmount: {value} < {minimum}", 422)


class RangeInvalidError(AppError):
    kind = "RangeInvalid"

    def __init__(self, min_xnm: int, max_xnm: int) -> None:
        super().__init__(4002, f"min>max: {min_xnm} > {max_xnm}", 422)


class OrderInactiveError(AppError):
    kind = "OrderInactive"

    def __init__(self, order_id: int) -> None:
        super().__init__(4003, f"Order {order_id} is not active", 422)


class OrderNotFoundError(AppError):
    kind = "OrderNotFound"

    def __init__(self, order_id: int) -> None:
        super().__init__(4004, f"Order not found: {order_id}", 404)


class InvalidAmountError(AppError):
    kind = "InvalidAmount"

    def __init__(self, amount: int) -> None:
        super().__init__(4005, f"Invalid XNM amount: {amount}", 422)


class InvalidPriceError(AppError):
    kind = "InvalidPrice"

    def __init__(self, price: int) -> None:
        super().__init__(4006, f"Invalid price: {price}", 422)


class InvalidDeliveryDaysError(AppError):
    kind = "InvalidDeliveryDays"

    def __init__(self, days: int, maximum: int) -> None:
        super().__init__(4007, f"Delivery days {days} must be in [1, {maximum}]", 422)


class AmountOutOfRangeError(AppError):
    kind = "AmountOutOfRange"

    def __init__(self, amount: int, min_xnm: int, max_xnm: int) -> None:
        super().__init__(
            4008, f"XNM amount {amount} outside sell order range [{min_xnm}, {max_xnm}]", 422
        )


class InvalidDeliveryAddressError(AppError):
    kind = "InvalidDeliveryAddress"

    def __init__(self, address: str) -> None:
        super().__init__(4009, f"Invalid XNM delivery address: {address!r}", 422)


# --- 5xxx: Trade ---

class TradeNotActiveError(AppError):
    kind = "TradeNotActive"

    def __init__(self, trade_id: int, status: str) -> None:
        super().__init__(5001, f"Trade {trade_id} in status {status} is not active", 422)


class TradeNotFoundError(AppError):
    kind = "TradeNotFound"

    def __init__(self, trade_id: int) -> None:
        super().__init__(5002, f"Trade not found: {trade_id}", 404)


class DistributionMismatchError(AppError):
    kind = "DistributionMismatch"

    def __init__(self, detail: str) -> None:
        super().__init__(5003, f"Distribution mismatch: {detail}", 422)
