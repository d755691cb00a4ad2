"""Order validation rules, each raising a dedicated AppError."""
from src.xm_common.errors import (
    AmountOutOfRangeError,
    BelowMinTradeAmountError,
    InvalidAmountError,
    InvalidDeliveryAddressError,
    InvalidDeliveryDaysError,
    InvalidPriceError,
    RangeInvalidError,
)


def check_amount(xnm_amount: int) -> None:
    if xnm_amount <= 0:
        raise InvalidAmountError(xnm_amount)


def check_price(price: int) -> None:
    if price <= 0:
        raise InvalidPriceError(price)


def check_delivery_days(days: int, max_days: int) -> None:
    if not (1 <= days <= max_days):
        raise InvalidDeliveryDaysError(days, max_days)


def check_min_trade_amount(value: int, min_trade_amount: int) -> None:
    if value < min_trade_amount:
        raise BelowMinTradeAmountError(value, min_trade_amount)


def check_range(min_xnm: int, max_xnm: int) -> None:
    if min_xnm > max_xnm:
        raise RangeInvalidError(min_xnm, max_xnm)


def check_within_range(xnm_amount: int, min_xnm: int, max_xnm: int) -> None:
    if not (min_xnm <= xnm_amount <= max_xnm):
        raise AmountOutOfRangeError(xnm_amount, min_xnm, max_xnm)


def check_delivery_address(address: str) -> None:
    """XNM is delivered off-engine to a 0x-prefixed, 42-character address."""
    if not (address.startswith("0x") and len(address) == 42):
        raise InvalidDeliveryAddressError(address)
