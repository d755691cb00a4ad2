"""Integer arithmetic for settlement-asset amounts.

All prices, totals, deposits and fees are ints in the settlement asset's base
unit. No float, no Decimal.
"""


def order_value(xnm_amount: int, price: int) -> int:
    """Settlement value of ``xnm_amount`` units at ``price`` per unit."""
    return xnm_amount * price


def calc_deposit(value: int, rate_pct: int) -> int:
    """Collateral for ``value`` at ``rate_pct`` percent, rounded down."""
    return value * rate_pct // 100


def pro_rata(amount: int, part: int, whole: int) -> int:
    """``amount * part / whole`` rounded down; ``whole`` must be positive."""
    if whole <= 0:
        raise ValueError(f"whole must be positive, got {whole}")
    return amount * part // whole
