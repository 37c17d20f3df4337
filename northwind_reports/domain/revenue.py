"""Line revenue formula and order-line numeric invariants.

Every monetary aggregate in the reporting layer is built from
`domain_line_revenue`, so SQL and in-memory reports agree on one formula.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_DOMAIN_ZERO = Decimal("0")
_DOMAIN_ONE = Decimal("1")
_DOMAIN_HUNDRED = Decimal("100")
_DOMAIN_PERCENT_QUANTUM = Decimal("0.01")

DOMAIN_INTEGRITY_CHECK_NAMES = (
    "order_line_missing_order",
    "order_line_missing_product",
    "order_missing_customer",
    "order_missing_date",
    "negative_unit_price",
    "non_positive_quantity",
    "discount_out_of_range",
)


def domain_line_revenue(unit_price: Decimal, quantity: int, discount: Decimal) -> Decimal:
    """Compute revenue for one order line.

    Args:
        unit_price: Unit price charged on the line.
        quantity: Number of units sold.
        discount: Discount fraction in `[0, 1)`.

    Returns:
        Decimal: `unit_price * quantity * (1 - discount)`.

    Raises:
        ValueError: Raised when a numeric invariant is violated.
    """

    violation = domain_line_invariant_violation(unit_price=unit_price, quantity=quantity, discount=discount)
    if violation is not None:
        raise ValueError(f"order line violates {violation}")
    return unit_price * quantity * (_DOMAIN_ONE - discount)


def domain_line_invariant_violation(unit_price: Decimal, quantity: int, discount: Decimal) -> str | None:
    """Return the name of the first violated order-line invariant.

    Args:
        unit_price: Unit price charged on the line.
        quantity: Number of units sold.
        discount: Discount fraction.

    Returns:
        str | None: Violation name, or None when the line is valid.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if unit_price < _DOMAIN_ZERO:
        return "negative_unit_price"
    if quantity <= 0:
        return "non_positive_quantity"
    if discount < _DOMAIN_ZERO or discount >= _DOMAIN_ONE:
        return "discount_out_of_range"
    return None


def domain_percent_change(current: Decimal, previous: Decimal | None) -> Decimal | None:
    """Compute percentage change rounded to two decimals, half away from zero.

    Args:
        current: Current period value.
        previous: Previous period value, or None when there is no previous period.

    Returns:
        Decimal | None: Percentage change, or None when previous is None or zero.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if previous is None or previous == _DOMAIN_ZERO:
        return None
    change_percent = (current - previous) / previous * _DOMAIN_HUNDRED
    return change_percent.quantize(_DOMAIN_PERCENT_QUANTUM, rounding=ROUND_HALF_UP)


__all__ = [
    "DOMAIN_INTEGRITY_CHECK_NAMES",
    "domain_line_invariant_violation",
    "domain_line_revenue",
    "domain_percent_change",
]
