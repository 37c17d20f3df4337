"""Tests for the shared line-revenue formula and percentage-change helper."""

from __future__ import annotations

from decimal import Decimal

import pytest

from northwind_reports.domain import domain_line_invariant_violation, domain_line_revenue, domain_percent_change


def test_domain_line_revenue_applies_discount_fraction() -> None:
    """Compute unit_price * quantity * (1 - discount) exactly.

    Returns:
        None: Assertions validate computed revenue.

    Raises:
        AssertionError: Raised when revenue differs from the formula.
    """

    assert domain_line_revenue(Decimal("10"), 5, Decimal("0.1")) == Decimal("45.0")
    assert domain_line_revenue(Decimal("14.4"), 12, Decimal("0")) == Decimal("172.8")
    assert domain_line_revenue(Decimal("0"), 3, Decimal("0.25")) == Decimal("0")


@pytest.mark.parametrize(
    ("unit_price", "quantity", "discount", "expected_violation"),
    [
        (Decimal("-1"), 1, Decimal("0"), "negative_unit_price"),
        (Decimal("1"), 0, Decimal("0"), "non_positive_quantity"),
        (Decimal("1"), 1, Decimal("1"), "discount_out_of_range"),
        (Decimal("1"), 1, Decimal("-0.05"), "discount_out_of_range"),
    ],
)
def test_domain_line_revenue_rejects_invariant_violations(
    unit_price: Decimal,
    quantity: int,
    discount: Decimal,
    expected_violation: str,
) -> None:
    """Reject lines outside numeric invariants with the violation name.

    Returns:
        None: Assertions validate rejection.

    Raises:
        AssertionError: Raised when an invalid line is accepted.
    """

    assert domain_line_invariant_violation(unit_price, quantity, discount) == expected_violation
    with pytest.raises(ValueError, match=expected_violation):
        domain_line_revenue(unit_price, quantity, discount)


def test_domain_percent_change_is_null_without_usable_previous_value() -> None:
    """Return None when previous value is missing or zero.

    Returns:
        None: Assertions validate null handling.

    Raises:
        AssertionError: Raised when a value is produced.
    """

    assert domain_percent_change(Decimal("10"), None) is None
    assert domain_percent_change(Decimal("10"), Decimal("0")) is None


def test_domain_percent_change_rounds_half_away_from_zero() -> None:
    """Round percentage change to two decimals, half away from zero.

    Returns:
        None: Assertions validate rounding.

    Raises:
        AssertionError: Raised when rounding differs.
    """

    assert domain_percent_change(Decimal("150"), Decimal("100")) == Decimal("50.00")
    assert domain_percent_change(Decimal("50"), Decimal("100")) == Decimal("-50.00")
    assert domain_percent_change(Decimal("1.00125"), Decimal("1")) == Decimal("0.13")
    assert domain_percent_change(Decimal("0.99875"), Decimal("1")) == Decimal("-0.13")
    assert domain_percent_change(Decimal("2"), Decimal("3")) == Decimal("-33.33")
