"""In-memory report computation over a loaded sales dataset.

Each function mirrors one SQL report in `db.report_queries`: the same grouping
keys, the same line-revenue formula and the same ordering, so both backends
return identical rows for the same snapshot. Lines whose order, product or
customer is missing are excluded exactly as an inner join would exclude them;
the integrity audit reports how many such rows exist.
"""

from __future__ import annotations

from collections import defaultdict
from decimal import Decimal
from typing import Iterator

from northwind_reports.db.interfaces import (
    ContactPaymentRecord,
    CustomerPaymentRecord,
    CustomerRecord,
    CustomerSegmentRecord,
    IntegrityViolationRecord,
    MonthlyGrowthRecord,
    OrderLineRecord,
    OrderRecord,
    ProductRevenueRecord,
    SalesDataset,
    YearRevenueRecord,
)
from northwind_reports.domain import (
    DOMAIN_INTEGRITY_CHECK_NAMES,
    MalformedInputDataError,
    domain_line_invariant_violation,
    domain_line_revenue,
    domain_ntile_assign,
    domain_percent_change,
)

_ZERO = Decimal("0")
_ONE = Decimal("1")


def analytics_audit_integrity(dataset: SalesDataset) -> list[IntegrityViolationRecord]:
    """Count referential and numeric invariant violations.

    Each check is counted independently, so one line may contribute to several
    numeric counters.

    Args:
        dataset: Loaded base relations.

    Returns:
        list[IntegrityViolationRecord]: One counter per check, in fixed order.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    order_ids = {order.order_id for order in dataset.orders}
    product_ids = {product.product_id for product in dataset.products}
    customer_ids = {customer.customer_id for customer in dataset.customers}

    violation_counts = dict.fromkeys(DOMAIN_INTEGRITY_CHECK_NAMES, 0)
    for line in dataset.order_lines:
        if line.order_id not in order_ids:
            violation_counts["order_line_missing_order"] += 1
        if line.product_id not in product_ids:
            violation_counts["order_line_missing_product"] += 1
        if line.unit_price < _ZERO:
            violation_counts["negative_unit_price"] += 1
        if line.quantity <= 0:
            violation_counts["non_positive_quantity"] += 1
        if line.discount < _ZERO or line.discount >= _ONE:
            violation_counts["discount_out_of_range"] += 1
    for order in dataset.orders:
        if order.customer_id not in customer_ids:
            violation_counts["order_missing_customer"] += 1
        if order.order_date is None:
            violation_counts["order_missing_date"] += 1

    return [
        IntegrityViolationRecord(check_name=check_name, violation_count=violation_counts[check_name])
        for check_name in DOMAIN_INTEGRITY_CHECK_NAMES
    ]


def analytics_total_revenue_for_year(dataset: SalesDataset, year: int) -> YearRevenueRecord:
    """Sum line revenue for orders dated within `year`.

    Orders are filtered by year before lines are matched to them.

    Args:
        dataset: Loaded base relations.
        year: Calendar year.

    Returns:
        YearRevenueRecord: Year total and summed line count.

    Raises:
        MalformedInputDataError: Raised when a matched line violates numeric invariants.
    """

    year_order_ids = {
        order.order_id for order in dataset.orders if order.order_date is not None and order.order_date.year == year
    }
    total_revenue = _ZERO
    line_count = 0
    for line in dataset.order_lines:
        if line.order_id not in year_order_ids:
            continue
        total_revenue += _analytics_line_revenue(line)
        line_count += 1
    return YearRevenueRecord(year=year, total_revenue=total_revenue, line_count=line_count)


def analytics_monthly_growth(dataset: SalesDataset) -> list[MonthlyGrowthRecord]:
    """Return monthly revenue with change against the previous month and YTD totals.

    The previous month is the preceding month with sales in the same year; the
    first month of each year has no previous month. Orders without a date are
    excluded.

    Args:
        dataset: Loaded base relations.

    Returns:
        list[MonthlyGrowthRecord]: Rows ordered by year and month.

    Raises:
        MalformedInputDataError: Raised when a matched line violates numeric invariants.
    """

    monthly_revenue: dict[tuple[int, int], Decimal] = defaultdict(lambda: _ZERO)
    for order, line in _analytics_iter_order_lines(dataset):
        if order.order_date is None:
            continue
        monthly_revenue[(order.order_date.year, order.order_date.month)] += _analytics_line_revenue(line)

    growth_rows: list[MonthlyGrowthRecord] = []
    current_year: int | None = None
    previous_revenue: Decimal | None = None
    year_to_date = _ZERO
    for (year, month) in sorted(monthly_revenue):
        revenue = monthly_revenue[(year, month)]
        if year != current_year:
            current_year = year
            previous_revenue = None
            year_to_date = _ZERO
        year_to_date += revenue
        growth_rows.append(
            MonthlyGrowthRecord(
                year=year,
                month=month,
                monthly_revenue=revenue,
                previous_month_revenue=previous_revenue,
                revenue_change=None if previous_revenue is None else revenue - previous_revenue,
                revenue_change_percent=domain_percent_change(revenue, previous_revenue),
                year_to_date_revenue=year_to_date,
            )
        )
        previous_revenue = revenue
    return growth_rows


def analytics_customer_payments(dataset: SalesDataset) -> list[CustomerPaymentRecord]:
    """Return total paid per customer ordered by total descending, then customer id.

    Args:
        dataset: Loaded base relations.

    Returns:
        list[CustomerPaymentRecord]: Customers with at least one matched order line.

    Raises:
        MalformedInputDataError: Raised when a matched line violates numeric invariants.
    """

    customers_by_id = {customer.customer_id: customer for customer in dataset.customers}
    totals: dict[str, Decimal] = defaultdict(lambda: _ZERO)
    for order, line in _analytics_iter_order_lines(dataset):
        if order.customer_id not in customers_by_id:
            continue
        totals[order.customer_id] += _analytics_line_revenue(line)

    ranked_customer_ids = sorted(totals, key=lambda customer_id: (-totals[customer_id], customer_id))
    return [
        CustomerPaymentRecord(
            customer_id=customer_id,
            company_name=customers_by_id[customer_id].company_name,
            total_paid=totals[customer_id],
        )
        for customer_id in ranked_customer_ids
    ]


def analytics_customer_segments(dataset: SalesDataset, group_count: int) -> list[CustomerSegmentRecord]:
    """Split ranked customer totals into `group_count` NTILE groups.

    Args:
        dataset: Loaded base relations.
        group_count: Number of segments.

    Returns:
        list[CustomerSegmentRecord]: Rows in customer payment order; group 1 holds the top spenders.

    Raises:
        ValueError: Raised when group_count is not positive.
        MalformedInputDataError: Raised when a matched line violates numeric invariants.
    """

    payments = analytics_customer_payments(dataset)
    group_numbers = domain_ntile_assign(item_count=len(payments), group_count=group_count)
    return [
        CustomerSegmentRecord(
            customer_id=payment.customer_id,
            company_name=payment.company_name,
            total_paid=payment.total_paid,
            group_number=group_number,
        )
        for payment, group_number in zip(payments, group_numbers)
    ]


def analytics_marketing_targets(
    dataset: SalesDataset,
    group_count: int,
    min_group: int,
) -> list[CustomerSegmentRecord]:
    """Return segmented customers whose group number is at least `min_group`.

    Args:
        dataset: Loaded base relations.
        group_count: Number of segments.
        min_group: Lowest included group number.

    Returns:
        list[CustomerSegmentRecord]: Lower-spending segments in customer payment order.

    Raises:
        MalformedInputDataError: Raised when a matched line violates numeric invariants.
    """

    return [
        segment
        for segment in analytics_customer_segments(dataset, group_count=group_count)
        if segment.group_number >= min_group
    ]


def analytics_top_products(dataset: SalesDataset, limit: int) -> list[ProductRevenueRecord]:
    """Return the `limit` products with the highest revenue.

    Args:
        dataset: Loaded base relations.
        limit: Maximum row count.

    Returns:
        list[ProductRevenueRecord]: Rows ordered by revenue descending, then product id.

    Raises:
        MalformedInputDataError: Raised when a matched line violates numeric invariants.
    """

    products_by_id = {product.product_id: product for product in dataset.products}
    totals: dict[int, Decimal] = defaultdict(lambda: _ZERO)
    for line in dataset.order_lines:
        if line.product_id not in products_by_id:
            continue
        totals[line.product_id] += _analytics_line_revenue(line)

    ranked_product_ids = sorted(totals, key=lambda product_id: (-totals[product_id], product_id))[:limit]
    return [
        ProductRevenueRecord(
            product_id=product_id,
            product_name=products_by_id[product_id].product_name,
            total_revenue=totals[product_id],
        )
        for product_id in ranked_product_ids
    ]


def analytics_contacts_over_threshold(
    dataset: SalesDataset,
    country_code: str,
    threshold: Decimal,
) -> list[ContactPaymentRecord]:
    """Return contact-name totals in one country strictly above `threshold`.

    The grouping key is the contact name, so two customers in the same country
    sharing a contact name are summed into one row.

    Args:
        dataset: Loaded base relations.
        country_code: Country matched case-insensitively.
        threshold: Exclusive lower bound on total paid.

    Returns:
        list[ContactPaymentRecord]: Rows ordered by total descending, then contact name.

    Raises:
        MalformedInputDataError: Raised when a matched line violates numeric invariants.
    """

    normalized_country_code = country_code.strip().lower()
    matching_customers: dict[str, CustomerRecord] = {
        customer.customer_id: customer
        for customer in dataset.customers
        if customer.country is not None and customer.country.lower() == normalized_country_code
    }

    totals: dict[tuple[str | None, str], Decimal] = defaultdict(lambda: _ZERO)
    for order, line in _analytics_iter_order_lines(dataset):
        customer = matching_customers.get(order.customer_id)
        if customer is None:
            continue
        totals[(customer.contact_name, customer.country.upper())] += _analytics_line_revenue(line)

    qualifying_keys = [key for key, total in totals.items() if total > threshold]
    qualifying_keys.sort(key=lambda key: (-totals[key], key[0] is None, key[0] or ""))
    return [
        ContactPaymentRecord(contact_name=contact_name, country=country, total_paid=totals[(contact_name, country)])
        for contact_name, country in qualifying_keys
    ]


def _analytics_iter_order_lines(dataset: SalesDataset) -> Iterator[tuple[OrderRecord, OrderLineRecord]]:
    """Yield order lines paired with their parent order.

    Args:
        dataset: Loaded base relations.

    Returns:
        Iterator[tuple[OrderRecord, OrderLineRecord]]: Lines whose parent order exists.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    orders_by_id = {order.order_id: order for order in dataset.orders}
    for line in dataset.order_lines:
        order = orders_by_id.get(line.order_id)
        if order is None:
            continue
        yield order, line


def _analytics_line_revenue(line: OrderLineRecord) -> Decimal:
    """Compute line revenue, surfacing invariant violations as malformed data.

    Args:
        line: Order line.

    Returns:
        Decimal: Line revenue.

    Raises:
        MalformedInputDataError: Raised when the line violates numeric invariants.
    """

    violation = domain_line_invariant_violation(
        unit_price=line.unit_price,
        quantity=line.quantity,
        discount=line.discount,
    )
    if violation is not None:
        raise MalformedInputDataError(
            f"order line order_id={line.order_id} product_id={line.product_id} violates {violation}",
            violation_counts={violation: 1},
        )
    return domain_line_revenue(unit_price=line.unit_price, quantity=line.quantity, discount=line.discount)


__all__ = [
    "analytics_audit_integrity",
    "analytics_contacts_over_threshold",
    "analytics_customer_payments",
    "analytics_customer_segments",
    "analytics_marketing_targets",
    "analytics_monthly_growth",
    "analytics_top_products",
    "analytics_total_revenue_for_year",
]
