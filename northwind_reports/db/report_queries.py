"""Database service running reporting views as fixed SQL templates."""
# pylint: disable=duplicate-code

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any

from sqlalchemy import Engine, text
from sqlalchemy.exc import SQLAlchemyError

from northwind_reports.db.interfaces import (
    ContactPaymentRecord,
    CustomerPaymentRecord,
    CustomerSegmentRecord,
    IntegrityViolationRecord,
    MonthlyGrowthRecord,
    ProductRevenueRecord,
    ReportRepositoryPort,
    YearRevenueRecord,
)
from northwind_reports.domain import DOMAIN_INTEGRITY_CHECK_NAMES, DataSourceUnavailableError

_LINE_REVENUE_SQL = "CAST(od.unit_price AS numeric) * od.quantity * (1 - CAST(od.discount AS numeric))"


class SQLAlchemyReportService(ReportRepositoryPort):
    """SQLAlchemy implementation pushing every report down to PostgreSQL."""

    _YEAR_REVENUE_QUERY = (
        "WITH year_orders AS ("
        "SELECT order_id FROM orders "
        "WHERE order_date BETWEEN CAST(:period_start AS date) AND CAST(:period_end AS date)"
        ") "
        f"SELECT COALESCE(SUM({_LINE_REVENUE_SQL}), 0) AS total_revenue, COUNT(od.order_id) AS line_count "
        "FROM year_orders yo "
        "JOIN order_details od ON od.order_id = yo.order_id"
    )

    _MONTHLY_GROWTH_QUERY = (
        "WITH monthly_revenue AS ("
        "SELECT "
        "CAST(EXTRACT(YEAR FROM o.order_date) AS integer) AS order_year, "
        "CAST(EXTRACT(MONTH FROM o.order_date) AS integer) AS order_month, "
        f"SUM({_LINE_REVENUE_SQL}) AS monthly_revenue "
        "FROM orders o "
        "JOIN order_details od ON od.order_id = o.order_id "
        "WHERE o.order_date IS NOT NULL "
        "GROUP BY 1, 2"
        "), monthly_with_previous AS ("
        "SELECT order_year, order_month, monthly_revenue, "
        "LAG(monthly_revenue) OVER (PARTITION BY order_year ORDER BY order_month) AS previous_month_revenue, "
        "SUM(monthly_revenue) OVER ("
        "PARTITION BY order_year ORDER BY order_month ROWS BETWEEN UNBOUNDED PRECEDING AND CURRENT ROW"
        ") AS year_to_date_revenue "
        "FROM monthly_revenue"
        ") "
        "SELECT order_year, order_month, monthly_revenue, previous_month_revenue, "
        "monthly_revenue - previous_month_revenue AS revenue_change, "
        "ROUND((monthly_revenue - previous_month_revenue) / NULLIF(previous_month_revenue, 0) * 100, 2) "
        "AS revenue_change_percent, "
        "year_to_date_revenue "
        "FROM monthly_with_previous "
        "ORDER BY order_year asc, order_month asc"
    )

    _CUSTOMER_TOTALS_CTE = (
        "WITH customer_totals AS ("
        f"SELECT c.customer_id, c.company_name, SUM({_LINE_REVENUE_SQL}) AS total_paid "
        "FROM customers c "
        "JOIN orders o ON o.customer_id = c.customer_id "
        "JOIN order_details od ON od.order_id = o.order_id "
        "GROUP BY c.customer_id, c.company_name"
        ") "
    )

    _CUSTOMER_ORDERING_SQL = 'total_paid desc, customer_id COLLATE "C" asc'

    _CUSTOMER_PAYMENTS_QUERY = (
        _CUSTOMER_TOTALS_CTE
        + "SELECT customer_id, company_name, total_paid FROM customer_totals "
        + f"ORDER BY {_CUSTOMER_ORDERING_SQL}"
    )

    _CUSTOMER_SEGMENTS_SELECT = (
        "SELECT customer_id, company_name, total_paid, "
        f"NTILE(CAST(:group_count AS integer)) OVER (ORDER BY {_CUSTOMER_ORDERING_SQL}) AS group_number "
        "FROM customer_totals"
    )

    _CUSTOMER_SEGMENTS_QUERY = (
        _CUSTOMER_TOTALS_CTE + _CUSTOMER_SEGMENTS_SELECT + f" ORDER BY {_CUSTOMER_ORDERING_SQL}"
    )

    _MARKETING_TARGETS_QUERY = (
        _CUSTOMER_TOTALS_CTE
        + ", customer_segments AS ("
        + _CUSTOMER_SEGMENTS_SELECT
        + ") "
        + "SELECT customer_id, company_name, total_paid, group_number FROM customer_segments "
        + "WHERE group_number >= CAST(:min_group AS integer) "
        + f"ORDER BY {_CUSTOMER_ORDERING_SQL}"
    )

    _TOP_PRODUCTS_QUERY = (
        f"SELECT p.product_id, p.product_name, SUM({_LINE_REVENUE_SQL}) AS total_revenue "
        "FROM products p "
        "JOIN order_details od ON od.product_id = p.product_id "
        "GROUP BY p.product_id, p.product_name "
        "ORDER BY total_revenue desc, p.product_id asc "
        "LIMIT :limit"
    )

    _CONTACTS_OVER_THRESHOLD_QUERY = (
        f"SELECT c.contact_name, UPPER(c.country) AS country, SUM({_LINE_REVENUE_SQL}) AS total_paid "
        "FROM customers c "
        "JOIN orders o ON o.customer_id = c.customer_id "
        "JOIN order_details od ON od.order_id = o.order_id "
        "WHERE LOWER(c.country) = :country_code "
        "GROUP BY c.contact_name, UPPER(c.country) "
        f"HAVING SUM({_LINE_REVENUE_SQL}) > CAST(:threshold AS numeric) "
        'ORDER BY total_paid desc, c.contact_name COLLATE "C" asc NULLS LAST'
    )

    _DATA_INTEGRITY_QUERY = (
        "SELECT "
        "(SELECT COUNT(*) FROM order_details od LEFT JOIN orders o ON o.order_id = od.order_id "
        "WHERE o.order_id IS NULL) AS order_line_missing_order, "
        "(SELECT COUNT(*) FROM order_details od LEFT JOIN products p ON p.product_id = od.product_id "
        "WHERE p.product_id IS NULL) AS order_line_missing_product, "
        "(SELECT COUNT(*) FROM orders o LEFT JOIN customers c ON c.customer_id = o.customer_id "
        "WHERE c.customer_id IS NULL) AS order_missing_customer, "
        "(SELECT COUNT(*) FROM orders WHERE order_date IS NULL) AS order_missing_date, "
        "(SELECT COUNT(*) FROM order_details WHERE unit_price < 0) AS negative_unit_price, "
        "(SELECT COUNT(*) FROM order_details WHERE quantity <= 0) AS non_positive_quantity, "
        "(SELECT COUNT(*) FROM order_details WHERE discount < 0 OR discount >= 1) AS discount_out_of_range"
    )

    def __init__(self, engine: Engine):
        """Initialize report service dependencies.

        Args:
            engine: SQLAlchemy engine used for report reads.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when engine is invalid.
        """

        if engine is None:
            raise ValueError("engine must not be None")
        self._engine = engine

    def db_report_total_revenue_for_year(self, year: int) -> YearRevenueRecord:
        """Sum line revenue for orders dated within `year`.

        Orders are narrowed to the year range before joining order lines.

        Args:
            year: Calendar year.

        Returns:
            YearRevenueRecord: Year total and summed line count.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        parameters = {
            "period_start": date(year, 1, 1).isoformat(),
            "period_end": date(year, 12, 31).isoformat(),
        }
        rows = self._db_report_fetch_rows("total_revenue_for_year", self._YEAR_REVENUE_QUERY, parameters)
        row = rows[0]
        return YearRevenueRecord(
            year=year,
            total_revenue=Decimal(row["total_revenue"]),
            line_count=int(row["line_count"]),
        )

    def db_report_monthly_growth(self) -> list[MonthlyGrowthRecord]:
        """Return monthly revenue, change and year-to-date totals.

        Returns:
            list[MonthlyGrowthRecord]: Rows ordered by year and month.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        rows = self._db_report_fetch_rows("monthly_growth", self._MONTHLY_GROWTH_QUERY, {})
        return [
            MonthlyGrowthRecord(
                year=int(row["order_year"]),
                month=int(row["order_month"]),
                monthly_revenue=Decimal(row["monthly_revenue"]),
                previous_month_revenue=_db_report_optional_decimal(row["previous_month_revenue"]),
                revenue_change=_db_report_optional_decimal(row["revenue_change"]),
                revenue_change_percent=_db_report_optional_decimal(row["revenue_change_percent"]),
                year_to_date_revenue=Decimal(row["year_to_date_revenue"]),
            )
            for row in rows
        ]

    def db_report_customer_payments(self) -> list[CustomerPaymentRecord]:
        """Return total paid per customer, highest first.

        Returns:
            list[CustomerPaymentRecord]: Rows ordered by total descending, then customer id.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        rows = self._db_report_fetch_rows("customer_payments", self._CUSTOMER_PAYMENTS_QUERY, {})
        return [
            CustomerPaymentRecord(
                customer_id=row["customer_id"],
                company_name=row["company_name"],
                total_paid=Decimal(row["total_paid"]),
            )
            for row in rows
        ]

    def db_report_customer_segments(self, group_count: int) -> list[CustomerSegmentRecord]:
        """Split customers ranked by total paid into `group_count` NTILE groups.

        Args:
            group_count: Number of segments.

        Returns:
            list[CustomerSegmentRecord]: Rows ordered by total descending, then customer id.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        rows = self._db_report_fetch_rows(
            "customer_segments",
            self._CUSTOMER_SEGMENTS_QUERY,
            {"group_count": group_count},
        )
        return [_db_report_build_segment_record(row) for row in rows]

    def db_report_marketing_targets(self, group_count: int, min_group: int) -> list[CustomerSegmentRecord]:
        """Return segmented customers whose group number is at least `min_group`.

        Args:
            group_count: Number of segments.
            min_group: Lowest included group number.

        Returns:
            list[CustomerSegmentRecord]: Rows ordered by total descending, then customer id.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        rows = self._db_report_fetch_rows(
            "marketing_targets",
            self._MARKETING_TARGETS_QUERY,
            {"group_count": group_count, "min_group": min_group},
        )
        return [_db_report_build_segment_record(row) for row in rows]

    def db_report_top_products(self, limit: int) -> list[ProductRevenueRecord]:
        """Return the `limit` products with the highest revenue.

        Args:
            limit: Maximum row count.

        Returns:
            list[ProductRevenueRecord]: Rows ordered by revenue descending, then product id.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        rows = self._db_report_fetch_rows("top_products", self._TOP_PRODUCTS_QUERY, {"limit": limit})
        return [
            ProductRevenueRecord(
                product_id=int(row["product_id"]),
                product_name=row["product_name"],
                total_revenue=Decimal(row["total_revenue"]),
            )
            for row in rows
        ]

    def db_report_contacts_over_threshold(self, country_code: str, threshold: Decimal) -> list[ContactPaymentRecord]:
        """Return contact-name totals in one country strictly above `threshold`.

        Customers sharing a contact name in the same country are summed together.

        Args:
            country_code: Country matched case-insensitively.
            threshold: Exclusive lower bound on total paid.

        Returns:
            list[ContactPaymentRecord]: Rows ordered by total descending, then contact name.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        rows = self._db_report_fetch_rows(
            "uk_customers_over_threshold",
            self._CONTACTS_OVER_THRESHOLD_QUERY,
            {"country_code": country_code.strip().lower(), "threshold": str(threshold)},
        )
        return [
            ContactPaymentRecord(
                contact_name=row["contact_name"],
                country=row["country"],
                total_paid=Decimal(row["total_paid"]),
            )
            for row in rows
        ]

    def db_report_data_integrity(self) -> list[IntegrityViolationRecord]:
        """Count referential and numeric invariant violations in base relations.

        Returns:
            list[IntegrityViolationRecord]: One counter per check, in fixed order.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        rows = self._db_report_fetch_rows("data_integrity", self._DATA_INTEGRITY_QUERY, {})
        row = rows[0]
        return [
            IntegrityViolationRecord(check_name=check_name, violation_count=int(row[check_name]))
            for check_name in DOMAIN_INTEGRITY_CHECK_NAMES
        ]

    def _db_report_fetch_rows(self, report_name: str, query: str, parameters: dict[str, Any]) -> list[Any]:
        """Execute one fixed report query and return row mappings.

        Args:
            report_name: Report label used in error context.
            query: Fixed SQL template.
            parameters: Bound query parameters.

        Returns:
            list[Any]: Row mappings in query order.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

        try:
            with self._engine.connect() as connection:
                return list(connection.execute(text(query), parameters).mappings().all())
        except SQLAlchemyError as error:
            raise DataSourceUnavailableError(
                f"{report_name} read failed",
                report_name=report_name,
                parameters=parameters,
            ) from error


def _db_report_optional_decimal(value: object | None) -> Decimal | None:
    """Convert an optional numeric column value to Decimal.

    Args:
        value: Column value.

    Returns:
        Decimal | None: Decimal value or None.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if value is None:
        return None
    return Decimal(value)


def _db_report_build_segment_record(row: Any) -> CustomerSegmentRecord:
    """Build one segment record from a row mapping.

    Args:
        row: Row mapping with customer and group columns.

    Returns:
        CustomerSegmentRecord: Typed segment record.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return CustomerSegmentRecord(
        customer_id=row["customer_id"],
        company_name=row["company_name"],
        total_paid=Decimal(row["total_paid"]),
        group_number=int(row["group_number"]),
    )


__all__ = ["SQLAlchemyReportService"]
