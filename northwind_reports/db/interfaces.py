"""Typed interfaces for database-layer services.

All SQL access must remain in the db package and its submodules.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Protocol

from northwind_reports.domain import HealthStatus


class DatabaseHealthPort(Protocol):
    """Port definition for database connectivity verification."""

    def db_connection_label(self) -> str:
        """Return a stable label for the active database connection target.

        Returns:
            str: Database target label for diagnostics.

        Raises:
            RuntimeError: Raised when connection metadata is unavailable.
        """

    def db_check_health(self) -> HealthStatus:
        """Check database connectivity and return deterministic health payload.

        Returns:
            HealthStatus: Database health status payload.

        Raises:
            ConnectionError: Raised when database cannot be reached.
        """


@dataclass(frozen=True)
class OrderRecord:
    """One `orders` row header.

    Attributes:
        order_id: Order identifier.
        customer_id: Buying customer identifier.
        order_date: Order date; None when the source row has no date.
    """

    order_id: int
    customer_id: str
    order_date: date | None


@dataclass(frozen=True)
class OrderLineRecord:
    """One `order_details` row.

    Attributes:
        order_id: Parent order identifier.
        product_id: Sold product identifier.
        unit_price: Unit price charged.
        quantity: Units sold.
        discount: Discount fraction in `[0, 1)`.
    """

    order_id: int
    product_id: int
    unit_price: Decimal
    quantity: int
    discount: Decimal


@dataclass(frozen=True)
class CustomerRecord:
    """One `customers` row.

    Attributes:
        customer_id: Customer identifier.
        company_name: Customer company name.
        contact_name: Customer contact person.
        country: Customer country.
    """

    customer_id: str
    company_name: str
    contact_name: str | None
    country: str | None


@dataclass(frozen=True)
class ProductRecord:
    """One `products` row.

    Attributes:
        product_id: Product identifier.
        product_name: Product display name.
    """

    product_id: int
    product_name: str


@dataclass(frozen=True)
class SalesDataset:
    """Immutable snapshot of the four base relations used by reports."""

    orders: tuple[OrderRecord, ...]
    order_lines: tuple[OrderLineRecord, ...]
    customers: tuple[CustomerRecord, ...]
    products: tuple[ProductRecord, ...]


@dataclass(frozen=True)
class YearRevenueRecord:
    """Total revenue for one calendar year.

    Attributes:
        year: Calendar year.
        total_revenue: Sum of line revenue for orders dated in the year.
        line_count: Number of order lines summed.
    """

    year: int
    total_revenue: Decimal
    line_count: int


@dataclass(frozen=True)
class MonthlyGrowthRecord:
    """Monthly revenue with month-over-month change and year-to-date total.

    Attributes:
        year: Calendar year.
        month: Calendar month (1-12).
        monthly_revenue: Sum of line revenue for the month.
        previous_month_revenue: Revenue of the preceding month in the same year, if any.
        revenue_change: Absolute change against the preceding month.
        revenue_change_percent: Percentage change against the preceding month.
        year_to_date_revenue: Running revenue total within the year.
    """

    year: int
    month: int
    monthly_revenue: Decimal
    previous_month_revenue: Decimal | None
    revenue_change: Decimal | None
    revenue_change_percent: Decimal | None
    year_to_date_revenue: Decimal


@dataclass(frozen=True)
class CustomerPaymentRecord:
    """Total amount paid by one customer."""

    customer_id: str
    company_name: str
    total_paid: Decimal


@dataclass(frozen=True)
class CustomerSegmentRecord:
    """Customer payment total with its spending segment.

    Attributes:
        customer_id: Customer identifier.
        company_name: Customer company name.
        total_paid: Total amount paid.
        group_number: 1-based segment number, 1 holding the top spenders.
    """

    customer_id: str
    company_name: str
    total_paid: Decimal
    group_number: int


@dataclass(frozen=True)
class ProductRevenueRecord:
    """Total revenue for one product."""

    product_id: int
    product_name: str
    total_revenue: Decimal


@dataclass(frozen=True)
class ContactPaymentRecord:
    """Total amount paid grouped by customer contact name."""

    contact_name: str | None
    country: str
    total_paid: Decimal


@dataclass(frozen=True)
class IntegrityViolationRecord:
    """Violation counter for one base-relation integrity check."""

    check_name: str
    violation_count: int


class SalesDatasetRepositoryPort(Protocol):
    """Port definition for loading base relations into memory."""

    def db_sales_dataset_load(self) -> SalesDataset:
        """Load all base relations in one consistent read.

        Returns:
            SalesDataset: Snapshot of orders, order lines, customers and products.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """


class ReportRepositoryPort(Protocol):
    """Port definition for the read-only reporting operations."""

    def db_report_total_revenue_for_year(self, year: int) -> YearRevenueRecord:
        """Sum line revenue for orders dated within `year`.

        Args:
            year: Calendar year.

        Returns:
            YearRevenueRecord: Year total and summed line count.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

    def db_report_monthly_growth(self) -> list[MonthlyGrowthRecord]:
        """Return monthly revenue, change and year-to-date totals.

        Returns:
            list[MonthlyGrowthRecord]: Rows ordered by year and month.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

    def db_report_customer_payments(self) -> list[CustomerPaymentRecord]:
        """Return total paid per customer, highest first.

        Returns:
            list[CustomerPaymentRecord]: Rows ordered by total descending.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

    def db_report_customer_segments(self, group_count: int) -> list[CustomerSegmentRecord]:
        """Split customers ranked by total paid into `group_count` NTILE groups.

        Args:
            group_count: Number of segments.

        Returns:
            list[CustomerSegmentRecord]: Rows ordered by total descending.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

    def db_report_marketing_targets(self, group_count: int, min_group: int) -> list[CustomerSegmentRecord]:
        """Return segmented customers whose group number is at least `min_group`.

        Args:
            group_count: Number of segments.
            min_group: Lowest included group number.

        Returns:
            list[CustomerSegmentRecord]: Rows ordered by total descending.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

    def db_report_top_products(self, limit: int) -> list[ProductRevenueRecord]:
        """Return the `limit` products with the highest revenue.

        Args:
            limit: Maximum row count.

        Returns:
            list[ProductRevenueRecord]: Rows ordered by revenue descending.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

    def db_report_contacts_over_threshold(self, country_code: str, threshold: Decimal) -> list[ContactPaymentRecord]:
        """Return contact-name totals in one country strictly above `threshold`.

        Args:
            country_code: Country matched case-insensitively.
            threshold: Exclusive lower bound on total paid.

        Returns:
            list[ContactPaymentRecord]: Rows ordered by total descending.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """

    def db_report_data_integrity(self) -> list[IntegrityViolationRecord]:
        """Count referential and numeric invariant violations in base relations.

        Returns:
            list[IntegrityViolationRecord]: One counter per check, in fixed order.

        Raises:
            DataSourceUnavailableError: Raised when the database read fails.
        """
