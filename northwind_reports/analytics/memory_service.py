"""Report repository computing every report in memory over a cached dataset snapshot."""

from __future__ import annotations

import threading
from decimal import Decimal

from northwind_reports.db import (
    ContactPaymentRecord,
    CustomerPaymentRecord,
    CustomerSegmentRecord,
    IntegrityViolationRecord,
    MonthlyGrowthRecord,
    ProductRevenueRecord,
    ReportRepositoryPort,
    SalesDataset,
    SalesDatasetRepositoryPort,
    YearRevenueRecord,
)

from .engine import (
    analytics_audit_integrity,
    analytics_contacts_over_threshold,
    analytics_customer_payments,
    analytics_customer_segments,
    analytics_marketing_targets,
    analytics_monthly_growth,
    analytics_top_products,
    analytics_total_revenue_for_year,
)


class InMemoryReportService(ReportRepositoryPort):
    """Report repository backed by grouped-aggregation passes over loaded rows.

    The dataset is loaded once on first use and shared read-only by concurrent
    report calls until `analytics_dataset_refresh` replaces it.
    """

    def __init__(self, dataset_repository: SalesDatasetRepositoryPort):
        """Initialize in-memory report dependencies.

        Args:
            dataset_repository: Loader for the base relations.

        Returns:
            None: Initializer does not return values.

        Raises:
            ValueError: Raised when dataset_repository is invalid.
        """

        if dataset_repository is None:
            raise ValueError("dataset_repository must not be None")
        self._dataset_repository = dataset_repository
        self._dataset: SalesDataset | None = None
        self._dataset_lock = threading.Lock()

    def analytics_dataset_refresh(self) -> SalesDataset:
        """Reload the base relations and replace the cached snapshot.

        Returns:
            SalesDataset: Newly loaded snapshot.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
        """

        dataset = self._dataset_repository.db_sales_dataset_load()
        with self._dataset_lock:
            self._dataset = dataset
        return dataset

    def db_report_total_revenue_for_year(self, year: int) -> YearRevenueRecord:
        """Sum line revenue for orders dated within `year`.

        Args:
            year: Calendar year.

        Returns:
            YearRevenueRecord: Year total and summed line count.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
            MalformedInputDataError: Raised when a summed line violates numeric invariants.
        """

        return analytics_total_revenue_for_year(self._analytics_dataset(), year=year)

    def db_report_monthly_growth(self) -> list[MonthlyGrowthRecord]:
        """Return monthly revenue, change and year-to-date totals.

        Returns:
            list[MonthlyGrowthRecord]: Rows ordered by year and month.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
            MalformedInputDataError: Raised when a summed line violates numeric invariants.
        """

        return analytics_monthly_growth(self._analytics_dataset())

    def db_report_customer_payments(self) -> list[CustomerPaymentRecord]:
        """Return total paid per customer, highest first.

        Returns:
            list[CustomerPaymentRecord]: Rows ordered by total descending, then customer id.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
            MalformedInputDataError: Raised when a summed line violates numeric invariants.
        """

        return analytics_customer_payments(self._analytics_dataset())

    def db_report_customer_segments(self, group_count: int) -> list[CustomerSegmentRecord]:
        """Split ranked customers into `group_count` NTILE groups.

        Args:
            group_count: Number of segments.

        Returns:
            list[CustomerSegmentRecord]: Rows in customer payment order.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
            MalformedInputDataError: Raised when a summed line violates numeric invariants.
        """

        return analytics_customer_segments(self._analytics_dataset(), group_count=group_count)

    def db_report_marketing_targets(self, group_count: int, min_group: int) -> list[CustomerSegmentRecord]:
        """Return segmented customers whose group number is at least `min_group`.

        Args:
            group_count: Number of segments.
            min_group: Lowest included group number.

        Returns:
            list[CustomerSegmentRecord]: Rows in customer payment order.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
            MalformedInputDataError: Raised when a summed line violates numeric invariants.
        """

        return analytics_marketing_targets(self._analytics_dataset(), group_count=group_count, min_group=min_group)

    def db_report_top_products(self, limit: int) -> list[ProductRevenueRecord]:
        """Return the `limit` products with the highest revenue.

        Args:
            limit: Maximum row count.

        Returns:
            list[ProductRevenueRecord]: Rows ordered by revenue descending, then product id.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
            MalformedInputDataError: Raised when a summed line violates numeric invariants.
        """

        return analytics_top_products(self._analytics_dataset(), limit=limit)

    def db_report_contacts_over_threshold(self, country_code: str, threshold: Decimal) -> list[ContactPaymentRecord]:
        """Return contact-name totals in one country strictly above `threshold`.

        Args:
            country_code: Country matched case-insensitively.
            threshold: Exclusive lower bound on total paid.

        Returns:
            list[ContactPaymentRecord]: Rows ordered by total descending, then contact name.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
            MalformedInputDataError: Raised when a summed line violates numeric invariants.
        """

        return analytics_contacts_over_threshold(
            self._analytics_dataset(),
            country_code=country_code,
            threshold=threshold,
        )

    def db_report_data_integrity(self) -> list[IntegrityViolationRecord]:
        """Count referential and numeric invariant violations in the snapshot.

        Returns:
            list[IntegrityViolationRecord]: One counter per check, in fixed order.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
        """

        return analytics_audit_integrity(self._analytics_dataset())

    def _analytics_dataset(self) -> SalesDataset:
        """Return the cached snapshot, loading it on first use.

        Returns:
            SalesDataset: Cached base relations.

        Raises:
            DataSourceUnavailableError: Raised when the dataset cannot be loaded.
        """

        with self._dataset_lock:
            if self._dataset is None:
                self._dataset = self._dataset_repository.db_sales_dataset_load()
            return self._dataset


__all__ = ["InMemoryReportService"]
