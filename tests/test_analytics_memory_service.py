"""Tests for the in-memory report repository and its dataset cache."""

from datetime import date
from decimal import Decimal

import pytest

from northwind_reports.analytics import InMemoryReportService, ReportCatalogConfig, ReportCatalogService
from northwind_reports.db import CustomerRecord, OrderLineRecord, OrderRecord, ProductRecord, SalesDataset
from northwind_reports.domain import DataSourceUnavailableError, MalformedInputDataError


class _SalesDatasetRepositoryStub:
    """Dataset loader stub counting loads and serving queued snapshots."""

    def __init__(self, datasets: list[SalesDataset] | None = None, failing: bool = False):
        """Initialize stub behavior.

        Args:
            datasets: Snapshots returned by successive loads; the last one repeats.
            failing: Whether loads raise a data-source error.

        Returns:
            None: Initializer does not return values.

        Raises:
            RuntimeError: This stub does not raise runtime errors.
        """

        self._datasets = list(datasets or [])
        self._failing = failing
        self.load_count = 0

    def db_sales_dataset_load(self) -> SalesDataset:
        """Return the next queued snapshot.

        Returns:
            SalesDataset: Snapshot for this load.

        Raises:
            DataSourceUnavailableError: Raised when configured to fail.
        """

        self.load_count += 1
        if self._failing:
            raise DataSourceUnavailableError("sales dataset read failed")
        return self._datasets[min(self.load_count, len(self._datasets)) - 1]


def _build_dataset(quantity: int) -> SalesDataset:
    """Build a one-line dataset whose revenue is `10 * quantity`.

    Args:
        quantity: Ordered quantity.

    Returns:
        SalesDataset: Single-order dataset dated in 1997.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return SalesDataset(
        orders=(OrderRecord(order_id=10248, customer_id="VINET", order_date=date(1997, 7, 4)),),
        order_lines=(
            OrderLineRecord(
                order_id=10248,
                product_id=11,
                unit_price=Decimal("10"),
                quantity=quantity,
                discount=Decimal("0"),
            ),
        ),
        customers=(
            CustomerRecord(
                customer_id="VINET",
                company_name="Vins et alcools Chevalier",
                contact_name="Paul Henriot",
                country="France",
            ),
        ),
        products=(ProductRecord(product_id=11, product_name="Queso Cabrales"),),
    )


def test_memory_service_loads_dataset_once_across_reports() -> None:
    """Load base relations lazily and reuse them for later reports.

    Returns:
        None: Assertions validate caching.

    Raises:
        AssertionError: Raised when the dataset is reloaded.
    """

    dataset_repository = _SalesDatasetRepositoryStub(datasets=[_build_dataset(quantity=5)])
    service = InMemoryReportService(dataset_repository=dataset_repository)

    assert dataset_repository.load_count == 0
    year_total = service.db_report_total_revenue_for_year(year=1997)
    products = service.db_report_top_products(limit=10)
    service.db_report_data_integrity()

    assert dataset_repository.load_count == 1
    assert year_total.total_revenue == Decimal("50")
    assert [product.product_name for product in products] == ["Queso Cabrales"]


def test_memory_service_refresh_replaces_cached_snapshot() -> None:
    """Serve the refreshed snapshot after an explicit refresh.

    Returns:
        None: Assertions validate refresh behavior.

    Raises:
        AssertionError: Raised when stale data is served.
    """

    dataset_repository = _SalesDatasetRepositoryStub(
        datasets=[_build_dataset(quantity=5), _build_dataset(quantity=7)],
    )
    service = InMemoryReportService(dataset_repository=dataset_repository)

    assert service.db_report_customer_payments()[0].total_paid == Decimal("50")
    service.analytics_dataset_refresh()

    assert service.db_report_customer_payments()[0].total_paid == Decimal("70")
    assert dataset_repository.load_count == 2


def test_memory_service_propagates_data_source_failure_through_catalog() -> None:
    """Surface loader failures as DataSourceUnavailableError with report context.

    Returns:
        None: Assertions validate failure propagation.

    Raises:
        AssertionError: Raised when the failure is swallowed.
    """

    service = InMemoryReportService(dataset_repository=_SalesDatasetRepositoryStub(failing=True))
    catalog = ReportCatalogService(repository=service, config=ReportCatalogConfig())

    with pytest.raises(DataSourceUnavailableError) as error_info:
        catalog.analytics_report_run("monthly_growth")

    assert error_info.value.report_name == "monthly_growth"


def test_memory_service_runs_full_catalog_over_clean_dataset() -> None:
    """Run every catalog report over a clean dataset with the integrity guard on.

    Returns:
        None: Assertions validate end-to-end in-memory execution.

    Raises:
        AssertionError: Raised when a report fails or returns unexpected rows.
    """

    service = InMemoryReportService(dataset_repository=_SalesDatasetRepositoryStub(datasets=[_build_dataset(5)]))
    catalog = ReportCatalogService(repository=service, config=ReportCatalogConfig())

    results = {
        definition.report_name: catalog.analytics_report_run(definition.report_name)
        for definition in catalog.analytics_report_definitions()
    }

    assert results["monthly_growth"].rows[0].year_to_date_revenue == Decimal("50")
    assert results["customer_segments"].rows[0].group_number == 1
    assert results["marketing_targets"].rows == ()
    assert results["uk_customers_over_threshold"].rows == ()
    assert all(row.violation_count == 0 for row in results["data_integrity"].rows)


def test_memory_service_guard_rejects_undated_orders_through_catalog() -> None:
    """Abort guarded reports when an order has no date.

    Returns:
        None: Assertions validate integrity guard behavior.

    Raises:
        AssertionError: Raised when the undated order is accepted.
    """

    clean_dataset = _build_dataset(5)
    dataset = SalesDataset(
        orders=(OrderRecord(order_id=10248, customer_id="VINET", order_date=None),),
        order_lines=clean_dataset.order_lines,
        customers=clean_dataset.customers,
        products=clean_dataset.products,
    )
    service = InMemoryReportService(dataset_repository=_SalesDatasetRepositoryStub(datasets=[dataset]))
    catalog = ReportCatalogService(repository=service, config=ReportCatalogConfig())

    with pytest.raises(MalformedInputDataError) as error_info:
        catalog.analytics_report_run("monthly_growth")

    assert error_info.value.violation_counts == {"order_missing_date": 1}
    assert error_info.value.report_name == "monthly_growth"


def test_memory_service_report_methods_document_returns_and_errors() -> None:
    """Document return values and failures on every report method.

    Returns:
        None: Assertions validate method docstrings.

    Raises:
        AssertionError: Raised when a report method lacks documentation.
    """

    report_method_names = [name for name in dir(InMemoryReportService) if name.startswith("db_report_")]

    assert len(report_method_names) == 8
    for method_name in report_method_names:
        docstring = getattr(InMemoryReportService, method_name).__doc__ or ""
        assert "Returns:" in docstring, method_name
        assert "DataSourceUnavailableError" in docstring, method_name


def test_memory_service_rejects_missing_loader() -> None:
    """Reject construction without a dataset loader.

    Returns:
        None: Assertions validate constructor guard.

    Raises:
        AssertionError: Raised when a missing loader is accepted.
    """

    with pytest.raises(ValueError):
        InMemoryReportService(dataset_repository=None)
